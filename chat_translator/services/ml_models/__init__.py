"""
ML Models package for the chat translator.

- Translation using NLLB-200 through the transformers pipeline
- OCR using EasyOCR

Both models load lazily on first use behind a one-shot lock.
"""

from .base import BaseMLModel, ModelConfig, DeviceType, PrecisionMode
from .translation_models import (
    NLLB_CODES,
    NLLBTranslationModel,
    TranslationModelConfig,
    create_translation_model,
)
from .ocr_models import EasyOCRModel, OCRModelConfig, create_ocr_model

__all__ = [
    "BaseMLModel",
    "ModelConfig",
    "DeviceType",
    "PrecisionMode",
    "NLLB_CODES",
    "NLLBTranslationModel",
    "TranslationModelConfig",
    "create_translation_model",
    "EasyOCRModel",
    "OCRModelConfig",
    "create_ocr_model",
]
