"""
Neural translation model for the chat languages.

Wraps Meta's NLLB-200 through the HuggingFace ``transformers`` translation
pipeline. One call translates one text between two chat languages; pivoting
through English is the engine's job, not the model's.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional

try:
    from transformers import pipeline
    HAS_TRANSFORMERS = True
except ImportError:
    HAS_TRANSFORMERS = False

from ..languages import LanguageCode
from .base import BaseMLModel, ModelConfig, DeviceType, PrecisionMode

logger = logging.getLogger(__name__)


# Flores-200 codes used by NLLB
NLLB_CODES: Dict[LanguageCode, str] = {
    LanguageCode.ENGLISH: "eng_Latn",
    LanguageCode.HINDI: "hin_Deva",
    LanguageCode.MARATHI: "mar_Deva",
    LanguageCode.TAMIL: "tam_Taml",
    LanguageCode.TELUGU: "tel_Telu",
}


@dataclass
class TranslationModelConfig(ModelConfig):
    """
    Configuration for translation models.

    Additional attributes:
        max_length: Maximum token length for generated output
    """
    max_length: int = 256


class NLLBTranslationModel(BaseMLModel[str]):
    """
    NLLB-200 translation model.

    Recommended models:
    - "facebook/nllb-200-distilled-600M": Fast, good quality
    - "facebook/nllb-200-distilled-1.3B": Better quality, slower
    """

    def __init__(self, config: TranslationModelConfig):
        if not HAS_TRANSFORMERS:
            raise ImportError(
                "transformers required for NLLB. "
                "Install with: pip install transformers"
            )

        super().__init__(config)
        self.translation_config = config

    async def _load_model(self) -> None:
        """Build the transformers translation pipeline."""
        loop = asyncio.get_event_loop()

        self._model = await loop.run_in_executor(
            None,
            lambda: pipeline(
                "translation",
                model=self.config.model_name,
                device=self.config.device_type.value,
                torch_dtype=self.dtype,
            )
        )

        self.logger.info(
            f"NLLB loaded: {self.config.model_name} "
            f"on {self.config.device_type.value} with {self.config.precision_mode.value}"
        )

    async def _run_warmup_iteration(self) -> None:
        await self._run_inference(
            "Hello world",
            source_lang=LanguageCode.ENGLISH,
            target_lang=LanguageCode.HINDI,
        )

    async def _run_inference(
        self,
        inputs: str,
        source_lang: LanguageCode = LanguageCode.ENGLISH,
        target_lang: LanguageCode = LanguageCode.ENGLISH,
    ) -> Optional[str]:
        """
        Translate one text.

        Returns:
            The translated text, or None when the pipeline produced nothing
        """
        src = NLLB_CODES[source_lang]
        tgt = NLLB_CODES[target_lang]
        loop = asyncio.get_event_loop()

        outputs = await loop.run_in_executor(
            None,
            lambda: self._model(
                inputs,
                src_lang=src,
                tgt_lang=tgt,
                max_length=self.translation_config.max_length,
            )
        )

        if not outputs:
            return None
        return outputs[0].get("translation_text") or None

    async def translate(
        self,
        text: str,
        source_lang: LanguageCode,
        target_lang: LanguageCode,
    ) -> Optional[str]:
        """Translate a single text string between two chat languages."""
        return await self.inference(
            text,
            source_lang=source_lang,
            target_lang=target_lang,
        )


def create_translation_model(
    model_name: str = "facebook/nllb-200-distilled-600M",
    device: DeviceType = DeviceType.CPU,
    precision: PrecisionMode = PrecisionMode.FP32,
    max_length: int = 256,
    warmup_iterations: int = 0,
) -> NLLBTranslationModel:
    """
    Factory function to create the translation model.

    Args:
        model_name: HuggingFace model identifier or local path
        device: Target device
        precision: Inference precision
        max_length: Maximum generated token length
        warmup_iterations: Warmup runs after loading

    Returns:
        Configured translation model instance (not yet loaded)
    """
    config = TranslationModelConfig(
        model_name=model_name,
        device_type=device,
        precision_mode=precision,
        max_length=max_length,
        warmup_iterations=warmup_iterations,
    )
    return NLLBTranslationModel(config)
