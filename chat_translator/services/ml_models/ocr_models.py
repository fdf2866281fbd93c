"""
OCR model for text in chat image attachments.

EasyOCR provides built-in text detection (CRAFT) and recognition with a
small memory footprint; the reader is created lazily on first use.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List

from PIL import Image

try:
    import easyocr
    HAS_EASYOCR = True
except ImportError:
    HAS_EASYOCR = False

from .base import BaseMLModel, ModelConfig, DeviceType

logger = logging.getLogger(__name__)


@dataclass
class OCRModelConfig(ModelConfig):
    """
    Configuration for OCR models.

    Additional attributes:
        languages: EasyOCR language codes to recognize
        min_confidence: Lines below this confidence are dropped
        paragraph_mode: Merge nearby lines into paragraphs
    """
    languages: List[str] = field(default_factory=lambda: ["en"])
    min_confidence: float = 0.0
    paragraph_mode: bool = False


class EasyOCRModel(BaseMLModel[Image.Image]):
    """EasyOCR-based line recognizer."""

    def __init__(self, config: OCRModelConfig):
        if not HAS_EASYOCR:
            raise ImportError(
                "easyocr required. Install with: pip install easyocr"
            )

        super().__init__(config)
        self.ocr_config = config

    async def _load_model(self) -> None:
        """Initialize EasyOCR reader."""
        loop = asyncio.get_event_loop()

        gpu = self.config.device_type == DeviceType.CUDA

        self._model = await loop.run_in_executor(
            None,
            lambda: easyocr.Reader(
                self.ocr_config.languages,
                gpu=gpu,
                download_enabled=True,
            )
        )

        self.logger.info(
            f"EasyOCR loaded for languages: {self.ocr_config.languages}"
        )

    async def _run_warmup_iteration(self) -> None:
        await self._run_inference(Image.new("RGB", (100, 100), color="white"))

    async def _run_inference(self, inputs: Image.Image) -> List[str]:
        """
        Recognize text lines in one image.

        Returns:
            Recognized lines, top to bottom as EasyOCR reports them
        """
        import numpy as np

        loop = asyncio.get_event_loop()
        img_array = np.array(inputs.convert("RGB"))

        raw_results = await loop.run_in_executor(
            None,
            lambda: self._model.readtext(
                img_array,
                detail=1,
                paragraph=self.ocr_config.paragraph_mode,
            )
        )

        lines = []
        for result in raw_results:
            # paragraph mode drops the confidence column
            text = result[1]
            confidence = result[2] if len(result) > 2 else 1.0
            if confidence >= self.ocr_config.min_confidence and text.strip():
                lines.append(text.strip())
        return lines

    async def extract_lines(self, image: Image.Image) -> List[str]:
        return await self.inference(image)


def create_ocr_model(languages: List[str], gpu: bool = False) -> EasyOCRModel:
    """Factory for the OCR model used by OCRService."""
    config = OCRModelConfig(
        model_name="easyocr",
        device_type=DeviceType.CUDA if gpu else DeviceType.CPU,
        languages=list(languages),
    )
    return EasyOCRModel(config)
