"""
OCR Service for text in chat image attachments.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Union

from PIL import Image, UnidentifiedImageError

from chat_translator.core.exceptions import OCRProcessingError

from .media import resolve_media_path

logger = logging.getLogger(__name__)


def _open_image(path: Path) -> Image.Image:
    with Image.open(path) as img:
        img.load()
        return img.convert("RGB")


class OCRService:
    """Extracts text from uploaded images with a lazily loaded OCR model."""

    def __init__(self, model: Any, uploads_dir: Union[str, Path]):
        self.model = model
        self.uploads_dir = Path(uploads_dir)

    @property
    def is_loaded(self) -> bool:
        return getattr(self.model, "is_loaded", False)

    async def extract_text(self, image_path: str) -> str:
        """
        Extract text from an uploaded image.

        Args:
            image_path: File name relative to the uploads directory

        Returns:
            Recognized lines joined with newlines
        """
        path = resolve_media_path(self.uploads_dir, image_path)

        loop = asyncio.get_event_loop()
        try:
            image = await loop.run_in_executor(None, _open_image, path)
        except (UnidentifiedImageError, OSError) as e:
            raise OCRProcessingError("Image is corrupted or unreadable", {"path": image_path}) from e

        try:
            lines = await self.model.extract_lines(image)
        except Exception as e:
            logger.exception("OCR failed")
            raise OCRProcessingError(details={"path": image_path, "error": str(e)}) from e

        logger.info(f"OCR extracted {len(lines)} lines", extra={"path": image_path})
        return "\n".join(lines)
