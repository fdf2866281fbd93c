import pytest
from PIL import Image

from chat_translator.core.exceptions import (
    ErrorCode,
    InvalidMediaPathError,
    MediaNotFoundError,
    OCRProcessingError,
)
from chat_translator.services.ocr_service import OCRService
from tests.fakes import FakeOCRModel


@pytest.fixture
def image_name(uploads_dir):
    Image.new("RGB", (32, 16), color="white").save(uploads_dir / "photo.png")
    return "photo.png"


class TestOCRService:
    @pytest.mark.asyncio
    async def test_joins_lines(self, uploads_dir, image_name):
        model = FakeOCRModel(lines=["Platform 4", "Departs 10:15"])
        service = OCRService(model, uploads_dir)

        text = await service.extract_text(image_name)

        assert text == "Platform 4\nDeparts 10:15"
        assert model.images[0].mode == "RGB"
        assert service.is_loaded

    @pytest.mark.asyncio
    async def test_no_text_found(self, uploads_dir, image_name):
        service = OCRService(FakeOCRModel(), uploads_dir)

        assert await service.extract_text(image_name) == ""

    @pytest.mark.asyncio
    async def test_corrupted_image(self, uploads_dir):
        (uploads_dir / "broken.png").write_bytes(b"not an image")
        model = FakeOCRModel(lines=["x"])
        service = OCRService(model, uploads_dir)

        with pytest.raises(OCRProcessingError) as exc_info:
            await service.extract_text("broken.png")

        assert exc_info.value.error_code == ErrorCode.OCR_PROCESSING_FAILED
        assert model.images == []

    @pytest.mark.asyncio
    async def test_model_failure(self, uploads_dir, image_name):
        service = OCRService(FakeOCRModel(fail=True), uploads_dir)

        with pytest.raises(OCRProcessingError) as exc_info:
            await service.extract_text(image_name)

        assert "reader crashed" in exc_info.value.details["error"]

    @pytest.mark.asyncio
    async def test_missing_and_invalid_paths(self, uploads_dir):
        service = OCRService(FakeOCRModel(), uploads_dir)

        with pytest.raises(MediaNotFoundError):
            await service.extract_text("missing.png")
        with pytest.raises(InvalidMediaPathError):
            await service.extract_text("../outside.png")
        with pytest.raises(InvalidMediaPathError):
            await service.extract_text("")
