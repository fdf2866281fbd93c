import httpx
import pytest

from chat_translator.config.settings import (
    AssemblyAISettings,
    Settings,
    TranslationSettings,
)
from chat_translator.core.dependencies import ServiceContainer
from chat_translator.main import create_app
from tests.fakes import FakeOCRModel, FakeTranslationModel

STT_BASE_URL = "https://stt.test"


@pytest.fixture
def translation_model():
    return FakeTranslationModel({
        ("how are you", "en", "hi"): "आप कैसे हैं",
        ("नमस्ते", "hi", "en"): "hello",
    })


@pytest.fixture
def ocr_model():
    return FakeOCRModel(lines=["EXIT", "Gate 3"])


@pytest.fixture
def stt_handler():
    """Replace per test to script the speech-to-text API."""
    def handler(request):
        return httpx.Response(404)
    return handler


@pytest.fixture
def app_settings(data_dir, uploads_dir):
    return Settings(
        uploads_dir=str(uploads_dir),
        translation=TranslationSettings(data_dir=str(data_dir)),
        assemblyai=AssemblyAISettings(
            api_key="test-key",
            base_url=STT_BASE_URL,
            poll_interval_seconds=0.0,
            max_polls=2,
        ),
    )


@pytest.fixture
def app(app_settings, translation_model, ocr_model, stt_handler):
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: stt_handler(request)),
        base_url=STT_BASE_URL,
    )
    container = ServiceContainer(
        app_settings,
        translation_model=translation_model,
        ocr_model=ocr_model,
        http_client=http_client,
    )
    return create_app(app_settings, container)
