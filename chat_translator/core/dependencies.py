"""
Dependency injection setup for FastAPI.
Provides the service container and dependency providers for the routers.
"""

from fastapi import Request, HTTPException
from typing import Any, Dict, Optional
import logging
import asyncio

from chat_translator.config.settings import Settings, get_settings
from chat_translator.services.audio_service import AudioTranscriptionService
from chat_translator.services.ocr_service import OCRService
from chat_translator.services.phrase_store import IdiomTable, PhraseStore
from chat_translator.services.translation_engine import LocalTranslationEngine
from chat_translator.services.translation_service import TranslationOrchestrator, TranslationService


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for application services with lifecycle management.

    Models may be injected; otherwise the NLLB translation model and the
    EasyOCR model are created from settings. Creating a model does not load
    it; loading happens on first use or at startup with
    ``translation.preload_model``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        translation_model: Any = None,
        ocr_model: Any = None,
        http_client: Any = None,
    ):
        self.settings = settings or get_settings()
        self._translation_model = translation_model
        self._ocr_model = ocr_model
        self._http_client = http_client
        self._engine: Optional[LocalTranslationEngine] = None
        self._phrase_store: Optional[PhraseStore] = None
        self._translation_service: Optional[TranslationService] = None
        self._audio_service: Optional[AudioTranscriptionService] = None
        self._ocr_service: Optional[OCRService] = None
        self._initialized = False
        self._initialization_lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize_services(self) -> None:
        """Initialize all services in dependency order."""
        async with self._initialization_lock:
            if self._initialized:
                return

            logger.info("Initializing service container")
            translation_settings = self.settings.translation
            data_dir = translation_settings.get_data_path()
            uploads_dir = self.settings.get_uploads_path()

            if self._translation_model is None:
                from chat_translator.services.ml_models import create_translation_model
                self._translation_model = create_translation_model(
                    model_name=translation_settings.model_name,
                    device=translation_settings.device,
                    precision=translation_settings.precision,
                    max_length=translation_settings.max_length,
                    warmup_iterations=translation_settings.warmup_iterations,
                )

            if self._ocr_model is None:
                from chat_translator.services.ml_models import create_ocr_model
                self._ocr_model = create_ocr_model(
                    languages=self.settings.ocr.languages,
                    gpu=self.settings.ocr.gpu,
                )

            self._engine = LocalTranslationEngine(self._translation_model)
            self._phrase_store = PhraseStore(data_dir)
            orchestrator = TranslationOrchestrator(
                idioms=IdiomTable(data_dir),
                phrases=self._phrase_store,
                engine=self._engine,
                speculative_engine=translation_settings.speculative_engine,
                failure_policy=translation_settings.engine_failure_policy,
            )
            self._translation_service = TranslationService(orchestrator)
            self._audio_service = AudioTranscriptionService(
                settings=self.settings.assemblyai,
                engine=self._engine,
                uploads_dir=uploads_dir,
                client=self._http_client,
            )
            self._ocr_service = OCRService(self._ocr_model, uploads_dir)

            if translation_settings.preload_model:
                await self._engine.warm_up()

            self._initialized = True
            logger.info(
                "Service container initialization completed",
                extra={"data_dir": str(data_dir), "uploads_dir": str(uploads_dir)},
            )

    async def cleanup_services(self) -> None:
        """Release HTTP clients and unload models."""
        logger.info("Cleaning up service container")

        try:
            if self._audio_service:
                await self._audio_service.close()
            for model in (self._translation_model, self._ocr_model):
                unload = getattr(model, "unload", None)
                if unload is not None:
                    await unload()
        except Exception as e:
            logger.error(f"Service container cleanup failed: {e}", exc_info=True)
        finally:
            self._translation_service = None
            self._audio_service = None
            self._ocr_service = None
            self._engine = None
            self._phrase_store = None
            self._initialized = False

    def _require(self, service):
        if not self._initialized or service is None:
            raise RuntimeError("Service container not initialized")
        return service

    def get_translation_service(self) -> TranslationService:
        return self._require(self._translation_service)

    def get_audio_service(self) -> AudioTranscriptionService:
        return self._require(self._audio_service)

    def get_ocr_service(self) -> OCRService:
        return self._require(self._ocr_service)

    def get_status(self) -> Dict[str, Any]:
        """Model load state and storage locations for the health endpoint."""
        return {
            "initialized": self._initialized,
            "translation_model_loaded": bool(self._engine and self._engine.is_loaded),
            "translation_model": self._engine.get_stats() if self._engine else None,
            "ocr_model_loaded": bool(self._ocr_service and self._ocr_service.is_loaded),
            "phrase_cache_dir": str(self._phrase_store.data_dir) if self._phrase_store else None,
        }


def get_service_container(request: Request) -> ServiceContainer:
    """
    Get the service container from application state.

    Raises:
        HTTPException: If service container is not available
    """
    container = getattr(request.app.state, "service_container", None)
    if container is None or not container.initialized:
        raise HTTPException(
            status_code=503,
            detail="Service container not initialized"
        )
    return container


def get_translation_service(request: Request) -> TranslationService:
    return get_service_container(request).get_translation_service()


def get_audio_service(request: Request) -> AudioTranscriptionService:
    return get_service_container(request).get_audio_service()


def get_ocr_service(request: Request) -> OCRService:
    return get_service_container(request).get_ocr_service()
