"""Translation endpoints: translate a chat message, list languages, detect."""
from fastapi import APIRouter, Depends, HTTPException
import logging
import time

from chat_translator.core.dependencies import get_translation_service
from chat_translator.core.metrics import record_latency
from chat_translator.schemas.base import Envelope
from chat_translator.schemas.translation import (
    DetectRequest,
    DetectResponse,
    LanguageListResponse,
    LanguageRead,
    PreprocessingFlagsRead,
    TextTranslationRequest,
    TextTranslationResponse,
)
from chat_translator.services.languages import require_language
from chat_translator.services.translation_service import TranslationOptions, TranslationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/translation", tags=["translation"])


@router.post("", response_model=Envelope[TextTranslationResponse])
async def translate_text(
    request: TextTranslationRequest,
    service: TranslationService = Depends(get_translation_service),
):
    """
    Translate a chat message.
    Auto-detects the source language if not provided.
    """
    target = require_language(request.target_language)
    source = require_language(request.source_language) if request.source_language else None

    start = time.perf_counter()
    with record_latency("translation"):
        result = await service.translate_message(
            request.text,
            target_language=target,
            enable_preprocessing=request.enable_preprocessing,
            source_language=source,
            options=TranslationOptions(cultural_adaptation=request.cultural_adaptation),
        )
    latency_ms = (time.perf_counter() - start) * 1000.0
    logger.info(
        f"Text translation completed in {latency_ms:.2f}ms",
        extra={"origin": result.origin.value, "target_language": target.value},
    )

    response_data = TextTranslationResponse(
        original=result.original,
        preprocessed=result.preprocessed,
        translated=result.translated,
        target_language=result.target_language.value,
        detected_language=result.detected_language.value,
        origin=result.origin.value,
        confidence=result.confidence,
        preprocessing=PreprocessingFlagsRead(**result.preprocessing.to_dict()),
    )
    return Envelope(status="ok", data=response_data)


@router.get("/languages", response_model=Envelope[LanguageListResponse])
async def list_languages(service: TranslationService = Depends(get_translation_service)):
    languages = [
        LanguageRead(code=lang.code.value, name=lang.name, native_name=lang.native_name)
        for lang in service.supported_languages()
    ]
    return Envelope(status="ok", data=LanguageListResponse(languages=languages))


@router.post("/detect", response_model=Envelope[DetectResponse])
async def detect(
    request: DetectRequest,
    service: TranslationService = Depends(get_translation_service),
):
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    result = service.detect(request.text)
    data = DetectResponse(detected_language=result.language.value, confidence=result.confidence)
    return Envelope(status="ok", data=data)
