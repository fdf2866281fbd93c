"""Voice message and image attachment endpoints."""
from fastapi import APIRouter, Depends
import logging

from chat_translator.core.dependencies import get_audio_service, get_ocr_service
from chat_translator.core.metrics import record_latency
from chat_translator.schemas.base import Envelope
from chat_translator.schemas.translation import (
    AudioTranslationRequest,
    AudioTranslationResponse,
    OCRRequest,
    OCRResponse,
)
from chat_translator.services.audio_service import AudioTranscriptionService
from chat_translator.services.languages import require_language
from chat_translator.services.ocr_service import OCRService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["media"])


@router.post("/audio/transcribe-and-translate", response_model=Envelope[AudioTranslationResponse])
async def transcribe_and_translate(
    request: AudioTranslationRequest,
    service: AudioTranscriptionService = Depends(get_audio_service),
):
    target = require_language(request.target_language)

    with record_latency("audio"):
        result = await service.transcribe_and_translate(request.audio_path, target)

    data = AudioTranslationResponse(
        transcript=result.transcript,
        translation=result.translation,
        source_language=result.source_language.value,
    )
    return Envelope(status="ok", data=data)


@router.post("/ocr/extract", response_model=Envelope[OCRResponse])
async def extract_text(
    request: OCRRequest,
    service: OCRService = Depends(get_ocr_service),
):
    with record_latency("ocr"):
        text = await service.extract_text(request.image_path)
    return Envelope(status="ok", data=OCRResponse(text=text))
