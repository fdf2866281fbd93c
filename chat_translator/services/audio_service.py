"""
Voice message transcription and translation.

Uploads a recorded voice message to AssemblyAI, requests a transcript with
language detection, polls until it completes, then translates the transcript
with the local engine.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import httpx

from chat_translator.config.settings import AssemblyAISettings
from chat_translator.core.exceptions import (
    ServiceUnavailableError,
    TranscriptionError,
    TranscriptionTimeoutError,
    UnsupportedLanguageError,
)

from .languages import LanguageCode, parse_language, supported_codes
from .media import resolve_media_path
from .translation_engine import LocalTranslationEngine

logger = logging.getLogger(__name__)


@dataclass
class AudioTranslation:
    transcript: str
    translation: str
    source_language: LanguageCode


class AudioTranscriptionService:
    """Service for transcribing voice messages and translating the transcript."""

    def __init__(
        self,
        settings: AssemblyAISettings,
        engine: LocalTranslationEngine,
        uploads_dir: Union[str, Path],
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings
        self.engine = engine
        self.uploads_dir = Path(uploads_dir)
        self._client = client

        if not settings.api_key:
            logger.warning(
                "AssemblyAI API key not configured. "
                "Set ASSEMBLYAI_API_KEY in .env file."
            )

    def _get_headers(self) -> Dict[str, str]:
        return {"authorization": self.settings.api_key or ""}

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.base_url,
                timeout=self.settings.timeout_seconds,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def transcribe_and_translate(
        self,
        audio_path: str,
        target_language: LanguageCode,
    ) -> AudioTranslation:
        """
        Transcribe a voice message and translate it.

        Args:
            audio_path: File name relative to the uploads directory
            target_language: Language to translate the transcript into

        Returns:
            AudioTranslation with transcript, translation and detected source
        """
        path = resolve_media_path(self.uploads_dir, audio_path)

        if not self.settings.api_key:
            logger.error("Missing ASSEMBLYAI_API_KEY")
            raise ServiceUnavailableError("speech-to-text", {"reason": "API key not configured"})

        try:
            upload_url = await self._upload(path)
            transcript_id = await self._request_transcript(upload_url)
            transcript, detected = await self._poll_transcript(transcript_id)
        except httpx.HTTPError as e:
            logger.error(f"Speech-to-text request failed: {e}")
            raise TranscriptionError(f"Speech-to-text request failed: {e}") from e

        source = parse_language(detected or LanguageCode.ENGLISH.value)
        if source is None:
            raise UnsupportedLanguageError(detected, supported_codes())

        translation = await self.engine.translate(transcript, source, target_language)

        logger.info(
            "Voice message translated",
            extra={"source_language": source.value, "target_language": str(target_language)},
        )
        return AudioTranslation(
            transcript=transcript,
            translation=translation,
            source_language=source,
        )

    async def _upload(self, path: Path) -> str:
        loop = asyncio.get_event_loop()
        content = await loop.run_in_executor(None, path.read_bytes)

        response = await self._get_client().post(
            "/v2/upload",
            headers=self._get_headers(),
            content=content,
        )
        response.raise_for_status()
        return response.json()["upload_url"]

    async def _request_transcript(self, audio_url: str) -> str:
        response = await self._get_client().post(
            "/v2/transcript",
            headers=self._get_headers(),
            json={"audio_url": audio_url, "language_detection": True},
        )
        response.raise_for_status()
        return response.json()["id"]

    async def _poll_transcript(self, transcript_id: str) -> tuple:
        """Poll until completed; returns (text, language_code)."""
        interval = self.settings.poll_interval_seconds
        for _ in range(self.settings.max_polls):
            await asyncio.sleep(interval)

            response = await self._get_client().get(
                f"/v2/transcript/{transcript_id}",
                headers=self._get_headers(),
            )
            response.raise_for_status()
            data: Dict[str, Any] = response.json()

            status = data.get("status")
            if status == "completed":
                text = data.get("text") or ""
                if not text:
                    break
                return text, data.get("language_code")
            if status == "failed":
                raise TranscriptionError(
                    details={"transcript_id": transcript_id, "error": data.get("error")}
                )

        raise TranscriptionTimeoutError(self.settings.max_polls, interval)
