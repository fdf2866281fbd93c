"""
Translation service for the chat translator backend.

TranslationOrchestrator answers one translation request from, in priority
order, the idiom table, the phrase cache and the local engine, and records
new engine translations in the phrase cache. TranslationService is the
caller-facing facade: preprocessing, language detection, then orchestration.
"""

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from chat_translator.config.settings import EngineFailurePolicy
from chat_translator.core.exceptions import TranslationError

from .lang_detect import DetectionResult, detect_language
from .languages import HUB_LANGUAGE, SUPPORTED_LANGUAGES, LanguageCode, LanguageInfo, coerce_language
from .phrase_store import IdiomTable, PhraseStore
from .preprocess import PreprocessingFlags, PreprocessResult, preprocess_text
from .translation_engine import LocalTranslationEngine

logger = logging.getLogger(__name__)


class ResultOrigin(str, Enum):
    """Which layer produced a translation."""
    PASSTHROUGH = "passthrough"
    IDIOM = "idiom"
    PHRASE_CACHE = "phrase_cache"
    ENGINE = "engine"
    NO_TRANSLATION = "no_translation"
    ENGINE_FAILED = "engine_failed"


@dataclass
class TranslationOptions:
    # Idioms are always consulted; the flag is carried for the client.
    cultural_adaptation: bool = False


@dataclass
class TranslationResult:
    translated_text: str
    origin: ResultOrigin = ResultOrigin.NO_TRANSLATION


def _same_text(a: str, b: str) -> bool:
    return a.strip().lower() == b.strip().lower()


class TranslationOrchestrator:
    """
    Composes idiom table, phrase cache and local engine.

    Priority is fixed regardless of scheduling: idiom hit, then phrase-cache
    hit, then an engine result that differs from the input (trimmed,
    case-insensitive), else the input text unchanged.

    With ``speculative_engine`` the engine starts alongside the phrase lookup
    and is cancelled on a phrase hit; otherwise the engine only runs on a
    phrase miss.
    """

    def __init__(
        self,
        idioms: IdiomTable,
        phrases: PhraseStore,
        engine: LocalTranslationEngine,
        speculative_engine: bool = False,
        failure_policy: EngineFailurePolicy = EngineFailurePolicy.FALLBACK,
    ):
        self.idioms = idioms
        self.phrases = phrases
        self.engine = engine
        self.speculative_engine = speculative_engine
        self.failure_policy = EngineFailurePolicy(failure_policy)

    async def translate_text(
        self,
        text: str,
        target_language="en",
        source_language="en",
        options: Optional[TranslationOptions] = None,
    ) -> TranslationResult:
        """
        Translate `text` from `source_language` to `target_language`.

        Raises:
            TranslationError: only when the engine fails, no table answered,
                and the failure policy is ``propagate``
        """
        options = options or TranslationOptions()
        source, _ = coerce_language(source_language)
        target, _ = coerce_language(target_language)

        if not text or not text.strip() or source == target:
            return TranslationResult(text, ResultOrigin.PASSTHROUGH)

        idiom = await self.idioms.lookup(text, source, target)
        if idiom:
            logger.debug(
                "Idiom table hit",
                extra={"source_language": source.value, "target_language": target.value},
            )
            return TranslationResult(idiom, ResultOrigin.IDIOM)

        phrase, engine_text, engine_error = await self._phrase_and_engine(text, source, target)

        if phrase:
            result = TranslationResult(phrase, ResultOrigin.PHRASE_CACHE)
        elif engine_text and not _same_text(engine_text, text):
            result = TranslationResult(engine_text, ResultOrigin.ENGINE)
        elif engine_error is not None:
            result = self._engine_failed(text, source, target, engine_error)
        else:
            result = TranslationResult(text, ResultOrigin.NO_TRANSLATION)

        if result.origin == ResultOrigin.ENGINE:
            await self.phrases.append_if_absent(text, result.translated_text, source, target)

        logger.debug(
            f"Translated via {result.origin.value}",
            extra={
                "source_language": source.value,
                "target_language": target.value,
                "cultural_adaptation": options.cultural_adaptation,
            },
        )
        return result

    async def _phrase_and_engine(
        self,
        text: str,
        source: LanguageCode,
        target: LanguageCode,
    ) -> Tuple[Optional[str], Optional[str], Optional[Exception]]:
        if not self.speculative_engine:
            phrase = await self.phrases.lookup(text, source, target)
            if phrase:
                return phrase, None, None
            return (None,) + await self._run_engine(text, source, target)

        engine_task = asyncio.ensure_future(self._run_engine(text, source, target))
        try:
            phrase = await self.phrases.lookup(text, source, target)
        except BaseException:
            engine_task.cancel()
            raise

        if phrase:
            engine_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await engine_task
            return phrase, None, None

        return (None,) + await engine_task

    async def _run_engine(
        self,
        text: str,
        source: LanguageCode,
        target: LanguageCode,
    ) -> Tuple[Optional[str], Optional[Exception]]:
        try:
            return await self.engine.translate(text, source, target), None
        except Exception as e:
            return None, e

    def _engine_failed(
        self,
        text: str,
        source: LanguageCode,
        target: LanguageCode,
        error: Exception,
    ) -> TranslationResult:
        if self.failure_policy == EngineFailurePolicy.PROPAGATE:
            if isinstance(error, TranslationError):
                raise error
            raise TranslationError(str(error)) from error

        logger.warning(
            f"Engine failed, returning original text: {error}",
            extra={"source_language": source.value, "target_language": target.value},
        )
        return TranslationResult(text, ResultOrigin.ENGINE_FAILED)


@dataclass
class MessageTranslation:
    original: str
    preprocessed: str
    translated: str
    target_language: LanguageCode
    detected_language: LanguageCode
    origin: ResultOrigin
    preprocessing: PreprocessingFlags = field(default_factory=PreprocessingFlags)
    confidence: Optional[float] = None


class TranslationService:
    """
    Caller-facing translation: preprocess, detect the source, orchestrate.
    """

    def __init__(
        self,
        orchestrator: TranslationOrchestrator,
        detector: Callable[[str], DetectionResult] = detect_language,
        preprocessor: Callable[[str], PreprocessResult] = preprocess_text,
    ):
        self.orchestrator = orchestrator
        self.detector = detector
        self.preprocessor = preprocessor

    def supported_languages(self) -> List[LanguageInfo]:
        return list(SUPPORTED_LANGUAGES)

    def detect(self, text: str) -> DetectionResult:
        return self.detector(text)

    async def translate_message(
        self,
        text: str,
        target_language: LanguageCode,
        enable_preprocessing: bool = True,
        source_language: Optional[LanguageCode] = None,
        options: Optional[TranslationOptions] = None,
    ) -> MessageTranslation:
        """
        Translate a chat message.

        The source language is detected from the (preprocessed) text unless
        given. Empty or whitespace-only text is returned unchanged without
        touching the preprocessor, detector, caches or engine.
        """
        target, _ = coerce_language(target_language)

        if not text or not text.strip():
            return MessageTranslation(
                original=text,
                preprocessed=text,
                translated=text,
                target_language=target,
                detected_language=coerce_language(source_language)[0] if source_language else HUB_LANGUAGE,
                origin=ResultOrigin.PASSTHROUGH,
            )

        processed = text
        flags = PreprocessingFlags()
        if enable_preprocessing:
            preprocessed = self.preprocessor(text)
            processed, flags = preprocessed.processed, preprocessed.flags

        confidence = None
        if source_language is None:
            source, confidence = self._detect_or_default(processed)
        else:
            source, _ = coerce_language(source_language)

        result = await self.orchestrator.translate_text(
            processed,
            target_language=target,
            source_language=source,
            options=options,
        )

        return MessageTranslation(
            original=text,
            preprocessed=processed,
            translated=result.translated_text,
            target_language=target,
            detected_language=source,
            origin=result.origin,
            preprocessing=flags,
            confidence=confidence,
        )

    def _detect_or_default(self, text: str) -> Tuple[LanguageCode, Optional[float]]:
        try:
            detection = self.detector(text)
        except Exception as e:
            logger.warning(f"Language detection failed, defaulting to {HUB_LANGUAGE.value}: {e}")
            return HUB_LANGUAGE, None
        return detection.language, detection.confidence
