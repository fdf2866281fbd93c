"""
Services package for the chat translator backend.
"""

from .languages import LanguageCode, HUB_LANGUAGE, SUPPORTED_LANGUAGES, coerce_language, require_language
from .lang_detect import DetectionResult, detect_language
from .phrase_store import IdiomTable, PhraseStore
from .preprocess import PreprocessResult, PreprocessingFlags, preprocess_text
from .translation_engine import LocalTranslationEngine
from .translation_service import (
    MessageTranslation,
    ResultOrigin,
    TranslationOptions,
    TranslationOrchestrator,
    TranslationResult,
    TranslationService,
)

__all__ = [
    "LanguageCode",
    "HUB_LANGUAGE",
    "SUPPORTED_LANGUAGES",
    "coerce_language",
    "require_language",
    "DetectionResult",
    "detect_language",
    "IdiomTable",
    "PhraseStore",
    "PreprocessResult",
    "PreprocessingFlags",
    "preprocess_text",
    "LocalTranslationEngine",
    "MessageTranslation",
    "ResultOrigin",
    "TranslationOptions",
    "TranslationOrchestrator",
    "TranslationResult",
    "TranslationService",
]
