"""
Core infrastructure for the chat translator backend.
Provides exceptions, error handlers, logging, metrics and the service container.
"""

from .exceptions import (
    ErrorCode,
    ChatTranslatorException,
    TranslationError,
    UnsupportedLanguageError,
)

__all__ = [
    "ErrorCode",
    "ChatTranslatorException",
    "TranslationError",
    "UnsupportedLanguageError",
]
