"""
Custom exceptions for the chat translator backend.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Translation errors
    TRANSLATION_FAILED = "TRANSLATION_FAILED"
    UNSUPPORTED_LANGUAGE = "UNSUPPORTED_LANGUAGE"

    # Model errors
    MODEL_UNAVAILABLE = "MODEL_UNAVAILABLE"

    # Media errors
    INVALID_MEDIA_PATH = "INVALID_MEDIA_PATH"
    MEDIA_NOT_FOUND = "MEDIA_NOT_FOUND"
    OCR_PROCESSING_FAILED = "OCR_PROCESSING_FAILED"
    TRANSCRIPTION_FAILED = "TRANSCRIPTION_FAILED"
    TRANSCRIPTION_TIMEOUT = "TRANSCRIPTION_TIMEOUT"

    # System errors
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    # Generic errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ChatTranslatorException(Exception):
    """Base exception for the chat translator backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class TranslationError(ChatTranslatorException):
    """Raised when translation fails."""

    def __init__(self, message: str = "Translation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.TRANSLATION_FAILED,
            details=details,
            status_code=422
        )


class UnsupportedLanguageError(ChatTranslatorException):
    """Raised when requested language is not supported."""

    def __init__(self, language: str, supported_languages: Optional[list] = None):
        details = {"requested_language": language}
        if supported_languages:
            details["supported_languages"] = supported_languages

        super().__init__(
            message=f"Language '{language}' is not supported",
            error_code=ErrorCode.UNSUPPORTED_LANGUAGE,
            details=details,
            status_code=400
        )


class ModelUnavailableError(ChatTranslatorException):
    """Raised when required model is unavailable."""

    def __init__(self, model_type: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Model '{model_type}' is currently unavailable",
            error_code=ErrorCode.MODEL_UNAVAILABLE,
            details=details or {"model_type": model_type},
            status_code=503
        )


class ServiceUnavailableError(ChatTranslatorException):
    """Raised when a service is not configured or temporarily unavailable."""

    def __init__(self, service_name: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Service '{service_name}' is temporarily unavailable",
            error_code=ErrorCode.SERVICE_UNAVAILABLE,
            details=details or {"service_name": service_name},
            status_code=503
        )


class InvalidMediaPathError(ChatTranslatorException):
    """Raised when a media path is empty or escapes the uploads directory."""

    def __init__(self, path: str):
        super().__init__(
            message=f"Invalid media path '{path}'",
            error_code=ErrorCode.INVALID_MEDIA_PATH,
            details={"path": path},
            status_code=400
        )


class MediaNotFoundError(ChatTranslatorException):
    """Raised when an uploaded media file does not exist."""

    def __init__(self, path: str):
        super().__init__(
            message=f"Media file '{path}' not found",
            error_code=ErrorCode.MEDIA_NOT_FOUND,
            details={"path": path},
            status_code=404
        )


class OCRProcessingError(ChatTranslatorException):
    """Raised when OCR processing fails."""

    def __init__(self, message: str = "OCR processing failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.OCR_PROCESSING_FAILED,
            details=details,
            status_code=422
        )


class TranscriptionError(ChatTranslatorException):
    """Raised when the speech-to-text provider reports a failure."""

    def __init__(self, message: str = "Transcription failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.TRANSCRIPTION_FAILED,
            details=details,
            status_code=502
        )


class TranscriptionTimeoutError(ChatTranslatorException):
    """Raised when a transcript is not ready after the polling budget."""

    def __init__(self, polls: int, interval_seconds: float):
        super().__init__(
            message="Transcription timed out",
            error_code=ErrorCode.TRANSCRIPTION_TIMEOUT,
            details={"polls": polls, "interval_seconds": interval_seconds},
            status_code=504
        )
