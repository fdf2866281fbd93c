"""Very lightweight heuristic language detection helper."""

from dataclasses import dataclass

from .languages import LanguageCode

# Checked in this order; the first script found in the text wins.
_SCRIPT_RANGES = (
    (LanguageCode.TAMIL, '\u0b80', '\u0bff', 1.0),
    (LanguageCode.TELUGU, '\u0c00', '\u0c7f', 1.0),
    # Devanagari is shared by Hindi and Marathi; always resolved to Hindi.
    (LanguageCode.HINDI, '\u0900', '\u097f', 0.8),
)

DEFAULT_CONFIDENCE = 0.5


@dataclass(frozen=True)
class DetectionResult:
    language: LanguageCode
    confidence: float


def detect_language(text: str) -> DetectionResult:
    """
    Detect language from Unicode script ranges.

    Args:
        text: Input text to analyze

    Returns:
        DetectionResult - defaults to English with confidence 0.5, including
        for empty or whitespace-only text
    """
    for language, low, high, confidence in _SCRIPT_RANGES:
        if any(low <= char <= high for char in text):
            return DetectionResult(language, confidence)

    return DetectionResult(LanguageCode.ENGLISH, DEFAULT_CONFIDENCE)
