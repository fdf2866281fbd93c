"""
Closed set of chat languages and boundary helpers.

Every code that reaches the translation pipeline is one of the five members of
LanguageCode. Unknown codes are either rejected (HTTP boundary) or coerced to
the hub language, English, with the coercion reported back to the caller.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from chat_translator.core.exceptions import UnsupportedLanguageError

logger = logging.getLogger(__name__)


class LanguageCode(str, Enum):
    """Supported chat languages (ISO 639-1)."""
    ENGLISH = "en"
    HINDI = "hi"
    MARATHI = "mr"
    TELUGU = "te"
    TAMIL = "ta"


HUB_LANGUAGE = LanguageCode.ENGLISH


@dataclass(frozen=True)
class LanguageInfo:
    code: LanguageCode
    name: str
    native_name: str


SUPPORTED_LANGUAGES: List[LanguageInfo] = [
    LanguageInfo(LanguageCode.ENGLISH, "English", "English"),
    LanguageInfo(LanguageCode.MARATHI, "Marathi", "मराठी"),
    LanguageInfo(LanguageCode.HINDI, "Hindi", "हिंदी"),
    LanguageInfo(LanguageCode.TELUGU, "Telugu", "తెలుగు"),
    LanguageInfo(LanguageCode.TAMIL, "Tamil", "தமிழ்"),
]


def supported_codes() -> List[str]:
    return [lang.value for lang in LanguageCode]


def parse_language(code: Optional[str]) -> Optional[LanguageCode]:
    """Return the LanguageCode for `code`, or None when it is outside the set.

    Region suffixes are dropped, so "hi-IN" and "hi_IN" both parse as Hindi.
    """
    if not code:
        return None
    base = str(code).strip().lower().replace("_", "-").split("-")[0]
    try:
        return LanguageCode(base)
    except ValueError:
        return None


def require_language(code: Optional[str]) -> LanguageCode:
    """Parse `code` or raise UnsupportedLanguageError."""
    language = parse_language(code)
    if language is None:
        raise UnsupportedLanguageError(str(code), supported_codes())
    return language


def coerce_language(code) -> Tuple[LanguageCode, bool]:
    """
    Map any code onto the closed set.

    Returns:
        (language, coerced) where coerced is True when `code` was unknown and
        the hub language was substituted.
    """
    if isinstance(code, LanguageCode):
        return code, False
    language = parse_language(code)
    if language is None:
        logger.warning(
            f"Unsupported language code {code!r}, using {HUB_LANGUAGE.value}",
            extra={"requested_language": code},
        )
        return HUB_LANGUAGE, True
    return language, False
