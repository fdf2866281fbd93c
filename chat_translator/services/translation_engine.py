"""
Local translation engine.

Routes a request through the neural model, pivoting through English when
neither side of the pair is English.
"""

import logging
from typing import Any, Dict

from chat_translator.core.exceptions import ModelUnavailableError, TranslationError

from .languages import HUB_LANGUAGE, coerce_language

logger = logging.getLogger(__name__)


class LocalTranslationEngine:
    """
    Wraps a translation model exposing ``async translate(text, src, tgt)``.

    The model is shared for the lifetime of the engine and loads itself on
    first use (see BaseMLModel.load). Unknown language codes are coerced to
    English for the request. Model errors are raised as TranslationError; no
    retry is attempted.
    """

    def __init__(self, model: Any):
        self.model = model

    @property
    def is_loaded(self) -> bool:
        return getattr(self.model, "is_loaded", False)

    def get_stats(self) -> Dict[str, Any]:
        get_stats = getattr(self.model, "get_stats", None)
        return get_stats() if get_stats else {"is_loaded": self.is_loaded}

    async def warm_up(self) -> None:
        """Load the model ahead of the first request."""
        try:
            await self.model.load()
        except Exception as e:
            raise ModelUnavailableError("translation", {"error": str(e)}) from e

    async def translate(self, text: str, source_lang, target_lang) -> str:
        """
        Translate `text` from `source_lang` to `target_lang`.

        Returns:
            Translated text; the input itself when the model returns nothing
        """
        source, source_coerced = coerce_language(source_lang)
        target, target_coerced = coerce_language(target_lang)
        if source_coerced or target_coerced:
            logger.warning(
                "Engine request used coerced language codes",
                extra={"source_language": str(source_lang), "target_language": str(target_lang)},
            )

        if source == target:
            return text

        if source != HUB_LANGUAGE and target != HUB_LANGUAGE:
            intermediate = await self._translate_once(text, source, HUB_LANGUAGE)
            return await self._translate_once(intermediate, HUB_LANGUAGE, target)

        return await self._translate_once(text, source, target)

    async def _translate_once(self, text: str, source, target) -> str:
        try:
            result = await self.model.translate(text, source, target)
        except TranslationError:
            raise
        except Exception as e:
            raise TranslationError(
                f"Local translation failed: {e}",
                details={
                    "source_language": source.value,
                    "target_language": target.value,
                },
            ) from e

        return result or text
