"""
Configuration package for the Chat Translator backend.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    EngineFailurePolicy,
    TranslationSettings,
    AssemblyAISettings,
    OCRSettings,
    SecuritySettings,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "EngineFailurePolicy",
    "TranslationSettings",
    "AssemblyAISettings",
    "OCRSettings",
    "SecuritySettings",
    "settings",
    "get_settings",
    "reload_settings",
]
