"""Chat Translator backend: translation pipeline and media helpers for a multilingual chat app."""

__version__ = "1.0.0"
