"""
Middleware package for the chat translator backend.
"""

from .request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
