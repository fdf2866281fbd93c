# API endpoints and routers

from .translation_endpoints import router as translation_router
from .media_endpoints import router as media_router
from .health_endpoints import router as health_router

__all__ = [
    "translation_router",
    "media_router",
    "health_router",
]
