"""Health and status endpoints."""
from fastapi import APIRouter, Request
from datetime import datetime, timezone

from chat_translator.config.settings import get_settings
from chat_translator.core.error_handlers import error_handler
from chat_translator.core.metrics import snapshot_latency_stats

router = APIRouter(tags=["health"])


def _app_settings(request: Request):
    return getattr(request.app.state, "settings", None) or get_settings()


@router.get("/")
async def root(request: Request):
    """Root endpoint for basic health check."""
    settings = _app_settings(request)
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "status": "running"
    }


@router.get("/health")
async def health_check(request: Request):
    """Service container state, model load state and latency stats."""
    settings = _app_settings(request)
    container = getattr(request.app.state, "service_container", None)

    if container is None or not container.initialized:
        return {
            "status": "unhealthy",
            "message": "Service container not initialized",
            "version": settings.app_version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return {
        "status": "healthy",
        "version": settings.app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "details": container.get_status(),
        "latency": snapshot_latency_stats(),
        "error_statistics": error_handler.get_error_statistics(),
    }
