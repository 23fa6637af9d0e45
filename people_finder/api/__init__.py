"""API endpoints for People Finder."""

from .records import router as records_router
from .search import router as search_router
from .transfer import router as transfer_router
from .health import router as health_router
from .metrics import router as metrics_router

__all__ = [
    "records_router",
    "search_router",
    "transfer_router",
    "health_router",
    "metrics_router",
]
