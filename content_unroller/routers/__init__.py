# Content Unroller Routers
"""HTTP endpoints of the content unroller."""

from .content import router as content_router
from .health import router as health_router

__all__ = [
    "content_router",
    "health_router",
]
