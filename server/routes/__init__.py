"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .root import router as root_router
from .discovery import router as discovery_router
from .trending import router as trending_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(discovery_router, prefix="/api/discovery", tags=["discovery"])
    app.include_router(trending_router, prefix="/api/trending", tags=["trending"])
