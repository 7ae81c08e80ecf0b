"""Root and health endpoints."""

from fastapi import APIRouter

from ..state import get_state

router = APIRouter()


@router.get("/")
def root():
    state = get_state()
    return {
        "name": "Discovery Ranking Engine API",
        "version": "1.0.0",
        "status": "loaded" if state.is_loaded else "empty_catalog",
        "catalog": {
            "items": len(state.store),
            "path": str(state.config.catalog_json_path),
        },
        "endpoints": {
            "discovery": [
                "/api/discovery/rank",
                "/api/discovery/feed",
                "/api/discovery/similar/{item_id}",
            ],
            "trending": ["/api/trending/update"],
        },
    }


@router.get("/api/health")
def health():
    state = get_state()
    return {
        "status": "healthy",
        "loaded": state.is_loaded,
        "items": len(state.store),
    }
