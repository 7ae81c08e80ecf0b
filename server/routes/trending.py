"""Trending batch endpoint."""

from fastapi import APIRouter

from discovery import trending_update

from ..state import get_state

router = APIRouter()


@router.post("/update")
def run_trending_update():
    """Recompute trending scores over the whole catalog and store them."""
    state = get_state()
    updates = trending_update(
        state.store.get_items(public_only=False),
        config=state.discovery_config,
    )
    updated = state.store.apply_trending(updates)
    return {
        "success": True,
        "updated": updated,
        "updates": [u.model_dump() for u in updates],
    }
