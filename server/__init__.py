"""
Discovery Ranking Engine Server

Usage: uvicorn server:app --reload --port 8000
"""

from .app import app, create_app
from .config import ServerConfig, get_config, reload_config
from .services import InMemoryCatalogStore, JsonCatalogStore
from .state import AppState, get_state, reset_state

__all__ = [
    "app",
    "create_app",
    "ServerConfig",
    "get_config",
    "reload_config",
    "AppState",
    "get_state",
    "reset_state",
    "InMemoryCatalogStore",
    "JsonCatalogStore",
]
