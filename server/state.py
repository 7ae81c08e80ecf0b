"""Application state: server config, discovery config, and the catalog store."""

import logging
from typing import Optional

from discovery import DiscoveryConfig

from .config import ServerConfig, get_config
from .services import InMemoryCatalogStore, JsonCatalogStore

logger = logging.getLogger(__name__)


class AppState:
    """Global application state."""

    def __init__(self, config: ServerConfig):
        self.config = config
        self.discovery_config: DiscoveryConfig = config.load_discovery_config()
        self.store: InMemoryCatalogStore = self._create_store(config)

    def _create_store(self, config: ServerConfig) -> InMemoryCatalogStore:
        """JSON store from catalog_json_path; empty store when it cannot be loaded."""
        try:
            return JsonCatalogStore(config.catalog_json_path)
        except (OSError, ValueError) as e:
            logger.warning(
                "[startup] CATALOG_LOAD_FAILED path=%s error=%s, using empty catalog",
                config.catalog_json_path, e,
            )
            return InMemoryCatalogStore()

    @property
    def is_loaded(self) -> bool:
        return len(self.store) > 0


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        config = get_config()
        _state = AppState(config)
    return _state


def reset_state() -> None:
    """Drop the cached state; the next get_state() rebuilds from the current config."""
    global _state
    _state = None
