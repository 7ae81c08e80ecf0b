"""
Server Configuration

Host, port, catalog location, and trending defaults for the discovery API,
read from the environment (and a project-root .env via python-dotenv).
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from discovery import DiscoveryConfig

logger = logging.getLogger(__name__)

# Single .env at the project root
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)


@dataclass
class ServerConfig:
    """Settings for the discovery HTTP service."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Catalog JSON: {"items": [...], "users": {...}, "business_tiers": {...}}
    catalog_json_path: Path = Path(__file__).parent.parent / "data" / "catalog.json"
    # Optional JSON with DiscoveryConfig sections (see DiscoveryConfig.from_dict)
    discovery_config_path: Optional[Path] = None

    # Trending ids handed to the feed when the request sends none
    trending_top_n: int = 10

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        base_dir = Path(__file__).parent.parent

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            catalog_json_path=_path_env("CATALOG_JSON_PATH", base_dir / "data" / "catalog.json"),
            discovery_config_path=_path_env("DISCOVERY_CONFIG_PATH"),
            trending_top_n=int(os.getenv("TRENDING_TOP_N", "10")),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Check that configured files exist and numbers are in range.

        Returns:
            (ok, errors)
        """
        errors = []

        if not self.catalog_json_path.exists():
            errors.append(f"Catalog JSON not found: {self.catalog_json_path}")

        if self.discovery_config_path and not self.discovery_config_path.exists():
            errors.append(f"Discovery config not found: {self.discovery_config_path}")

        if self.trending_top_n < 0:
            errors.append(f"TRENDING_TOP_N must be >= 0, got {self.trending_top_n}")

        return len(errors) == 0, errors

    def load_discovery_config(self) -> DiscoveryConfig:
        """
        DiscoveryConfig from discovery_config_path, or defaults when unset.
        Raises ValueError when the file holds weights that do not sum to 1.
        """
        if not self.discovery_config_path:
            return DiscoveryConfig()
        with open(self.discovery_config_path) as f:
            data = json.load(f)
        logger.info("[config] DISCOVERY_CONFIG_LOADED path=%s", self.discovery_config_path)
        return DiscoveryConfig.from_dict(data)


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
