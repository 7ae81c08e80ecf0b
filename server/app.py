"""
Discovery Ranking Engine — FastAPI app factory.

Use: uvicorn server.app:app
Or:  from server import app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routes import register_routes
from .state import get_state

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and startup."""
    config = get_config()
    configure_logging(config.log_level)
    ok, errors = config.validate()
    for error in errors:
        logger.warning("[startup] CONFIG %s", error)

    app = FastAPI(
        title="Discovery Ranking Engine API",
        description="Ranked discovery, sectioned feeds, and trending scores for travel content",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)

    @app.on_event("startup")
    def load_catalog():
        state = get_state()
        logger.info(
            "[startup] Discovery API ready: items=%s catalog=%s config_ok=%s",
            len(state.store), state.config.catalog_json_path, ok,
        )

    return app


app = create_app()
