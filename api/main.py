"""
Movie Catalog API - FastAPI Application

Main entry point for the API server.
Environment-agnostic: configuration reads from settings (.env file),
optionally overridden from the command line.
"""

import argparse
import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from movie_catalog import __version__
from movie_catalog import logging_setup
from movie_catalog.settings import Settings, get_settings
from api.dependencies import lifespan_handler
from api.errors import register_error_handlers
from api.routers import health, movies

logger = logging.getLogger(__name__)


def create_app(cfg: Optional[Settings] = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        cfg: Settings to run with; read from the environment when omitted

    Returns:
        Configured FastAPI application instance
    """
    cfg = cfg or get_settings()

    # Configure logging
    logging_setup.setup_logging(cfg.log_level)

    app = FastAPI(
        title="Movie Catalog API",
        description="JSON API for managing a catalog of movie records",
        version=__version__,
        lifespan=lifespan_handler  # Handles startup/shutdown
    )
    app.state.settings = cfg

    # CORS configuration from settings
    logger.info(f"Configuring CORS with origins: {cfg.cors_origins}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Mount routers
    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(movies.router, prefix="/api/v1", tags=["movies"])

    logger.info(f"FastAPI application created (env={cfg.env})")

    return app


def main() -> None:
    cfg = get_settings()

    p = argparse.ArgumentParser(description="Run the movie catalog API server")
    p.add_argument("--host", default=cfg.api_host, help="Interface to bind")
    p.add_argument("--port", type=int, default=cfg.api_port, help="API server port")
    p.add_argument(
        "--env",
        default=cfg.env,
        choices=["development", "staging", "production"],
        help="Environment (development|staging|production)",
    )
    p.add_argument("--log_level", default=cfg.log_level, help="Logging level (DEBUG, INFO, WARNING, ERROR)")

    a = p.parse_args()

    # Overrides travel through the environment so the app uvicorn imports sees them
    os.environ["APP_API_HOST"] = a.host
    os.environ["APP_API_PORT"] = str(a.port)
    os.environ["APP_ENV"] = a.env
    os.environ["APP_LOG_LEVEL"] = a.log_level.upper()
    cfg = get_settings()

    import uvicorn

    logger.info(f"Starting API server on {cfg.api_host}:{cfg.api_port}")
    logger.info(f"Environment: {cfg.env}")
    logger.info(f"Reload: {cfg.api_reload}")
    logger.info(f"Workers: {cfg.api_workers}")

    uvicorn.run(
        "api.main:app",
        host=cfg.api_host,
        port=cfg.api_port,
        reload=cfg.api_reload,
        workers=cfg.api_workers if not cfg.api_reload else 1,  # Workers only work without reload
        log_level=cfg.log_level.lower()
    )


# Create app instance
app = create_app()


if __name__ == "__main__":
    main()
