"""
API Dependencies - settings access, bounded body reading and app lifespan

Nothing here holds per-request state: every request reads its own body and
gets its own decoded payload.
"""

import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import Request

from movie_catalog import __version__
from movie_catalog.errors import PayloadTooLarge
from movie_catalog.settings import Settings

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """
    FastAPI dependency to access the settings the app was created with.

    Usage in routers:
        @router.get("/example")
        async def example(cfg: Settings = Depends(get_app_settings)):
            env = cfg.env
            ...
    """
    return request.app.state.settings


async def read_request_body(request: Request, max_bytes: int) -> bytes:
    """
    Read the request body, stopping as soon as it grows past max_bytes.

    Raises:
        PayloadTooLarge: If the body is larger than max_bytes
    """
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLarge(max_bytes)

    chunks: List[bytes] = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > max_bytes:
            raise PayloadTooLarge(max_bytes)
        chunks.append(chunk)
    return b"".join(chunks)


@asynccontextmanager
async def lifespan_handler(app):
    """
    FastAPI lifespan context manager for startup/shutdown.

    Usage in main.py:
        app = FastAPI(lifespan=lifespan_handler)
    """
    cfg: Settings = app.state.settings
    logger.info(f"Starting movie catalog API v{__version__} (env={cfg.env})")

    yield  # App is now running

    logger.info("FastAPI shutting down...")
