"""
Health Router - Service status endpoint
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import Response

from movie_catalog import __version__
from movie_catalog.errors import SerializationFailed
from movie_catalog.io.writers import write_json
from movie_catalog.settings import Settings
from api.dependencies import get_app_settings
from api.errors import to_http_exception
from api.schemas.health import HealthResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/healthcheck", response_model=HealthResponse)
async def healthcheck(cfg: Settings = Depends(get_app_settings)) -> Response:
    """
    Report application status, operating environment and version.
    """
    health = HealthResponse(status="available", environment=cfg.env, version=__version__)

    try:
        return write_json(200, health)
    except SerializationFailed as e:
        raise to_http_exception(e)
