"""
Movies Router - Create and show movie records

Nothing is persisted: create decodes, validates and echoes the payload,
show returns a placeholder record for any valid identifier.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from movie_catalog.data import Movie, ensure_valid_movie
from movie_catalog.errors import CatalogError
from movie_catalog.io.readers import read_id_param, read_json
from movie_catalog.io.writers import write_json
from movie_catalog.settings import Settings
from api.dependencies import get_app_settings, read_request_body
from api.errors import to_http_exception
from api.schemas.movies import CreateMovieRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/movies")
async def create_movie(
    request: Request,
    cfg: Settings = Depends(get_app_settings)
) -> Response:
    """
    Decode a movie from the request body, validate it and echo it back.

    The echo is the request wire form (title, year, runtime, genres). The
    Movie built for validation is not returned: nothing is stored, so it has
    no real id or version to report.

    Body: {"title": str, "year": int, "runtime": "<N> mins", "genres": [str]}.
    Unknown keys, malformed JSON and more than one JSON value are rejected
    with 400; rule violations are reported together with 422.
    """
    try:
        body = await read_request_body(request, cfg.max_body_bytes)
        payload = read_json(body, CreateMovieRequest, max_bytes=cfg.max_body_bytes)

        # TODO: take the id and version from storage once movies are persisted
        ensure_valid_movie(payload.to_movie())

        logger.info(f"Accepted movie '{payload.title}' ({payload.year})")
        return write_json(200, payload)

    except CatalogError as e:
        raise to_http_exception(e)


@router.get("/movies/{movie_id}")
async def show_movie(movie_id: str) -> Response:
    """
    Return the movie with the given identifier.

    Identifiers that are not positive integers get a 404.
    """
    try:
        id_ = read_id_param(movie_id)

        movie = Movie(
            id=id_,
            created_at=datetime.now(),
            title="Casablanca",
            runtime=102,
            genres=["drama", "romance", "war"],
            version=1,
        )
        return write_json(200, movie)

    except CatalogError as e:
        raise to_http_exception(e)
