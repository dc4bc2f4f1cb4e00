import logging
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_serializer

from movie_catalog.data.runtime import Runtime
from movie_catalog.errors import ValidationFailed
from movie_catalog.validator import Validator, unique

logger = logging.getLogger(__name__)

MAX_TITLE_BYTES: int = 500
EARLIEST_YEAR: int = 1888
MIN_GENRES: int = 1
MAX_GENRES: int = 5

# Fields dropped from the wire form when they hold their zero value
OMIT_WHEN_EMPTY: tuple[str, ...] = ("year", "runtime", "genres")


class Movie(BaseModel):
    """
    A movie record as exposed by the API.

    ``created_at`` is internal and never serialized. ``year``, ``runtime`` and
    ``genres`` are left out of the output when zero/empty, ``version`` is
    always present.
    """

    id: int = Field(..., ge=1, description="Externally assigned identifier")
    created_at: datetime = Field(default_factory=datetime.now, exclude=True)
    title: str = ""
    year: int = 0
    runtime: Runtime = 0
    genres: Optional[List[str]] = None
    version: int = Field(default=1, ge=1, description="Incremented on every update")

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler):
        data = handler(self)
        for name in OMIT_WHEN_EMPTY:
            if not getattr(self, name):
                data.pop(name, None)
        return data


def validate_movie(v: Validator, movie: Movie, today: Optional[date] = None) -> None:
    """
    Run every movie rule against v.

    Checks are ordered most- to least-specific per key, so the first message
    recorded for a field is the most useful one.
    """
    current_year = (today or date.today()).year

    v.check(movie.title != "", "title", "must be provided")
    v.check(
        len(movie.title.encode("utf-8")) <= MAX_TITLE_BYTES,
        "title",
        f"must not be more than {MAX_TITLE_BYTES} bytes long",
    )

    v.check(movie.year != 0, "year", "must be provided")
    v.check(movie.year >= EARLIEST_YEAR, "year", f"must be greater than or equal to {EARLIEST_YEAR}")
    v.check(movie.year <= current_year, "year", "must not be in the future")

    v.check(movie.runtime != 0, "runtime", "must be provided")
    v.check(movie.runtime > 0, "runtime", "must be a positive integer")

    v.check(movie.genres is not None, "genres", "must be provided")
    genres = movie.genres or []
    v.check(len(genres) >= MIN_GENRES, "genres", f"must contain at least {MIN_GENRES} genre")
    v.check(len(genres) <= MAX_GENRES, "genres", f"must not contain more than {MAX_GENRES} genres")
    v.check(unique(genres), "genres", "must not contain duplicate values")


def ensure_valid_movie(movie: Movie, today: Optional[date] = None) -> None:
    """Validate movie with a fresh Validator and raise ValidationFailed on any failure"""
    v = Validator()
    validate_movie(v, movie, today=today)
    if not v.valid():
        logger.debug(f"Movie failed validation: {v.errors}")
        raise ValidationFailed(v.errors)
