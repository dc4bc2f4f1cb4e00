"""
Movie API Schemas - Request body for creating a movie

Every key is optional on the wire: a missing key keeps its zero value and
is reported by movie validation rather than by decoding.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from movie_catalog.data import Movie, RuntimeText


class CreateMovieRequest(BaseModel):
    """Body of POST /movies"""

    model_config = ConfigDict(extra="forbid", strict=True)

    title: str = Field("", description="Movie title")
    year: int = Field(0, description="Release year")
    runtime: RuntimeText = Field(0, description='Runtime, e.g. "107 mins"')
    genres: Optional[List[str]] = Field(None, description="Genre tags (1-5, unique)")

    def to_movie(self, movie_id: int = 1, version: int = 1) -> Movie:
        """Build the Movie record this request describes"""
        return Movie(
            id=movie_id,
            title=self.title,
            year=self.year,
            runtime=self.runtime,
            genres=list(self.genres) if self.genres is not None else None,
            version=version,
        )
