"""Domain records and scalar types."""

from .movies import Movie, validate_movie, ensure_valid_movie
from .runtime import Runtime, RuntimeText, parse_runtime, format_runtime

__all__ = [
    "Movie",
    "validate_movie",
    "ensure_valid_movie",
    "Runtime",
    "RuntimeText",
    "parse_runtime",
    "format_runtime",
]
