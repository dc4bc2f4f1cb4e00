"""Core of the movie catalog API: request decoding, validation and JSON responses."""

__version__ = "1.0.0"
