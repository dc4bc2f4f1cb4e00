"""Tests for the Movie record: validation rules and wire form."""
from datetime import date, datetime

import pytest

from movie_catalog.data.movies import Movie, ensure_valid_movie, validate_movie
from movie_catalog.errors import ValidationFailed
from movie_catalog.validator import Validator

TODAY = date(2024, 6, 1)


def _movie(**overrides) -> Movie:
    fields = dict(
        id=1,
        title="Moana",
        year=2016,
        runtime=107,
        genres=["animation", "adventure"],
    )
    fields.update(overrides)
    return Movie(**fields)


def _errors(movie: Movie) -> dict:
    v = Validator()
    validate_movie(v, movie, today=TODAY)
    return v.errors


class TestValidateMovie:
    """Test suite for validate_movie rules."""

    @pytest.mark.parametrize("overrides", [
        {},
        {"title": "x" * 500},
        {"title": "é" * 250},  # 500 bytes
        {"year": 1888},
        {"year": TODAY.year},
        {"runtime": 1},
        {"genres": ["drama"]},
        {"genres": ["a", "b", "c", "d", "e"]},
    ])
    def test_valid_movies(self, overrides):
        v = Validator()
        validate_movie(v, _movie(**overrides), today=TODAY)

        assert v.valid()
        assert v.errors == {}

    @pytest.mark.parametrize("overrides, field, message", [
        ({"title": ""}, "title", "must be provided"),
        ({"title": "x" * 501}, "title", "must not be more than 500 bytes long"),
        ({"title": "é" * 251}, "title", "must not be more than 500 bytes long"),
        ({"year": 0}, "year", "must be provided"),
        ({"year": 1887}, "year", "must be greater than or equal to 1888"),
        ({"year": TODAY.year + 1}, "year", "must not be in the future"),
        ({"runtime": 0}, "runtime", "must be provided"),
        ({"genres": None}, "genres", "must be provided"),
        ({"genres": []}, "genres", "must contain at least 1 genre"),
        ({"genres": ["a", "b", "c", "d", "e", "f"]}, "genres", "must not contain more than 5 genres"),
        ({"genres": ["drama", "war", "drama"]}, "genres", "must not contain duplicate values"),
    ])
    def test_single_rule_violation(self, overrides, field, message):
        """Breaking exactly one rule reports exactly one error, keyed by the field."""
        assert _errors(_movie(**overrides)) == {field: message}

    def test_all_failures_are_collected(self):
        errors = _errors(Movie(id=1))

        assert errors == {
            "title": "must be provided",
            "year": "must be provided",
            "runtime": "must be provided",
            "genres": "must be provided",
        }

    def test_genre_order_does_not_matter(self):
        assert _errors(_movie(genres=["adventure", "animation"])) == {}

    def test_uses_current_year_by_default(self):
        v = Validator()
        validate_movie(v, _movie(year=date.today().year + 1))
        assert v.errors == {"year": "must not be in the future"}


class TestEnsureValidMovie:
    """Tests for ensure_valid_movie."""

    def test_valid_movie_passes(self):
        ensure_valid_movie(_movie(), today=TODAY)

    def test_raises_with_every_error(self):
        with pytest.raises(ValidationFailed) as exc_info:
            ensure_valid_movie(_movie(title="", genres=[]), today=TODAY)

        assert exc_info.value.errors == {
            "title": "must be provided",
            "genres": "must contain at least 1 genre",
        }


class TestMovieWireForm:
    """Tests for Movie serialization."""

    def test_full_record(self):
        movie = _movie(version=3)

        assert movie.model_dump(mode="json") == {
            "id": 1,
            "title": "Moana",
            "year": 2016,
            "runtime": "107 mins",
            "genres": ["animation", "adventure"],
            "version": 3,
        }

    def test_key_order(self):
        assert list(_movie().model_dump(mode="json")) == [
            "id", "title", "year", "runtime", "genres", "version",
        ]

    def test_created_at_is_never_serialized(self):
        movie = _movie(created_at=datetime(2020, 1, 1))

        assert "created_at" not in movie.model_dump(mode="json")
        assert "created_at" not in movie.model_dump_json()

    @pytest.mark.parametrize("overrides, omitted", [
        ({"year": 0}, "year"),
        ({"runtime": 0}, "runtime"),
        ({"genres": []}, "genres"),
        ({"genres": None}, "genres"),
    ])
    def test_zero_values_are_omitted(self, overrides, omitted):
        data = _movie(**overrides).model_dump(mode="json")

        assert omitted not in data
        assert data["version"] == 1

    def test_version_defaults_to_one(self):
        assert _movie().version == 1

    def test_runtime_accepts_wire_text(self):
        assert _movie(runtime="102 mins").runtime == 102
