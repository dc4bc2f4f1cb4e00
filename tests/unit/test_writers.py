"""Tests for the JSON response writer."""
import asyncio
import logging

import pytest

from movie_catalog.data.movies import Movie
from movie_catalog.errors import SerializationFailed
from movie_catalog.io.writers import EnvelopeResponse, encode_json, envelope, write_json


class TestWriteJson:
    """Test suite for write_json."""

    def test_status_body_and_content_type(self):
        response = write_json(201, {"status": "available"})

        assert isinstance(response, EnvelopeResponse)
        assert response.status_code == 201
        assert response.body == b'{"status":"available"}'
        assert response.headers["content-type"] == "application/json"

    def test_headers_may_be_absent_or_empty(self):
        assert write_json(200, {}, headers=None).body == b"{}"
        assert write_json(200, {}, headers={}).body == b"{}"

    def test_extra_headers_are_applied(self):
        response = write_json(200, {}, headers={"Location": "/api/v1/movies/1"})
        assert response.headers["location"] == "/api/v1/movies/1"

    def test_repeated_header_values(self):
        response = write_json(200, {}, headers={"Vary": ["Origin", "Accept"]})
        assert response.headers.getlist("vary") == ["Origin", "Accept"]

    def test_extra_headers_can_override_content_type(self):
        response = write_json(400, {}, headers={"Content-Type": "application/problem+json"})
        assert response.headers.getlist("content-type") == ["application/problem+json"]

    def test_content_length_matches_body(self):
        response = write_json(200, {"title": "é"})
        assert response.headers["content-length"] == str(len(response.body))

    def test_non_ascii_is_not_escaped(self):
        assert write_json(200, {"title": "Amélie"}).body == '{"title":"Amélie"}'.encode("utf-8")

    def test_pydantic_models_use_their_wire_form(self):
        movie = Movie(id=1, title="Casablanca", runtime=102, genres=["drama"])
        response = write_json(200, movie)

        assert response.body == (
            b'{"id":1,"title":"Casablanca","runtime":"102 mins","genres":["drama"],"version":1}'
        )

    def test_models_inside_envelopes(self):
        movie = Movie(id=2, title="Up")
        assert write_json(200, envelope(movie=movie)).body == (
            b'{"movie":{"id":2,"title":"Up","version":1}}'
        )

    @pytest.mark.parametrize("data", [
        {"value": object()},
        {"value": float("nan")},
        {"value": float("inf")},
        {1j: "complex key"},
    ])
    def test_serialization_failure_raises_before_response(self, data):
        with pytest.raises(SerializationFailed):
            write_json(200, data, headers={"X-Never": "sent"})


class TestEnvelope:
    def test_wraps_values(self):
        assert envelope(error="body must not be empty") == {"error": "body must not be empty"}
        assert envelope() == {}


class TestEncodeJson:
    def test_compact_output(self):
        assert encode_json({"a": [1, 2], "b": None}) == b'{"a":[1,2],"b":null}'


class TestEnvelopeResponseSend:
    """A failed send after the response is committed is logged, not raised."""

    def test_send_failure_is_logged(self, caplog):
        response = write_json(200, {"status": "available"})

        async def receive():
            return {"type": "http.request", "body": b"", "more_body": False}

        async def send(message):
            raise ConnectionResetError("client went away")

        with caplog.at_level(logging.ERROR, logger="movie_catalog.io.writers"):
            asyncio.run(response({"type": "http"}, receive, send))

        assert "client went away" in caplog.text

    def test_successful_send(self):
        response = write_json(200, {"status": "available"})
        sent = []

        async def receive():
            return {"type": "http.request", "body": b"", "more_body": False}

        async def send(message):
            sent.append(message)

        asyncio.run(response({"type": "http"}, receive, send))

        assert sent[0]["type"] == "http.response.start"
        assert sent[0]["status"] == 200
        assert sent[-1]["body"] == b'{"status":"available"}'
