import json
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from movie_catalog.errors import SerializationFailed

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"

HeaderValue = Union[str, Iterable[str]]


def envelope(**items: Any) -> Dict[str, Any]:
    """Wrap values in a top-level JSON object, e.g. envelope(error="...")"""
    return dict(items)


class EnvelopeResponse(Response):
    """
    A response whose body was serialized before it was built.

    Once the status line has gone out the response is committed, so a failed
    send (client gone) is logged and not retried.
    """

    media_type = JSON_MEDIA_TYPE

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        except OSError as e:
            logger.error(f"An error occurred writing response: {e}")


def _to_jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, Mapping):
        return {key: _to_jsonable(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [_to_jsonable(item) for item in data]
    return data


def encode_json(data: Any) -> bytes:
    """
    Serialize data to compact JSON bytes.

    Raises:
        SerializationFailed: If data cannot be represented as JSON
    """
    try:
        body = json.dumps(
            _to_jsonable(data),
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        )
    except (TypeError, ValueError, PydanticSerializationError) as e:
        raise SerializationFailed(f"could not serialize response: {e}") from e
    return body.encode("utf-8")


def write_json(
    status: int,
    data: Any,
    headers: Optional[Mapping[str, HeaderValue]] = None,
) -> EnvelopeResponse:
    """
    Build a JSON response for status and data.

    Serialization happens first: if it fails nothing has been produced for
    the client yet and SerializationFailed is raised. Extra headers are only
    applied after that, on top of the JSON content type.

    Args:
        status: HTTP status code
        data: Value to serialize (dicts, lists, scalars, pydantic models)
        headers: Optional extra headers; a value may be a list for repeated headers

    Returns:
        EnvelopeResponse ready to be returned from a route
    """
    body = encode_json(data)

    response = EnvelopeResponse(content=body, status_code=status)
    response.headers["content-type"] = JSON_MEDIA_TYPE

    for name, value in (headers or {}).items():
        if isinstance(value, str):
            response.headers[name] = value
            continue
        values = list(value)
        if not values:
            continue
        response.headers[name] = values[0]
        for extra in values[1:]:
            response.headers.append(name, extra)

    return response
