"""
API Errors - translate core error kinds into HTTP responses

Every error leaves the API as {"error": ...} built by write_json.
"""

import logging
from typing import Any, Dict, Type

from fastapi import FastAPI, HTTPException, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from movie_catalog.errors import (
    CatalogError,
    DecodeFailed,
    EmptyBody,
    InvalidIdentifier,
    InvalidRuntimeFormat,
    MalformedJSON,
    PayloadTooLarge,
    SerializationFailed,
    TrailingData,
    TypeMismatch,
    UnknownField,
    ValidationFailed,
)
from movie_catalog.io.writers import envelope, write_json

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "the requested resource could not be found"
SERVER_ERROR_MESSAGE = "the server encountered a problem and could not process your request"

# Status code for each client-facing error kind
ERROR_STATUS: Dict[Type[CatalogError], int] = {
    PayloadTooLarge: 413,
    MalformedJSON: 400,
    UnknownField: 400,
    TypeMismatch: 400,
    EmptyBody: 400,
    TrailingData: 400,
    DecodeFailed: 400,
    InvalidRuntimeFormat: 400,
    InvalidIdentifier: 404,
    ValidationFailed: 422,
    SerializationFailed: 500,
}


def to_http_exception(exc: CatalogError) -> HTTPException:
    """
    Map a core error onto an HTTPException with a client-safe detail.

    Server-side kinds never leak their message.
    """
    code = ERROR_STATUS.get(type(exc), 500)

    if code >= 500:
        logger.error(f"Server error ({exc.kind}): {exc}", exc_info=exc)
        return HTTPException(status_code=code, detail=SERVER_ERROR_MESSAGE)

    if isinstance(exc, ValidationFailed):
        detail: Any = exc.errors
    elif isinstance(exc, InvalidIdentifier):
        detail = NOT_FOUND_MESSAGE
    else:
        detail = exc.message

    logger.info(f"Client error ({exc.kind}): {detail}")
    return HTTPException(status_code=code, detail=detail)


def _default_detail(exc: StarletteHTTPException, request: Request) -> Any:
    if exc.status_code == 404 and exc.detail == "Not Found":
        return NOT_FOUND_MESSAGE
    if exc.status_code == 405:
        return f"the {request.method} method is not supported for this resource"
    return exc.detail


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Render every HTTPException, including routing 404/405s, as an error envelope"""
    try:
        return write_json(
            exc.status_code,
            envelope(error=_default_detail(exc, request)),
            headers=getattr(exc, "headers", None),
        )
    except SerializationFailed as e:
        logger.error(f"Failed to serialize error response: {e}", exc_info=True)
        return write_json(
            500,
            envelope(error=SERVER_ERROR_MESSAGE),
        )


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    """Render any exception no route translated as a generic 500 envelope"""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return write_json(500, envelope(error=SERVER_ERROR_MESSAGE))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
