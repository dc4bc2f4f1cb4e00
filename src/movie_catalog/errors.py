"""
Error taxonomy for request ingestion, validation and response writing.

Every kind carries a stable ``kind`` tag and a client-safe message (``str(exc)``)
so the HTTP layer can map it onto a status code without inspecting decoder
internals.
"""

from typing import Dict, Optional


class CatalogError(Exception):
    """Base class for every error the core hands back to the HTTP layer"""

    kind: str = "catalog_error"
    default_message: str = "an error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class PayloadTooLarge(CatalogError):
    kind = "payload_too_large"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"body must not be larger than {limit} bytes")


class MalformedJSON(CatalogError):
    kind = "malformed_json"

    def __init__(self, offset: Optional[int] = None):
        self.offset = offset
        if offset is None:
            super().__init__("body contains badly-formed JSON")
        else:
            super().__init__(f"body contains badly-formed JSON (at character {offset})")


class UnknownField(CatalogError):
    kind = "unknown_field"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'body contains unknown key "{name}"')


class TypeMismatch(CatalogError):
    kind = "type_mismatch"

    def __init__(self, field: Optional[str] = None, offset: Optional[int] = None):
        self.field = field
        self.offset = offset
        if field:
            super().__init__(f'body contains incorrect JSON type for field "{field}"')
        elif offset is not None:
            super().__init__(f"body contains incorrect JSON type (at character {offset})")
        else:
            super().__init__("body contains incorrect JSON type")


class EmptyBody(CatalogError):
    kind = "empty_body"
    default_message = "body must not be empty"


class TrailingData(CatalogError):
    kind = "trailing_data"
    default_message = "body must only contain a single JSON value"


class DecodeFailed(CatalogError):
    kind = "decode_failed"
    default_message = "body could not be decoded"


class InvalidIdentifier(CatalogError):
    kind = "invalid_identifier"

    def __init__(self, token: object = None):
        self.token = token
        super().__init__("invalid id parameter")


class InvalidRuntimeFormat(CatalogError, ValueError):
    """
    Runtime text did not match ``"<N> mins"``.

    Also a ValueError so it can be raised from pydantic validators and
    recovered from the resulting ValidationError.
    """

    kind = "invalid_runtime_format"

    def __init__(self, raw: object = None):
        self.raw = raw
        super().__init__("invalid runtime format")


class ValidationFailed(CatalogError):
    """One or more record rules failed; ``errors`` holds every field message."""

    kind = "validation_failed"

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("validation failed")


class SerializationFailed(CatalogError):
    kind = "serialization_failed"
    default_message = "could not serialize response"


class InvalidDestination(TypeError):
    """
    A decode destination that cannot be populated was passed to the reader.

    This is a bug in the calling code, not bad input, so it is intentionally
    not a CatalogError and is never translated into a client response.
    """
