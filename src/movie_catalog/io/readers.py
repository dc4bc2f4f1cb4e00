import json
import logging
import re
from typing import Any, BinaryIO, Dict, List, Set, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from movie_catalog.errors import (
    CatalogError,
    DecodeFailed,
    EmptyBody,
    InvalidDestination,
    InvalidIdentifier,
    InvalidRuntimeFormat,
    MalformedJSON,
    PayloadTooLarge,
    TrailingData,
    TypeMismatch,
    UnknownField,
)

logger = logging.getLogger(__name__)

MAX_BODY_BYTES: int = 1_048_576

# Identifiers are signed 64-bit integers; anything longer cannot fit
MAX_ID: int = 2**63 - 1
_ID_PATTERN = re.compile(r"[+-]?[0-9]{1,20}")

# Insignificant whitespace as defined by RFC 8259
_JSON_WHITESPACE = " \t\n\r"

# pydantic error types that mean "wrong JSON type for this field"
_TYPE_ERROR_SUFFIXES: tuple[str, ...] = ("_type", "_parsing")
_TYPE_ERRORS: Set[str] = {"int_from_float"}

M = TypeVar("M", bound=BaseModel)
Source = Union[bytes, bytearray, memoryview, BinaryIO]


class _NonStandardConstant(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    # json accepts NaN/Infinity/-Infinity by default, JSON itself does not
    raise _NonStandardConstant(name)


_decoder = json.JSONDecoder(parse_constant=_reject_constant)


def read_bounded(source: Source, max_bytes: int = MAX_BODY_BYTES) -> bytes:
    """
    Read at most max_bytes from source.

    Reads one byte past the limit so an oversized stream is detected without
    consuming the rest of it.

    Raises:
        PayloadTooLarge: If source holds more than max_bytes bytes
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
    else:
        chunks: List[bytes] = []
        remaining = max_bytes + 1
        while remaining > 0:
            chunk = source.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        data = b"".join(chunks)

    if len(data) > max_bytes:
        raise PayloadTooLarge(max_bytes)
    return data


def read_json(source: Source, destination: Type[M], max_bytes: int = MAX_BODY_BYTES) -> M:
    """
    Decode exactly one JSON value from source into a destination model.

    Args:
        source: Request body as bytes or a readable binary stream
        destination: Pydantic model class to populate
        max_bytes: Size bound for the body

    Returns:
        Populated instance of destination

    Raises:
        InvalidDestination: If destination is not a pydantic model class (caller bug)
        PayloadTooLarge, EmptyBody, MalformedJSON, UnknownField, TypeMismatch,
        InvalidRuntimeFormat, TrailingData, DecodeFailed: For bad input
    """
    if not (isinstance(destination, type) and issubclass(destination, BaseModel)):
        raise InvalidDestination(
            f"read_json destination must be a pydantic model class, got {destination!r}"
        )

    data = read_bounded(source, max_bytes)

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedJSON(e.start) from e

    start = _skip_whitespace(text, 0)
    if start == len(text):
        raise EmptyBody()

    try:
        value, end = _decoder.raw_decode(text, start)
    except json.JSONDecodeError as e:
        # Errors at the very end mean the document was cut short
        if e.pos >= len(text):
            raise MalformedJSON() from e
        raise MalformedJSON(_byte_offset(text, e.pos)) from e
    except _NonStandardConstant as e:
        raise MalformedJSON() from e
    except ValueError as e:
        # int() refuses literals longer than sys.get_int_max_str_digits()
        raise DecodeFailed("body contains a number that is too long") from e
    except RecursionError as e:
        raise DecodeFailed("body contains JSON that is nested too deeply") from e

    result = _populate(destination, value, text[start:end], _byte_offset(text, start))

    if _skip_whitespace(text, end) != len(text):
        raise TrailingData()

    return result


def read_id_param(token: str) -> int:
    """
    Parse a path-embedded identifier as a positive base-10 integer.

    Example:
        "1" -> 1
        "0", "-5", "blah" -> InvalidIdentifier
    """
    if not isinstance(token, str) or _ID_PATTERN.fullmatch(token) is None:
        raise InvalidIdentifier(token)

    value = int(token)
    if value < 1 or value > MAX_ID:
        raise InvalidIdentifier(token)
    return value


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _JSON_WHITESPACE:
        pos += 1
    return pos


def _byte_offset(text: str, pos: int) -> int:
    return len(text[:pos].encode("utf-8"))


def _accepted_keys(destination: Type[BaseModel]) -> Set[str]:
    keys: Set[str] = set()
    populate_by_name = destination.model_config.get("populate_by_name", False)
    for name, field in destination.model_fields.items():
        keys.add(field.alias or name)
        if populate_by_name or field.alias is None:
            keys.add(name)
    return keys


def _populate(destination: Type[M], value: Any, raw: str, offset: int) -> M:
    # Unknown keys are rejected whatever the model's own "extra" setting is
    if isinstance(value, dict):
        accepted = _accepted_keys(destination)
        for key in value:
            if key not in accepted:
                raise UnknownField(key)

    try:
        return destination.model_validate_json(raw, strict=True)
    except ValidationError as e:
        raise _triage(e, offset) from e


def _field_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc if isinstance(part, str))


def _is_type_error(error_type: str) -> bool:
    return error_type.endswith(_TYPE_ERROR_SUFFIXES) or error_type in _TYPE_ERRORS


def _triage(exc: ValidationError, offset: int) -> CatalogError:
    """
    Map a pydantic ValidationError onto a single error kind.

    Precedence: unknown key, wrong type, runtime format, anything else.
    """
    errors: List[Dict[str, Any]] = exc.errors()

    for err in errors:
        if err["type"] == "extra_forbidden":
            return UnknownField(_field_path(err["loc"]) or str(err["loc"][-1]))

    for err in errors:
        if _is_type_error(err["type"]):
            field = _field_path(err["loc"])
            if field:
                return TypeMismatch(field=field)
            return TypeMismatch(offset=offset)

    for err in errors:
        cause = (err.get("ctx") or {}).get("error")
        if isinstance(cause, InvalidRuntimeFormat):
            return cause

    first = errors[0]
    field = _field_path(first["loc"])
    message = f"{field}: {first['msg']}" if field else first["msg"]
    logger.debug(f"Unclassified decode failure: {exc}")
    return DecodeFailed(message)
