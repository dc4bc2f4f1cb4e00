import re
from typing import Annotated

from pydantic import BeforeValidator, PlainSerializer

from movie_catalog.errors import InvalidRuntimeFormat

# Runtimes are stored as a 32-bit signed count of minutes
MAX_RUNTIME_MINUTES: int = 2**31 - 1

# No sign, no leading zeros, exactly one space before the unit
RUNTIME_PATTERN = re.compile(r"(0|[1-9][0-9]*) mins")


def parse_runtime(raw: str) -> int:
    """
    Decode the wire form of a runtime into a count of minutes.

    Only ``"<N> mins"`` is accepted, so decoding then encoding always gives the
    original text back.

    Example:
        "107 mins" -> 107
        "107", "107 minutes", "-1 mins", " 107 mins" -> InvalidRuntimeFormat
    """
    if not isinstance(raw, str):
        raise InvalidRuntimeFormat(raw)

    # re's [0-9] is ASCII-only, unlike str.isdigit()
    match = RUNTIME_PATTERN.fullmatch(raw)
    if match is None:
        raise InvalidRuntimeFormat(raw)

    minutes = int(match.group(1))
    if minutes > MAX_RUNTIME_MINUTES:
        raise InvalidRuntimeFormat(raw)
    return minutes


def format_runtime(minutes: int) -> str:
    """Encode a count of minutes as ``"<N> mins"``"""
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise InvalidRuntimeFormat(minutes)
    if minutes < 0 or minutes > MAX_RUNTIME_MINUTES:
        raise InvalidRuntimeFormat(minutes)
    return f"{minutes} mins"


def _coerce_runtime(value: object) -> int:
    # Domain objects are built from code (ints) as well as from wire text
    if isinstance(value, str):
        return parse_runtime(value)
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value <= MAX_RUNTIME_MINUTES:
            return value
    raise InvalidRuntimeFormat(value)


# Minutes, serialized as "<N> mins". Accepts an int or the wire text.
Runtime = Annotated[
    int,
    BeforeValidator(_coerce_runtime),
    PlainSerializer(format_runtime, return_type=str),
]

# Request-body variant: only the wire text is accepted
RuntimeText = Annotated[
    int,
    BeforeValidator(parse_runtime),
    PlainSerializer(format_runtime, return_type=str),
]
