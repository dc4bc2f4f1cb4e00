"""Request-body decoding and JSON response writing."""

from .readers import MAX_BODY_BYTES, read_bounded, read_id_param, read_json
from .writers import envelope, encode_json, write_json

__all__ = [
    "MAX_BODY_BYTES",
    "read_bounded",
    "read_id_param",
    "read_json",
    "envelope",
    "encode_json",
    "write_json",
]
