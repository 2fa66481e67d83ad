"""Record <-> row codec for shift submissions."""

from .list_field import decode_list, encode_list
from .normalizer import normalize
from .pipeline import decode_rows, normalize_and_encode
from .rate import rate
from .row_codec import decode_row, encode_row
from .schema import CANONICAL_SCHEMA, resolve_schema

__all__ = [
    "CANONICAL_SCHEMA",
    "decode_list",
    "decode_row",
    "decode_rows",
    "encode_list",
    "encode_row",
    "normalize",
    "normalize_and_encode",
    "rate",
    "resolve_schema",
]
