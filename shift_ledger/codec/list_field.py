from __future__ import annotations

import json
import re
from collections.abc import Iterable
from typing import Any

"""Task-list cell codec.

Incomplete task names are stored in a single cell. The canonical write format
is ``"; "``-joined text. Reading also accepts comma-joined text, one task per
line, and the legacy JSON-array-as-text cells.

Task names containing ``;``, ``,`` or a line break cannot be separated again
after encoding. This is a known boundary of the cell format.
"""

__all__ = [
    "LIST_SEPARATOR",
    "encode_list",
    "decode_list",
    "split_delimited",
]

LIST_SEPARATOR = "; "

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _clean(parts: Iterable[str]) -> tuple[str, ...]:
    return tuple(p.strip() for p in parts if p.strip())


def split_delimited(text: str) -> tuple[str, ...]:
    """Split free text on commas or semicolons, trimming and dropping empties."""
    return _clean(re.split(r"[;,]", text))


def encode_list(items: Iterable[str]) -> str:
    """Encode task names into one cell value (empty sequence -> "")."""
    return LIST_SEPARATOR.join(items)


def _decode_json_array(text: str) -> tuple[str, ...] | None:
    if not (text.startswith("[") and text.endswith("]")):
        return None
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    if not isinstance(parsed, list):
        return None
    return _clean(str(v) for v in parsed if v is not None)


def decode_list(cell: Any) -> tuple[str, ...]:
    """Decode a cell value back into task names. Never raises.

    Rules, first match wins:
    1. None / blank -> ()
    2. already a list (JSON blob rows) -> its items
    3. JSON array literal (legacy cells) -> its items
    4. contains ";" -> split on ";"
    5. contains "," -> split on ","
    6. contains line breaks -> one item per line
    7. anything else -> single item
    """
    if cell is None:
        return ()
    if isinstance(cell, (list, tuple)):
        return _clean(str(v) for v in cell if v is not None)

    text = str(cell).strip()
    if not text:
        return ()

    legacy = _decode_json_array(text)
    if legacy is not None:
        return legacy

    if ";" in text:
        return _clean(text.split(";"))
    if "," in text:
        return _clean(text.split(","))
    if _LINE_BREAK_RE.search(text):
        return _clean(_LINE_BREAK_RE.split(text))
    return (text,)
