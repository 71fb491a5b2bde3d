"""Type-tagged text encoding for stored setting values.

Every value is stored as ``(text, tag)``. The tag records the Python type so
``False``, ``0``, ``"0"`` and ``""`` stay distinct after a trip through a
single text column.

Lists and dicts that are plain JSON are stored as JSON under the ``array``
tag. Anything else (tuples, sets, dataclasses, namespaces, or lists holding
such values) is pickled under the ``object`` tag. Payloads are only meant to
be read back by this module.
"""

from __future__ import annotations

import base64
import binascii
import json
import pickle
from typing import Any

from .errors import CorruptDataError

STRING = "string"
BOOLEAN = "boolean"
INTEGER = "integer"
DOUBLE = "double"
ARRAY = "array"
OBJECT = "object"
NULL = "NULL"

TYPE_TAGS = frozenset({STRING, BOOLEAN, INTEGER, DOUBLE, ARRAY, OBJECT, NULL})


def _is_plain_json(value: Any) -> bool:
    """Return True when JSON can carry ``value`` without changing its type."""

    if value is None or isinstance(value, (bool, int, float, str)):
        return True
    if type(value) is list:
        return all(_is_plain_json(item) for item in value)
    if type(value) is dict:
        return all(isinstance(k, str) and _is_plain_json(v) for k, v in value.items())
    return False


def encode(value: Any) -> tuple[str | None, str]:
    """Serialize ``value`` into its stored text and type tag."""

    if value is None:
        return None, NULL
    if isinstance(value, bool):
        return ("1" if value else "0"), BOOLEAN
    if isinstance(value, int):
        return str(value), INTEGER
    if isinstance(value, float):
        return repr(value), DOUBLE
    if isinstance(value, str):
        return value, STRING
    if type(value) in (list, dict) and _is_plain_json(value):
        return json.dumps(value, separators=(",", ":")), ARRAY
    return base64.b64encode(pickle.dumps(value)).decode("ascii"), OBJECT


def decode(value: str | None, tag: str) -> Any:
    """Rebuild the Python value stored as ``(value, tag)``."""

    if tag not in TYPE_TAGS:
        raise CorruptDataError(tag, "unknown type tag")
    if tag == NULL:
        return None
    if value is None:
        raise CorruptDataError(tag, "value is NULL")

    if tag == STRING:
        return value
    if tag == BOOLEAN:
        if value not in ("0", "1"):
            raise CorruptDataError(tag, f"expected '0' or '1', got {value!r}")
        return value == "1"
    try:
        if tag == INTEGER:
            return int(value)
        if tag == DOUBLE:
            return float(value)
        if tag == ARRAY:
            return json.loads(value)
        return pickle.loads(base64.b64decode(value, validate=True))
    except (
        ValueError,
        binascii.Error,
        pickle.UnpicklingError,
        EOFError,
        AttributeError,
        ImportError,
    ) as exc:
        raise CorruptDataError(tag, str(exc)) from exc
