"""Classify a value into its semantic kind.

Classification is a closed, ordered match. The first rule that applies wins:

1. MISSING sentinel
2. None
3. datetime / date / time
4. callables (functions, methods, classes, callable instances)
5. enum members
6. ints beyond the JSON-safe integer range
7. non-text sequences
8. mappings
9. finite numbers
10. non-finite floats
11. text
12. booleans
13. objects carrying attributes (instances with a __dict__, dataclasses),
    traversed as mappings through mapping_view()
14. anything else

bool is a subclass of int, so the numeric rules exclude it explicitly and
booleans fall through to rule 12.
"""

import dataclasses
import datetime
import enum
import math
import types
from collections.abc import Mapping, Sequence
from typing import Any, Iterator

from stringview.codes import MAX_SAFE_INTEGER, ValueKind


class _MissingType:
    """Type of the MISSING sentinel (a value that was never supplied)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _MissingType()

_TEXT_TYPES = (str, bytes, bytearray)

# Values whose __dict__ does not hold their contents
_OPAQUE_TYPES = (types.ModuleType, set, frozenset) + _TEXT_TYPES


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def classify(value: Any) -> ValueKind:
    """Return the ValueKind of value. Never raises."""
    if value is MISSING:
        return ValueKind.MISSING
    if value is None:
        return ValueKind.NULL
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return ValueKind.DATE_LIKE
    if callable(value):
        return ValueKind.CALLABLE
    if isinstance(value, enum.Enum):
        return ValueKind.SYMBOL_LIKE
    if _is_integer(value) and abs(value) > MAX_SAFE_INTEGER:
        return ValueKind.BIG_INTEGER
    if isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if _is_integer(value):
        return ValueKind.NUMBER
    if isinstance(value, float):
        return ValueKind.NUMBER if math.isfinite(value) else ValueKind.NON_FINITE_NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if _has_fields(value):
        return ValueKind.MAPPING
    return ValueKind.UNKNOWN


def _has_fields(value: Any) -> bool:
    if isinstance(value, _OPAQUE_TYPES):
        return False
    if dataclasses.is_dataclass(value):
        return True
    return isinstance(getattr(value, "__dict__", None), dict)


class _FieldView(Mapping):
    """Read-only mapping over the fields of a dataclass without a __dict__."""

    def __init__(self, obj: Any):
        self._obj = obj
        self._names = [f.name for f in dataclasses.fields(obj)]

    def __getitem__(self, key: str) -> Any:
        if key not in self._names:
            raise KeyError(key)
        return getattr(self._obj, key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)


def mapping_view(value: Any) -> Mapping:
    """Mapping to traverse for a value classified as MAPPING.

    Mappings are returned as-is. Objects give their live attribute dict, so
    writes through the view change the object; slotted dataclasses give a
    read-only view over their fields.
    """
    if isinstance(value, Mapping):
        return value
    fields = getattr(value, "__dict__", None)
    if isinstance(fields, dict):
        return fields
    return _FieldView(value)
