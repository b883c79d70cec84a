"""Value kind and marker constants for stringview.

These constants prevent stringly-typed kind checks and keep the marker
strings shared by the stringifier and the viewer in one place.
"""

from enum import Enum


class ValueKind(str, Enum):
    """Semantic kind of a value, in classification precedence order."""

    MISSING = "missing"
    NULL = "null"
    DATE_LIKE = "date"
    CALLABLE = "function"
    SYMBOL_LIKE = "symbol"
    BIG_INTEGER = "bigint"
    SEQUENCE = "array"
    MAPPING = "object"
    NUMBER = "number"
    NON_FINITE_NUMBER = "non_finite"
    TEXT = "string"
    BOOLEAN = "boolean"
    UNKNOWN = "unknown"

    # Containers are the only kinds that take part in cycle tracking
    @property
    def is_container(self) -> bool:
        return self in (ValueKind.SEQUENCE, ValueKind.MAPPING)


# In-band markers written into the JSON output
MISSING_MARKER = "[ missing ]"
CIRCULAR_PREFIX = "[Circular Ref: "
FUNCTION_PREFIX = "[function "
SYMBOL_PREFIX = "[Symbol "
ANONYMOUS_NAME = "anonymous"

# Generic replacement for bare-key redaction rules
DEFAULT_REPLACEMENT = "Removed for performance reasons"

# Conventional key that the viewer redacts unless told to show it anyway
TEMPLATE_KEY = "template"

# Mapping entry settled to False on visit (upstream "needs verification" flag)
DEFAULT_SETTLE_FLAG = "needsCheck"

# Largest integer a JSON number can carry without losing precision
MAX_SAFE_INTEGER = 2**53 - 1


def circular_marker(path: str) -> str:
    """Terminal marker naming the path where a container was first seen."""
    return f"{CIRCULAR_PREFIX}{path}]"
