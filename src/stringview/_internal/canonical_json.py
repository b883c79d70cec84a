"""Centralized JSON re-formatting.

The stringifier always writes compact text. This module turns that text into
the indented form used for files meant to be read by people, validating it
on the way: the text is parsed first, so output that is not valid JSON is
reported instead of being written.
"""

import json


class MalformedOutputError(ValueError):
    """Raised when text that should be valid JSON fails to parse."""
    pass


def reindent(text: str, indent: int = 2) -> str:
    """
    Re-format JSON text for readability.

    Rules:
    - Key order preserved (no sorting)
    - UTF-8 text kept as-is (ensure_ascii=False)
    - ``indent`` spaces per level

    Args:
        text: JSON text to re-format
        indent: Spaces per nesting level

    Returns:
        Indented JSON text

    Raises:
        MalformedOutputError: If text is not valid JSON
    """
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedOutputError(f"Cannot re-format invalid JSON text: {e}") from e
    return json.dumps(parsed, indent=indent, ensure_ascii=False)
