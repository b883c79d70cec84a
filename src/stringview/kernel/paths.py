"""Traversal path naming shared by the stringifier and the viewer.

Paths use a dotted/bracketed grammar: mapping children append ``.key`` and
sequence children append ``[index]``. Keys are not escaped; a key containing
``.`` or ``[`` produces an ambiguous path. These are diagnostic paths, not a
query language.
"""

from typing import Any, Optional, Union

ROOT_PATH = "root"


def build_path(parent_path: Optional[str], key: Union[str, int], is_sequence_index: bool) -> str:
    """Build the path of a child from its parent's path and its key/index."""
    if not parent_path:
        return f"[{key}]" if is_sequence_index else f"{key}"
    if is_sequence_index:
        return f"{parent_path}[{key}]"
    return f"{parent_path}.{key}"


def key_text(key: Any) -> str:
    """Text of a mapping key as it appears in a JSON object.

    Follows the json module's key coercion for non-str keys, and falls back
    to str() for key types JSON cannot express.
    """
    if isinstance(key, str):
        return key
    if key is True:
        return "true"
    if key is False:
        return "false"
    if key is None:
        return "null"
    if isinstance(key, int):
        return int.__repr__(key)
    if isinstance(key, float):
        return float.__repr__(key)
    return str(key)
