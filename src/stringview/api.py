"""Public API for stringview.

High-level functions callers should use instead of importing from
stringview.kernel or stringview._internal.
"""

import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from stringview.contracts import StringifyOptions, ViewerOptions
from stringview.kernel.classify import MISSING
from stringview.kernel.stringify import resolve_options
from stringview.kernel.stringify import stringify as _stringify
from stringview._internal.io.persist import write_json_text
from stringview.viewer import render_viewer as _render_viewer

OptionsInput = Union[StringifyOptions, Mapping[str, Any], None]


def stringify(value: Any = MISSING, options: OptionsInput = None, **overrides: Any) -> str:
    """Serialize any Python value to compact JSON text.

    Args:
        value: Value to serialize (omitted means MISSING)
        options: StringifyOptions or a dict of its fields
        **overrides: revisit_budget, redaction_rules, settle_flag

    Returns:
        Compact, valid JSON text
    """
    return _stringify(value, options, **overrides)


def persist(
    value: Any,
    location: Optional[Union[str, os.PathLike, Path]] = None,
    *,
    pretty: bool = False,
    indent: int = 2,
    add_timestamp: bool = False,
    options: OptionsInput = None,
    **overrides: Any,
) -> str:
    """Serialize value and, when location is given, write it to disk.

    Without a location no I/O happens and the compact text is returned.
    With a location, parent directories are created and the text actually
    written (indented when pretty is set) is returned.
    """
    text = _stringify(value, resolve_options(options, **overrides))
    if location is None:
        return text
    return write_json_text(
        text,
        location,
        pretty=pretty,
        indent=indent,
        add_timestamp=add_timestamp,
    )


def render_viewer(
    value: Any,
    options: Union[ViewerOptions, Mapping[str, Any], None] = None,
    *,
    stringify_options: OptionsInput = None,
) -> str:
    """Render value as a collapsible HTML tree fragment."""
    return _render_viewer(value, options, stringify_options=stringify_options)
