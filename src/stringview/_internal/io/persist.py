"""Write serialized JSON text to disk (internal)."""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from stringview._internal.canonical_json import reindent

logger = logging.getLogger(__name__)


def timestamped_path(path: Union[str, Path], now_ms: Optional[int] = None) -> Path:
    """Insert ``-<epoch ms>`` before the file suffix: data.json -> data-1700000000000.json."""
    p = Path(path)
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return p.with_name(f"{p.stem}-{now_ms}{p.suffix}")


def write_json_text(
    text: str,
    location: Union[str, Path],
    *,
    pretty: bool = False,
    indent: int = 2,
    add_timestamp: bool = False,
) -> str:
    """Write JSON text to location, creating parent directories as needed.

    Args:
        text: Compact JSON text from stringify()
        location: Target file path
        pretty: Re-indent the text before writing (validates it first)
        indent: Spaces per level when pretty is set
        add_timestamp: Add an epoch-millisecond suffix to the file name

    Returns:
        The text that was written

    Raises:
        MalformedOutputError: If pretty is set and text is not valid JSON
        OSError: If the directory or file cannot be written
    """
    target = Path(location)
    if add_timestamp:
        target = timestamped_path(target)

    output = reindent(text, indent) if pretty else text

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(output, encoding="utf-8")
    logger.debug("Wrote %d characters to %s", len(output), target)
    return output
