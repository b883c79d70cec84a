"""CLI logging configuration.

- User output stays on stdout (printed by the CLI).
- Diagnostics go to stderr via logging.
- quiet keeps ERROR only; trace enables DEBUG.

Library modules only create loggers; handlers are configured here, by the CLI.
"""

import logging
import sys


def setup_cli_logging(*, trace: bool = False, quiet: bool = False) -> None:
    """Configure the root logger for a CLI run."""
    if quiet:
        level = logging.ERROR
    elif trace:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    root = logging.getLogger()

    # Drop existing handlers so repeated runs (e.g. under pytest) don't duplicate output
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))

    root.addHandler(handler)
    root.setLevel(level)
