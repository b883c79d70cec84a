"""stringview: safe JSON serialization of arbitrary values + a collapsible tree viewer."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("stringview")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from stringview.api import stringify, persist, render_viewer
from stringview.codes import ValueKind
from stringview.contracts import RedactionRule, StringifyOptions, ViewerOptions
from stringview.kernel.classify import MISSING, classify
from stringview._internal.canonical_json import MalformedOutputError

__all__ = [
    "__version__",
    "stringify",
    "persist",
    "render_viewer",
    "classify",
    "MISSING",
    "ValueKind",
    "RedactionRule",
    "StringifyOptions",
    "ViewerOptions",
    "MalformedOutputError",
]
