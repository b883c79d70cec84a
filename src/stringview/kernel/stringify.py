"""Extended stringifier: JSON text for arbitrary Python values.

Depth-first, pre-order traversal that always produces valid JSON text:

- Values JSON cannot express (callables, enum members, big ints, dates,
  missing values, opaque objects such as sets) become descriptive strings.
- Objects carrying attributes (instances with a ``__dict__``, dataclasses)
  are written as JSON objects of their fields.
- Mapping keys matching a redaction rule are written with their replacement
  text; the value behind the key is never read.
- A container that is its own ancestor (a true cycle) is expanded again up
  to ``revisit_budget`` times, then replaced by a circular marker naming the
  path where it was first seen. A container shared between sibling branches
  is not a cycle and is written in full every time.

Errors raised while reading the input (a mapping's ``__getitem__`` or a
sequence's ``__iter__``) propagate unchanged.
"""

import datetime
import json
import logging
from collections.abc import MutableMapping
from typing import Any, Dict, List, Mapping, Optional, Set, Union

from stringview.codes import (
    ANONYMOUS_NAME,
    FUNCTION_PREFIX,
    MISSING_MARKER,
    SYMBOL_PREFIX,
    ValueKind,
    circular_marker,
)
from stringview.contracts import StringifyOptions
from stringview.kernel.classify import MISSING, classify, mapping_view
from stringview.kernel.paths import ROOT_PATH, build_path, key_text
from stringview.kernel.redaction import RedactionRuleSet

logger = logging.getLogger(__name__)


class TraversalContext:
    """Identity-keyed bookkeeping for one stringify call.

    - first_seen: id -> path where the container was first entered
    - revisits: id -> extra expansions used while the container is open
    - ancestors: ids of containers open on the active branch
    """

    def __init__(self, options: StringifyOptions):
        self.revisit_budget = options.revisit_budget
        self.rules = RedactionRuleSet(options.redaction_rules)
        self.settle_flag = options.settle_flag
        self.first_seen: Dict[int, str] = {}
        self.revisits: Dict[int, int] = {}
        self.ancestors: Set[int] = set()
        # Containers stay referenced until the call ends so their ids cannot be reused
        self._pinned: List[Any] = []

    def enter(self, container: Any, path: str) -> None:
        ident = id(container)
        if ident not in self.first_seen:
            self.first_seen[ident] = path
            self._pinned.append(container)
        self.ancestors.add(ident)

    def leave(self, container: Any) -> None:
        ident = id(container)
        self.ancestors.discard(ident)
        self.revisits.pop(ident, None)


def resolve_options(
    options: Union[StringifyOptions, Mapping[str, Any], None] = None,
    **overrides: Any,
) -> StringifyOptions:
    """Merge an options object (or dict) with keyword overrides."""
    if options is None:
        return StringifyOptions(**overrides)
    if isinstance(options, StringifyOptions):
        if not overrides:
            return options
        options = options.model_dump()
    return StringifyOptions(**{**dict(options), **overrides})


def stringify(
    value: Any = MISSING,
    options: Union[StringifyOptions, Mapping[str, Any], None] = None,
    **overrides: Any,
) -> str:
    """Serialize value to compact JSON text.

    Args:
        value: Any Python value; omitted means MISSING
        options: StringifyOptions (or a dict of its fields)
        **overrides: Individual option fields (revisit_budget, redaction_rules, settle_flag)

    Returns:
        Compact JSON text

    Raises:
        pydantic.ValidationError: If the options are invalid
        Exception: Whatever the input raises while being read, unchanged
    """
    ctx = TraversalContext(resolve_options(options, **overrides))
    redacted = _redacted_root(value, ctx)
    if redacted is not None:
        return redacted
    return _stringify_value(value, ROOT_PATH, ctx)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _redacted_root(value: Any, ctx: TraversalContext) -> Optional[str]:
    """Apply redaction to a root that is a single-key mapping with a redacted key.

    Gives the same text as inline redaction without entering the root.
    """
    if not ctx.rules or classify(value) is not ValueKind.MAPPING:
        return None
    fields = mapping_view(value)
    if len(fields) != 1:
        return None
    name = key_text(next(iter(fields)))
    replacement = ctx.rules.resolve(name)
    if replacement is None:
        return None
    logger.debug("Redacted root key %r", name)
    return "{" + _quote(name) + ":" + _quote(replacement) + "}"


def _stringify_value(value: Any, path: str, ctx: TraversalContext) -> str:
    kind = classify(value)
    if kind.is_container:
        return _stringify_container(value, kind, path, ctx)
    return _stringify_scalar(value, kind)


def _stringify_container(value: Any, kind: ValueKind, path: str, ctx: TraversalContext) -> str:
    ident = id(value)
    if ident in ctx.ancestors:
        used = ctx.revisits.get(ident, 0)
        if used >= ctx.revisit_budget:
            first_path = ctx.first_seen[ident]
            logger.debug("Revisit budget exhausted at %s (first seen at %s)", path, first_path)
            return _quote(circular_marker(first_path))
        ctx.revisits[ident] = used + 1
        return _expand(value, kind, path, ctx)

    ctx.enter(value, path)
    text = _expand(value, kind, path, ctx)
    ctx.leave(value)
    return text


def _expand(value: Any, kind: ValueKind, path: str, ctx: TraversalContext) -> str:
    if kind is ValueKind.SEQUENCE:
        items = [
            _stringify_value(item, build_path(path, index, True), ctx)
            for index, item in enumerate(value)
        ]
        return "[" + ",".join(items) + "]"

    # Cycle tracking uses value itself; fields is only read
    fields = mapping_view(value)
    settle_flag(fields, ctx.settle_flag)
    pairs = []
    for key in fields:
        name = key_text(key)
        replacement = ctx.rules.resolve(name)
        if replacement is not None:
            logger.debug("Redacted %s", build_path(path, name, False))
            pairs.append(_quote(name) + ":" + _quote(replacement))
            continue
        child = _stringify_value(fields[key], build_path(path, name, False), ctx)
        pairs.append(_quote(name) + ":" + child)
    return "{" + ",".join(pairs) + "}"


def settle_flag(mapping: Any, flag: Optional[str]) -> bool:
    """Force a provisional "needs verification" entry to False, in place.

    Only mutable mappings that already hold the flag key are touched.
    Returns True when the mapping was changed.
    """
    if flag is None or not isinstance(mapping, MutableMapping):
        return False
    if flag not in mapping:
        return False
    mapping[flag] = False
    return True


def _callable_name(value: Any) -> str:
    name = getattr(value, "__name__", None)
    if not isinstance(name, str) or not name or name == "<lambda>":
        return ANONYMOUS_NAME
    return name


def _symbol_description(value: Any) -> str:
    return f"{type(value).__name__}.{value.name}"


def timestamp_text(value: Any) -> str:
    """Canonical timestamp text for a date-like value.

    Aware datetimes are written in UTC with millisecond precision and a
    trailing ``Z``; naive datetimes keep their wall-clock time. An aware
    datetime whose UTC time falls outside the datetime range keeps its own
    offset instead.
    """
    if isinstance(value, datetime.datetime):
        if value.utcoffset() is not None:
            try:
                utc = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
            except OverflowError:
                return value.isoformat(timespec="milliseconds")
            return utc.isoformat(timespec="milliseconds") + "Z"
        return value.isoformat(timespec="milliseconds")
    return value.isoformat()


def _stringify_scalar(value: Any, kind: ValueKind) -> str:
    if kind is ValueKind.MISSING:
        return _quote(MISSING_MARKER)
    elif kind is ValueKind.NULL:
        return "null"
    elif kind is ValueKind.DATE_LIKE:
        return _quote(timestamp_text(value))
    elif kind is ValueKind.CALLABLE:
        return _quote(f"{FUNCTION_PREFIX}{_callable_name(value)}]")
    elif kind is ValueKind.SYMBOL_LIKE:
        return _quote(f"{SYMBOL_PREFIX}{_symbol_description(value)}]")
    elif kind is ValueKind.BIG_INTEGER:
        return _quote(int.__repr__(value))
    elif kind is ValueKind.NUMBER:
        if isinstance(value, float):
            return float.__repr__(value)
        return int.__repr__(value)
    elif kind is ValueKind.NON_FINITE_NUMBER:
        return "null"
    elif kind is ValueKind.TEXT:
        return _quote(value)
    elif kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    return _quote(f"[object {type(value).__name__}]")
