"""Performance sentinel inputs and budgets for stringify()."""

from __future__ import annotations

import os
from typing import Any, Callable, Dict


def _budget_from_env(var_name: str, default_ms: float) -> float:
    raw = os.getenv(var_name)
    if not raw:
        return default_ms
    try:
        return float(raw)
    except ValueError:
        return default_ms


MAX_WIDE_MAPPING_MS = _budget_from_env("STRINGVIEW_MAX_WIDE_MAPPING_MS", 500.0)
MAX_DEEP_CHAIN_MS = _budget_from_env("STRINGVIEW_MAX_DEEP_CHAIN_MS", 300.0)
MAX_SHARED_FANOUT_MS = _budget_from_env("STRINGVIEW_MAX_SHARED_FANOUT_MS", 500.0)
MAX_CYCLIC_MESH_MS = _budget_from_env("STRINGVIEW_MAX_CYCLIC_MESH_MS", 1500.0)


def wide_mapping(width: int = 20000) -> Dict[str, Any]:
    """One mapping with many scalar entries of mixed kinds."""
    return {f"k{i}": (i if i % 3 else f"v{i}") for i in range(width)}


def deep_chain(depth: int = 150) -> Dict[str, Any]:
    """Nested mappings, one level per step; stays well under the recursion limit."""
    root: Dict[str, Any] = {"leaf": True}
    for i in range(depth):
        root = {"level": i, "child": root}
    return root


def shared_fanout(fanout: int = 2000) -> Dict[str, Any]:
    """Many sibling keys referencing the same (acyclic) mapping."""
    shared = {"name": "shared", "items": list(range(10))}
    return {f"ref{i}": shared for i in range(fanout)}


def cyclic_mesh(size: int = 2000) -> Dict[str, Any]:
    """Items that each reference themselves and the list holding them.

    The first item spends the list's revisit budget and re-expands it once;
    every later item gets the circular marker for the list, so cost is linear.
    """
    items: list = []
    for i in range(size):
        item: Dict[str, Any] = {"id": i, "parent": items}
        item["self"] = item
        items.append(item)
    return {"items": items}


SENTINELS: Dict[str, Callable[[], Any]] = {
    "wide_mapping": wide_mapping,
    "deep_chain": deep_chain,
    "shared_fanout": shared_fanout,
    "cyclic_mesh": cyclic_mesh,
}

