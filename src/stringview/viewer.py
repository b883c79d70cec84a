"""Collapsible HTML tree viewer for stringify() output.

The viewer consumes the JSON text written by the stringifier (or the data
parsed from it) and renders a self-contained HTML fragment: nested
``<details>`` elements for containers, type and count labels, and key paths
for hover/copy. Key paths use the same grammar as the stringifier's
diagnostics (``a[0].b``), rooted at the top-level keys.
"""

import datetime
import html
import json
import re
import uuid
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from stringview.codes import (
    CIRCULAR_PREFIX,
    FUNCTION_PREFIX,
    MISSING_MARKER,
    SYMBOL_PREFIX,
    TEMPLATE_KEY,
)
from stringview.contracts import StringifyOptions, ViewerOptions
from stringview.kernel.paths import build_path
from stringview.kernel.redaction import RedactionRuleSet
from stringview.kernel.stringify import resolve_options, stringify

_ISO_TIMESTAMP = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:\d{2})?$"
)


@dataclass
class ViewNode:
    """One rendered node: a key/value pair, or the root when key is None."""
    key: Optional[Union[str, int]]
    path: str
    type: str
    count: Optional[int] = None
    value: Any = None  # scalars only; containers carry children
    children: List["ViewNode"] = field(default_factory=list)
    redacted: bool = False

    @property
    def is_container(self) -> bool:
        return self.type in ("object", "array")


def generate_id() -> str:
    """Unique DOM id for a viewer container."""
    return f"json-viewer-{uuid.uuid4().hex[:9]}"


def _looks_like_timestamp(text: str) -> bool:
    if not _ISO_TIMESTAMP.match(text):
        return False
    try:
        datetime.datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def display_type(value: Any) -> str:
    """Type label shown for a parsed JSON value.

    Marker strings written by the stringifier get their own labels
    (missing, function, circular, symbol, date); everything else maps to the
    plain JSON type.
    """
    if value is None:
        return "null"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        if value == MISSING_MARKER:
            return "missing"
        if value.startswith(FUNCTION_PREFIX) and value.endswith("]"):
            return "function"
        if value.startswith(CIRCULAR_PREFIX):
            return "circular"
        if value.startswith(SYMBOL_PREFIX) and value.endswith("]"):
            return "symbol"
        if _looks_like_timestamp(value):
            return "date"
        return "string"
    return type(value).__name__


def build_tree(
    data: Any,
    rules: Optional[RedactionRuleSet] = None,
    key: Optional[Union[str, int]] = None,
    path: str = "",
) -> ViewNode:
    """Walk parsed JSON data into ViewNodes.

    Values under a key matching one of the rules are replaced by the rule's
    text and marked redacted; the viewer shows them as opaque strings.
    """
    if rules is not None and isinstance(key, str):
        replacement = rules.resolve(key)
        if replacement is not None:
            return ViewNode(key=key, path=path, type="string", value=replacement, redacted=True)

    node_type = display_type(data)
    if isinstance(data, list):
        node = ViewNode(key=key, path=path, type=node_type, count=len(data))
        for index, item in enumerate(data):
            node.children.append(build_tree(item, rules, index, build_path(path, index, True)))
        return node
    if isinstance(data, dict):
        node = ViewNode(key=key, path=path, type=node_type, count=len(data))
        for name, item in data.items():
            node.children.append(build_tree(item, rules, name, build_path(path, name, False)))
        return node
    return ViewNode(key=key, path=path, type=node_type, value=data)


def _viewer_rules(options: ViewerOptions) -> RedactionRuleSet:
    rules = RedactionRuleSet(options.redaction_rules)
    if options.show_template:
        rules = rules.without(TEMPLATE_KEY)
    return rules


def _coerce_options(options: Union[ViewerOptions, Mapping[str, Any], None]) -> ViewerOptions:
    if options is None:
        return ViewerOptions()
    if isinstance(options, ViewerOptions):
        return options
    return ViewerOptions(**options)


def render_viewer(
    value: Any,
    options: Union[ViewerOptions, Mapping[str, Any], None] = None,
    *,
    stringify_options: Union[StringifyOptions, Mapping[str, Any], None] = None,
) -> str:
    """Stringify value and render it as an HTML viewer fragment.

    The viewer's redaction rules are appended to any rules already present
    in stringify_options. show_template drops the template rule from both.
    """
    opts = _coerce_options(options)
    base = resolve_options(stringify_options)
    rules = RedactionRuleSet(list(base.redaction_rules) + list(opts.redaction_rules))
    if opts.show_template:
        rules = rules.without(TEMPLATE_KEY)
    merged = resolve_options(base, redaction_rules=rules.as_rules())
    return _render(stringify(value, merged), opts, rules)


def render_json_text(
    text: str,
    options: Union[ViewerOptions, Mapping[str, Any], None] = None,
) -> str:
    """Render JSON text (typically stringify() output) as an HTML viewer fragment."""
    opts = _coerce_options(options)
    return _render(text, opts, _viewer_rules(opts))


def render_page(fragment: str, title: Optional[str] = None) -> str:
    """Wrap a viewer fragment in a minimal standalone HTML document."""
    heading = html.escape(title or "JSON viewer")
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        f"<title>{heading}</title>\n</head>\n<body>\n{fragment}\n</body>\n</html>\n"
    )


def _render(text: str, opts: ViewerOptions, rules: RedactionRuleSet) -> str:
    tree = build_tree(json.loads(text), rules)
    container_id = generate_id()

    classes = ["json-viewer-container"]
    if opts.show_types:
        classes.append("jv-show-types")
    if opts.show_counts:
        classes.append("jv-show-counts")
    if opts.paths_on_hover:
        classes.append("jv-paths-on-hover")

    parts = [
        f"<style>{_STYLES}</style>",
        f'<div id="{container_id}" class="{" ".join(classes)}" data-json="{html.escape(text)}">',
    ]
    if opts.show_controls:
        parts.append(_render_controls(opts))
    if opts.title:
        parts.append(f'<div class="json-viewer-title">{html.escape(opts.title)}</div>')
    parts.append(_render_node(tree, 0, opts))
    parts.append("</div>")
    parts.append(f"<script>{_SCRIPT % json.dumps(container_id)}</script>")
    return "".join(parts)


def _render_controls(opts: ViewerOptions) -> str:
    controls = [
        ("jv-show-types", "Show Types", opts.show_types),
        ("jv-show-counts", "Show Counts", opts.show_counts),
        ("jv-paths-on-hover", "Show Paths on Hover", opts.paths_on_hover),
    ]
    labels = []
    for css_class, label, checked in controls:
        state = " checked" if checked else ""
        labels.append(
            f'<label class="json-viewer-control">'
            f'<input type="checkbox" data-toggle="{css_class}"{state}>{label}</label>'
        )
    return f'<div class="json-viewer-controls">{"".join(labels)}</div>'


def _render_key(node: ViewNode) -> str:
    if node.key is None:
        return ""
    path = html.escape(node.path)
    key = html.escape(str(node.key))
    return (
        f'<span class="json-viewer-key" data-path="{path}">{key}: </span>'
        f'<span class="json-viewer-key-panel">'
        f'<span class="json-viewer-key-path">{path}</span>'
        f'<button type="button" class="json-viewer-copy-btn" data-path="{path}">Copy path</button>'
        f"</span>"
    )


def _render_labels(node: ViewNode) -> str:
    if node.redacted or node.type == "missing":
        return ""
    labels = f'<span class="json-viewer-type">{html.escape(node.type)}</span>'
    if node.count is not None:
        labels += f'<span class="json-viewer-count">({node.count})</span>'
    return labels


def _value_text(node: ViewNode) -> str:
    if node.type == "missing":
        return "missing"
    if node.type in ("function", "circular", "symbol", "date"):
        return node.value
    return json.dumps(node.value, ensure_ascii=False)


def _render_node(node: ViewNode, depth: int, opts: ViewerOptions) -> str:
    style = f' style="margin-left:{depth * opts.indent}px"' if depth else ""
    header = _render_key(node) + _render_labels(node)

    if node.is_container and node.children:
        state = " open" if opts.default_expanded or depth == 0 else ""
        children = "".join(_render_node(child, depth + 1, opts) for child in node.children)
        return (
            f'<details class="json-viewer-node"{style}{state}>'
            f'<summary class="json-viewer-header">{header}</summary>'
            f'<div class="json-viewer-content">{children}</div>'
            f"</details>"
        )

    if node.is_container:
        body = "{}" if node.type == "object" else "[]"
        value = f'<span class="json-viewer-value">{body}</span>'
    else:
        value = (
            f'<span class="json-viewer-value json-viewer-{html.escape(node.type)}">'
            f"{html.escape(_value_text(node))}</span>"
        )
    return (
        f'<div class="json-viewer-node"{style}>'
        f'<div class="json-viewer-header">{header}{value}</div>'
        f"</div>"
    )


_STYLES = """
.json-viewer-container{font-family:monospace;line-height:1.4;color:#333;background:#fff;padding:16px;border:1px solid #ddd;border-radius:4px;margin:8px 0}
.json-viewer-title{font-weight:bold;font-size:1.1em;margin-bottom:8px}
.json-viewer-controls{margin-bottom:12px;display:flex;gap:12px}
.json-viewer-control{display:flex;align-items:center;gap:4px;cursor:pointer;user-select:none;color:#666}
.json-viewer-header{min-height:14px}
.json-viewer-key{color:#0066cc;cursor:pointer}
.json-viewer-type,.json-viewer-count{display:none;color:#666;font-size:.8em;margin:0 4px}
.jv-show-types .json-viewer-type,.jv-show-counts .json-viewer-count{display:inline}
.json-viewer-key-panel{display:none;margin-left:6px;padding:0 6px;background:#f9f9f9;border:1px solid #ccc;border-radius:4px;font-size:.88em}
.jv-paths-on-hover .json-viewer-header:hover>.json-viewer-key-panel{display:inline-flex;gap:6px}
.json-viewer-copy-btn{border:none;background:none;color:#0056b3;cursor:pointer;padding:0}
.json-viewer-string{color:#008000}
.json-viewer-date{color:#d63384}
.json-viewer-circular{color:#dc3545;font-style:italic}
.json-viewer-number,.json-viewer-boolean,.json-viewer-null,.json-viewer-missing,.json-viewer-function,.json-viewer-symbol{color:#6c757d;font-style:italic}
"""

# Controls toggle container classes; Alt-click on a summary toggles the whole subtree.
_SCRIPT = """
(function(){
  var root = document.getElementById(%s);
  if (!root) return;
  root.querySelectorAll('input[data-toggle]').forEach(function(box){
    box.addEventListener('change', function(){
      root.classList.toggle(box.getAttribute('data-toggle'), box.checked);
    });
  });
  root.querySelectorAll('.json-viewer-copy-btn').forEach(function(btn){
    btn.addEventListener('click', function(e){
      e.preventDefault(); e.stopPropagation();
      if (navigator.clipboard) navigator.clipboard.writeText(btn.getAttribute('data-path'));
    });
  });
  root.querySelectorAll('summary').forEach(function(summary){
    summary.addEventListener('click', function(e){
      if (!e.altKey) return;
      e.preventDefault();
      var details = summary.parentElement;
      var open = !details.open;
      details.open = open;
      details.querySelectorAll('details').forEach(function(d){ d.open = open; });
    });
  });
})();
"""
