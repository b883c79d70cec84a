"""stringview CLI: serialize JSON documents and render them as viewer pages."""

import argparse
import json
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Any, List, Union

logger = logging.getLogger("stringview.cli")


def _parse_redactions(values: List[str]) -> List[Union[str, dict]]:
    """Turn --redact KEY[=MESSAGE] arguments into redaction rule entries."""
    entries: List[Union[str, dict]] = []
    for raw in values or []:
        key, sep, message = raw.partition("=")
        if not key:
            raise ValueError(f"Invalid --redact value '{raw}': key must not be empty")
        entries.append({"key": key, "replacement": message} if sep else key)
    return entries


def _read_input(source: str) -> Any:
    """Load a JSON document from a path, or from stdin when source is '-'."""
    if source == "-":
        return json.loads(sys.stdin.read())
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def main():
    """Main CLI entry point for stringview commands."""
    try:
        stringview_version = get_version("stringview")
    except PackageNotFoundError:
        stringview_version = "dev"

    parser = argparse.ArgumentParser(
        prog="stringview",
        description="stringview: safe JSON serialization and a collapsible tree viewer"
    )
    parser.add_argument("--version", action="version", version=f"stringview {stringview_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--trace",
        action="store_true",
        help="Write debug diagnostics to stderr."
    )
    parent_parser.add_argument(
        "--redact",
        action="append",
        default=[],
        metavar="KEY[=MESSAGE]",
        help="Replace the value of KEY (repeatable); MESSAGE defaults to a generic note"
    )
    parent_parser.add_argument(
        "--revisit-budget",
        type=int,
        default=1,
        help="Extra expansions of a circular container before a marker is written"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # dump command
    dump_parser = subparsers.add_parser(
        "dump",
        help="Serialize a JSON document to compact or indented JSON",
        parents=[parent_parser]
    )
    dump_parser.add_argument(
        "input",
        help="Path to input JSON ('-' for stdin)"
    )
    dump_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output file (prints to stdout when omitted)"
    )
    dump_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent the written file for readability"
    )
    dump_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Spaces per level with --pretty"
    )
    dump_parser.add_argument(
        "--timestamp",
        action="store_true",
        help="Add an epoch-millisecond suffix to the output file name"
    )
    dump_parser.add_argument(
        "--no-settle",
        action="store_true",
        help="Leave 'needsCheck' entries untouched"
    )

    # view command
    view_parser = subparsers.add_parser(
        "view",
        help="Render a JSON document as a standalone HTML viewer page",
        parents=[parent_parser]
    )
    view_parser.add_argument(
        "input",
        help="Path to input JSON ('-' for stdin)"
    )
    view_parser.add_argument(
        "--out",
        type=Path,
        required=True,
        help="Output HTML file"
    )
    view_parser.add_argument("--title", default=None, help="Title shown above the tree")
    view_parser.add_argument("--show-types", action="store_true", help="Show type labels")
    view_parser.add_argument("--show-counts", action="store_true", help="Show item counts")
    view_parser.add_argument("--expanded", action="store_true", help="Expand all nodes")
    view_parser.add_argument(
        "--paths-on-hover",
        action="store_true",
        help="Show key paths (with copy button) on hover"
    )
    view_parser.add_argument(
        "--show-template",
        action="store_true",
        help="Show 'template' values instead of redacting them"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    from ._internal.logging_setup import setup_cli_logging
    setup_cli_logging(trace=args.trace, quiet=args.quiet)

    if args.command == "dump":
        try:
            from .api import stringify
            from .codes import DEFAULT_SETTLE_FLAG
            from ._internal.io.persist import timestamped_path, write_json_text

            data = _read_input(args.input)
            text = stringify(
                data,
                revisit_budget=args.revisit_budget,
                redaction_rules=_parse_redactions(args.redact),
                settle_flag=None if args.no_settle else DEFAULT_SETTLE_FLAG,
            )

            if args.out is None:
                print(text)
                return

            target = timestamped_path(args.out) if args.timestamp else args.out
            written = write_json_text(text, target, pretty=args.pretty, indent=args.indent)
            logger.debug("dump input=%s out=%s chars=%d", args.input, target, len(written))
            if not args.quiet:
                print("[OK] Serialization complete")
                print(f"  Output: {target}")
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    elif args.command == "view":
        try:
            from .contracts import StringifyOptions, ViewerOptions
            from .viewer import render_page, render_viewer

            data = _read_input(args.input)
            viewer_options = ViewerOptions(
                title=args.title,
                show_types=args.show_types,
                show_counts=args.show_counts,
                default_expanded=args.expanded,
                paths_on_hover=args.paths_on_hover,
                show_template=args.show_template,
            )
            stringify_options = StringifyOptions(
                revisit_budget=args.revisit_budget,
                redaction_rules=_parse_redactions(args.redact),
            )
            fragment = render_viewer(data, viewer_options, stringify_options=stringify_options)

            out_path = Path(args.out)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(render_page(fragment, args.title), encoding="utf-8")
            if not args.quiet:
                print("[OK] Viewer page written")
                print(f"  Page: {out_path}")
        except (FileNotFoundError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
