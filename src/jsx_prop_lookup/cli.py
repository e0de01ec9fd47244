"""
One-shot command line: run a single analysis and print JSON.

    jsx-prop-analyzer analyze_jsx_props --path src --format compact
    jsx-prop-analyzer find_components_without_prop --component-name Select --required-prop width
    jsx-prop-analyzer query_components --component-name Button \\
        --criterion variant=primary --criterion disabled! --logic AND

Criterion shorthand: `name=value` (equals), `name~value` (contains),
`name?` (must exist), `name!` (must be absent), `name` (present).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from .jsx_analyzer import FORMATS, AnalyzerError, JsxAnalyzer, PropCriterion, validate_query
from .log import configure_logging

COMMANDS = (
    "analyze_jsx_props",
    "find_prop_usage",
    "get_component_props",
    "find_components_without_prop",
    "query_components",
)


def parse_criterion(text: str) -> PropCriterion:
    """Parse one `--criterion` shorthand."""
    text = text.strip()
    if text.endswith("?") and "=" not in text and "~" not in text:
        name = text[:-1]
        criterion = PropCriterion(name=name, exists=True)
    elif text.endswith("!") and "=" not in text and "~" not in text:
        name = text[:-1]
        criterion = PropCriterion(name=name, exists=False)
    else:
        eq, tilde = text.find("="), text.find("~")
        cut = min(i for i in (eq, tilde, len(text)) if i >= 0)
        name = text[:cut]
        if cut == len(text):
            criterion = PropCriterion(name=name)
        else:
            operator = "equals" if text[cut] == "=" else "contains"
            criterion = PropCriterion(name=name, value=text[cut + 1:], operator=operator)

    if not name:
        raise argparse.ArgumentTypeError(f"criterion needs a prop name: {text!r}")
    return criterion


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsx-prop-analyzer",
        description="Analyze JSX/TSX component props and print JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging (stderr)")

    sub = parser.add_subparsers(dest="command", required=True, metavar="command")

    def add_command(name: str, help_text: str) -> argparse.ArgumentParser:
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("--path", default=None, help="File or directory (default: current directory)")
        return cmd

    def add_shape_flags(cmd: argparse.ArgumentParser) -> None:
        cmd.add_argument("--format", choices=FORMATS, default="full")
        cmd.add_argument("--no-columns", action="store_true", help="Omit column numbers")
        cmd.add_argument("--pretty-paths", action="store_true", help="Add path:line:column locations")

    def add_scan_flags(cmd: argparse.ArgumentParser) -> None:
        cmd.add_argument("--respect-project-boundaries", action="store_true")
        cmd.add_argument("--max-depth", type=int, default=None)

    cmd = add_command("analyze_jsx_props", "Declarations and prop usages")
    cmd.add_argument("--component-name", default=None)
    cmd.add_argument("--prop-name", default=None)
    cmd.add_argument("--no-types", action="store_true", help="Skip <Name>Props interface types")
    add_shape_flags(cmd)
    add_scan_flags(cmd)

    cmd = add_command("find_prop_usage", "Usages of one prop")
    cmd.add_argument("--prop-name", required=True)
    cmd.add_argument("--component-name", default=None)
    add_shape_flags(cmd)

    cmd = add_command("get_component_props", "Declared props of one component")
    cmd.add_argument("--component-name", required=True)

    cmd = add_command("find_components_without_prop", "Instances missing a required prop")
    cmd.add_argument("--component-name", required=True)
    cmd.add_argument("--required-prop", required=True)
    cmd.add_argument(
        "--no-assume-spread",
        action="store_true",
        help="Do not treat {...spread} as supplying the prop",
    )

    cmd = add_command("query_components", "Instances matching prop criteria")
    cmd.add_argument("--component-name", required=True)
    cmd.add_argument(
        "--criterion",
        dest="criteria",
        action="append",
        type=parse_criterion,
        default=[],
        help="name=value | name~value | name? | name! | name (repeatable)",
    )
    cmd.add_argument("--logic", type=str.upper, choices=["AND", "OR"], default="AND")
    cmd.add_argument("--no-columns", action="store_true", help="Omit column numbers")
    cmd.add_argument("--pretty-paths", action="store_true", help="Add path:line locations")
    add_scan_flags(cmd)

    return parser


async def run_command(args: argparse.Namespace, analyzer: JsxAnalyzer | None = None) -> object:
    """Execute one parsed command and return its JSON-ready result."""
    analyzer = analyzer or JsxAnalyzer()
    if args.command == "query_components":
        # Argument errors are reported before the path is touched.
        validate_query(args.component_name, args.criteria, args.logic)
    target = Path(args.path) if args.path else Path.cwd()
    if not target.exists():
        raise ValueError(f"Path does not exist: {target}")
    target_path = str(target.resolve())

    if args.command == "analyze_jsx_props":
        return await analyzer.analyze_props(
            target_path,
            component_name=args.component_name,
            prop_name=args.prop_name,
            include_types=not args.no_types,
            format=args.format,
            include_columns=not args.no_columns,
            include_pretty_paths=args.pretty_paths,
            respect_project_boundaries=args.respect_project_boundaries or None,
            max_depth=args.max_depth,
        )

    if args.command == "find_prop_usage":
        return await analyzer.find_prop_usage(
            args.prop_name,
            target_path,
            args.component_name,
            format=args.format,
            include_columns=not args.no_columns,
            include_pretty_paths=args.pretty_paths,
        )

    if args.command == "get_component_props":
        components = await analyzer.get_component_props(args.component_name, target_path)
        return [c.to_dict() for c in components]

    if args.command == "find_components_without_prop":
        return await analyzer.find_components_without_prop(
            args.component_name,
            args.required_prop,
            target_path,
            assume_spread_has_required_prop=not args.no_assume_spread,
        )

    if args.command == "query_components":
        return await analyzer.query_components(
            args.component_name,
            args.criteria,
            directory=target_path,
            logic=args.logic,
            include_columns=not args.no_columns,
            include_pretty_paths=args.pretty_paths,
            respect_project_boundaries=args.respect_project_boundaries or None,
            max_depth=args.max_depth,
        )

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = _build_arg_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(verbose=args.verbose, level="DEBUG" if args.verbose else "WARNING")

    try:
        result = asyncio.run(run_command(args))
    except (AnalyzerError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
