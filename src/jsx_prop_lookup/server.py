"""
MCP Server entry point - JSX Prop Lookup.

Environment variables:
- JSX_SOURCE_PATH: Base directory for relative tool paths
- ALLOWED_ROOTS: Comma-separated directories tools may read
- RESPECT_PROJECT_BOUNDARIES: Skip files outside the nearest project root
- ANALYZER_MAX_DEPTH / ANALYZER_MAX_WORKERS: Scan depth and concurrency
- ANALYZER_CACHE_ENABLED / ANALYZER_CACHE_MAX_SIZE: Per-file cache
- ANALYZER_LOG_LEVEL: Log level (logs go to stderr)
"""

from __future__ import annotations

import argparse
import json
import os
import sys

from fastmcp import FastMCP

from . import __version__
from .config import get_config
from .log import configure_logging, get_logger
from .tools import props

logger = get_logger(__name__)

# Initialize MCP server
mcp = FastMCP(
    name="JSXPropLookup",
    version=__version__,
)


def register_tools():
    """
    Register MCP tools.

    Toolset (5 total):
    - analyze_jsx_props: Declarations + prop usages (full/compact/minimal)
    - find_prop_usage: Usages of one prop
    - get_component_props: Declared props of one component
    - find_components_without_prop: Instances missing a required prop
    - query_components: AND/OR prop criteria over instances
    """
    mcp.tool(description="Analyze JSX/TSX component declarations and prop usages in a file or directory")(
        props.analyze_jsx_props
    )

    mcp.tool(description="Find all usages of a specific prop, optionally on one component")(
        props.find_prop_usage
    )

    mcp.tool(description="Get the declared props of a component")(props.get_component_props)

    mcp.tool(description="Find JSX instances of a component that are missing a required prop")(
        props.find_components_without_prop
    )

    mcp.tool(description="Query component instances by prop values, presence or absence (AND/OR)")(
        props.query_components
    )

    logger.info("Registered 5 tools.")


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsx-prop-lookup",
        description="JSX Prop Lookup MCP Server",
    )

    parser.add_argument(
        "--source-path",
        help="Base directory for relative tool paths",
        default=None,
    )
    parser.add_argument(
        "--allowed-roots",
        help="Comma-separated directories the tools may read",
        default=None,
    )
    parser.add_argument(
        "--respect-project-boundaries",
        action="store_true",
        help="Skip files outside the nearest project root by default",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        help="Default maximum directory depth",
        default=None,
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        help="Files parsed concurrently (default: 8)",
        default=None,
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Disable the per-file analysis cache",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logging (stderr)",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print effective config and exit",
    )

    # Transport
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse"],
        default="stdio",
        help="MCP transport (default: stdio)",
    )
    parser.add_argument(
        "--mcp-host",
        default="127.0.0.1",
        help="Host for http/sse transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--mcp-port",
        type=int,
        default=8000,
        help="Port for http/sse transport (default: 8000)",
    )
    parser.add_argument(
        "--mcp-path",
        default="/mcp",
        help="Path prefix for http transport (default: /mcp)",
    )

    return parser


def _apply_cli_overrides(args: argparse.Namespace) -> None:
    """Apply CLI overrides to env vars (single-run convenience)."""
    if args.source_path:
        os.environ["JSX_SOURCE_PATH"] = args.source_path
    if args.allowed_roots:
        os.environ["ALLOWED_ROOTS"] = args.allowed_roots
    if args.respect_project_boundaries:
        os.environ["RESPECT_PROJECT_BOUNDARIES"] = "true"
    if args.max_depth is not None:
        os.environ["ANALYZER_MAX_DEPTH"] = str(args.max_depth)
    if args.max_workers is not None:
        os.environ["ANALYZER_MAX_WORKERS"] = str(args.max_workers)
    if args.no_cache:
        os.environ["ANALYZER_CACHE_ENABLED"] = "false"
    if args.verbose:
        os.environ["ANALYZER_LOG_LEVEL"] = "DEBUG"


def main(argv: list[str] | None = None):
    """Run the MCP server."""
    parser = _build_arg_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    _apply_cli_overrides(args)

    configure_logging(verbose=args.verbose, level=os.getenv("ANALYZER_LOG_LEVEL"))
    cfg = get_config()

    if args.print_config:
        print(json.dumps(cfg.to_dict(), indent=2))
        return

    if not cfg.allowed_roots:
        logger.warning("ALLOWED_ROOTS is not configured; tools may read any path.")
    if cfg.source_path:
        logger.info("Source path: %s", cfg.source_path)

    register_tools()

    if args.transport == "stdio":
        mcp.run()
    elif args.transport == "http":
        mcp.run(transport="http", host=args.mcp_host, port=args.mcp_port, path=args.mcp_path)
    else:
        mcp.run(transport="sse", host=args.mcp_host, port=args.mcp_port)


if __name__ == "__main__":
    main()
