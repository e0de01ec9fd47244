"""
Component prop analysis tools.

Note on FastMCP exposure: tools are registered with `mcp.tool(description=...)`,
so the docstrings below are for maintainers; the client sees the description
and the `Annotated` parameter notes.

Every tool returns a dict carrying `ok`. Failures (bad arguments, paths
outside the allowed roots, unreadable roots) come back as
`{"ok": False, "error", "detail"}` instead of raising through the transport.
"""

from __future__ import annotations

from typing import Annotated, Literal

from ..config import get_config
from ..jsx_analyzer import AnalyzerError, get_analyzer, validate_query
from ..log import get_logger

logger = get_logger(__name__)

FormatType = Literal["full", "compact", "minimal"]
LogicType = Literal["AND", "OR"]


def _tool_error(tool: str, e: Exception) -> dict:
    """
    Build a structured error payload.

    Args:
        tool: Tool name.
        e: Exception.

    Returns:
        A dict with ok/error/detail.
    """
    logger.debug("%s failed: %s", tool, e)
    return {
        "ok": False,
        "error": f"{tool} failed",
        "detail": str(e),
    }


def _resolve_path(path: str | None, *, argument: str = "path") -> str:
    """
    Validate a caller-supplied path.

    Relative paths resolve against JSX_SOURCE_PATH when configured. The result
    must exist and lie inside ALLOWED_ROOTS when those are set.

    Raises:
        ValueError: Empty, nonexistent, or outside the allowed roots
    """
    if path is None or not str(path).strip():
        raise ValueError(f"{argument} is required and must be a non-empty string")

    config = get_config()
    resolved = config.resolve_path(str(path))
    if not resolved.exists():
        raise ValueError(f"Path does not exist: {path}")
    if not config.is_allowed(resolved):
        raise ValueError(
            f"Path is outside allowed roots: {path} (allowed: {', '.join(config.allowed_roots)})"
        )
    return str(resolved)


def _require(value: str | None, argument: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"{argument} is required and must be a non-empty string")
    return value


# ============================================================================
# Analysis Tools
# ============================================================================


async def analyze_jsx_props(
    path: Annotated[str, "File or directory to analyze (.js/.jsx/.ts/.tsx)"],
    component_name: Annotated[
        str | None, "Only this component; dotted JSX names match by full or last segment"
    ] = None,
    prop_name: Annotated[str | None, "Only usages of this prop"] = None,
    include_types: Annotated[bool, "Attach types from <Component>Props interfaces"] = True,
    format: Annotated[
        FormatType,
        "'full' (default) | 'compact' (grouped by file) | 'minimal' (grouped by prop)",
    ] = "full",
    include_columns: Annotated[bool, "Include column numbers"] = True,
    include_pretty_paths: Annotated[bool, "Add editor-friendly path:line:column locations"] = False,
    respect_project_boundaries: Annotated[
        bool | None, "Skip files outside the nearest project root (default: server setting)"
    ] = None,
    max_depth: Annotated[int | None, "Maximum directory depth (default: server setting)"] = None,
) -> dict:
    """
    Analyze component declarations and prop usages.

    Returns:
        `{"ok": True, ...}` plus the shaped result:
        - full: summary / components / prop_usages
        - compact: summary / files
        - minimal: props
    """
    try:
        resolved = _resolve_path(path)
        result = await get_analyzer().analyze_props(
            resolved,
            component_name=component_name,
            prop_name=prop_name,
            include_types=include_types,
            format=format,
            include_columns=include_columns,
            include_pretty_paths=include_pretty_paths,
            respect_project_boundaries=respect_project_boundaries,
            max_depth=max_depth,
        )
    except (AnalyzerError, ValueError, OSError) as e:
        return _tool_error("analyze_jsx_props", e)
    return {"ok": True, **result}


async def find_prop_usage(
    prop_name: Annotated[str, "Prop to look for"],
    directory: Annotated[str, "Directory (or file) to search"] = ".",
    component_name: Annotated[str | None, "Only usages on this component"] = None,
    format: Annotated[FormatType, "'full' (default) | 'compact' | 'minimal'"] = "full",
    include_columns: Annotated[bool, "Include column numbers"] = True,
    include_pretty_paths: Annotated[bool, "Add editor-friendly path:line:column locations"] = False,
) -> dict:
    """Find every usage of one prop across the tree."""
    try:
        _require(prop_name, "prop_name")
        resolved = _resolve_path(directory, argument="directory")
        result = await get_analyzer().find_prop_usage(
            prop_name,
            resolved,
            component_name,
            format=format,
            include_columns=include_columns,
            include_pretty_paths=include_pretty_paths,
        )
    except (AnalyzerError, ValueError, OSError) as e:
        return _tool_error("find_prop_usage", e)
    return {"ok": True, "prop_name": prop_name, **result}


async def get_component_props(
    component_name: Annotated[str, "Component whose declared props to list"],
    directory: Annotated[str, "Directory (or file) to search"] = ".",
) -> dict:
    """
    List the declarations of one component with the props each declares.

    Returns:
        A dict:
        - ok: bool
        - component_name: str
        - components: list[dict]
        - count: int
    """
    try:
        _require(component_name, "component_name")
        resolved = _resolve_path(directory, argument="directory")
        components = await get_analyzer().get_component_props(component_name, resolved)
    except (AnalyzerError, ValueError, OSError) as e:
        return _tool_error("get_component_props", e)
    return {
        "ok": True,
        "component_name": component_name,
        "components": [c.to_dict() for c in components],
        "count": len(components),
    }


async def find_components_without_prop(
    component_name: Annotated[str, "Component to audit (full dotted name or last segment)"],
    required_prop: Annotated[str, "Prop every instance should pass"],
    directory: Annotated[str, "Directory (or file) to search"] = ".",
    assume_spread_has_required_prop: Annotated[
        bool, "Treat {...spread} attributes as supplying the prop"
    ] = True,
) -> dict:
    """
    Find JSX instances of a component that do not pass a required prop.

    Returns:
        A dict:
        - ok: bool
        - component_name / required_prop: str
        - missing_prop_usages: list[dict]
        - summary: {total_instances, missing_prop_count, missing_prop_percentage}
    """
    try:
        _require(component_name, "component_name")
        _require(required_prop, "required_prop")
        resolved = _resolve_path(directory, argument="directory")
        result = await get_analyzer().find_components_without_prop(
            component_name,
            required_prop,
            resolved,
            assume_spread_has_required_prop=assume_spread_has_required_prop,
        )
    except (AnalyzerError, ValueError, OSError) as e:
        return _tool_error("find_components_without_prop", e)
    return {"ok": True, **result}


async def query_components(
    component_name: Annotated[str, "Component to query"],
    prop_criteria: Annotated[
        list[dict],
        (
            "Criteria objects: {name, value?, operator?: 'equals'|'contains', exists?: bool}. "
            "'exists' wins over 'value'; a criterion with only a name checks presence."
        ),
    ],
    directory: Annotated[str, "Directory (or file) to search"] = ".",
    logic: Annotated[LogicType, "'AND' (all criteria) | 'OR' (any criterion)"] = "AND",
    include_columns: Annotated[bool, "Include column numbers"] = True,
    include_pretty_paths: Annotated[bool, "Add editor-friendly path:line locations"] = False,
    respect_project_boundaries: Annotated[
        bool | None, "Skip files outside the nearest project root (default: server setting)"
    ] = None,
    max_depth: Annotated[int | None, "Maximum directory depth (default: server setting)"] = None,
) -> dict:
    """
    Query component instances (declarations and JSX sites) by prop criteria.

    Returns:
        A dict:
        - ok: bool
        - query: {component_name, prop_criteria, logic}
        - matches: list[dict]
        - summary: {total_matches, criteria_matched, files_scanned}
    """
    try:
        # Argument errors are reported before the path is touched.
        validate_query(component_name, prop_criteria, logic)
        resolved = _resolve_path(directory, argument="directory")
        result = await get_analyzer().query_components(
            component_name,
            prop_criteria,
            directory=resolved,
            logic=logic,
            include_columns=include_columns,
            include_pretty_paths=include_pretty_paths,
            respect_project_boundaries=respect_project_boundaries,
            max_depth=max_depth,
        )
    except (AnalyzerError, ValueError, OSError) as e:
        return _tool_error("query_components", e)
    return {"ok": True, **result}
