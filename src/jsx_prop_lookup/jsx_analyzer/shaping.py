"""
Result shaping: full, file-grouped (compact) and prop-grouped (minimal).

All shapers are pure functions of the canonical AnalysisResult.
"""

from .models import AnalysisResult, ResponseFormat

FORMATS: tuple[str, ...] = ("full", "compact", "minimal")


def check_format(format: str) -> None:
    """Raise ValueError naming the `format` field for an unknown response format."""
    if format not in FORMATS:
        raise ValueError(f"format must be one of {', '.join(FORMATS)} (got {format!r})")


def pretty_location(path: str, line: int | None = None, column: int | None = None) -> str:
    """
    Editor-friendly location `path[:line[:column]]` with forward slashes.

    Args:
        path: File path (any host convention)
        line: Optional 1-based line
        column: Optional column, only used together with a line

    Returns:
        Location string
    """
    normalized = path.replace("\\", "/")
    if line is None:
        return normalized
    if column is None:
        return f"{normalized}:{line}"
    return f"{normalized}:{line}:{column}"


def to_full(
    result: AnalysisResult,
    *,
    include_columns: bool = True,
    include_pretty_paths: bool = False,
) -> dict:
    """Canonical representation: every declaration and every prop usage."""
    components = []
    for comp in result.components:
        data = comp.to_dict(include_columns)
        if include_pretty_paths:
            data["pretty_path"] = pretty_location(comp.file)
        components.append(data)

    usages = []
    for usage in result.prop_usages:
        data = usage.to_dict(include_columns)
        if include_pretty_paths:
            data["pretty_path"] = pretty_location(
                usage.file, usage.line, usage.column if include_columns else None
            )
        usages.append(data)

    return {
        "summary": {
            "total_files": result.files_analyzed,
            "total_components": len(result.components),
            "total_props": len(result.prop_usages),
            "skipped_files": result.files_skipped,
        },
        "components": components,
        "prop_usages": usages,
    }


def to_file_grouped(
    result: AnalysisResult,
    *,
    include_columns: bool = True,
    include_pretty_paths: bool = False,
) -> dict:
    """
    Group declarations and usages by file.

    Each file lists its components as `{name, props, interface?}` and its
    usages as `{name, line, col?, value?, spread?}`.
    """
    files: dict[str, dict] = {}

    def entry(path: str) -> dict:
        if path not in files:
            files[path] = {"components": [], "usages": []}
            if include_pretty_paths:
                files[path]["pretty_path"] = pretty_location(path)
        return files[path]

    for comp in result.components:
        summary: dict = {"name": comp.component_name, "props": comp.prop_names}
        if comp.props_interface:
            summary["interface"] = comp.props_interface
        entry(comp.file)["components"].append(summary)

    for usage in result.prop_usages:
        concise: dict = {"name": usage.prop_name, "line": usage.line}
        if include_columns:
            concise["col"] = usage.column
        if usage.value:
            concise["value"] = usage.value
        if usage.is_spread:
            concise["spread"] = True
        entry(usage.file)["usages"].append(concise)

    return {
        "summary": {
            "files": result.files_analyzed,
            "components": len(result.components),
            "props": len(result.prop_usages),
        },
        "files": files,
    }


def to_input_grouped(
    result: AnalysisResult,
    *,
    include_columns: bool = True,
    include_pretty_paths: bool = False,
) -> dict:
    """Group usages by prop name; each entry only says where the prop is used."""
    props: dict[str, list[dict]] = {}

    for usage in result.prop_usages:
        minimal: dict = {
            "component": usage.component_name,
            "file": usage.file,
            "line": usage.line,
        }
        if include_pretty_paths:
            minimal["pretty_path"] = pretty_location(
                usage.file, usage.line, usage.column if include_columns else None
            )
        props.setdefault(usage.prop_name, []).append(minimal)

    return {"props": props}


def shape_result(
    result: AnalysisResult,
    format: ResponseFormat = "full",
    *,
    include_columns: bool = True,
    include_pretty_paths: bool = False,
) -> dict:
    """Dispatch to the shaper for `format`.

    Raises:
        ValueError: Unknown format
    """
    check_format(format)
    if format == "compact":
        return to_file_grouped(
            result, include_columns=include_columns, include_pretty_paths=include_pretty_paths
        )
    if format == "minimal":
        return to_input_grouped(
            result, include_columns=include_columns, include_pretty_paths=include_pretty_paths
        )
    return to_full(result, include_columns=include_columns, include_pretty_paths=include_pretty_paths)
