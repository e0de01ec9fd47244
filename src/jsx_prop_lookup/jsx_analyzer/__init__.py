"""
JSX/TSX Component Analyzer.

Uses tree-sitter to parse JavaScript/TypeScript sources and answer questions
about React-style components and their props.

Key Components:
- JsxAnalyzer: Main analyzer class
- get_analyzer(): Get the global analyzer instance
- resolve_files(): Expand an analysis root into candidate files
- extract_components(): Declarations, prop usages and JSX sites of one file
- find_missing_props() / build_matches(): Audits and criteria queries
"""

from .analyzer import (
    JsxAnalyzer,
    analyze_file,
    get_analyzer,
    set_analyzer,
)
from .criteria import (
    build_matches,
    evaluate_criteria,
    js_string,
    validate_query,
)
from .errors import (
    AnalyzerError,
    CriteriaError,
    ParseError,
    PathAccessError,
)
from .extractor import (
    ExtractOptions,
    extract_components,
)
from .files import (
    EXCLUDED_DIRS,
    SUPPORTED_EXTENSIONS,
    resolve_files,
)
from .missing import find_missing_props
from .models import (
    REST_PROP,
    SPREAD_PROP,
    AnalysisResult,
    ComponentDeclaration,
    FileAnalysis,
    MissingPropReport,
    MissingPropUsage,
    PropCriterion,
    PropsInterface,
    PropUsage,
    QueryMatch,
    UsageSite,
)
from .parser import parse_source
from .queries import QUERY_PATTERNS
from .shaping import (
    FORMATS,
    check_format,
    pretty_location,
    shape_result,
)

__all__ = [
    # Analyzer
    "JsxAnalyzer",
    "analyze_file",
    "get_analyzer",
    "set_analyzer",
    # Pipeline stages
    "resolve_files",
    "parse_source",
    "extract_components",
    "ExtractOptions",
    "find_missing_props",
    "validate_query",
    "evaluate_criteria",
    "build_matches",
    "js_string",
    "shape_result",
    "check_format",
    "pretty_location",
    # Data classes
    "PropUsage",
    "ComponentDeclaration",
    "UsageSite",
    "PropsInterface",
    "FileAnalysis",
    "AnalysisResult",
    "PropCriterion",
    "QueryMatch",
    "MissingPropUsage",
    "MissingPropReport",
    # Errors
    "AnalyzerError",
    "PathAccessError",
    "ParseError",
    "CriteriaError",
    # Constants
    "REST_PROP",
    "SPREAD_PROP",
    "SUPPORTED_EXTENSIONS",
    "EXCLUDED_DIRS",
    "FORMATS",
    # Queries
    "QUERY_PATTERNS",
]
