"""
Tree-sitter query patterns for TypeScript/TSX analysis.

Node type names are shared by the TypeScript and TSX grammars, so one
pattern text compiles against either language.
"""

from tree_sitter import Language, Query

# ============================================================================
# Common Query Patterns for TSX Parsing
# ============================================================================

QUERY_PATTERNS = {
    # Interfaces that may describe a component's props
    "INTERFACE": """
        (interface_declaration
            name: (type_identifier) @type_name
            body: (_) @type_body) @declaration
    """,

    # Type aliases that may describe a component's props
    "TYPE_ALIAS": """
        (type_alias_declaration
            name: (type_identifier) @type_name
            value: (_) @type_body) @declaration
    """,
}


_compiled: dict[tuple[int, str], Query] = {}


def compile_query(language: Language, name: str) -> Query:
    """Compile (once per language) a named pattern from QUERY_PATTERNS."""
    key = (id(language), name)
    query = _compiled.get(key)
    if query is None:
        query = Query(language, QUERY_PATTERNS[name])
        _compiled[key] = query
    return query
