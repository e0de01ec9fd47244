"""
Closed set of syntax node kinds the analyzer cares about.

Tree-sitter nodes are classified once through `kind_of`; the extractor and
the value renderer dispatch on the resulting `NodeKind`. Every node type not
listed maps to `NodeKind.OTHER`, which both dispatchers treat as a no-op.
"""

from enum import Enum
from typing import Any


class NodeKind(str, Enum):
    """Node kinds relevant to component and prop extraction."""

    # Declarations
    FUNCTION_DECLARATION = "function_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    ARROW_FUNCTION = "arrow_function"
    FUNCTION_EXPRESSION = "function_expression"
    INTERFACE_DECLARATION = "interface_declaration"
    TYPE_ALIAS = "type_alias_declaration"

    # Markup
    JSX_ELEMENT = "jsx_element"
    JSX_SELF_CLOSING = "jsx_self_closing_element"
    JSX_OPENING = "jsx_opening_element"
    JSX_ATTRIBUTE = "jsx_attribute"
    JSX_EXPRESSION = "jsx_expression"

    # Expressions
    MEMBER = "member_expression"
    SUBSCRIPT = "subscript_expression"
    CALL = "call_expression"
    PARENTHESIZED = "parenthesized_expression"
    UNARY = "unary_expression"
    WRAPPED = "wrapped_expression"
    TEMPLATE = "template_string"
    OBJECT = "object"
    ARRAY = "array"

    # Literals and names
    STRING = "string"
    NUMBER = "number"
    KEYWORD = "keyword"
    IDENTIFIER = "identifier"

    OTHER = "other"


_KIND_BY_TYPE: dict[str, NodeKind] = {
    "function_declaration": NodeKind.FUNCTION_DECLARATION,
    "generator_function_declaration": NodeKind.FUNCTION_DECLARATION,
    "variable_declarator": NodeKind.VARIABLE_DECLARATOR,
    "arrow_function": NodeKind.ARROW_FUNCTION,
    "function_expression": NodeKind.FUNCTION_EXPRESSION,
    "function": NodeKind.FUNCTION_EXPRESSION,
    "generator_function": NodeKind.FUNCTION_EXPRESSION,
    "interface_declaration": NodeKind.INTERFACE_DECLARATION,
    "type_alias_declaration": NodeKind.TYPE_ALIAS,
    "jsx_element": NodeKind.JSX_ELEMENT,
    "jsx_self_closing_element": NodeKind.JSX_SELF_CLOSING,
    "jsx_opening_element": NodeKind.JSX_OPENING,
    "jsx_attribute": NodeKind.JSX_ATTRIBUTE,
    "jsx_expression": NodeKind.JSX_EXPRESSION,
    "member_expression": NodeKind.MEMBER,
    "subscript_expression": NodeKind.SUBSCRIPT,
    "call_expression": NodeKind.CALL,
    "parenthesized_expression": NodeKind.PARENTHESIZED,
    "unary_expression": NodeKind.UNARY,
    # Type-only wrappers render as their operand
    "non_null_expression": NodeKind.WRAPPED,
    "as_expression": NodeKind.WRAPPED,
    "satisfies_expression": NodeKind.WRAPPED,
    "template_string": NodeKind.TEMPLATE,
    "object": NodeKind.OBJECT,
    "array": NodeKind.ARRAY,
    "string": NodeKind.STRING,
    "number": NodeKind.NUMBER,
    "true": NodeKind.KEYWORD,
    "false": NodeKind.KEYWORD,
    "null": NodeKind.KEYWORD,
    "undefined": NodeKind.KEYWORD,
    "this": NodeKind.KEYWORD,
    "identifier": NodeKind.IDENTIFIER,
    "shorthand_property_identifier": NodeKind.IDENTIFIER,
}

FUNCTION_KINDS = frozenset({
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.ARROW_FUNCTION,
    NodeKind.FUNCTION_EXPRESSION,
})


def kind_of(node: Any) -> NodeKind:
    """Classify a tree-sitter node."""
    if node is None:
        return NodeKind.OTHER
    return _KIND_BY_TYPE.get(node.type, NodeKind.OTHER)


def node_text(node: Any) -> str:
    """Decoded source text of a node."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def location(node: Any) -> tuple[int, int]:
    """1-based line and 0-based column of a node's start."""
    row, column = node.start_point
    return row + 1, column


def first_named_child(node: Any, *types: str) -> Any | None:
    """First named child, optionally restricted to the given node types."""
    for child in node.named_children:
        if not types or child.type in types:
            return child
    return None
