"""
Best-effort rendering of JSX attribute values as text.

`render_expression` is total over `NodeKind`: shapes it does not know render
as None ("value unknown"), which callers treat as a normal outcome.
"""

import re
from typing import Any, Callable

from .nodes import NodeKind, first_named_child, kind_of, node_text

FUNCTION_PLACEHOLDER = "() => …"
OBJECT_PLACEHOLDER = "{...}"
ARRAY_PLACEHOLDER = "[...]"

_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_LINE_CONTINUATIONS = {"\n", "\r\n", "\r", "\u2028", "\u2029"}
_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")


def _cook_escape(match: re.Match) -> str:
    escape = match.group(1)
    if len(escape) > 1 and escape[0] in "ux":
        digits = escape[2:-1] if escape.startswith("u{") else escape[1:]
        try:
            return chr(int(digits, 16))
        except (ValueError, OverflowError):
            return escape
    if escape in _LINE_CONTINUATIONS:
        return ""
    return _SIMPLE_ESCAPES.get(escape, escape)


def cook_template_chunk(text: str) -> str:
    """Decode backslash escapes in a template literal chunk (`\\t`, `\\u{1F600}`, `\\``)."""
    return _ESCAPE_RE.sub(_cook_escape, text)


def _render_string(node: Any) -> str | None:
    text = node_text(node)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text


def _render_text(node: Any) -> str | None:
    return node_text(node)


_CHAIN_KINDS = frozenset({NodeKind.MEMBER, NodeKind.SUBSCRIPT, NodeKind.CALL})


def _render_chain(node: Any) -> str | None:
    """Render a member/subscript/call chain base first, one link at a time.

    `a.b[c].d()` nests one node per link, so the chain is unrolled in a loop
    rather than by recursion.
    """
    links: list[Any] = []
    while kind_of(node) in _CHAIN_KINDS:
        links.append(node)
        field = "function" if kind_of(node) is NodeKind.CALL else "object"
        node = node.child_by_field_name(field)

    text = render_expression(node)
    if text is None:
        return None
    for link in reversed(links):
        kind = kind_of(link)
        if kind is NodeKind.MEMBER:
            prop = link.child_by_field_name("property")
            if prop is None:
                return None
            text = f"{text}.{node_text(prop)}"
        elif kind is NodeKind.SUBSCRIPT:
            index = render_expression(link.child_by_field_name("index"))
            if index is None:
                return None
            text = f"{text}[{index}]"
        else:
            text = f"{text}()"
    return text


def _render_function(node: Any) -> str | None:
    return FUNCTION_PLACEHOLDER


def _render_object(node: Any) -> str | None:
    return OBJECT_PLACEHOLDER


def _render_array(node: Any) -> str | None:
    return ARRAY_PLACEHOLDER


def _render_inner(node: Any) -> str | None:
    inner = node.child_by_field_name("expression")
    if inner is None:
        inner = first_named_child(node)
    return render_expression(inner)


def _render_unary(node: Any) -> str | None:
    operator = node.child_by_field_name("operator")
    argument = render_expression(node.child_by_field_name("argument"))
    if operator is None or argument is None:
        return None
    op = node_text(operator)
    separator = " " if op.isalpha() else ""
    return f"{op}{separator}{argument}"


def _render_template(node: Any) -> str | None:
    """Fold a template literal into one string.

    Literal chunks are sliced from the source between substitutions so the
    result does not depend on how the grammar splits string fragments, then
    their escapes are cooked.
    """
    raw = node.text or b""
    base = node.start_byte

    def chunk(start: int, end: int) -> str:
        return cook_template_chunk(raw[start - base:end - base].decode("utf-8", errors="replace"))

    pos = base + 1  # skip opening backtick
    parts: list[str] = []
    for child in node.named_children:
        if child.type != "template_substitution":
            continue
        parts.append(chunk(pos, child.start_byte))
        rendered = render_expression(first_named_child(child))
        if rendered is None:
            return None
        parts.append(rendered)
        pos = child.end_byte
    parts.append(chunk(pos, max(base + len(raw) - 1, pos)))
    return "".join(parts)


_RENDERERS: dict[NodeKind, Callable[[Any], str | None]] = {
    NodeKind.STRING: _render_string,
    NodeKind.NUMBER: _render_text,
    NodeKind.KEYWORD: _render_text,
    NodeKind.IDENTIFIER: _render_text,
    NodeKind.MEMBER: _render_chain,
    NodeKind.SUBSCRIPT: _render_chain,
    NodeKind.CALL: _render_chain,
    NodeKind.ARROW_FUNCTION: _render_function,
    NodeKind.FUNCTION_EXPRESSION: _render_function,
    NodeKind.TEMPLATE: _render_template,
    NodeKind.OBJECT: _render_object,
    NodeKind.ARRAY: _render_array,
    NodeKind.PARENTHESIZED: _render_inner,
    NodeKind.WRAPPED: _render_inner,
    NodeKind.UNARY: _render_unary,
}


def render_expression(node: Any) -> str | None:
    """
    Render an expression node as display text.

    Args:
        node: Tree-sitter expression node (or None)

    Returns:
        Text for known shapes, None for everything else
    """
    renderer = _RENDERERS.get(kind_of(node))
    if renderer is None:
        return None
    return renderer(node)


def render_attribute_value(value_node: Any) -> str | None:
    """
    Render the value part of a JSX attribute.

    Handles quoted strings and `{expression}` containers; nested elements and
    empty containers render as None, as does nesting too deep to render.
    """
    kind = kind_of(value_node)
    if kind is NodeKind.STRING:
        return _render_string(value_node)
    if kind is NodeKind.JSX_EXPRESSION:
        for child in value_node.named_children:
            if child.type != "comment":
                try:
                    return render_expression(child)
                except RecursionError:
                    return None
    return None
