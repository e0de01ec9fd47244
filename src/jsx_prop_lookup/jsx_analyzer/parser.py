"""
Syntax tree adapter over tree-sitter's TypeScript and TSX grammars.

`.ts` files use the TypeScript grammar (angle-bracket casts and generics do
not collide with JSX there); everything else uses TSX, which also accepts
plain JavaScript with JSX.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Parser

from .errors import ParseError

TS_LANGUAGE = Language(tstypescript.language_typescript())
TSX_LANGUAGE = Language(tstypescript.language_tsx())


@dataclass(frozen=True)
class ParsedSource:
    """A successfully parsed file."""
    file: str
    tree: Any
    language: Language
    source: bytes

    @property
    def root_node(self) -> Any:
        return self.tree.root_node


def language_for_file(file_path: str) -> Language:
    """Pick the grammar for a file by its extension."""
    if Path(file_path).suffix.lower() == ".ts":
        return TS_LANGUAGE
    return TSX_LANGUAGE


def _first_error_point(node: Any) -> tuple[int, int] | None:
    """Locate the first ERROR or MISSING node, for the skip message."""
    stack = [node]
    while stack:
        cur = stack.pop()
        if cur.type == "ERROR" or cur.is_missing:
            return cur.start_point[0] + 1, cur.start_point[1]
        if cur.has_error:
            stack.extend(reversed(cur.children))
    return None


def parse_source(data: bytes, file_path: str) -> ParsedSource:
    """
    Parse one file's bytes.

    Args:
        data: Raw file content
        file_path: Path used for grammar selection and error messages

    Returns:
        The parsed source

    Raises:
        ParseError: Binary content, invalid UTF-8, or syntax errors
    """
    if b"\x00" in data:
        raise ParseError(file_path, "binary content")
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(file_path, f"not valid UTF-8 ({e.reason})") from e

    language = language_for_file(file_path)
    # One parser per call: parsers are not safe to share across worker threads.
    parser = Parser(language)
    tree = parser.parse(data)

    if tree.root_node.has_error:
        point = _first_error_point(tree.root_node)
        where = f" at line {point[0]}, column {point[1]}" if point else ""
        raise ParseError(file_path, f"syntax error{where}")

    return ParsedSource(file=file_path, tree=tree, language=language, source=data)
