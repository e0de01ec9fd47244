"""Tests for the syntax tree adapter."""

import pytest

from jsx_prop_lookup.jsx_analyzer.errors import ParseError
from jsx_prop_lookup.jsx_analyzer.parser import (
    TS_LANGUAGE,
    TSX_LANGUAGE,
    language_for_file,
    parse_source,
)


class TestLanguageSelection:
    """Test grammar selection by extension."""

    @pytest.mark.parametrize("name", ["App.tsx", "App.jsx", "app.js", "APP.TSX"])
    def test_tsx_grammar(self, name):
        assert language_for_file(name) is TSX_LANGUAGE

    def test_ts_grammar(self):
        assert language_for_file("util.ts") is TS_LANGUAGE


class TestParseSource:
    """Test parse_source."""

    def test_parses_jsx(self):
        parsed = parse_source(b"const A = () => <div className=\"x\" />;\n", "A.tsx")
        assert parsed.root_node.type == "program"
        assert not parsed.root_node.has_error
        assert parsed.file == "A.tsx"

    def test_angle_bracket_cast_in_ts_file(self):
        """`.ts` files accept casts that would be JSX in TSX."""
        parsed = parse_source(b"const n = <number>value;\n", "cast.ts")
        assert not parsed.root_node.has_error

    def test_syntax_error(self):
        """Malformed files raise ParseError with a location."""
        with pytest.raises(ParseError, match=r"Failed to parse Broken\.tsx: syntax error"):
            parse_source(b"const A = () => <div>;\nfunction {\n", "Broken.tsx")

    def test_binary_content(self):
        with pytest.raises(ParseError, match="binary content"):
            parse_source(b"\x89PNG\r\n\x1a\n\x00\x00\x00", "image.tsx")

    def test_invalid_utf8(self):
        with pytest.raises(ParseError, match="not valid UTF-8"):
            parse_source(b"const a = '\xff\xfe';\n", "latin.js")

    def test_error_is_file_local(self):
        """ParseError carries the offending file."""
        with pytest.raises(ParseError) as exc_info:
            parse_source(b"<<<", "Bad.jsx")
        assert exc_info.value.file == "Bad.jsx"
