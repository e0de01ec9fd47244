"""Tests for attribute value rendering."""

import pytest

WIDGET = """
const View = () => (
  <Widget
    text="hello"
    single='quoted'
    count={42}
    flag={true}
    empty={null}
    ident={value}
    member={user.profile.name}
    index={items['x']}
    call={getName(1)}
    arrow={() => go()}
    fn={function () {}}
    tpl={`hi ${name}!`}
    plain={`static`}
    nested={`a ${user.name} b ${format()}`}
    opaque={`x ${a + b}`}
    obj={{ a: 1 }}
    arr={[1, 2]}
    neg={-1}
    bang={!open}
    kind={typeof thing}
    paren={(value)}
    nonnull={value!}
    cast={value as string}
    bare
    binary={a + b}
    ternary={ok ? 1 : 2}
  />
);
"""


@pytest.fixture
def widget_values(extract):
    result = extract(WIDGET)
    return {u.prop_name: u.value for u in result.usages if u.component_name == "Widget"}


class TestRenderAttributeValue:
    """Test best-effort value rendering."""

    @pytest.mark.parametrize(
        "prop, expected",
        [
            ("text", "hello"),
            ("single", "quoted"),
            ("count", "42"),
            ("flag", "true"),
            ("empty", "null"),
            ("ident", "value"),
            ("member", "user.profile.name"),
            ("index", "items[x]"),
            ("call", "getName()"),
            ("arrow", "() => …"),
            ("fn", "() => …"),
            ("tpl", "hi name!"),
            ("plain", "static"),
            ("nested", "a user.name b format()"),
            ("obj", "{...}"),
            ("arr", "[...]"),
            ("neg", "-1"),
            ("bang", "!open"),
            ("kind", "typeof thing"),
            ("paren", "value"),
            ("nonnull", "value"),
            ("cast", "value"),
        ],
    )
    def test_rendered(self, widget_values, prop, expected):
        assert widget_values[prop] == expected

    @pytest.mark.parametrize("prop", ["bare", "binary", "ternary", "opaque"])
    def test_unknown_shapes_render_none(self, widget_values, prop):
        """Unsupported shapes are present with no value instead of failing."""
        assert prop in widget_values
        assert widget_values[prop] is None

    def test_every_attribute_is_reported(self, widget_values):
        assert len(widget_values) == 26


class TestTemplateEscapes:
    """Test that template literal chunks are cooked."""

    @pytest.mark.parametrize(
        "template, expected",
        [
            (r"`x\ty ${z}`", "x\ty z"),
            (r"`line\nbreak`", "line\nbreak"),
            (r"`tick \` and \${not} ${a}`", "tick ` and ${not} a"),
            (r"`A\x42\u{1F600}`", "AB\U0001F600"),
            (r"`back\\slash`", "back\\slash"),
        ],
    )
    def test_escapes_decoded(self, extract, template, expected):
        result = extract(f"const V = () => <Widget tpl={{{template}}} />;\n")
        assert result.usages[0].value == expected


class TestDeepNesting:
    """Test that very deep expressions never fail extraction."""

    def test_long_member_chain(self, extract):
        chain = "a" + ".b" * 1500
        result = extract(f"const V = () => <Widget deep={{{chain}}} call={{{chain}()}} />;\n")
        values = {u.prop_name: u.value for u in result.usages}
        assert values["deep"] == chain
        assert values["call"] == chain + "()"

    def test_deep_unary_renders_none(self, extract):
        result = extract("const V = () => <Widget deep={" + "!" * 5000 + "x} ok=\"1\" />;\n")
        values = {u.prop_name: u.value for u in result.usages}
        assert values == {"deep": None, "ok": "1"}
