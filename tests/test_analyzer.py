"""Tests for the JsxAnalyzer orchestration over real files."""

import os

import pytest

from jsx_prop_lookup.config import Config
from jsx_prop_lookup.jsx_analyzer import (
    CriteriaError,
    JsxAnalyzer,
    get_analyzer,
    set_analyzer,
)


class TestAnalyzeProps:
    """Test analyze_props."""

    @pytest.mark.asyncio
    async def test_simple_component(self, analyzer, sample_dir):
        """Destructured props keep order and pick up interface types."""
        result = await analyzer.analyze_props(str(sample_dir / "Button.tsx"))

        assert result["summary"]["total_files"] == 1
        assert result["summary"]["skipped_files"] == 0
        button = next(c for c in result["components"] if c["component_name"] == "Button")
        assert [p["prop_name"] for p in button["props"]] == [
            "children", "onClick", "disabled", "variant", "className", "...rest",
        ]
        assert button["props_interface"] == "ButtonProps"
        types = {p["prop_name"]: p.get("type") for p in button["props"]}
        assert types["disabled"] == "boolean"
        assert types["variant"] == '"primary" | "secondary"'
        assert button["props"][-1]["is_spread"] is True

    @pytest.mark.asyncio
    async def test_inline_function_values(self, analyzer, sample_dir):
        result = await analyzer.analyze_props(
            str(sample_dir / "InlineFunctionPropsComponent.tsx"), component_name="button"
        )
        values = {u["prop_name"]: u.get("value") for u in result["prop_usages"]}
        assert values == {"onClick": "() => …", "onMouseOver": "onHover"}

    @pytest.mark.asyncio
    async def test_prop_filter(self, analyzer, sample_dir):
        result = await analyzer.analyze_props(str(sample_dir / "App.tsx"), prop_name="variant")
        assert {u["prop_name"] for u in result["prop_usages"]} == {"variant"}
        assert [u["value"] for u in result["prop_usages"]] == ["primary", "secondary", "primary"]

    @pytest.mark.asyncio
    async def test_syntax_errors_are_skipped(self, analyzer, write_tree):
        """A broken file is counted as skipped and does not fail the run."""
        root = write_tree({
            "Good.tsx": "export const Good = ({ ok }) => <div />;\n",
            "Broken.tsx": "export const Broken = ({ x }) => <div>;\nfunction {\n",
            "image.jsx": b"\x89PNG\x00\x00\x00binary",
        })
        result = await analyzer.analyze_props(str(root))
        assert result["summary"]["total_files"] == 1
        assert result["summary"]["skipped_files"] == 2
        assert [c["component_name"] for c in result["components"]] == ["Good"]

    @pytest.mark.asyncio
    async def test_deep_expression_next_to_normal_file(self, analyzer, write_tree):
        root = write_tree({
            "Deep.tsx": "export const D = () => <Button a={a" + ".b" * 1500 + "} />;\n",
            "Plain.tsx": 'export const E = () => <Button a="1" />;\n',
        })
        result = await analyzer.analyze_props(str(root), component_name="Button")
        assert result["summary"]["total_files"] == 2
        assert sorted(len(u["value"]) for u in result["prop_usages"]) == [1, 1 + 2 * 1500]

    @pytest.mark.asyncio
    async def test_unexpected_extraction_error_skips_file(self, analyzer, write_tree, monkeypatch):
        """An extraction bug in one file is a file-local skip."""
        from jsx_prop_lookup.jsx_analyzer import analyzer as analyzer_module

        real_extract = analyzer_module.extract_components

        def flaky_extract(parsed, options):
            if parsed.file.endswith("Bad.tsx"):
                raise RuntimeError("boom")
            return real_extract(parsed, options)

        monkeypatch.setattr(analyzer_module, "extract_components", flaky_extract)
        root = write_tree({
            "Bad.tsx": "export const Bad = ({ x }) => <div />;\n",
            "Good.tsx": "export const Good = ({ ok }) => <div />;\n",
        })
        result = await analyzer.analyze_props(str(root))
        assert result["summary"]["total_files"] == 1
        assert result["summary"]["skipped_files"] == 1
        assert [c["component_name"] for c in result["components"]] == ["Good"]

    @pytest.mark.asyncio
    async def test_nonexistent_path(self, analyzer, tmp_path):
        result = await analyzer.analyze_props(str(tmp_path / "nope"))
        assert result["summary"] == {
            "total_files": 0,
            "total_components": 0,
            "total_props": 0,
            "skipped_files": 0,
        }

    @pytest.mark.asyncio
    async def test_unknown_format_fails_before_io(self, analyzer, tmp_path):
        with pytest.raises(ValueError, match="format"):
            await analyzer.analyze_props(str(tmp_path / "does-not-exist"), format="verbose")

    @pytest.mark.asyncio
    async def test_idempotence(self, analyzer, sample_dir):
        """Two runs over an unchanged tree give identical results."""
        first = await analyzer.analyze_props(str(sample_dir))
        second = await analyzer.analyze_props(str(sample_dir))
        uncached = await JsxAnalyzer(Config(cache_enabled=False)).analyze_props(str(sample_dir))
        assert first == second == uncached

    @pytest.mark.asyncio
    async def test_worker_count_does_not_change_results(self, sample_dir):
        serial = JsxAnalyzer(Config(max_workers=1, cache_enabled=False))
        parallel = JsxAnalyzer(Config(max_workers=8, cache_enabled=False))
        assert await serial.analyze_props(str(sample_dir)) == await parallel.analyze_props(str(sample_dir))

    @pytest.mark.asyncio
    async def test_count_invariant(self, analyzer, sample_dir):
        """Every format accounts for the same usages."""
        full = await analyzer.analyze_props(str(sample_dir))
        compact = await analyzer.analyze_props(str(sample_dir), format="compact")
        minimal = await analyzer.analyze_props(str(sample_dir), format="minimal")

        total = len(full["prop_usages"])
        assert full["summary"]["total_props"] == total
        assert compact["summary"]["props"] == total
        assert sum(len(f["usages"]) for f in compact["files"].values()) == total
        assert sum(len(v) for v in minimal["props"].values()) == total
        assert compact["summary"]["files"] == full["summary"]["total_files"] == 7

    @pytest.mark.asyncio
    async def test_max_depth_and_boundaries(self, analyzer, write_tree):
        root = write_tree({
            "package.json": "{}",
            "Top.tsx": "const Top = ({ a }) => null;\n",
            "nested/Deep.tsx": "const Deep = ({ b }) => null;\n",
        })
        shallow = await analyzer.analyze_props(str(root), max_depth=1)
        assert [c["component_name"] for c in shallow["components"]] == ["Top"]
        bounded = await analyzer.analyze_props(str(root), respect_project_boundaries=True)
        assert bounded["summary"]["total_files"] == 2


class TestCache:
    """Test the per-file cache."""

    @pytest.mark.asyncio
    async def test_cache_fills_and_invalidates(self, analyzer, write_tree):
        root = write_tree({"Tag.tsx": "const Tag = ({ a }) => null;\n"})
        first = await analyzer.analyze_props(str(root))
        assert analyzer.cache_size == 1
        assert [p["prop_name"] for p in first["components"][0]["props"]] == ["a"]

        target = root / "Tag.tsx"
        target.write_text("const Tag = ({ a, bb }) => null;\n", encoding="utf-8")
        stat = target.stat()
        os.utime(target, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

        second = await analyzer.analyze_props(str(root))
        assert [p["prop_name"] for p in second["components"][0]["props"]] == ["a", "bb"]

    @pytest.mark.asyncio
    async def test_options_are_part_of_the_key(self, analyzer, sample_dir):
        await analyzer.analyze_props(str(sample_dir / "App.tsx"))
        await analyzer.analyze_props(str(sample_dir / "App.tsx"), prop_name="variant")
        assert analyzer.cache_size == 2

    @pytest.mark.asyncio
    async def test_fifo_eviction(self, sample_dir):
        analyzer = JsxAnalyzer(Config(cache_max_size=2))
        await analyzer.analyze_props(str(sample_dir))
        assert analyzer.cache_size == 2

    @pytest.mark.asyncio
    async def test_disabled(self, sample_dir):
        analyzer = JsxAnalyzer(Config(cache_enabled=False))
        await analyzer.analyze_props(str(sample_dir))
        assert analyzer.cache_size == 0


class TestFindPropUsage:
    """Test find_prop_usage."""

    @pytest.mark.asyncio
    async def test_usages_of_one_prop(self, analyzer, sample_dir):
        result = await analyzer.find_prop_usage("onClick", str(sample_dir), "Button")
        locations = [(os.path.basename(u["file"]), u["line"]) for u in result["prop_usages"]]
        assert locations == [("App.tsx", 24), ("App.tsx", 28), ("Button.tsx", 13)]

    @pytest.mark.asyncio
    async def test_minimal_format(self, analyzer, sample_dir):
        result = await analyzer.find_prop_usage("width", str(sample_dir), format="minimal")
        entries = result["props"]["width"]
        assert all(e["file"].endswith(".tsx") for e in entries)
        assert {e["component"] for e in entries} >= {"Select", "UI.Select"}


class TestGetComponentProps:
    """Test get_component_props."""

    @pytest.mark.asyncio
    async def test_identifier_parameter(self, analyzer, sample_dir):
        arrow = await analyzer.get_component_props("ArrowWithIdentifier", str(sample_dir))
        assert [d.prop_names for d in arrow] == [["onClick", "disabled", "label"]]

        func = await analyzer.get_component_props("FuncWithIdentifier", str(sample_dir))
        assert [d.prop_names for d in func] == [["disabled", "onClick", "label"]]

    @pytest.mark.asyncio
    async def test_unknown_component(self, analyzer, sample_dir):
        assert await analyzer.get_component_props("Nope", str(sample_dir)) == []


class TestFindComponentsWithoutProp:
    """Test find_components_without_prop."""

    @pytest.mark.asyncio
    async def test_select_missing_width(self, analyzer, sample_dir):
        result = await analyzer.find_components_without_prop(
            "Select", "width", str(sample_dir / "SelectExample.tsx")
        )
        assert [m["line"] for m in result["missing_prop_usages"]] == [48, 54]
        assert result["summary"] == {
            "total_instances": 5,
            "missing_prop_count": 2,
            "missing_prop_percentage": 40.0,
        }

    @pytest.mark.asyncio
    async def test_spread_not_assumed(self, analyzer, sample_dir):
        result = await analyzer.find_components_without_prop(
            "Select", "width", str(sample_dir / "SelectExample.tsx"),
            assume_spread_has_required_prop=False,
        )
        assert [m["line"] for m in result["missing_prop_usages"]] == [48, 54, 57]
        assert result["missing_prop_usages"][2]["existing_props"] == ["options", "...spread"]
        assert result["summary"]["missing_prop_percentage"] == 60.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["UI.Select", "Select"])
    async def test_dotted_name(self, analyzer, sample_dir, name):
        result = await analyzer.find_components_without_prop(
            name, "width", str(sample_dir / "NamespacedSelectExample.tsx")
        )
        assert [m["line"] for m in result["missing_prop_usages"]] == [17]
        assert result["missing_prop_usages"][0]["component_name"] == "UI.Select"
        assert result["summary"]["total_instances"] == 2

    @pytest.mark.asyncio
    async def test_percentage_invariant(self, analyzer, sample_dir):
        result = await analyzer.find_components_without_prop("Select", "width", str(sample_dir))
        summary = result["summary"]
        assert summary["missing_prop_count"] == len(result["missing_prop_usages"])
        assert summary["missing_prop_percentage"] == round(
            summary["missing_prop_count"] / summary["total_instances"] * 100, 2
        )


class TestQueryComponents:
    """Test query_components."""

    @pytest.mark.asyncio
    async def test_equals(self, analyzer, sample_dir):
        result = await analyzer.query_components(
            "Button",
            [{"name": "variant", "value": "primary"}],
            directory=str(sample_dir / "App.tsx"),
        )
        assert [m["line"] for m in result["matches"]] == [24, 36]
        assert result["matches"][0]["all_props"] == {
            "onClick": "handleIncrement",
            "variant": "primary",
            "className": "increment-btn",
        }
        assert result["summary"] == {"total_matches": 2, "criteria_matched": 1, "files_scanned": 1}
        assert result["query"]["logic"] == "AND"

    @pytest.mark.asyncio
    async def test_declarations_and_sites(self, analyzer, sample_dir):
        result = await analyzer.query_components(
            "Button", [{"name": "onClick", "exists": True}], directory=str(sample_dir)
        )
        locations = [(os.path.basename(m["file"]), m["line"]) for m in result["matches"]]
        assert locations == [("App.tsx", 24), ("App.tsx", 28), ("Button.tsx", 11)]

    @pytest.mark.asyncio
    async def test_empty_criteria_returns_every_instance(self, analyzer, sample_dir):
        result = await analyzer.query_components("Card", [], directory=str(sample_dir / "App.tsx"))
        assert [m["line"] for m in result["matches"]] == [20, 34]

    @pytest.mark.asyncio
    async def test_or_logic_and_exists_false(self, analyzer, sample_dir):
        result = await analyzer.query_components(
            "Button",
            [{"name": "disabled", "exists": True}, {"name": "className", "value": "increment", "operator": "contains"}],
            directory=str(sample_dir / "App.tsx"),
            logic="OR",
        )
        assert [m["line"] for m in result["matches"]] == [24, 28]

        absent = await analyzer.query_components(
            "Button", [{"name": "onClick", "exists": False}], directory=str(sample_dir / "App.tsx")
        )
        assert [m["line"] for m in absent["matches"]] == [36]

    @pytest.mark.asyncio
    async def test_two_elements_on_one_line(self, analyzer, write_tree):
        """Each element is its own instance, in line with the missing-prop audit."""
        root = write_tree({
            "Row.tsx": 'export const Row = () => <div><Button a="1" /><Button b="2" /></div>;\n',
        })
        result = await analyzer.query_components("Button", [], directory=str(root))
        assert [m["all_props"] for m in result["matches"]] == [{"a": "1"}, {"b": "2"}]

        audit = await analyzer.find_components_without_prop("Button", "zzz", str(root))
        assert audit["summary"]["total_instances"] == result["summary"]["total_matches"] == 2

        only_a = await analyzer.query_components("Button", [{"name": "a", "value": "1"}], directory=str(root))
        assert only_a["summary"]["total_matches"] == 1

    @pytest.mark.asyncio
    async def test_invalid_criteria_fail_before_io(self, analyzer, tmp_path):
        with pytest.raises(CriteriaError, match="operator"):
            await analyzer.query_components(
                "Button",
                [{"name": "variant", "operator": "startsWith", "value": "p"}],
                directory=str(tmp_path / "does-not-exist"),
            )

    @pytest.mark.asyncio
    async def test_pretty_paths(self, analyzer, sample_dir):
        result = await analyzer.query_components(
            "Card", [{"name": "title", "value": "Info"}],
            directory=str(sample_dir / "App.tsx"),
            include_columns=False,
            include_pretty_paths=True,
        )
        match = result["matches"][0]
        assert "column" not in match
        assert match["pretty_path"].endswith("App.tsx:34")


class TestGlobalInstance:
    """Test get_analyzer / set_analyzer."""

    def test_singleton(self):
        first = get_analyzer()
        assert get_analyzer() is first
        replacement = JsxAnalyzer(Config())
        set_analyzer(replacement)
        assert get_analyzer() is replacement
