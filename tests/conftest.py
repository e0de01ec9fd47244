"""Shared fixtures for the JSX analyzer tests."""

import logging
import textwrap
from pathlib import Path

import pytest

from jsx_prop_lookup.config import Config, reset_config, set_config
from jsx_prop_lookup.jsx_analyzer import JsxAnalyzer, set_analyzer
from jsx_prop_lookup.jsx_analyzer.extractor import ExtractOptions, extract_components
from jsx_prop_lookup.jsx_analyzer.parser import parse_source

SAMPLE_DIR = Path(__file__).parent / "fixtures" / "sample_components"

_ENV_VARS = (
    "JSX_SOURCE_PATH",
    "ALLOWED_ROOTS",
    "ANALYZER_CACHE_ENABLED",
    "ANALYZER_CACHE_MAX_SIZE",
    "ANALYZER_MAX_WORKERS",
    "RESPECT_PROJECT_BOUNDARIES",
    "ANALYZER_MAX_DEPTH",
    "ANALYZER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Each test starts from default configuration and a fresh global analyzer."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    set_analyzer(None)
    yield
    reset_config()
    set_analyzer(None)
    package_logger = logging.getLogger("jsx_prop_lookup")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.propagate = True


@pytest.fixture
def sample_dir() -> Path:
    return SAMPLE_DIR


@pytest.fixture
def config() -> Config:
    cfg = Config()
    set_config(cfg)
    return cfg


@pytest.fixture
def analyzer(config) -> JsxAnalyzer:
    analyzer = JsxAnalyzer(config)
    set_analyzer(analyzer)
    return analyzer


@pytest.fixture
def write_tree(tmp_path):
    """Write `{relative_path: source}` under tmp_path and return the root."""

    def _write(files: dict[str, str | bytes], root: Path | None = None) -> Path:
        base = root or tmp_path
        for rel, content in files.items():
            target = base / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(textwrap.dedent(content), encoding="utf-8")
        return base

    return _write


@pytest.fixture
def extract():
    """Parse and extract a dedented snippet."""

    def _extract(source: str, file: str = "Sample.tsx", **options):
        parsed = parse_source(textwrap.dedent(source).encode("utf-8"), file)
        return extract_components(parsed, ExtractOptions(**options))

    return _extract
