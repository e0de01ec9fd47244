"""
JSX Analyzer - orchestration of the per-file pipeline.

resolve files -> parse -> extract (per file, in worker threads) -> aggregate
on the event loop -> missing-prop audit / criteria query -> shape.

The per-file extraction cache is keyed by absolute path, mtime, size and the
extraction options, and is only ever written from the aggregating coroutine.
"""

import asyncio
import os
from pathlib import Path
from typing import Any, Sequence

from ..config import Config, get_config
from ..log import get_logger
from .criteria import build_matches, validate_query
from .errors import ParseError
from .extractor import ExtractOptions, extract_components
from .files import resolve_files
from .missing import find_missing_props
from .models import (
    AnalysisResult,
    ComponentDeclaration,
    FileAnalysis,
    Logic,
    PropCriterion,
    ResponseFormat,
)
from .parser import parse_source
from .shaping import check_format, shape_result

logger = get_logger(__name__)

CacheKey = tuple[str, int, int, ExtractOptions]


def analyze_file(file_path: str, options: ExtractOptions) -> FileAnalysis:
    """
    Run parse + extract over one file (blocking).

    Raises:
        ParseError: The file is binary, not UTF-8, or has syntax errors
        OSError: The file could not be read
    """
    data = Path(file_path).read_bytes()
    parsed = parse_source(data, file_path)
    return extract_components(parsed, options)


# ============================================================================
# Main Analyzer Class
# ============================================================================

class JsxAnalyzer:
    """
    Component/prop analyzer over a tree of JS/JSX/TS/TSX files.

    Public operations:
    - analyze_props: declarations and prop usages, shaped as requested
    - find_prop_usage: the same, narrowed to one prop
    - get_component_props: declarations of one component
    - find_components_without_prop: missing required prop audit
    - query_components: AND/OR prop criteria over component instances
    """

    def __init__(self, config: Config | None = None):
        """Initialize the analyzer; settings default to the global config."""
        self._config = config or get_config()

        # Cache
        self._file_cache: dict[CacheKey, FileAnalysis] = {}
        self._cache_queue: list[CacheKey] = []
        self._max_cache_size = max(self._config.cache_max_size, 1)
        self._cache_enabled = self._config.cache_enabled

        self._max_workers = max(self._config.max_workers, 1)

    def _manage_cache(self, cache: dict, key: Any, value: Any) -> None:
        """Manage cache size using FIFO eviction."""
        if key in cache:
            cache[key] = value
            return

        if len(cache) >= self._max_cache_size:
            if self._cache_queue:
                oldest = self._cache_queue.pop(0)
                cache.pop(oldest, None)

        cache[key] = value
        self._cache_queue.append(key)

    @property
    def cache_size(self) -> int:
        return len(self._file_cache)

    # ========================================================================
    # Scanning
    # ========================================================================

    @staticmethod
    def _cache_key(file_path: str, options: ExtractOptions) -> CacheKey | None:
        try:
            st = os.stat(file_path)
        except OSError:
            return None
        return str(Path(file_path).resolve()), st.st_mtime_ns, st.st_size, options

    async def _analyze_file(self, file_path: str, options: ExtractOptions, semaphore: asyncio.Semaphore) -> FileAnalysis | None:
        """Analyze one file in a worker thread; None means it was skipped."""
        async with semaphore:
            try:
                return await asyncio.to_thread(analyze_file, file_path, options)
            except ParseError as e:
                logger.debug("Skipping %s", e)
            except OSError as e:
                logger.debug("Skipping %s: %s", file_path, e)
            except Exception as e:
                logger.debug("Skipping %s: %s: %s", file_path, type(e).__name__, e)
        return None

    async def _scan(
        self,
        path: str,
        options: ExtractOptions,
        respect_project_boundaries: bool | None = None,
        max_depth: int | None = None,
    ) -> AnalysisResult:
        """Resolve files under `path` and aggregate their analyses in file order."""
        if respect_project_boundaries is None:
            respect_project_boundaries = self._config.respect_project_boundaries
        if max_depth is None:
            max_depth = self._config.max_depth

        files = await asyncio.to_thread(
            resolve_files,
            path,
            respect_boundaries=respect_project_boundaries,
            max_depth=max_depth,
        )

        analyses: list[FileAnalysis | None] = [None] * len(files)
        keys: list[CacheKey | None] = [None] * len(files)
        pending: list[int] = []

        for i, file_path in enumerate(files):
            if self._cache_enabled:
                keys[i] = self._cache_key(file_path, options)
                cached = self._file_cache.get(keys[i]) if keys[i] is not None else None
                if cached is not None:
                    analyses[i] = cached
                    continue
            pending.append(i)

        if pending:
            semaphore = asyncio.Semaphore(self._max_workers)
            computed = await asyncio.gather(
                *(self._analyze_file(files[i], options, semaphore) for i in pending)
            )
            for i, analysis in zip(pending, computed):
                analyses[i] = analysis
                if analysis is not None and keys[i] is not None:
                    self._manage_cache(self._file_cache, keys[i], analysis)

        result = AnalysisResult()
        for analysis in analyses:
            if analysis is None:
                result.files_skipped += 1
                continue
            result.files_analyzed += 1
            result.components.extend(analysis.declarations)
            result.prop_usages.extend(analysis.usages)
            result.sites.extend(analysis.sites)

        logger.debug(
            "Scanned %s: %d files analyzed, %d skipped",
            path, result.files_analyzed, result.files_skipped,
        )
        return result

    # ========================================================================
    # Public Operations
    # ========================================================================

    async def analyze_props(
        self,
        path: str,
        *,
        component_name: str | None = None,
        prop_name: str | None = None,
        include_types: bool = True,
        format: ResponseFormat = "full",
        include_columns: bool = True,
        include_pretty_paths: bool = False,
        respect_project_boundaries: bool | None = None,
        max_depth: int | None = None,
    ) -> dict:
        """
        Analyze component declarations and prop usages under `path`.

        Args:
            path: File or directory to analyze
            component_name: Only this component (full or local name for JSX sites)
            prop_name: Only usages of this prop
            include_types: Attach `<Name>Props` interface types
            format: "full", "compact" or "minimal"
            include_columns: Include column numbers
            include_pretty_paths: Add `path:line:col` locations
            respect_project_boundaries: Override the configured boundary mode
            max_depth: Override the configured depth bound

        Returns:
            The shaped result

        Raises:
            ValueError: Unknown format, before any file is read
        """
        check_format(format)
        options = ExtractOptions(
            target_component=component_name or None,
            target_prop=prop_name or None,
            include_types=include_types,
        )
        result = await self._scan(path, options, respect_project_boundaries, max_depth)
        return shape_result(
            result,
            format,
            include_columns=include_columns,
            include_pretty_paths=include_pretty_paths,
        )

    async def find_prop_usage(
        self,
        prop_name: str,
        directory: str = ".",
        component_name: str | None = None,
        *,
        format: ResponseFormat = "full",
        include_columns: bool = True,
        include_pretty_paths: bool = False,
    ) -> dict:
        """Find every usage of one prop, optionally within one component."""
        return await self.analyze_props(
            directory,
            component_name=component_name,
            prop_name=prop_name,
            include_types=True,
            format=format,
            include_columns=include_columns,
            include_pretty_paths=include_pretty_paths,
        )

    async def get_component_props(self, component_name: str, directory: str = ".") -> list[ComponentDeclaration]:
        """Declarations of one component with the props each declares."""
        options = ExtractOptions(target_component=component_name, include_types=True)
        result = await self._scan(directory, options)
        return [c for c in result.components if c.component_name == component_name]

    async def find_components_without_prop(
        self,
        component_name: str,
        required_prop: str,
        directory: str = ".",
        *,
        assume_spread_has_required_prop: bool = True,
    ) -> dict:
        """
        Audit every JSX instance of a component for a required prop.

        Returns:
            `{component_name, required_prop, missing_prop_usages, summary}`
        """
        options = ExtractOptions(target_component=component_name, include_types=False)
        result = await self._scan(directory, options)
        report = find_missing_props(
            result.sites,
            component_name,
            required_prop,
            assume_spread_satisfies=assume_spread_has_required_prop,
        )
        return report.to_dict()

    async def query_components(
        self,
        component_name: str,
        prop_criteria: Sequence[PropCriterion | dict],
        *,
        directory: str = ".",
        logic: Logic = "AND",
        include_columns: bool = True,
        include_pretty_paths: bool = False,
        respect_project_boundaries: bool | None = None,
        max_depth: int | None = None,
    ) -> dict:
        """
        Find instances of a component whose props satisfy the criteria.

        Criteria are validated before any file is read.

        Raises:
            CriteriaError: Malformed component name, criterion or logic
        """
        criteria, logic = validate_query(component_name, prop_criteria, logic)

        options = ExtractOptions(target_component=component_name, include_types=True)
        result = await self._scan(directory, options, respect_project_boundaries, max_depth)

        matches = build_matches(
            result.components,
            result.sites,
            component_name,
            criteria,
            logic,
            include_columns=include_columns,
            include_pretty_paths=include_pretty_paths,
        )

        return {
            "query": {
                "component_name": component_name,
                "prop_criteria": [c.to_dict() for c in criteria],
                "logic": logic,
            },
            "matches": [m.to_dict() for m in matches],
            "summary": {
                "total_matches": len(matches),
                "criteria_matched": len(criteria),
                "files_scanned": len(result.files_scanned),
            },
        }


# ============================================================================
# Global Instance
# ============================================================================

_analyzer: JsxAnalyzer | None = None


def get_analyzer() -> JsxAnalyzer:
    """Get the global analyzer instance."""
    global _analyzer
    if _analyzer is None:
        _analyzer = JsxAnalyzer()
    return _analyzer


def set_analyzer(analyzer: JsxAnalyzer | None) -> None:
    """Set the global analyzer instance (useful for testing)."""
    global _analyzer
    _analyzer = analyzer
