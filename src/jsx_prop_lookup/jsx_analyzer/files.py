"""
Source file discovery.

Expands an analysis root (a single file or a directory) into the sorted list
of candidate JS/TS files, skipping dependency caches and build output and,
optionally, anything that resolves outside the enclosing project.
"""

import os
import stat
from pathlib import Path

from .errors import PathAccessError

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx")

EXCLUDED_DIRS: frozenset[str] = frozenset({
    "node_modules",
    "dist",
    "build",
    ".git",
    "coverage",
    "tmp",
    "temp",
})

# Files whose presence marks a directory as a project root.
PROJECT_MARKERS: tuple[str, ...] = (
    "package.json",
    ".git",
    "tsconfig.json",
    "jsconfig.json",
    ".eslintrc.js",
    ".eslintrc.json",
    "webpack.config.js",
    "vite.config.js",
    "next.config.js",
    "gatsby-config.js",
)

_MAX_BOUNDARY_LEVELS = 10


def _is_regular_file(path: str) -> bool:
    """Re-stat a candidate; anything unreadable or not a plain file is skipped."""
    try:
        return stat.S_ISREG(os.stat(path).st_mode)
    except OSError:
        return False


def _is_within(path: Path, root: Path) -> bool:
    return path == root or root in path.parents


def find_project_boundaries(start_path: str | Path) -> list[Path]:
    """
    Walk upward from `start_path` collecting directories with project markers.

    Args:
        start_path: Directory to start from

    Returns:
        Marker directories, nearest first
    """
    boundaries: list[Path] = []
    current = Path(start_path).resolve()

    for _ in range(_MAX_BOUNDARY_LEVELS):
        if any((current / marker).exists() for marker in PROJECT_MARKERS):
            if current not in boundaries:
                boundaries.append(current)
        if current.parent == current:
            break
        current = current.parent

    return boundaries


def is_within_project_boundary(file_path: str | Path, boundaries: list[Path], search_root: str | Path) -> bool:
    """
    Check a discovered file against the boundary nearest to the search root.

    The file is resolved through symlinks first, so links escaping the project
    are rejected. With no boundary found, the file must live under the search
    root itself.
    """
    resolved = Path(file_path).resolve()
    boundary = boundaries[0] if boundaries else Path(search_root).resolve()
    return _is_within(resolved, boundary)


def resolve_files(
    root: str | Path,
    *,
    extensions: tuple[str, ...] = SUPPORTED_EXTENSIONS,
    exclude_dirs: frozenset[str] = EXCLUDED_DIRS,
    respect_boundaries: bool = False,
    max_depth: int | None = None,
) -> list[str]:
    """
    Expand an analysis root into candidate source files.

    Args:
        root: File or directory to analyze
        extensions: Allowed file extensions (lowercase, with dot)
        exclude_dirs: Directory names never descended into
        respect_boundaries: Drop files resolving outside the nearest project root
        max_depth: Maximum path depth below `root` (a file in `root` has depth 1)

    Returns:
        Sorted list of file paths. A root that does not exist yields `[]`.

    Raises:
        PathAccessError: The root exists but cannot be inspected
    """
    root_str = str(root)
    try:
        root_stat = os.stat(root_str)
    except FileNotFoundError:
        return []
    except OSError as e:
        raise PathAccessError(root_str, e.strerror or str(e)) from e

    if stat.S_ISREG(root_stat.st_mode):
        return [root_str] if Path(root_str).suffix.lower() in extensions else []

    if not stat.S_ISDIR(root_stat.st_mode):
        return []

    search_root = Path(root_str).resolve()
    boundaries = find_project_boundaries(search_root) if respect_boundaries else []

    candidates: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root_str):
        rel_parts = Path(dirpath).relative_to(root_str).parts
        depth = len(rel_parts) + 1

        if max_depth is not None and depth >= max_depth:
            # Files at this level are still allowed, nothing deeper is.
            dirnames[:] = []
        else:
            dirnames[:] = sorted(d for d in dirnames if d not in exclude_dirs)

        if max_depth is not None and depth > max_depth:
            continue

        for filename in filenames:
            if Path(filename).suffix.lower() not in extensions:
                continue
            candidate = os.path.join(dirpath, filename)
            if not _is_regular_file(candidate):
                continue
            if respect_boundaries and not is_within_project_boundary(candidate, boundaries, search_root):
                continue
            candidates.append(candidate)

    return sorted(candidates)
