"""
Configuration management for JSX Prop Lookup.

Configuration via environment variables:

Sources:
- JSX_SOURCE_PATH: Base directory that relative tool paths resolve against
  (default: the working directory)
- ALLOWED_ROOTS: Comma-separated directories; when set, every requested path
  must resolve inside one of them

File Discovery:
- RESPECT_PROJECT_BOUNDARIES: Drop files outside the nearest project root (default: false)
- ANALYZER_MAX_DEPTH: Maximum directory depth below the analysis root (default: unlimited)

Cache & Workers:
- ANALYZER_CACHE_ENABLED: Enable the per-file extraction cache (default: true)
- ANALYZER_CACHE_MAX_SIZE: Maximum cache entries (default: 1000)
- ANALYZER_MAX_WORKERS: Files parsed concurrently (default: 8)

Logging:
- ANALYZER_LOG_LEVEL: DEBUG / INFO / WARNING / ERROR (default: INFO)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from .log import get_logger

logger = get_logger(__name__)


def _parse_bool(value: str | None, default: bool = True) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def _parse_int(name: str, default: int | None, minimum: int = 1) -> int | None:
    """Parse a positive integer from an environment variable, falling back on junk."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer)", name, raw)
        return default
    if value < minimum:
        logger.warning("Ignoring %s=%r (must be >= %d)", name, raw, minimum)
        return default
    return value


def _parse_roots(value: str | None) -> list[str]:
    """Split a comma-separated root list, resolving each entry."""
    if not value:
        return []
    roots: list[str] = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        resolved = str(Path(item).expanduser().resolve())
        if resolved not in roots:
            roots.append(resolved)
    return roots


@dataclass
class Config:
    """Server configuration loaded from environment variables."""

    source_path: str | None = field(default_factory=lambda: os.getenv("JSX_SOURCE_PATH") or None)
    allowed_roots: list[str] = field(default_factory=lambda: _parse_roots(os.getenv("ALLOWED_ROOTS")))

    respect_project_boundaries: bool = field(
        default_factory=lambda: _parse_bool(os.getenv("RESPECT_PROJECT_BOUNDARIES"), False)
    )
    max_depth: int | None = field(default_factory=lambda: _parse_int("ANALYZER_MAX_DEPTH", None))

    # Cache settings
    cache_enabled: bool = field(
        default_factory=lambda: _parse_bool(os.getenv("ANALYZER_CACHE_ENABLED"), True)
    )
    cache_max_size: int = field(default_factory=lambda: _parse_int("ANALYZER_CACHE_MAX_SIZE", 1000))
    max_workers: int = field(default_factory=lambda: _parse_int("ANALYZER_MAX_WORKERS", 8))

    log_level: str = field(default_factory=lambda: os.getenv("ANALYZER_LOG_LEVEL", "INFO").upper())

    def add_allowed_root(self, path: str | Path) -> None:
        """Add a directory to the allow-list (duplicates are ignored)."""
        resolved = str(Path(path).expanduser().resolve())
        if resolved not in self.allowed_roots:
            self.allowed_roots.append(resolved)

    def resolve_path(self, path: str) -> Path:
        """Resolve a tool path, anchoring relative paths at `source_path`."""
        candidate = Path(path).expanduser()
        if not candidate.is_absolute() and self.source_path:
            candidate = Path(self.source_path).expanduser() / candidate
        return candidate.resolve()

    def is_allowed(self, path: str | Path) -> bool:
        """Whether a resolved path lies inside an allowed root (always true without roots)."""
        if not self.allowed_roots:
            return True
        resolved = Path(path).resolve()
        for root in self.allowed_roots:
            root_path = Path(root)
            if resolved == root_path or root_path in resolved.parents:
                return True
        return False

    def to_dict(self) -> dict:
        return {
            "source_path": self.source_path,
            "allowed_roots": list(self.allowed_roots),
            "respect_project_boundaries": self.respect_project_boundaries,
            "max_depth": self.max_depth,
            "cache_enabled": self.cache_enabled,
            "cache_max_size": self.cache_max_size,
            "max_workers": self.max_workers,
            "log_level": self.log_level,
        }


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    global _config
    _config = None
