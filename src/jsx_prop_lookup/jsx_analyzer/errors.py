"""
Exceptions raised by the JSX analyzer.
"""


class AnalyzerError(Exception):
    """Base class for analyzer failures."""


class PathAccessError(AnalyzerError):
    """The analysis root exists but cannot be accessed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot access path: {path} - {reason}")


class ParseError(AnalyzerError):
    """A single file could not be decoded or parsed.

    Always file-local: the analyzer skips the file and keeps going.
    """

    def __init__(self, file: str, reason: str):
        self.file = file
        self.reason = reason
        super().__init__(f"Failed to parse {file}: {reason}")


class CriteriaError(AnalyzerError, ValueError):
    """Malformed query arguments, reported before any file I/O."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")
