"""Exception hierarchy for complex-code-spotter.

Configuration problems are raised before any file is analyzed. Everything
deriving from FileAnalysisError only aborts the analysis of one file and is
recorded in the report as a failure for that file.
"""
from typing import Optional


class SpotterError(Exception):
    """Base exception for all complex-code-spotter errors."""

    pass


class ConfigurationError(SpotterError):
    """Raised when metrics, thresholds, paths or config files are invalid."""

    def __init__(self, message: str, config_path: Optional[str] = None) -> None:
        self.config_path = config_path
        self.message = message
        if config_path:
            super().__init__(f"Invalid configuration in {config_path}: {message}")
        else:
            super().__init__(message)


class FileAnalysisError(SpotterError):
    """Base for failures that abandon the analysis of a single file."""

    kind = "analysis"

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path else message)


class UnknownLanguageError(FileAnalysisError):
    """Raised when no language frontend handles a file."""

    kind = "unknown_language"

    def __init__(self, path: str) -> None:
        super().__init__("Impossible to guess the programming language", path)


class SourceDecodeError(FileAnalysisError):
    """Raised when file bytes are neither UTF-8 nor a supported fallback encoding."""

    kind = "decode"


class SourceParseError(FileAnalysisError):
    """Raised when a frontend cannot build a syntax tree."""

    kind = "parse"


class MalformedTreeError(FileAnalysisError):
    """Raised when a syntax tree violates span or acyclicity invariants."""

    kind = "malformed_tree"
