"""File discovery and filtering for complexity analysis.

This module handles finding files to analyze based on include/exclude
patterns and the file extensions of the supported languages.
"""
from fnmatch import fnmatchcase
from pathlib import Path
from typing import List, Optional, Sequence

from ...core.exceptions import ConfigurationError
from ...core.logging import get_logger
from ...languages import supported_extensions


def matches_pattern(relative_path: str, pattern: str) -> bool:
    """Match a POSIX relative path against a glob pattern.

    ``**/`` prefixes also match files at the root, and patterns without a
    slash are matched against the file name alone.
    """
    if "/" not in pattern:
        return fnmatchcase(relative_path.rsplit("/", 1)[-1], pattern)
    if fnmatchcase(relative_path, pattern):
        return True
    while pattern.startswith("**/"):
        pattern = pattern[3:]
        if fnmatchcase(relative_path, pattern):
            return True
    return False


class ComplexityFileFinder:
    """Finds and filters files for complexity analysis."""

    def __init__(self) -> None:
        """Initialize the file finder."""
        self.logger = get_logger("complexity.file_finder")

    def find_files(
        self,
        source_path: str,
        include_patterns: Optional[Sequence[str]] = None,
        exclude_patterns: Optional[Sequence[str]] = None,
    ) -> List[str]:
        """Find files to analyze based on patterns and extensions.

        Args:
            source_path: File or directory to analyze
            include_patterns: Glob patterns for files to include (empty = all)
            exclude_patterns: Glob patterns for files to exclude

        Returns:
            Sorted list of file paths to analyze

        Raises:
            ConfigurationError: If source_path does not exist
        """
        include_patterns = list(include_patterns or [])
        exclude_patterns = list(exclude_patterns or [])

        self.logger.info(
            "find_files_start",
            source_path=source_path,
            include_count=len(include_patterns),
            exclude_count=len(exclude_patterns),
        )

        root = Path(source_path)
        if not root.exists():
            raise ConfigurationError(f"Source path does not exist: {source_path}")

        # A single file is analyzed whatever its extension or the patterns
        if root.is_file():
            return [str(root)]

        all_files = self._find_matching_files(root, include_patterns)
        files_to_analyze = self._filter_excluded_files(root, all_files, exclude_patterns)

        self.logger.info(
            "find_files_complete",
            total_found=len(all_files),
            after_exclusion=len(files_to_analyze),
        )

        return files_to_analyze

    def _find_matching_files(self, root: Path, include_patterns: List[str]) -> List[Path]:
        """Find all files with a supported extension matching the include patterns."""
        extensions = set(supported_extensions())
        found: List[Path] = []

        for file_path in root.rglob("*"):
            if not file_path.is_file() or file_path.suffix.lower() not in extensions:
                continue
            relative = file_path.relative_to(root).as_posix()
            if include_patterns and not any(matches_pattern(relative, p) for p in include_patterns):
                continue
            found.append(file_path)

        return found

    def _filter_excluded_files(self, root: Path, all_files: List[Path], exclude_patterns: List[str]) -> List[str]:
        """Filter out files matching exclusion patterns."""
        files_to_analyze: List[str] = []

        for file_path in all_files:
            relative = file_path.relative_to(root).as_posix()
            if any(matches_pattern(relative, pattern) for pattern in exclude_patterns):
                self.logger.debug("file_excluded", file=relative)
                continue
            files_to_analyze.append(str(file_path))

        return sorted(files_to_analyze)
