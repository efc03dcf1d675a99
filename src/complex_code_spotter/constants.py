"""Shared constants across the complex-code-spotter codebase.

This module centralizes magic numbers and configuration values
to improve maintainability and reduce code duplication.
"""
import os


class ComplexityDefaults:
    """Default thresholds for complexity analysis."""

    THRESHOLD = 15
    CYCLOMATIC_THRESHOLD = 15
    COGNITIVE_THRESHOLD = 15
    MIN_THRESHOLD = 1
    MAX_THRESHOLD = 100  # Values above are clamped


class ParallelProcessing:
    """Parallel processing configuration."""

    MAX_WORKERS = 32

    @staticmethod
    def get_optimal_workers(max_workers: int = 0) -> int:
        """Calculate worker count based on available CPU cores.

        Args:
            max_workers: Maximum workers to use (0 = auto-detect)

        Returns:
            Number of worker threads (1 to MAX_WORKERS)
        """
        if max_workers > 0:
            return min(max_workers, ParallelProcessing.MAX_WORKERS)

        cpu_count = os.cpu_count() or 1
        return max(1, min(cpu_count, ParallelProcessing.MAX_WORKERS))


class FilePatterns:
    """Common file patterns for analysis."""

    DEFAULT_EXCLUDE = [
        "**/node_modules/**",
        "**/__pycache__/**",
        "**/venv/**",
        "**/.venv/**",
        "**/site-packages/**",
        "**/dist/**",
        "**/build/**",
        "**/.git/**",
    ]


class OutputDefaults:
    """Defaults for report writing."""

    FORMAT = "markdown"
    CLEAN_MESSAGE = "Congratulations! Your code is clean, it does not have any complexity!"
    # Path components dropped when building report file names
    SKIPPED_PATH_PARTS = (".", "..", ":", "/", "\\")


class FormattingDefaults:
    """Defaults for console output formatting."""

    SEPARATOR_LENGTH = 60
    ERROR_PREVIEW_LENGTH = 200  # Truncate error messages in logs


class EnvVars:
    """Environment variable names read by the CLI and server."""

    CONFIG = "CCS_CONFIG"
    LOG_LEVEL = "LOG_LEVEL"
    LOG_FILE = "LOG_FILE"
    SENTRY_DSN = "SENTRY_DSN"
    SENTRY_ENVIRONMENT = "SENTRY_ENVIRONMENT"
