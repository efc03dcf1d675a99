"""Console output for the command line interface.

Structured logs go to stderr through structlog; this module is the
human-facing channel for results (summaries, report locations, the clean
code message).

Usage:
    from complex_code_spotter.utils.console_logger import console

    console.log("Analyzing 12 files...")
    console.success("Reports written to out/")
"""

import sys
from typing import Any, Optional, TextIO

from complex_code_spotter.constants import FormattingDefaults


class ConsoleLogger:
    """print() replacement with quiet and verbose switches."""

    def __init__(self, quiet: bool = False, verbose: bool = False, stream: Optional[TextIO] = None) -> None:
        """Initialize console logger.

        Args:
            quiet: If True, suppress normal log output
            verbose: If True, show debug messages
            stream: Output stream (stdout when None)
        """
        self.quiet = quiet
        self.verbose = verbose
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def set_verbose(self, verbose: bool) -> None:
        self.verbose = verbose

    def log(self, message: str = "", **kwargs: Any) -> None:
        """Output a normal message, respecting quiet mode."""
        if not self.quiet:
            print(message, file=self.stream, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Output a debug message, only in verbose mode."""
        if self.verbose:
            print(f"[DEBUG] {message}", file=self.stream, **kwargs)

    def success(self, message: str, **kwargs: Any) -> None:
        if not self.quiet:
            print(f"✓ {message}", file=self.stream, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Output an error message to stderr, regardless of quiet mode."""
        print(f"ERROR: {message}", file=sys.stderr, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        print(f"WARNING: {message}", file=sys.stderr, **kwargs)

    def separator(self, char: str = "=", length: int = FormattingDefaults.SEPARATOR_LENGTH, **kwargs: Any) -> None:
        if not self.quiet:
            print(char * length, file=self.stream, **kwargs)

    def header(self, message: str, **kwargs: Any) -> None:
        """Output a header framed by separator lines."""
        if not self.quiet:
            self.separator()
            print(message, file=self.stream, **kwargs)
            self.separator()


# Global console logger instance
console = ConsoleLogger()
