"""Core infrastructure for complex-code-spotter."""

from complex_code_spotter.core.exceptions import (
    ConfigurationError,
    FileAnalysisError,
    MalformedTreeError,
    SourceDecodeError,
    SourceParseError,
    SpotterError,
    UnknownLanguageError,
)
from complex_code_spotter.core.logging import (
    configure_logging,
    get_logger,
)
from complex_code_spotter.core.sentry import (
    init_sentry,
)

__all__ = [
    # Exceptions
    "SpotterError",
    "ConfigurationError",
    "FileAnalysisError",
    "UnknownLanguageError",
    "SourceDecodeError",
    "SourceParseError",
    "MalformedTreeError",
    # Logging
    "configure_logging",
    "get_logger",
    # Sentry
    "init_sentry",
]
