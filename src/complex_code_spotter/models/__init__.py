"""Data models for complex-code-spotter."""

# Complexity models
from complex_code_spotter.models.complexity import (
    AnalysisReport,
    CodeUnit,
    FileFailure,
    FileSnippets,
    MetricKind,
    Score,
    Snippet,
    Thresholds,
)

# Config models
from complex_code_spotter.models.config import (
    MetricThresholdConfig,
    SpotterConfig,
)

# Syntax tree models
from complex_code_spotter.models.syntax import (
    LanguageProfile,
    NodeRole,
    Span,
    SyntaxNode,
)

__all__ = [
    # Complexity
    "AnalysisReport",
    "CodeUnit",
    "FileFailure",
    "FileSnippets",
    "MetricKind",
    "Score",
    "Snippet",
    "Thresholds",
    # Config
    "MetricThresholdConfig",
    "SpotterConfig",
    # Syntax
    "LanguageProfile",
    "NodeRole",
    "Span",
    "SyntaxNode",
]
