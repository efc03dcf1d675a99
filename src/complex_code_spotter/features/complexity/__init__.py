"""
Code complexity analysis feature.

This module spots complex code:
- Unit discovery over language-agnostic syntax trees
- Cyclomatic complexity calculation
- Cognitive complexity calculation
- Threshold evaluation and snippet extraction
- Parallel analysis of source trees and report writing
"""

from .analyzer import (
    analyze_file,
    analyze_source,
    analyze_tree,
)
from .discovery import discover_units
from .metrics import (
    METRIC_CALCULATORS,
    calculate_cognitive_complexity,
    calculate_cyclomatic_complexity,
    score_unit,
    score_units,
)
from .producer import SnippetsProducer
from .reporter import OutputFormat, write_reports
from .snippets import extract_snippets
from .thresholds import evaluate_scores, is_flagged
from .tools import register_complexity_tools
from .validation import validate_tree

__all__ = [
    # Metrics
    "METRIC_CALCULATORS",
    "calculate_cognitive_complexity",
    "calculate_cyclomatic_complexity",
    "score_unit",
    "score_units",
    # Pipeline
    "discover_units",
    "validate_tree",
    "evaluate_scores",
    "is_flagged",
    "extract_snippets",
    # Analyzer
    "analyze_file",
    "analyze_source",
    "analyze_tree",
    "SnippetsProducer",
    # Output
    "OutputFormat",
    "write_reports",
    # Tools
    "register_complexity_tools",
]
