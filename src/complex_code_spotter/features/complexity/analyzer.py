"""
Code complexity analysis.

This module runs the per-file pipeline: read and decode the file, parse it
with the language frontend, check the tree, discover code units, score them,
evaluate thresholds and extract snippets.
"""

from pathlib import Path
from typing import Optional

from complex_code_spotter.core.logging import get_logger
from complex_code_spotter.languages import guess_language
from complex_code_spotter.models.complexity import FileSnippets, Thresholds
from complex_code_spotter.models.syntax import LanguageProfile, SyntaxNode
from complex_code_spotter.utils.text import decode_source, normalize_newlines

from .discovery import discover_units
from .metrics import score_units
from .snippets import extract_snippets
from .thresholds import evaluate_scores
from .validation import validate_tree

__all__ = [
    "analyze_tree",
    "analyze_source",
    "analyze_file",
]


def analyze_tree(
    root: SyntaxNode,
    source: str,
    source_path: str,
    profile: LanguageProfile,
    thresholds: Thresholds,
) -> FileSnippets:
    """Score a parsed file and extract its over-threshold snippets.

    Args:
        root: Syntax tree of the file
        source: Text the tree was parsed from
        source_path: Path recorded on the snippets
        profile: Classification table of the tree's language
        thresholds: Metrics to compute and their thresholds

    Returns:
        FileSnippets, possibly with no snippet

    Raises:
        MalformedTreeError: If the tree breaks span or acyclicity invariants
    """
    validate_tree(root, source)
    units = discover_units(root, profile)
    scores = score_units(units, profile, thresholds.metrics)
    snippets = extract_snippets(evaluate_scores(scores, thresholds), thresholds, source, source_path)

    logger = get_logger("complexity.analyze")
    logger.debug(
        "file_analyzed",
        file=source_path,
        units=len(units),
        snippets=len(snippets),
    )

    return FileSnippets(
        source_path=source_path,
        language=profile.name,
        snippets=snippets,
        units_analyzed=len(units),
    )


def analyze_source(
    source: str,
    source_path: str,
    thresholds: Thresholds,
    profile: Optional[LanguageProfile] = None,
) -> FileSnippets:
    """Parse source text and analyze it.

    Args:
        source: File text
        source_path: Path used for language detection and on the snippets
        thresholds: Metrics to compute and their thresholds
        profile: Frontend to use; guessed from the path when omitted

    Raises:
        UnknownLanguageError: If no frontend handles the path
        SourceParseError: If the frontend cannot parse the text
        MalformedTreeError: If the frontend produced an invalid tree
    """
    if profile is None:
        profile = guess_language(source_path)
    source = normalize_newlines(source)
    root = profile.parse(source)
    return analyze_tree(root, source, source_path, profile, thresholds)


def analyze_file(file_path: str, thresholds: Thresholds) -> FileSnippets:
    """Analyze one file from disk.

    Raises:
        OSError: If the file cannot be read
        FileAnalysisError: For decoding, language, parsing or tree failures
    """
    profile = guess_language(file_path)
    source = decode_source(Path(file_path).read_bytes(), file_path)
    return analyze_source(source, file_path, thresholds, profile)
