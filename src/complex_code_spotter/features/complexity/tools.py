"""
Complexity analysis MCP tools.

This module provides MCP tool definitions for spotting complex code:
- find_complex_code: analyze a file or directory and return the snippets
- score_code: score every unit of a piece of source text
"""

import time
from typing import Any, Dict, List, Optional

import sentry_sdk
from pydantic import Field

from complex_code_spotter.constants import FormattingDefaults, OutputDefaults
from complex_code_spotter.core.config import parse_complexity_option
from complex_code_spotter.core.logging import get_logger
from complex_code_spotter.languages import get_language_profile, get_supported_languages
from complex_code_spotter.models.complexity import AnalysisReport, Thresholds
from complex_code_spotter.utils.text import normalize_newlines

from .discovery import discover_units
from .metrics import score_units
from .producer import SnippetsProducer
from .thresholds import evaluate_scores
from .validation import validate_tree


def _build_thresholds(complexities: Optional[List[str]]) -> Thresholds:
    """Build thresholds from ``metric[:threshold]`` strings (defaults when empty)."""
    return Thresholds.from_pairs(parse_complexity_option(value) for value in complexities or [])


def _format_report(report: AnalysisReport, written_reports: Dict[str, List[str]]) -> Dict[str, Any]:
    """Format the final response dictionary.

    Args:
        report: Analysis report of the run
        written_reports: Report files written, keyed by format

    Returns:
        Formatted response dictionary
    """
    response: Dict[str, Any] = {
        "summary": report.summary(),
        "thresholds": report.thresholds.to_dict(),
        "files": [f.to_dict() for f in report.files_with_snippets],
        "failures": [failure.to_dict() for failure in report.failures],
    }
    if report.is_clean:
        response["message"] = OutputDefaults.CLEAN_MESSAGE
    if written_reports:
        response["written_reports"] = written_reports
    return response


def find_complex_code_tool(
    source_path: str,
    complexities: Optional[List[str]] = None,
    include_patterns: Optional[List[str]] = None,
    exclude_patterns: Optional[List[str]] = None,
    output_path: Optional[str] = None,
    output_format: str = OutputDefaults.FORMAT,
    max_workers: int = 0,
) -> Dict[str, Any]:
    """
    Find functions, methods and lambdas whose complexity exceeds a threshold.

    Every unit is scored with the requested metrics. Each score strictly
    above its threshold yields one snippet holding the unit's source lines.

    Metrics:
    - Cyclomatic Complexity: McCabe's cyclomatic complexity (decision points + 1)
    - Cognitive Complexity: SonarSource cognitive complexity with nesting penalties

    Args:
        source_path: The absolute path to the file or directory to analyze
        complexities: Metrics as "metric" or "metric:threshold" (default: cyclomatic:15, cognitive:15)
        include_patterns: Glob patterns for files to include (e.g., ['src/**'])
        exclude_patterns: Glob patterns for files to exclude
        output_path: Directory to write reports to (no reports when omitted)
        output_format: Report format (markdown, html, json, all)
        max_workers: Number of parallel threads (0 = one per CPU)

    Returns:
        Dictionary with summary, thresholds, snippets grouped per file and metric, and failures

    Example usage:
        find_complex_code_tool(source_path="/path/to/project")
        find_complex_code_tool(source_path="/path/to/project", complexities=["cognitive:10"])
    """
    logger = get_logger("tool.find_complex_code")
    start_time = time.time()

    logger.info(
        "tool_invoked",
        tool="find_complex_code",
        source_path=source_path,
        complexities=complexities,
        output_path=output_path,
        output_format=output_format,
        max_workers=max_workers,
    )

    try:
        producer = SnippetsProducer(
            thresholds=_build_thresholds(complexities),
            include=include_patterns,
            exclude=exclude_patterns,
            output_format=output_format,
            write=output_path is not None,
            max_workers=max_workers,
        )
        report = producer.run(source_path, output_path)

        execution_time = time.time() - start_time
        logger.info(
            "tool_completed",
            tool="find_complex_code",
            execution_time_seconds=round(execution_time, 3),
            total_snippets=len(report.snippets),
            files_failed=len(report.failures),
            status="success",
        )

        return _format_report(report, producer.written_reports)

    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(
            "tool_failed",
            tool="find_complex_code",
            execution_time_seconds=round(execution_time, 3),
            error=str(e)[:FormattingDefaults.ERROR_PREVIEW_LENGTH],
            status="failed",
        )
        sentry_sdk.capture_exception(e, extras={
            "tool": "find_complex_code",
            "source_path": source_path,
            "execution_time_seconds": round(execution_time, 3),
        })
        raise


def score_code_tool(
    code: str,
    language: str = "python",
    complexities: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """
    Score every function, method and lambda of a piece of source code.

    Args:
        code: Source text to analyze
        language: Programming language of the code
        complexities: Metrics as "metric" or "metric:threshold" (default: cyclomatic:15, cognitive:15)

    Returns:
        Dictionary with one entry per unit: name, lines, scores and exceeded metrics
    """
    logger = get_logger("tool.score_code")
    start_time = time.time()

    logger.info("tool_invoked", tool="score_code", language=language, code_length=len(code))

    try:
        thresholds = _build_thresholds(complexities)
        profile = get_language_profile(language)
        source = normalize_newlines(code)
        root = profile.parse(source)
        validate_tree(root, source)
        units = discover_units(root, profile)

        entries: Dict[int, Dict[str, Any]] = {}
        for score, flagged in evaluate_scores(score_units(units, profile, thresholds.metrics), thresholds):
            entry = entries.setdefault(score.unit.index, {
                "name": score.unit.qualified_name,
                "start_line": score.unit.span.start_line,
                "end_line": score.unit.span.end_line,
                "scores": {},
                "exceeds": [],
            })
            entry["scores"][score.metric.value] = score.value
            if flagged:
                entry["exceeds"].append(score.metric.value)

        execution_time = time.time() - start_time
        logger.info(
            "tool_completed",
            tool="score_code",
            execution_time_seconds=round(execution_time, 3),
            units=len(units),
            status="success",
        )

        return {
            "language": profile.name,
            "thresholds": thresholds.to_dict(),
            "units": [entries[unit.index] for unit in units],
        }

    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(
            "tool_failed",
            tool="score_code",
            execution_time_seconds=round(execution_time, 3),
            error=str(e)[:FormattingDefaults.ERROR_PREVIEW_LENGTH],
            status="failed",
        )
        sentry_sdk.capture_exception(e, extras={
            "tool": "score_code",
            "language": language,
            "execution_time_seconds": round(execution_time, 3),
        })
        raise


def register_complexity_tools(mcp: Any) -> None:
    """Register complexity analysis tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()  # type: ignore[misc]
    def find_complex_code(
        source_path: str = Field(description="The absolute path to the file or directory to analyze"),
        complexities: List[str] = Field(
            default_factory=list,
            description="Metrics as 'metric' or 'metric:threshold', e.g. ['cyclomatic:10', 'cognitive']. Default: both at 15",
        ),
        include_patterns: List[str] = Field(
            default_factory=list,
            description="Glob patterns for files to include (e.g., ['src/**']). Empty means every supported file",
        ),
        exclude_patterns: Optional[List[str]] = Field(
            default=None,
            description="Glob patterns for files to exclude. Defaults skip vendored and build directories",
        ),
        output_path: Optional[str] = Field(default=None, description="Directory to write reports to"),
        output_format: str = Field(default=OutputDefaults.FORMAT, description="Report format: markdown, html, json or all"),
        max_workers: int = Field(default=0, description="Number of parallel threads (0 = one per CPU)"),
    ) -> Dict[str, Any]:
        """Wrapper that calls the standalone find_complex_code_tool function."""
        return find_complex_code_tool(
            source_path=source_path,
            complexities=complexities,
            include_patterns=include_patterns,
            exclude_patterns=exclude_patterns,
            output_path=output_path,
            output_format=output_format,
            max_workers=max_workers,
        )

    @mcp.tool()  # type: ignore[misc]
    def score_code(
        code: str = Field(description="Source code to score"),
        language: str = Field(
            default="python",
            description=f"The programming language ({', '.join(get_supported_languages())})",
        ),
        complexities: List[str] = Field(
            default_factory=list,
            description="Metrics as 'metric' or 'metric:threshold'. Default: both at 15",
        ),
    ) -> Dict[str, Any]:
        """Wrapper that calls the standalone score_code_tool function."""
        return score_code_tool(code=code, language=language, complexities=complexities)
