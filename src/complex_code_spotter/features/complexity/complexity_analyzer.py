"""Parallel complexity analysis execution.

This module handles analyzing files in parallel and merging their
snippets into a single report in file order.
"""
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Union

from ...constants import FormattingDefaults, ParallelProcessing
from ...core.exceptions import FileAnalysisError
from ...core.logging import get_logger
from ...models.complexity import AnalysisReport, FileFailure, FileSnippets, Thresholds

from .analyzer import analyze_file


class ParallelComplexityAnalyzer:
    """Analyzes files in parallel and extracts their complex snippets."""

    def __init__(self, thresholds: Thresholds, max_workers: int = 0):
        """Initialize the parallel analyzer.

        Args:
            thresholds: Metrics to compute and their thresholds
            max_workers: Number of worker threads (0 = one per CPU)
        """
        self.thresholds = thresholds
        self.max_workers = ParallelProcessing.get_optimal_workers(max_workers)
        self.logger = get_logger("complexity.parallel_analyzer")

    def analyze_files(self, files: List[str]) -> AnalysisReport:
        """Analyze multiple files in parallel.

        A file that cannot be read, decoded, parsed or validated is recorded
        as a failure and the remaining files are still analyzed.

        Args:
            files: List of file paths to analyze

        Returns:
            AnalysisReport with per-file results in the order of ``files``
        """
        start_time = time.time()
        self.logger.info(
            "analyze_files_start",
            file_count=len(files),
            metrics=[metric.value for metric in self.thresholds.metrics],
            max_workers=self.max_workers,
        )

        outcomes: Dict[int, Union[FileSnippets, FileFailure]] = {}

        if files:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = {
                    executor.submit(analyze_file, file_path, self.thresholds): position
                    for position, file_path in enumerate(files)
                }

                for future in as_completed(futures):
                    position = futures[future]
                    try:
                        outcomes[position] = future.result()
                    except (FileAnalysisError, OSError) as e:
                        outcomes[position] = self._failure(files[position], e)

        report = AnalysisReport(thresholds=self.thresholds)
        for position in range(len(files)):
            outcome = outcomes[position]
            if isinstance(outcome, FileFailure):
                report.failures.append(outcome)
            else:
                report.files.append(outcome)
        report.execution_time_seconds = time.time() - start_time

        self.logger.info(
            "analyze_files_complete",
            files_analyzed=len(report.files),
            files_failed=len(report.failures),
            total_snippets=len(report.snippets),
            execution_time_seconds=round(report.execution_time_seconds, 3),
        )

        return report

    def _failure(self, file_path: str, error: Exception) -> FileFailure:
        kind = error.kind if isinstance(error, FileAnalysisError) else "io"
        message = error.message if isinstance(error, FileAnalysisError) else str(error)
        self.logger.warning(
            "file_analysis_failed",
            file=file_path,
            kind=kind,
            error=message[:FormattingDefaults.ERROR_PREVIEW_LENGTH],
        )
        return FileFailure(source_path=file_path, kind=kind, message=message)
