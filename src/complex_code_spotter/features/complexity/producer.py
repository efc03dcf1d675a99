"""End-to-end snippet production for a source tree."""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from complex_code_spotter.constants import FilePatterns
from complex_code_spotter.core.exceptions import ConfigurationError
from complex_code_spotter.core.logging import get_logger
from complex_code_spotter.models.complexity import AnalysisReport, Thresholds

from .complexity_analyzer import ParallelComplexityAnalyzer
from .complexity_file_finder import ComplexityFileFinder
from .reporter import OutputFormat, write_reports


class SnippetsProducer:
    """Finds files, analyzes them in parallel and optionally writes reports.

    Example:
        report = SnippetsProducer(
            thresholds=Thresholds.from_pairs([("cyclomatic", 10)]),
            exclude=["**/tests/**"],
            write=True,
        ).run("src", "reports")
    """

    def __init__(
        self,
        thresholds: Optional[Thresholds] = None,
        include: Optional[Sequence[str]] = None,
        exclude: Optional[Sequence[str]] = None,
        output_format: Union[OutputFormat, str] = OutputFormat.MARKDOWN,
        write: bool = False,
        max_workers: int = 0,
    ) -> None:
        self.thresholds = thresholds or Thresholds.default_thresholds()
        self.include = list(include or [])
        self.exclude = list(FilePatterns.DEFAULT_EXCLUDE if exclude is None else exclude)
        self.output_format = output_format if isinstance(output_format, OutputFormat) else OutputFormat.parse(output_format)
        self.write = write
        self.max_workers = max_workers
        self.logger = get_logger("complexity.producer")
        self.written_reports: Dict[str, List[str]] = {}

    def _validate_paths(self, source_path: str, output_path: Optional[str]) -> None:
        if not Path(source_path).exists():
            raise ConfigurationError(f"Source path does not exist: {source_path}")
        if output_path is not None and Path(output_path).is_file():
            raise ConfigurationError(f"Output path MUST be a directory: {output_path}")
        if self.write and output_path is None:
            raise ConfigurationError("An output path is required to write reports")

    def run(self, source_path: str, output_path: Optional[str] = None) -> AnalysisReport:
        """Analyze every file under source_path.

        Args:
            source_path: File or directory to analyze
            output_path: Directory receiving the reports when writing is enabled

        Returns:
            AnalysisReport with the snippets and per-file failures

        Raises:
            ConfigurationError: If a path is invalid
        """
        self._validate_paths(source_path, output_path)

        self.logger.info(
            "snippets_run_start",
            source_path=source_path,
            output_path=output_path,
            thresholds=self.thresholds.to_dict(),
            output_format=self.output_format.value,
            write=self.write,
        )

        files = ComplexityFileFinder().find_files(source_path, self.include, self.exclude)
        report = ParallelComplexityAnalyzer(self.thresholds, self.max_workers).analyze_files(files)

        self.written_reports = {}
        if report.is_clean:
            self.logger.info("snippets_run_clean", files_analyzed=len(report.files))
        elif self.write and output_path is not None:
            self.written_reports = write_reports(output_path, report.files, self.output_format)

        self.logger.info("snippets_run_complete", **report.summary())
        return report
