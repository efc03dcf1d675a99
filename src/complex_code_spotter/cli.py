"""Command line entry point: ``ccs SOURCE OUTPUT``."""

import sys
from typing import List, Optional, Sequence

import sentry_sdk

from complex_code_spotter.constants import OutputDefaults
from complex_code_spotter.core.config import parse_args_and_get_config
from complex_code_spotter.core.exceptions import ConfigurationError
from complex_code_spotter.core.logging import get_logger
from complex_code_spotter.core.sentry import init_sentry
from complex_code_spotter.features.complexity.producer import SnippetsProducer
from complex_code_spotter.models.complexity import AnalysisReport
from complex_code_spotter.utils.console_logger import console


def print_report(report: AnalysisReport, written_reports: dict) -> None:
    """Print a short summary of a run."""
    if report.is_clean:
        console.log(OutputDefaults.CLEAN_MESSAGE)
    else:
        summary = report.summary()
        console.header("Complex Code Spotter")
        console.log(f"Files analyzed: {summary['files_analyzed']}")
        console.log(f"Units analyzed: {summary['units_analyzed']}")
        for metric in report.thresholds.metrics:
            count = summary["snippets_by_metric"].get(metric.value, 0)
            console.log(f"  {metric.value} > {report.thresholds.threshold_for(metric)}: {count} snippet(s)")
        for file_snippets in report.files_with_snippets:
            console.debug(f"{file_snippets.source_path}: {len(file_snippets.snippets)} snippet(s)")
        for fmt, paths in written_reports.items():
            console.success(f"{len(paths)} {fmt} file(s) written")

    for failure in report.failures:
        console.warning(f"{failure.source_path}: {failure.kind}: {failure.message}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line interface.

    Returns:
        0 on success, 1 on configuration or unexpected errors
    """
    try:
        settings = parse_args_and_get_config(argv)
    except ConfigurationError as e:
        console.error(str(e))
        return 1

    init_sentry(component="cli")
    console.set_verbose(settings.verbose)
    logger = get_logger("cli")

    try:
        producer = SnippetsProducer(
            thresholds=settings.thresholds,
            include=settings.include,
            exclude=settings.exclude,
            output_format=settings.output_format,
            write=True,
            max_workers=settings.max_workers,
        )
        report = producer.run(settings.source_path, settings.output_path)
    except ConfigurationError as e:
        logger.error("run_failed", error=str(e))
        console.error(str(e))
        return 1
    except Exception as e:
        logger.error("run_failed", error=str(e))
        sentry_sdk.capture_exception(e, extras={
            "source_path": settings.source_path,
            "output_path": settings.output_path,
        })
        console.error(str(e))
        return 1

    print_report(report, producer.written_reports)
    return 0


def run(args: Optional[List[str]] = None) -> None:
    """Console script wrapper around main()."""
    sys.exit(main(args))


if __name__ == "__main__":
    run()
