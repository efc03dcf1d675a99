"""Configuration management for complex-code-spotter."""

import argparse
import os
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import yaml
from pydantic import ValidationError

from complex_code_spotter.constants import EnvVars, OutputDefaults
from complex_code_spotter.core.exceptions import ConfigurationError
from complex_code_spotter.core.logging import configure_logging, get_logger
from complex_code_spotter.models.complexity import MetricKind, Thresholds
from complex_code_spotter.models.config import MetricThresholdConfig, SpotterConfig


def _possible_values() -> str:
    names = MetricKind.names()
    return ", ".join(names + [f"{name}:threshold" for name in names])


def parse_complexity_option(value: str) -> Tuple[MetricKind, int]:
    """Parse a ``metric`` or ``metric:threshold`` option.

    A bare metric gets its default threshold. The threshold itself is
    range-checked later, when the Thresholds are built.

    Raises:
        ConfigurationError: If the metric is unknown or the threshold is not an integer
    """
    metric_name, separator, raw_threshold = value.partition(":")
    try:
        metric = MetricKind.parse(metric_name)
    except ConfigurationError:
        raise ConfigurationError(f"Invalid complexity '{value}'. Possible values: {_possible_values()}") from None

    if not separator:
        return metric, metric.default_threshold

    try:
        threshold = int(raw_threshold.strip())
    except ValueError:
        raise ConfigurationError(f"Invalid complexity '{value}'. Possible values: {_possible_values()}") from None
    return metric, threshold


def load_config_file(config_path: str) -> SpotterConfig:
    """Load and validate a YAML configuration file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Validated SpotterConfig model

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    if not os.path.exists(config_path):
        raise ConfigurationError("File does not exist", config_path)

    if not os.path.isfile(config_path):
        raise ConfigurationError("Path is not a file", config_path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"YAML parsing failed: {e}", config_path) from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read file: {e}", config_path) from e

    if config_data is None:
        return SpotterConfig()

    if not isinstance(config_data, dict):
        raise ConfigurationError("Config must be a YAML dictionary", config_path)

    try:
        return SpotterConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Validation failed: {e}", config_path) from e


def complexity_pairs_from_config(config: SpotterConfig) -> List[Tuple[MetricKind, int]]:
    """Turn the ``complexities`` entries of a config file into pairs."""
    pairs = []
    for entry in config.complexities:
        if isinstance(entry, MetricThresholdConfig):
            metric = MetricKind.parse(entry.metric)
            pairs.append((metric, metric.default_threshold if entry.threshold is None else entry.threshold))
        else:
            pairs.append(parse_complexity_option(entry))
    return pairs


@dataclass
class RunSettings:
    """Resolved settings of one command line run."""

    source_path: str
    output_path: str
    thresholds: Thresholds
    include: List[str] = field(default_factory=list)
    exclude: Optional[List[str]] = None
    output_format: str = OutputDefaults.FORMAT
    max_workers: int = 0
    verbose: bool = False
    config_path: Optional[str] = None


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="ccs",
        description="Complex Code Spotter - Extracts snippets of code whose complexity exceeds a threshold",
        epilog=f"""
complexities:
  {_possible_values()}
  Thresholds range from 1 to 100 (larger values are clamped). Default: 15

environment variables:
  {EnvVars.CONFIG:<18} Path to a YAML config file (overridden by --config flag)
  {EnvVars.LOG_LEVEL:<18} Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)
  {EnvVars.LOG_FILE:<18} Path to log file (logs to stderr by default)
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("source_path", metavar="SOURCE", help="File or directory to analyze")
    parser.add_argument("output_path", metavar="OUTPUT", help="Directory receiving the snippet reports")
    parser.add_argument(
        "-c",
        "--complexities",
        action="append",
        default=None,
        metavar="METRIC[:THRESHOLD]",
        help="Complexity metric and threshold considered for snippets. Repeatable. Default: cyclomatic:15 cognitive:15",
    )
    parser.add_argument(
        "-I", "--include", action="append", default=None, metavar="GLOB", help="Glob to include files. Repeatable."
    )
    parser.add_argument(
        "-X", "--exclude", action="append", default=None, metavar="GLOB", help="Glob to exclude files. Repeatable."
    )
    parser.add_argument(
        "-O",
        "--output-format",
        choices=["markdown", "html", "json", "all"],
        default=None,
        help=f"Output format (default: {OutputDefaults.FORMAT})",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        metavar="N",
        help="Number of worker threads (default: one per CPU)",
    )
    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help=f"Path to a YAML config file. Can also be set via {EnvVars.CONFIG} env var.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        metavar="LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Can also be set via LOG_LEVEL env var. Default: INFO",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        default=None,
        help="Path to log file (logs to stderr by default). Can also be set via LOG_FILE env var.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _resolve_config_path(args: argparse.Namespace) -> Optional[str]:
    """Precedence: --config flag > CCS_CONFIG env > None"""
    return args.config or os.environ.get(EnvVars.CONFIG) or None


def _configure_logging_from_args(args: argparse.Namespace) -> None:
    """Configure logging based on command-line arguments and environment.

    Precedence: --verbose > --log-level/--log-file flags > env vars > defaults
    """
    if args.verbose:
        log_level = "DEBUG"
    else:
        log_level = args.log_level or os.environ.get(EnvVars.LOG_LEVEL, "INFO")

    log_file = args.log_file or os.environ.get(EnvVars.LOG_FILE)
    renderer = "console" if log_file is None and sys.stderr.isatty() else "json"

    configure_logging(log_level=log_level, log_file=log_file, renderer=renderer)


def parse_args_and_get_config(argv: Optional[Sequence[str]] = None) -> RunSettings:
    """Parse command-line arguments and merge them with the config file.

    Precedence: command-line flags > config file > defaults

    Raises:
        ConfigurationError: If an option or the config file is invalid
    """
    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    _configure_logging_from_args(args)

    config_path = _resolve_config_path(args)
    file_config = load_config_file(config_path) if config_path else SpotterConfig()

    if args.complexities:
        pairs = [parse_complexity_option(value) for value in args.complexities]
    else:
        pairs = complexity_pairs_from_config(file_config)

    if args.jobs is not None and args.jobs < 0:
        raise ConfigurationError(f"Number of jobs must be positive, got {args.jobs}")

    settings = RunSettings(
        source_path=args.source_path,
        output_path=args.output_path,
        thresholds=Thresholds.from_pairs(pairs),
        include=args.include if args.include is not None else list(file_config.include),
        exclude=args.exclude if args.exclude is not None else file_config.exclude,
        output_format=args.output_format or file_config.output_format or OutputDefaults.FORMAT,
        max_workers=args.jobs if args.jobs is not None else (file_config.max_workers or 0),
        verbose=args.verbose,
        config_path=config_path,
    )

    logger = get_logger("config")
    logger.info(
        "config_resolved",
        config_path=config_path,
        thresholds=settings.thresholds.to_dict(),
        output_format=settings.output_format,
        max_workers=settings.max_workers,
    )

    return settings
