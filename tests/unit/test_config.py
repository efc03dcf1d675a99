"""Unit tests for configuration loading and command line parsing."""

from unittest.mock import MagicMock

import pytest

from complex_code_spotter.constants import OutputDefaults
from complex_code_spotter.core.config import (
    complexity_pairs_from_config,
    load_config_file,
    parse_args_and_get_config,
    parse_complexity_option,
)
from complex_code_spotter.core.exceptions import ConfigurationError
from complex_code_spotter.models.complexity import MetricKind
from complex_code_spotter.models.config import SpotterConfig


@pytest.fixture(autouse=True)
def logging_setup(monkeypatch) -> MagicMock:
    """Keep argument parsing from reconfiguring structlog globally."""
    mock = MagicMock()
    monkeypatch.setattr("complex_code_spotter.core.config.configure_logging", mock)
    return mock


class TestParseComplexityOption:
    """Test ``metric[:threshold]`` parsing."""

    def test_bare_metric_uses_default(self):
        assert parse_complexity_option("cyclomatic") == (MetricKind.CYCLOMATIC, 15)

    def test_metric_with_threshold(self):
        assert parse_complexity_option("cognitive:25") == (MetricKind.COGNITIVE, 25)

    @pytest.mark.parametrize("value", ["halstead", "cyclomatic:ten", "cyclomatic:", ":10"])
    def test_invalid(self, value):
        with pytest.raises(ConfigurationError, match="Possible values: cyclomatic, cognitive, cyclomatic:threshold"):
            parse_complexity_option(value)


class TestLoadConfigFile:
    """Test YAML configuration files."""

    def test_valid_file(self, write_file):
        path = write_file("ccs.yaml", """
        complexities:
          - cyclomatic:20
          - metric: cognitive
            threshold: 25
          - metric: cyclomatic
        include: ["src/**"]
        exclude: ["**/generated/**"]
        output_format: html
        max_workers: 2
        """)
        config = load_config_file(path)
        assert config.include == ["src/**"]
        assert config.exclude == ["**/generated/**"]
        assert config.output_format == "html"
        assert config.max_workers == 2
        assert complexity_pairs_from_config(config) == [
            (MetricKind.CYCLOMATIC, 20),
            (MetricKind.COGNITIVE, 25),
            (MetricKind.CYCLOMATIC, 15),
        ]

    def test_empty_file(self, write_file):
        assert load_config_file(write_file("empty.yaml", "")) == SpotterConfig()

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigurationError, match="File does not exist"):
            load_config_file(f"{temp_dir}/missing.yaml")

    def test_directory(self, temp_dir):
        with pytest.raises(ConfigurationError, match="not a file"):
            load_config_file(temp_dir)

    def test_invalid_yaml(self, write_file):
        with pytest.raises(ConfigurationError, match="YAML parsing failed"):
            load_config_file(write_file("bad.yaml", "complexities: [cyclomatic\n"))

    def test_not_a_dictionary(self, write_file):
        with pytest.raises(ConfigurationError, match="YAML dictionary"):
            load_config_file(write_file("list.yaml", "- cyclomatic\n"))

    @pytest.mark.parametrize(
        "content",
        [
            "unknown_key: 1\n",
            "output_format: pdf\n",
            "max_workers: -1\n",
            "complexities:\n  - metric: halstead\n",
        ],
    )
    def test_validation_errors(self, write_file, content):
        path = write_file("invalid.yaml", content)
        with pytest.raises(ConfigurationError, match="Validation failed") as exc_info:
            load_config_file(path)
        assert exc_info.value.config_path == path


class TestParseArgs:
    """Test command line parsing and precedence."""

    def test_defaults(self, temp_dir):
        settings = parse_args_and_get_config([temp_dir, "out"])
        assert settings.source_path == temp_dir
        assert settings.output_path == "out"
        assert settings.thresholds.to_dict() == {"cyclomatic": 15, "cognitive": 15}
        assert settings.include == []
        assert settings.exclude is None
        assert settings.output_format == OutputDefaults.FORMAT
        assert settings.max_workers == 0

    def test_flags(self, temp_dir):
        settings = parse_args_and_get_config([
            temp_dir, "out",
            "-c", "cognitive:30",
            "-I", "src/**",
            "-X", "**/tests/**",
            "-X", "*_pb2.py",
            "-O", "json",
            "-j", "4",
        ])
        assert settings.thresholds.to_dict() == {"cognitive": 30}
        assert settings.include == ["src/**"]
        assert settings.exclude == ["**/tests/**", "*_pb2.py"]
        assert settings.output_format == "json"
        assert settings.max_workers == 4

    def test_invalid_complexity(self, temp_dir):
        with pytest.raises(ConfigurationError):
            parse_args_and_get_config([temp_dir, "out", "-c", "halstead"])

    def test_invalid_threshold(self, temp_dir):
        with pytest.raises(ConfigurationError):
            parse_args_and_get_config([temp_dir, "out", "-c", "cyclomatic:0"])

    def test_negative_jobs(self, temp_dir):
        with pytest.raises(ConfigurationError, match="jobs"):
            parse_args_and_get_config([temp_dir, "out", "-j", "-1"])

    def test_config_file_values(self, temp_dir, write_file):
        path = write_file("ccs.yaml", """
        complexities: [cognitive:12]
        exclude: []
        output_format: all
        """)
        settings = parse_args_and_get_config([temp_dir, "out", "--config", path])
        assert settings.config_path == path
        assert settings.thresholds.to_dict() == {"cognitive": 12}
        assert settings.exclude == []
        assert settings.output_format == "all"

    def test_flags_override_config_file(self, temp_dir, write_file):
        path = write_file("ccs.yaml", "complexities: [cognitive:12]\noutput_format: all\n")
        settings = parse_args_and_get_config([temp_dir, "out", "--config", path, "-c", "cyclomatic:8", "-O", "html"])
        assert settings.thresholds.to_dict() == {"cyclomatic": 8}
        assert settings.output_format == "html"

    def test_config_from_environment(self, temp_dir, write_file, monkeypatch):
        path = write_file("ccs.yaml", "complexities: [cyclomatic:9]\n")
        monkeypatch.setenv("CCS_CONFIG", path)
        settings = parse_args_and_get_config([temp_dir, "out"])
        assert settings.config_path == path
        assert settings.thresholds.to_dict() == {"cyclomatic": 9}

    def test_missing_config_file(self, temp_dir):
        with pytest.raises(ConfigurationError, match="File does not exist"):
            parse_args_and_get_config([temp_dir, "out", "--config", f"{temp_dir}/missing.yaml"])

    def test_verbose_sets_debug_logging(self, temp_dir, logging_setup):
        settings = parse_args_and_get_config([temp_dir, "out", "-v", "--log-level", "ERROR"])
        assert settings.verbose
        assert logging_setup.call_args.kwargs["log_level"] == "DEBUG"

    def test_log_level_from_environment(self, temp_dir, logging_setup, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        parse_args_and_get_config([temp_dir, "out"])
        assert logging_setup.call_args.kwargs["log_level"] == "WARNING"

    def test_log_file_uses_json(self, temp_dir, logging_setup):
        log_file = f"{temp_dir}/ccs.log"
        parse_args_and_get_config([temp_dir, "out", "--log-file", log_file])
        assert logging_setup.call_args.kwargs["log_file"] == log_file
        assert logging_setup.call_args.kwargs["renderer"] == "json"
