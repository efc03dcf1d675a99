"""Unit tests for logging and Sentry setup."""

import json
from unittest.mock import patch

import pytest
import structlog

from complex_code_spotter.core.logging import configure_logging, get_logger
from complex_code_spotter.core.sentry import init_sentry


@pytest.fixture
def restore_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    """Test structlog configuration."""

    def test_json_lines_to_file(self, temp_dir, restore_structlog):
        log_file = f"{temp_dir}/ccs.log"
        configure_logging(log_level="INFO", log_file=log_file)

        logger = get_logger("test.logging")
        logger.info("snippets_run_start", source_path="src")
        logger.debug("hidden_event")

        structlog.reset_defaults()
        with open(log_file, encoding="utf-8") as f:
            lines = [json.loads(line) for line in f if line.strip()]
        assert [line["event"] for line in lines] == ["snippets_run_start"]
        assert lines[0]["source_path"] == "src"
        assert lines[0]["level"] == "info"


class TestInitSentry:
    """Test Sentry initialization."""

    def test_without_dsn(self):
        with patch("complex_code_spotter.core.sentry.sentry_sdk.init") as sentry_init:
            assert init_sentry() is False
        sentry_init.assert_not_called()

    def test_with_dsn(self, monkeypatch):
        monkeypatch.setenv("SENTRY_DSN", "https://key@example.invalid/1")
        monkeypatch.setenv("SENTRY_ENVIRONMENT", "production")
        with patch("complex_code_spotter.core.sentry.sentry_sdk.init") as sentry_init, \
                patch("complex_code_spotter.core.sentry.sentry_sdk.set_tag") as set_tag:
            assert init_sentry(component="mcp-server") is True

        kwargs = sentry_init.call_args.kwargs
        assert kwargs["environment"] == "production"
        assert kwargs["traces_sample_rate"] == 0.1
        set_tag.assert_any_call("component", "mcp-server")

        event = kwargs["before_send"]({}, None)
        assert event["tags"] == {"service": "complex-code-spotter", "language": "python", "component": "mcp-server"}
