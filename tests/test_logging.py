"""
Tests for period_spine.logging.

Tests verify:
- JSON output carries service metadata and ECS field names
- DEBUG logs are suppressed at INFO level
- Settings fill in unspecified arguments
- LogContext binds and unbinds keys
- Named loggers bind their name as logger_name
"""

import json

import pytest
import structlog
from structlog.testing import capture_logs

from period_spine.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


@pytest.fixture
def stdout_lines(capsys):
    def read() -> list[str]:
        return [line for line in capsys.readouterr().out.splitlines() if line.strip()]

    return read


@pytest.fixture(autouse=True)
def _clear_bound_context():
    yield
    clear_context()


class TestConfigureLogging:
    def test_json_output(self, stdout_lines):
        configure_logging(level="INFO", json_format=True, service="reports")

        get_logger("tests").info("grouping_built", buckets=3)

        record = json.loads(stdout_lines()[-1])
        assert record["event"] == "grouping_built"
        assert record["buckets"] == 3
        assert record["service.name"] == "reports"
        assert record["log.level"] == "info"
        assert "@timestamp" in record

    def test_debug_suppressed_at_info(self, stdout_lines):
        configure_logging(level="INFO", json_format=True)

        get_logger("tests").debug("hidden")

        assert not any("hidden" in line for line in stdout_lines())

    def test_settings_fill_defaults(self, monkeypatch, stdout_lines):
        monkeypatch.setenv("PERIOD_SPINE_LOG_LEVEL", "debug")
        monkeypatch.setenv("PERIOD_SPINE_JSON_LOGS", "true")
        monkeypatch.setenv("PERIOD_SPINE_SERVICE_NAME", "from-env")

        configure_logging()
        get_logger("tests").debug("visible")

        record = json.loads(stdout_lines()[-1])
        assert record["event"] == "visible"
        assert record["service.name"] == "from-env"


class TestContext:
    def test_bind_context(self):
        bind_context(report="monthly")

        assert structlog.contextvars.get_contextvars() == {"report": "monthly"}

    def test_log_context_scoped(self):
        with LogContext(report="monthly", run="abc"):
            assert structlog.contextvars.get_contextvars() == {"report": "monthly", "run": "abc"}

        assert structlog.contextvars.get_contextvars() == {}


class TestGetLogger:
    def test_package_imports_with_module_logger(self):
        import period_spine
        from period_spine import grouping

        assert period_spine.GroupedByMonth is grouping.GroupedByMonth
        assert grouping.logger is not None

    def test_name_bound_as_logger_name(self):
        with capture_logs() as logs:
            get_logger(__name__).info("grouping_built", buckets=1)

        assert logs[0]["event"] == "grouping_built"
        assert logs[0]["logger_name"] == __name__

    def test_name_in_json_output(self, stdout_lines):
        configure_logging(level="INFO", json_format=True)

        get_logger("reports.monthly").info("grouping_built")

        record = json.loads(stdout_lines()[-1])
        assert record["logger_name"] == "reports.monthly"

    def test_unnamed_logger(self):
        with capture_logs() as logs:
            get_logger().info("grouping_built")

        assert "logger_name" not in logs[0]
