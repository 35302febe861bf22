"""Tests for process-wide logging and tracing setup."""

import json
import logging

import pytest

from evo_common.core import telemetry
from evo_common.core.telemetry import (
    JsonLinesFormatter,
    TelemetryGuards,
    _otlp_traces_url,
    init_logging,
)


pytestmark = pytest.mark.usefixtures("reset_logging")


class TestInitLogging:
    """Test logging initialization and its guards."""

    def test_creates_log_file(self, log_dir):
        """Test records land in <log_dir>/<component>.log as JSON lines."""
        guards = init_logging("king")
        logging.getLogger("evo.test").info("hello %s", "world")
        guards.close()

        assert guards.log.path == log_dir / "king.log"
        entries = [
            json.loads(line)
            for line in guards.log.path.read_text(encoding="utf-8").splitlines()
        ]
        hello = [entry for entry in entries if entry["message"] == "hello world"]
        assert len(hello) == 1
        assert hello[0]["component"] == "king"
        assert hello[0]["level"] == "INFO"
        assert hello[0]["target"] == "evo.test"

    def test_no_trace_guard_without_endpoint(self, log_dir):
        """Test tracing stays off when no endpoint is configured."""
        with init_logging("agent") as guards:
            assert isinstance(guards, TelemetryGuards)
            assert guards.trace is None
            assert not guards.log.closed

        assert guards.log.closed

    def test_level_from_environment(self, log_dir, monkeypatch):
        """Test EVO_LOG_LEVEL sets the root level."""
        monkeypatch.setenv("EVO_LOG_LEVEL", "error")

        with init_logging("agent"):
            assert logging.getLogger().level == logging.ERROR

    def test_second_init_raises(self, log_dir):
        """Test logging cannot be initialized twice."""
        with init_logging("king"):
            with pytest.raises(RuntimeError, match="already initialized"):
                init_logging("king")

    def test_init_after_close(self, log_dir):
        """Test closing the guard allows a fresh initialization."""
        init_logging("king").close()

        with init_logging("king") as guards:
            assert not guards.log.closed

    def test_close_is_idempotent(self, log_dir):
        """Test closing twice is harmless."""
        guards = init_logging("king")
        handlers = len(logging.getLogger().handlers)

        guards.close()
        guards.close()

        assert len(logging.getLogger().handlers) == handlers - 2

    def test_tracing_failure_closes_log_guard(self, log_dir, monkeypatch):
        """Test a failed tracing setup does not leave logging half-installed."""

        def broken(component, endpoint):
            raise RuntimeError("exporter unavailable")

        monkeypatch.setattr(telemetry, "_init_tracing", broken)

        with pytest.raises(RuntimeError, match="exporter unavailable"):
            init_logging("king", otel_endpoint="http://collector:4318")

        assert telemetry._active is None

    def test_tracing_enabled_with_endpoint(self, log_dir):
        """Test an endpoint produces a trace guard that exports to /v1/traces."""
        pytest.importorskip("opentelemetry.sdk")
        pytest.importorskip("opentelemetry.exporter.otlp.proto.http")

        with init_logging("king", otel_endpoint="http://localhost:4318") as guards:
            assert guards.trace is not None
            assert guards.trace.endpoint == "http://localhost:4318/v1/traces"


class TestHelpers:
    """Test formatting helpers."""

    def test_otlp_traces_url(self):
        """Test the traces path is appended once."""
        assert _otlp_traces_url("http://c:4318") == "http://c:4318/v1/traces"
        assert _otlp_traces_url("http://c:4318/") == "http://c:4318/v1/traces"
        assert _otlp_traces_url("http://c:4318/v1/traces") == "http://c:4318/v1/traces"

    def test_json_lines_formatter(self):
        """Test records are formatted as one JSON object."""
        record = logging.LogRecord(
            "evo.test", logging.WARNING, "/src/x.py", 7, "disk at %d%%", (95,), None
        )

        entry = json.loads(JsonLinesFormatter("king").format(record))

        assert entry["message"] == "disk at 95%"
        assert entry["level"] == "WARNING"
        assert entry["line"] == 7
        assert entry["component"] == "king"
        assert entry["timestamp"].endswith("+00:00")
