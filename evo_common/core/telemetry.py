"""Process-wide logging and tracing setup.

Call ``init_logging`` once at startup and keep the returned guards alive for
the lifetime of the process::

    guards = init_logging("king")
    try:
        serve()
    finally:
        guards.close()

Log records go to two places: a rich console handler, and a JSON-lines file
``<log_dir>/<component>.log`` rotated daily. File writes happen on a
background ``QueueListener`` thread so logging never blocks on disk I/O;
closing the log guard drains the queue.
"""

import json
import logging
import logging.handlers
import queue
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, NamedTuple

from rich.logging import RichHandler

from ..config import EvoSettings, log_dir


logger = logging.getLogger(__name__)

_lock = threading.Lock()
_active: "LogGuard | None" = None

OTLP_TRACES_PATH = "/v1/traces"


class JsonLinesFormatter(logging.Formatter):
    """One JSON object per record, for machine consumption."""

    def __init__(self, component: str):
        """Initialize with the component name stamped on every record."""
        super().__init__()
        self.component = component

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "target": record.name,
            "component": self.component,
            "thread_id": record.thread,
            "file": record.pathname,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class LogGuard:
    """Keeps the background log writer alive; closing flushes and detaches."""

    def __init__(
        self,
        component: str,
        path: Path,
        listener: logging.handlers.QueueListener,
        handlers: list[logging.Handler],
    ):
        """Initialize with the listener and the handlers attached to root."""
        self.component = component
        self.path = path
        self._listener = listener
        self._handlers = handlers
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Flush pending records and remove the handlers from the root logger."""
        global _active

        with _lock:
            if self._closed:
                return
            self._closed = True
            if _active is self:
                _active = None

        self._listener.stop()
        root = logging.getLogger()
        for handler in self._handlers:
            root.removeHandler(handler)
            handler.close()
        for handler in self._listener.handlers:
            handler.close()

    def __enter__(self) -> "LogGuard":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class TraceGuard:
    """Owns the OpenTelemetry tracer provider; closing exports pending spans."""

    def __init__(self, provider: Any, endpoint: str):
        """Initialize with the SDK tracer provider."""
        self.provider = provider
        self.endpoint = endpoint
        self._closed = False

    def close(self) -> None:
        """Flush and shut down span export."""
        if self._closed:
            return
        self._closed = True
        self.provider.shutdown()

    def __enter__(self) -> "TraceGuard":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class TelemetryGuards(NamedTuple):
    """Guards returned by ``init_logging``; ``trace`` is set only with tracing."""

    log: LogGuard
    trace: TraceGuard | None = None

    def close(self) -> None:
        """Close the trace guard first so its final spans are logged."""
        if self.trace is not None:
            self.trace.close()
        self.log.close()

    def __enter__(self) -> "TelemetryGuards":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _otlp_traces_url(endpoint: str) -> str:
    endpoint = endpoint.rstrip("/")
    if endpoint.endswith(OTLP_TRACES_PATH):
        return endpoint
    return endpoint + OTLP_TRACES_PATH


def _init_tracing(component: str, endpoint: str) -> TraceGuard:
    # Requires the ``otel`` extra.
    from opentelemetry import trace
    from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
        OTLPSpanExporter,
    )
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    url = _otlp_traces_url(endpoint)
    provider = TracerProvider(resource=Resource.create({"service.name": component}))
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=url)))
    trace.set_tracer_provider(provider)
    logger.info(f"Exporting traces for {component} to {url}")
    return TraceGuard(provider, url)


def init_logging(component: str, otel_endpoint: str | None = None) -> TelemetryGuards:
    """Install process-wide logging for ``component``.

    Args:
        component: Name used for the log file and stamped on every record
        otel_endpoint: OTLP/HTTP collector URL; defaults to
            ``EVO_OTEL_ENDPOINT``. Tracing is enabled only when one is set.

    Returns:
        Guards that must be kept alive until shutdown

    Raises:
        RuntimeError: If logging is already initialized and not yet closed

    """
    global _active

    settings = EvoSettings()
    directory = log_dir()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{component}.log"

    with _lock:
        if _active is not None:
            raise RuntimeError(
                f"Logging already initialized for '{_active.component}'"
            )

        file_handler = logging.handlers.TimedRotatingFileHandler(
            path, when="midnight", encoding="utf-8", delay=True
        )
        file_handler.setFormatter(JsonLinesFormatter(component))

        records: queue.SimpleQueue = queue.SimpleQueue()
        queue_handler = logging.handlers.QueueHandler(records)
        listener = logging.handlers.QueueListener(records, file_handler)

        console_handler = RichHandler(show_path=False, rich_tracebacks=True)
        console_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

        root = logging.getLogger()
        root.setLevel(settings.log_level_number)
        root.addHandler(queue_handler)
        root.addHandler(console_handler)
        listener.start()

        guard = LogGuard(component, path, listener, [queue_handler, console_handler])
        _active = guard

    logger.info(f"Logging initialized for {component} at level {settings.log_level}")

    endpoint = otel_endpoint if otel_endpoint is not None else settings.otel_endpoint
    if not endpoint:
        return TelemetryGuards(log=guard)

    try:
        trace_guard = _init_tracing(component, endpoint)
    except Exception:
        guard.close()
        raise
    return TelemetryGuards(log=guard, trace=trace_guard)
