"""Core infrastructure shared by evo components.

This module provides errors, text-format helpers, the swappable config
holder, and process-wide logging/tracing setup. It does not depend on the
schema package.
"""

from .errors import ConfigError, ErrorDetail, EvoError, SchemaError
from .hot_swap import SharedConfig
from .serialization import canonical_json, dump_toml, parse_toml, sha256_hex
from .telemetry import LogGuard, TelemetryGuards, TraceGuard, init_logging
from .tracing_context import extract_context, inject_context


__all__ = [
    "ConfigError",
    "ErrorDetail",
    "EvoError",
    "LogGuard",
    "SchemaError",
    "SharedConfig",
    "TelemetryGuards",
    "TraceGuard",
    "canonical_json",
    "dump_toml",
    "extract_context",
    "init_logging",
    "inject_context",
    "parse_toml",
    "sha256_hex",
]
