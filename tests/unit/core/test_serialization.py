"""Tests for canonical JSON, TOML helpers and error translation."""

import datetime

import pytest

from evo_common.core.errors import ConfigError, ErrorDetail, SchemaError
from evo_common.core.serialization import (
    canonical_json,
    dump_toml,
    locate_key,
    parse_toml,
    sha256_hex,
)


DOCUMENT = """\
top = 1

[server]
host = "h"

[[providers]]
name = "a"

[[providers]]
name = "b"

[providers.rate_limit]
burst_size = 1
"""


class TestCanonicalJson:
    """Test the canonical encoder."""

    def test_sorted_compact(self):
        """Test keys are sorted at every level with no whitespace."""
        assert canonical_json({"b": [1, {"d": 1, "c": 2}], "a": None}) == (
            '{"a":null,"b":[1,{"c":2,"d":1}]}'
        )

    def test_rejects_nan(self):
        """Test non-finite floats have no JSON encoding."""
        with pytest.raises(ValueError):
            canonical_json({"x": float("inf")})

    def test_sha256_hex(self):
        """Test the digest of a known string."""
        assert sha256_hex("") == (
            "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )


class TestToml:
    """Test TOML reading and writing."""

    def test_parse(self):
        """Test a document parses to nested dicts and lists."""
        data = parse_toml(DOCUMENT)

        assert data["top"] == 1
        assert [p["name"] for p in data["providers"]] == ["a", "b"]

    def test_parse_error_location(self):
        """Test syntax errors carry line and column."""
        with pytest.raises(ConfigError) as exc_info:
            parse_toml("a = 1\nb = = 2\n")

        assert exc_info.value.line is not None
        assert exc_info.value.location.startswith("line ")

    def test_dump(self):
        """Test a mapping is written as TOML."""
        assert parse_toml(dump_toml({"a": {"b": [1, 2]}})) == {"a": {"b": [1, 2]}}

    def test_dump_unsupported_value(self):
        """Test values TOML cannot represent raise ConfigError."""
        with pytest.raises(ConfigError, match="no TOML representation"):
            dump_toml({"a": object()})

    def test_datetime_is_toml_native(self):
        """Test TOML datetimes parse to datetime objects."""
        data = parse_toml("at = 2026-01-01T00:00:00Z\n")

        assert isinstance(data["at"], datetime.datetime)


class TestLocateKey:
    """Test best-effort key location."""

    def test_top_level_key(self):
        """Test a top-level key is found on its line."""
        assert locate_key(DOCUMENT, ["top"]) == (1, 1)

    def test_table_key(self):
        """Test a key inside a table."""
        assert locate_key(DOCUMENT, ["server", "host"]) == (4, 1)

    def test_array_of_tables_index(self):
        """Test indices select the matching [[header]]."""
        assert locate_key(DOCUMENT, ["providers", 1, "name"]) == (10, 1)

    def test_nested_table_in_array(self):
        """Test subtables of an array element."""
        assert locate_key(DOCUMENT, ["providers", 1, "rate_limit", "burst_size"]) == (
            13,
            1,
        )

    def test_missing_key_falls_back_to_table(self):
        """Test a missing key reports its enclosing table."""
        assert locate_key(DOCUMENT, ["providers", 0, "enabled"]) == (6, 1)

    def test_unknown_path(self):
        """Test nothing is returned when no part can be found."""
        assert locate_key(DOCUMENT, ["nowhere"]) is None


class TestErrors:
    """Test error rendering."""

    def test_schema_error_message(self):
        """Test details are appended to the message."""
        error = SchemaError(
            "invalid X payload",
            [ErrorDetail("a.b", "Field required"), ErrorDetail("", "bad")],
            model="X",
        )

        assert str(error) == "invalid X payload: a.b: Field required; bad"

    def test_config_error_location(self):
        """Test the location is appended when known."""
        error = ConfigError("malformed document: x", line=3, column=7)

        assert str(error) == "malformed document: x (at line 3, column 7)"
        assert ConfigError("m", line=2).location == "line 2"
        assert ConfigError("m").location is None
