"""Text-format helpers shared by the protocol and document models.

Provides the canonical JSON encoder used for wire payloads and config hashing,
TOML reading/writing, and translation of pydantic validation failures into
``SchemaError`` / ``ConfigError``.
"""

import hashlib
import json
import re
import tomllib
from collections.abc import Sequence
from typing import Any

import tomli_w
from pydantic import ValidationError

from .errors import ConfigError, ErrorDetail, SchemaError


_TOML_POSITION = re.compile(r"\(at line (\d+), column (\d+)\)")


def canonical_json(data: Any) -> str:
    """Encode JSON-compatible data in canonical form.

    Keys are sorted at every level and separators are compact, so two equal
    values always produce byte-identical text.
    """
    return json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def sha256_hex(text: str) -> str:
    """Hex SHA-256 digest of UTF-8 text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def format_loc(loc: Sequence[str | int]) -> str:
    """Render a pydantic error location as a dotted path."""
    return ".".join(str(part) for part in loc)


def _details(exc: ValidationError) -> list[ErrorDetail]:
    details = []
    for error in exc.errors(include_url=False):
        message = error["msg"]
        if error["type"] == "extra_forbidden":
            message = "unknown key"
        details.append(ErrorDetail(path=format_loc(error["loc"]), message=message))
    return details


def schema_error_from_validation(exc: ValidationError, model: str) -> SchemaError:
    """Translate a wire payload validation failure."""
    return SchemaError(f"invalid {model} payload", _details(exc), model=model)


def parse_toml(text: str) -> dict[str, Any]:
    """Parse TOML text, mapping syntax errors to ``ConfigError``."""
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        line = getattr(e, "lineno", None)
        column = getattr(e, "colno", None)
        message = getattr(e, "msg", None) or str(e)
        match = _TOML_POSITION.search(str(e))
        if match and line is None:
            line, column = int(match.group(1)), int(match.group(2))
        message = _TOML_POSITION.sub("", message).strip()
        raise ConfigError(f"malformed document: {message}", line=line, column=column) from e


def dump_toml(data: dict[str, Any]) -> str:
    """Write a mapping as TOML text."""
    try:
        return tomli_w.dumps(data)
    except TypeError as e:
        raise ConfigError(f"value has no TOML representation: {e}") from e


def locate_key(source: str, loc: Sequence[str | int]) -> tuple[int, int] | None:
    """Best-effort 1-based (line, column) of the key addressed by ``loc``.

    Array-of-tables indices are resolved by counting ``[[name]]`` headers,
    and later keys are only searched for up to the next element's header.
    When a trailing key cannot be found (typically a missing field) the
    position of the innermost table that was found is returned instead.
    """
    lines = source.splitlines()
    start, end = 0, len(lines)
    found: int | None = None

    for i, part in enumerate(loc):
        if isinstance(part, int):
            continue
        name = re.escape(part)
        next_part = loc[i + 1] if i + 1 < len(loc) else None

        if isinstance(next_part, int):
            header = re.compile(rf"^\s*\[\[\s*(?:[\w.-]+\.)?{name}\s*\]\]")
            hits = [n for n in range(start, end) if header.match(lines[n])]
            if next_part >= len(hits):
                break
            start = found = hits[next_part]
            if next_part + 1 < len(hits):
                end = hits[next_part + 1]
            continue

        key = re.compile(
            rf"^\s*(?:\[\s*(?:[\w.-]+\.)?{name}\s*\]|\"?{name}\"?\s*=)"
        )
        for n in range(start, end):
            if key.match(lines[n]):
                start = found = n
                break
        else:
            break

    if found is None:
        return None
    text = lines[found]
    return found + 1, len(text) - len(text.lstrip()) + 1


def config_error_from_validation(
    exc: ValidationError, document: str, source: str | None = None
) -> ConfigError:
    """Translate a document validation failure, locating the first bad key."""
    details = _details(exc)
    first = exc.errors(include_url=False)[0]
    position = locate_key(source, first["loc"]) if source else None
    line, column = position if position else (None, None)
    return ConfigError(
        f"invalid {document} document",
        details,
        line=line,
        column=column,
        path=format_loc(first["loc"]),
    )
