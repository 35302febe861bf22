"""Error types raised when decoding payloads and documents.

Encoding never raises these: a value that made it through model construction
always has a wire and document representation.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ErrorDetail:
    """One failing location inside a payload or document."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


class EvoError(Exception):
    """Base class for all evo-common errors."""

    def __init__(self, message: str, details: list[ErrorDetail] | None = None):
        """Initialize with a summary message and per-location details."""
        self.message = message
        self.details = details or []
        super().__init__(self._render())

    def _render(self) -> str:
        if not self.details:
            return self.message
        lines = "; ".join(str(detail) for detail in self.details)
        return f"{self.message}: {lines}"


class SchemaError(EvoError):
    """A wire payload is missing a required field or has a mistyped one."""

    def __init__(
        self,
        message: str,
        details: list[ErrorDetail] | None = None,
        model: str | None = None,
    ):
        """Initialize with the name of the payload model being decoded."""
        self.model = model
        super().__init__(message, details)


class ConfigError(EvoError):
    """A configuration or skill document could not be decoded.

    ``line`` and ``column`` are 1-based and best-effort: syntax errors always
    carry them, schema violations only when the offending key can be found in
    the source text.
    """

    def __init__(
        self,
        message: str,
        details: list[ErrorDetail] | None = None,
        line: int | None = None,
        column: int | None = None,
        path: str | None = None,
    ):
        """Initialize with an optional source location."""
        self.line = line
        self.column = column
        self.path = path
        super().__init__(message, details)

    @property
    def location(self) -> str | None:
        """Human-readable ``line X, column Y`` locator, if known."""
        if self.line is None:
            return None
        if self.column is None:
            return f"line {self.line}"
        return f"line {self.line}, column {self.column}"

    def _render(self) -> str:
        rendered = super()._render()
        location = self.location
        return f"{rendered} (at {location})" if location else rendered
