"""Base models for wire payloads and on-disk documents.

Two tolerance policies are defined here:

- ``WireModel`` ignores unknown fields, so a reader built against an older
  protocol accepts payloads from newer peers.
- ``DocumentModel`` forbids unknown keys, so a typo in a TOML file fails at
  load time instead of silently falling back to a default.

Both are frozen. Numbers and booleans use pydantic's strict types: a JSON
string is never accepted where an integer, float or boolean is declared, and
pydantic v2 never coerces numbers into ``str`` fields.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any, ClassVar, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    ValidationError,
    ValidationInfo,
    model_serializer,
    model_validator,
)

from ..core.serialization import (
    canonical_json,
    config_error_from_validation,
    dump_toml,
    parse_toml,
    sha256_hex,
)


# ============================================================================
# SCALAR ALIASES
# ============================================================================

U16 = Annotated[StrictInt, Field(ge=0, le=2**16 - 1)]
U32 = Annotated[StrictInt, Field(ge=0, le=2**32 - 1)]
U64 = Annotated[StrictInt, Field(ge=0, le=2**64 - 1)]
I32 = Annotated[StrictInt, Field(ge=-(2**31), le=2**31 - 1)]
I64 = Annotated[StrictInt, Field(ge=-(2**63), le=2**63 - 1)]
F64 = Annotated[StrictFloat, Field(allow_inf_nan=False)]


# ============================================================================
# MODEL CONFIGURATION
# ============================================================================


class UnifiedConfig:
    """Model configuration presets for the two tolerance policies."""

    WIRE_CONFIG = ConfigDict(
        extra="ignore",
        frozen=True,
        allow_inf_nan=False,
        use_enum_values=False,
        serialize_by_alias=True,
    )

    DOCUMENT_CONFIG = ConfigDict(
        extra="forbid",
        frozen=True,
        allow_inf_nan=False,
        use_enum_values=False,
        serialize_by_alias=True,
    )


class WireModel(BaseModel):
    """Base for protocol payloads exchanged over the event channel."""

    model_config = UnifiedConfig.WIRE_CONFIG

    def to_json_value(self) -> Any:
        """Plain JSON-compatible representation (enums as wire strings)."""
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        """Canonical JSON text of this payload."""
        return canonical_json(self.to_json_value())


class TaggedVariant(WireModel):
    """Data-carrying enum variant encoded externally tagged.

    A subclass names its ``tag`` and the single ``payload_field`` it carries;
    the wire form is ``{tag: payload}``. Unit variants of the same enum are
    plain ``StrEnum`` members and encode as bare strings, so a union of the
    two round-trips exactly like a Rust/serde externally tagged enum.
    """

    tag: ClassVar[str]
    payload_field: ClassVar[str]

    @model_validator(mode="before")
    @classmethod
    def unwrap_tag(cls, data: Any, info: ValidationInfo) -> Any:
        if isinstance(data, Mapping) and cls.tag in data:
            if len(data) != 1:
                raise ValueError(
                    f"expected only the '{cls.tag}' tag, got {sorted(data)}"
                )
            return {cls.payload_field: data[cls.tag]}
        if info.mode == "json":
            raise ValueError(f"expected an object tagged '{cls.tag}'")
        return data

    @model_serializer(mode="plain")
    def wrap_tag(self) -> dict[str, Any]:
        return {self.tag: getattr(self, self.payload_field)}


class DocumentModel(BaseModel):
    """Base for TOML documents loaded from disk at process start.

    Parsing failures of any kind surface as ``ConfigError``.
    """

    model_config = UnifiedConfig.DOCUMENT_CONFIG

    document_name: ClassVar[str] = "document"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], source: str | None = None) -> Self:
        """Validate already-parsed document data."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise config_error_from_validation(e, cls.document_name, source) from e

    @classmethod
    def from_toml(cls, text: str) -> Self:
        """Parse TOML text into a typed document."""
        return cls.from_mapping(parse_toml(text), source=text)

    @classmethod
    def from_file(cls, path: str | Path) -> Self:
        """Read and parse a TOML file."""
        return cls.from_toml(Path(path).read_text(encoding="utf-8"))

    @classmethod
    def from_json(cls, text: str | bytes) -> Self:
        """Parse the JSON encoding produced by :meth:`to_json`."""
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise config_error_from_validation(e, cls.document_name) from e

    def to_toml(self) -> str:
        """Serialize back to TOML. Absent optional values are omitted."""
        return dump_toml(self.model_dump(mode="json", exclude_none=True))

    def to_json(self) -> str:
        """Canonical JSON text; equal documents give byte-identical output."""
        return canonical_json(self.model_dump(mode="json"))

    def config_hash(self) -> str:
        """SHA-256 of the canonical JSON encoding, for change detection."""
        return sha256_hex(self.to_json())
