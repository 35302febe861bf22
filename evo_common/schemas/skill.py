"""Skill descriptor documents.

A skill ships a ``manifest.toml`` describing what it does and a
``config.toml`` binding it to runtime endpoints. The runtime that discovers
and loads these files, and that resolves ``dependencies`` between skills,
lives outside this package.
"""

from enum import StrEnum
from typing import ClassVar

from pydantic import Field, JsonValue, StrictBool, field_validator

from .base import DocumentModel


class HttpMethod(StrEnum):
    """HTTP verbs, serialized upper-case."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class SkillIO(DocumentModel):
    """One declared input or output of a skill.

    ``type`` is a free-form tag such as ``"string"`` or ``"array"``; values
    are not checked against it here.
    """

    name: str
    type: str
    required: StrictBool = False
    description: str | None = None


class SkillManifest(DocumentModel):
    document_name: ClassVar[str] = "skill manifest"

    name: str
    version: str
    description: str
    capabilities: list[str] = Field(default_factory=list)
    inputs: list[SkillIO] = Field(default_factory=list)
    outputs: list[SkillIO] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    has_code: StrictBool = False

    def required_inputs(self) -> list[SkillIO]:
        """Inputs flagged ``required = true``."""
        return [io for io in self.inputs if io.required]

    def dependency_names(self) -> list[str]:
        """Declared dependencies with duplicates removed, order preserved."""
        return list(dict.fromkeys(self.dependencies))


class SkillEndpoint(DocumentModel):
    name: str
    url: str
    method: HttpMethod
    headers: dict[str, str] = Field(default_factory=dict)


class SkillConfig(DocumentModel):
    """Runtime bindings of a skill.

    ``auth_ref`` names an environment variable holding the credential.
    ``extra`` is an open escape hatch: any nested JSON-shaped data is accepted
    and kept as written, except ``null``, which TOML cannot represent.
    """

    document_name: ClassVar[str] = "skill config"

    endpoints: list[SkillEndpoint] = Field(default_factory=list)
    auth_ref: str | None = None
    extra: dict[str, JsonValue] = Field(default_factory=dict)

    @field_validator("extra")
    @classmethod
    def validate_extra(cls, v: dict[str, JsonValue]) -> dict[str, JsonValue]:
        """Reject null at any depth."""
        path = _null_path(v, "extra")
        if path is not None:
            raise ValueError(f"{path} is null; TOML has no null value")
        return v

    def get_endpoint(self, name: str) -> SkillEndpoint | None:
        """Look up an endpoint by name."""
        for endpoint in self.endpoints:
            if endpoint.name == name:
                return endpoint
        return None


def _null_path(value: JsonValue, path: str) -> str | None:
    if value is None:
        return path
    if isinstance(value, dict):
        items = value.items()
    elif isinstance(value, list):
        items = enumerate(value)
    else:
        return None
    for key, item in items:
        found = _null_path(item, f"{path}.{key}")
        if found is not None:
            return found
    return None
