"""Gateway and agent configuration documents.

Both are read from TOML once at process start. The gateway document can also
be written back to TOML and to canonical JSON; the latter's hash is what
``KingConfigUpdate.new_config_hash`` carries.

Example gateway document::

    [server]
    host = "0.0.0.0"
    port = 8080

    [[providers]]
    name = "openai"
    base_url = "https://api.openai.com/v1"
    api_key_envs = ["OPENAI_API_KEY", "OPENAI_API_KEY_2"]
    enabled = true
    models = ["gpt-4o-mini"]

    [providers.rate_limit]
    requests_per_minute = 60
    burst_size = 10
"""

from enum import StrEnum
from typing import ClassVar

from pydantic import Field, StrictBool

from ..core.serialization import parse_toml
from .base import U16, U32, DocumentModel
from .messages import AgentRole, CanonicalRole, UserRole
from .transformations import upgrade_gateway_document


class ProviderType(StrEnum):
    """How the gateway reaches a provider.

    The last three are local CLIs driven as subprocesses rather than HTTP
    APIs; this model only records which one.
    """

    OPEN_AI_COMPATIBLE = "open_ai_compatible"
    ANTHROPIC = "anthropic"
    CURSOR = "cursor"
    CLAUDE_CODE = "claude_code"
    CODEX_CLI = "codex_cli"

    @property
    def is_subprocess(self) -> bool:
        """True for providers invoked as a local subprocess."""
        return self in _SUBPROCESS_PROVIDERS


_SUBPROCESS_PROVIDERS = frozenset(
    {ProviderType.CURSOR, ProviderType.CLAUDE_CODE, ProviderType.CODEX_CLI}
)


class ServerConfig(DocumentModel):
    host: str
    port: U16


class RateLimitConfig(DocumentModel):
    """Token-bucket limits. Zero is valid and means no traffic."""

    requests_per_minute: U32
    burst_size: U32


class ProviderConfig(DocumentModel):
    """One upstream model provider.

    ``api_key_envs`` names environment variables forming a round-robin key
    pool; it is empty for unauthenticated providers. ``enabled`` has no
    default and must always be written out.
    """

    name: str
    base_url: str
    api_key_envs: list[str] = Field(default_factory=list)
    enabled: StrictBool
    provider_type: ProviderType = ProviderType.OPEN_AI_COMPATIBLE
    extra_headers: dict[str, str] = Field(default_factory=dict)
    rate_limit: RateLimitConfig | None = None
    models: list[str] = Field(default_factory=list)


class GatewayConfig(DocumentModel):
    """Root of the gateway TOML document."""

    document_name: ClassVar[str] = "gateway config"

    server: ServerConfig
    providers: list[ProviderConfig] = Field(default_factory=list)

    def enabled_providers(self) -> list[ProviderConfig]:
        """Providers with ``enabled = true``, in document order."""
        return [provider for provider in self.providers if provider.enabled]

    def get_provider(self, name: str) -> ProviderConfig | None:
        """Look up a provider by name."""
        for provider in self.providers:
            if provider.name == name:
                return provider
        return None

    @classmethod
    def from_legacy_toml(cls, text: str) -> "GatewayConfig":
        """Parse a document that may still use the single ``api_key_env`` key.

        Legacy provider tables are upgraded to ``api_key_envs`` before strict
        validation; see ``upgrade_gateway_document``.
        """
        data = upgrade_gateway_document(parse_toml(text))
        return cls.from_mapping(data, source=text)


class AgentConfig(DocumentModel):
    """Per-agent document: which role it plays and where the king lives."""

    document_name: ClassVar[str] = "agent config"

    role: str
    skills: list[str] = Field(default_factory=list)
    king_address: str

    @property
    def agent_role(self) -> AgentRole:
        """``role`` as a protocol role; unknown names become ``UserRole``."""
        try:
            return CanonicalRole(self.role)
        except ValueError:
            return UserRole(name=self.role)

    @property
    def room(self) -> str:
        """Event-channel room this agent joins."""
        from ..events import role_room

        return role_room(self.agent_role)
