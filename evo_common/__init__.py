"""Shared contract layer of the evo network.

This package provides:
- Typed wire payloads for the king/agent event channel
- Event names and room conventions
- Canonical JSON encoding and tolerant decoding of payloads
- Gateway, agent and skill documents read from TOML
- Logging/tracing setup and an atomically swappable config holder

Quick usage:
    from evo_common import AgentRegister, CanonicalRole, decode, encode

    message = AgentRegister(
        agent_id="a1", role=CanonicalRole.LEARNING, capabilities=["x"]
    )
    assert decode(AgentRegister, encode(message)) == message
"""

from .codec import config_update, decode, decode_event, encode, encode_event
from .core import (
    ConfigError,
    ErrorDetail,
    EvoError,
    SchemaError,
    SharedConfig,
    TelemetryGuards,
    init_logging,
)
from .events import (
    EVENT_PAYLOADS,
    ROOM_KERNEL,
    ROOM_ROLE_PREFIX,
    ROOM_TASK_PREFIX,
    Event,
    role_room,
    task_room,
)
from .schemas import (
    AgentConfig,
    AgentHealth,
    AgentRegister,
    AgentRole,
    AgentSkillReport,
    AgentStatus,
    CanonicalRole,
    GatewayConfig,
    KingCommand,
    KingConfigUpdate,
    PipelineNext,
    PipelineStage,
    PipelineStageResult,
    ProviderConfig,
    RunnerStatus,
    SkillConfig,
    SkillFailure,
    SkillManifest,
    SkillPartial,
    SkillSuccess,
    UserRole,
)


__version__ = "0.1.0"

__all__ = [
    "EVENT_PAYLOADS",
    "ROOM_KERNEL",
    "ROOM_ROLE_PREFIX",
    "ROOM_TASK_PREFIX",
    "AgentConfig",
    "AgentHealth",
    "AgentRegister",
    "AgentRole",
    "AgentSkillReport",
    "AgentStatus",
    "CanonicalRole",
    "ConfigError",
    "ErrorDetail",
    "Event",
    "EvoError",
    "GatewayConfig",
    "KingCommand",
    "KingConfigUpdate",
    "PipelineNext",
    "PipelineStage",
    "PipelineStageResult",
    "ProviderConfig",
    "RunnerStatus",
    "SchemaError",
    "SharedConfig",
    "SkillConfig",
    "SkillFailure",
    "SkillManifest",
    "SkillPartial",
    "SkillSuccess",
    "TelemetryGuards",
    "UserRole",
    "config_update",
    "decode",
    "decode_event",
    "encode",
    "encode_event",
    "init_logging",
    "role_room",
    "task_room",
]
