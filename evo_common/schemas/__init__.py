"""Typed data model of the evo network.

This package provides:
- Protocol payloads exchanged between the king and its agents
- Task, task-room and memory payloads
- Gateway and agent configuration documents
- Skill manifest and skill config documents
- Legacy-shape migration and role/stage helpers

Quick usage:
    from evo_common.schemas import AgentRegister, CanonicalRole, GatewayConfig
    from evo_common.codec import decode, encode
"""

from .base import (
    DocumentModel,
    TaggedVariant,
    UnifiedConfig,
    WireModel,
)
from .gateway import (
    AgentConfig,
    GatewayConfig,
    ProviderConfig,
    ProviderType,
    RateLimitConfig,
    ServerConfig,
)
from .memory import (
    MemoryCategory,
    MemoryChanged,
    MemoryQuery,
    MemoryRecord,
    MemoryResult,
    MemoryScope,
    MemoryStore,
    MemoryTierEntry,
    MemoryTierRecord,
)
from .messages import (
    AgentHealth,
    AgentRegister,
    AgentRole,
    AgentSkillReport,
    AgentStatus,
    CanonicalRole,
    HealthCheck,
    KingCommand,
    KingConfigUpdate,
    PipelineNext,
    PipelineRunStatus,
    PipelineStage,
    PipelineStageResult,
    RunnerStatus,
    SkillFailure,
    SkillPartial,
    SkillResult,
    SkillSuccess,
    UserRole,
)
from .skill import (
    HttpMethod,
    SkillConfig,
    SkillEndpoint,
    SkillIO,
    SkillManifest,
)
from .tasks import (
    TaskCreate,
    TaskDelete,
    TaskEvaluate,
    TaskGet,
    TaskInvite,
    TaskList,
    TaskOutput,
    TaskRecord,
    TaskStatus,
    TaskSummary,
    TaskUpdate,
)
from .transformations import (
    next_stage,
    role_for_stage,
    stage_for_role,
    upgrade_gateway_document,
    upgrade_provider_document,
)


__all__ = [
    "AgentConfig",
    "AgentHealth",
    "AgentRegister",
    "AgentRole",
    "AgentSkillReport",
    "AgentStatus",
    "CanonicalRole",
    "DocumentModel",
    "GatewayConfig",
    "HealthCheck",
    "HttpMethod",
    "KingCommand",
    "KingConfigUpdate",
    "MemoryCategory",
    "MemoryChanged",
    "MemoryQuery",
    "MemoryRecord",
    "MemoryResult",
    "MemoryScope",
    "MemoryStore",
    "MemoryTierEntry",
    "MemoryTierRecord",
    "PipelineNext",
    "PipelineRunStatus",
    "PipelineStage",
    "PipelineStageResult",
    "ProviderConfig",
    "ProviderType",
    "RateLimitConfig",
    "RunnerStatus",
    "ServerConfig",
    "SkillConfig",
    "SkillEndpoint",
    "SkillFailure",
    "SkillIO",
    "SkillManifest",
    "SkillPartial",
    "SkillResult",
    "SkillSuccess",
    "TaggedVariant",
    "TaskCreate",
    "TaskDelete",
    "TaskEvaluate",
    "TaskGet",
    "TaskInvite",
    "TaskList",
    "TaskOutput",
    "TaskRecord",
    "TaskStatus",
    "TaskSummary",
    "TaskUpdate",
    "UnifiedConfig",
    "UserRole",
    "WireModel",
    "next_stage",
    "role_for_stage",
    "stage_for_role",
    "upgrade_gateway_document",
    "upgrade_provider_document",
]
