"""Protocol payloads exchanged between the king and its agents.

Field names serialize verbatim. Unit enum variants serialize as snake_case
strings; data-carrying variants (``UserRole``, ``SkillFailure``,
``SkillPartial``) serialize externally tagged as a one-key object.
"""

from enum import StrEnum
from typing import Annotated, ClassVar

from pydantic import Field, JsonValue, StrictBool

from .base import F64, U64, TaggedVariant, WireModel


# ============================================================================
# ROLES, STATUSES AND STAGES
# ============================================================================


class CanonicalRole(StrEnum):
    """Closed pipeline roles an agent can register with."""

    SKILL_MANAGE = "skill_manage"
    LEARNING = "learning"
    PRE_LOAD = "pre_load"
    BUILDING = "building"
    EVALUATION = "evaluation"


class UserRole(TaggedVariant):
    """Operator-defined role outside the pipeline, e.g. ``{"user": "ops"}``.

    The name is kept exactly as given.
    """

    tag: ClassVar[str] = "user"
    payload_field: ClassVar[str] = "name"

    name: str


AgentRole = Annotated[CanonicalRole | UserRole, Field(union_mode="left_to_right")]


class RunnerStatus(StrEnum):
    """Observable lifecycle phase of an agent process."""

    STARTING = "starting"
    READY = "ready"
    BUSY = "busy"
    ERROR = "error"
    SHUTTING = "shutting"


class SkillSuccess(StrEnum):
    """Unit variant of ``SkillResult``."""

    SUCCESS = "success"


class SkillFailure(TaggedVariant):
    """Skill run failed; wire form ``{"failure": message}``."""

    tag: ClassVar[str] = "failure"
    payload_field: ClassVar[str] = "message"

    message: str


class SkillPartial(TaggedVariant):
    """Skill run partially succeeded; wire form ``{"partial": message}``."""

    tag: ClassVar[str] = "partial"
    payload_field: ClassVar[str] = "message"

    message: str


SkillResult = Annotated[
    SkillSuccess | SkillFailure | SkillPartial, Field(union_mode="left_to_right")
]


class PipelineStage(StrEnum):
    """Phases of the evolution pipeline, in cycle order.

    The value set mirrors ``CanonicalRole``: every stage is run by the agent
    holding the role of the same name.
    """

    LEARNING = "learning"
    BUILDING = "building"
    PRE_LOAD = "pre_load"
    EVALUATION = "evaluation"
    SKILL_MANAGE = "skill_manage"


class PipelineRunStatus(StrEnum):
    """Outcome of a pipeline run or of one of its stages."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


# ============================================================================
# AGENT -> KING
# ============================================================================


class AgentRegister(WireModel):
    """Sent once by an agent after connecting.

    Agents may attach further untyped fields (e.g. a skill list); they are
    ignored on decode.
    """

    agent_id: str
    role: AgentRole
    capabilities: list[str]


class AgentStatus(WireModel):
    """Periodic lifecycle and metrics report."""

    agent_id: str
    status: RunnerStatus
    metrics: dict[str, JsonValue]


class AgentSkillReport(WireModel):
    """Result of running a single skill."""

    agent_id: str
    skill_id: str
    result: SkillResult
    score: F64 | None = None


class HealthCheck(WireModel):
    """Probe result for one endpoint an agent depends on."""

    name: str
    endpoint: str
    healthy: StrictBool
    latency_ms: U64 | None = None
    error: str | None = None


class AgentHealth(WireModel):
    agent_id: str
    health_checks: list[HealthCheck]


class PipelineStageResult(WireModel):
    """Agent reports completion of a pipeline stage back to the king."""

    run_id: str
    stage: PipelineStage
    agent_id: str
    status: PipelineRunStatus
    artifact_id: str
    output: JsonValue
    error: str | None = None


# ============================================================================
# KING -> AGENT
# ============================================================================


class KingCommand(WireModel):
    command: str
    target_agent: str
    params: dict[str, JsonValue]


class KingConfigUpdate(WireModel):
    """Announces a new configuration by its canonical-JSON hash."""

    config_type: str
    new_config_hash: str


class PipelineNext(WireModel):
    """Hands an artifact to the next pipeline stage."""

    stage: PipelineStage
    artifact_id: str
    metadata: dict[str, JsonValue]
