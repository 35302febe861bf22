"""Event names and room conventions of the evo event channel.

The string values are part of the wire contract shared by every king and
agent build; changing one requires a coordinated protocol version bump.
"""

from enum import StrEnum

from .schemas.base import WireModel
from .schemas.memory import MemoryChanged, MemoryQuery, MemoryStore
from .schemas.messages import (
    AgentHealth,
    AgentRegister,
    AgentRole,
    AgentSkillReport,
    AgentStatus,
    KingCommand,
    KingConfigUpdate,
    PipelineNext,
    PipelineStageResult,
    UserRole,
)
from .schemas.tasks import (
    TaskCreate,
    TaskDelete,
    TaskEvaluate,
    TaskGet,
    TaskInvite,
    TaskList,
    TaskOutput,
    TaskSummary,
    TaskUpdate,
)


class Event(StrEnum):
    """Every event name understood on the channel."""

    AGENT_REGISTER = "agent:register"
    AGENT_STATUS = "agent:status"
    AGENT_SKILL_REPORT = "agent:skill_report"
    AGENT_HEALTH = "agent:health"
    KING_COMMAND = "king:command"
    KING_CONFIG_UPDATE = "king:config_update"
    PIPELINE_NEXT = "pipeline:next"

    # Task management
    TASK_CREATE = "task:create"
    TASK_UPDATE = "task:update"
    TASK_GET = "task:get"
    TASK_LIST = "task:list"
    TASK_DELETE = "task:delete"
    TASK_CHANGED = "task:changed"

    # Pipeline coordination
    PIPELINE_STAGE_RESULT = "pipeline:stage_result"

    # Debug
    DEBUG_PROMPT = "debug:prompt"
    DEBUG_RESPONSE = "debug:response"
    DEBUG_STREAM = "debug:stream"

    # Memory
    MEMORY_STORE = "memory:store"
    MEMORY_QUERY = "memory:query"
    MEMORY_UPDATE = "memory:update"
    MEMORY_DELETE = "memory:delete"
    MEMORY_CHANGED = "memory:changed"

    # Task rooms
    TASK_INVITE = "task:invite"
    TASK_JOIN = "task:join"
    TASK_OUTPUT = "task:output"
    TASK_EVALUATE = "task:evaluate"
    TASK_SUMMARY = "task:summary"
    TASK_LOG = "task:log"


ROOM_KERNEL = "kernel"
ROOM_ROLE_PREFIX = "role:"
ROOM_TASK_PREFIX = "task:"


# Events whose payload has a typed model. The rest (debug streams, task
# joins/logs, memory updates/deletes, task:changed) carry free-form JSON.
EVENT_PAYLOADS: dict[Event, type[WireModel]] = {
    Event.AGENT_REGISTER: AgentRegister,
    Event.AGENT_STATUS: AgentStatus,
    Event.AGENT_SKILL_REPORT: AgentSkillReport,
    Event.AGENT_HEALTH: AgentHealth,
    Event.KING_COMMAND: KingCommand,
    Event.KING_CONFIG_UPDATE: KingConfigUpdate,
    Event.PIPELINE_NEXT: PipelineNext,
    Event.PIPELINE_STAGE_RESULT: PipelineStageResult,
    Event.TASK_CREATE: TaskCreate,
    Event.TASK_UPDATE: TaskUpdate,
    Event.TASK_GET: TaskGet,
    Event.TASK_LIST: TaskList,
    Event.TASK_DELETE: TaskDelete,
    Event.MEMORY_STORE: MemoryStore,
    Event.MEMORY_QUERY: MemoryQuery,
    Event.MEMORY_CHANGED: MemoryChanged,
    Event.TASK_INVITE: TaskInvite,
    Event.TASK_OUTPUT: TaskOutput,
    Event.TASK_EVALUATE: TaskEvaluate,
    Event.TASK_SUMMARY: TaskSummary,
}


def role_room(role: AgentRole) -> str:
    """Room joined by every agent holding ``role``, e.g. ``role:learning``."""
    name = role.name if isinstance(role, UserRole) else role.value
    return f"{ROOM_ROLE_PREFIX}{name}"


def task_room(task_id: str) -> str:
    """Room for the participants of one task, e.g. ``task:42``."""
    return f"{ROOM_TASK_PREFIX}{task_id}"


def payload_type(event: str) -> type[WireModel] | None:
    """Typed payload model for an event name, if it has one.

    Raises:
        ValueError: If ``event`` is not a known event name

    """
    return EVENT_PAYLOADS.get(Event(event))
