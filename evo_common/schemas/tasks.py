"""Task management and task-room payloads.

Unlike the core pipeline messages these carry documented defaults, so a
client may send e.g. ``{"task_type": "build"}`` and let the king fill in the
rest.
"""

from enum import StrEnum

from pydantic import Field, JsonValue, StrictBool

from .base import F64, I32, U32, U64, WireModel


DEFAULT_TASK_LIMIT = 50


class TaskStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


# ============================================================================
# TASK MANAGEMENT
# ============================================================================


class TaskCreate(WireModel):
    task_type: str
    agent_id: str | None = None
    payload: JsonValue = Field(default_factory=dict)
    parent_id: str | None = None


class TaskUpdate(WireModel):
    """Partial update; ``None`` leaves the stored value untouched."""

    task_id: str
    status: TaskStatus | None = None
    agent_id: str | None = None
    payload: JsonValue | None = None


class TaskGet(WireModel):
    task_id: str


class TaskList(WireModel):
    limit: U32 = DEFAULT_TASK_LIMIT
    status: TaskStatus | None = None
    agent_id: str | None = None
    parent_id: str | None = None


class TaskDelete(WireModel):
    task_id: str


class TaskRecord(WireModel):
    """Stored task as returned by the king.

    ``status`` is the raw stored string so records written by newer kings
    with unknown statuses still decode.
    """

    id: str
    task_type: str
    status: str
    agent_id: str
    payload: JsonValue
    parent_id: str = ""
    created_at: str
    updated_at: str


# ============================================================================
# TASK ROOMS
# ============================================================================


class TaskInvite(WireModel):
    """King invites agents to join a task room."""

    task_id: str
    task_type: str
    payload: JsonValue = None


class TaskOutput(WireModel):
    """Chunk of output streamed into a task room.

    ``source`` is ``"pty"`` or ``"llm"``.
    """

    task_id: str
    request_id: str
    source: str
    delta: str
    chunk_index: U32
    is_final: StrictBool = False


class TaskEvaluate(WireModel):
    """King requests evaluation of a completed task."""

    task_id: str
    task_type: str
    output_summary: str = ""
    exit_code: I32 | None = None
    latency_ms: U64 | None = None
    metadata: JsonValue = None


class TaskSummary(WireModel):
    """Evaluation agent reports a task summary."""

    task_id: str
    agent_id: str
    summary: str
    score: F64 | None = None
    tags: list[str] = Field(default_factory=list)
    evaluation: JsonValue = None
