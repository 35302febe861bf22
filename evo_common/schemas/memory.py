"""Memory system payloads.

Memories are stored by the king in tiers (``l0`` summary through ``l2`` full
content) and scoped to the system, an agent, a pipeline run or a skill.
"""

from enum import StrEnum

from pydantic import Field, JsonValue

from .base import F64, I64, U32, WireModel


DEFAULT_MEMORY_LIMIT = 20


class MemoryScope(StrEnum):
    SYSTEM = "system"
    AGENT = "agent"
    PIPELINE = "pipeline"
    SKILL = "skill"


class MemoryCategory(StrEnum):
    CASE = "case"
    PATTERN = "pattern"
    FACT = "fact"
    PREFERENCE = "preference"
    RESOURCE = "resource"
    EVENT = "event"


class MemoryTierEntry(WireModel):
    """A single tier entry (l0/l1/l2) for memory creation or update."""

    tier: str
    content: str


class MemoryStore(WireModel):
    """Agent stores a memory into the king."""

    scope: MemoryScope
    category: MemoryCategory
    key: str = ""
    metadata: JsonValue = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    agent_id: str = ""
    run_id: str = ""
    skill_id: str = ""
    relevance_score: F64 = 0.0
    tiers: list[MemoryTierEntry] = Field(default_factory=list)
    task_id: str | None = None


class MemoryQuery(WireModel):
    """Agent queries memories from the king."""

    query: str
    scope: MemoryScope | None = None
    category: MemoryCategory | None = None
    agent_id: str | None = None
    tier: str | None = None
    task_id: str | None = None
    limit: U32 = DEFAULT_MEMORY_LIMIT


class MemoryTierRecord(WireModel):
    id: str
    memory_id: str
    tier: str
    content: str
    created_at: str
    updated_at: str


class MemoryRecord(WireModel):
    """Stored memory as returned in query results.

    ``scope`` and ``category`` are the raw stored strings.
    """

    id: str
    scope: str
    category: str
    key: str
    tiers: list[MemoryTierRecord] = Field(default_factory=list)
    metadata: JsonValue = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    agent_id: str = ""
    run_id: str = ""
    skill_id: str = ""
    relevance_score: F64 = 0.0
    access_count: I64 = 0
    created_at: str
    updated_at: str


class MemoryResult(WireModel):
    """King returns matching memories to an agent."""

    memories: list[MemoryRecord]
    count: U32


class MemoryChanged(WireModel):
    """Broadcast when a memory is created, updated or deleted."""

    action: str
    memory: MemoryRecord | None = None
    memory_id: str | None = None
