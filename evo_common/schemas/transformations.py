"""Conversions between related shapes of the same data.

Covers the migration of legacy provider tables to the pooled-key shape and
the name correspondence between agent roles and pipeline stages.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any

from .messages import AgentRole, CanonicalRole, PipelineStage, UserRole


logger = logging.getLogger(__name__)

LEGACY_API_KEY_FIELD = "api_key_env"
API_KEY_POOL_FIELD = "api_key_envs"


# ============================================================================
# LEGACY PROVIDER SHAPE
# ============================================================================


def upgrade_provider_document(provider: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a legacy provider table to the pooled-key shape.

    Older gateway documents named a single ``api_key_env``; it becomes a
    one-element ``api_key_envs`` pool (an empty string becomes an empty pool).
    Tables already in the current shape are returned as a copy. A table that
    sets both keys is left untouched so strict validation rejects it.
    """
    upgraded = copy.deepcopy(dict(provider))
    if LEGACY_API_KEY_FIELD not in upgraded or API_KEY_POOL_FIELD in upgraded:
        return upgraded

    legacy_key = upgraded.pop(LEGACY_API_KEY_FIELD)
    name = upgraded.get("name", "<unnamed>")
    logger.warning(
        f"Provider '{name}' uses deprecated '{LEGACY_API_KEY_FIELD}'; "
        f"migrating to '{API_KEY_POOL_FIELD}'"
    )
    upgraded[API_KEY_POOL_FIELD] = [legacy_key] if legacy_key else []
    return upgraded


def upgrade_gateway_document(document: Mapping[str, Any]) -> dict[str, Any]:
    """Upgrade every provider table in a parsed gateway document."""
    upgraded = copy.deepcopy(dict(document))
    providers = upgraded.get("providers")
    if isinstance(providers, list):
        upgraded["providers"] = [
            upgrade_provider_document(provider)
            if isinstance(provider, Mapping)
            else provider
            for provider in providers
        ]
    return upgraded


# ============================================================================
# ROLE <-> STAGE CORRESPONDENCE
# ============================================================================


def stage_for_role(role: AgentRole) -> PipelineStage:
    """Pipeline stage run by an agent holding ``role``.

    Raises:
        ValueError: If ``role`` is a ``UserRole``, which runs no stage

    """
    if isinstance(role, UserRole):
        raise ValueError(f"User role '{role.name}' has no pipeline stage")
    return PipelineStage(role.value)


def role_for_stage(stage: PipelineStage) -> CanonicalRole:
    """Role whose agents run ``stage``."""
    return CanonicalRole(stage.value)


def next_stage(stage: PipelineStage) -> PipelineStage:
    """Stage following ``stage``; the pipeline wraps around after the last."""
    stages = list(PipelineStage)
    return stages[(stages.index(stage) + 1) % len(stages)]
