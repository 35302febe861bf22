"""Pytest configuration and fixtures for evo-common tests."""

import logging

import pytest

from evo_common.core import telemetry
from evo_common.schemas import (
    AgentRegister,
    CanonicalRole,
    GatewayConfig,
    SkillFailure,
)


GATEWAY_TOML = """\
[server]
host = "0.0.0.0"
port = 8080

[[providers]]
name = "openai"
base_url = "https://api.openai.com/v1"
api_key_envs = ["OPENAI_API_KEY", "OPENAI_API_KEY_2"]
enabled = true
models = ["gpt-4o-mini", "gpt-4o"]

[providers.rate_limit]
requests_per_minute = 60
burst_size = 10

[[providers]]
name = "local"
base_url = "http://localhost:11434/v1"
enabled = false
provider_type = "anthropic"

[providers.extra_headers]
X-Team = "evo"
"""

AGENT_TOML = """\
role = "learning"
skills = ["summarize", "search"]
king_address = "http://king:3000"
"""

SKILL_MANIFEST_TOML = """\
name = "web-search"
version = "1.0.0"
description = "Searches the web"
capabilities = ["search"]
dependencies = ["http-client", "parser", "http-client"]

[[inputs]]
name = "query"
type = "string"
required = true

[[inputs]]
name = "limit"
type = "integer"
description = "Maximum number of results"

[[outputs]]
name = "results"
type = "array"
"""

SKILL_CONFIG_TOML = """\
auth_ref = "SEARCH_API_KEY"

[[endpoints]]
name = "search"
url = "https://api.example.com/search"
method = "GET"

[endpoints.headers]
Accept = "application/json"

[extra]
region = "eu"
retries = 3

[extra.nested]
flags = [true, false]
ratio = 0.5
"""


@pytest.fixture
def gateway_toml():
    """Gateway document with one enabled and one disabled provider."""
    return GATEWAY_TOML


@pytest.fixture
def gateway_config(gateway_toml):
    """Parsed gateway document."""
    return GatewayConfig.from_toml(gateway_toml)


@pytest.fixture
def agent_toml():
    """Agent document for a learning agent."""
    return AGENT_TOML


@pytest.fixture
def skill_manifest_toml():
    """Skill manifest with inputs, outputs and a duplicated dependency."""
    return SKILL_MANIFEST_TOML


@pytest.fixture
def skill_config_toml():
    """Skill config with one endpoint and nested extra data."""
    return SKILL_CONFIG_TOML


@pytest.fixture
def sample_register():
    """Registration message of a learning agent."""
    return AgentRegister(
        agent_id="a1", role=CanonicalRole.LEARNING, capabilities=["x"]
    )


@pytest.fixture
def sample_failure():
    """Failed skill result."""
    return SkillFailure(message="timeout")


@pytest.fixture
def log_dir(tmp_path, monkeypatch):
    """Point EVO_LOG_DIR at a temporary directory."""
    directory = tmp_path / "logs"
    monkeypatch.setenv("EVO_LOG_DIR", str(directory))
    monkeypatch.delenv("EVO_LOG_LEVEL", raising=False)
    monkeypatch.delenv("EVO_OTEL_ENDPOINT", raising=False)
    return directory


@pytest.fixture
def reset_logging():
    """Close any logging guard a test left open and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield
    active = telemetry._active
    if active is not None:
        active.close()
    root.setLevel(level)
