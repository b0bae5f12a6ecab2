"""Shared fixtures for tests."""

import json
from pathlib import Path

import pytest

from cloudflare_mcp_server.client import CloudflareClient, CloudflareConfig
from cloudflare_mcp_server.discovery.openapi_parser import OpenAPIParser
from cloudflare_mcp_server.discovery.tool_registry import ToolRegistry

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep real CLOUDFLARE_* variables and .env files out of the tests."""
    for var in (
        "CLOUDFLARE_API_TOKEN",
        "CLOUDFLARE_API_BASE_URL",
        "CLOUDFLARE_USER_AGENT",
        "CLOUDFLARE_OPENAPI_SCHEMA_PATH",
        "CLOUDFLARE_TIMEOUT",
        "CLOUDFLARE_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def openapi_spec() -> dict:
    """Load the offline OpenAPI spec fixture."""
    with open(FIXTURES_DIR / "openapi_spec.json") as f:
        return json.load(f)


@pytest.fixture
def operations(openapi_spec):
    return OpenAPIParser().parse_spec_dict(openapi_spec)


@pytest.fixture
def registry(operations):
    reg = ToolRegistry()
    reg.load(operations)
    return reg


@pytest.fixture
def config() -> CloudflareConfig:
    return CloudflareConfig(api_token="test-token")


@pytest.fixture
async def client(config):
    async with CloudflareClient(config) as c:
        yield c
