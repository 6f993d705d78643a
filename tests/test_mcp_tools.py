"""Tests for the MCP server tool set and tool responses."""

import json

import pytest

from versionresolver.adapters.memory_store import InMemoryVersionStore
from versionresolver.config.runtime import ResolverSettings
from versionresolver.interface.mcp.server import create_server
from versionresolver.interface.mcp.tools import ALLOWED_RESOLVE_KEYS, ALLOWED_TOOLS
from versionresolver.ports.version_store import ContentUnit
from versionresolver.services.resolution_service import ResolutionService

HOME = ContentUnit.model_validate(
    {
        "slug": "home",
        "versions": [
            {"version": 1, "status": "published", "isDefault": True},
            {"version": 2, "status": "published", "tags": {"attributes": {"addressStates": ["CA", "NY"]}}},
            {"version": 3, "status": "draft", "tags": {"campaign": "summer"}},
        ],
    }
)


@pytest.fixture
def server():
    service = ResolutionService(store=InMemoryVersionStore([HOME]), settings=ResolverSettings())
    return create_server(service=service, name="versionresolver-test")


def _tool(server, name):
    # FastMCP stores tools in _tool_manager._tools dict
    return server._tool_manager._tools[name].fn


def test_exposes_only_allowed_tools(server):
    assert set(server._tool_manager._tools.keys()) == ALLOWED_TOOLS


def test_resolve_address_state(server):
    out = json.loads(_tool(server, "versions_resolve")(unit_id="home", address_state="ny"))
    assert out["success"] is True
    assert out["data"]["version"] == 2
    assert out["data"]["matched_by"] == "addressState"
    assert set(out["data"]) <= ALLOWED_RESOLVE_KEYS


def test_resolve_preview_includes_drafts(server):
    resolve = _tool(server, "versions_resolve")
    assert json.loads(resolve(unit_id="home", campaign="summer"))["data"]["version"] == 1
    assert json.loads(resolve(unit_id="home", campaign="summer", preview=True))["data"]["version"] == 3


def test_resolve_unknown_unit(server):
    out = json.loads(_tool(server, "versions_resolve")(unit_id="missing"))
    assert out == {"success": False, "error": "Page or version not found", "unit_id": "missing"}


def test_resolve_invalid_now(server):
    out = json.loads(_tool(server, "versions_resolve")(unit_id="home", now="yesterday-ish"))
    assert out["success"] is False
    assert out["error"] == "invalid request"


def test_explain(server):
    out = json.loads(_tool(server, "versions_explain")(unit_id="home", address_state="CA"))
    assert out["success"] is True
    assert out["data"]["resolved"]["version"] == 2
    assert len(out["data"]["audits"]) == 3


def test_explain_unknown_unit(server):
    out = json.loads(_tool(server, "versions_explain")(unit_id="missing"))
    assert out["success"] is False


def test_list(server):
    out = json.loads(_tool(server, "versions_list")(unit_id="home", status="published"))
    assert [v["version"] for v in out["data"]] == [2, 1]


def test_list_bad_status(server):
    out = json.loads(_tool(server, "versions_list")(unit_id="home", status="archived"))
    assert out["success"] is False


def test_metrics_counts_tool_calls(server):
    _tool(server, "versions_resolve")(unit_id="home")
    metrics = json.loads(_tool(server, "versions_metrics")())
    assert metrics["tool_calls"]["versions_resolve"] >= 1
