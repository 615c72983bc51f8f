"""Tests for the Notice Store MCP tools and server wiring."""

from pathlib import Path

import anyio
import pytest

from notice_store.config import Settings
from notice_store.kvmap import StableMap
from notice_store.server import build_server, build_store
from notice_store.store import NoticeStore
from notice_store.tools import NoticeTools

TOOL_NAMES = {
    "create_notice",
    "get_notice_by_id",
    "update_notice",
    "delete_notice",
    "get_all_notices",
    "get_notices",
    "search_notices",
    "health_check",
}


@pytest.fixture()
def tools() -> NoticeTools:
    return NoticeTools(NoticeStore(StableMap()))


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(data_path=tmp_path / "notices.json", port=8011)


# ---------------------------------------------------------------------------
# Tool handlers
# ---------------------------------------------------------------------------


class TestCreateNoticeTool:
    def test_success(self, tools: NoticeTools):
        result = tools.create_notice("Fire Drill", "Evacuate at 10am", notice_id="n1")
        assert result["status"] == "success"
        assert result["notice"]["id"] == "n1"
        assert result["notice"]["updated_at"] is None
        assert "created successfully" in result["message"]

    def test_generated_id(self, tools: NoticeTools):
        result = tools.create_notice("Fire Drill", "Evacuate at 10am")
        assert result["status"] == "success"
        assert result["notice"]["id"]

    def test_duplicate_returns_error_dict(self, tools: NoticeTools):
        tools.create_notice("t", "d", notice_id="n1")
        result = tools.create_notice("t", "d", notice_id="n1")
        assert result["status"] == "error"
        assert result["error"] == "AlreadyExists"

    def test_empty_title_returns_error_dict(self, tools: NoticeTools):
        result = tools.create_notice("", "some body", notice_id="n1")
        assert result == {
            "status": "error",
            "error": "InvalidInput",
            "message": "Title cannot be empty",
        }


class TestReadTools:
    def test_get_by_id(self, tools: NoticeTools):
        tools.create_notice("t", "d", notice_id="n1")
        result = tools.get_notice_by_id("n1")
        assert result["status"] == "success"
        assert result["notice"]["is_active"] is True

    def test_get_missing(self, tools: NoticeTools):
        result = tools.get_notice_by_id("ghost")
        assert result["status"] == "error"
        assert result["error"] == "NotFound"

    def test_get_all(self, tools: NoticeTools):
        tools.create_notice("t", "d", notice_id="b")
        tools.create_notice("t", "d", notice_id="a", is_active=False)
        result = tools.get_all_notices()
        assert result["count"] == 2
        assert [n["id"] for n in result["notices"]] == ["a", "b"]
        assert tools.get_all_notices(active_only=True)["count"] == 1

    def test_get_notices_page(self, tools: NoticeTools):
        for i in range(5):
            tools.create_notice("t", "d", notice_id=f"n{i}")
        result = tools.get_notices(limit=2, offset=4)
        assert result["status"] == "success"
        assert result["total"] == 5
        assert [n["id"] for n in result["notices"]] == ["n4"]

    def test_get_notices_negative(self, tools: NoticeTools):
        result = tools.get_notices(limit=-1, offset=0)
        assert result["status"] == "error"
        assert result["error"] == "InvalidInput"

    def test_search(self, tools: NoticeTools):
        tools.create_notice("Office Closure", "Friday", notice_id="n1")
        result = tools.search_notices("office")
        assert result["count"] == 1
        assert result["notices"][0]["title"] == "Office Closure"

    def test_search_empty(self, tools: NoticeTools):
        assert tools.search_notices("   ")["error"] == "InvalidInput"


class TestWriteTools:
    def test_update(self, tools: NoticeTools):
        tools.create_notice("t", "d", notice_id="n1")
        result = tools.update_notice("n1", title="New")
        assert result["status"] == "success"
        assert result["notice"]["title"] == "New"
        assert result["notice"]["updated_at"] is not None

    def test_update_missing(self, tools: NoticeTools):
        assert tools.update_notice("ghost", title="x")["error"] == "NotFound"

    def test_delete(self, tools: NoticeTools):
        tools.create_notice("t", "d", notice_id="n1")
        result = tools.delete_notice("n1")
        assert result == {
            "status": "success",
            "message": "Notice with ID n1 deleted successfully.",
        }
        assert tools.delete_notice("n1")["error"] == "NotFound"


class TestHealthCheck:
    def test_returns_healthy(self, tools: NoticeTools):
        tools.create_notice("t", "d", notice_id="n1")
        result = tools.health_check()
        assert result["status"] == "healthy"
        assert result["server"] == "notice-store"
        assert result["total_notices"] == 1
        assert "timestamp" in result


# ---------------------------------------------------------------------------
# Server wiring
# ---------------------------------------------------------------------------


class TestSettings:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("NOTICE_PORT", "9100")
        monkeypatch.setenv("NOTICE_MAX_VALUE_SIZE", "4096")
        s = Settings()
        assert s.port == 9100
        assert s.max_value_size == 4096


class TestBuildServer:
    def test_build_store_uses_data_path(self, settings: Settings):
        store = build_store(settings)
        store.create("t", "d", "n1")
        assert settings.data_path.exists()
        assert build_store(settings).count == 1

    def test_registers_every_tool(self, settings: Settings):
        mcp = build_server(build_store(settings), settings)

        async def _run() -> set[str]:
            return {tool.name for tool in await mcp.list_tools()}

        assert anyio.run(_run) == TOOL_NAMES

    def test_tool_schema_hides_self(self, settings: Settings):
        mcp = build_server(build_store(settings), settings)

        async def _run() -> dict:
            tools = {tool.name: tool for tool in await mcp.list_tools()}
            return tools["create_notice"].inputSchema

        schema = anyio.run(_run)
        assert "self" not in schema["properties"]
        assert set(schema["required"]) == {"title", "description"}
