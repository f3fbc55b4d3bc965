import json

import pytest
from fastapi.testclient import TestClient
from fastmcp import Client

from bika_mcp import __version__
from bika_mcp.catalog import ToolName
from bika_mcp.dispatcher import Dispatcher
from bika_mcp.server import build_http_app, build_server, main


@pytest.fixture
def mcp(config, echo):
    return build_server(config, Dispatcher(config, transport=echo))


@pytest.mark.asyncio
async def test_lists_every_tool_with_wire_schema(mcp) -> None:
    async with Client(mcp) as client:
        tools = await client.list_tools()

    by_name = {tool.name: tool for tool in tools}
    assert set(by_name) == {name.value for name in ToolName}
    schema = by_name["bika_list_records_v2"].inputSchema
    assert "databaseId" in schema["properties"]
    assert schema["required"] == ["databaseId"]


@pytest.mark.asyncio
async def test_call_tool_returns_single_text_block(mcp, echo) -> None:
    async with Client(mcp) as client:
        result = await client.call_tool("bika_get_database_fields", {"databaseId": "db1"})

    assert len(result.content) == 1
    assert json.loads(result.content[0].text)["path"] == "/v1/spaces/spc1/resources/databases/db1/fields"
    assert len(echo.sent) == 1


@pytest.mark.asyncio
async def test_call_tool_reports_bad_arguments_as_text(mcp, echo) -> None:
    async with Client(mcp) as client:
        result = await client.call_tool("bika_get_record_v2", {"databaseId": "db1"})

    assert result.content[0].text.startswith("Error: Invalid arguments for bika_get_record_v2")
    assert echo.sent == []


@pytest.mark.asyncio
async def test_resources_are_listed_and_readable(mcp) -> None:
    async with Client(mcp) as client:
        resources = await client.list_resources()
        node_types = await client.read_resource("bika://node-types")
        doc = await client.read_resource("bika://docs/filter-query-language/syntax")

    assert len(resources) == 27
    assert json.loads(node_types[0].text)[0]["type"] == "Folder"
    assert doc[0].text.startswith("#")


class TestHttpApp:
    def test_health(self, mcp) -> None:
        client = TestClient(build_http_app(mcp))

        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["service"] == "bika-mcp"
        assert body["timestamp"]

    def test_info(self, mcp) -> None:
        client = TestClient(build_http_app(mcp))

        body = client.get("/").json()

        assert body["version"] == __version__
        assert body["endpoints"]["mcp"].startswith("/mcp")


def test_main_exits_without_token(monkeypatch, tmp_path) -> None:
    monkeypatch.delenv("BIKA_API_TOKEN", raising=False)
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 1


@pytest.mark.asyncio
async def test_unregistered_tool_answers_with_error_text(mcp, echo) -> None:
    async with Client(mcp) as client:
        result = await client.call_tool_mcp("bika_drop_everything", {})

    assert not result.isError
    assert [block.text for block in result.content] == ["Error: Unknown tool: bika_drop_everything"]
    assert echo.sent == []


@pytest.mark.asyncio
async def test_unregistered_resource_answers_with_error_text(mcp) -> None:
    async with Client(mcp) as client:
        contents = await client.read_resource("bika://nope")

    assert [content.text for content in contents] == ["Error: Unknown resource: bika://nope"]
