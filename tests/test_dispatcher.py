import json

import httpx
import pytest

from bika_mcp.catalog import ALL_TOOLS, TOOLS_BY_NAME, ToolName
from bika_mcp.dispatcher import Dispatcher
from bika_mcp.transport import BikaTransport

from .conftest import CannedTransport


class ExplodingTransport:
    async def send(self, request):
        raise RuntimeError("kaboom")


def only_text(blocks) -> str:
    assert len(blocks) == 1
    assert blocks[0].type == "text"
    return blocks[0].text


class TestCallTool:
    @pytest.mark.asyncio
    async def test_success_is_pretty_printed_json(self, dispatcher, echo) -> None:
        blocks = await dispatcher.call_tool(
            "bika_list_records_v2", {"databaseId": "db1", "sort": [{"field": "name", "order": "asc"}]}
        )

        text = only_text(blocks)
        payload = json.loads(text)
        assert payload["method"] == "GET"
        assert payload["path"] == "/v2/spaces/spc1/resources/databases/db1/records"
        assert payload["query"] == [["sort[0][field]", "name"], ["sort[0][order]", "asc"]]
        assert text == json.dumps(payload, indent=2, ensure_ascii=False)
        assert len(echo.sent) == 1

    @pytest.mark.asyncio
    async def test_non_ascii_is_kept(self, config) -> None:
        dispatcher = Dispatcher(config, transport=CannedTransport(httpx.Response(200, json={"name": "空间"})))

        text = only_text(await dispatcher.call_tool("bika_list_spaces", {}))

        assert "空间" in text

    @pytest.mark.asyncio
    async def test_remote_error_text(self, config) -> None:
        mock = httpx.MockTransport(lambda request: httpx.Response(404, text="not found"))
        dispatcher = Dispatcher(config, transport=BikaTransport(config, transport=mock))

        text = only_text(await dispatcher.call_tool("bika_get_node", {"spaceId": "x", "nodeId": "y"}))

        assert text == "Error: Bika API error: 404 - not found"

    @pytest.mark.asyncio
    async def test_invalid_arguments_never_reach_the_network(self, dispatcher, echo) -> None:
        text = only_text(await dispatcher.call_tool("bika_create_records_v2", {"databaseId": "db1", "records": []}))

        assert text.startswith("Error: Invalid arguments for bika_create_records_v2")
        assert echo.sent == []

    @pytest.mark.asyncio
    async def test_unresolved_space(self, config_without_space, echo) -> None:
        dispatcher = Dispatcher(config_without_space, transport=echo)

        text = only_text(await dispatcher.call_tool("bika_get_node", {"nodeId": "n1"}))

        assert text == "Error: spaceId is required (or set BIKA_SPACE_ID)"
        assert echo.sent == []

    @pytest.mark.asyncio
    async def test_unknown_tool(self, dispatcher) -> None:
        text = only_text(await dispatcher.call_tool("bika_drop_everything", {}))

        assert text == "Error: Unknown tool: bika_drop_everything"

    @pytest.mark.asyncio
    async def test_undecodable_body(self, config) -> None:
        dispatcher = Dispatcher(config, transport=CannedTransport(httpx.Response(200, text="<html>")))

        text = only_text(await dispatcher.call_tool("bika_get_system_meta", {}))

        assert text.startswith("Error: Invalid JSON in Bika API response")

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_reported_not_raised(self, config) -> None:
        dispatcher = Dispatcher(config, transport=ExplodingTransport())

        text = only_text(await dispatcher.call_tool("bika_list_spaces", {}))

        assert text == "Error: kaboom"

    @pytest.mark.asyncio
    async def test_missing_arguments_are_treated_as_empty(self, dispatcher) -> None:
        text = only_text(await dispatcher.call_tool("bika_list_nodes", None))

        assert json.loads(text)["path"] == "/v1/spaces/spc1/nodes"


class TestListing:
    def test_catalog_covers_every_tool_name_once(self) -> None:
        assert set(TOOLS_BY_NAME) == set(ToolName)
        assert len(ALL_TOOLS) == len(TOOLS_BY_NAME) == len(ToolName)

    def test_tools_are_listed_in_catalog_order(self, dispatcher) -> None:
        names = [tool.name for tool in dispatcher.list_tools()]

        assert names == list(ToolName)
        assert names[:2] == [ToolName.GET_SYSTEM_META, ToolName.LIST_SPACES]
        assert names[-1] == ToolName.DELETE_OUTGOING_WEBHOOK

    def test_every_tool_has_description_and_object_schema(self, dispatcher) -> None:
        for tool in dispatcher.list_tools():
            assert tool.description
            assert tool.input_schema["type"] == "object"

    def test_unknown_resource_text(self, dispatcher) -> None:
        assert dispatcher.read_resource_text("bika://nope") == "Error: Unknown resource: bika://nope"

    def test_static_resource_text(self, dispatcher) -> None:
        assert json.loads(dispatcher.read_resource_text("bika://view-types"))[0]["type"]
