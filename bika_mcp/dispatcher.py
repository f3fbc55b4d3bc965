"""
Tool-call dispatcher.

Each call runs lookup -> validate -> translate -> send -> format. Any step can
short-circuit to a Failure; all of them end at the same formatting step, so a
call always yields exactly one text content block.
"""

import json
import logging
import time
import traceback
import uuid
from typing import Any, Callable, List, Mapping, Optional, Protocol, Tuple, Union

import httpx
from mcp.types import TextContent
from pydantic import ValidationError

from .catalog import ToolDescriptor, ToolName, TOOLS_BY_NAME, list_tools
from .config import BikaConfig
from .errors import ErrorKind, Failure, describe_validation_error
from .resources import ResourceCatalog, ResourceContent, ResourceDescriptor
from .transport import BikaTransport
from .translator import RequestDescriptor

logger = logging.getLogger("bika_mcp.dispatcher")


class Transport(Protocol):
    async def send(self, request: RequestDescriptor) -> Union[httpx.Response, Failure]:
        ...


def _time_call() -> Tuple[float, Callable[[], float]]:
    """Simple wall-clock timer for execution duration."""
    start = time.perf_counter()

    def done() -> float:
        return time.perf_counter() - start

    return start, done


def text_block(text: str) -> List[TextContent]:
    return [TextContent(type="text", text=text)]


class Dispatcher:
    def __init__(
        self,
        config: BikaConfig,
        transport: Optional[Transport] = None,
        resources: Optional[ResourceCatalog] = None,
    ):
        self.config = config
        self.transport = transport if transport is not None else BikaTransport(config)
        self.resources = resources if resources is not None else ResourceCatalog()

    # -------------------------------------------------------------------------
    # Tools
    # -------------------------------------------------------------------------
    def list_tools(self) -> List[ToolDescriptor]:
        return list_tools()

    def translate(self, name: str, arguments: Optional[Mapping[str, Any]]) -> Union[RequestDescriptor, Failure]:
        """Validate ``arguments`` for tool ``name`` and build its request."""
        tool_name = ToolName.lookup(name)
        if tool_name is None:
            return Failure(ErrorKind.UNKNOWN_TOOL, f"Unknown tool: {name}")
        tool = TOOLS_BY_NAME[tool_name]

        try:
            validated = tool.schema.model_validate(dict(arguments or {}))
        except ValidationError as e:
            return Failure(ErrorKind.VALIDATION, describe_validation_error(name, e))

        return tool.translate(validated, self.config)

    async def execute(self, name: str, arguments: Optional[Mapping[str, Any]]) -> Union[Any, Failure]:
        """Run a tool call and return the decoded JSON payload or a Failure."""
        request = self.translate(name, arguments)
        if isinstance(request, Failure):
            return request

        response = await self.transport.send(request)
        if isinstance(response, Failure):
            return response

        try:
            return response.json()
        except ValueError as e:
            return Failure(ErrorKind.DECODE, f"Invalid JSON in Bika API response: {e}")

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> List[TextContent]:
        """
        Execute a tool call and wrap the outcome in a single text block:
        - pretty-printed JSON of the remote payload on success
        - ``Error: <message>`` on any failure, including unexpected exceptions
        """
        call_id = str(uuid.uuid4())
        keys = sorted(arguments) if isinstance(arguments, Mapping) else []
        logger.debug(f"[{call_id}] {name} invoked with argument keys={keys}")
        _, done = _time_call()

        try:
            result = await self.execute(name, arguments)
        except Exception as e:
            # Unexpected error: log full traceback, still answer the caller.
            duration = done()
            tb = "".join(traceback.format_exception(type(e), e, e.__traceback__))
            logger.error(f"[{call_id}] {name} unexpected error after {duration:.6f}s:\n{tb}")
            return text_block(Failure(ErrorKind.INTERNAL, str(e) or type(e).__name__).text)

        duration = done()
        if isinstance(result, Failure):
            logger.warning(f"[{call_id}] {name} failed ({result.kind.value}) after {duration:.6f}s")
            return text_block(result.text)

        logger.info(f"[{call_id}] {name} success in {duration:.6f}s")
        return text_block(json.dumps(result, indent=2, ensure_ascii=False))

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------
    def list_resources(self) -> List[ResourceDescriptor]:
        return self.resources.list_resources()

    def read_resource(self, uri: str) -> Union[ResourceContent, Failure]:
        result = self.resources.read(uri)
        if isinstance(result, Failure):
            logger.warning(f"Resource read failed ({result.kind.value}): {uri}")
        return result

    def read_resource_text(self, uri: str) -> str:
        """Resource text, or ``Error: ...`` when the URI cannot be served."""
        return self.read_resource(uri).text
