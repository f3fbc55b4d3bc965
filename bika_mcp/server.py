# -*- coding: utf-8 -*-
"""
Bika MCP server. Runs in two modes:
  1) MCP over stdio  →  `bika-mcp --mode stdio`
  2) HTTP (FastAPI)  →  `bika-mcp --mode http --host 0.0.0.0 --port 8000`
     serves /health, / (info) and the MCP streamable-HTTP endpoint at /mcp.

Env (a .env file in the working directory is loaded first; real env wins):
  BIKA_API_TOKEN     required, bearer token for the Bika OpenAPI
  BIKA_API_BASE_URL  optional, defaults to https://bika.ai/api/openapi/bika
  BIKA_SPACE_ID      optional, default space for tools that take spaceId
  MCP_LOG_LEVEL      DEBUG|INFO|WARNING|ERROR (default INFO)
"""

import argparse
import logging
import os
import signal
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Sequence

from dotenv import find_dotenv, load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import NotFoundError
from fastmcp.server.middleware import Middleware
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.server.lowlevel.helper_types import ReadResourceContents
from pydantic import PrivateAttr

from . import __version__
from .catalog import ToolDescriptor
from .config import BikaConfig
from .dispatcher import Dispatcher
from .errors import ConfigurationError

SERVER_NAME = "bika-mcp"
SERVER_DESCRIPTION = "Model Context Protocol server for Bika.ai integration"

logger = logging.getLogger("bika_mcp")


# -----------------------------
# Logging
# -----------------------------
def configure_logging(level: Optional[str] = None) -> str:
    """Log to stderr; stdout carries the MCP stdio frames."""
    level_name = (level or os.getenv("MCP_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )
    return level_name


# -----------------------------
# MCP server
# -----------------------------
class BikaTool(Tool):
    """Expose a catalog ToolDescriptor as a FastMCP tool backed by the Dispatcher."""

    _dispatcher: Any = PrivateAttr(default=None)

    def __init__(self, descriptor: ToolDescriptor, dispatcher: Dispatcher) -> None:
        super().__init__(
            name=descriptor.name.value,
            description=descriptor.description,
            parameters=descriptor.input_schema,
            tags=set(),
        )
        self._dispatcher = dispatcher

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        # Validation happens in the dispatcher so bad input becomes an "Error: ..." block.
        content = await self._dispatcher.call_tool(self.name, arguments)
        return ToolResult(content=content)


class CatalogFallback(Middleware):
    """
    Hand tool names and resource URIs FastMCP does not know to the dispatcher,
    so they come back as an ``Error: ...`` text block instead of a protocol error.
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def on_call_tool(self, context, call_next):
        try:
            return await call_next(context)
        except NotFoundError:
            message = context.message
            return ToolResult(content=await self._dispatcher.call_tool(message.name, message.arguments))

    async def on_read_resource(self, context, call_next):
        try:
            return await call_next(context)
        except NotFoundError:
            uri = str(context.message.uri)
            return [ReadResourceContents(content=self._dispatcher.read_resource_text(uri), mime_type="text/plain")]


def _resource_reader(dispatcher: Dispatcher, uri: str) -> Callable[[], str]:
    def read() -> str:
        return dispatcher.read_resource_text(uri)

    return read


def build_server(config: BikaConfig, dispatcher: Optional[Dispatcher] = None) -> FastMCP:
    """Create the FastMCP server with every catalog tool and resource registered."""
    dispatcher = dispatcher if dispatcher is not None else Dispatcher(config)
    mcp = FastMCP(name=SERVER_NAME, instructions=SERVER_DESCRIPTION)
    mcp.add_middleware(CatalogFallback(dispatcher))

    for descriptor in dispatcher.list_tools():
        mcp.add_tool(BikaTool(descriptor, dispatcher))

    for resource in dispatcher.list_resources():
        mcp.resource(
            resource.uri,
            name=resource.name,
            description=resource.description,
            mime_type=resource.mime_type,
        )(_resource_reader(dispatcher, resource.uri))

    logger.debug(
        f"Registered {len(dispatcher.list_tools())} tools and {len(dispatcher.list_resources())} resources"
    )
    return mcp


# -----------------------------
# HTTP app (optional mode)
# -----------------------------
def build_http_app(mcp: FastMCP):
    """
    FastAPI app with a liveness probe, an info page and the MCP endpoint at /mcp.
    Only imported for --mode http so stdio runs do not need FastAPI.
    """
    from fastapi import FastAPI

    mcp_app = mcp.http_app(path="/mcp")
    app = FastAPI(title=f"{SERVER_NAME} HTTP", version=__version__, lifespan=mcp_app.lifespan)

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "service": SERVER_NAME,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/")
    def info():
        return {
            "name": SERVER_NAME,
            "version": __version__,
            "description": SERVER_DESCRIPTION,
            "endpoints": {
                "health": "/health",
                "mcp": "/mcp (MCP streamable HTTP)",
            },
            "note": "For local use, run via stdio: bika-mcp --mode stdio",
        }

    # Mounted last so /health and / match first.
    app.mount("/", mcp_app)
    return app


# -----------------------------
# Graceful shutdown
# -----------------------------
def _install_signal_handlers():
    def _handler(signum, _frame):
        name = signal.Signals(signum).name
        logger.info(f"Received {name}. Shutting down {SERVER_NAME} gracefully…")
        for h in logging.getLogger().handlers:
            try:
                h.flush()
            except Exception:
                pass
        sys.exit(0)

    try:
        signal.signal(signal.SIGINT, _handler)
        signal.signal(signal.SIGTERM, _handler)
    except Exception as e:
        # Not all environments allow installing signal handlers.
        logger.debug(f"Signal handlers not installed: {e}")


# -----------------------------
# Entrypoint
# -----------------------------
def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Bika MCP server (stdio or HTTP).")
    p.add_argument("--mode", choices=["stdio", "http"], default="stdio",
                   help="Run as MCP over stdio (default) or expose as an HTTP server.")
    p.add_argument("--host", default="127.0.0.1", help="HTTP host (when --mode http).")
    p.add_argument("--port", type=int, default=8000, help="HTTP port (when --mode http).")
    return p.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    load_dotenv(find_dotenv(usecwd=True))
    level_name = configure_logging()

    try:
        config = BikaConfig.from_env()
    except ConfigurationError as e:
        logger.critical(f"Error: {e}")
        sys.exit(1)

    logger.info(f"Starting {SERVER_NAME} {__version__} in mode={args.mode}")
    logger.debug(f"Effective LOG_LEVEL={level_name}, base_url={config.base_url}, "
                 f"default_space_id={'set' if config.default_space_id else 'unset'}")
    _install_signal_handlers()

    mcp = build_server(config)

    if args.mode == "stdio":
        try:
            mcp.run(transport="stdio")
        except Exception as e:
            tb = "".join(traceback.format_exception(type(e), e, e.__traceback__))
            logger.critical(f"Fatal MCP stdio error:\n{tb}")
            sys.exit(1)

    elif args.mode == "http":
        try:
            app = build_http_app(mcp)
            import uvicorn
            uvicorn.run(app, host=args.host, port=args.port, log_level=level_name.lower())
        except Exception as e:
            tb = "".join(traceback.format_exception(type(e), e, e.__traceback__))
            logger.critical(f"Fatal HTTP error:\n{tb}")
            sys.exit(1)


if __name__ == "__main__":
    main()
