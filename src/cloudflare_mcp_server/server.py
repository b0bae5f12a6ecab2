"""Cloudflare MCP Server: tools generated from the Cloudflare OpenAPI document."""

import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import structlog
from mcp import types
from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import Tool

from .client import CloudflareClient, CloudflareConfig
from .discovery.dispatcher import Dispatcher
from .discovery.openapi_parser import ApiOperation, OpenAPIParser
from .discovery.tool_registry import ToolRegistry
from .errors import CloudflareMCPError, MissingArgumentsError

logger = structlog.get_logger(__name__)

SERVER_NAME = "cloudflare-mcp-server"
SERVER_VERSION = "0.1.0"


class CloudflareMCPServer:
    """Cloudflare MCP Server with one tool per OpenAPI operationId."""

    def __init__(
        self,
        config: Optional[CloudflareConfig] = None,
        operations: Optional[List[ApiOperation]] = None,
    ):
        self.config = config or CloudflareConfig()
        self.server = Server(SERVER_NAME)

        if not self.config.api_token:
            logger.warning("CLOUDFLARE_API_TOKEN is not set; requests will be rejected")

        if operations is None:
            operations = OpenAPIParser(self.config.openapi_schema_path).load()
        self.registry = ToolRegistry()
        self.registry.load(operations)

        self.client = CloudflareClient(self.config)
        self.dispatcher = Dispatcher(self.registry, self.client)

        self._register_handlers()

    # ------------------------------------------------------------------
    # MCP handlers
    # ------------------------------------------------------------------

    async def list_tools(self) -> List[Tool]:
        tools = self.registry.get_mcp_tools()
        logger.info("list_tools", count=len(tools))
        return tools

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> List[types.TextContent]:
        logger.info("call_tool", tool=name)
        try:
            result = await self.dispatcher.dispatch(name, arguments)
        except Exception as e:
            logger.error(
                "Tool call failed",
                error=str(e),
                tool=name,
                exc_info=not isinstance(e, CloudflareMCPError),
            )
            raise
        return [
            types.TextContent(
                type="text",
                text=json.dumps(result, indent=2, default=str),
            )
        ]

    def _register_handlers(self) -> None:
        self.server.list_tools()(self.list_tools)
        # Arguments are checked by ToolArguments in the dispatcher, not by the SDK.
        self.server.call_tool(validate_input=False)(self.call_tool)

        # The SDK replaces absent arguments with {} before our handler runs.
        sdk_call_tool = self.server.request_handlers[types.CallToolRequest]

        async def call_tool_request(req: types.CallToolRequest) -> types.ServerResult:
            if req.params.arguments is None:
                error = MissingArgumentsError()
                logger.error("Tool call failed", error=str(error), tool=req.params.name)
                return types.ServerResult(
                    types.CallToolResult(
                        content=[types.TextContent(type="text", text=str(error))],
                        isError=True,
                    )
                )
            return await sdk_call_tool(req)

        self.server.request_handlers[types.CallToolRequest] = call_tool_request

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self) -> None:
        try:
            async with stdio_server() as (read_stream, write_stream):
                logger.info("Cloudflare MCP server running on stdio")
                await self.server.run(
                    read_stream,
                    write_stream,
                    InitializationOptions(
                        server_name=SERVER_NAME,
                        server_version=SERVER_VERSION,
                        capabilities=types.ServerCapabilities(
                            tools=types.ToolsCapability(listChanged=False),
                        ),
                    ),
                )
        finally:
            await self.client.close()


# ------------------------------------------------------------------
# Entry points
# ------------------------------------------------------------------


def configure_logging(level: str) -> None:
    # stdout carries the MCP protocol; logs go to stderr only.
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


async def async_main() -> None:
    try:
        config = CloudflareConfig()
        configure_logging(config.log_level)
        server = CloudflareMCPServer(config)
        await server.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error("Fatal error in main", error=str(e), exc_info=True)
        sys.exit(1)


def main() -> None:
    """Synchronous entry point for console script."""
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
