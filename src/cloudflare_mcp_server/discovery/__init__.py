"""Discovery module: OpenAPI operations to MCP tools and back to HTTP calls."""

from .dispatcher import Dispatcher
from .openapi_parser import ApiOperation, OpenAPIParser, OperationParameter
from .tool_registry import ToolRegistry

__all__ = [
    "ApiOperation",
    "OperationParameter",
    "OpenAPIParser",
    "ToolRegistry",
    "Dispatcher",
]
