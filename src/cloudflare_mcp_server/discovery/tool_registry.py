"""Tool registry: indexes parsed operations and converts them to MCP Tools."""

from __future__ import annotations

from typing import Any

import structlog
from mcp.types import Tool

from ..models.schemas import ToolArguments
from .openapi_parser import ApiOperation

logger = structlog.get_logger(__name__)

# Shared by every tool; not derived from the operation's own parameters.
TOOL_INPUT_SCHEMA: dict[str, Any] = ToolArguments.model_json_schema()


class ToolRegistry:
    """Stores parsed operations and converts them to MCP Tool objects."""

    def __init__(self):
        self._catalog: list[ApiOperation] = []
        self._operations: dict[str, ApiOperation] = {}

    def load(self, operations: list[ApiOperation]) -> int:
        """Keep every operation that has an identifier. Returns the tool count.

        When two operations share an identifier, both stay in the catalog
        but only the first one is reachable by name.
        """
        self._catalog = []
        self._operations = {}
        for op in operations:
            if not op.operation_id:
                continue
            self._catalog.append(op)
            if op.operation_id in self._operations:
                first = self._operations[op.operation_id]
                logger.warning(
                    "Duplicate operationId shadowed",
                    tool=op.operation_id,
                    method=op.method,
                    path=op.path,
                    reachable_path=first.path,
                )
                continue
            self._operations[op.operation_id] = op

        logger.info("Tool registry loaded", tool_count=len(self._catalog))
        return len(self._catalog)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, tool_name: str) -> ApiOperation | None:
        return self._operations.get(tool_name)

    @property
    def tool_names(self) -> list[str]:
        return [op.operation_id for op in self._catalog]

    @property
    def tool_count(self) -> int:
        return len(self._catalog)

    # ------------------------------------------------------------------
    # MCP conversion
    # ------------------------------------------------------------------

    def get_mcp_tools(self) -> list[Tool]:
        """Convert every catalogued operation to an MCP Tool, in document order."""
        return [self._to_mcp_tool(op) for op in self._catalog]

    @staticmethod
    def _to_mcp_tool(op: ApiOperation) -> Tool:
        return Tool(
            name=op.operation_id,
            description=op.description or op.summary or "",
            inputSchema=dict(TOOL_INPUT_SCHEMA),
        )
