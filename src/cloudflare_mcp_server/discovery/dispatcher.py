"""Generic HTTP dispatcher for catalogued operations."""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import ValidationError

from ..client import CloudflareClient
from ..errors import (
    InvalidArgumentsError,
    MissingArgumentsError,
    MissingRequiredParameterError,
    UnknownOperationError,
)
from ..models.schemas import ToolArguments
from .openapi_parser import ApiOperation
from .tool_registry import ToolRegistry

logger = structlog.get_logger(__name__)


class Dispatcher:
    """Execute a tool call as one request against the Cloudflare API."""

    def __init__(self, registry: ToolRegistry, client: CloudflareClient):
        self.registry = registry
        self.client = client

    async def dispatch(self, name: str, arguments: dict[str, Any] | None) -> Any:
        """Resolve *name*, check *arguments*, send the request and return
        the decoded JSON response unchanged."""
        if arguments is None:
            raise MissingArgumentsError()

        op = self.registry.get(name)
        if op is None:
            raise UnknownOperationError(name)

        args = self._validate_arguments(arguments)
        self._check_required_path_params(op, args.path)

        url = self._build_url(self.client.config.api_base_url, op, args.path)

        logger.info("Dispatching", tool=name, method=op.method, url=url)

        return await self.client.request(
            method=op.method,
            url=url,
            json=args.body,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_arguments(arguments: dict[str, Any]) -> ToolArguments:
        try:
            return ToolArguments.model_validate(arguments)
        except ValidationError as e:
            details = ", ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidArgumentsError(f"Invalid arguments: {details}") from e

    @staticmethod
    def _check_required_path_params(op: ApiOperation, path_args: dict[str, str]) -> None:
        for param in op.path_parameters():
            if param.required and not path_args.get(param.name):
                raise MissingRequiredParameterError(param.name)

    @staticmethod
    def _build_url(base_url: str, op: ApiOperation, path_args: dict[str, str]) -> str:
        """Append the path template to *base_url* and fill in ``{param}``
        placeholders verbatim. Placeholders without a value stay as-is."""
        url = f"{base_url}{op.path}"
        for param in op.path_parameters():
            if param.name in path_args:
                url = url.replace(f"{{{param.name}}}", path_args[param.name], 1)
        return url
