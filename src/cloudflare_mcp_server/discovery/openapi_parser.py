"""Load the bundled Cloudflare OpenAPI document into ApiOperation objects."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).parent.parent / "openapi_schema.json"

_HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


@dataclass(frozen=True)
class OperationParameter:
    """One declared parameter of an operation."""

    location: str  # path, query, header, cookie
    name: str
    required: bool
    schema: dict[str, Any] | None


@dataclass(frozen=True)
class ApiOperation:
    """One API operation parsed from the OpenAPI document."""

    operation_id: str | None
    method: str  # GET, POST, …
    path: str  # /zones/{zone_id}/dns_records
    summary: str
    description: str
    parameters: tuple[OperationParameter, ...]

    def path_parameters(self) -> list[OperationParameter]:
        return [p for p in self.parameters if p.location == "path"]


class OpenAPIParser:
    """Reads an OpenAPI JSON file and converts it to an ApiOperation list."""

    def __init__(self, schema_path: str | Path | None = None):
        self.schema_path = Path(schema_path) if schema_path else DEFAULT_SCHEMA_PATH

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self) -> list[ApiOperation]:
        """Read the document from disk and parse it."""
        with open(self.schema_path, encoding="utf-8") as f:
            spec = json.load(f)
        logger.info("Loaded OpenAPI document", path=str(self.schema_path))
        return self._parse_spec(spec)

    def parse_spec_dict(self, spec: dict[str, Any]) -> list[ApiOperation]:
        """Parse an already-loaded spec dict (useful for testing)."""
        return self._parse_spec(spec)

    # ------------------------------------------------------------------
    # Parse
    # ------------------------------------------------------------------

    def _parse_spec(self, spec: dict[str, Any]) -> list[ApiOperation]:
        operations: list[ApiOperation] = []

        for path, path_item in spec.get("paths", {}).items():
            for method, op in path_item.items():
                if method.lower() not in _HTTP_METHODS:
                    continue

                summary = op.get("summary") or ""
                parameters = tuple(
                    self._to_parameter(self._maybe_resolve_ref(p, spec))
                    for p in op.get("parameters", [])
                )
                operations.append(
                    ApiOperation(
                        operation_id=op.get("operationId") or None,
                        method=method.upper(),
                        path=path,
                        summary=summary,
                        description=op.get("description") or summary,
                        parameters=parameters,
                    )
                )

        logger.info("Parsed OpenAPI spec", operation_count=len(operations))
        return operations

    @staticmethod
    def _to_parameter(raw: dict[str, Any]) -> OperationParameter:
        return OperationParameter(
            location=raw.get("in", ""),
            name=raw.get("name", ""),
            required=bool(raw.get("required", False)),
            schema=raw.get("schema"),
        )

    # ------------------------------------------------------------------
    # $ref resolution
    # ------------------------------------------------------------------

    @staticmethod
    def _maybe_resolve_ref(obj: dict[str, Any], spec: dict[str, Any]) -> dict[str, Any]:
        """Follow a local ``#/...`` JSON pointer; leave anything else alone."""
        ref = obj.get("$ref")
        if not isinstance(ref, str) or not ref.startswith("#/"):
            return obj

        target: Any = spec
        for token in ref[2:].split("/"):
            token = token.replace("~1", "/").replace("~0", "~")
            if not isinstance(target, dict) or token not in target:
                logger.warning("Unresolvable parameter reference", ref=ref)
                return obj
            target = target[token]
        return target if isinstance(target, dict) else obj
