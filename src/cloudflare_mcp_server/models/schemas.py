"""Pydantic models for tool arguments.

Every discovered tool shares the same argument shape; the operation's own
OpenAPI parameters are not reflected in it.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ToolArguments(BaseModel):
    """Arguments accepted by every Cloudflare operation tool."""

    path: Dict[str, str] = Field(
        default_factory=dict,
        description="Values for the {placeholders} in the operation's URL path",
    )
    method: Optional[str] = Field(
        default=None, description="HTTP method (informational, not used)"
    )
    body: Optional[Any] = Field(
        default=None, description="JSON request body sent as-is"
    )

    model_config = {"coerce_numbers_to_str": True}
