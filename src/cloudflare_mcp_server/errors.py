"""Exceptions raised while serving Cloudflare tool calls."""

from typing import Optional


class CloudflareMCPError(Exception):
    """Base exception for all tool-call failures."""


class MissingArgumentsError(CloudflareMCPError):
    def __init__(self):
        super().__init__("Arguments are required")


class UnknownOperationError(CloudflareMCPError):
    def __init__(self, name: str):
        super().__init__(f"Unknown operation: {name}")
        self.name = name


class MissingRequiredParameterError(CloudflareMCPError):
    def __init__(self, parameter: str):
        super().__init__(f"Missing required path parameter: {parameter}")
        self.parameter = parameter


class InvalidArgumentsError(CloudflareMCPError):
    """Tool arguments did not match the generic argument schema."""


class UpstreamError(CloudflareMCPError):
    """The Cloudflare API answered with a non-success status.

    Only the status text is kept; the response body is never part of the
    message.
    """

    def __init__(self, reason: str, status_code: Optional[int] = None):
        super().__init__(f"Cloudflare API error: {reason}")
        self.reason = reason
        self.status_code = status_code
