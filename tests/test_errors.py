"""Tests for the error taxonomy."""

import pytest

from cloudflare_mcp_server.errors import (
    CloudflareMCPError,
    InvalidArgumentsError,
    MissingArgumentsError,
    MissingRequiredParameterError,
    UnknownOperationError,
    UpstreamError,
)


@pytest.mark.parametrize(
    "error, message",
    [
        (MissingArgumentsError(), "Arguments are required"),
        (UnknownOperationError("zones-get"), "Unknown operation: zones-get"),
        (
            MissingRequiredParameterError("zone_id"),
            "Missing required path parameter: zone_id",
        ),
        (InvalidArgumentsError("Invalid arguments: path: bad"), "Invalid arguments: path: bad"),
        (UpstreamError("Forbidden", 403), "Cloudflare API error: Forbidden"),
    ],
)
def test_messages(error, message):
    assert str(error) == message
    assert isinstance(error, CloudflareMCPError)


def test_upstream_error_attributes():
    err = UpstreamError("Too Many Requests", 429)
    assert err.reason == "Too Many Requests"
    assert err.status_code == 429
