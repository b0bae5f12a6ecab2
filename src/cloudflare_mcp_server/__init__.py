"""MCP server exposing the Cloudflare v4 API as tools."""

__version__ = "0.1.0"
