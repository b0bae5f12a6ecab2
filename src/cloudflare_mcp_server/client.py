"""Cloudflare API client for MCP server."""

from pathlib import Path
from typing import Any, Dict, Optional

import httpx
import structlog
from pydantic import Field
from pydantic_settings import BaseSettings

from .errors import UpstreamError

logger = structlog.get_logger(__name__)

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"
DEFAULT_USER_AGENT = "cloudflare-mcp-server"


class CloudflareConfig(BaseSettings):
    """Configuration for the Cloudflare client."""

    api_token: str = Field(
        default="", description="API token sent as a Bearer credential"
    )
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL the operation path templates are appended to",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT, description="User-Agent sent with every request"
    )
    openapi_schema_path: Optional[Path] = Field(
        default=None,
        description="OpenAPI document to build tools from (defaults to the bundled one)",
    )
    timeout: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds (unset uses the httpx default)",
    )
    log_level: str = Field(default="INFO", description="Log level for stderr logging")

    model_config = {
        "env_prefix": "CLOUDFLARE_",
        "case_sensitive": False,
        "env_file": ".env",
        "extra": "ignore",
    }


class CloudflareClient:
    """Asynchronous client for the Cloudflare API."""

    def __init__(self, config: Optional[CloudflareConfig] = None):
        self.config = config or CloudflareConfig()
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_client(self):
        if not self.client:
            kwargs: Dict[str, Any] = {
                "headers": self.get_headers(),
                "follow_redirects": True,
            }
            if self.config.timeout is not None:
                kwargs["timeout"] = self.config.timeout
            self.client = httpx.AsyncClient(**kwargs)

    async def close(self) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None

    def get_headers(self) -> Dict[str, str]:
        """Headers attached to every Cloudflare request."""
        return {
            "Authorization": f"Bearer {self.config.api_token}".strip(),
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }

    async def request(
        self,
        method: str,
        url: str,
        json: Optional[Any] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Transport failures and undecodable bodies propagate unchanged.
        """
        await self._ensure_client()

        kwargs: Dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json

        try:
            response = await self.client.request(method=method, url=url, **kwargs)
        except httpx.RequestError as e:
            logger.error("Request error", error=str(e), method=method, url=url)
            raise

        logger.info(
            "API request",
            method=method,
            url=url,
            status_code=response.status_code,
        )

        if not response.is_success:
            raise UpstreamError(response.reason_phrase, response.status_code)

        return response.json()
