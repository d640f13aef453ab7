"""
Process configuration loaded from environment variables.

Reddit credentials, the image hostname allow-list and runtime knobs all
come from the environment so the same build runs locally and in production.
"""

import os
from typing import FrozenSet, Optional

from pydantic import BaseModel, Field

APP_VERSION = "1.0.0"

DEFAULT_ALLOWED_IMAGE_HOSTNAMES = "i.redd.it,preview.redd.it,picsum.photos"


def build_user_agent(client_id: Optional[str]) -> str:
    """
    Build the descriptive User-Agent Reddit requires.

    Reddit throttles or rejects generic agents, so the format follows
    ``<platform>:<app id>:<version> (<description>)``.

    Args:
        client_id: OAuth client id, used as the app id when available

    Returns:
        User-Agent header value
    """
    app_id = client_id or "unknown-app-id"
    return f"web:{app_id}:{APP_VERSION} (Trendy Image Scraper)"


def parse_hostnames(raw: Optional[str]) -> FrozenSet[str]:
    """Split a comma-separated hostname list, dropping blanks and case."""
    if not raw:
        return frozenset()
    return frozenset(
        host.strip().lower() for host in raw.split(",") if host.strip()
    )


class Settings(BaseModel):
    """Runtime settings for the scraper and MCP server."""

    reddit_client_id: Optional[str] = Field(None, description="Reddit OAuth client id")
    reddit_client_secret: Optional[str] = Field(
        None, description="Reddit OAuth client secret"
    )
    reddit_user_agent: str = Field(..., min_length=1)
    allowed_image_hostnames: FrozenSet[str] = Field(default_factory=frozenset)
    request_timeout: float = Field(30.0, gt=0)
    log_level: str = "INFO"
    environment: str = "production"
    mcp_transport: str = "stdio"

    @property
    def has_credentials(self) -> bool:
        """Both the client id and the secret are present and non-empty."""
        return bool(self.reddit_client_id and self.reddit_client_secret)


def load_settings() -> Settings:
    """
    Read settings from the environment.

    Returns:
        Settings populated from REDDIT_*, ALLOWED_IMAGE_HOSTNAMES, LOG_LEVEL,
        ENVIRONMENT and MCP_TRANSPORT

    Example:
        >>> settings = load_settings()
        >>> settings.has_credentials
        False
    """
    client_id = os.getenv("REDDIT_CLIENT_ID") or None
    client_secret = os.getenv("REDDIT_CLIENT_SECRET") or None

    return Settings(
        reddit_client_id=client_id,
        reddit_client_secret=client_secret,
        reddit_user_agent=os.getenv("REDDIT_USER_AGENT") or build_user_agent(client_id),
        allowed_image_hostnames=parse_hostnames(
            os.getenv("ALLOWED_IMAGE_HOSTNAMES", DEFAULT_ALLOWED_IMAGE_HOSTNAMES)
        ),
        request_timeout=float(os.getenv("REDDIT_REQUEST_TIMEOUT", "30")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        environment=os.getenv("ENVIRONMENT", "production"),
        mcp_transport=os.getenv("MCP_TRANSPORT", "stdio"),
    )
