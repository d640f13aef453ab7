"""
FastMCP Server initialization and configuration.

Sets up the MCP server with metadata, the health check tool, and the
mapping from scraper errors to JSON-RPC style error responses.
"""
import traceback
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from trendy_images.config import APP_VERSION, load_settings
from trendy_images.models.responses import ErrorResponse, HealthCheckResponse
from trendy_images.reddit.exceptions import (
    AuthenticationError,
    CredentialsMissingError,
    InvalidSubredditUrlError,
    RateLimitError,
    RedditAPIError,
    UnauthorizedError,
)
from trendy_images.reddit.scraper import get_scraper
from trendy_images.utils.logger import get_logger

# Initialize logger
logger = get_logger(__name__)

# Server metadata
SERVER_NAME = "trendy-images-server"
SERVER_VERSION = APP_VERSION
SERVER_DESCRIPTION = (
    "Fetches direct-image posts from a subreddit's hot listing via Reddit's OAuth2 API"
)

# JSON-RPC error codes
INVALID_PARAMS = -32602
RATE_LIMITED = -32000
REDDIT_API_ERROR = -32001
CREDENTIALS_MISSING = -32003
AUTHENTICATION_FAILED = -32004
INTERNAL_ERROR = -32603

CREDENTIALS_MISSING_MESSAGE = (
    "Reddit API credentials (REDDIT_CLIENT_ID, REDDIT_CLIENT_SECRET) are not "
    "configured on the server. Please set them in the .env file."
)
UNAUTHORIZED_MESSAGE = (
    "Failed to authenticate with Reddit API (401 Unauthorized). Please check "
    "your REDDIT_CLIENT_ID and REDDIT_CLIENT_SECRET in the .env file."
)


def create_mcp_server() -> FastMCP:
    """
    Create and configure the FastMCP server instance.

    Returns:
        Configured FastMCP server with the health check registered

    Example:
        >>> server = create_mcp_server()
        >>> server.name
        'trendy-images-server'
    """
    mcp = FastMCP(
        name=SERVER_NAME,
        instructions=SERVER_DESCRIPTION,
    )

    logger.info(
        "mcp_server_initialized",
        name=SERVER_NAME,
        version=SERVER_VERSION,
    )

    register_health_check(mcp)

    return mcp


def build_error_response(error: Exception) -> ErrorResponse:
    """
    Convert an exception into an ErrorResponse for tool callers.

    Args:
        error: Exception raised while serving a tool call

    Returns:
        ErrorResponse with appropriate code and message

    Error Codes:
        -32602: Invalid parameters (bad subreddit URL, input validation)
        -32000: Rate limit exceeded (RateLimitError)
        -32001: Reddit API error (any other RedditAPIError)
        -32003: Reddit credentials not configured
        -32004: Reddit rejected our credentials or token (401)
        -32603: Internal server error (unexpected)
    """
    if isinstance(error, (InvalidSubredditUrlError, ValidationError)):
        logger.warning("validation_error", message=str(error))
        return ErrorResponse(
            code=INVALID_PARAMS,
            message="Invalid parameters",
            data={"reason": str(error)},
        )

    if isinstance(error, CredentialsMissingError):
        logger.error("credentials_missing_error")
        return ErrorResponse(
            code=CREDENTIALS_MISSING,
            message=CREDENTIALS_MISSING_MESSAGE,
            data={"kind": error.kind.value},
        )

    if isinstance(error, (AuthenticationError, UnauthorizedError)):
        logger.error("authentication_error", message=str(error), status_code=error.status_code)
        message = UNAUTHORIZED_MESSAGE if error.status_code == 401 else error.message
        return ErrorResponse(
            code=AUTHENTICATION_FAILED,
            message=message,
            data={"kind": error.kind.value, "status_code": error.status_code},
        )

    if isinstance(error, RateLimitError):
        logger.warning("rate_limit_error", message=str(error))
        return ErrorResponse(
            code=RATE_LIMITED,
            message=error.message,
            data={
                "kind": error.kind.value,
                "retry_after_seconds": error.retry_after,
            },
        )

    if isinstance(error, RedditAPIError):
        logger.error("reddit_api_error", message=str(error), kind=error.kind.value)
        return ErrorResponse(
            code=REDDIT_API_ERROR,
            message=error.message,
            data={"kind": error.kind.value, "status_code": error.status_code},
        )

    logger.error(
        "unexpected_error",
        error_type=type(error).__name__,
        error_message=str(error),
        traceback=traceback.format_exc(),
    )

    return ErrorResponse(
        code=INTERNAL_ERROR,
        message="An unexpected error occurred while fetching data from Reddit.",
        data={"error_type": type(error).__name__},
    )


def register_health_check(mcp: FastMCP) -> None:
    """
    Register the health check tool.

    Args:
        mcp: FastMCP server instance
    """

    @mcp.tool()
    async def health_check() -> dict[str, Any]:
        """
        Health check endpoint for monitoring.

        Returns server health status and component availability.

        Returns:
            Dictionary with status, version, and component health
        """
        return check_health().model_dump()


def check_health() -> HealthCheckResponse:
    """Report the state of the server, credentials and token cache."""
    settings = load_settings()

    components = {
        "server": "healthy",
        "reddit_credentials": "healthy" if settings.has_credentials else "unhealthy",
        # Cold cache is normal until the first request
        "token_cache": "healthy" if get_scraper().token_provider.is_cached() else "unknown",
    }

    if all(status == "healthy" for status in components.values()):
        overall_status = "healthy"
    elif any(status == "unhealthy" for status in components.values()):
        overall_status = "unhealthy"
    else:
        overall_status = "degraded"

    logger.debug("health_check_performed", status=overall_status)

    return HealthCheckResponse(
        status=overall_status,
        version=SERVER_VERSION,
        components=components,
    )


# Create global MCP server instance (singleton)
mcp = create_mcp_server()
