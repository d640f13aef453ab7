"""
Scrape Trendy Images MCP Tool.

Implements the scrape_trendy_images tool: validates a subreddit URL and
post limit, fetches the hot listing, keeps direct-image posts on allowed
hosts and reports the outcome with a human-readable message.
"""

import time
from typing import Any, Dict
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

from trendy_images.config import load_settings
from trendy_images.images.sanitizer import sanitize_posts
from trendy_images.models.responses import ResponseMetadata, ToolResponse
from trendy_images.reddit.exceptions import CredentialsMissingError, RedditAPIError
from trendy_images.reddit.scraper import DEFAULT_LIMIT, get_scraper
from trendy_images.reddit.subreddit import extract_subreddit_name
from trendy_images.server import build_error_response, mcp
from trendy_images.utils.logger import get_logger, log_tool_execution

logger = get_logger(__name__)

TOOL_NAME = "scrape_trendy_images"


class ScrapeTrendyImagesInput(BaseModel):
    """
    Input schema for scrape_trendy_images tool.

    The URL check here is deliberately loose; the exact /r/<name> parsing
    happens in the scraper.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "subreddit_url": "https://www.reddit.com/r/pics/",
                "limit": 25,
            }
        }
    )

    subreddit_url: str = Field(
        ...,
        description="Full subreddit URL, e.g. https://www.reddit.com/r/pics/",
    )

    limit: int = Field(
        DEFAULT_LIMIT,
        ge=1,
        le=100,
        description="Maximum number of hot posts to inspect",
    )

    @field_validator("subreddit_url")
    @classmethod
    def validate_subreddit_url(cls, v: str) -> str:
        """
        Require an absolute http(s) URL pointing into a subreddit.

        Raises:
            ValueError: If the URL is malformed or not a subreddit URL
        """
        try:
            parsed = urlsplit(v)
        except ValueError:
            raise ValueError("Please enter a valid URL.") from None

        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Please enter a valid URL.")

        if "reddit.com/r/" not in v:
            raise ValueError(
                "Please enter a valid Reddit subreddit URL "
                "(e.g., https://www.reddit.com/r/...)."
            )

        return v


@mcp.tool()
async def scrape_trendy_images(params: ScrapeTrendyImagesInput) -> Dict[str, Any]:
    """
    Get direct-image posts from a subreddit's hot listing.

    Videos, galleries and link posts are skipped, repeated image URLs are
    collapsed, and only images hosted on allowed domains are returned.

    Args:
        params: Validated input parameters (ScrapeTrendyImagesInput)

    Returns:
        On success, a dictionary containing:
            - data: subreddit, images (image_url, title), total_returned, message
            - metadata: token reuse and timing
        On failure, an ErrorResponse dictionary (code, message, data).

    Example:
        >>> result = await scrape_trendy_images(ScrapeTrendyImagesInput(
        ...     subreddit_url="https://www.reddit.com/r/pics/",
        ...     limit=25,
        ... ))
        >>> print(result["data"]["message"])
        Successfully fetched 12 images.
    """
    start_time = time.time()

    logger.info(
        "scrape_trendy_images_started",
        subreddit_url=params.subreddit_url,
        limit=params.limit,
    )

    # Fail fast, before any network call
    if not load_settings().has_credentials:
        log_tool_execution(
            tool_name=TOOL_NAME,
            duration_ms=(time.time() - start_time) * 1000,
            token_cached=False,
            error="credentials_missing",
        )
        return build_error_response(CredentialsMissingError()).model_dump()

    scraper = get_scraper()
    token_cached = scraper.token_provider.is_cached()

    try:
        candidates = await scraper.fetch_image_posts(params.subreddit_url, params.limit)
    except RedditAPIError as e:
        log_tool_execution(
            tool_name=TOOL_NAME,
            duration_ms=(time.time() - start_time) * 1000,
            token_cached=token_cached,
            error=str(e),
            error_kind=e.kind.value,
        )
        return build_error_response(e).model_dump()
    except Exception as e:
        logger.error(
            "scrape_trendy_images_failed",
            error_type=type(e).__name__,
            error=str(e),
            exc_info=True,
        )
        log_tool_execution(
            tool_name=TOOL_NAME,
            duration_ms=(time.time() - start_time) * 1000,
            token_cached=token_cached,
            error=str(e),
        )
        return build_error_response(e).model_dump()

    subreddit = extract_subreddit_name(params.subreddit_url)
    images = sanitize_posts(candidates, scraper.allowed_hostnames)

    if not candidates:
        message = (
            f"Found 0 suitable image posts in r/{subreddit} with the current filters."
        )
    elif not images:
        message = (
            f"Found {len(candidates)} posts via API, but their image URLs were not "
            "from allowed domains (check ALLOWED_IMAGE_HOSTNAMES and ensure "
            "i.redd.it, preview.redd.it are included) or were filtered out."
        )
    else:
        message = f"Successfully fetched {len(images)} images."

    execution_time_ms = (time.time() - start_time) * 1000

    metadata = ResponseMetadata(
        token_cached=token_cached,
        execution_time_ms=round(execution_time_ms, 2),
        reddit_api_calls=1 if token_cached else 2,
    )

    tool_response = ToolResponse(
        data={
            "subreddit": subreddit,
            "images": [image.model_dump() for image in images],
            "total_returned": len(images),
            "message": message,
        },
        metadata=metadata,
    )

    log_tool_execution(
        tool_name=TOOL_NAME,
        duration_ms=execution_time_ms,
        token_cached=token_cached,
        subreddit=subreddit,
        candidates=len(candidates),
        images_returned=len(images),
    )

    return tool_response.model_dump()
