"""
Reddit listing client.

Fetches the hot listing of a subreddit from the authenticated API host
and maps every failure onto the exception hierarchy in
``trendy_images.reddit.exceptions``. Exactly one request per call; nothing
is retried here.
"""

from typing import Optional

import httpx

from trendy_images.models.posts import ListingPage
from trendy_images.reddit.exceptions import (
    ForbiddenError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RedditAPIError,
    UnauthorizedError,
)
from trendy_images.reddit.listing import parse_listing
from trendy_images.utils.logger import get_logger

logger = get_logger(__name__)

API_BASE_URL = "https://oauth.reddit.com"

MIN_LIMIT = 1
MAX_LIMIT = 100


def clamp_limit(limit: int) -> int:
    """Clamp a requested post count to what the listing endpoint accepts."""
    return max(MIN_LIMIT, min(limit, MAX_LIMIT))


def parse_retry_after(response: httpx.Response) -> Optional[int]:
    """
    Read how long Reddit wants us to back off, in whole seconds.

    Checks ``Retry-After`` first, then Reddit's ``x-ratelimit-reset``.
    """
    for header in ("retry-after", "x-ratelimit-reset"):
        value = response.headers.get(header)
        if value is None:
            continue
        try:
            return max(0, int(float(value)))
        except ValueError:
            continue
    return None


class RedditClient:
    """
    Client for the authenticated listing endpoint.

    Example:
        >>> async with httpx.AsyncClient() as http:
        ...     client = RedditClient(http, user_agent="web:myapp:1.0.0")
        ...     page = await client.fetch_hot_listing("pics", 25, token)
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        user_agent: str,
        base_url: str = API_BASE_URL,
    ) -> None:
        self.http_client = http_client
        self.user_agent = user_agent
        self.base_url = base_url.rstrip("/")

    async def fetch_hot_listing(
        self, subreddit_name: str, limit: int, token: str
    ) -> ListingPage:
        """
        Fetch one page of a subreddit's hot listing.

        Args:
            subreddit_name: Bare subreddit name (no ``r/`` prefix)
            limit: Requested number of posts, clamped to [1, 100]
            token: OAuth2 bearer token

        Returns:
            Decoded ListingPage

        Raises:
            UnauthorizedError: 401, the bearer token was rejected
            ForbiddenError: 403
            NotFoundError: 404, subreddit missing or private
            RateLimitError: 429
            RedditAPIError: Any other non-2xx status
            MalformedResponseError: Body is not a valid listing
            NetworkError: Reddit could not be reached
        """
        url = f"{self.base_url}/r/{subreddit_name}/hot"
        limit = clamp_limit(limit)

        logger.info("listing_fetch_started", subreddit=subreddit_name, limit=limit)

        try:
            response = await self.http_client.get(
                url,
                params={"limit": limit},
                headers={
                    "Authorization": f"Bearer {token}",
                    "User-Agent": self.user_agent,
                },
            )
        except httpx.HTTPError as e:
            logger.error(
                "listing_network_error",
                subreddit=subreddit_name,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise NetworkError() from e

        if not response.is_success:
            logger.error(
                "listing_fetch_failed",
                subreddit=subreddit_name,
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=response.text,
            )
            raise self._error_for_status(response, subreddit_name)

        try:
            payload = response.json()
        except ValueError as e:
            logger.error("listing_body_not_json", subreddit=subreddit_name)
            raise MalformedResponseError(status_code=response.status_code) from e

        page = parse_listing(payload)

        logger.info(
            "listing_fetch_completed",
            subreddit=subreddit_name,
            posts_count=len(page.posts),
        )

        return page

    @staticmethod
    def _error_for_status(
        response: httpx.Response, subreddit_name: str
    ) -> RedditAPIError:
        status = response.status_code
        if status == 401:
            return UnauthorizedError()
        if status == 403:
            return ForbiddenError(subreddit_name)
        if status == 404:
            return NotFoundError(subreddit_name)
        if status == 429:
            return RateLimitError(retry_after=parse_retry_after(response))
        return RedditAPIError(
            f"Failed to fetch data from Reddit API. Status: {status}",
            status_code=status,
        )
