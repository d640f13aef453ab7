"""
Trendy image scraping pipeline.

Wires the pieces together: subreddit URL → name → access token → hot
listing → image filter → URL sanitizer.
"""

from typing import FrozenSet, Iterable, List, Optional

import httpx

from trendy_images.config import load_settings
from trendy_images.images.filters import filter_image_posts
from trendy_images.images.sanitizer import get_allowed_hostnames, sanitize_posts
from trendy_images.models.posts import ImagePost
from trendy_images.reddit.auth import TokenCache, TokenProvider
from trendy_images.reddit.client import RedditClient
from trendy_images.reddit.exceptions import UnauthorizedError
from trendy_images.reddit.subreddit import resolve_subreddit_name
from trendy_images.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_LIMIT = 25


class TrendyImageScraper:
    """
    Fetches direct-image posts from a subreddit's hot listing.

    Attributes:
        token_provider: Source of OAuth2 bearer tokens
        client: Listing client
        allowed_hostnames: Hostnames images may be served from
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        client: RedditClient,
        allowed_hostnames: Optional[Iterable[str]] = None,
    ) -> None:
        self.token_provider = token_provider
        self.client = client
        self.allowed_hostnames: FrozenSet[str] = get_allowed_hostnames(allowed_hostnames)

    async def fetch_image_posts(
        self, subreddit_url: str, limit: int = DEFAULT_LIMIT
    ) -> List[ImagePost]:
        """
        Fetch and filter image posts, before URL sanitization.

        Args:
            subreddit_url: Full subreddit URL, e.g. https://www.reddit.com/r/pics/
            limit: Number of posts to request (clamped to [1, 100])

        Returns:
            Deduplicated direct-image posts in listing order

        Raises:
            InvalidSubredditUrlError: Before any network call, for bad URLs
            RedditAPIError: Any token or listing failure (see exceptions module)
        """
        subreddit_name = resolve_subreddit_name(subreddit_url)

        logger.info("scrape_started", subreddit=subreddit_name, limit=limit)

        token = await self.token_provider.get_access_token()

        try:
            page = await self.client.fetch_hot_listing(subreddit_name, limit, token)
        except UnauthorizedError:
            # The next request must not reuse a token Reddit just rejected
            self.token_provider.invalidate(token)
            raise

        posts = filter_image_posts(page)

        logger.info(
            "scrape_completed",
            subreddit=subreddit_name,
            listing_posts=len(page.posts),
            image_posts=len(posts),
        )

        return posts

    async def scrape(
        self, subreddit_url: str, limit: int = DEFAULT_LIMIT
    ) -> List[ImagePost]:
        """Fetch image posts and keep only those on allowed hosts."""
        posts = await self.fetch_image_posts(subreddit_url, limit)
        return sanitize_posts(posts, self.allowed_hostnames)


_default_scraper: Optional[TrendyImageScraper] = None


def get_scraper() -> TrendyImageScraper:
    """
    Return the process-wide scraper, building it on first use.

    The scraper's TokenCache is therefore shared by every request in the
    process.
    """
    global _default_scraper

    if _default_scraper is None:
        settings = load_settings()
        http_client = httpx.AsyncClient(timeout=settings.request_timeout)
        _default_scraper = TrendyImageScraper(
            token_provider=TokenProvider(
                http_client=http_client,
                client_id=settings.reddit_client_id,
                client_secret=settings.reddit_client_secret,
                user_agent=settings.reddit_user_agent,
                cache=TokenCache(),
            ),
            client=RedditClient(http_client, user_agent=settings.reddit_user_agent),
            allowed_hostnames=settings.allowed_image_hostnames,
        )
        logger.info(
            "scraper_initialized",
            credentials_configured=settings.has_credentials,
            allowed_hostnames=sorted(_default_scraper.allowed_hostnames),
        )

    return _default_scraper


async def close_scraper() -> None:
    """
    Close the process-wide scraper's HTTP client and forget it.

    The next get_scraper() call re-reads settings, so this is also how
    rotated credentials are picked up.
    """
    global _default_scraper

    scraper, _default_scraper = _default_scraper, None
    if scraper is not None:
        await scraper.client.http_client.aclose()
        logger.info("scraper_closed")


async def scrape_trendy_images(
    subreddit_url: str, limit: int = DEFAULT_LIMIT
) -> List[ImagePost]:
    """
    Fetch sanitized direct-image posts from a subreddit's hot listing.

    Args:
        subreddit_url: Full subreddit URL
        limit: Number of posts to request (default 25, max 100)

    Returns:
        Display-ready image posts, possibly empty

    Raises:
        RedditAPIError: Or one of its subclasses; nothing is swallowed

    Example:
        >>> posts = await scrape_trendy_images("https://www.reddit.com/r/pics/")
        >>> posts[0].image_url
        'https://i.redd.it/....jpg'
    """
    return await get_scraper().scrape(subreddit_url, limit)
