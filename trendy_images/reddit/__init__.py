"""
Reddit API integration layer.

This module provides:
- TokenProvider / TokenCache: OAuth2 client-credentials tokens
- RedditClient: hot listing fetch and decode
- Subreddit URL parsing
- Custom exception hierarchy for error handling
- TrendyImageScraper: the end-to-end image pipeline

Example:
    >>> from trendy_images.reddit import scrape_trendy_images
    >>> posts = await scrape_trendy_images("https://www.reddit.com/r/pics/")
"""

from trendy_images.reddit.auth import AccessToken, TokenCache, TokenProvider
from trendy_images.reddit.client import RedditClient
from trendy_images.reddit.exceptions import (
    AuthenticationError,
    CredentialsMissingError,
    ErrorKind,
    ForbiddenError,
    InvalidSubredditUrlError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RedditAPIError,
    UnauthorizedError,
)
from trendy_images.reddit.listing import parse_listing
from trendy_images.reddit.scraper import (
    TrendyImageScraper,
    get_scraper,
    close_scraper,
    scrape_trendy_images,
)
from trendy_images.reddit.subreddit import extract_subreddit_name, resolve_subreddit_name

__all__ = [
    # Authentication
    "AccessToken",
    "TokenCache",
    "TokenProvider",
    # Listing client
    "RedditClient",
    "parse_listing",
    # Subreddit URLs
    "extract_subreddit_name",
    "resolve_subreddit_name",
    # Exceptions
    "ErrorKind",
    "RedditAPIError",
    "CredentialsMissingError",
    "AuthenticationError",
    "InvalidSubredditUrlError",
    "NotFoundError",
    "ForbiddenError",
    "RateLimitError",
    "UnauthorizedError",
    "MalformedResponseError",
    "NetworkError",
    # Pipeline
    "TrendyImageScraper",
    "get_scraper",
    "close_scraper",
    "scrape_trendy_images",
]
