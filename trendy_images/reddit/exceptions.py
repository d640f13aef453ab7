"""
Custom exceptions for Reddit API integration.

Every failure the scraping pipeline can surface is one of these classes.
Each carries an ``ErrorKind`` tag so callers can branch on ``error.kind``
instead of matching message text.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Tags for the failure classes of a scrape request."""

    CREDENTIALS_MISSING = "credentials_missing"
    AUTH_FAILED = "auth_failed"
    INVALID_URL = "invalid_url"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    MALFORMED_RESPONSE = "malformed_response"
    NETWORK = "network"
    API_ERROR = "api_error"


class RedditAPIError(Exception):
    """
    Base exception for all Reddit API related errors.

    Raised directly for listing failures that have no dedicated class
    (for example a 500 from Reddit). Use this to catch any Reddit-related
    error.
    """

    kind: ErrorKind = ErrorKind.API_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """
        Initialize RedditAPIError.

        Args:
            message: Error description
            status_code: Optional HTTP status code from Reddit API
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class CredentialsMissingError(RedditAPIError):
    """
    Raised when REDDIT_CLIENT_ID or REDDIT_CLIENT_SECRET is not configured.

    Always raised before any network call is attempted.
    """

    kind = ErrorKind.CREDENTIALS_MISSING

    def __init__(
        self,
        message: str = (
            "Reddit API credentials are missing. "
            "Please configure them in your .env file."
        ),
    ) -> None:
        super().__init__(message)


class AuthenticationError(RedditAPIError):
    """
    Raised when the OAuth2 token endpoint rejects the client.

    This occurs when:
    - The token endpoint returns a non-success status
    - The token endpoint hands back something other than a bearer token

    Example:
        >>> raise AuthenticationError("Failed to get a valid bearer token from Reddit.")
    """

    kind = ErrorKind.AUTH_FAILED

    def __init__(
        self,
        message: str = "Reddit authentication failed",
        status_code: Optional[int] = None,
    ) -> None:
        """
        Initialize AuthenticationError.

        Args:
            message: Error description
            status_code: HTTP status returned by the token endpoint, if any
        """
        super().__init__(message, status_code=status_code)


class InvalidSubredditUrlError(RedditAPIError):
    """Raised when a subreddit URL has no usable /r/<name> segment."""

    kind = ErrorKind.INVALID_URL

    def __init__(
        self,
        url: str,
        message: str = (
            "Invalid subreddit URL format. "
            "Please use the format: https://www.reddit.com/r/subredditname/"
        ),
    ) -> None:
        self.url = url
        super().__init__(message)


class NotFoundError(RedditAPIError):
    """
    Raised when the subreddit does not exist or is private.

    Example:
        >>> raise NotFoundError("invalidname")
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, subreddit: str, message: Optional[str] = None) -> None:
        """
        Initialize NotFoundError.

        Args:
            subreddit: Subreddit name that was requested
            message: Optional custom error message
        """
        self.subreddit = subreddit

        if message is None:
            message = f"Subreddit 'r/{subreddit}' not found or is private (404)."

        super().__init__(message, status_code=404)


class ForbiddenError(RedditAPIError):
    """
    Raised when access to a subreddit listing is forbidden.

    Usually means the subreddit is private or quarantined, the token lacks
    permission, or Reddit rejected the User-Agent.
    """

    kind = ErrorKind.FORBIDDEN

    def __init__(self, subreddit: str, message: Optional[str] = None) -> None:
        self.subreddit = subreddit

        if message is None:
            message = (
                f"Access denied (403) when fetching r/{subreddit}. "
                "Check API key permissions or User-Agent."
            )

        super().__init__(message, status_code=403)


class RateLimitError(RedditAPIError):
    """
    Raised when Reddit answers a listing request with 429.

    Attributes:
        retry_after: Seconds Reddit asked us to wait, when it said so

    Example:
        >>> raise RateLimitError(retry_after=15)
    """

    kind = ErrorKind.RATE_LIMITED

    def __init__(
        self,
        retry_after: Optional[int] = None,
        message: str = (
            "Rate limited by Reddit (429 Too Many Requests). "
            "Please wait and try again later."
        ),
    ) -> None:
        """
        Initialize RateLimitError.

        Args:
            retry_after: Seconds to wait before retrying, if known
            message: Error description
        """
        self.retry_after = retry_after
        super().__init__(message, status_code=429)

    def __str__(self) -> str:
        """Return formatted error message with retry information."""
        if self.retry_after is None:
            return self.message
        return f"{self.message} (retry after {self.retry_after}s)"


class UnauthorizedError(RedditAPIError):
    """
    Raised when the listing endpoint rejects our bearer token (401).

    Distinct from AuthenticationError, which covers the token endpoint.
    """

    kind = ErrorKind.UNAUTHORIZED

    def __init__(
        self,
        message: str = (
            "Reddit API authentication failed (401 Unauthorized). "
            "This usually means your access token is invalid or expired. "
            "The token will be refreshed on the next request; if this persists, "
            "check your API credentials."
        ),
    ) -> None:
        super().__init__(message, status_code=401)


class MalformedResponseError(RedditAPIError):
    """Raised when a Reddit response body does not have the expected shape."""

    kind = ErrorKind.MALFORMED_RESPONSE

    def __init__(
        self,
        message: str = "Received invalid data structure from Reddit API.",
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, status_code=status_code)


class NetworkError(RedditAPIError):
    """
    Raised when Reddit could not be reached at all.

    Covers DNS failures, timeouts and connection resets on either the token
    or the listing call.
    """

    kind = ErrorKind.NETWORK

    def __init__(self, message: str = "Could not connect to Reddit API.") -> None:
        super().__init__(message)
