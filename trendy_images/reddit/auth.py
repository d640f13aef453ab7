"""
OAuth2 client-credentials authentication for the Reddit API.

TokenProvider exchanges the app's client id and secret for an
application-only bearer token and keeps it in a TokenCache until five
minutes before Reddit says it expires. Expiry is checked lazily on the next
call; there is no background refresh.
"""

import asyncio
import base64
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from trendy_images.reddit.exceptions import (
    AuthenticationError,
    CredentialsMissingError,
    MalformedResponseError,
    NetworkError,
)
from trendy_images.utils.logger import get_logger

logger = get_logger(__name__)

TOKEN_URL = "https://www.reddit.com/api/v1/access_token"

# Cached tokens are treated as expired this long before Reddit's deadline
EXPIRY_BUFFER_SECONDS = 300


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccessToken(BaseModel):
    """Bearer token plus the instant after which it must not be reused."""

    value: str = Field(..., min_length=1)
    expires_at: datetime


class TokenResponse(BaseModel):
    """Body returned by the token endpoint."""

    access_token: str = Field(..., min_length=1)
    token_type: str
    expires_in: int
    scope: Optional[str] = None


class TokenCache:
    """
    Holds at most one access token.

    A new token overwrites the previous one. ``clear`` drops both the
    value and the expiry.

    Example:
        >>> cache = TokenCache()
        >>> cache.store(AccessToken(value="abc", expires_at=later))
        >>> cache.get(now)
        'abc'
    """

    def __init__(self) -> None:
        self._token: Optional[AccessToken] = None

    @property
    def token(self) -> Optional[AccessToken]:
        return self._token

    def get(self, now: datetime) -> Optional[str]:
        """
        Return the cached token value if it is still fresh at ``now``.

        Args:
            now: Current instant (timezone-aware)

        Returns:
            Token value, or None when empty or expired
        """
        if self._token is None or now >= self._token.expires_at:
            return None
        return self._token.value

    def store(self, token: AccessToken) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class TokenProvider:
    """
    Obtains valid access tokens, refreshing through the token endpoint.

    Refreshes are single-flight: concurrent callers that miss the cache
    wait on one lock, and whoever gets it second finds the fresh token
    already stored.

    Attributes:
        cache: TokenCache backing this provider
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        client_id: Optional[str],
        client_secret: Optional[str],
        user_agent: str,
        cache: Optional[TokenCache] = None,
        token_url: str = TOKEN_URL,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """
        Initialize TokenProvider.

        Args:
            http_client: Shared async HTTP client
            client_id: Reddit app client id (may be missing)
            client_secret: Reddit app client secret (may be missing)
            user_agent: Descriptive User-Agent required by Reddit
            cache: Token cache; a fresh one is created when omitted
            token_url: OAuth2 token endpoint
            clock: Returns the current timezone-aware instant
        """
        self.http_client = http_client
        self.client_id = client_id
        self.client_secret = client_secret
        self.user_agent = user_agent
        self.cache = cache if cache is not None else TokenCache()
        self.token_url = token_url
        self.clock = clock
        self._lock = asyncio.Lock()

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def is_cached(self) -> bool:
        """Whether the next call would be served without a network round trip."""
        return self.cache.get(self.clock()) is not None

    async def get_access_token(self) -> str:
        """
        Return a valid access token, fetching a new one when needed.

        Returns:
            Bearer token value

        Raises:
            CredentialsMissingError: If client id or secret is not configured
            AuthenticationError: If Reddit rejects the credentials or returns
                a non-bearer token
            MalformedResponseError: If the token response has the wrong shape
            NetworkError: If the token endpoint cannot be reached
        """
        cached = self.cache.get(self.clock())
        if cached is not None:
            logger.debug("access_token_cache_hit")
            return cached

        async with self._lock:
            # Another caller may have refreshed while we waited
            cached = self.cache.get(self.clock())
            if cached is not None:
                return cached

            if not self.has_credentials:
                logger.error(
                    "reddit_credentials_missing",
                    client_id_set=bool(self.client_id),
                    client_secret_set=bool(self.client_secret),
                )
                raise CredentialsMissingError()

            try:
                token = await self._request_token()
            except Exception:
                self.cache.clear()
                raise

            self.cache.store(token)
            return token.value

    def invalidate(self, rejected: Optional[str] = None) -> None:
        """
        Drop the cached token so the next call re-authenticates.

        Args:
            rejected: Token value Reddit refused. When given, the cache is
                only cleared if it still holds that token, so a late 401
                cannot evict a newer token fetched in the meantime.
        """
        cached = self.cache.token
        if rejected is not None and (cached is None or cached.value != rejected):
            logger.debug("stale_token_rejection_ignored")
            return

        logger.info("access_token_invalidated")
        self.cache.clear()

    def _basic_auth_header(self) -> str:
        raw = f"{self.client_id}:{self.client_secret}".encode()
        return f"Basic {base64.b64encode(raw).decode('ascii')}"

    async def _request_token(self) -> AccessToken:
        logger.info("access_token_refresh_started", token_url=self.token_url)

        try:
            response = await self.http_client.post(
                self.token_url,
                headers={
                    "Authorization": self._basic_auth_header(),
                    "Content-Type": "application/x-www-form-urlencoded",
                    "User-Agent": self.user_agent,
                },
                content="grant_type=client_credentials",
            )
        except httpx.HTTPError as e:
            logger.error(
                "access_token_network_error",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise NetworkError(
                "Could not connect to Reddit API to get access token."
            ) from e

        if not response.is_success:
            logger.error(
                "access_token_request_failed",
                status_code=response.status_code,
                body=response.text,
            )
            if response.status_code == 401:
                raise AuthenticationError(
                    "Failed to authenticate with Reddit API. "
                    "Status: 401 (Unauthorized). Please verify your "
                    "REDDIT_CLIENT_ID and REDDIT_CLIENT_SECRET.",
                    status_code=401,
                )
            raise AuthenticationError(
                f"Failed to authenticate with Reddit API. Status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            token_data = TokenResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("access_token_response_invalid", error=str(e))
            raise MalformedResponseError(
                "Received invalid token response from Reddit API.",
                status_code=response.status_code,
            ) from e

        if token_data.token_type != "bearer":
            logger.error("unexpected_token_type", token_type=token_data.token_type)
            raise AuthenticationError("Failed to get a valid bearer token from Reddit.")

        expires_at = self.clock() + timedelta(
            seconds=token_data.expires_in - EXPIRY_BUFFER_SECONDS
        )

        logger.info(
            "access_token_refreshed",
            expires_in=token_data.expires_in,
            expires_at=expires_at.isoformat(),
            scope=token_data.scope,
        )

        return AccessToken(value=token_data.access_token, expires_at=expires_at)
