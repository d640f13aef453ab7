"""
Shared fixtures for the test suite.

Reddit is replaced by an httpx.MockTransport that serves the token
endpoint and the hot listing endpoint from a configurable stub.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio

from trendy_images.reddit.auth import TokenProvider
from trendy_images.reddit.client import RedditClient
from trendy_images.reddit.scraper import TrendyImageScraper

TOKEN_PATH = "/api/v1/access_token"


def build_post(
    url: Optional[str],
    title: Optional[str] = "A post",
    name: str = "t3_abc123",
    is_video: bool = False,
    is_gallery: Optional[bool] = None,
    kind: str = "t3",
) -> Dict[str, Any]:
    """Build one listing child the way Reddit serializes it."""
    data: Dict[str, Any] = {
        "title": title,
        "name": name,
        "url": url,
        "thumbnail": "default",
        "is_video": is_video,
    }
    if is_gallery is not None:
        data["is_gallery"] = is_gallery
    return {"kind": kind, "data": data}


def build_listing(children: List[Dict[str, Any]], after: Optional[str] = None) -> Dict[str, Any]:
    return {
        "kind": "Listing",
        "data": {
            "after": after,
            "before": None,
            "dist": len(children),
            "modhash": "",
            "geo_filter": None,
            "children": children,
        },
    }


class FakeClock:
    """Deterministic clock for token expiry tests."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RedditStub:
    """Serves canned token and listing responses and records requests."""

    def __init__(self) -> None:
        self.token_status = 200
        self.token_body: Any = {
            "access_token": "token-1",
            "token_type": "bearer",
            "expires_in": 3600,
            "scope": "*",
        }
        self.token_error: Optional[type] = None
        self.listing_status = 200
        self.listing_body: Any = build_listing([])
        self.listing_headers: Dict[str, str] = {}
        self.listing_error: Optional[type] = None
        self.requests: List[httpx.Request] = []

    @property
    def token_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == TOKEN_PATH]

    @property
    def listing_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path != TOKEN_PATH]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == TOKEN_PATH:
            if self.token_error is not None:
                raise self.token_error("connection refused", request=request)
            return self._respond(self.token_status, self.token_body)

        if self.listing_error is not None:
            raise self.listing_error("connection reset", request=request)
        return self._respond(self.listing_status, self.listing_body, self.listing_headers)

    @staticmethod
    def _respond(status: int, body: Any, headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        if isinstance(body, str):
            return httpx.Response(status, text=body, headers=headers)
        return httpx.Response(status, json=body, headers=headers)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def reddit_stub() -> RedditStub:
    return RedditStub()


@pytest_asyncio.fixture
async def http_client(reddit_stub: RedditStub):
    async with httpx.AsyncClient(transport=httpx.MockTransport(reddit_stub.handler)) as client:
        yield client


@pytest.fixture
def token_provider(http_client: httpx.AsyncClient, clock: FakeClock) -> TokenProvider:
    return TokenProvider(
        http_client=http_client,
        client_id="test-client-id",
        client_secret="test-client-secret",
        user_agent="web:test-client-id:1.0.0 (tests)",
        clock=clock,
    )


@pytest.fixture
def reddit_client(http_client: httpx.AsyncClient) -> RedditClient:
    return RedditClient(http_client, user_agent="web:test-client-id:1.0.0 (tests)")


@pytest.fixture
def scraper(token_provider: TokenProvider, reddit_client: RedditClient) -> TrendyImageScraper:
    return TrendyImageScraper(
        token_provider=token_provider,
        client=reddit_client,
        allowed_hostnames={"picsum.photos"},
    )


@pytest.fixture
def make_post():
    return build_post


@pytest.fixture
def make_listing():
    return build_listing
