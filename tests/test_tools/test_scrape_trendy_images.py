"""
Tests for the scrape_trendy_images tool.

Tests cover:
- Input validation (URL shape, limit bounds)
- Credential pre-check before any network call
- Success, empty and all-filtered outcomes and their messages
- Error responses for Reddit failures
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from trendy_images.server import (
    AUTHENTICATION_FAILED,
    CREDENTIALS_MISSING,
    INTERNAL_ERROR,
    INVALID_PARAMS,
    RATE_LIMITED,
    REDDIT_API_ERROR,
    UNAUTHORIZED_MESSAGE,
)
from trendy_images.tools.scrape_trendy_images import (
    ScrapeTrendyImagesInput,
    scrape_trendy_images,
)

CREDENTIALS = {
    "REDDIT_CLIENT_ID": "test_id",
    "REDDIT_CLIENT_SECRET": "test_secret",
}

PICS_URL = "https://www.reddit.com/r/pics/"


class TestScrapeTrendyImagesInput:
    """Test suite for ScrapeTrendyImagesInput validation."""

    def test_valid_input_minimal(self):
        """Test valid input with defaults."""
        params = ScrapeTrendyImagesInput(subreddit_url=PICS_URL)

        assert params.subreddit_url == PICS_URL
        assert params.limit == 25

    def test_valid_limit_bounds(self):
        """Test limit accepts 1 and 100."""
        assert ScrapeTrendyImagesInput(subreddit_url=PICS_URL, limit=1).limit == 1
        assert ScrapeTrendyImagesInput(subreddit_url=PICS_URL, limit=100).limit == 100

    @pytest.mark.parametrize("limit", [0, -1, 101])
    def test_limit_out_of_range(self, limit):
        """Test validation fails outside 1..100."""
        with pytest.raises(ValidationError) as exc_info:
            ScrapeTrendyImagesInput(subreddit_url=PICS_URL, limit=limit)

        errors = exc_info.value.errors()
        assert any("limit" in str(error["loc"]) for error in errors)

    @pytest.mark.parametrize("url", ["not a url", "www.reddit.com/r/pics", "ftp://reddit.com/r/pics"])
    def test_malformed_url(self, url):
        """Test non-URLs are rejected with the generic URL message."""
        with pytest.raises(ValidationError) as exc_info:
            ScrapeTrendyImagesInput(subreddit_url=url)

        assert "Please enter a valid URL." in str(exc_info.value)

    @pytest.mark.parametrize(
        "url", ["https://www.example.com/r/pics/", "https://www.reddit.com/user/spez"]
    )
    def test_not_a_subreddit_url(self, url):
        """Test URLs outside reddit.com/r/ are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            ScrapeTrendyImagesInput(subreddit_url=url)

        assert "valid Reddit subreddit URL" in str(exc_info.value)

    def test_subreddit_url_required(self):
        """Test validation fails when subreddit_url is missing."""
        with pytest.raises(ValidationError):
            ScrapeTrendyImagesInput()


@pytest.mark.asyncio
class TestScrapeTrendyImagesTool:
    """Test the tool end to end against a stubbed Reddit."""

    @pytest.fixture(autouse=True)
    def use_scraper(self, scraper):
        with patch(
            "trendy_images.tools.scrape_trendy_images.get_scraper", return_value=scraper
        ):
            yield

    @patch.dict(os.environ, {}, clear=True)
    async def test_missing_credentials(self, reddit_stub):
        """Test missing credentials short-circuit before any request."""
        result = await scrape_trendy_images(ScrapeTrendyImagesInput(subreddit_url=PICS_URL))

        assert result["code"] == CREDENTIALS_MISSING
        assert "REDDIT_CLIENT_ID" in result["message"]
        assert reddit_stub.requests == []

    @patch.dict(os.environ, CREDENTIALS)
    async def test_success(self, reddit_stub, make_post, make_listing):
        """Test the r/pics scenario returns one image with metadata."""
        reddit_stub.listing_body = make_listing(
            [
                make_post("https://v.redd.it/vid", title="Video", is_video=True),
                make_post("https://i.redd.it/cat.png", title="My cat"),
                make_post("https://i.redd.it/cat.png", title="Duplicate"),
            ]
        )

        result = await scrape_trendy_images(
            ScrapeTrendyImagesInput(subreddit_url=PICS_URL, limit=25)
        )

        assert result["data"]["subreddit"] == "pics"
        assert result["data"]["images"] == [
            {"image_url": "https://i.redd.it/cat.png", "title": "My cat"}
        ]
        assert result["data"]["total_returned"] == 1
        assert result["data"]["message"] == "Successfully fetched 1 images."
        assert result["metadata"]["token_cached"] is False
        assert result["metadata"]["reddit_api_calls"] == 2
        assert result["metadata"]["execution_time_ms"] >= 0

    @patch.dict(os.environ, CREDENTIALS)
    async def test_second_call_reports_cached_token(self, reddit_stub):
        """Test metadata reflects token reuse."""
        params = ScrapeTrendyImagesInput(subreddit_url=PICS_URL)

        await scrape_trendy_images(params)
        result = await scrape_trendy_images(params)

        assert result["metadata"]["token_cached"] is True
        assert result["metadata"]["reddit_api_calls"] == 1
        assert len(reddit_stub.token_requests) == 1

    @patch.dict(os.environ, CREDENTIALS)
    async def test_no_image_posts(self, reddit_stub, make_post, make_listing):
        """Test an empty result explains that nothing matched."""
        reddit_stub.listing_body = make_listing([make_post("https://example.com/article")])

        result = await scrape_trendy_images(ScrapeTrendyImagesInput(subreddit_url=PICS_URL))

        assert result["data"]["images"] == []
        assert result["data"]["message"] == (
            "Found 0 suitable image posts in r/pics with the current filters."
        )

    @patch.dict(os.environ, CREDENTIALS)
    async def test_all_images_disallowed(self, reddit_stub, make_post, make_listing):
        """Test posts on disallowed hosts are dropped and explained."""
        reddit_stub.listing_body = make_listing(
            [
                make_post("https://i.imgur.com/a.png", name="t3_a"),
                make_post("https://i.imgur.com/b.png", name="t3_b"),
            ]
        )

        result = await scrape_trendy_images(ScrapeTrendyImagesInput(subreddit_url=PICS_URL))

        assert result["data"]["images"] == []
        assert result["data"]["message"].startswith("Found 2 posts via API")

    @patch.dict(os.environ, CREDENTIALS)
    async def test_not_found(self, reddit_stub):
        """Test a 404 becomes a Reddit API error response."""
        reddit_stub.listing_status = 404

        result = await scrape_trendy_images(
            ScrapeTrendyImagesInput(subreddit_url="https://www.reddit.com/r/nope/")
        )

        assert result["code"] == REDDIT_API_ERROR
        assert result["message"] == "Subreddit 'r/nope' not found or is private (404)."
        assert result["data"]["kind"] == "not_found"

    @patch.dict(os.environ, CREDENTIALS)
    async def test_rate_limited(self, reddit_stub):
        """Test a 429 becomes a rate limit error response."""
        reddit_stub.listing_status = 429
        reddit_stub.listing_headers = {"Retry-After": "60"}

        result = await scrape_trendy_images(ScrapeTrendyImagesInput(subreddit_url=PICS_URL))

        assert result["code"] == RATE_LIMITED
        assert result["data"]["retry_after_seconds"] == 60

    @patch.dict(os.environ, CREDENTIALS)
    async def test_token_401(self, reddit_stub):
        """Test rejected credentials get the dedicated 401 message."""
        reddit_stub.token_status = 401

        result = await scrape_trendy_images(ScrapeTrendyImagesInput(subreddit_url=PICS_URL))

        assert result["code"] == AUTHENTICATION_FAILED
        assert result["message"] == UNAUTHORIZED_MESSAGE

    @patch.dict(os.environ, CREDENTIALS)
    async def test_invalid_subreddit_name(self, reddit_stub):
        """Test a reddit URL with an unusable name fails before any request."""
        result = await scrape_trendy_images(
            ScrapeTrendyImagesInput(subreddit_url="https://www.reddit.com/r/not-valid/")
        )

        assert result["code"] == INVALID_PARAMS
        assert reddit_stub.requests == []

    @patch.dict(os.environ, CREDENTIALS)
    async def test_unexpected_error(self, scraper):
        """Test a non-Reddit failure becomes an internal error response."""
        with patch.object(scraper, "fetch_image_posts", side_effect=KeyError("boom")):
            result = await scrape_trendy_images(ScrapeTrendyImagesInput(subreddit_url=PICS_URL))

        assert result["code"] == INTERNAL_ERROR
        assert result["data"] == {"error_type": "KeyError"}
