"""
Decoding of Reddit listing payloads.

Validates the raw JSON of a listing response and turns its ``t3`` children
into RawPost records. Anything that does not look like a listing fails
closed with MalformedResponseError.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from trendy_images.models.posts import ListingPage, RawPost
from trendy_images.reddit.exceptions import MalformedResponseError
from trendy_images.utils.logger import get_logger

logger = get_logger(__name__)

LISTING_KIND = "Listing"
POST_KIND = "t3"


class ListingChild(BaseModel):
    kind: str
    data: Optional[Dict[str, Any]] = None


class ListingData(BaseModel):
    children: List[ListingChild]
    after: Optional[str] = None
    before: Optional[str] = None
    dist: Optional[int] = None


class ListingResponse(BaseModel):
    kind: str
    data: ListingData = Field(..., description="Listing body with children")


def parse_listing(payload: Any) -> ListingPage:
    """
    Decode a listing response body into a ListingPage.

    Children whose kind is not ``t3`` (or that carry no data) are skipped.

    Args:
        payload: Decoded JSON body of a listing response

    Returns:
        ListingPage with posts in listing order

    Raises:
        MalformedResponseError: If the body is not a listing, lacks
            ``data.children``, or a post child has invalid fields

    Example:
        >>> page = parse_listing({"kind": "Listing", "data": {"children": []}})
        >>> page.posts
        []
    """
    try:
        listing = ListingResponse.model_validate(payload)
    except ValidationError as e:
        logger.error("listing_structure_invalid", error=str(e))
        raise MalformedResponseError() from e

    if listing.kind != LISTING_KIND:
        logger.error("listing_kind_unexpected", kind=listing.kind)
        raise MalformedResponseError()

    posts: List[RawPost] = []
    skipped = 0
    for child in listing.data.children:
        if child.kind != POST_KIND or child.data is None:
            skipped += 1
            continue
        try:
            posts.append(RawPost.model_validate(child.data))
        except ValidationError as e:
            logger.error(
                "listing_post_invalid",
                fullname=child.data.get("name"),
                error=str(e),
            )
            raise MalformedResponseError() from e

    logger.debug(
        "listing_parsed",
        posts=len(posts),
        skipped_children=skipped,
        after=listing.data.after,
    )

    return ListingPage(after=listing.data.after, posts=posts)
