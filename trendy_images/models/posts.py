"""
Post records flowing through the scraping pipeline.

RawPost and ListingPage mirror what the hot listing endpoint hands back;
ImagePost is the display-ready record returned to callers.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawPost(BaseModel):
    """
    A single ``t3`` child of a Reddit listing.

    Only the fields the image filter looks at are kept. Validated from the
    child's ``data`` object, so ``fullname`` is read from Reddit's ``name``.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    fullname: Optional[str] = Field(None, alias="name")
    url: Optional[str] = None
    is_video: bool = False
    is_gallery: bool = False

    @field_validator("is_video", "is_gallery", mode="before")
    @classmethod
    def null_flag_is_false(cls, v: Optional[bool]) -> bool:
        """Reddit omits or nulls these flags on ordinary link posts."""
        return False if v is None else v


class ListingPage(BaseModel):
    """One page of a subreddit listing."""

    after: Optional[str] = Field(
        None,
        description="Pagination cursor (kept, never followed)",
    )
    posts: List[RawPost] = Field(default_factory=list)


class ImagePost(BaseModel):
    """Direct-image post ready for display."""

    model_config = ConfigDict(frozen=True)

    image_url: str = Field(..., description="Direct URL of the image")
    title: str = Field(..., description="Title of the Reddit post")
