"""Selection of direct-image posts from a listing page."""

from typing import List, Set

from trendy_images.models.posts import ImagePost, ListingPage, RawPost
from trendy_images.utils.logger import get_logger

logger = get_logger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")

UNTITLED_POST = "Untitled Post"


def is_direct_image_url(url: str) -> bool:
    return url.lower().endswith(IMAGE_EXTENSIONS)


def is_image_post(post: RawPost) -> bool:
    """
    Check whether a post links straight to an image.

    Videos and galleries are excluded even when their URL looks like an
    image.
    """
    if post.is_video or post.is_gallery or not post.url:
        return False
    return is_direct_image_url(post.url)


def filter_image_posts(page: ListingPage) -> List[ImagePost]:
    """
    Keep direct-image posts, dropping repeated URLs.

    Listing order is preserved and the first post with a given URL wins.
    Pure function of the page: the same page always yields the same list.

    Args:
        page: Decoded listing page

    Returns:
        ImagePost records, possibly empty

    Example:
        >>> [p.image_url for p in filter_image_posts(page)]
        ['https://i.redd.it/abc.png']
    """
    images: List[ImagePost] = []
    seen: Set[str] = set()

    for post in page.posts:
        if not is_image_post(post) or post.url in seen:
            continue
        seen.add(post.url)
        images.append(ImagePost(image_url=post.url, title=post.title or UNTITLED_POST))

    if not images and page.posts:
        logger.warning(
            "no_image_posts_matched",
            posts_count=len(page.posts),
            criteria="not video, not gallery, direct image URL",
        )

    return images
