"""
Image URL allow-listing.

Only http(s) URLs whose hostname is in the allow-list may be rendered.
Posts with any other URL are removed from results.
"""

from typing import FrozenSet, Iterable, List, Optional
from urllib.parse import urlsplit

from trendy_images.models.posts import ImagePost
from trendy_images.utils.logger import get_logger

logger = get_logger(__name__)

# Reddit's own direct image hosts are always allowed
DEFAULT_ALLOWED_HOSTNAMES: FrozenSet[str] = frozenset({"i.redd.it", "preview.redd.it"})

PLACEHOLDER_IMAGE_URL = "https://picsum.photos/seed/placeholder/400/400"

ALLOWED_SCHEMES = ("http", "https")


def get_allowed_hostnames(extra: Optional[Iterable[str]] = None) -> FrozenSet[str]:
    """
    Combine the built-in Reddit hosts with configured hostnames.

    Args:
        extra: Additional hostnames, typically from ALLOWED_IMAGE_HOSTNAMES

    Returns:
        Lower-cased set of allowed hostnames
    """
    hosts = set(DEFAULT_ALLOWED_HOSTNAMES)
    if extra:
        hosts.update(host.lower() for host in extra)
    return frozenset(hosts)


def is_valid_image_url(image_url: Optional[str], allowed_hostnames: FrozenSet[str]) -> bool:
    if not image_url:
        return False
    try:
        parsed = urlsplit(image_url)
        hostname = parsed.hostname
    except ValueError:
        return False
    return parsed.scheme in ALLOWED_SCHEMES and hostname in allowed_hostnames


def replace_invalid_urls(
    posts: Iterable[ImagePost], allowed_hostnames: FrozenSet[str]
) -> List[ImagePost]:
    """Swap every disallowed image URL for the placeholder image."""
    return [
        post
        if is_valid_image_url(post.image_url, allowed_hostnames)
        else post.model_copy(update={"image_url": PLACEHOLDER_IMAGE_URL})
        for post in posts
    ]


def sanitize_posts(
    posts: Iterable[ImagePost], allowed_hostnames: FrozenSet[str]
) -> List[ImagePost]:
    """
    Drop posts whose image URL is not allowed.

    Disallowed posts are never surfaced as placeholders. Order of the
    remaining posts is preserved.

    Args:
        posts: Candidate image posts
        allowed_hostnames: Hostnames permitted for rendering

    Returns:
        Posts with http(s) URLs on allowed hosts only
    """
    posts = list(posts)
    sanitized = [
        post
        for post in replace_invalid_urls(posts, allowed_hostnames)
        if post.image_url != PLACEHOLDER_IMAGE_URL
    ]

    dropped = len(posts) - len(sanitized)
    if dropped:
        logger.info("image_urls_rejected", dropped=dropped, kept=len(sanitized))

    return sanitized
