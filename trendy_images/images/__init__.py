"""Image post selection and URL allow-listing."""

from trendy_images.images.filters import filter_image_posts, is_image_post
from trendy_images.images.sanitizer import (
    DEFAULT_ALLOWED_HOSTNAMES,
    PLACEHOLDER_IMAGE_URL,
    get_allowed_hostnames,
    is_valid_image_url,
    replace_invalid_urls,
    sanitize_posts,
)

__all__ = [
    "filter_image_posts",
    "is_image_post",
    "DEFAULT_ALLOWED_HOSTNAMES",
    "PLACEHOLDER_IMAGE_URL",
    "get_allowed_hostnames",
    "is_valid_image_url",
    "replace_invalid_urls",
    "sanitize_posts",
]
