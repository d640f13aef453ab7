"""Subreddit name extraction from user-supplied URLs."""

import re
from typing import Optional
from urllib.parse import urlsplit

from trendy_images.reddit.exceptions import InvalidSubredditUrlError

SUBREDDIT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")


def extract_subreddit_name(url: str) -> Optional[str]:
    """
    Extract the subreddit name from a full subreddit URL.

    Never raises: anything that is not an absolute URL with an
    ``/r/<name>`` path prefix yields None.

    Args:
        url: Full subreddit URL, e.g. ``https://www.reddit.com/r/pics/``

    Returns:
        The second path segment (``pics``), or None

    Example:
        >>> extract_subreddit_name("https://www.reddit.com/r/pics/top/")
        'pics'
        >>> extract_subreddit_name("https://www.reddit.com/user/spez") is None
        True
    """
    try:
        parsed = urlsplit(url)
    except (TypeError, ValueError, AttributeError):
        return None

    if not parsed.scheme or not parsed.netloc:
        return None

    parts = [part for part in parsed.path.split("/") if part]
    if len(parts) >= 2 and parts[0].lower() == "r":
        return parts[1]
    return None


def resolve_subreddit_name(url: str) -> str:
    """
    Extract and validate a subreddit name.

    Args:
        url: Full subreddit URL

    Returns:
        Subreddit name matching ``[A-Za-z0-9_]+``

    Raises:
        InvalidSubredditUrlError: If no valid name can be extracted
    """
    name = extract_subreddit_name(url)
    if name is None or not SUBREDDIT_NAME_PATTERN.match(name):
        raise InvalidSubredditUrlError(url)
    return name
