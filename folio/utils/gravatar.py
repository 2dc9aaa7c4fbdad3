"""Gravatar URL generation."""

import hashlib
from urllib.parse import urlencode

GRAVATAR_BASE_URL = "https://www.gravatar.com/avatar"


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """
    Build the gravatar URL for an email address.

    Args:
        email: Email address registered (or not) with gravatar
        size: Image size in pixels
        rating: Maximum content rating
        default: Fallback image when the address has no gravatar

    Returns:
        str: Avatar URL
    """
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": rating, "d": default})
    return f"{GRAVATAR_BASE_URL}/{digest}?{query}"
