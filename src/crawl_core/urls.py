from __future__ import annotations

from urllib.parse import urlsplit


def is_absolute_url(value: str) -> bool:
    try:
        return bool(urlsplit(value).scheme)
    except ValueError:
        return False


def authority_url(url: str) -> str:
    """Return scheme and host of an absolute URL, with a trailing slash."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}/"


def create_absolute_url(base_url: str, suffix: str) -> str:
    if is_absolute_url(suffix):
        return suffix
    # base_url ends with a slash, so only one leading slash of the suffix is dropped
    if suffix.startswith("/"):
        suffix = suffix[1:]
    return f"{base_url}{suffix}"
