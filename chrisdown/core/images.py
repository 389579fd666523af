"""Relative image path rewriting."""

import re
from typing import Optional

IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")

# paths starting with any of these are left alone
ABSOLUTE_PREFIXES = ("http", "data:")


def is_absolute(path: str) -> bool:
    """returns True if the image path already points somewhere absolute."""
    return path.startswith(ABSOLUTE_PREFIXES)


def rewrite_image_urls(text: str, base_url: Optional[str]) -> str:
    """
    prepends base_url to every relative image path in markdown text.

    Args:
        text: raw markdown text
        base_url: URL prefix for relative paths; empty or None disables rewriting

    Returns:
        markdown text with relative image paths made absolute
    """
    if not base_url:
        return text

    # a bare "/" base leaves root-relative paths
    prefix = base_url.rstrip("/")

    def replacer(match: re.Match[str]) -> str:
        alt, path = match.group(1), match.group(2)
        if is_absolute(path):
            return match.group(0)
        return f"![{alt}]({prefix}/{path.lstrip('/')})"

    return IMAGE_PATTERN.sub(replacer, text)
