"""URL normalization utilities for scraped links and images."""

import re
from typing import Optional
from urllib.parse import urlsplit

# Any RFC 3986 scheme followed by a colon, e.g. "https:", "mailto:"
SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


def base_origin(url: str) -> str:
    """Reduce a URL to its ``scheme://host`` origin."""
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return url.rstrip("/")
    return f"{parts.scheme}://{parts.netloc}"


def absolute_url(link: str, base: str) -> str:
    """Resolve a scraped link against the base origin.
    
    Links that already carry a scheme are returned unchanged. Anything else is
    appended to the origin, with a separating slash only when the link does not
    already start with one.
    """
    link = link.strip()
    if SCHEME_PATTERN.match(link):
        return link
    origin = base_origin(base)
    if link.startswith("/"):
        return f"{origin}{link}"
    return f"{origin}/{link}"


def absolute_image_url(src: Optional[str], base: str) -> Optional[str]:
    """Resolve an image source, completing protocol-relative URLs with ``https:``."""
    if not src or not src.strip():
        return None
    src = src.strip()
    if src.startswith("//"):
        return f"https:{src}"
    return absolute_url(src, base)
