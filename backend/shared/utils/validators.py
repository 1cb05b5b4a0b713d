"""
Shared validators for input sanitization.
"""

import ipaddress
import re
from typing import Optional
from urllib.parse import urlparse

from shared.config.constants import Limits

# Hostnames that must never appear in stored image URLs
BLOCKED_HOSTNAMES = {"localhost", "metadata.google.internal"}

ALLOWED_URL_SCHEMES = {"http", "https"}

_SLUG_INVALID_CHARS = re.compile(r"[^a-z0-9]+")
_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def _is_internal_host(host: str) -> bool:
    if host in BLOCKED_HOSTNAMES or host.endswith(".local"):
        return True
    try:
        address = ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return False
    return (
        address.is_private
        or address.is_loopback
        or address.is_link_local
        or address.is_reserved
        or address.is_unspecified
    )


def validate_image_url(url: Optional[str]) -> Optional[str]:
    """
    Validate an image or logo URL supplied by an admin.

    Empty values become None. Only http(s) URLs pointing at public hosts are
    accepted.

    Raises:
        ValueError: If the URL is malformed, too long or points at an
            internal address.
    """
    if url is None:
        return None
    url = url.strip()
    if not url:
        return None

    if len(url) > Limits.MAX_URL_LENGTH:
        raise ValueError(f"URL too long (max {Limits.MAX_URL_LENGTH} characters)")

    parsed = urlparse(url)
    if parsed.scheme.lower() not in ALLOWED_URL_SCHEMES:
        raise ValueError("Only HTTP/HTTPS URLs are allowed")

    host = (parsed.hostname or "").lower()
    if not host:
        raise ValueError("URL has no valid host")
    if _is_internal_host(host):
        raise ValueError("Internal URLs are not allowed")

    return url


def slugify(value: str) -> str:
    """Lower-case, hyphen-separated slug: "Table 4" -> "table-4"."""
    slug = _SLUG_INVALID_CHARS.sub("-", value.strip().lower()).strip("-")
    return slug[: Limits.MAX_SLUG_LENGTH]


def validate_slug(value: str) -> str:
    """
    Raises:
        ValueError: If value is not a lower-case hyphenated slug.
    """
    value = value.strip()
    if not value or len(value) > Limits.MAX_SLUG_LENGTH or not _SLUG_PATTERN.match(value):
        raise ValueError("Slug must contain only lower-case letters, digits and single hyphens")
    return value


def sanitize_text(value: Optional[str], max_length: int = Limits.MAX_NOTES_LENGTH) -> Optional[str]:
    """Strip control characters and surrounding whitespace; empty becomes None."""
    if value is None:
        return None
    value = re.sub(r"[\x00-\x08\x0b-\x1f\x7f]", "", value).strip()
    if not value:
        return None
    return value[:max_length]
