"""Validation utilities for TinyLink."""

import ipaddress
import re
from urllib.parse import urlparse
from typing import Tuple

from pydantic import HttpUrl, TypeAdapter, ValidationError

from ..shortcode import ShortCodeGenerator

MAX_URL_LENGTH = 2048

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
# Hosts arrive IDNA-encoded, so international TLDs show up as xn--...
_TLD_RE = re.compile(r"[a-z]{2,}|xn--[a-z0-9-]{2,}", re.IGNORECASE)

_http_url_adapter = TypeAdapter(HttpUrl)


def normalize_url(url: str) -> str:
    """Trim a destination URL and prefix ``https://`` when it has no http(s) scheme."""
    if not url or not isinstance(url, str):
        return ""

    url = url.strip()
    if url and not _SCHEME_RE.match(url):
        url = f"https://{url}"
    return url


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Args:
        url: The URL to validate (already normalized)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"

    if urlparse(url).scheme.lower() not in ("http", "https"):
        return False, "URL must use http or https protocol"

    try:
        parsed = _http_url_adapter.validate_python(url)
    except ValidationError as e:
        return False, f"Invalid URL format: {e.errors()[0]['msg']}"

    if not _is_public_host(parsed.host or ""):
        return False, "URL must have a valid domain"

    return True, ""


def _is_public_host(host: str) -> bool:
    if host == "localhost" or host.startswith("["):
        return True

    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass

    labels = host.rstrip(".").split(".")
    return len(labels) >= 2 and all(labels) and bool(_TLD_RE.fullmatch(labels[-1]))


def is_valid_short_code(short_code: str) -> Tuple[bool, str]:
    """Validate a custom short code.

    Args:
        short_code: The short code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if not ShortCodeGenerator.is_valid_format(short_code):
        return False, (
            f"Short code must be {ShortCodeGenerator.MIN_CUSTOM_LENGTH}-"
            f"{ShortCodeGenerator.MAX_CUSTOM_LENGTH} letters or digits"
        )

    return True, ""
