"""Common utilities for TinyLink."""

from .validators import normalize_url, is_valid_url, is_valid_short_code
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "normalize_url",
    "is_valid_url",
    "is_valid_short_code",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
