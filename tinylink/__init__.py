"""Core business logic for TinyLink."""

from .shortcode import ShortCodeGenerator
from .allocator import LinkAllocator
from .resolver import RedirectResolver
from .service import TinyLinkService

__all__ = ["ShortCodeGenerator", "LinkAllocator", "RedirectResolver", "TinyLinkService"]
