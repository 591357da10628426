"""Business logic service for TinyLink."""

import logging
from typing import Optional, Dict, List

from .shortcode import ShortCodeGenerator
from .allocator import LinkAllocator
from .resolver import RedirectResolver
from .database.base import LinkStoreBase
from .database.cache import RedisCache
from .database.models import Link
from .errors import LinkNotFoundError


class TinyLinkService:
    """Service layer used by the HTTP app and the CLI."""

    def __init__(
        self,
        db: LinkStoreBase,
        cache: Optional[RedisCache] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        short_code_length: int = 6,
        escalate_after: int = 10,
        max_generation_attempts: int = 100,
    ):
        """Initialize TinyLink service.

        Args:
            db: Link store instance
            cache: Optional cache instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            short_code_length: Length of generated codes
            escalate_after: Failed generation attempts before codes grow by one character
            max_generation_attempts: Generation attempts before giving up
        """
        self.db = db
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)
        self.allocator = LinkAllocator(
            store=db,
            generator=short_code_generator,
            logger=self.logger,
            code_length=short_code_length,
            escalate_after=escalate_after,
            max_attempts=max_generation_attempts,
        )
        self.resolver = RedirectResolver(store=db, cache=cache, logger=self.logger)

    async def create_link(
        self,
        original_url: str,
        custom_code: Optional[str] = None,
    ) -> Link:
        """Create a new short link.

        Args:
            original_url: The destination URL (scheme optional)
            custom_code: Optional custom short code

        Returns:
            The stored link

        Raises:
            InvalidURLError, InvalidFormatError, LinkConflictError, StorageError
        """
        link = await self.allocator.allocate(original_url, custom_code)

        if self.cache:
            await self.cache.set(self.cache.get_cache_key(link.short_code), link.original_url)

        return link

    async def resolve(self, short_code: str) -> str:
        """Resolve a short code for a redirect, counting the click."""
        return await self.resolver.resolve(short_code)

    async def get_link(self, short_code: str) -> Link:
        """Get a link with its click statistics without counting a click.

        Raises:
            LinkNotFoundError: If the code does not exist
        """
        link = await self.db.find_by_code(short_code)
        if link is None:
            raise LinkNotFoundError(short_code)
        return link

    async def list_links(self) -> List[Link]:
        """List all links, newest first."""
        return await self.db.list_all()

    async def delete_link(self, short_code: str) -> bool:
        """Delete a link.

        Returns:
            True if a record was removed
        """
        if self.cache:
            await self.cache.delete(self.cache.get_cache_key(short_code))

        deleted = await self.db.delete_by_code(short_code)
        if deleted:
            self.logger.info(f"Deleted short URL: {short_code}")
        return deleted

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.db.health_check()

        cache_healthy = True
        if self.cache and self.cache.enabled:
            cache_healthy = await self.cache.ping()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy and cache_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.db.close()
        if self.cache:
            await self.cache.close()
