"""Redirect resolution with click accounting."""

import logging
from datetime import datetime, timezone
from typing import Optional

from .database.base import LinkStoreBase
from .database.cache import RedisCache
from .errors import LinkNotFoundError


class RedirectResolver:
    """Resolve short codes to destinations, counting every successful redirect."""

    def __init__(
        self,
        store: LinkStoreBase,
        cache: Optional[RedisCache] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)

    async def _lookup(self, short_code: str) -> Optional[str]:
        if self.cache:
            cached_url = await self.cache.get(self.cache.get_cache_key(short_code))
            if cached_url:
                self.logger.debug(f"Cache hit for {short_code}")
                return cached_url

        link = await self.store.find_by_code(short_code)
        if link is None:
            return None

        if self.cache:
            await self.cache.set(self.cache.get_cache_key(short_code), link.original_url)
        return link.original_url

    async def resolve(self, short_code: str) -> str:
        """Return the destination for ``short_code`` after recording the click.

        Raises:
            LinkNotFoundError: If no link exists (nothing is mutated)
            StorageError: If the click could not be recorded
        """
        original_url = await self._lookup(short_code)
        if original_url is None:
            self.logger.warning(f"Short code not found: {short_code}")
            raise LinkNotFoundError(short_code)

        # Awaited, so a redirect is never served with its click dropped
        counted = await self.store.increment_clicks(short_code, datetime.now(timezone.utc))
        if not counted:
            # Deleted between lookup and increment
            if self.cache:
                await self.cache.delete(self.cache.get_cache_key(short_code))
            raise LinkNotFoundError(short_code)

        self.logger.debug(f"Resolved {short_code} -> {original_url}")
        return original_url
