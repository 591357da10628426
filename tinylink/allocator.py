"""Short code allocation.

Uniqueness is decided by the store's UNIQUE constraint. The existence check
done before each insert only skips obviously taken codes; a concurrent insert
of the same code still surfaces as :class:`LinkConflictError` from ``create``.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from .shortcode import ShortCodeGenerator
from .database.base import LinkStoreBase
from .database.models import Link
from .common.validators import normalize_url, is_valid_url, is_valid_short_code
from .errors import (
    CodeSpaceExhaustedError,
    InvalidFormatError,
    InvalidURLError,
    LinkConflictError,
)


class LinkAllocator:
    """Persist new links under unique short codes."""

    def __init__(
        self,
        store: LinkStoreBase,
        generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        code_length: int = 6,
        escalate_after: int = 10,
        max_attempts: int = 100,
    ):
        """Initialize allocator.

        Args:
            store: Link store
            generator: Optional short code generator
            logger: Optional logger
            code_length: Length of generated codes before escalation
            escalate_after: Failed attempts after which codes get one character longer
            max_attempts: Total attempts before giving up
        """
        self.store = store
        self.generator = generator or ShortCodeGenerator(default_length=code_length)
        self.logger = logger or logging.getLogger(__name__)
        self.code_length = code_length
        self.escalate_after = escalate_after
        self.max_attempts = max_attempts

    async def allocate(self, original_url: str, custom_code: Optional[str] = None) -> Link:
        """Create a link for ``original_url``.

        Args:
            original_url: Destination; ``https://`` is prepended when no scheme is given
            custom_code: Optional caller-chosen short code

        Returns:
            The persisted link

        Raises:
            InvalidURLError: If the destination is not a valid http(s) URL
            InvalidFormatError: If the custom code is not 6-8 alphanumerics
            LinkConflictError: If the custom code is taken
            CodeSpaceExhaustedError: If no free code was found in ``max_attempts``
        """
        url = normalize_url(original_url)
        is_valid, error = is_valid_url(url)
        if not is_valid:
            raise InvalidURLError(f"Invalid URL: {error}")

        if custom_code:
            link = await self._allocate_custom(url, custom_code)
        else:
            link = await self._allocate_generated(url)

        self.logger.info(f"Created short URL: {link.short_code} -> {link.original_url}")
        return link

    async def _allocate_custom(self, url: str, custom_code: str) -> Link:
        is_valid, error = is_valid_short_code(custom_code)
        if not is_valid:
            raise InvalidFormatError(f"Invalid short code: {error}")

        if await self.store.find_by_code(custom_code):
            raise LinkConflictError(custom_code)

        # Conflicts from a concurrent insert propagate unchanged
        return await self.store.create(custom_code, url, datetime.now(timezone.utc))

    def _candidate_length(self, attempt: int) -> int:
        if attempt > self.escalate_after:
            return self.code_length + 1
        return self.code_length

    async def _allocate_generated(self, url: str) -> Link:
        for attempt in range(1, self.max_attempts + 1):
            code = self.generator.generate(self._candidate_length(attempt))

            if await self.store.find_by_code(code):
                self.logger.debug(f"Candidate {code} taken (attempt {attempt})")
                continue

            try:
                link = await self.store.create(code, url, datetime.now(timezone.utc))
            except LinkConflictError:
                self.logger.debug(f"Candidate {code} lost an insert race (attempt {attempt})")
                continue

            if attempt > 1:
                self.logger.debug(f"Generated code after {attempt} attempts: {code}")
            return link

        self.logger.error(f"Gave up generating a short code after {self.max_attempts} attempts")
        raise CodeSpaceExhaustedError(self.max_attempts)
