"""Abstract base class for TinyLink link stores."""

from abc import ABC, abstractmethod
from typing import Optional, List
from datetime import datetime

from .models import Link


class LinkStoreBase(ABC):
    """Storage contract for link records.

    Every backend must enforce short code uniqueness with a database
    constraint and apply click increments as one atomic UPDATE, so that
    callers need no in-process locking.
    """

    backend_name = "base"

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def initialize(self) -> None:
        """Create the ``links`` table if it does not exist."""
        pass

    @abstractmethod
    async def find_by_code(self, short_code: str) -> Optional[Link]:
        """Get the link for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(
        self,
        short_code: str,
        original_url: str,
        created_at: datetime,
    ) -> Link:
        """Insert a new link with zero clicks.

        Args:
            short_code: The short code to use
            original_url: The normalized destination URL
            created_at: Creation timestamp

        Returns:
            The stored link

        Raises:
            LinkConflictError: If the short code already exists
            StorageError: On any other backend failure
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Link]:
        """List all links, newest first."""
        pass

    @abstractmethod
    async def delete_by_code(self, short_code: str) -> bool:
        """Delete a link.

        Args:
            short_code: The short code to delete

        Returns:
            True if a record was removed, False if none existed
        """
        pass

    @abstractmethod
    async def increment_clicks(self, short_code: str, clicked_at: datetime) -> bool:
        """Atomically add one click and set ``last_clicked``.

        Args:
            short_code: The short code to update
            clicked_at: Resolution timestamp

        Returns:
            True if a record was updated, False if the code does not exist
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backend is reachable."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close database connections."""
        pass
