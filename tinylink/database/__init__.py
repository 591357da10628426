"""Storage layer for TinyLink."""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import LinkStoreBase
from .models import Link
from .sqlite import LinkStoreSQLite, sqlite_path_from_url
from .cache import RedisCache


def get_link_store(
    db_url: str,
    logger: Optional[logging.Logger] = None,
    pool_max_size: int = 10,
    connection_timeout_seconds: int = 30,
) -> LinkStoreBase:
    """Build the link store for a connection URL.

    ``sqlite:///path/to/file.db`` selects the embedded store;
    ``postgres://`` or ``postgresql://`` selects the PostgreSQL store.
    """
    scheme = urlparse(db_url).scheme.lower()
    if scheme == "sqlite":
        return LinkStoreSQLite(
            sqlite_path_from_url(db_url),
            busy_timeout_seconds=connection_timeout_seconds,
            logger=logger,
        )
    elif scheme in ("postgres", "postgresql"):
        from .postgres import LinkStorePostgres
        return LinkStorePostgres(
            db_url,
            pool_max_size=pool_max_size,
            connection_timeout_seconds=connection_timeout_seconds,
            logger=logger,
        )
    else:
        raise ValueError(f"Unsupported database URL scheme: {scheme!r}. Choose 'sqlite' or 'postgresql'.")


__all__ = [
    "LinkStoreBase",
    "LinkStoreSQLite",
    "Link",
    "RedisCache",
    "get_link_store",
    "sqlite_path_from_url",
]
