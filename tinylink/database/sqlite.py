"""SQLite implementation of the link store.

Each operation opens its own connection and runs in a worker thread, so the
event loop never blocks on file I/O and concurrent writers are serialized by
SQLite's own locking.
"""

import os
import sqlite3
import asyncio
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional, List
from urllib.parse import urlparse

from . import sql
from .base import LinkStoreBase
from .models import Link
from ..errors import LinkConflictError, StorageError


def _timestamp(value: datetime) -> str:
    """Fixed-width ISO text so ORDER BY created_at sorts chronologically."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def sqlite_path_from_url(db_url: str) -> str:
    """Extract the file path from ``sqlite:///relative.db`` or ``sqlite:////abs/path.db``."""
    parsed = urlparse(db_url)
    path = parsed.path
    if path.startswith("/"):
        path = path[1:]
    return path or "tinylink.db"


class LinkStoreSQLite(LinkStoreBase):
    """Embedded single-file link store."""

    backend_name = "sqlite"

    CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS links (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        short_code TEXT NOT NULL UNIQUE,
        original_url TEXT NOT NULL,
        total_clicks INTEGER NOT NULL DEFAULT 0,
        last_clicked TEXT,
        created_at TEXT NOT NULL
    )
    """

    def __init__(
        self,
        db_path: str,
        busy_timeout_seconds: float = 30.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize SQLite store.

        Args:
            db_path: Path of the database file
            busy_timeout_seconds: How long a writer waits for the file lock
            logger: Optional logger instance
        """
        super().__init__(db_path)
        self.db_path = db_path
        self.busy_timeout_seconds = busy_timeout_seconds
        self.logger = logger or logging.getLogger(__name__)

    @contextmanager
    def _get_conn(self):
        try:
            conn = sqlite3.connect(self.db_path, timeout=self.busy_timeout_seconds)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open SQLite database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _initialize_sync(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.db_path))
        os.makedirs(directory, exist_ok=True)
        with self._get_conn() as conn:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(self.CREATE_TABLE_SQL)
            conn.commit()

    async def initialize(self) -> None:
        """Create the links table if it doesn't exist."""
        self.logger.info(f"Ensuring links table in {self.db_path}")
        try:
            await asyncio.to_thread(self._initialize_sync)
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Error creating links table: {e}") from e

    def _create_sync(self, short_code: str, original_url: str, created_at: str) -> Link:
        with self._get_conn() as conn:
            try:
                row = conn.execute(sql.INSERT_LINK, (short_code, original_url, created_at)).fetchall()[0]
                conn.commit()
            except sqlite3.IntegrityError as e:
                conn.rollback()
                if "UNIQUE" in str(e).upper():
                    raise LinkConflictError(short_code) from e
                raise
        return Link.from_row(row)

    async def create(
        self,
        short_code: str,
        original_url: str,
        created_at: datetime,
    ) -> Link:
        """Insert a new link; the UNIQUE constraint decides conflicts."""
        try:
            link = await asyncio.to_thread(
                self._create_sync, short_code, original_url, _timestamp(created_at)
            )
        except sqlite3.Error as e:
            self.logger.error(f"Error creating link {short_code}: {e}")
            raise StorageError(f"Error creating link: {e}") from e

        self.logger.debug(f"Inserted link {short_code} (id={link.id})")
        return link

    def _find_sync(self, short_code: str) -> Optional[Link]:
        with self._get_conn() as conn:
            row = conn.execute(sql.FIND_BY_CODE, (short_code,)).fetchone()
        return Link.from_row(row) if row else None

    async def find_by_code(self, short_code: str) -> Optional[Link]:
        """Point lookup by short code."""
        try:
            return await asyncio.to_thread(self._find_sync, short_code)
        except sqlite3.Error as e:
            self.logger.error(f"Error looking up {short_code}: {e}")
            raise StorageError(f"Error looking up link: {e}") from e

    def _list_sync(self) -> List[Link]:
        with self._get_conn() as conn:
            rows = conn.execute(sql.LIST_ALL).fetchall()
        return [Link.from_row(row) for row in rows]

    async def list_all(self) -> List[Link]:
        """List every link, newest first."""
        try:
            return await asyncio.to_thread(self._list_sync)
        except sqlite3.Error as e:
            self.logger.error(f"Error listing links: {e}")
            raise StorageError(f"Error listing links: {e}") from e

    def _delete_sync(self, short_code: str) -> bool:
        with self._get_conn() as conn:
            cur = conn.execute(sql.DELETE_BY_CODE, (short_code,))
            conn.commit()
            return cur.rowcount > 0

    async def delete_by_code(self, short_code: str) -> bool:
        """Delete a link; False when nothing matched."""
        try:
            return await asyncio.to_thread(self._delete_sync, short_code)
        except sqlite3.Error as e:
            self.logger.error(f"Error deleting {short_code}: {e}")
            raise StorageError(f"Error deleting link: {e}") from e

    def _increment_sync(self, short_code: str, clicked_at: str) -> bool:
        with self._get_conn() as conn:
            cur = conn.execute(sql.INCREMENT_CLICKS, (clicked_at, short_code))
            conn.commit()
            return cur.rowcount > 0

    async def increment_clicks(self, short_code: str, clicked_at: datetime) -> bool:
        """Add one click in a single UPDATE statement."""
        try:
            return await asyncio.to_thread(self._increment_sync, short_code, _timestamp(clicked_at))
        except sqlite3.Error as e:
            self.logger.error(f"Error incrementing clicks for {short_code}: {e}")
            raise StorageError(f"Error recording click: {e}") from e

    def _health_sync(self) -> None:
        with self._get_conn() as conn:
            conn.execute(sql.HEALTH_CHECK).fetchone()

    async def health_check(self) -> bool:
        """Check the database file can be opened and queried."""
        try:
            await asyncio.to_thread(self._health_sync)
            return True
        except (sqlite3.Error, StorageError) as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        """Nothing to release; connections are per operation."""
        self.logger.debug(f"Closed SQLite store {self.db_path}")
