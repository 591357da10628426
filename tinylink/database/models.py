"""Data models for TinyLink."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional


def _to_datetime(value: Any) -> Optional[datetime]:
    """Coerce a stored timestamp (ISO text or datetime) to an aware UTC datetime."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(str(value))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class Link:
    """Represents a row of the ``links`` table."""
    
    id: int
    short_code: str
    original_url: str
    created_at: datetime
    total_clicks: int = 0
    last_clicked: Optional[datetime] = None
    
    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "short_code": self.short_code,
            "original_url": self.original_url,
            "total_clicks": self.total_clicks,
            "last_clicked": self.last_clicked.isoformat() if self.last_clicked else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
    
    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Link":
        """Create from a database row (sqlite3.Row, asyncpg.Record or dict)."""
        return cls(
            id=row["id"],
            short_code=row["short_code"],
            original_url=row["original_url"],
            created_at=_to_datetime(row["created_at"]),
            total_clicks=row["total_clicks"] or 0,
            last_clicked=_to_datetime(row["last_clicked"]),
        )
