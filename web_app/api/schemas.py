"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from tinylink.database.models import Link


class CreateLinkRequest(BaseModel):
    """Request to create a short link."""

    url: str = Field(..., description="Destination URL; https:// is assumed when no scheme is given")
    custom_code: Optional[str] = Field(
        None,
        alias="customCode",
        description="Optional custom short code (6-8 letters or digits)",
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"url": "example.com/very/long/path/to/resource"},
                {"url": "https://github.com/user/repo", "customCode": "myrepo1"},
            ]
        },
    }


class CreateLinkResponse(BaseModel):
    """Response after creating a short link."""

    short_code: str = Field(..., description="The short code")
    original_url: str = Field(..., description="The normalized destination URL")
    short_url: str = Field(..., description="The complete short URL")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "short_code": "aZ3kP9",
                    "original_url": "https://example.com/very/long/path",
                    "short_url": "https://tiny.link/aZ3kP9",
                    "created_at": "2024-01-01T12:00:00Z",
                }
            ]
        }
    }


class LinkStatsResponse(BaseModel):
    """Stats for one short link."""

    short_code: str
    original_url: str
    total_clicks: int
    last_clicked: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_link(cls, link: Link) -> "LinkStatsResponse":
        return cls(
            short_code=link.short_code,
            original_url=link.original_url,
            total_clicks=link.total_clicks,
            last_clicked=link.last_clicked,
            created_at=link.created_at,
        )


class LinkRecordResponse(LinkStatsResponse):
    """A full row of the links table."""

    id: int

    @classmethod
    def from_link(cls, link: Link) -> "LinkRecordResponse":
        return cls(id=link.id, **LinkStatsResponse.from_link(link).model_dump())


class HealthResponse(BaseModel):
    """Health check response."""

    ok: bool = Field(..., description="Overall status")
    version: str = Field(..., description="Service version")
    database: str = Field(..., description="Database status")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
