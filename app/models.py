"""
Pydantic models for request/response validation.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator

from app.store import MAX_TTL_SECONDS


class PasteCreate(BaseModel):
    """Schema for creating a new paste."""
    content: StrictStr = Field(..., min_length=1, description="Text content (required, non-empty)")
    ttl_seconds: Optional[StrictInt] = Field(
        None, ge=1, le=MAX_TTL_SECONDS, description="Optional TTL in seconds"
    )
    max_views: Optional[StrictInt] = Field(None, ge=1, description="Optional view limit")

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content must not be blank")
        return value


class PasteCreated(BaseModel):
    """Schema for paste creation response."""
    id: str = Field(..., description="Unique paste ID")
    url: str = Field(..., description="Shareable URL to view the paste")


class PasteBody(BaseModel):
    """Schema for a fetched paste."""
    content: str = Field(..., description="Paste text content")
    remaining_views: Optional[int] = Field(None, description="Views left (null if unlimited)")
    expires_at: Optional[str] = Field(None, description="Expiry timestamp (ISO 8601, null if no TTL)")


class HealthCheck(BaseModel):
    """Schema for health check response."""
    ok: bool = Field(..., description="Is the application healthy?")


class ErrorResponse(BaseModel):
    """Schema for every error response."""
    error: str


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Render a UTC datetime as ISO 8601 with millisecond precision, e.g. 2024-01-01T00:00:10.000Z."""
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
