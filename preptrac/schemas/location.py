"""Location schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LocationCreate(BaseModel):
    """Create a storage location."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class LocationUpdate(BaseModel):
    """Update a storage location."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None


class LocationResponse(BaseModel):
    """Location response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime
