"""Category schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    """Create a new category."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    color: str | None = Field(None, max_length=20)
    icon: str | None = Field(None, max_length=50)
    target_quantity: float = Field(0, ge=0)


class CategoryUpdate(BaseModel):
    """Update a category."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    color: str | None = Field(None, max_length=20)
    icon: str | None = Field(None, max_length=50)
    target_quantity: float | None = Field(None, ge=0)


class CategoryResponse(BaseModel):
    """Category response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    color: str | None
    icon: str | None
    target_quantity: float
    created_at: datetime
    updated_at: datetime
