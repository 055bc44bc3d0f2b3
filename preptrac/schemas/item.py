"""Item schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from preptrac.schemas.category import CategoryResponse
from preptrac.schemas.location import LocationResponse
from preptrac.utils import MAX_INTERVAL_DAYS


class ItemCreate(BaseModel):
    """Create a new item."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    quantity: float = Field(0, ge=0)
    unit: str = Field(..., min_length=1, max_length=50)
    category_id: int
    location_id: int
    expiration_date: date | None = None
    maintenance_interval: int | None = Field(None, gt=0, le=MAX_INTERVAL_DAYS)
    last_maintenance_date: date | None = None
    rotation_schedule: int | None = Field(None, gt=0, le=MAX_INTERVAL_DAYS)
    last_rotation_date: date | None = None
    notes: str | None = None
    image_url: str | None = Field(None, max_length=1000)
    qr_code: str | None = Field(None, max_length=255)
    min_quantity: float = Field(0, ge=0)
    target_quantity: float = Field(0, ge=0)
    calories_per_unit: float | None = Field(None, ge=0)


class ItemUpdate(BaseModel):
    """Update an item.

    Only fields present in the request are applied; lifecycle dates may be
    set to null explicitly to clear them.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, min_length=1, max_length=50)
    category_id: int | None = None
    location_id: int | None = None
    expiration_date: date | None = None
    maintenance_interval: int | None = Field(None, gt=0, le=MAX_INTERVAL_DAYS)
    last_maintenance_date: date | None = None
    rotation_schedule: int | None = Field(None, gt=0, le=MAX_INTERVAL_DAYS)
    last_rotation_date: date | None = None
    notes: str | None = None
    image_url: str | None = Field(None, max_length=1000)
    qr_code: str | None = Field(None, max_length=255)
    min_quantity: float | None = Field(None, ge=0)
    target_quantity: float | None = Field(None, ge=0)
    calories_per_unit: float | None = Field(None, ge=0)


class ItemResponse(BaseModel):
    """Item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    quantity: float
    unit: str
    category_id: int
    location_id: int
    expiration_date: date | None
    maintenance_interval: int | None
    last_maintenance_date: date | None
    rotation_schedule: int | None
    last_rotation_date: date | None
    notes: str | None
    image_url: str | None
    qr_code: str | None
    min_quantity: float
    target_quantity: float
    calories_per_unit: float | None
    created_at: datetime
    updated_at: datetime


class ItemDetailResponse(ItemResponse):
    """Item with its category and location."""

    category: CategoryResponse
    location: LocationResponse


class ItemImportError(BaseModel):
    """A CSV row that could not be imported."""

    row: int
    error: str


class ItemImportResponse(BaseModel):
    """Result of a CSV import."""

    created: int
    updated: int
    errors: list[ItemImportError]
