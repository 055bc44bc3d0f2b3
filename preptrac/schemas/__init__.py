"""Pydantic schemas for API requests and responses."""

from preptrac.schemas.auth import (
    AccountResponse,
    AuthResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from preptrac.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from preptrac.schemas.dashboard import DashboardStats
from preptrac.schemas.event import EventCreate, EventResponse, EventUpdate
from preptrac.schemas.item import ItemCreate, ItemDetailResponse, ItemResponse, ItemUpdate
from preptrac.schemas.location import LocationCreate, LocationResponse, LocationUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "AccountResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "LocationCreate",
    "LocationUpdate",
    "LocationResponse",
    "ItemCreate",
    "ItemUpdate",
    "ItemResponse",
    "ItemDetailResponse",
    "EventCreate",
    "EventUpdate",
    "EventResponse",
    "DashboardStats",
]
