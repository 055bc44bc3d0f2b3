"""FastAPI dependencies for authentication and ownership checks."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from preptrac.database import get_db
from preptrac.models.category import Category
from preptrac.models.item import Item
from preptrac.models.location import Location
from preptrac.models.user import User
from preptrac.services.auth import decode_access_token
from preptrac.services.notification_service import NotificationService

security = HTTPBearer()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    payload = decode_access_token(credentials.credentials)

    if payload is None or payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == int(payload["sub"])).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def get_user_category(db: Session, category_id: int, user: User) -> Category:
    category = (
        db.query(Category).filter(Category.id == category_id, Category.user_id == user.id).first()
    )
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


def get_user_location(db: Session, location_id: int, user: User) -> Location:
    location = (
        db.query(Location).filter(Location.id == location_id, Location.user_id == user.id).first()
    )
    if not location:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    return location


def get_user_item(db: Session, item_id: int, user: User) -> Item:
    """Get an item owned by the user, or 404."""
    item = db.query(Item).filter(Item.id == item_id, Item.user_id == user.id).first()
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


def get_notification_service() -> NotificationService:
    return NotificationService()
