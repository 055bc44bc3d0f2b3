"""Location API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from preptrac.api.dependencies import get_current_user, get_user_location
from preptrac.database import get_db
from preptrac.models.location import Location
from preptrac.models.item import Item
from preptrac.models.user import User
from preptrac.schemas.location import LocationCreate, LocationResponse, LocationUpdate

router = APIRouter(prefix="/api/v1/locations", tags=["locations"])


@router.get("", response_model=list[LocationResponse])
def get_locations(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all of the user's storage locations."""
    return (
        db.query(Location)
        .filter(Location.user_id == current_user.id)
        .order_by(Location.name)
        .all()
    )


@router.get("/{location_id}", response_model=LocationResponse)
def get_location(
    location_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    return get_user_location(db, location_id, current_user)


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
def create_location(
    location_data: LocationCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new location."""
    location = Location(user_id=current_user.id, **location_data.model_dump())
    db.add(location)
    db.commit()
    db.refresh(location)
    return location


@router.put("/{location_id}", response_model=LocationResponse)
def update_location(
    location_id: int,
    location_data: LocationUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a location."""
    location = get_user_location(db, location_id, current_user)

    for field, value in location_data.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(location, field, value)

    db.commit()
    db.refresh(location)
    return location


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_location(
    location_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a location that holds no items."""
    location = get_user_location(db, location_id, current_user)

    if db.query(Item).filter(Item.location_id == location.id).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Location still has items; move or delete them first",
        )

    db.delete(location)
    db.commit()
