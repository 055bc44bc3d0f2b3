"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from preptrac.api.dependencies import get_current_user, get_user_category
from preptrac.database import get_db
from preptrac.models.category import Category
from preptrac.models.item import Item
from preptrac.models.user import User
from preptrac.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def get_categories(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all of the user's categories."""
    return (
        db.query(Category)
        .filter(Category.user_id == current_user.id)
        .order_by(Category.name)
        .all()
    )


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    return get_user_category(db, category_id, current_user)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new category."""
    category = Category(user_id=current_user.id, **category_data.model_dump())
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a category."""
    category = get_user_category(db, category_id, current_user)

    for field, value in category_data.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        if field == "target_quantity":
            value = value or 0
        setattr(category, field, value)

    db.commit()
    db.refresh(category)
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a category that holds no items."""
    category = get_user_category(db, category_id, current_user)

    if db.query(Item).filter(Item.category_id == category.id).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Category still has items; move or delete them first",
        )

    db.delete(category)
    db.commit()
