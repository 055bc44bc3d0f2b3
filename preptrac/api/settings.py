"""User settings API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from preptrac.api.dependencies import get_current_user
from preptrac.database import get_db
from preptrac.models.user import User
from preptrac.schemas.settings import GoalsResponse, GoalsUpdate

router = APIRouter(prefix="/api/v1/settings", tags=["settings"])


@router.get("/goals", response_model=GoalsResponse)
def get_goals(
    current_user: Annotated[User, Depends(get_current_user)],
):
    return current_user


@router.put("/goals", response_model=GoalsResponse)
def update_goals(
    goals: GoalsUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update dashboard goals. Omitted fields are kept; null clears a goal."""
    for field, value in goals.model_dump(exclude_unset=True).items():
        setattr(current_user, field, value)

    db.commit()
    db.refresh(current_user)
    return current_user
