"""Account API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from preptrac.api.dependencies import get_current_user
from preptrac.database import get_db
from preptrac.models import Category, FamilyMember, Item, Location
from preptrac.models.user import User
from preptrac.schemas.auth import (
    AccountResponse,
    AuthResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from preptrac.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    get_user_by_email,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _token_response(user: User) -> AuthResponse:
    return AuthResponse(
        access_token=create_access_token(user.id, user.email),
        user=UserResponse.model_validate(user),
    )


def _count(db: Session, model, user_id: int) -> int:
    return db.query(func.count(model.id)).filter(model.user_id == user_id).scalar()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Open an account stocked with the default categories and locations."""
    if get_user_by_email(db, user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    user = create_user(
        db,
        user_data.email,
        user_data.password,
        user_data.name,
        activity_level=user_data.activity_level,
    )
    logger.info(f"Registered household account {user.id}")
    return _token_response(user)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _token_response(user)


@router.get("/me", response_model=AccountResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """The signed-in account with counts of its inventory and household."""
    return AccountResponse(
        **UserResponse.model_validate(current_user).model_dump(),
        item_count=_count(db, Item, current_user.id),
        category_count=_count(db, Category, current_user.id),
        location_count=_count(db, Location, current_user.id),
        family_member_count=_count(db, FamilyMember, current_user.id),
    )


@router.post("/logout")
def logout(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Tokens are stateless; the client discards its copy."""
    return {"message": "Logged out successfully"}
