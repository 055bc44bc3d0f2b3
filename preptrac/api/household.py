"""Household API endpoints: family members and activity level."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from preptrac.api.dependencies import get_current_user
from preptrac.database import get_db
from preptrac.models.family_member import FamilyMember
from preptrac.models.user import User
from preptrac.schemas.household import (
    ActivityLevelResponse,
    ActivityLevelUpdate,
    FamilyMemberCreate,
    FamilyMemberResponse,
    FamilyMemberUpdate,
    TotalDailyCaloriesResponse,
)
from preptrac.services.household import household_daily_calories, member_daily_calories

router = APIRouter(prefix="/api/v1/household", tags=["household"])


def get_user_member(db: Session, member_id: int, user: User) -> FamilyMember:
    member = (
        db.query(FamilyMember)
        .filter(FamilyMember.id == member_id, FamilyMember.user_id == user.id)
        .first()
    )
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Family member not found")
    return member


def _member_response(member: FamilyMember, user: User) -> FamilyMemberResponse:
    response = FamilyMemberResponse.model_validate(member)
    response.daily_calories = member_daily_calories(member, user.activity_level)
    return response


@router.get("/activity-level", response_model=ActivityLevelResponse)
def get_activity_level(
    current_user: Annotated[User, Depends(get_current_user)],
):
    return ActivityLevelResponse(activity_level=current_user.activity_level)


@router.put("/activity-level", response_model=ActivityLevelResponse)
def set_activity_level(
    data: ActivityLevelUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Set or clear the activity level used for calorie and water needs."""
    current_user.activity_level = data.activity_level
    db.commit()
    return ActivityLevelResponse(activity_level=current_user.activity_level)


@router.get("/daily-calories", response_model=TotalDailyCaloriesResponse)
def get_total_daily_calories(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    members = db.query(FamilyMember).filter(FamilyMember.user_id == current_user.id).all()
    return TotalDailyCaloriesResponse(
        total_daily_calories=household_daily_calories(members, current_user.activity_level)
    )


@router.get("/members", response_model=list[FamilyMemberResponse])
def get_members(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """List household members with their daily calorie needs."""
    members = (
        db.query(FamilyMember)
        .filter(FamilyMember.user_id == current_user.id)
        .order_by(FamilyMember.created_at, FamilyMember.id)
        .all()
    )
    return [_member_response(member, current_user) for member in members]


@router.post("/members", response_model=FamilyMemberResponse, status_code=status.HTTP_201_CREATED)
def create_member(
    member_data: FamilyMemberCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    member = FamilyMember(user_id=current_user.id, **member_data.model_dump())
    db.add(member)
    db.commit()
    db.refresh(member)
    return _member_response(member, current_user)


@router.put("/members/{member_id}", response_model=FamilyMemberResponse)
def update_member(
    member_id: int,
    member_data: FamilyMemberUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    member = get_user_member(db, member_id, current_user)

    for field, value in member_data.model_dump(exclude_unset=True).items():
        if value is None and field != "name":
            continue
        setattr(member, field, value)

    db.commit()
    db.refresh(member)
    return _member_response(member, current_user)


@router.delete("/members/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_member(
    member_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    member = get_user_member(db, member_id, current_user)
    db.delete(member)
    db.commit()
