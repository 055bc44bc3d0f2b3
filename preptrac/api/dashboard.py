"""Dashboard API endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from preptrac.api.dependencies import get_current_user
from preptrac.database import get_db
from preptrac.models.user import User
from preptrac.schemas.dashboard import DashboardStats
from preptrac.services.dashboard_service import compute_dashboard_stats

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardStats)
def get_dashboard(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Inventory summary: supply days, goals and what needs attention."""
    return compute_dashboard_stats(db, current_user.id)
