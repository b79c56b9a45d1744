"""
Dashboard API endpoints.

Headline counts for the HR/admin home screen.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from hirehub.api.deps import require_staff
from hirehub.db.session import get_db
from hirehub.models import Application, Job, Requisition, User

router = APIRouter()


class DashboardStats(BaseModel):
    """Schema for dashboard overview stats."""

    total_jobs: int
    active_jobs: int
    total_applications: int
    selected_candidates: int
    pending_applications: int
    pending_requisitions: int


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    return DashboardStats(
        total_jobs=db.query(Job).count(),
        active_jobs=db.query(Job).filter(Job.status == "active").count(),
        total_applications=db.query(Application).count(),
        selected_candidates=db.query(Application).filter(Application.status == "selected").count(),
        pending_applications=db.query(Application).filter(Application.status == "applied").count(),
        pending_requisitions=db.query(Requisition).filter(Requisition.status == "pending").count(),
    )
