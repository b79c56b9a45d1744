"""
Requisition API endpoints.

Internal hiring requests: created by HR/admin, approved, then staffed by
uploading candidate resumes. Creation notifies every HR/admin user;
uploading a candidate notifies the requisition creator.
"""

import logging
from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from hirehub.api.deps import get_current_user, require_staff
from hirehub.db.session import get_db
from hirehub.models import Requisition, RequisitionCandidate, User
from hirehub.models.user import STAFF_ROLES
from hirehub.services import DispatchReport, dispatch_notifications, notify_user
from hirehub.services.notifications import (
    requisition_candidate_notification,
    requisition_created_notification,
)

logger = logging.getLogger(__name__)

router = APIRouter()

RequisitionStatus = Literal["pending", "approved", "closed"]
RequisitionCandidateStatus = Literal["submitted", "shortlisted", "interviewed", "selected", "rejected"]

# current status -> statuses it may move to
ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"approved", "closed"},
    "approved": {"closed"},
    "closed": set(),
}


# ============== Pydantic Schemas ==============


class RequisitionCreate(BaseModel):
    department: str
    job_role: str
    experience_required: float = Field(ge=0)
    number_of_positions: int = Field(ge=1)
    skills_required: list[str] = []
    jd_file_url: Optional[str] = None
    description: Optional[str] = None


class RequisitionResponse(BaseModel):
    id: int
    department: str
    job_role: str
    experience_required: float
    number_of_positions: int
    skills_required: list[str]
    jd_file_url: Optional[str] = None
    description: Optional[str] = None
    status: str
    created_by: int
    created_at: datetime
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    creator_name: Optional[str] = None
    approver_name: Optional[str] = None
    candidates_count: Optional[int] = None

    class Config:
        from_attributes = True


class RequisitionCreateResponse(BaseModel):
    requisition: RequisitionResponse
    notifications: DispatchReport


class RequisitionStatusUpdate(BaseModel):
    status: RequisitionStatus


class RequisitionCandidateCreate(BaseModel):
    candidate_name: str
    candidate_email: Optional[str] = None
    candidate_phone: Optional[str] = None
    skills: list[str] = []
    experience: float = Field(ge=0)
    resume_url: str
    notes: Optional[str] = None


class RequisitionCandidateResponse(BaseModel):
    id: int
    requisition_id: int
    candidate_name: str
    candidate_email: Optional[str] = None
    candidate_phone: Optional[str] = None
    skills: list[str]
    experience: float
    resume_url: str
    notes: Optional[str] = None
    status: str
    uploaded_by: int
    created_at: datetime
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    uploader_name: Optional[str] = None
    reviewer_name: Optional[str] = None

    class Config:
        from_attributes = True


class RequisitionCandidateStatusUpdate(BaseModel):
    status: RequisitionCandidateStatus


# ============== Helper Functions ==============


def get_requisition_or_404(db: Session, requisition_id: int) -> Requisition:
    requisition = db.query(Requisition).filter(Requisition.id == requisition_id).first()
    if not requisition:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Requisition not found",
        )
    return requisition


def to_requisition_response(requisition: Requisition) -> RequisitionResponse:
    response = RequisitionResponse.model_validate(requisition)
    response.creator_name = requisition.creator.full_name if requisition.creator else "Unknown"
    response.approver_name = requisition.approver.full_name if requisition.approver else None
    return response


def to_candidate_response(candidate: RequisitionCandidate) -> RequisitionCandidateResponse:
    response = RequisitionCandidateResponse.model_validate(candidate)
    response.uploader_name = candidate.uploader.full_name if candidate.uploader else "Unknown"
    response.reviewer_name = candidate.reviewer.full_name if candidate.reviewer else None
    return response


# ============== API Endpoints ==============


@router.post("", response_model=RequisitionCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_requisition(
    data: RequisitionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Open a pending requisition and notify every HR/admin user."""
    requisition = Requisition(
        **data.model_dump(),
        status="pending",
        created_by=current_user.id,
    )
    db.add(requisition)
    db.commit()
    db.refresh(requisition)

    staff_ids = [row.id for row in db.query(User.id).filter(User.role.in_(STAFF_ROLES)).all()]
    title, message = requisition_created_notification(requisition.job_role, requisition.department)
    report = dispatch_notifications(
        db,
        staff_ids,
        title=title,
        message=message,
        type="general",
        related_id=requisition.id,
    )

    db.refresh(requisition)
    logger.info("Requisition %s created by user %s", requisition.id, current_user.id)

    return RequisitionCreateResponse(
        requisition=to_requisition_response(requisition),
        notifications=report,
    )


@router.get("", response_model=list[RequisitionResponse])
async def list_requisitions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    requisitions = (
        db.query(Requisition)
        .order_by(Requisition.created_at.desc(), Requisition.id.desc())
        .all()
    )
    return [to_requisition_response(requisition) for requisition in requisitions]


@router.get("/approved", response_model=list[RequisitionResponse])
async def list_approved_requisitions(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Approved requisitions with how many candidates were uploaded to each."""
    requisitions = (
        db.query(Requisition)
        .filter(Requisition.status == "approved")
        .order_by(Requisition.created_at.desc(), Requisition.id.desc())
        .all()
    )
    result = []
    for requisition in requisitions:
        response = to_requisition_response(requisition)
        response.candidates_count = len(requisition.candidates)
        result.append(response)
    return result


@router.get("/{requisition_id}", response_model=RequisitionResponse)
async def get_requisition(
    requisition_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return to_requisition_response(get_requisition_or_404(db, requisition_id))


@router.patch("/{requisition_id}/status", response_model=RequisitionResponse)
async def update_requisition_status(
    requisition_id: int,
    data: RequisitionStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """
    Approve or close a requisition.

    pending -> approved records the approver; closed is terminal.
    """
    requisition = get_requisition_or_404(db, requisition_id)

    if data.status != requisition.status:
        if data.status not in ALLOWED_TRANSITIONS.get(requisition.status, set()):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Cannot change requisition status from {requisition.status} to {data.status}",
            )

        requisition.status = data.status
        if data.status == "approved":
            requisition.approved_by = current_user.id
            requisition.approved_at = datetime.utcnow()

        db.commit()
        db.refresh(requisition)
        logger.info("Requisition %s is now %s", requisition.id, requisition.status)

    return to_requisition_response(requisition)


@router.post(
    "/{requisition_id}/candidates",
    response_model=RequisitionCandidateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_candidate(
    requisition_id: int,
    data: RequisitionCandidateCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Attach a candidate resume to an approved requisition."""
    requisition = get_requisition_or_404(db, requisition_id)
    if requisition.status != "approved":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Requisition must be approved before uploading candidates",
        )

    candidate = RequisitionCandidate(
        **data.model_dump(),
        requisition_id=requisition.id,
        status="submitted",
        uploaded_by=current_user.id,
    )
    db.add(candidate)
    db.commit()
    db.refresh(candidate)

    title, message = requisition_candidate_notification(candidate.candidate_name, requisition.job_role)
    notify_user(
        db,
        requisition.created_by,
        title=title,
        message=message,
        type="general",
        related_id=candidate.id,
    )
    db.refresh(candidate)

    return to_candidate_response(candidate)


@router.get("/{requisition_id}/candidates", response_model=list[RequisitionCandidateResponse])
async def list_requisition_candidates(
    requisition_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    get_requisition_or_404(db, requisition_id)
    candidates = (
        db.query(RequisitionCandidate)
        .filter(RequisitionCandidate.requisition_id == requisition_id)
        .order_by(RequisitionCandidate.created_at.desc(), RequisitionCandidate.id.desc())
        .all()
    )
    return [to_candidate_response(candidate) for candidate in candidates]


@router.patch("/candidates/{candidate_id}/status", response_model=RequisitionCandidateResponse)
async def update_requisition_candidate_status(
    candidate_id: int,
    data: RequisitionCandidateStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    candidate = db.query(RequisitionCandidate).filter(RequisitionCandidate.id == candidate_id).first()
    if not candidate:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Requisition candidate not found",
        )

    candidate.status = data.status
    candidate.reviewed_by = current_user.id
    candidate.reviewed_at = datetime.utcnow()
    db.commit()
    db.refresh(candidate)

    return to_candidate_response(candidate)
