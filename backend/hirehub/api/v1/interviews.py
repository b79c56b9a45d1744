"""
Interview API endpoints.
"""

import logging
from datetime import datetime
from typing import Any, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from hirehub.api.deps import require_staff
from hirehub.api.v1.applications import ApplicationResponse, get_application_or_404
from hirehub.db.session import get_db
from hirehub.models import Feedback, Interview, User
from hirehub.services import notify_user
from hirehub.services.notifications import interview_scheduled_notification

logger = logging.getLogger(__name__)

router = APIRouter()

InterviewStatus = Literal["scheduled", "completed", "cancelled", "rescheduled"]


# ============== Pydantic Schemas ==============


class InterviewCreate(BaseModel):
    application_id: int
    scheduled_at: datetime
    interviewer_name: str
    interviewer_email: str
    meeting_link: Optional[str] = None
    notes: Optional[str] = None


class InterviewUpdate(BaseModel):
    scheduled_at: Optional[datetime] = None
    interviewer_name: Optional[str] = None
    interviewer_email: Optional[str] = None
    meeting_link: Optional[str] = None
    notes: Optional[str] = None


class InterviewStatusUpdate(BaseModel):
    status: InterviewStatus
    notes: Optional[str] = None


class InterviewResponse(BaseModel):
    id: int
    application_id: int
    scheduled_at: datetime
    interviewer_name: str
    interviewer_email: str
    meeting_link: Optional[str] = None
    notes: Optional[str] = None
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class InterviewDetail(InterviewResponse):
    application: ApplicationResponse
    job: Optional[dict[str, Any]] = None
    candidate: Optional[dict[str, Any]] = None


# ============== Helper Functions ==============


def get_interview_or_404(db: Session, interview_id: int) -> Interview:
    interview = db.query(Interview).filter(Interview.id == interview_id).first()
    if not interview:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Interview not found",
        )
    return interview


# ============== API Endpoints ==============


@router.post("", response_model=InterviewResponse, status_code=status.HTTP_201_CREATED)
async def create_interview(
    data: InterviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Schedule an interview and let the candidate know."""
    application = get_application_or_404(db, data.application_id)

    interview = Interview(**data.model_dump(), status="scheduled")
    db.add(interview)
    db.commit()
    db.refresh(interview)

    job_title = application.job.title if application.job else "your application"
    title, message = interview_scheduled_notification(
        job_title, interview.scheduled_at.strftime("%Y-%m-%d %H:%M")
    )
    notify_user(
        db,
        application.candidate_id,
        title=title,
        message=message,
        type="interview_scheduled",
        related_id=interview.id,
    )
    db.refresh(interview)

    logger.info("Interview %s scheduled for application %s", interview.id, application.id)
    return interview


@router.get("", response_model=list[InterviewDetail])
async def list_interviews(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """All interviews with application, job and candidate details."""
    result: list[InterviewDetail] = []
    for interview in db.query(Interview).order_by(Interview.scheduled_at).all():
        application = interview.application
        if not application:
            continue
        job = application.job
        candidate = application.candidate
        result.append(
            InterviewDetail(
                **InterviewResponse.model_validate(interview).model_dump(),
                application=ApplicationResponse.model_validate(application),
                job={"id": job.id, "title": job.title, "department": job.department} if job else None,
                candidate={
                    "id": candidate.id,
                    "name": candidate.full_name,
                    "email": candidate.email,
                } if candidate else None,
            )
        )
    return result


@router.get("/application/{application_id}", response_model=list[InterviewResponse])
async def list_interviews_for_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    return (
        db.query(Interview)
        .filter(Interview.application_id == application_id)
        .order_by(Interview.scheduled_at)
        .all()
    )


@router.get("/{interview_id}", response_model=InterviewResponse)
async def get_interview(
    interview_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    return get_interview_or_404(db, interview_id)


@router.patch("/{interview_id}", response_model=InterviewResponse)
async def update_interview(
    interview_id: int,
    data: InterviewUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    interview = get_interview_or_404(db, interview_id)
    for field, value in data.model_dump(exclude_none=True).items():
        setattr(interview, field, value)
    db.commit()
    db.refresh(interview)
    return interview


@router.patch("/{interview_id}/status", response_model=InterviewResponse)
async def update_interview_status(
    interview_id: int,
    data: InterviewStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    interview = get_interview_or_404(db, interview_id)
    interview.status = data.status
    if data.notes is not None:
        interview.notes = data.notes
    db.commit()
    db.refresh(interview)
    return interview


@router.delete("/{interview_id}")
async def delete_interview(
    interview_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Delete an interview and the feedback written for it."""
    interview = get_interview_or_404(db, interview_id)
    db.query(Feedback).filter(Feedback.interview_id == interview_id).delete(
        synchronize_session=False
    )
    db.delete(interview)
    db.commit()
    return {"message": "Interview deleted", "interview_id": interview_id}
