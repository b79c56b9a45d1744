"""
Application API endpoints.

Candidates apply to jobs; HR/admin review applications and move them
through the status pipeline. Every status change with a template notifies
the candidate.
"""

import logging
from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hirehub.api.deps import require_candidate, require_staff
from hirehub.api.v1.candidates import CandidateProfileResponse, get_profile_for_user
from hirehub.api.v1.jobs import get_job_or_404
from hirehub.db.session import get_db
from hirehub.models import Application, Job, User
from hirehub.services import application_status_notification, compute_match, notify_user
from hirehub.services.notifications import new_application_notification

logger = logging.getLogger(__name__)

router = APIRouter()

ALREADY_APPLIED = "You have already applied to this job"

ApplicationStatus = Literal[
    "applied",
    "screening",
    "interview_scheduled",
    "interviewed",
    "selected",
    "rejected",
]


# ============== Pydantic Schemas ==============


class ApplyRequest(BaseModel):
    job_id: int
    cover_letter: Optional[str] = None


class ApplicationResponse(BaseModel):
    id: int
    job_id: int
    candidate_id: int
    status: str
    applied_at: datetime
    cover_letter: Optional[str] = None
    match_percentage: Optional[int] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None

    class Config:
        from_attributes = True


class CandidateApplicationItem(ApplicationResponse):
    """Application as the candidate sees it, with job details."""

    job_title: str = "Unknown"
    job_department: str = "Unknown"
    job_location: str = "Unknown"
    job_salary_min: float = 0
    job_salary_max: float = 0
    job_currency: str = "INR"


class ReviewApplicationItem(ApplicationResponse):
    """Application as HR sees it, with candidate (and job) details."""

    job_title: Optional[str] = None
    job_department: Optional[str] = None
    job_location: Optional[str] = None
    candidate_name: str = "Unknown"
    candidate_email: Optional[str] = None
    candidate_phone: Optional[str] = None
    candidate_profile: Optional[CandidateProfileResponse] = None


class StatusUpdateRequest(BaseModel):
    status: ApplicationStatus
    review_notes: Optional[str] = None


# ============== Helper Functions ==============


def get_application_or_404(db: Session, application_id: int) -> Application:
    application = db.query(Application).filter(Application.id == application_id).first()
    if not application:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )
    return application


def find_application(db: Session, job_id: int, candidate_id: int) -> Optional[Application]:
    return (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.candidate_id == candidate_id)
        .first()
    )


def to_review_item(db: Session, application: Application, with_job: bool = False) -> ReviewApplicationItem:
    candidate = application.candidate
    profile = get_profile_for_user(db, application.candidate_id)
    item = ReviewApplicationItem(
        **ApplicationResponse.model_validate(application).model_dump(),
        candidate_name=candidate.full_name if candidate else "Unknown",
        candidate_email=candidate.email if candidate else None,
        candidate_phone=candidate.phone if candidate else None,
        candidate_profile=CandidateProfileResponse.model_validate(profile) if profile else None,
    )
    if with_job:
        job = application.job
        item.job_title = job.title if job else "Unknown"
        item.job_department = job.department if job else "Unknown"
        item.job_location = job.location if job else "Unknown"
    return item


def to_candidate_item(application: Application) -> CandidateApplicationItem:
    item = CandidateApplicationItem(**ApplicationResponse.model_validate(application).model_dump())
    job = application.job
    if job:
        item.job_title = job.title
        item.job_department = job.department
        item.job_location = job.location
        item.job_salary_min = job.salary_min or 0
        item.job_salary_max = job.salary_max or 0
        item.job_currency = job.currency or "INR"
    return item


# ============== API Endpoints ==============


@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_to_job(
    data: ApplyRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
):
    """
    Apply the current candidate to a job.

    A candidate may apply to a job once. The unique (job, candidate)
    constraint catches concurrent duplicates the pre-check misses.
    """
    job = get_job_or_404(db, data.job_id)
    if job.status != "active":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This job is no longer accepting applications",
        )

    if find_application(db, job.id, current_user.id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ALREADY_APPLIED)

    profile = get_profile_for_user(db, current_user.id)
    match_percentage = None
    if profile:
        match_percentage = compute_match(
            profile.skills or [],
            profile.experience or 0,
            job.required_skills or [],
            job.experience_required or 0,
        )["match_percentage"]

    application = Application(
        job_id=job.id,
        candidate_id=current_user.id,
        status="applied",
        cover_letter=data.cover_letter,
        match_percentage=match_percentage,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ALREADY_APPLIED)
    db.refresh(application)

    if job.posted_by:
        title, message = new_application_notification(current_user.full_name, job.title)
        notify_user(
            db,
            job.posted_by,
            title=title,
            message=message,
            type="application_status",
            related_id=application.id,
        )
        db.refresh(application)

    logger.info("User %s applied to job %s", current_user.id, job.id)
    return application


@router.get("/mine", response_model=list[CandidateApplicationItem])
async def my_applications(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
):
    """The current candidate's applications with job details, newest first."""
    applications = (
        db.query(Application)
        .filter(Application.candidate_id == current_user.id)
        .order_by(Application.applied_at.desc(), Application.id.desc())
        .all()
    )
    return [to_candidate_item(application) for application in applications]


@router.get("/mine/job/{job_id}", response_model=list[ApplicationResponse])
async def my_applications_for_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
):
    """Empty when the candidate has not applied to the job yet."""
    return (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.candidate_id == current_user.id)
        .all()
    )


@router.get("", response_model=list[ReviewApplicationItem])
async def list_all_applications(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Every application with job and candidate details (HR view)."""
    applications = (
        db.query(Application)
        .order_by(Application.applied_at.desc(), Application.id.desc())
        .all()
    )
    return [to_review_item(db, application, with_job=True) for application in applications]


@router.get("/job/{job_id}", response_model=list[ReviewApplicationItem])
async def list_applications_for_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    applications = (
        db.query(Application)
        .filter(Application.job_id == job_id)
        .order_by(Application.applied_at.desc(), Application.id.desc())
        .all()
    )
    return [to_review_item(db, application) for application in applications]


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: int,
    data: StatusUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """
    Move an application to any status and notify the candidate.

    Statuses without a notification template (``applied``) change silently.
    """
    application = get_application_or_404(db, application_id)
    previous_status = application.status

    application.status = data.status
    application.reviewed_by = current_user.id
    application.reviewed_at = datetime.utcnow()
    application.review_notes = data.review_notes
    db.commit()
    db.refresh(application)

    logger.info(
        "Application %s moved %s -> %s by user %s",
        application.id, previous_status, application.status, current_user.id,
    )

    job = db.query(Job).filter(Job.id == application.job_id).first()
    notification = application_status_notification(data.status, job.title) if job else None
    if notification:
        title, message = notification
        notify_user(
            db,
            application.candidate_id,
            title=title,
            message=message,
            type="application_status",
            related_id=application.id,
        )
        db.refresh(application)

    return application
