"""
Job posting API endpoints.

Create/update/delete postings, browse and search active jobs, and rank
candidates against a posting.
"""

import logging
from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field, model_validator
from sqlalchemy import or_
from sqlalchemy.orm import Session

from hirehub.api.deps import get_current_user, require_staff
from hirehub.core.config import settings
from hirehub.db.session import get_db
from hirehub.models import Application, CandidateProfile, Feedback, Interview, Job, User
from hirehub.services import DispatchReport, convert_currency, dispatch_notifications, rank_candidates
from hirehub.services.notifications import job_posted_notification

logger = logging.getLogger(__name__)

router = APIRouter()


# ============== Pydantic Schemas ==============


class JobCreate(BaseModel):
    """Schema for posting a job."""

    title: str
    description: str
    department: str
    experience_required: float = Field(ge=0)
    salary_min: float = Field(ge=0)
    salary_max: float = Field(ge=0)
    location: str
    required_skills: list[str] = []
    deadline: Optional[datetime] = None
    currency: Optional[str] = None

    @model_validator(mode="after")
    def check_salary_range(self):
        if self.salary_max < self.salary_min:
            raise ValueError("salary_max must be greater than or equal to salary_min")
        return self


class JobUpdate(BaseModel):
    """Partial job update. Omitted fields are left untouched."""

    title: Optional[str] = None
    description: Optional[str] = None
    department: Optional[str] = None
    experience_required: Optional[float] = Field(default=None, ge=0)
    salary_min: Optional[float] = Field(default=None, ge=0)
    salary_max: Optional[float] = Field(default=None, ge=0)
    location: Optional[str] = None
    status: Optional[Literal["active", "closed"]] = None
    required_skills: Optional[list[str]] = None
    deadline: Optional[datetime] = None
    currency: Optional[str] = None


class JobResponse(BaseModel):
    id: int
    title: str
    description: str
    department: str
    experience_required: float
    salary_min: float
    salary_max: float
    currency: str
    location: str
    required_skills: list[str]
    status: str
    posted_by: int
    created_at: datetime
    deadline: Optional[datetime] = None
    poster_name: Optional[str] = None

    class Config:
        from_attributes = True


class JobCreateResponse(BaseModel):
    job: JobResponse
    notifications: DispatchReport


class JobDeleteResponse(BaseModel):
    success: bool
    deleted_applications: int


class CandidateMatch(BaseModel):
    """Candidate ranked against a job."""

    id: int
    user_id: int
    first_name: str
    last_name: str
    email: str
    skills: list[str]
    experience: float
    education: str
    location: str
    match_percentage: int
    matching_skills: list[str]


class CurrencyConversion(BaseModel):
    original_amount: float
    converted_amount: int
    from_currency: str
    to_currency: str
    exchange_rate: float


# ============== Helper Functions ==============

# experience level -> inclusive (min, max) years; None means unbounded
EXPERIENCE_LEVELS: dict[str, tuple[float, Optional[float]]] = {
    "fresher": (0, 0),
    "junior": (1, 3),
    "mid": (4, 7),
    "senior": (8, None),
}


def get_job_or_404(db: Session, job_id: int) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found",
        )
    return job


def to_job_response(job: Job, with_poster: bool = False) -> JobResponse:
    response = JobResponse.model_validate(job)
    if with_poster:
        response.poster_name = job.poster.full_name if job.poster else "Unknown"
    return response


def _matches_query(job: Job, query: str) -> bool:
    query = query.lower()
    return (
        query in job.title.lower()
        or query in job.description.lower()
        or query in job.department.lower()
        or any(query in skill.lower() for skill in job.required_skills or [])
    )


def _matches_experience_level(job: Job, level: str) -> bool:
    bounds = EXPERIENCE_LEVELS.get(level)
    if bounds is None:
        return True
    low, high = bounds
    experience = job.experience_required or 0
    return experience >= low and (high is None or experience <= high)


def _matches_skills(job: Job, skills: list[str]) -> bool:
    job_skills = [skill.lower() for skill in job.required_skills or []]
    return any(
        wanted.lower() in job_skill
        for wanted in skills
        for job_skill in job_skills
    )


# ============== API Endpoints ==============


@router.post("", response_model=JobCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    data: JobCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """
    Post a new job and notify every candidate.

    The job is committed before the fan-out starts, so a failed
    notification batch never rolls back the posting.
    """
    job = Job(
        **data.model_dump(exclude={"currency"}),
        currency=data.currency or settings.DEFAULT_CURRENCY,
        status="active",
        posted_by=current_user.id,
    )
    db.add(job)
    db.commit()
    db.refresh(job)

    candidate_user_ids = [row.user_id for row in db.query(CandidateProfile.user_id).all()]
    title, message = job_posted_notification(job.title, job.department)
    report = dispatch_notifications(
        db,
        candidate_user_ids,
        title=title,
        message=message,
        type="job_posted",
        related_id=job.id,
    )

    db.refresh(job)
    logger.info("Job %s posted by user %s", job.id, current_user.id)

    return JobCreateResponse(job=to_job_response(job), notifications=report)


@router.get("", response_model=list[JobResponse])
async def list_jobs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All jobs, newest first, with the poster's name."""
    jobs = db.query(Job).order_by(Job.created_at.desc(), Job.id.desc()).all()
    return [to_job_response(job, with_poster=True) for job in jobs]


@router.get("/active", response_model=list[JobResponse])
async def list_active_jobs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    jobs = (
        db.query(Job)
        .filter(Job.status == "active")
        .order_by(Job.created_at.desc(), Job.id.desc())
        .all()
    )
    return [to_job_response(job) for job in jobs]


@router.get("/search", response_model=list[JobResponse])
async def search_jobs(
    q: Optional[str] = None,
    location: Optional[str] = None,
    experience_level: Optional[str] = None,
    salary_min: Optional[float] = None,
    salary_max: Optional[float] = None,
    skills: Optional[list[str]] = Query(default=None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Search active jobs.

    Filters combine with AND. Each salary bound applies on its own:
    salary_min against the job's minimum, salary_max against its maximum.
    """
    jobs = (
        db.query(Job)
        .filter(Job.status == "active")
        .order_by(Job.created_at.desc(), Job.id.desc())
        .all()
    )

    if q:
        jobs = [job for job in jobs if _matches_query(job, q)]
    if location:
        jobs = [job for job in jobs if location.lower() in (job.location or "").lower()]
    if experience_level:
        jobs = [job for job in jobs if _matches_experience_level(job, experience_level)]
    if salary_min is not None:
        jobs = [job for job in jobs if job.salary_min >= salary_min]
    if salary_max is not None:
        jobs = [job for job in jobs if job.salary_max <= salary_max]
    if skills:
        jobs = [job for job in jobs if _matches_skills(job, skills)]

    return [to_job_response(job) for job in jobs]


@router.get("/currency/convert", response_model=CurrencyConversion)
async def convert_salary_currency(
    amount: float,
    from_currency: str,
    to_currency: str,
):
    """Convert an amount using the static USD/INR table."""
    return convert_currency(amount, from_currency, to_currency)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return to_job_response(get_job_or_404(db, job_id), with_poster=True)


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: int,
    data: JobUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    job = get_job_or_404(db, job_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field != "deadline":
            continue
        setattr(job, field, value)

    if job.salary_max < job.salary_min:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="salary_max must be greater than or equal to salary_min",
        )

    db.commit()
    db.refresh(job)
    return to_job_response(job, with_poster=True)


@router.delete("/{job_id}", response_model=JobDeleteResponse)
async def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Delete a job together with its applications, their interviews and all feedback."""
    job = get_job_or_404(db, job_id)

    application_ids = [
        row.id for row in db.query(Application.id).filter(Application.job_id == job_id).all()
    ]
    interview_ids = []
    if application_ids:
        interview_ids = [
            row.id
            for row in db.query(Interview.id).filter(Interview.application_id.in_(application_ids)).all()
        ]

    feedback_filter = Feedback.job_id == job_id
    if interview_ids:
        feedback_filter = or_(feedback_filter, Feedback.interview_id.in_(interview_ids))
    db.query(Feedback).filter(feedback_filter).delete(synchronize_session=False)

    if interview_ids:
        db.query(Interview).filter(Interview.id.in_(interview_ids)).delete(
            synchronize_session=False
        )
    if application_ids:
        db.query(Application).filter(Application.id.in_(application_ids)).delete(
            synchronize_session=False
        )

    db.delete(job)
    db.commit()

    logger.info("Job %s deleted with %d applications", job_id, len(application_ids))

    return JobDeleteResponse(success=True, deleted_applications=len(application_ids))


@router.get("/{job_id}/matches", response_model=list[CandidateMatch])
async def match_candidates_for_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """
    Rank candidates for a job.

    70% skill overlap, 30% experience ratio; only matches above
    MATCH_THRESHOLD are kept, best MATCH_LIMIT first. Unknown jobs yield
    an empty list.
    """
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        return []

    candidates = []
    for profile in db.query(CandidateProfile).all():
        user = profile.user
        candidates.append(
            {
                "id": profile.id,
                "user_id": profile.user_id,
                "first_name": user.first_name if user else "",
                "last_name": user.last_name if user else "",
                "email": user.email if user else "",
                "skills": profile.skills or [],
                "experience": profile.experience or 0,
                "education": profile.education or "",
                "location": profile.location or "",
            }
        )

    return rank_candidates(
        candidates,
        job.required_skills or [],
        job.experience_required or 0,
        threshold=settings.MATCH_THRESHOLD,
        limit=settings.MATCH_LIMIT,
    )
