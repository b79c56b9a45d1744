"""
Interview feedback API endpoints.
"""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from hirehub.api.deps import require_staff
from hirehub.db.session import get_db
from hirehub.models import CandidateProfile, Feedback, Interview, Job, User

router = APIRouter()

Rating = Annotated[int, Field(ge=1, le=5)]


# ============== Pydantic Schemas ==============


class FeedbackCreate(BaseModel):
    interview_id: int
    candidate_id: int  # candidate profile id
    job_id: int
    interviewer_name: str
    overall_rating: Rating
    technical_skills: Rating
    communication_skills: Rating
    problem_solving: Rating
    cultural_fit: Rating
    strengths: str
    weaknesses: str
    recommendation: str
    additional_comments: Optional[str] = None


class FeedbackUpdate(BaseModel):
    overall_rating: Optional[int] = Field(default=None, ge=1, le=5)
    technical_skills: Optional[int] = Field(default=None, ge=1, le=5)
    communication_skills: Optional[int] = Field(default=None, ge=1, le=5)
    problem_solving: Optional[int] = Field(default=None, ge=1, le=5)
    cultural_fit: Optional[int] = Field(default=None, ge=1, le=5)
    strengths: Optional[str] = None
    weaknesses: Optional[str] = None
    recommendation: Optional[str] = None
    additional_comments: Optional[str] = None


class FeedbackResponse(BaseModel):
    id: int
    interview_id: int
    candidate_id: int
    job_id: int
    interviewer_name: str
    overall_rating: int
    technical_skills: int
    communication_skills: int
    problem_solving: int
    cultural_fit: int
    strengths: str
    weaknesses: str
    recommendation: str
    additional_comments: Optional[str] = None
    submitted_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ============== Helper Functions ==============


def get_feedback_or_404(db: Session, feedback_id: int) -> Feedback:
    feedback = db.query(Feedback).filter(Feedback.id == feedback_id).first()
    if not feedback:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Feedback not found",
        )
    return feedback


def _ensure_exists(db: Session, model, entity_id: int, label: str) -> None:
    if not db.query(model).filter(model.id == entity_id).first():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found",
        )


# ============== API Endpoints ==============


@router.post("", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    data: FeedbackCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    _ensure_exists(db, Interview, data.interview_id, "Interview")
    _ensure_exists(db, CandidateProfile, data.candidate_id, "Candidate profile")
    _ensure_exists(db, Job, data.job_id, "Job")

    feedback = Feedback(**data.model_dump())
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    return feedback


@router.get("", response_model=list[FeedbackResponse])
async def list_feedback(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    return db.query(Feedback).order_by(Feedback.submitted_at.desc(), Feedback.id.desc()).all()


@router.get("/interview/{interview_id}", response_model=list[FeedbackResponse])
async def list_feedback_for_interview(
    interview_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    return db.query(Feedback).filter(Feedback.interview_id == interview_id).all()


@router.get("/candidate/{candidate_id}", response_model=list[FeedbackResponse])
async def list_feedback_for_candidate(
    candidate_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    return db.query(Feedback).filter(Feedback.candidate_id == candidate_id).all()


@router.get("/job/{job_id}", response_model=list[FeedbackResponse])
async def list_feedback_for_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    return db.query(Feedback).filter(Feedback.job_id == job_id).all()


@router.get("/{feedback_id}", response_model=FeedbackResponse)
async def get_feedback(
    feedback_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    return get_feedback_or_404(db, feedback_id)


@router.patch("/{feedback_id}", response_model=FeedbackResponse)
async def update_feedback(
    feedback_id: int,
    data: FeedbackUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    feedback = get_feedback_or_404(db, feedback_id)
    for field, value in data.model_dump(exclude_none=True).items():
        setattr(feedback, field, value)
    feedback.updated_at = datetime.utcnow()

    db.commit()
    db.refresh(feedback)
    return feedback


@router.delete("/{feedback_id}")
async def delete_feedback(
    feedback_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    feedback = get_feedback_or_404(db, feedback_id)
    db.delete(feedback)
    db.commit()
    return {"message": "Feedback deleted", "feedback_id": feedback_id}
