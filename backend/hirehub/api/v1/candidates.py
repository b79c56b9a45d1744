"""
Candidate profile API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from hirehub.api.deps import require_candidate, require_staff
from hirehub.db.session import get_db
from hirehub.models import CandidateProfile, User

router = APIRouter()


# ============== Pydantic Schemas ==============


class CandidateProfileResponse(BaseModel):
    id: int
    user_id: int
    skills: list[str]
    experience: float
    education: str
    location: str
    resume_id: Optional[str] = None
    summary: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None

    class Config:
        from_attributes = True


class CandidateListItem(CandidateProfileResponse):
    """Profile joined with the owning user's contact details."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""


class CandidateProfileUpdate(BaseModel):
    skills: Optional[list[str]] = None
    experience: Optional[float] = Field(default=None, ge=0)
    education: Optional[str] = None
    location: Optional[str] = None
    summary: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None


# ============== Helper Functions ==============


def get_profile_for_user(db: Session, user_id: int) -> Optional[CandidateProfile]:
    return db.query(CandidateProfile).filter(CandidateProfile.user_id == user_id).first()


def to_candidate_list_item(profile: CandidateProfile) -> CandidateListItem:
    user = profile.user
    return CandidateListItem(
        **CandidateProfileResponse.model_validate(profile).model_dump(),
        first_name=user.first_name if user else "",
        last_name=user.last_name if user else "",
        email=user.email if user else "",
        phone=(user.phone or "") if user else "",
    )


def _profile_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Candidate profile not found",
    )


# ============== API Endpoints ==============


@router.get("/me", response_model=CandidateProfileResponse)
async def get_my_profile(
    current_user: User = Depends(require_candidate),
    db: Session = Depends(get_db),
):
    profile = get_profile_for_user(db, current_user.id)
    if not profile:
        raise _profile_not_found()
    return profile


@router.put("/me", response_model=CandidateProfileResponse)
async def update_my_profile(
    data: CandidateProfileUpdate,
    current_user: User = Depends(require_candidate),
    db: Session = Depends(get_db),
):
    """Update the candidate's own profile. Omitted fields are left untouched."""
    profile = get_profile_for_user(db, current_user.id)
    if not profile:
        raise _profile_not_found()

    for field, value in data.model_dump(exclude_none=True).items():
        setattr(profile, field, value)

    db.commit()
    db.refresh(profile)
    return profile


@router.get("", response_model=list[CandidateListItem])
async def list_candidates(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """All candidate profiles with contact details (HR view)."""
    profiles = db.query(CandidateProfile).all()
    return [to_candidate_list_item(profile) for profile in profiles]


@router.get("/{user_id}", response_model=CandidateListItem)
async def get_candidate_profile(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    profile = get_profile_for_user(db, user_id)
    if not profile:
        raise _profile_not_found()
    return to_candidate_list_item(profile)
