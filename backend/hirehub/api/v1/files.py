"""
File API endpoints.

Storage is simulated: uploads are validated, acknowledged with a synthetic
id, and the id is recorded on the owning user or candidate profile.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from hirehub.api.deps import get_current_user, require_candidate, require_staff
from hirehub.api.v1.candidates import get_profile_for_user
from hirehub.db.session import get_db
from hirehub.models import CandidateProfile, User
from hirehub.services import UploadRejected, file_url, store_profile_image, store_resume

logger = logging.getLogger(__name__)

router = APIRouter()


# ============== Pydantic Schemas ==============


class ResumeUploadRequest(BaseModel):
    file_name: str
    file_data: str  # base64
    mime_type: str


class ProfileImageUploadRequest(BaseModel):
    image_data: str  # base64


class StoredFile(BaseModel):
    storage_id: str
    url: str


class CandidateResume(BaseModel):
    candidate_id: int  # user id
    resume_id: str
    resume_url: str


class ResumeAssignRequest(BaseModel):
    resume_id: Optional[str] = None


# ============== Helper Functions ==============


def _reject(error: UploadRejected) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


def _to_candidate_resume(profile: CandidateProfile) -> CandidateResume:
    return CandidateResume(
        candidate_id=profile.user_id,
        resume_id=profile.resume_id,
        resume_url=file_url(profile.resume_id),
    )


# ============== API Endpoints ==============


@router.post("/resume", response_model=StoredFile, status_code=status.HTTP_201_CREATED)
async def upload_resume(
    data: ResumeUploadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
):
    """Upload the current candidate's resume (PDF, DOC or DOCX, base64 encoded)."""
    try:
        storage_id = store_resume(data.file_name, data.file_data, data.mime_type)
    except UploadRejected as e:
        raise _reject(e)

    profile = get_profile_for_user(db, current_user.id)
    if profile:
        profile.resume_id = storage_id
        db.commit()

    logger.info("Stored resume %s for user %s", storage_id, current_user.id)
    return StoredFile(storage_id=storage_id, url=file_url(storage_id))


@router.post("/profile-image", response_model=StoredFile, status_code=status.HTTP_201_CREATED)
async def upload_profile_image(
    data: ProfileImageUploadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        storage_id = store_profile_image(data.image_data)
    except UploadRejected as e:
        raise _reject(e)

    current_user.profile_image = storage_id
    db.commit()

    return StoredFile(storage_id=storage_id, url=file_url(storage_id))


@router.get("/resumes", response_model=list[CandidateResume])
async def list_candidate_resumes(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    profiles = db.query(CandidateProfile).filter(CandidateProfile.resume_id.isnot(None)).all()
    return [_to_candidate_resume(profile) for profile in profiles]


@router.get("/resumes/{user_id}", response_model=Optional[CandidateResume])
async def get_candidate_resume(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """A candidate may read their own resume; HR/admin may read anyone's. Null when none."""
    if current_user.role == "candidate" and current_user.id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")

    profile = get_profile_for_user(db, user_id)
    if not profile or not profile.resume_id:
        return None
    return _to_candidate_resume(profile)


@router.put("/resumes/{user_id}")
async def set_candidate_resume(
    user_id: int,
    data: ResumeAssignRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Point a candidate profile at a stored resume, or clear it."""
    profile = get_profile_for_user(db, user_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Candidate profile not found",
        )

    profile.resume_id = data.resume_id
    db.commit()

    return {"message": "Resume updated", "profile_id": profile.id}


@router.get("/{storage_id}/url", response_model=StoredFile)
async def get_file_url(storage_id: str, current_user: User = Depends(get_current_user)):
    return StoredFile(storage_id=storage_id, url=file_url(storage_id))


@router.delete("/{storage_id}")
async def delete_file(storage_id: str, current_user: User = Depends(get_current_user)):
    """Nothing is stored, so deletion always succeeds."""
    return {"success": True}
