"""
Authentication API endpoints.

Handles signup, login with signed session tokens, and the current user's
account details.
"""

import logging
import re
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hirehub.api.deps import get_current_user, get_user_by_email
from hirehub.core.security import create_access_token, get_password_hash, verify_password
from hirehub.db.session import get_db
from hirehub.models import CandidateProfile, User
from hirehub.services import file_url

logger = logging.getLogger(__name__)

router = APIRouter()

DUPLICATE_EMAIL = "User with this email already exists"
DUPLICATE_ADMIN = "An admin account already exists. Only one admin is allowed."


# ============== Pydantic Schemas ==============


class UserSignup(BaseModel):
    """Schema for user signup."""

    email: str
    password: str
    first_name: str
    last_name: str
    role: Literal["admin", "hr", "candidate"] = "candidate"
    phone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email format."""
        email_pattern = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"
        if not re.match(email_pattern, v):
            raise ValueError("Invalid email format")
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class SignupResponse(BaseModel):
    user_id: int
    role: str


class LoginResponse(BaseModel):
    """Signed session returned to the client."""

    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: str
    first_name: str
    last_name: str
    email: str


class UserResponse(BaseModel):
    """Schema for user response (without password)."""

    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    phone: Optional[str] = None
    profile_image: Optional[str] = None


class UserUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None


# ============== Helper Functions ==============


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def admin_exists(db: Session) -> bool:
    return db.query(User).filter(User.role == "admin").first() is not None


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role,
        phone=user.phone,
        profile_image=file_url(user.profile_image) if user.profile_image else None,
    )


# ============== API Endpoints ==============


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(user_data: UserSignup, db: Session = Depends(get_db)):
    """
    Register a new user.

    Only one admin account may exist. Candidates get an empty profile.
    """
    if get_user_by_email(db, user_data.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_EMAIL)

    if user_data.role == "admin" and admin_exists(db):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_ADMIN)

    new_user = User(
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        role=user_data.role,
        phone=user_data.phone,
    )
    db.add(new_user)

    try:
        db.flush()
        if user_data.role == "candidate":
            db.add(
                CandidateProfile(
                    user_id=new_user.id,
                    skills=[],
                    experience=0,
                    education="",
                    location="",
                )
            )
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent signup
        db.rollback()
        if get_user_by_email(db, user_data.email) or user_data.role != "admin":
            detail = DUPLICATE_EMAIL
        else:
            detail = DUPLICATE_ADMIN
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    db.refresh(new_user)
    logger.info("User %s signed up as %s", new_user.id, new_user.role)

    return SignupResponse(user_id=new_user.id, role=new_user.role)


@router.post("/login", response_model=LoginResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """
    Login and get a signed session token.

    Uses OAuth2 password flow. Send username (email) and password as form data.
    """
    user = authenticate_user(db, form_data.username, form_data.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(
        data={"sub": user.email, "uid": user.id, "role": user.role, "name": user.full_name}
    )

    return LoginResponse(
        access_token=access_token,
        user_id=user.id,
        role=user.role,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the current authenticated user."""
    return to_user_response(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update name or phone. Only fields present in the request change."""
    for field, value in data.model_dump(exclude_none=True).items():
        setattr(current_user, field, value)

    db.commit()
    db.refresh(current_user)

    return to_user_response(current_user)
