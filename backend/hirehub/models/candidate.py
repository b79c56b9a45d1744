from sqlalchemy import Column, Float, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import relationship

from hirehub.db.base import Base


class CandidateProfile(Base):
    """Candidate profile: one per user with role 'candidate'."""

    __tablename__ = "candidate_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    # Example: ["Python", "React"]
    skills = Column(JSON, default=list)
    experience = Column(Float, default=0)  # years
    education = Column(String, default="")
    location = Column(String, default="")

    resume_id = Column(String, nullable=True)
    summary = Column(String, nullable=True)
    linkedin_url = Column(String, nullable=True)
    github_url = Column(String, nullable=True)

    # Relationships
    user = relationship("User", back_populates="candidate_profile")
