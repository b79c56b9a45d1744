from datetime import datetime

from sqlalchemy import Column, DateTime, Index, Integer, String, text
from sqlalchemy.orm import relationship

from hirehub.db.base import Base

STAFF_ROLES = ("admin", "hr")


class User(Base):
    """User model for authentication and authorization."""

    __tablename__ = "users"
    __table_args__ = (
        # Only one admin account may exist system-wide
        Index(
            "uq_users_single_admin",
            "role",
            unique=True,
            sqlite_where=text("role = 'admin'"),
            postgresql_where=text("role = 'admin'"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    role = Column(String, nullable=False, index=True)  # 'admin' | 'hr' | 'candidate'
    phone = Column(String, nullable=True)
    profile_image = Column(String, nullable=True)  # synthetic storage id
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    candidate_profile = relationship(
        "CandidateProfile", back_populates="user", uselist=False
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
