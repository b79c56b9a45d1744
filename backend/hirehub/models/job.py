from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from hirehub.db.base import Base


class Job(Base):
    """Public job posting created by HR/admin."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    department = Column(String, nullable=False, index=True)
    experience_required = Column(Float, default=0)  # years

    salary_min = Column(Float, default=0)
    salary_max = Column(Float, default=0)
    currency = Column(String, default="INR")  # "USD", "INR", ...

    location = Column(String, default="")
    required_skills = Column(JSON, default=list)
    status = Column(String, default="active", index=True)  # 'active' | 'closed'

    posted_by = Column(Integer, ForeignKey("users.id"), index=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    deadline = Column(DateTime, nullable=True)

    # Relationships
    poster = relationship("User")
    applications = relationship("Application", back_populates="job")
