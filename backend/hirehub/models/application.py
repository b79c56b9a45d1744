from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from hirehub.db.base import Base


class Application(Base):
    """
    A candidate's submission against a job.

    The (job_id, candidate_id) pair is unique at the database level so two
    concurrent applies cannot both be stored.
    """

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("job_id", "candidate_id", name="uq_applications_job_candidate"),
    )

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), index=True, nullable=False)
    candidate_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    status = Column(String, default="applied", index=True)  # applied -> screening -> interview_scheduled -> interviewed -> selected | rejected
    applied_at = Column(DateTime, default=datetime.utcnow, index=True)
    cover_letter = Column(Text, nullable=True)
    match_percentage = Column(Integer, nullable=True)

    # Review trail (HR/admin who last changed the status)
    reviewed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    review_notes = Column(Text, nullable=True)

    # Relationships
    job = relationship("Job", back_populates="applications")
    candidate = relationship("User", foreign_keys=[candidate_id])
    interviews = relationship("Interview", back_populates="application")
