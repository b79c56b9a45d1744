from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from hirehub.db.base import Base


class Requisition(Base):
    """
    Internal request to hire for a role.

    Moves pending -> approved -> closed; closed is reachable from either state.
    """

    __tablename__ = "requisitions"

    id = Column(Integer, primary_key=True, index=True)
    department = Column(String, nullable=False)
    job_role = Column(String, nullable=False)
    experience_required = Column(Float, default=0)
    number_of_positions = Column(Integer, default=1)
    skills_required = Column(JSON, default=list)
    jd_file_url = Column(String, nullable=True)
    description = Column(Text, nullable=True)

    status = Column(String, default="pending", index=True)  # pending | approved | closed
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    approved_at = Column(DateTime, nullable=True)

    # Relationships
    creator = relationship("User", foreign_keys=[created_by])
    approver = relationship("User", foreign_keys=[approved_by])
    candidates = relationship("RequisitionCandidate", back_populates="requisition")


class RequisitionCandidate(Base):
    """Resume submitted against an approved requisition."""

    __tablename__ = "requisition_candidates"

    id = Column(Integer, primary_key=True, index=True)
    requisition_id = Column(Integer, ForeignKey("requisitions.id"), index=True, nullable=False)

    candidate_name = Column(String, nullable=False)
    candidate_email = Column(String, nullable=True)
    candidate_phone = Column(String, nullable=True)
    skills = Column(JSON, default=list)
    experience = Column(Float, default=0)
    resume_url = Column(String, nullable=False)
    notes = Column(Text, nullable=True)

    status = Column(String, default="submitted")  # submitted | shortlisted | interviewed | selected | rejected
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    reviewed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)

    # Relationships
    requisition = relationship("Requisition", back_populates="candidates")
    uploader = relationship("User", foreign_keys=[uploaded_by])
    reviewer = relationship("User", foreign_keys=[reviewed_by])
