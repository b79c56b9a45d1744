from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from hirehub.db.base import Base


class Interview(Base):
    """Interview slot attached to an application."""

    __tablename__ = "interviews"

    id = Column(Integer, primary_key=True, index=True)
    application_id = Column(Integer, ForeignKey("applications.id"), index=True, nullable=False)
    scheduled_at = Column(DateTime, nullable=False, index=True)
    interviewer_name = Column(String, nullable=False)
    interviewer_email = Column(String, nullable=False)
    meeting_link = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String, default="scheduled")  # scheduled | completed | cancelled | rescheduled
    created_at = Column(DateTime, default=datetime.utcnow)

    application = relationship("Application", back_populates="interviews")
