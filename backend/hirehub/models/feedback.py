from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from hirehub.db.base import Base


class Feedback(Base):
    """
    Interviewer scorecard.

    Five 1-5 ratings plus free-text strengths, weaknesses and a recommendation.
    """

    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True)
    interview_id = Column(Integer, ForeignKey("interviews.id"), index=True)
    candidate_id = Column(Integer, ForeignKey("candidate_profiles.id"), index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), index=True)
    interviewer_name = Column(String, nullable=False)

    overall_rating = Column(Integer, nullable=False)
    technical_skills = Column(Integer, nullable=False)
    communication_skills = Column(Integer, nullable=False)
    problem_solving = Column(Integer, nullable=False)
    cultural_fit = Column(Integer, nullable=False)

    strengths = Column(Text, default="")
    weaknesses = Column(Text, default="")
    recommendation = Column(String, default="")  # free text, e.g. "Strong Hire"
    additional_comments = Column(Text, nullable=True)

    submitted_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)
