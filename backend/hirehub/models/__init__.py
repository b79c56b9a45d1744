from hirehub.models.user import User
from hirehub.models.candidate import CandidateProfile
from hirehub.models.job import Job
from hirehub.models.application import Application
from hirehub.models.interview import Interview
from hirehub.models.notification import Notification
from hirehub.models.requisition import Requisition, RequisitionCandidate
from hirehub.models.feedback import Feedback
from hirehub.models.master_data import Department, JobRole

__all__ = [
    "User",
    "CandidateProfile",
    "Job",
    "Application",
    "Interview",
    "Notification",
    "Requisition",
    "RequisitionCandidate",
    "Feedback",
    "Department",
    "JobRole",
]
