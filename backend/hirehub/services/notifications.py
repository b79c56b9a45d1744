"""
Notification templates and fan-out dispatch.

Fan-out writes run after the triggering entity is committed. Recipients are
inserted in batches, one commit per batch; a failed batch is rolled back and
reported while the remaining batches still go out.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hirehub.core.config import settings
from hirehub.models import Notification

logger = logging.getLogger(__name__)

# status -> (title, message template)
APPLICATION_STATUS_TEMPLATES: dict[str, tuple[str, str]] = {
    "screening": (
        "Application Under Review",
        "Your application for {job_title} is now under review.",
    ),
    "interview_scheduled": (
        "Interview Scheduled",
        "Congratulations! An interview has been scheduled for {job_title}.",
    ),
    "interviewed": (
        "Interview Completed",
        "Thank you for interviewing for {job_title}. We'll be in touch soon.",
    ),
    "selected": (
        "🎉 Congratulations! You're Selected",
        "Great news! You have been selected for the {job_title} position. "
        "HR will contact you soon with next steps.",
    ),
    "rejected": (
        "Application Update",
        "Thank you for your interest in {job_title}. "
        "We've decided to move forward with other candidates.",
    ),
}


class DispatchReport(BaseModel):
    """Outcome of a notification fan-out."""

    delivered: int = 0
    failed_user_ids: list[int] = []

    @property
    def failed(self) -> int:
        return len(self.failed_user_ids)


def application_status_notification(status: str, job_title: str) -> Optional[tuple[str, str]]:
    """Title and message for a status change, or None when the status has no template."""
    template = APPLICATION_STATUS_TEMPLATES.get(status)
    if template is None:
        return None
    title, message = template
    return title, message.format(job_title=job_title)


def job_posted_notification(job_title: str, department: str) -> tuple[str, str]:
    return (
        "New Job Posted",
        f"A new {job_title} position has been posted in {department}. Check it out!",
    )


def new_application_notification(candidate_name: str, job_title: str) -> tuple[str, str]:
    return "New Job Application", f"{candidate_name} applied for {job_title}"


def requisition_created_notification(job_role: str, department: str) -> tuple[str, str]:
    return (
        "New Requisition Created",
        f"A new requisition for {job_role} in {department} has been created.",
    )


def requisition_candidate_notification(candidate_name: str, job_role: str) -> tuple[str, str]:
    return (
        "New Candidate Uploaded",
        f"A new candidate {candidate_name} has been uploaded for {job_role} position.",
    )


def interview_scheduled_notification(job_title: str, scheduled_at: str) -> tuple[str, str]:
    return (
        "Interview Scheduled",
        f"Your interview for {job_title} is scheduled for {scheduled_at}.",
    )


def dispatch_notifications(
    db: Session,
    user_ids: Iterable[int],
    *,
    title: str,
    message: str,
    type: str,
    related_id: Optional[object] = None,
    batch_size: Optional[int] = None,
) -> DispatchReport:
    """
    Insert one notification per recipient, committing in batches.

    Args:
        db: Session whose pending work has already been committed
        user_ids: Recipients; duplicates are collapsed
        title: Notification title
        message: Notification body
        type: One of the notification types
        related_id: Id of the entity the notification is about
        batch_size: Recipients per commit (defaults to NOTIFICATION_BATCH_SIZE)

    Returns:
        DispatchReport with the delivered count and failed recipients
    """
    recipients = list(dict.fromkeys(user_ids))
    size = max(batch_size or settings.NOTIFICATION_BATCH_SIZE, 1)
    related = str(related_id) if related_id is not None else None
    report = DispatchReport()

    for start in range(0, len(recipients), size):
        batch = recipients[start:start + size]
        db.add_all(
            [
                Notification(
                    user_id=user_id,
                    title=title,
                    message=message,
                    type=type,
                    related_id=related,
                    is_read=False,
                )
                for user_id in batch
            ]
        )
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Notification batch failed (type=%s, recipients=%s)", type, batch)
            report.failed_user_ids.extend(batch)
        else:
            report.delivered += len(batch)

    if recipients:
        logger.info(
            "Dispatched %s notifications (type=%s, related_id=%s): %d delivered, %d failed",
            title, type, related, report.delivered, report.failed,
        )
    return report


def notify_user(
    db: Session,
    user_id: int,
    *,
    title: str,
    message: str,
    type: str,
    related_id: Optional[object] = None,
) -> DispatchReport:
    return dispatch_notifications(
        db, [user_id], title=title, message=message, type=type, related_id=related_id
    )
