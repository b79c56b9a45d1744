from hirehub.services.matching import compute_match, rank_candidates
from hirehub.services.currency import convert_currency
from hirehub.services.notifications import (
    DispatchReport,
    application_status_notification,
    dispatch_notifications,
    notify_user,
)
from hirehub.services.storage import UploadRejected, file_url, store_profile_image, store_resume

__all__ = [
    "compute_match",
    "rank_candidates",
    "convert_currency",
    "DispatchReport",
    "application_status_notification",
    "dispatch_notifications",
    "notify_user",
    "UploadRejected",
    "file_url",
    "store_profile_image",
    "store_resume",
]
