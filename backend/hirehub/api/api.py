"""
API Router Aggregator.

Combines all v1 API routers into a single router for the main app.
"""

from fastapi import APIRouter

from hirehub.api.v1 import (
    applications,
    auth,
    candidates,
    dashboard,
    feedback,
    files,
    interviews,
    jobs,
    master_data,
    notifications,
    requisitions,
)

api_router = APIRouter()

# Include all v1 routers with their prefixes and tags
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(candidates.router, prefix="/candidates", tags=["Candidates"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["Jobs"])
api_router.include_router(applications.router, prefix="/applications", tags=["Applications"])
api_router.include_router(interviews.router, prefix="/interviews", tags=["Interviews"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["Feedback"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["Notifications"])
api_router.include_router(requisitions.router, prefix="/requisitions", tags=["Requisitions"])
api_router.include_router(files.router, prefix="/files", tags=["Files"])
api_router.include_router(master_data.router, prefix="/master-data", tags=["Master Data"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
