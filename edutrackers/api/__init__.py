"""HTTP API routers, mounted under ``/api``."""

from fastapi import APIRouter

from edutrackers.api import (
    announcements,
    assignments,
    auth,
    dashboard,
    payments,
    profiles,
    results,
    storage,
    submissions,
)

router = APIRouter(prefix="/api")

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
router.include_router(assignments.router, prefix="/assignments", tags=["assignments"])
router.include_router(submissions.router, prefix="/submissions", tags=["submissions"])
router.include_router(results.router, prefix="/results", tags=["results"])
router.include_router(payments.router, prefix="/payments", tags=["payments"])
router.include_router(announcements.router, prefix="/announcements", tags=["announcements"])
router.include_router(storage.router, prefix="/storage", tags=["storage"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
