"""
API Router.

Aggregates all resource endpoints.
"""

from fastapi import APIRouter
from dailyops.app.api.endpoints import admin, auth, daily_reports, tasks, users

router = APIRouter()

router.include_router(auth.router)
router.include_router(users.router)
router.include_router(tasks.router)
router.include_router(daily_reports.router)
router.include_router(admin.router)
