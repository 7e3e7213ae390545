"""
Service dependencies for FastAPI.

Every service is built on the process-wide collection registry, so tests
can swap the storage medium by overriding ``get_registry``.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from dailyops.app.core.exceptions import InvalidTokenError
from dailyops.app.db.registry import CollectionRegistry, get_registry
from dailyops.app.models.user import User
from dailyops.app.services.auth_service import AuthService
from dailyops.app.services.report_lifecycle import ReportLifecycle
from dailyops.app.services.report_service import ReportService
from dailyops.app.services.task_service import TaskService
from dailyops.app.services.user_service import UserService

# HTTP Bearer security scheme (missing header handled below)
security = HTTPBearer(auto_error=False)


def get_user_service(registry: CollectionRegistry = Depends(get_registry)) -> UserService:
    return UserService(registry.users)


def get_task_service(registry: CollectionRegistry = Depends(get_registry)) -> TaskService:
    return TaskService(registry.tasks)


def get_report_service(registry: CollectionRegistry = Depends(get_registry)) -> ReportService:
    return ReportService(registry.daily_reports)


def get_report_lifecycle(
    reports: ReportService = Depends(get_report_service),
    tasks: TaskService = Depends(get_task_service),
    users: UserService = Depends(get_user_service),
) -> ReportLifecycle:
    return ReportLifecycle(reports, tasks, users)


def get_auth_service(users: UserService = Depends(get_user_service)) -> AuthService:
    return AuthService(users)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """
    Resolve the bearer session token to the stored user.

    Raises:
        InvalidTokenError: 401 if the header is missing or the token is invalid
        ResourceNotFoundError: 404 if the user was deleted
    """
    if credentials is None:
        raise InvalidTokenError("Not authenticated")
    return await auth.get_session_user(credentials.credentials)
