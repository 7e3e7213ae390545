"""
User API endpoints.

CRUD over the users collection. Creating a user stamps ``id`` and
``createdAt``; updates merge the provided fields.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query, status
from dailyops.app.core.dependencies import get_user_service
from dailyops.app.core.exceptions import ResourceNotFoundError
from dailyops.app.models.enums import UserRole
from dailyops.app.models.user import User
from dailyops.app.schemas.common import SuccessResponse
from dailyops.app.schemas.user import UserCreate, UserUpdate
from dailyops.app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[User])
async def list_users(
    role: Optional[UserRole] = Query(None, description="Only users with this role"),
    users: UserService = Depends(get_user_service)
):
    """List all users, optionally filtered by role (e.g. the managers roster)."""
    return await users.list_users(role)


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: str = Path(..., description="User ID"),
    users: UserService = Depends(get_user_service)
):
    user = await users.get_user(user_id)
    if not user:
        raise ResourceNotFoundError("User", user_id)
    return user


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    users: UserService = Depends(get_user_service)
):
    """
    Create a user.

    Usernames are unique; a taken username is rejected with 400.
    """
    return await users.create_user(user_data)


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_data: UserUpdate,
    user_id: str = Path(..., description="User ID"),
    users: UserService = Depends(get_user_service)
):
    """Merge the provided fields into the user."""
    user = await users.update_user(user_id, user_data)
    if not user:
        raise ResourceNotFoundError("User", user_id)
    return user


@router.delete("/{user_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_user(
    user_id: str = Path(..., description="User ID"),
    users: UserService = Depends(get_user_service)
):
    if not await users.delete_user(user_id):
        raise ResourceNotFoundError("User", user_id)
    return SuccessResponse(success=True)
