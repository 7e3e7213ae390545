"""
Authentication API endpoints.

Login with username/password and session restore from a bearer token.
"""

from fastapi import APIRouter, Depends
from dailyops.app.core.dependencies import get_auth_service, get_current_user
from dailyops.app.models.user import User
from dailyops.app.schemas.user import LoginRequest, LoginResponse
from dailyops.app.services.auth_service import AuthService

router = APIRouter(tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Login user and return a session token.

    Returns 401 if no user has exactly this username and password.
    """
    user, token = await auth.authenticate(credentials.username, credentials.password)
    return LoginResponse(user=user, token=token)


@router.get("/me", response_model=User)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """
    Get the user behind the bearer session token.

    Clients call this on page load to restore their session.
    """
    return current_user
