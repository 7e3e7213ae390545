"""
Authentication check.

Compares credentials against the users collection and issues/resolves
session tokens. Passwords are compared as plain text; this is an identity
claim for a small internal tool, not a security boundary.
"""

import logging
from typing import Tuple

from dailyops.app.core.exceptions import InvalidCredentialsError, PersistenceError, ResourceNotFoundError
from dailyops.app.core.jwt import create_session_token, decode_session_token
from dailyops.app.models.user import User
from dailyops.app.services.user_service import UserService

logger = logging.getLogger("dailyops.auth")


class AuthService:

    def __init__(self, users: UserService):
        self.users = users

    async def authenticate(self, username: str, password: str) -> Tuple[User, str]:
        """
        Log a user in.

        On success the user's ``lastLogin`` is stamped and a session token is
        issued. A failure to persist ``lastLogin`` is logged and does not
        fail the login.

        Raises:
            InvalidCredentialsError: If no user has this exact username and password
        """
        matches = await self.users.store.query(
            lambda user: user.username == username and user.password == password
        )
        if not matches:
            logger.warning("Failed login attempt for username %r", username)
            raise InvalidCredentialsError()

        user = matches[0]
        try:
            user = await self.users.record_login(user.id) or user
        except PersistenceError:
            logger.warning("Could not record last login for user %s", user.id)

        token = create_session_token(user.id, user.role.value)
        logger.info("User %s logged in", user.username)
        return user, token

    def resolve_token(self, token: str) -> str:
        """
        Return the user ID carried by a session token.

        Raises:
            InvalidTokenError: If the token cannot be decoded
        """
        return decode_session_token(token)["userId"]

    async def get_session_user(self, token: str) -> User:
        """
        Resolve a token and re-fetch its user.

        Raises:
            InvalidTokenError: If the token cannot be decoded
            ResourceNotFoundError: If the user no longer exists
        """
        user_id = self.resolve_token(token)
        user = await self.users.get_user(user_id)
        if user is None:
            raise ResourceNotFoundError("User", user_id)
        return user
