"""
Session token utilities.

A session token is a JWT carrying the identity claim ``{userId, role, time}``.
The claims stay readable by any client; the signature only guards against
tampering. Tokens carry no expiry and stay valid until the client drops them.
"""

import time
from typing import Dict, Any
from jose import JWTError, jwt
from dailyops.app.core.config import settings
from dailyops.app.core.exceptions import InvalidTokenError


def create_session_token(user_id: str, role: str, issued_at_ms: int = None) -> str:
    """
    Create a session token for a user.

    Args:
        user_id: ID of the authenticated user
        role: Role value of the user (e.g. "manager")
        issued_at_ms: Issue time in epoch milliseconds (defaults to now)

    Returns:
        Encoded token string

    Example payload:
        {
            "userId": "3",
            "role": "manager",
            "time": 1735689600000
        }
    """
    payload = {
        "userId": user_id,
        "role": role,
        "time": issued_at_ms if issued_at_ms is not None else int(time.time() * 1000),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_session_token(token: str) -> Dict[str, Any]:
    """
    Decode a session token.

    Raises:
        InvalidTokenError: If the token is malformed, tampered with,
            or does not carry a user ID.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise InvalidTokenError()

    if not payload.get("userId"):
        raise InvalidTokenError("Invalid token payload")

    return payload
