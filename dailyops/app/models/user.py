"""
User record.
"""

from datetime import datetime
from typing import Optional
from dailyops.app.models.base import Record
from dailyops.app.models.enums import UserRole


class User(Record):
    """
    An account of the reporting system.

    The password is stored and compared as plain text, exactly as the
    existing data files hold it.
    """
    username: str
    password: str
    role: UserRole
    full_name: str
    email: str
    created_at: datetime
    last_login: Optional[datetime] = None

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role.value}')>"
