"""
User Service.

Typed access to the users collection.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from dailyops.app.db.document_store import DocumentStore
from dailyops.app.models.enums import UserRole
from dailyops.app.models.user import User
from dailyops.app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger("dailyops")


class UserService:

    def __init__(self, store: DocumentStore[User]):
        self.store = store

    async def list_users(self, role: Optional[UserRole] = None) -> List[User]:
        if role is None:
            return await self.store.list()
        return await self.store.query(lambda user: user.role == role)

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self.store.get(user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        matches = await self.store.query(lambda user: user.username == username)
        return matches[0] if matches else None

    async def create_user(self, user_data: UserCreate) -> User:
        """Create a user, stamping ``id`` and ``createdAt``."""
        user = await self.store.insert({
            **user_data.model_dump(),
            "created_at": datetime.now(timezone.utc),
        })
        logger.info("Created user %s (%s)", user.username, user.role.value)
        return user

    async def update_user(self, user_id: str, user_data: UserUpdate) -> Optional[User]:
        """Merge the provided fields into the user; None if it does not exist."""
        return await self.store.update(user_id, user_data.model_dump(exclude_unset=True))

    async def record_login(self, user_id: str) -> Optional[User]:
        return await self.store.update(user_id, {"last_login": datetime.now(timezone.utc)})

    async def delete_user(self, user_id: str) -> bool:
        deleted = await self.store.delete(user_id)
        if deleted:
            logger.info("Deleted user %s", user_id)
        return deleted
