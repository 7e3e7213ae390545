"""
Default contents of the collections.

Used to create missing collections on first access and by the reset
operation. Passwords are stored as plain text.
"""

from datetime import datetime, timezone
from typing import List
from dailyops.app.models.enums import UserRole
from dailyops.app.models.task import Task
from dailyops.app.models.user import User


def default_users() -> List[User]:
    """One account per role."""
    now = datetime.now(timezone.utc)
    return [
        User(
            id="1",
            username="superadmin",
            password="qwefscaghev12",
            role=UserRole.SUPER_ADMIN,
            full_name="Главный Администратор",
            email="superadmin@example.com",
            created_at=now,
        ),
        User(
            id="2",
            username="adminokk",
            password="okk2025",
            role=UserRole.ADMIN,
            full_name="ОКК",
            email="admin@example.com",
            created_at=now,
        ),
        User(
            id="3",
            username="managersiz",
            password="siz2025",
            role=UserRole.MANAGER,
            full_name="Сизиков Игорь",
            email="manager@example.com",
            created_at=now,
        ),
    ]


def default_tasks() -> List[Task]:
    return [
        Task(
            id="1",
            title="Проверка счетов по юр. лицам",
            description="Проверить все счета юридических лиц за текущий месяц",
            required=True,
            order=1,
        ),
        Task(
            id="2",
            title="Обработка новых заявок",
            description="Просмотреть и обработать новые заявки от клиентов",
            required=True,
            order=2,
        ),
    ]
