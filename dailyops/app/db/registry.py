"""
Process-wide collection registry.

Bundles the three document stores over one storage backend and owns their
lifecycle: ``initialize`` (seed-if-absent, once at startup) and ``reset``
(rewrite every collection with its seed values, on demand).
"""

import logging
from typing import Optional
from dailyops.app.core.config import Settings, settings as default_settings
from dailyops.app.db.document_store import DatabaseBackend, DocumentStore, JsonFileBackend, StorageBackend
from dailyops.app.db.seed import default_tasks, default_users
from dailyops.app.db.session import create_engine
from dailyops.app.models.daily_report import DailyReport
from dailyops.app.models.task import Task
from dailyops.app.models.user import User

logger = logging.getLogger("dailyops.store")

USERS_COLLECTION = "users"
TASKS_COLLECTION = "tasks"
DAILY_REPORTS_COLLECTION = "daily-reports"


class CollectionRegistry:
    """The users, tasks and daily-reports stores sharing one backend."""

    def __init__(self, backend: StorageBackend):
        self.backend = backend
        self.users: DocumentStore[User] = DocumentStore(
            USERS_COLLECTION, User, backend, default_users, unique_fields=("username",)
        )
        self.tasks: DocumentStore[Task] = DocumentStore(TASKS_COLLECTION, Task, backend, default_tasks)
        self.daily_reports: DocumentStore[DailyReport] = DocumentStore(DAILY_REPORTS_COLLECTION, DailyReport, backend)

    @property
    def stores(self):
        return (self.users, self.tasks, self.daily_reports)

    async def initialize(self) -> None:
        """Create every missing collection with its defaults."""
        for store in self.stores:
            records = await store.list()
            logger.info("Collection %s ready (%d record(s))", store.name, len(records))

    async def reset(self) -> None:
        """Rewrite every collection with its defaults."""
        for store in self.stores:
            await store.reset()
        logger.warning("All collections were reset to defaults")

    async def close(self) -> None:
        await self.backend.close()


def build_backend(config: Settings) -> StorageBackend:
    if config.storage_backend == "database":
        return DatabaseBackend(create_engine(config.database_url))
    return JsonFileBackend(config.data_dir)


_registry: Optional[CollectionRegistry] = None


def get_registry() -> CollectionRegistry:
    """
    FastAPI dependency returning the process-wide registry.

    The registry is built from settings on first use.
    """
    global _registry
    if _registry is None:
        _registry = CollectionRegistry(build_backend(default_settings))
    return _registry


async def close_registry() -> None:
    global _registry
    if _registry is not None:
        await _registry.close()
        _registry = None
