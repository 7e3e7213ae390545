"""
Centralized Test Configuration.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from dailyops.app.main import app
from dailyops.app.db.document_store import DatabaseBackend, JsonFileBackend
from dailyops.app.db.registry import CollectionRegistry, get_registry
from dailyops.app.services.report_lifecycle import ReportLifecycle
from dailyops.app.services.report_service import ReportService
from dailyops.app.services.task_service import TaskService
from dailyops.app.services.user_service import UserService

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "server-data"


@pytest.fixture
async def registry(data_dir):
    """Seeded collections stored as JSON files in a temporary directory."""
    registry = CollectionRegistry(JsonFileBackend(data_dir))
    await registry.initialize()
    yield registry
    await registry.close()


@pytest.fixture
async def db_registry():
    """Seeded collections stored in an in-memory SQLite database."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    registry = CollectionRegistry(DatabaseBackend(engine))
    await registry.initialize()
    yield registry
    await registry.close()


@pytest.fixture
def user_service(registry):
    return UserService(registry.users)


@pytest.fixture
def task_service(registry):
    return TaskService(registry.tasks)


@pytest.fixture
def report_service(registry):
    return ReportService(registry.daily_reports)


@pytest.fixture
def lifecycle(report_service, task_service, user_service):
    return ReportLifecycle(report_service, task_service, user_service)


@pytest.fixture
async def client(registry):
    """Async client for testing, bound to the temporary collections."""
    app.dependency_overrides[get_registry] = lambda: registry
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}

