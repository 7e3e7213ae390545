"""
Tests for the document store.

Covers shallow-merge updates, delete semantics, read fallback, write
failures, the on-disk layout and per-collection serialization of writes.
"""

import asyncio
import json
import pytest

from dailyops.app.core.exceptions import DuplicateValueError, PersistenceError, RecordValidationError
from dailyops.app.db.document_store import DocumentStore, JsonFileBackend
from dailyops.app.db.seed import default_tasks
from dailyops.app.db.registry import CollectionRegistry
from dailyops.app.models.enums import UserRole
from dailyops.app.models.task import Task
from dailyops.app.schemas.task import TaskCreate


def new_user(username="checker", **overrides):
    data = {
        "username": username,
        "password": "secret",
        "role": UserRole.MANAGER,
        "full_name": "Check Er",
        "email": f"{username}@example.com",
        "created_at": "2025-01-15T08:00:00Z",
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_insert_assigns_fresh_ids(registry):
    """Every insert gets its own URL-safe id."""
    first = await registry.users.insert(new_user("first"))
    second = await registry.users.insert(new_user("second"))

    assert first.id != second.id
    assert first.id.isalnum()
    assert await registry.users.get(first.id) == first


@pytest.mark.asyncio
async def test_update_merges_named_fields_only(registry):
    """Fields in the patch are overwritten, all others kept; applying twice changes nothing more."""
    user = await registry.users.insert(new_user())

    once = await registry.users.update(user.id, {"full_name": "Renamed"})
    twice = await registry.users.update(user.id, {"full_name": "Renamed"})

    assert once.full_name == "Renamed"
    assert once.username == user.username
    assert once.email == user.email
    assert once.created_at == user.created_at
    assert once == twice


@pytest.mark.asyncio
async def test_update_accepts_wire_field_names(registry):
    user = await registry.users.insert(new_user())

    updated = await registry.users.update(user.id, {"fullName": "From Client"})

    assert updated.full_name == "From Client"


@pytest.mark.asyncio
async def test_update_never_changes_id(registry):
    user = await registry.users.insert(new_user())

    updated = await registry.users.update(user.id, {"id": "hijacked", "email": "new@example.com"})

    assert updated.id == user.id
    assert await registry.users.get("hijacked") is None


@pytest.mark.asyncio
async def test_update_replaces_nested_lists_wholesale(registry):
    """A patched ``tasks`` list replaces the stored list; entries are not merged."""
    report = await registry.daily_reports.insert({
        "user_id": "3",
        "date": "2025-01-15",
        "tasks": [
            {"task_id": "1", "status": "in_progress", "notes": "keep?"},
            {"task_id": "2"},
        ],
    })

    updated = await registry.daily_reports.update(report.id, {"tasks": [{"task_id": "2", "status": "completed"}]})

    assert [progress.task_id for progress in updated.tasks] == ["2"]
    assert updated.tasks[0].status.value == "completed"
    assert updated.user_id == "3"


@pytest.mark.asyncio
async def test_update_missing_record_returns_none(registry):
    assert await registry.tasks.update("missing", {"title": "Nope"}) is None


@pytest.mark.asyncio
async def test_update_rejects_invalid_shape(registry):
    """A merge that breaks the record schema is refused and nothing is written."""
    task = (await registry.tasks.list())[0]

    with pytest.raises(RecordValidationError):
        await registry.tasks.update(task.id, {"order": "first"})

    assert (await registry.tasks.get(task.id)).order == task.order


@pytest.mark.asyncio
async def test_delete_missing_record_leaves_collection_unchanged(registry):
    before = await registry.users.list()

    assert await registry.users.delete("does-not-exist") is False

    assert len(await registry.users.list()) == len(before)


@pytest.mark.asyncio
async def test_delete_existing_record(registry):
    user = await registry.users.insert(new_user())

    assert await registry.users.delete(user.id) is True
    assert await registry.users.get(user.id) is None


@pytest.mark.asyncio
async def test_query_returns_all_matches(registry):
    await registry.users.insert(new_user("m1"))
    await registry.users.insert(new_user("m2"))

    managers = await registry.users.query(lambda user: user.role == UserRole.MANAGER)

    assert {user.username for user in managers} == {"managersiz", "m1", "m2"}


@pytest.mark.asyncio
async def test_username_must_be_unique(registry):
    await registry.users.insert(new_user("taken"))

    with pytest.raises(DuplicateValueError):
        await registry.users.insert(new_user("taken"))

    other = await registry.users.insert(new_user("other"))
    with pytest.raises(DuplicateValueError):
        await registry.users.update(other.id, {"username": "taken"})


@pytest.mark.asyncio
async def test_collections_are_pretty_printed_camel_case_arrays(registry, data_dir):
    """One JSON array per collection, keyed the way the web client expects."""
    await registry.users.insert(new_user("ondisk"))

    text = (data_dir / "users.json").read_text(encoding="utf-8")
    documents = json.loads(text)

    assert isinstance(documents, list)
    assert "\n  " in text
    stored = next(doc for doc in documents if doc["username"] == "ondisk")
    assert stored["fullName"] == "Check Er"
    assert "createdAt" in stored
    assert "lastLogin" not in stored
    assert (data_dir / "tasks.json").exists()
    assert json.loads((data_dir / "daily-reports.json").read_text(encoding="utf-8")) == []


@pytest.mark.asyncio
async def test_missing_collection_is_created_with_defaults(tmp_path):
    registry = CollectionRegistry(JsonFileBackend(tmp_path))

    tasks = await registry.tasks.list()

    assert len(tasks) == 2
    assert (tmp_path / "tasks.json").exists()


@pytest.mark.asyncio
async def test_unreadable_collection_falls_back_to_defaults(registry, data_dir):
    """A corrupt file is served as the defaults and left untouched on disk."""
    path = data_dir / "users.json"
    path.write_text("{not json", encoding="utf-8")

    users = await registry.users.list()

    assert [user.username for user in users] == ["superadmin", "adminokk", "managersiz"]
    assert path.read_text(encoding="utf-8") == "{not json"


@pytest.mark.asyncio
async def test_invalid_elements_are_skipped(registry, data_dir):
    path = data_dir / "tasks.json"
    path.write_text(json.dumps([
        {"id": "1", "title": "Valid", "description": "", "required": True, "order": 1},
        {"id": "2", "order": "broken"},
    ]), encoding="utf-8")

    tasks = await registry.tasks.list()

    assert [task.id for task in tasks] == ["1"]


@pytest.mark.asyncio
async def test_write_failure_is_reported(registry, mocker):
    """A failed write raises PersistenceError and the previous snapshot stays."""
    before = await registry.tasks.list()
    mocker.patch.object(registry.backend, "save", side_effect=OSError("disk full"))

    with pytest.raises(PersistenceError) as exc_info:
        await registry.tasks.insert({"title": "Lost", "order": 3})

    assert exc_info.value.status_code == 500
    mocker.stopall()
    assert await registry.tasks.list() == before


@pytest.mark.asyncio
async def test_concurrent_inserts_do_not_lose_updates(registry):
    """Writes to one collection are serialized, so every insert survives."""
    await asyncio.gather(*[
        registry.tasks.insert({"title": f"Check {i}", "order": 10 + i})
        for i in range(20)
    ])

    assert len(await registry.tasks.list()) == 22


@pytest.mark.asyncio
async def test_reset_restores_defaults(registry):
    await registry.users.insert(new_user("temporary"))
    await registry.daily_reports.insert({"user_id": "3", "date": "2025-01-15"})

    await registry.reset()

    assert len(await registry.users.list()) == 3
    assert len(await registry.tasks.list()) == 2
    assert await registry.daily_reports.list() == []


@pytest.mark.asyncio
async def test_database_backend_keeps_one_document_per_collection(db_registry):
    """The SQL backend behaves like the file backend and persists across registries."""
    user = await db_registry.users.insert(new_user("sql"))
    await db_registry.users.update(user.id, {"email": "sql@db.example.com"})

    reopened = CollectionRegistry(db_registry.backend)
    stored = await reopened.users.get(user.id)

    assert stored.email == "sql@db.example.com"
    assert len(await reopened.users.list()) == 4
    assert await reopened.users.delete("missing") is False


@pytest.mark.asyncio
async def test_user_lookup_by_username(user_service):
    user = await user_service.get_by_username("managersiz")

    assert user.id == "3"
    assert await user_service.get_by_username("ghost") is None


@pytest.mark.asyncio
async def test_first_read_and_insert_on_missing_collection(db_registry):
    """Seeding a missing collection and a concurrent insert both survive."""
    store = DocumentStore("checks", Task, db_registry.backend, default_tasks)

    listed, inserted = await asyncio.gather(
        store.list(),
        store.insert({"title": "Vault", "order": 3}),
    )

    stored = await store.list()
    assert {task.id for task in stored} == {"1", "2", inserted.id}
    assert len(listed) in (2, 3)


@pytest.mark.asyncio
async def test_concurrent_task_creation_gets_distinct_orders(task_service):
    """The next order is computed under the collection lock."""
    created = await asyncio.gather(*[
        task_service.create_task(TaskCreate(title=f"Check {i}")) for i in range(5)
    ])

    assert sorted(task.order for task in created) == [3, 4, 5, 6, 7]
