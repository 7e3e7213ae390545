"""
Document store over named JSON collections.

Each collection is persisted as one durable document: a pretty-printed JSON
array of its records, rewritten wholesale on every mutation. Two backends
hold those documents: a directory of ``<collection>.json`` files, or one row
per collection in a SQL table.

Failure semantics:
    - Write errors raise ``PersistenceError`` and leave the previous
      snapshot in place.
    - Read errors are logged and the collection's default contents are
      served instead (without overwriting the unreadable document). This
      keeps the service available at the cost of strict durability.

Every mutation runs its read-modify-write under a per-collection
``asyncio.Lock``, so concurrent requests inside one process cannot lose
each other's updates. Several processes sharing one medium are not
coordinated: the last full snapshot written wins.

``JsonFileBackend`` reads and writes files with blocking calls from inside
its coroutines. Collections hold tens to hundreds of records, so a call
stalls the event loop for well under a millisecond.
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from dailyops.app.core.exceptions import DuplicateValueError, PersistenceError, RecordValidationError
from dailyops.app.core.identity import new_id
from dailyops.app.db.session import Base, create_session_factory
from dailyops.app.models.base import Record
from dailyops.app.models.collection_document import CollectionDocument

logger = logging.getLogger("dailyops.store")

RecordT = TypeVar("RecordT", bound=Record)

# Errors a backend may raise while reading or writing a document
STORAGE_ERRORS = (OSError, ValueError, TypeError, SQLAlchemyError)


def dump_documents(documents: List[Dict[str, Any]]) -> str:
    return json.dumps(documents, indent=2, ensure_ascii=False)


class StorageBackend:
    """Durable medium holding one JSON array per collection name."""

    async def load(self, name: str) -> Optional[Any]:
        """Return the decoded document, or None if the collection is absent."""
        raise NotImplementedError

    async def save(self, name: str, documents: List[Dict[str, Any]]) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        pass


class JsonFileBackend(StorageBackend):
    """Stores each collection in ``<data_dir>/<name>.json``."""

    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    async def load(self, name: str) -> Optional[Any]:
        path = self.path_for(name)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    async def save(self, name: str, documents: List[Dict[str, Any]]) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(name)
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_text(dump_documents(documents), encoding="utf-8")
        os.replace(tmp_path, path)


class DatabaseBackend(StorageBackend):
    """Stores each collection as one row of ``collection_documents``."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = create_session_factory(engine)
        self._schema_ready = False

    async def ensure_schema(self) -> None:
        if self._schema_ready:
            return
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._schema_ready = True

    async def load(self, name: str) -> Optional[Any]:
        await self.ensure_schema()
        async with self.session_factory() as session:
            row = await session.get(CollectionDocument, name)
            if row is None:
                return None
            return json.loads(row.payload)

    async def save(self, name: str, documents: List[Dict[str, Any]]) -> None:
        await self.ensure_schema()
        payload = dump_documents(documents)
        async with self.session_factory() as session:
            row = await session.get(CollectionDocument, name)
            if row is None:
                session.add(CollectionDocument(name=name, payload=payload))
            else:
                row.payload = payload
            await session.commit()

    async def close(self) -> None:
        await self.engine.dispose()


class DocumentStore(Generic[RecordT]):
    """
    Keyed collection of typed records.

    Args:
        name: Collection name (also the document name on the medium)
        model: Record class every element is validated against
        backend: Durable medium
        default_factory: Returns the records a missing collection starts with
        unique_fields: Fields whose values may not repeat across records
    """

    def __init__(
        self,
        name: str,
        model: Type[RecordT],
        backend: StorageBackend,
        default_factory: Callable[[], List[RecordT]] = list,
        unique_fields: Tuple[str, ...] = (),
    ):
        self.name = name
        self.model = model
        self.backend = backend
        self.default_factory = default_factory
        self.unique_fields = unique_fields
        self._lock = asyncio.Lock()
        self._field_names = {
            (field.alias or field_name): field_name
            for field_name, field in model.model_fields.items()
        }

    # Serialization

    def _dump(self, record: RecordT) -> Dict[str, Any]:
        return record.model_dump(mode="json", by_alias=True, exclude_none=True)

    def _validate(self, data: Dict[str, Any]) -> RecordT:
        try:
            return self.model.model_validate(data)
        except ValidationError as exc:
            raise RecordValidationError(self.name, exc.errors(include_url=False, include_context=False))

    def _parse(self, documents: List[Any]) -> List[RecordT]:
        records = []
        for document in documents:
            try:
                records.append(self.model.model_validate(document))
            except ValidationError as exc:
                logger.error("Skipping invalid %s record %r: %s", self.name, document, exc)
        return records

    # Medium access

    async def _load(self) -> Tuple[List[RecordT], bool]:
        """Return ``(records, absent)``; never writes."""
        try:
            documents = await self.backend.load(self.name)
        except STORAGE_ERRORS as exc:
            logger.error("Failed to read %s, serving defaults: %s", self.name, exc)
            return list(self.default_factory()), False

        if documents is None:
            return list(self.default_factory()), True

        if not isinstance(documents, list):
            logger.error("Stored %s is not a JSON array, serving defaults", self.name)
            return list(self.default_factory()), False

        return self._parse(documents), False

    async def _read_locked(self) -> List[RecordT]:
        """Read the collection, creating it with its defaults if absent. Caller holds the lock."""
        records, absent = await self._load()
        if absent:
            try:
                await self.backend.save(self.name, [self._dump(r) for r in records])
                logger.info("Initialized %s with %d default record(s)", self.name, len(records))
            except STORAGE_ERRORS as exc:
                logger.error("Failed to initialize %s: %s", self.name, exc)
        return records

    async def _read(self) -> List[RecordT]:
        records, absent = await self._load()
        if not absent:
            return records
        async with self._lock:
            return await self._read_locked()

    async def _write(self, records: List[RecordT]) -> None:
        try:
            await self.backend.save(self.name, [self._dump(r) for r in records])
        except STORAGE_ERRORS as exc:
            logger.error("Failed to write %s: %s", self.name, exc)
            raise PersistenceError(self.name, str(exc)) from exc

    def _merge(self, record: RecordT, patch: Dict[str, Any]) -> RecordT:
        merged = record.model_dump()
        for key, value in patch.items():
            field_name = self._field_names.get(key, key)
            if field_name == "id":
                continue
            merged[field_name] = value
        return self._validate(merged)

    def _check_unique(self, records: List[RecordT], candidate: RecordT) -> None:
        for field_name in self.unique_fields:
            value = getattr(candidate, field_name)
            for record in records:
                if record.id != candidate.id and getattr(record, field_name) == value:
                    raise DuplicateValueError(field_name, value)

    # Operations

    async def list(self) -> List[RecordT]:
        return await self._read()

    async def get(self, record_id: str) -> Optional[RecordT]:
        for record in await self._read():
            if record.id == record_id:
                return record
        return None

    async def query(self, predicate: Callable[[RecordT], bool]) -> List[RecordT]:
        return [record for record in await self._read() if predicate(record)]

    async def insert(self, data: Dict[str, Any]) -> RecordT:
        """Assign a fresh id, append and persist."""
        return await self.append(lambda records: data)

    async def append(self, build: Callable[[List[RecordT]], Dict[str, Any]]) -> RecordT:
        """
        Insert ``build(records)`` as a new record.

        ``build`` sees the current records under the collection lock, so
        fields derived from them (e.g. the next ``order``) cannot race.
        """
        async with self._lock:
            records = await self._read_locked()
            record = self._validate({**build(records), "id": new_id()})
            self._check_unique(records, record)
            records.append(record)
            await self._write(records)
            return record

    async def update(self, record_id: str, patch: Dict[str, Any]) -> Optional[RecordT]:
        """
        Shallow-merge ``patch`` into the record.

        Named fields are overwritten wholesale (a nested list is replaced,
        not merged); every other field is kept. ``id`` is never changed.
        Returns None if no record has ``record_id``.
        """
        async with self._lock:
            records = await self._read_locked()
            for index, record in enumerate(records):
                if record.id == record_id:
                    updated = self._merge(record, patch)
                    self._check_unique(records, updated)
                    records[index] = updated
                    await self._write(records)
                    return updated
            return None

    async def modify(self, record_id: str, mutate: Callable[[RecordT], RecordT]) -> Optional[RecordT]:
        """
        Atomically replace a record with ``mutate(record)``.

        ``mutate`` receives a private copy and may raise to abort; nothing is
        written in that case.
        """
        async with self._lock:
            records = await self._read_locked()
            for index, record in enumerate(records):
                if record.id == record_id:
                    changed = mutate(record.model_copy(deep=True))
                    updated = self._validate({**changed.model_dump(), "id": record.id})
                    self._check_unique(records, updated)
                    records[index] = updated
                    await self._write(records)
                    return updated
            return None

    async def modify_all(self, mutate: Callable[[List[RecordT]], List[RecordT]]) -> List[RecordT]:
        """Atomically rewrite the whole collection with ``mutate(records)``."""
        async with self._lock:
            records = await self._read_locked()
            changed = [self._validate(record.model_dump()) for record in mutate(records)]
            await self._write(changed)
            return changed

    async def get_or_insert(
        self,
        predicate: Callable[[RecordT], bool],
        factory: Callable[[], Dict[str, Any]],
    ) -> Tuple[RecordT, bool]:
        """Return ``(record, created)``; lookup and insert happen under one lock."""
        async with self._lock:
            records = await self._read_locked()
            for record in records:
                if predicate(record):
                    return record, False
            record = self._validate({**factory(), "id": new_id()})
            self._check_unique(records, record)
            records.append(record)
            await self._write(records)
            return record, True

    async def delete(self, record_id: str) -> bool:
        """Remove a record; False (and nothing written) if it does not exist."""
        async with self._lock:
            records = await self._read_locked()
            remaining = [record for record in records if record.id != record_id]
            if len(remaining) == len(records):
                return False
            await self._write(remaining)
            return True

    async def replace_all(self, records: List[RecordT]) -> None:
        async with self._lock:
            await self._write(list(records))

    async def reset(self) -> None:
        """Overwrite the collection with its defaults."""
        await self.replace_all(self.default_factory())
