"""Collection Algorithms - every multi-record operation, derived from find_iterator.

Invariants:
    - find_iterator returns a fresh async generator per call; nothing runs until
      the first pull
    - find_one pulls at most one item and closes the sequence
    - find/find_one/count never mutate records or fire hooks
    - Bulk update/remove run the full per-record lifecycle, strictly one record
      at a time, in match order
    - *_by_id raise RecordNotFoundError on a miss; *_one return None
    - find_or_create layers query over extra; create_or_update layers data over
      query. The two precedences differ on purpose

Design Decisions:
    - Collection bound to a model class through a descriptor (Model.objects),
      so subclasses and make_model() products dispatch to their own storage
    - contextlib.aclosing around every inner sequence: abandoning a sequence
      early finalizes the storage generator immediately
"""

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import aclosing
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from recordkit.core.domain_types import ID_FIELD, Query, RecordId
from recordkit.core.errors import RecordNotFoundError

if TYPE_CHECKING:
    from recordkit.core.lifecycle import BaseRecord

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="BaseRecord")


class Collection(Generic[R]):
    """Collection-level API for one record class."""

    def __init__(self, model: type[R]):
        self.model = model

    def __repr__(self) -> str:
        return f"Collection({self.model.__name__}, table={self.model.table_name!r})"

    # ─── Construction ────────────────────────────────────────────

    def build(self, data: Mapping[str, Any] | None = None) -> R:
        return self.model(data)

    async def create(self, data: Mapping[str, Any] | None = None) -> R:
        return await self.build(data).save()

    # ─── Find family ─────────────────────────────────────────────

    async def find_iterator(self, query: Query = None) -> AsyncIterator[R]:
        """Lazily wrap each stored field mapping matching query into a record."""
        async with aclosing(self.model.storage.find(self.model, query)) as rows:
            async for fields in rows:
                yield self.model(fields)

    def __aiter__(self) -> AsyncIterator[R]:
        return self.find_iterator({})

    async def find(self, query: Query = None) -> list[R]:
        return [record async for record in self.find_iterator(query)]

    async def find_one(self, query: Query = None) -> R | None:
        async with aclosing(self.find_iterator(query)) as records:
            async for record in records:
                return record
        return None

    async def find_by_id(self, record_id: RecordId) -> R:
        record = await self.find_one({ID_FIELD: record_id})
        if record is None:
            raise RecordNotFoundError(self.model.table_name, record_id)
        return record

    async def count(self, query: Query = None) -> int:
        total = 0
        async for _ in self.find_iterator(query):
            total += 1
        return total

    async def find_or_create(
        self, query: Mapping[str, Any], extra: Mapping[str, Any] | None = None,
    ) -> R:
        """Return the first match as-is, or create one from extra + query."""
        record = await self.find_one(query)
        if record is not None:
            return record
        return await self.create({**(extra or {}), **query})

    async def create_or_update(
        self, query: Mapping[str, Any], data: Mapping[str, Any],
    ) -> R:
        """Update the first match with data, or create one from query + data."""
        record = await self.find_one(query)
        if record is not None:
            return await record.update(data)
        return await self.create({**query, **data})

    # ─── Update family ───────────────────────────────────────────

    async def update_iterator(
        self, query: Query, data: Mapping[str, Any] | None,
    ) -> AsyncIterator[R]:
        async with aclosing(self.find_iterator(query)) as records:
            async for record in records:
                yield await record.update(data)

    async def update(self, query: Query, data: Mapping[str, Any] | None) -> list[R]:
        updated = [record async for record in self.update_iterator(query, data)]
        logger.debug(
            f"Bulk-updated {len(updated)} {self.model.table_name} record(s)",
            extra={"table_name": self.model.table_name, "action": "update"},
        )
        return updated

    async def update_one(self, query: Query, data: Mapping[str, Any] | None) -> R | None:
        record = await self.find_one(query)
        if record is None:
            return None
        return await record.update(data)

    async def update_by_id(self, record_id: RecordId, data: Mapping[str, Any] | None) -> R:
        record = await self.update_one({ID_FIELD: record_id}, data)
        if record is None:
            raise RecordNotFoundError(self.model.table_name, record_id)
        return record

    # ─── Remove family ───────────────────────────────────────────

    async def remove_iterator(self, query: Query) -> AsyncIterator[R]:
        async with aclosing(self.find_iterator(query)) as records:
            async for record in records:
                yield await record.remove()

    async def remove(self, query: Query) -> list[R]:
        removed = [record async for record in self.remove_iterator(query)]
        logger.debug(
            f"Bulk-removed {len(removed)} {self.model.table_name} record(s)",
            extra={"table_name": self.model.table_name, "action": "remove"},
        )
        return removed

    async def remove_one(self, query: Query) -> R | None:
        record = await self.find_one(query)
        if record is None:
            return None
        return await record.remove()

    async def remove_by_id(self, record_id: RecordId) -> R:
        record = await self.remove_one({ID_FIELD: record_id})
        if record is None:
            raise RecordNotFoundError(self.model.table_name, record_id)
        return record


class CollectionDescriptor:
    """Exposes a Collection bound to whichever class it is read from."""

    def __get__(self, instance: object, owner: type[R]) -> Collection[R]:
        if instance is not None:
            raise AttributeError(
                "collection operations are only available on the record class",
            )
        return Collection(owner)
