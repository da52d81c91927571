"""Lifecycle Engine - per-record state machine over injected storage primitives.

Invariants:
    - Two states only: new (id unset/falsy) and persisted (id set)
    - fetch/update/remove on a new record raise UnsavedRecordOperationError
      before any hook fires or any field is merged
    - save() on a persisted record delegates entirely to update()
    - beforeSave/afterSave fire on both create and update paths
    - remove() clears id, so the same instance can be saved again as a new row
    - Hook and primitive failures propagate untouched; nothing is rolled back

Design Decisions:
    - Storage is a strategy object on the class (RecordStorage protocol), the
      default raising NotImplementedOperationError on use
    - Hooks are a per-instance HookDispatcher; hook_factory supplies one for
      every instance a class builds, including records yielded by find
    - Collection-level operations live on Model.objects (core/collection.py),
      leaving update()/remove() free for the per-record API
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from recordkit.core.collection import CollectionDescriptor
from recordkit.core.domain_types import ID_FIELD, Fields, LifecycleEvent, Query
from recordkit.core.errors import NotImplementedOperationError, UnsavedRecordOperationError
from recordkit.core.hooks import NullHooks
from recordkit.core.record import Record
from recordkit.core.repository_protocols import HookDispatcher, HookFactory, RecordStorage

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="BaseRecord")


def _class_name(table_name: str) -> str:
    """CamelCase a table name: user_accounts -> UserAccounts."""
    parts = re.split(r"[^0-9A-Za-z]+", table_name)
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


class UnimplementedStorage:
    """Placeholder storage: every primitive fails naming itself."""

    async def fetch(self, record: "BaseRecord") -> Fields | None:
        raise NotImplementedOperationError("storage.fetch")

    async def insert(self, record: "BaseRecord") -> Fields:
        raise NotImplementedOperationError("storage.insert")

    async def update(self, record: "BaseRecord") -> Fields:
        raise NotImplementedOperationError("storage.update")

    async def delete(self, record: "BaseRecord") -> None:
        raise NotImplementedOperationError("storage.delete")

    async def find(self, model: type["BaseRecord"], query: Query):
        raise NotImplementedOperationError("storage.find")
        yield  # async generator: fails on first pull, not on call


class BaseRecord(Record):
    """Abstract data-access object. Bind a storage to get the full CRUD API."""

    table_name: ClassVar[str] = "records"
    storage: ClassVar[RecordStorage] = UnimplementedStorage()
    hook_factory: ClassVar[HookFactory | None] = None

    objects = CollectionDescriptor()

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        *,
        hooks: HookDispatcher | None = None,
    ):
        super().__init__(data)
        factory = type(self).hook_factory
        if hooks is None and factory is not None:
            hooks = factory(self)
        self.hooks: HookDispatcher = hooks if hooks is not None else NullHooks()

    async def emit(self, event: LifecycleEvent) -> None:
        """Announce a lifecycle event. Override, or pass a dispatcher."""
        await self.hooks.emit(event)

    def _log_extra(self, action: str) -> dict:
        return {"table_name": self.table_name, "record_id": self.id, "action": action}

    # ─── Lifecycle ───────────────────────────────────────────────

    async def fetch(self: R) -> R:
        """Reload stored fields over the in-memory ones."""
        if self.is_new:
            raise UnsavedRecordOperationError("fetch")

        await self.emit(LifecycleEvent.BEFORE_FETCH)
        self.set(await self.storage.fetch(self))
        await self.emit(LifecycleEvent.AFTER_FETCH)

        logger.debug(f"Fetched {self.table_name} record", extra=self._log_extra("fetch"))
        return self

    async def save(self: R) -> R:
        """Insert a new record, or sync a persisted one via update()."""
        if not self.is_new:
            return await self.update()

        await self.emit(LifecycleEvent.VALIDATE)

        await self.emit(LifecycleEvent.BEFORE_CREATE)
        await self.emit(LifecycleEvent.BEFORE_SAVE)

        self.set(await self.storage.insert(self))

        await self.emit(LifecycleEvent.AFTER_SAVE)
        await self.emit(LifecycleEvent.AFTER_CREATE)

        logger.debug(f"Created {self.table_name} record", extra=self._log_extra("create"))
        return self

    async def update(self: R, patch: Mapping[str, Any] | None = None) -> R:
        """Merge an optional patch, then persist the in-memory fields."""
        if self.is_new:
            raise UnsavedRecordOperationError("update")

        if patch:
            self.set(patch)

        await self.emit(LifecycleEvent.VALIDATE)

        await self.emit(LifecycleEvent.BEFORE_UPDATE)
        await self.emit(LifecycleEvent.BEFORE_SAVE)

        self.set(await self.storage.update(self))

        await self.emit(LifecycleEvent.AFTER_SAVE)
        await self.emit(LifecycleEvent.AFTER_UPDATE)

        logger.debug(f"Updated {self.table_name} record", extra=self._log_extra("update"))
        return self

    async def remove(self: R) -> R:
        """Delete the stored record and return this instance to the new state."""
        if self.is_new:
            raise UnsavedRecordOperationError("remove")

        await self.emit(LifecycleEvent.BEFORE_REMOVE)

        await self.storage.delete(self)
        removed_id = self.id
        self.set(ID_FIELD, None)

        await self.emit(LifecycleEvent.AFTER_REMOVE)

        logger.debug(
            f"Removed {self.table_name} record",
            extra={"table_name": self.table_name, "record_id": removed_id, "action": "remove"},
        )
        return self

    # ─── Subclass factory ────────────────────────────────────────

    @classmethod
    def make_model(
        cls: type[R],
        name: str,
        *,
        storage: RecordStorage | None = None,
        hook_factory: HookFactory | None = None,
    ) -> type[R]:
        """Create a subclass scoped to its own table namespace."""
        class_name = _class_name(name) or cls.__name__
        attrs: dict[str, Any] = {
            "table_name": name, "__module__": cls.__module__, "__qualname__": class_name,
        }
        if storage is not None:
            attrs["storage"] = storage
        if hook_factory is not None:
            attrs["hook_factory"] = staticmethod(hook_factory)
        return type(cls)(class_name, (cls,), attrs)
