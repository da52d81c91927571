"""Boundary Protocols - contracts between the lifecycle core and its collaborators.

Invariants:
    - Core NEVER imports a concrete storage or hook implementation
    - Storage primitives receive the record (or model class) they act on
    - Hook dispatchers receive only the event name

Design Decisions:
    - Protocol over ABC: structural subtyping, collaborators need no base class
    - find() is a plain method returning an async generator: async generator
      functions satisfy it, and nothing runs until the first pull
"""

from collections.abc import AsyncGenerator, Callable
from typing import TYPE_CHECKING, Protocol

from recordkit.core.domain_types import Fields, LifecycleEvent, Query

if TYPE_CHECKING:
    from recordkit.core.lifecycle import BaseRecord


class RecordStorage(Protocol):
    """The five storage primitives a concrete backend supplies."""
    async def fetch(self, record: "BaseRecord") -> Fields | None: ...
    async def insert(self, record: "BaseRecord") -> Fields: ...
    async def update(self, record: "BaseRecord") -> Fields: ...
    async def delete(self, record: "BaseRecord") -> None: ...
    def find(
        self, model: type["BaseRecord"], query: Query,
    ) -> AsyncGenerator[Fields, None]: ...


class HookDispatcher(Protocol):
    """Listener for lifecycle events (validation, auditing, derived fields)."""
    async def emit(self, event: LifecycleEvent) -> None: ...


HookFactory = Callable[["BaseRecord"], HookDispatcher]
