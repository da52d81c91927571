"""Hook Dispatchers - built-in listeners for lifecycle events.

Invariants:
    - NullHooks never fails
    - HookChain emits to its members in order and stops at the first failure
"""

from collections.abc import Iterable

from recordkit.core.domain_types import LifecycleEvent
from recordkit.core.repository_protocols import HookDispatcher, HookFactory


class NullHooks:
    """Default dispatcher: ignores every event."""

    async def emit(self, event: LifecycleEvent) -> None:
        return None


class RecordingHooks:
    """Appends each event to a shared list. Used for auditing in tests and scripts."""

    def __init__(self, log: list | None = None):
        self.log: list[LifecycleEvent] = log if log is not None else []

    async def emit(self, event: LifecycleEvent) -> None:
        self.log.append(event)


class HookChain:
    """Fans one event out to several dispatchers, sequentially."""

    def __init__(self, *dispatchers: HookDispatcher):
        self.dispatchers = list(dispatchers)

    async def emit(self, event: LifecycleEvent) -> None:
        for dispatcher in self.dispatchers:
            await dispatcher.emit(event)


def chain_hooks(*factories: HookFactory | None) -> HookFactory:
    """Compose hook factories into one that builds a HookChain per record."""
    active: Iterable[HookFactory] = [f for f in factories if f is not None]

    def factory(record) -> HookDispatcher:
        return HookChain(*(f(record) for f in active))

    return factory
