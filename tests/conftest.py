"""Root conftest - shared test configuration and record fixtures.

Invariants:
    - Tests never touch a real database file or a configured server
    - Every test gets a fresh MemoryStorage and hook log
"""

import os

import pytest

# Settings read in tests must not pick up a developer's .env database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STORAGE_BACKEND", "memory")

from recordkit.core.hooks import RecordingHooks  # noqa: E402
from recordkit.core.lifecycle import BaseRecord  # noqa: E402
from recordkit.infrastructure.memory_storage import MemoryStorage  # noqa: E402


@pytest.fixture
def store():
    return MemoryStorage()


@pytest.fixture
def hook_log():
    """Shared list every Item instance appends its lifecycle events to."""
    return []


@pytest.fixture
def Item(store, hook_log):
    """Record class bound to the test store, recording hooks into hook_log."""
    return BaseRecord.make_model(
        "items",
        storage=store,
        hook_factory=lambda record: RecordingHooks(hook_log),
    )


@pytest.fixture
def seed(store, hook_log):
    """Replace the items table and reset the hook log."""
    def _seed(rows):
        store.seed("items", rows)
        hook_log.clear()
    return _seed
