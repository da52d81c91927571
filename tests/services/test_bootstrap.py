"""Bootstrap - verifies storage, logging and hook wiring from Settings."""

import logging

import pytest

import recordkit.infrastructure.database as db_module
from recordkit.config import Settings
from recordkit.core.lifecycle import BaseRecord
from recordkit.infrastructure.audit_hooks import AuditLogHooks
from recordkit.infrastructure.memory_storage import MemoryStorage
from recordkit.infrastructure.sql_storage import SqlAlchemyStorage
from recordkit.services.bootstrap import configure_logging, default_hook_factory, open_storage


@pytest.fixture
def restore_db_manager():
    original = db_module.db_manager
    yield
    db_module.db_manager = original


async def test_memory_backend():
    storage = await open_storage(Settings(storage_backend="memory"))
    assert isinstance(storage, MemoryStorage)


async def test_sql_backend_initializes_schema(restore_db_manager):
    settings = Settings(
        storage_backend="sql",
        database_url="sqlite+aiosqlite:///:memory:",
        find_batch_size=10,
    )
    storage = await open_storage(settings)
    try:
        assert isinstance(storage, SqlAlchemyStorage)
        assert db_module.get_db_manager() is db_module.db_manager

        Thing = BaseRecord.make_model("things", storage=storage)
        record = await Thing.objects.create({"v": 1})
        assert (await Thing.objects.find_by_id(record.id))["v"] == 1
    finally:
        await db_module.db_manager.dispose()


def test_get_db_manager_requires_init(restore_db_manager):
    db_module.db_manager = None
    with pytest.raises(RuntimeError, match="Database not initialized"):
        db_module.get_db_manager()


def test_default_hook_factory():
    assert default_hook_factory(Settings(audit_log=True)) is AuditLogHooks
    assert default_hook_factory(Settings(audit_log=False)) is None


def test_configure_logging_uses_settings():
    handler = configure_logging(Settings(log_level="WARNING", log_format="json"))
    try:
        assert handler in logging.root.handlers
        assert logging.root.level == logging.WARNING
    finally:
        logging.root.removeHandler(handler)
