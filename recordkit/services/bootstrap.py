"""Bootstrap - builds logging, storage and default hooks from Settings.

Invariants:
    - settings default to get_settings() (cached, environment-driven)
    - The SQL backend initializes the db_manager singleton and creates the schema
"""

import logging

from recordkit.config import Settings, get_settings
from recordkit.core.repository_protocols import HookFactory, RecordStorage
from recordkit.infrastructure.audit_hooks import AuditLogHooks
from recordkit.infrastructure.database import init_db
from recordkit.infrastructure.memory_storage import MemoryStorage
from recordkit.infrastructure.observability import setup_logging
from recordkit.infrastructure.sql_storage import SqlAlchemyStorage

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings | None = None) -> logging.Handler:
    settings = settings or get_settings()
    return setup_logging(settings.log_level, settings.log_format)


async def open_storage(settings: Settings | None = None) -> RecordStorage:
    """Construct the configured storage backend, ready for use."""
    settings = settings or get_settings()
    if settings.storage_backend == "memory":
        logger.info("Using in-memory record storage")
        return MemoryStorage()

    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await manager.create_schema()
    logger.info("Using SQL record storage", extra={"operation": "create_schema"})
    return SqlAlchemyStorage(manager, batch_size=settings.find_batch_size)


def default_hook_factory(settings: Settings | None = None) -> HookFactory | None:
    settings = settings or get_settings()
    return AuditLogHooks if settings.audit_log else None
