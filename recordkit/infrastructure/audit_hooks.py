"""Audit Log Hooks - HookDispatcher writing every lifecycle event to the log.

Invariants:
    - Never mutates the record
    - Never raises: logging is the only side effect
"""

import logging
from typing import TYPE_CHECKING

from recordkit.core.domain_types import LifecycleEvent

if TYPE_CHECKING:
    from recordkit.core.lifecycle import BaseRecord

logger = logging.getLogger("recordkit.audit")


class AuditLogHooks:
    """Bound to one record; usable directly as a hook_factory."""

    def __init__(self, record: "BaseRecord", level: int = logging.INFO):
        self.record = record
        self.level = level

    async def emit(self, event: LifecycleEvent) -> None:
        logger.log(
            self.level,
            f"{self.record.table_name} {event.value}",
            extra={
                "table_name": self.record.table_name,
                "record_id": self.record.id,
                "event": event.value,
            },
        )
