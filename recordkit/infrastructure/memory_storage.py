"""In-Memory Storage - reference RecordStorage over per-table lists of dicts.

Invariants:
    - Ids come from a per-table counter, never reused after delete
    - Rows are deep-copied in and out; callers never alias stored state,
      nested values included
    - find() selects matches on first pull from a copy of the table, so
      callers may update or delete rows while iterating
    - update() merges the record's fields over the stored row

Design Decisions:
    - Single process, no locking: the lifecycle core runs records sequentially
"""

import copy
import logging
from collections.abc import AsyncIterator, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from recordkit.core.domain_types import ID_FIELD, Fields, Query
from recordkit.core.errors import RecordNotFoundError
from recordkit.infrastructure.query_matching import matches_query

if TYPE_CHECKING:
    from recordkit.core.lifecycle import BaseRecord

logger = logging.getLogger(__name__)


class MemoryStorage:
    """RecordStorage keeping every table in process memory."""

    def __init__(self, tables: Mapping[str, Iterable[Mapping[str, Any]]] | None = None):
        self._tables: dict[str, list[Fields]] = {}
        self._next_ids: dict[str, int] = {}
        for table_name, rows in (tables or {}).items():
            self.seed(table_name, rows)

    def seed(self, table_name: str, rows: Iterable[Mapping[str, Any]]) -> None:
        """Replace a table's contents. Rows must already carry ids."""
        self._tables[table_name] = [copy.deepcopy(dict(row)) for row in rows]
        ids = [row[ID_FIELD] for row in self._tables[table_name] if row.get(ID_FIELD)]
        self._next_ids[table_name] = max(ids, default=0) + 1

    def rows(self, table_name: str) -> list[Fields]:
        return [copy.deepcopy(row) for row in self._tables.get(table_name, [])]

    def _table(self, table_name: str) -> list[Fields]:
        return self._tables.setdefault(table_name, [])

    def _find_row(self, table_name: str, record_id: Any) -> Fields | None:
        for row in self._table(table_name):
            if row.get(ID_FIELD) == record_id:
                return row
        return None

    # ─── Primitives ──────────────────────────────────────────────

    async def fetch(self, record: "BaseRecord") -> Fields | None:
        row = self._find_row(record.table_name, record.id)
        return copy.deepcopy(row) if row is not None else None

    async def insert(self, record: "BaseRecord") -> Fields:
        table_name = record.table_name
        new_id = self._next_ids.get(table_name, 1)
        self._next_ids[table_name] = new_id + 1
        row = {**copy.deepcopy(record.snapshot()), ID_FIELD: new_id}
        self._table(table_name).append(row)
        logger.debug(
            "Inserted row",
            extra={"table_name": table_name, "record_id": new_id, "operation": "insert"},
        )
        return copy.deepcopy(row)

    async def update(self, record: "BaseRecord") -> Fields:
        row = self._find_row(record.table_name, record.id)
        if row is None:
            raise RecordNotFoundError(record.table_name, record.id)
        row.update(copy.deepcopy(record.snapshot()))
        return copy.deepcopy(row)

    async def delete(self, record: "BaseRecord") -> None:
        table_name = record.table_name
        self._tables[table_name] = [
            row for row in self._table(table_name) if row.get(ID_FIELD) != record.id
        ]

    async def find(self, model: type["BaseRecord"], query: Query) -> AsyncIterator[Fields]:
        matched = [
            copy.deepcopy(row) for row in self._table(model.table_name)
            if matches_query(row, query)
        ]
        for row in matched:
            yield row
