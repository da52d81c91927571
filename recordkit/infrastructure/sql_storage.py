"""SQL Storage - RecordStorage backed by SQLAlchemy asyncio and the records table.

Invariants:
    - Each primitive runs in its own session and commits before returning
    - find() never holds a session open across a yield: rows are read in
      keyset-paginated batches ordered by id
    - An id key in the query is pushed down to SQL; the remaining keys are
      matched in Python with matches_query()
    - update() merges the record's fields over the stored JSON
"""

import logging
from collections.abc import AsyncIterator, Mapping
from typing import TYPE_CHECKING

from sqlalchemy import delete, select

from recordkit.core.domain_types import ID_FIELD, Fields, Query
from recordkit.core.errors import RecordNotFoundError
from recordkit.infrastructure.database import DatabaseSessionManager
from recordkit.infrastructure.query_matching import matches_query
from recordkit.models.stored_record import StoredRecord

if TYPE_CHECKING:
    from recordkit.core.lifecycle import BaseRecord

logger = logging.getLogger(__name__)


def _data_of(record: "BaseRecord") -> Fields:
    data = record.snapshot()
    data.pop(ID_FIELD, None)
    return data


class SqlAlchemyStorage:
    """RecordStorage persisting every record kind into one JSON-column table."""

    def __init__(self, manager: DatabaseSessionManager, batch_size: int = 100):
        self._manager = manager
        self._batch_size = batch_size

    def _by_identity(self, record: "BaseRecord"):
        return select(StoredRecord).where(
            StoredRecord.table_name == record.table_name,
            StoredRecord.id == record.id,
        )

    async def fetch(self, record: "BaseRecord") -> Fields | None:
        async with self._manager.session() as db:
            row = (await db.execute(self._by_identity(record))).scalar_one_or_none()
            return row.to_fields() if row is not None else None

    async def insert(self, record: "BaseRecord") -> Fields:
        async with self._manager.session() as db:
            row = StoredRecord(table_name=record.table_name, data=_data_of(record))
            db.add(row)
            await db.flush()
            fields = row.to_fields()
            await db.commit()
        logger.debug(
            "Inserted row",
            extra={"table_name": record.table_name, "record_id": fields[ID_FIELD],
                   "operation": "insert"},
        )
        return fields

    async def update(self, record: "BaseRecord") -> Fields:
        async with self._manager.session() as db:
            row = (await db.execute(self._by_identity(record))).scalar_one_or_none()
            if row is None:
                raise RecordNotFoundError(record.table_name, record.id)
            row.data = {**row.data, **_data_of(record)}
            await db.flush()
            fields = row.to_fields()
            await db.commit()
        return fields

    async def delete(self, record: "BaseRecord") -> None:
        async with self._manager.session() as db:
            await db.execute(
                delete(StoredRecord).where(
                    StoredRecord.table_name == record.table_name,
                    StoredRecord.id == record.id,
                ),
            )
            await db.commit()

    async def find(self, model: type["BaseRecord"], query: Query) -> AsyncIterator[Fields]:
        last_id = 0
        while True:
            stmt = (
                select(StoredRecord)
                .where(
                    StoredRecord.table_name == model.table_name,
                    StoredRecord.id > last_id,
                )
                .order_by(StoredRecord.id)
                .limit(self._batch_size)
            )
            if isinstance(query, Mapping) and ID_FIELD in query:
                stmt = stmt.where(StoredRecord.id == query[ID_FIELD])
            async with self._manager.session() as db:
                batch = [row.to_fields() for row in (await db.execute(stmt)).scalars()]

            for fields in batch:
                last_id = fields[ID_FIELD]
                if matches_query(fields, query):
                    yield fields

            if len(batch) < self._batch_size:
                return
