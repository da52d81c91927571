"""StoredRecord ORM - one row per persisted record, namespaced by table_name.

Invariants:
    - id is an autoincrement integer primary key and the record identity
    - data holds every field except id, as JSON
    - table_name separates record kinds sharing one physical table

Design Decisions:
    - JSON column for data: records are schema-less field bags
    - (table_name, id) index backs the keyset-paginated find sequence
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from recordkit.core.domain_types import ID_FIELD, Fields
from recordkit.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredRecord(Base):
    """Physical row behind a BaseRecord."""
    __tablename__ = "records"
    __table_args__ = (
        Index("ix_records_table_name_id", "table_name", "id"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    table_name: Mapped[str] = mapped_column(String(128), nullable=False)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    def to_fields(self) -> Fields:
        return {**self.data, ID_FIELD: self.id}
