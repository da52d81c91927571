"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - ID_FIELD is the only reserved field name
    - All lifecycle event names encoded in LifecycleEvent, no raw string matching
    - Query is opaque: the core never inspects it

Design Decisions:
    - NewType/aliases over wrappers: zero runtime cost, full type-checker support
    - str Enum: events compare equal to their string values in logs and tests
"""

from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

ID_FIELD = "id"

RecordId = NewType("RecordId", int)


# ─── Value Types ─────────────────────────────────────────────────

Fields = dict[str, Any]
Query = Any


# ─── Enums ───────────────────────────────────────────────────────

class LifecycleEvent(str, Enum):
    """Lifecycle hook names, announced in a fixed order per operation."""
    VALIDATE = "validate"
    BEFORE_CREATE = "beforeCreate"
    BEFORE_UPDATE = "beforeUpdate"
    BEFORE_SAVE = "beforeSave"
    AFTER_SAVE = "afterSave"
    AFTER_CREATE = "afterCreate"
    AFTER_UPDATE = "afterUpdate"
    BEFORE_FETCH = "beforeFetch"
    AFTER_FETCH = "afterFetch"
    BEFORE_REMOVE = "beforeRemove"
    AFTER_REMOVE = "afterRemove"


CREATE_SEQUENCE = (
    LifecycleEvent.VALIDATE,
    LifecycleEvent.BEFORE_CREATE,
    LifecycleEvent.BEFORE_SAVE,
    LifecycleEvent.AFTER_SAVE,
    LifecycleEvent.AFTER_CREATE,
)

UPDATE_SEQUENCE = (
    LifecycleEvent.VALIDATE,
    LifecycleEvent.BEFORE_UPDATE,
    LifecycleEvent.BEFORE_SAVE,
    LifecycleEvent.AFTER_SAVE,
    LifecycleEvent.AFTER_UPDATE,
)

FETCH_SEQUENCE = (LifecycleEvent.BEFORE_FETCH, LifecycleEvent.AFTER_FETCH)

REMOVE_SEQUENCE = (LifecycleEvent.BEFORE_REMOVE, LifecycleEvent.AFTER_REMOVE)
