"""Schema Validation Hooks - verifies pydantic validation on the validate event.

Invariants:
    - Invalid records raise RecordValidationError before the primitive runs
    - Valid records are coerced and defaulted when coerce=True
    - Only the validate event triggers validation
"""

import pytest
from pydantic import BaseModel

from recordkit.core.domain_types import LifecycleEvent
from recordkit.core.errors import RecordValidationError
from recordkit.core.hooks import HookChain, RecordingHooks
from recordkit.core.lifecycle import BaseRecord
from recordkit.services.validation_hooks import SchemaValidationHooks, schema_validator


class UserSchema(BaseModel):
    name: str
    age: int
    active: bool = True


@pytest.fixture
def User(store):
    return BaseRecord.make_model("users", storage=store, hook_factory=schema_validator(UserSchema))


async def test_valid_record_is_coerced_and_defaulted(User, store):
    record = await User.objects.create({"name": "ana", "age": "41"})
    assert record == {"id": 1, "name": "ana", "age": 41, "active": True}
    assert store.rows("users") == [{"id": 1, "name": "ana", "age": 41, "active": True}]


async def test_invalid_record_is_rejected_before_insert(User, store):
    with pytest.raises(RecordValidationError) as exc_info:
        await User.objects.create({"name": "ana", "age": "old"})
    assert store.rows("users") == []
    assert exc_info.value.errors[0]["field"] == "age"
    assert exc_info.value.context.table_name == "users"


async def test_invalid_update_leaves_stored_row(User, store):
    record = await User.objects.create({"name": "ana", "age": 41})
    with pytest.raises(RecordValidationError):
        await record.update({"age": "old"})
    assert store.rows("users") == [{"id": 1, "name": "ana", "age": 41, "active": True}]


async def test_bulk_update_validates_each_record(User, store):
    store.seed("users", [
        {"id": 1, "name": "a", "age": 1},
        {"id": 2, "name": "b", "age": 2},
    ])
    updated = await User.objects.update({}, {"age": "9"})
    assert [r["age"] for r in updated] == [9, 9]


async def test_coerce_disabled_keeps_raw_fields(store):
    Raw = BaseRecord.make_model(
        "raw", storage=store, hook_factory=schema_validator(UserSchema, coerce=False),
    )
    record = await Raw.objects.create({"name": "ana", "age": "41"})
    assert record == {"id": 1, "name": "ana", "age": "41"}


async def test_other_events_are_ignored(store):
    record = BaseRecord({"age": "not a number"})
    hooks = SchemaValidationHooks(record, UserSchema)
    for event in LifecycleEvent:
        if event is not LifecycleEvent.VALIDATE:
            await hooks.emit(event)
    with pytest.raises(RecordValidationError):
        await hooks.emit(LifecycleEvent.VALIDATE)


async def test_validation_failure_stops_later_hooks(store):
    log = []
    record = BaseRecord.make_model("users", storage=store)({"name": "x"})
    record.hooks = HookChain(SchemaValidationHooks(record, UserSchema), RecordingHooks(log))
    with pytest.raises(RecordValidationError):
        await record.save()
    assert log == []
