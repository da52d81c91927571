"""Error Hierarchy - verifies codes, categories, messages and the envelope."""

import pytest

from recordkit.core.errors import (
    RecordKitError, ErrorCategory, ErrorSeverity, ErrorContext,
    RecordNotFoundError, NotImplementedOperationError,
    UnsavedRecordOperationError, RecordValidationError, DatabaseError,
)


def test_record_not_found_message_and_identity():
    err = RecordNotFoundError("items", 4)
    assert str(err) == "items record '4' not found"
    assert err.code == "RECORD_NOT_FOUND"
    assert err.category is ErrorCategory.RESOURCE_NOT_FOUND
    assert err.context.table_name == "items"
    assert err.context.record_id == 4


def test_record_not_found_without_identity():
    assert str(RecordNotFoundError()) == "Record not found"


def test_not_implemented_names_operation():
    err = NotImplementedOperationError("storage.find")
    assert str(err) == "storage.find not implemented"
    assert err.operation == "storage.find"
    assert err.severity is ErrorSeverity.CRITICAL


@pytest.mark.parametrize("action", ["fetch", "update", "remove"])
def test_unsaved_record_names_action(action):
    err = UnsavedRecordOperationError(action)
    assert str(err) == f"Can not {action} unsaved record"
    assert err.action == action
    assert err.category is ErrorCategory.LIFECYCLE


def test_validation_error_carries_details():
    err = RecordValidationError("bad", errors=[{"field": "name"}])
    assert err.errors == [{"field": "name"}]
    assert err.context.debug_info == {"errors": [{"field": "name"}]}


def test_database_error_message():
    err = DatabaseError("boom", "commit")
    assert str(err) == "Database commit failed: boom"
    assert err.operation == "commit"


def test_all_errors_share_base():
    for err in (
        RecordNotFoundError(), NotImplementedOperationError("x"),
        UnsavedRecordOperationError("fetch"), RecordValidationError("x"),
        DatabaseError("x", "y"),
    ):
        assert isinstance(err, RecordKitError)


def test_to_dict_envelope():
    err = RecordNotFoundError(
        "items", 2, context=ErrorContext(action="remove"),
    )
    envelope = err.to_dict()["error"]
    assert envelope["code"] == "RECORD_NOT_FOUND"
    assert envelope["category"] == "resource_not_found"
    assert envelope["severity"] == "error"
    assert envelope["context"] == {
        "table_name": "items", "record_id": 2, "action": "remove",
    }
