"""
Tests for the typed error values, the result wrappers and StoreFailureError.
"""

import dataclasses

import pytest

from app.exceptions import StoreFailureError
from domain.errors import (
    DuplicateKeyError,
    ForeignKeyConstraintError,
    InsertError,
    RecordNotFound,
    UnknownError,
    ValidationError,
)
from domain.result import Failure, Success, Timed


@pytest.mark.parametrize(
    "error, message",
    [
        (ValidationError("Wrong email."), "Wrong email."),
        (DuplicateKeyError("a@b.com"), "Record with key 'a@b.com' already exists."),
        (RecordNotFound("42"), "Record not found: '42'."),
        (RecordNotFound(""), "No matching records found."),
        (
            ForeignKeyConstraintError("Order ID", "7"),
            "Order ID '7' does not reference an existing record.",
        ),
        (InsertError("meal"), "Failed to insert a record into meal."),
        (UnknownError(), "Unknown error."),
    ],
)
def test_error_messages(error, message):
    assert error.message == message


def test_errors_are_immutable_values():
    error = DuplicateKeyError("a@b.com")

    assert error == DuplicateKeyError("a@b.com")
    assert error != DuplicateKeyError("c@d.com")
    with pytest.raises(dataclasses.FrozenInstanceError):
        error.key = "changed"


def test_result_variants_are_distinct():
    ok = Success(3)
    failed = Failure(RecordNotFound("3"))

    assert isinstance(ok, Success) and not isinstance(ok, Failure)
    assert isinstance(failed, Failure) and not isinstance(failed, Success)
    assert Timed(value=ok, elapsed_ms=1.5).value.value == 3


def test_store_failure_error_payload():
    error = StoreFailureError(
        "An unexpected error occurred while adding client to the database.",
        details={"key": "a@b.com"},
        code="store_failure",
    )

    assert str(error) == error.message
    assert error.to_dict() == {
        "message": "An unexpected error occurred while adding client to the database.",
        "code": "store_failure",
        "details": {"key": "a@b.com"},
    }
