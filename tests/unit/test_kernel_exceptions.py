"""Tests for the typed exception hierarchy: codes and structured fields."""

import pytest

from settlement_kernel.exceptions import (
    ExpenseError,
    ExpenseNotFoundError,
    GroupError,
    GroupNotFoundError,
    InvalidExpenseError,
    InvalidGroupStatusError,
    InvalidMemberError,
    MemberAlreadyExistsError,
    SettlementKernelError,
)


class TestExceptionCodes:

    @pytest.mark.parametrize("cls, code", [
        (SettlementKernelError, "SETTLEMENT_KERNEL_ERROR"),
        (ExpenseError, "EXPENSE_ERROR"),
        (InvalidExpenseError, "INVALID_EXPENSE"),
        (ExpenseNotFoundError, "EXPENSE_NOT_FOUND"),
        (GroupError, "GROUP_ERROR"),
        (GroupNotFoundError, "GROUP_NOT_FOUND"),
        (InvalidMemberError, "INVALID_MEMBER"),
        (MemberAlreadyExistsError, "MEMBER_ALREADY_EXISTS"),
        (InvalidGroupStatusError, "INVALID_GROUP_STATUS"),
    ])
    def test_code_is_class_attribute(self, cls, code):
        assert cls.code == code

    def test_hierarchy(self):
        assert issubclass(InvalidExpenseError, ExpenseError)
        assert issubclass(MemberAlreadyExistsError, GroupError)
        assert issubclass(GroupError, SettlementKernelError)
        assert not issubclass(SettlementKernelError, ValueError)


class TestStructuredFields:

    def test_invalid_expense_fields(self):
        e = InvalidExpenseError("amount must be positive, got 0", "Hotel")
        assert e.reason == "amount must be positive, got 0"
        assert e.description == "Hotel"
        assert "Hotel" in str(e)

    def test_invalid_expense_without_description(self):
        e = InvalidExpenseError("description is required")
        assert e.description is None
        assert str(e) == "Invalid expense: description is required"

    def test_member_exists_fields(self):
        e = MemberAlreadyExistsError("Priya", "priya@example.com")
        assert e.name == "Priya"
        assert e.email == "priya@example.com"

    def test_status_field_is_text(self):
        assert InvalidGroupStatusError(42).status == "42"
