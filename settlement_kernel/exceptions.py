"""
Typed Exception Hierarchy for the Settlement Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the settlement engine (request handlers, batch jobs) need to
turn failures into user-facing validation messages. Matching on message
text is fragile, so:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Exceptions carry structured DATA (not just a message string)

Example:
    try:
        group.add_expense("Hotel", "0", paid_by="Rahul")
    except InvalidExpenseError as e:
        api_response(code=e.code, reason=e.reason)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    SettlementKernelError (base)
    |
    +-- ExpenseError
    |   +-- InvalidExpenseError
    |   +-- ExpenseNotFoundError
    |
    +-- GroupError
        +-- GroupNotFoundError
        +-- InvalidMemberError
        +-- MemberAlreadyExistsError
        +-- InvalidGroupStatusError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category   | Code                   | When Raised
-----------|------------------------|----------------------------------------
Expense    | INVALID_EXPENSE        | amount <= 0, empty split, missing payer
           | EXPENSE_NOT_FOUND      | remove_expense with an unknown id
-----------|------------------------|----------------------------------------
Group      | GROUP_NOT_FOUND        | selector lookup by unknown group id
           | INVALID_MEMBER         | blank member name
           | MEMBER_ALREADY_EXISTS  | duplicate member name or email
           | INVALID_GROUP_STATUS   | status not in active/settled/archived

===============================================================================
PROPAGATION
===============================================================================

The engines never recover from InvalidExpenseError. Callers are expected
to validate at write time (ExpenseGroup.add_expense does) so that a
malformed entry never reaches the balance calculator.
"""


class SettlementKernelError(Exception):
    """
    Base exception for all settlement kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "SETTLEMENT_KERNEL_ERROR"


# Expense-related exceptions


class ExpenseError(SettlementKernelError):
    """Base exception for expense-related errors."""

    code: str = "EXPENSE_ERROR"


class InvalidExpenseError(ExpenseError):
    """
    Expense entry is malformed.

    Raised for a non-positive or non-numeric amount, an empty split set,
    a missing payer, or a blank description.
    """

    code: str = "INVALID_EXPENSE"

    def __init__(self, reason: str, description: str | None = None):
        self.reason = reason
        self.description = description
        if description:
            super().__init__(f"Invalid expense {description!r}: {reason}")
        else:
            super().__init__(f"Invalid expense: {reason}")


class ExpenseNotFoundError(ExpenseError):
    """Expense with given ID is not in the group's log."""

    code: str = "EXPENSE_NOT_FOUND"

    def __init__(self, expense_id: str):
        self.expense_id = expense_id
        super().__init__(f"Expense not found: {expense_id}")


# Group-related exceptions


class GroupError(SettlementKernelError):
    """Base exception for expense group errors."""

    code: str = "GROUP_ERROR"


class GroupNotFoundError(GroupError):
    """Expense group with given ID was not found."""

    code: str = "GROUP_NOT_FOUND"

    def __init__(self, group_id: str):
        self.group_id = group_id
        super().__init__(f"Expense group not found: {group_id}")


class InvalidMemberError(GroupError):
    """Member definition is invalid (blank name)."""

    code: str = "INVALID_MEMBER"

    def __init__(self, name: str | None):
        self.name = name
        super().__init__(f"Invalid member name: {name!r}")


class MemberAlreadyExistsError(GroupError):
    """A member with the same name or email is already in the group."""

    code: str = "MEMBER_ALREADY_EXISTS"

    def __init__(self, name: str, email: str | None = None):
        self.name = name
        self.email = email
        super().__init__(f"Member already exists: {name}")


class InvalidGroupStatusError(GroupError):
    """Status is not one of active, settled, archived."""

    code: str = "INVALID_GROUP_STATUS"

    def __init__(self, status: object):
        self.status = str(status)
        super().__init__(f"Invalid status: {status!r}")
