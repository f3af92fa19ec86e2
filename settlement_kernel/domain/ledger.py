"""
Ledger -- Expense group aggregate and its read-only snapshot.

Responsibility:
    Models a trip group's participants and its ordered log of shared
    expenses. Mutations (add/remove expense, add member, status change)
    validate at write time so a malformed entry never reaches the
    settlement engines. ``snapshot()`` hands the engines an immutable view.

Architecture position:
    Kernel > Domain -- pure, zero I/O. Persistence belongs to the caller's
    ledger store; this module neither loads nor saves groups.

Invariants enforced:
    - ``total_amount`` is derived from the expense log on every access and
      is never stored as independently mutable state.
    - Member names are unique within a group; non-empty emails are unique.
    - Every admitted expense has a positive amount, a payer, a non-empty
      description and a non-empty split set.

Failure modes:
    - InvalidExpenseError from ``validate_expense`` / ``add_expense``.
    - ExpenseNotFoundError from ``remove_expense``.
    - InvalidMemberError, MemberAlreadyExistsError from ``add_member``.
    - InvalidGroupStatusError from ``update_status``.
    - ValueError on construction with a blank group name, creator, or a
      malformed currency code.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from settlement_kernel.domain.clock import Clock, SystemClock
from settlement_kernel.domain.values import ZERO, ParticipantId, to_amount
from settlement_kernel.exceptions import (
    ExpenseNotFoundError,
    InvalidExpenseError,
    InvalidGroupStatusError,
    InvalidMemberError,
    MemberAlreadyExistsError,
)
from settlement_kernel.logging_config import LogContext, get_logger

logger = get_logger("domain.ledger")

DEFAULT_CURRENCY = "INR"


class GroupStatus(str, Enum):
    """Lifecycle label set by the caller; never computed by the engines."""

    ACTIVE = "active"
    SETTLED = "settled"
    ARCHIVED = "archived"


def coerce_status(status: GroupStatus | str) -> GroupStatus:
    """Return ``status`` as a GroupStatus or raise InvalidGroupStatusError."""
    if isinstance(status, GroupStatus):
        return status
    try:
        return GroupStatus(status)
    except ValueError as e:
        raise InvalidGroupStatusError(status) from e


@dataclass(frozen=True)
class Member:
    """A trip participant. ``name`` doubles as the participant id."""

    name: str
    email: str | None = None

    def __post_init__(self) -> None:
        name = self.name.strip() if isinstance(self.name, str) else ""
        if not name:
            raise InvalidMemberError(self.name)
        object.__setattr__(self, "name", name)
        if self.email is not None:
            email = self.email.strip().lower()
            object.__setattr__(self, "email", email or None)


def _clean_id(value):
    return value.strip() if isinstance(value, str) else value


@dataclass(frozen=True)
class ExpenseEntry:
    """
    One logged cost event.

    Contract:
        Construction normalizes (Decimal amount, stripped description and
        participant ids, de-duplicated split tuple) but does not validate;
        ``validate_expense`` does. This lets the balance calculator report
        malformed snapshots with InvalidExpenseError instead of trusting
        its input.
    """

    description: str
    amount: Decimal
    paid_by: ParticipantId | None
    split_among: tuple[ParticipantId, ...] = ()
    date: datetime | None = None
    expense_id: str = field(default_factory=lambda: uuid4().hex)

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "amount", to_amount(self.amount))
        except (ValueError, TypeError) as e:
            raise InvalidExpenseError(
                f"amount is not a number: {self.amount!r}", self.description
            ) from e

        if isinstance(self.description, str):
            object.__setattr__(self, "description", self.description.strip())
        object.__setattr__(self, "paid_by", _clean_id(self.paid_by))

        split = self.split_among
        if isinstance(split, str):
            split = (split,)
        # dict.fromkeys keeps first occurrence order
        object.__setattr__(
            self, "split_among", tuple(dict.fromkeys(_clean_id(p) for p in split or ()))
        )

    @property
    def share(self) -> Decimal:
        """Full-precision per-participant share of this expense."""
        return self.amount / len(self.split_among)


def validate_expense(entry: ExpenseEntry) -> None:
    """
    Check an expense entry can take part in a settlement.

    Raises:
        InvalidExpenseError: If the description or payer is blank, the
            amount is not positive, or the split set is empty or contains
            a blank participant.
    """
    if not entry.description:
        raise InvalidExpenseError("description is required")
    if entry.amount <= ZERO:
        raise InvalidExpenseError(
            f"amount must be positive, got {entry.amount}", entry.description
        )
    if not entry.paid_by or not str(entry.paid_by).strip():
        raise InvalidExpenseError("paid_by is required", entry.description)
    if not entry.split_among:
        raise InvalidExpenseError("split_among must not be empty", entry.description)
    if any(not p or not str(p).strip() for p in entry.split_among):
        raise InvalidExpenseError(
            "split_among contains a blank participant", entry.description
        )


@dataclass(frozen=True)
class LedgerSnapshot:
    """
    Read-only view of a group consumed by the settlement engines.

    Only ``members``, ``expenses`` and ``currency`` feed the calculation;
    ``group_id`` tags log records.
    """

    members: tuple[ParticipantId, ...]
    expenses: tuple[ExpenseEntry, ...]
    currency: str = DEFAULT_CURRENCY
    group_id: str | None = None

    @property
    def total_amount(self) -> Decimal:
        return sum((e.amount for e in self.expenses), ZERO)


def _normalize_currency(code: str) -> str:
    normalized = code.upper().strip() if code else ""
    if len(normalized) != 3 or not normalized.isalpha():
        raise ValueError(f"Invalid currency code: {code!r}")
    return normalized


@dataclass
class ExpenseGroup:
    """
    Aggregate root for a shared trip ledger.

    Contract:
        Holds members (insertion ordered) and an ordered expense log.
        All mutations validate before touching state, so a failed call
        leaves the group unchanged.

    Non-goals:
        - Does not persist itself.
        - Does not guard against concurrent mutation; callers serialize
          writes per group.
    """

    group_name: str
    created_by: str
    members: list[Member] = field(default_factory=list)
    expenses: list[ExpenseEntry] = field(default_factory=list)
    trip_id: str | None = None
    currency: str = DEFAULT_CURRENCY
    status: GroupStatus = GroupStatus.ACTIVE
    group_id: str = field(default_factory=lambda: uuid4().hex)
    created_at: datetime | None = None
    clock: Clock = field(default_factory=SystemClock, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.group_name or not self.group_name.strip():
            raise ValueError("group_name is required")
        self.group_name = self.group_name.strip()
        if not self.created_by or not self.created_by.strip():
            raise ValueError("created_by is required")

        self.currency = _normalize_currency(self.currency)
        self.status = coerce_status(self.status)
        if self.created_at is None:
            self.created_at = self.clock.now()

        initial = list(self.members)
        self.members = []
        for m in initial:
            if isinstance(m, Member):
                self.add_member(m.name, m.email)
            elif isinstance(m, dict):
                self.add_member(m.get("name"), m.get("email"))
            else:
                self.add_member(m)

        for entry in self.expenses:
            validate_expense(entry)
        self.expenses = list(self.expenses)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def total_amount(self) -> Decimal:
        """Sum of all expense amounts, recomputed from the log."""
        return sum((e.amount for e in self.expenses), ZERO)

    @property
    def member_names(self) -> tuple[ParticipantId, ...]:
        return tuple(m.name for m in self.members)

    def snapshot(self) -> LedgerSnapshot:
        """Immutable view of members and expenses for the engines."""
        return LedgerSnapshot(
            members=self.member_names,
            expenses=tuple(self.expenses),
            currency=self.currency,
            group_id=self.group_id,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_member(self, name: str, email: str | None = None) -> Member:
        """
        Add a participant.

        Raises:
            InvalidMemberError: If the name is blank.
            MemberAlreadyExistsError: If the name, or a non-empty email,
                is already used by a member.
        """
        with LogContext.bind(group_id=self.group_id):
            member = Member(name=name, email=email)
            for existing in self.members:
                if existing.name == member.name or (
                    member.email is not None and existing.email == member.email
                ):
                    raise MemberAlreadyExistsError(member.name, member.email)

            self.members.append(member)
            logger.info("member_added", extra={
                "member": member.name,
                "member_count": len(self.members),
            })
            return member

    def add_expense(
        self,
        description: str,
        amount: Decimal | int | str | float,
        paid_by: ParticipantId,
        split_among: Sequence[ParticipantId] | str | None = None,
    ) -> ExpenseEntry:
        """
        Append an expense to the log.

        ``split_among=None`` splits among every current member; a single
        participant may be given as a bare string; an explicit empty
        sequence is rejected.

        Raises:
            InvalidExpenseError: If the entry fails ``validate_expense``.
        """
        if split_among is None:
            split_among = self.member_names

        with LogContext.bind(group_id=self.group_id):
            try:
                # ExpenseEntry normalizes the split, including a bare string
                entry = ExpenseEntry(
                    description=description,
                    amount=amount,
                    paid_by=paid_by,
                    split_among=split_among,
                    date=self.clock.now(),
                )
                validate_expense(entry)
            except InvalidExpenseError as e:
                logger.warning("expense_rejected", extra={"reason": e.reason})
                raise

            self.expenses.append(entry)
            logger.info("expense_added", extra={
                "expense_id": entry.expense_id,
                "amount": str(entry.amount),
                "split_count": len(entry.split_among),
            })
            return entry

    def remove_expense(self, expense_id: str) -> ExpenseEntry:
        """
        Remove an expense by id and return it.

        Raises:
            ExpenseNotFoundError: If no expense has ``expense_id``.
        """
        with LogContext.bind(group_id=self.group_id):
            for i, entry in enumerate(self.expenses):
                if entry.expense_id == expense_id:
                    del self.expenses[i]
                    logger.info("expense_removed", extra={"expense_id": expense_id})
                    return entry
            raise ExpenseNotFoundError(expense_id)

    def update_status(self, status: GroupStatus | str) -> GroupStatus:
        """Set the caller-controlled lifecycle label."""
        new_status = coerce_status(status)
        old_status = self.status
        self.status = new_status
        with LogContext.bind(group_id=self.group_id):
            logger.info("group_status_updated", extra={
                "from_status": old_status.value,
                "to_status": new_status.value,
            })
        return new_status

    def extend_expenses(self, entries: Iterable[ExpenseEntry]) -> None:
        """Append pre-built entries (e.g. loaded from a store) after validation."""
        staged = list(entries)
        for entry in staged:
            validate_expense(entry)
        self.expenses.extend(staged)
