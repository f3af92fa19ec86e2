"""
Module: settlement_engines.balances
Responsibility:
    Reduce a group's expense log into one signed net balance per
    participant (positive = is owed money, negative = owes money).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import settlement_kernel.

Invariants enforced:
    - Conservation: the balances of a valid log sum to zero (up to the
      Decimal context's precision on non-terminating shares).
    - Full precision: shares are never rounded here; rounding belongs to
      the planner and report boundaries.
    - Historical members: the key set is the union of the current members
      and every id referenced by any expense, in order of first appearance.
    - Purity: identical inputs produce identical outputs.

Failure modes:
    - InvalidExpenseError for a non-positive amount, an empty split set,
      or a missing payer. Nothing is skipped silently.

Usage:
    from settlement_engines.balances import compute_balances

    balances = compute_balances(
        members=["Rahul", "Priya"],
        expenses=[ExpenseEntry("Hotel", "5000", "Rahul", ("Rahul", "Priya"))],
    )
    # {"Rahul": Decimal("2500"), "Priya": Decimal("-2500")}
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from settlement_engines.tracer import traced_engine
from settlement_kernel.domain.ledger import ExpenseEntry, validate_expense
from settlement_kernel.domain.values import ZERO, ParticipantId
from settlement_kernel.logging_config import get_logger

logger = get_logger("engines.balances")


class BalanceCalculator:
    """
    Compute net balances from an expense log.

    Contract:
        Pure function of ``members`` and ``expenses``; no state is kept
        between calls, so one instance may be shared freely.
    """

    @traced_engine("balances", "1.0", fingerprint_fields=("members", "expenses"))
    def compute(
        self,
        members: Iterable[ParticipantId],
        expenses: Sequence[ExpenseEntry],
    ) -> dict[ParticipantId, Decimal]:
        """
        Net balance per participant.

        Preconditions:
            - Every expense passes ``validate_expense``.

        Postconditions:
            - Every member has an entry (zero if untouched).
            - The payer is credited the full amount even when absent from
              the split; each split participant is debited amount / n.

        Raises:
            InvalidExpenseError: On the first malformed expense.
        """
        balances: dict[ParticipantId, Decimal] = {}
        for member in members:
            balances.setdefault(member, ZERO)

        for expense in expenses:
            validate_expense(expense)
            share = expense.share

            balances[expense.paid_by] = balances.get(expense.paid_by, ZERO) + expense.amount
            for participant in expense.split_among:
                balances[participant] = balances.get(participant, ZERO) - share

        logger.info("balances_computed", extra={
            "participant_count": len(balances),
            "expense_count": len(expenses),
        })
        return balances


_DEFAULT_CALCULATOR = BalanceCalculator()


def compute_balances(
    members: Iterable[ParticipantId],
    expenses: Sequence[ExpenseEntry],
) -> dict[ParticipantId, Decimal]:
    """Convenience wrapper around ``BalanceCalculator.compute``."""
    return _DEFAULT_CALCULATOR.compute(members, expenses)
