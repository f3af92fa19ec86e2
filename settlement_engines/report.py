"""
Module: settlement_engines.report
Responsibility:
    Package the output of one settlement run: total spend, per-participant
    balances, the transfer list, and the even per-head share.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Composes BalanceCalculator and SettlementPlanner over a LedgerSnapshot.

Invariants enforced:
    - ``balances`` are exposed at full precision, exactly as computed.
    - Rounding is applied only to ``per_person`` (and, in the planner, to
      transfer amounts).
    - ``per_person`` uses the current member count, not the number of
      participants appearing in expenses; an empty group reports zero.

Failure modes:
    - InvalidExpenseError propagated from the balance calculator.
    - A settlement that leaves residuals above tolerance is logged as a
      warning, never raised.

Usage:
    from settlement_engines.report import build_report

    report = build_report(group)
    payload = report.to_dict()
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import uuid4

from settlement_engines.balances import BalanceCalculator
from settlement_engines.settlement import SettlementPlanner, Transfer
from settlement_engines.tracer import traced_engine
from settlement_engines.verification import check_settlement
from settlement_kernel.domain.ledger import ExpenseGroup, LedgerSnapshot
from settlement_kernel.domain.policy import DEFAULT_POLICY, SettlementPolicy
from settlement_kernel.domain.values import ZERO, ParticipantId, round_amount
from settlement_kernel.logging_config import LogContext, get_logger

logger = get_logger("engines.report")


@dataclass(frozen=True)
class SettlementReport:
    """
    Result of settling one expense group.

    Non-goals:
        - Not persisted; callers decide whether to store it or mark the
          group settled.
    """

    total_amount: Decimal
    balances: dict[ParticipantId, Decimal]
    settlements: tuple[Transfer, ...]
    per_person: Decimal
    currency: str
    member_count: int

    @property
    def is_settled(self) -> bool:
        """True when nobody needs to pay anybody."""
        return not self.settlements

    def to_dict(self) -> dict:
        """Caller-facing payload; Decimals are rendered as strings."""
        return {
            "totalAmount": str(self.total_amount),
            "balances": {pid: str(b) for pid, b in self.balances.items()},
            "settlements": [t.to_dict() for t in self.settlements],
            "perPerson": str(self.per_person),
            "currency": self.currency,
        }


class SettlementReportBuilder:
    """Run the balance and settlement engines for one group snapshot."""

    def __init__(
        self,
        policy: SettlementPolicy | None = None,
        calculator: BalanceCalculator | None = None,
        planner: SettlementPlanner | None = None,
    ):
        self.policy = policy or DEFAULT_POLICY
        self.calculator = calculator or BalanceCalculator()
        self.planner = planner or SettlementPlanner(self.policy)

    def build(self, group: ExpenseGroup | LedgerSnapshot) -> SettlementReport:
        """
        Settle one group.

        Engine records of the run share ``group_id`` and a correlation id;
        a correlation id already bound by the caller is kept.
        """
        snapshot = group.snapshot() if isinstance(group, ExpenseGroup) else group
        with LogContext.bind(
            group_id=snapshot.group_id,
            correlation_id=LogContext.get("correlation_id") or uuid4().hex,
        ):
            return self._build(snapshot)

    @traced_engine("settlement_report", "1.0")
    def _build(self, snapshot: LedgerSnapshot) -> SettlementReport:
        policy = self.policy

        balances = self.calculator.compute(snapshot.members, snapshot.expenses)
        settlements = self.planner.plan(balances)
        total_amount = snapshot.total_amount

        member_count = len(snapshot.members)
        if member_count == 0:
            per_person = round_amount(ZERO, policy.decimal_places, policy.rounding)
        else:
            per_person = round_amount(
                total_amount / member_count, policy.decimal_places, policy.rounding
            )

        check = check_settlement(balances, settlements, policy.tolerance)
        if not check.is_settled:
            logger.warning("settlement_residual_exceeds_tolerance", extra={
                "unsettled": {pid: str(r) for pid, r in check.unsettled.items()},
                "tolerance": str(policy.tolerance),
            })

        logger.info("settlement_report_built", extra={
            "total_amount": str(total_amount),
            "member_count": member_count,
            "participant_count": len(balances),
            "transfer_count": len(settlements),
            "currency": snapshot.currency,
        })

        return SettlementReport(
            total_amount=total_amount,
            balances=balances,
            settlements=settlements,
            per_person=per_person,
            currency=snapshot.currency,
            member_count=member_count,
        )


def build_report(
    group: ExpenseGroup | LedgerSnapshot,
    policy: SettlementPolicy | None = None,
) -> SettlementReport:
    """Convenience wrapper around ``SettlementReportBuilder.build``."""
    return SettlementReportBuilder(policy).build(group)
