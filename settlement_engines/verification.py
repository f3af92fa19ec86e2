"""
Module: settlement_engines.verification
Responsibility:
    Check the two money-conservation properties of a settlement run:
    balances sum to zero, and the planned transfers drive every balance
    back to zero.

Architecture position:
    Engines -- pure calculation layer, zero I/O. Used by the report
    builder as a post-condition check and by tests as the property oracle.

Failure modes:
    - None; violations are reported in the returned check objects.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal

from settlement_engines.settlement import Transfer
from settlement_kernel.domain.values import ZERO, ParticipantId

CONSERVATION_TOLERANCE = Decimal("1e-6")
SETTLEMENT_TOLERANCE = Decimal("0.01")


@dataclass(frozen=True)
class ConservationCheck:
    """Result of summing a balance mapping."""

    total: Decimal
    tolerance: Decimal

    @property
    def is_balanced(self) -> bool:
        return abs(self.total) <= self.tolerance


@dataclass(frozen=True)
class SettlementCheck:
    """
    Result of applying transfers to balances.

    ``residuals`` maps every participant to what is left after settlement;
    the violation tuples list transfers that break the planner's guarantees.
    """

    residuals: dict[ParticipantId, Decimal]
    tolerance: Decimal
    self_transfers: tuple[Transfer, ...] = ()
    non_positive_transfers: tuple[Transfer, ...] = ()

    @property
    def unsettled(self) -> dict[ParticipantId, Decimal]:
        return {
            pid: r for pid, r in self.residuals.items()
            if abs(r) > self.tolerance
        }

    @property
    def is_settled(self) -> bool:
        return (
            not self.unsettled
            and not self.self_transfers
            and not self.non_positive_transfers
        )


def check_conservation(
    balances: Mapping[ParticipantId, Decimal],
    tolerance: Decimal = CONSERVATION_TOLERANCE,
) -> ConservationCheck:
    return ConservationCheck(total=sum(balances.values(), ZERO), tolerance=tolerance)


def check_settlement(
    balances: Mapping[ParticipantId, Decimal],
    transfers: Iterable[Transfer],
    tolerance: Decimal = SETTLEMENT_TOLERANCE,
) -> SettlementCheck:
    """
    Apply transfers to a copy of ``balances`` and report what remains.

    Paying reduces a debt, so the payer's balance rises by the amount and
    the payee's balance falls by it.
    """
    residuals = dict(balances)
    self_transfers = []
    non_positive = []

    for t in transfers:
        if t.from_id == t.to_id:
            self_transfers.append(t)
        if t.amount <= ZERO:
            non_positive.append(t)
        residuals[t.from_id] = residuals.get(t.from_id, ZERO) + t.amount
        residuals[t.to_id] = residuals.get(t.to_id, ZERO) - t.amount

    return SettlementCheck(
        residuals=residuals,
        tolerance=tolerance,
        self_transfers=tuple(self_transfers),
        non_positive_transfers=tuple(non_positive),
    )
