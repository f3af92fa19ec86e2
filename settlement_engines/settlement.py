"""
Module: settlement_engines.settlement
Responsibility:
    Turn net balances into a short list of directed transfers (who pays
    whom, how much) that brings every balance to zero.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import settlement_kernel.

Algorithm (greedy largest-remaining matching):
    1. Balances within ``policy.tolerance`` of zero are settled and excluded.
    2. The rest are converted to the policy's minor units (cents) with a
       largest-remainder apportionment: each amount moves by less than one
       unit and the rounded amounts sum to the rounded total, so a balanced
       input stays exactly balanced after rounding.
    3. Creditors and debtors are ordered (largest first, or discovery order
       under ``MatchOrdering.INSERTION``) and paired with two cursors; each
       step settles the smaller side in full.

    Amounts are rounded before matching, not per transfer. Insertion
    ordering therefore reproduces the legacy pairing but not its amounts:
    10.00 paid by A and split three ways settles as 3.34 + 3.33 here,
    where rounding each matched amount gave 3.33 + 3.33 and left A a cent
    short.

Invariants enforced:
    - Every transfer has amount > 0 and from_id != to_id.
    - Applying the transfers to the input balances leaves each participant
      within one minor unit of zero when the balances sum to zero.
    - Deterministic: ties keep discovery order; identical inputs give
      identical transfer lists.

Failure modes:
    - None for well-formed balances. An all-settled input yields ().

Usage:
    from settlement_engines.settlement import plan_settlement

    plan_settlement({"Rahul": Decimal("2500"), "Priya": Decimal("-2500")})
    # (Transfer(from_id="Priya", to_id="Rahul", amount=Decimal("2500.00")),)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal

from settlement_engines.tracer import traced_engine
from settlement_kernel.domain.policy import DEFAULT_POLICY, MatchOrdering, SettlementPolicy
from settlement_kernel.domain.values import ZERO, ParticipantId, round_amount
from settlement_kernel.logging_config import get_logger

logger = get_logger("engines.settlement")


@dataclass(frozen=True)
class Transfer:
    """
    One directed payment: ``from_id`` pays ``amount`` to ``to_id``.

    Guarantees:
        - amount > 0
        - from_id != to_id
    """

    from_id: ParticipantId
    to_id: ParticipantId
    amount: Decimal

    def __post_init__(self) -> None:
        if self.from_id == self.to_id:
            raise ValueError(f"Self-transfer for participant {self.from_id!r}")
        if self.amount <= ZERO:
            raise ValueError(f"Transfer amount must be positive, got {self.amount}")

    def to_dict(self) -> dict[str, str]:
        return {"from": self.from_id, "to": self.to_id, "amount": str(self.amount)}


class SettlementPlanner:
    """
    Plan transfers that settle a balance mapping.

    Contract:
        Stateless apart from its policy; ``plan`` may be called
        concurrently from several threads.
    """

    def __init__(self, policy: SettlementPolicy | None = None):
        self.policy = policy or DEFAULT_POLICY

    @traced_engine("settlement", "1.0", fingerprint_fields=("balances",))
    def plan(self, balances: Mapping[ParticipantId, Decimal]) -> tuple[Transfer, ...]:
        """
        Transfers settling ``balances``.

        Postconditions:
            - No transfer involves a participant within tolerance of zero.
            - Transfer amounts carry exactly ``policy.decimal_places`` digits.
        """
        policy = self.policy
        tolerance = policy.tolerance

        open_balances = [
            (pid, amount) for pid, amount in balances.items()
            if amount > tolerance or amount < -tolerance
        ]
        rounded = self._apportion(open_balances)

        creditors = [[pid, amount] for pid, amount in rounded if amount > ZERO]
        debtors = [[pid, -amount] for pid, amount in rounded if amount < ZERO]

        if policy.ordering is MatchOrdering.MAGNITUDE:
            # list.sort is stable: equal magnitudes keep discovery order
            creditors.sort(key=lambda c: c[1], reverse=True)
            debtors.sort(key=lambda d: d[1], reverse=True)

        transfers: list[Transfer] = []
        i = j = 0
        while i < len(debtors) and j < len(creditors):
            debtor = debtors[i]
            creditor = creditors[j]
            amount = min(debtor[1], creditor[1])

            transfers.append(Transfer(
                from_id=debtor[0],
                to_id=creditor[0],
                amount=round_amount(amount, policy.decimal_places, policy.rounding),
            ))

            debtor[1] -= amount
            creditor[1] -= amount

            if debtor[1] < tolerance:
                i += 1
            if creditor[1] < tolerance:
                j += 1

        unmatched = sum((d[1] for d in debtors[i:]), ZERO) + sum(
            (c[1] for c in creditors[j:]), ZERO
        )
        if unmatched >= tolerance:
            logger.warning("settlement_unmatched_remainder", extra={
                "unmatched": str(unmatched),
                "tolerance": str(tolerance),
            })

        logger.info("settlement_planned", extra={
            "creditor_count": len(creditors),
            "debtor_count": len(debtors),
            "transfer_count": len(transfers),
            "ordering": policy.ordering.value,
        })
        return tuple(transfers)

    def _apportion(
        self,
        entries: list[tuple[ParticipantId, Decimal]],
    ) -> list[tuple[ParticipantId, Decimal]]:
        """
        Round signed balances to minor units without breaking their total.

        Every value is floored to the quantum, then the units needed to reach
        the rounded total go to the largest fractional remainders (ties to
        the earliest participant). Entries that round to zero are dropped.
        """
        if not entries:
            return []

        q = self.policy.quantum
        values = [amount for _, amount in entries]
        floors = [v.quantize(q, rounding=ROUND_FLOOR) for v in values]
        target = sum(values, ZERO).quantize(q, rounding=self.policy.rounding)
        extra_units = int((target - sum(floors, ZERO)) / q)

        ranked = sorted(range(len(values)), key=lambda k: (floors[k] - values[k], k))
        for k in ranked[:extra_units]:
            floors[k] += q

        return [
            (pid, floors[k]) for k, (pid, _) in enumerate(entries)
            if floors[k] != ZERO
        ]


def plan_settlement(
    balances: Mapping[ParticipantId, Decimal],
    policy: SettlementPolicy | None = None,
) -> tuple[Transfer, ...]:
    """Convenience wrapper around ``SettlementPlanner.plan``."""
    return SettlementPlanner(policy).plan(balances)
