"""
Settlement kernel domain layer.

Pure value objects and the expense group aggregate. No I/O.
"""

from settlement_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from settlement_kernel.domain.ledger import (
    DEFAULT_CURRENCY,
    ExpenseEntry,
    ExpenseGroup,
    GroupStatus,
    LedgerSnapshot,
    Member,
    coerce_status,
    validate_expense,
)
from settlement_kernel.domain.policy import (
    DEFAULT_POLICY,
    MatchOrdering,
    SettlementPolicy,
)
from settlement_kernel.domain.values import (
    ZERO,
    ParticipantId,
    quantum,
    round_amount,
    to_amount,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "DEFAULT_CURRENCY",
    "ExpenseEntry",
    "ExpenseGroup",
    "GroupStatus",
    "LedgerSnapshot",
    "Member",
    "coerce_status",
    "validate_expense",
    "DEFAULT_POLICY",
    "MatchOrdering",
    "SettlementPolicy",
    "ZERO",
    "ParticipantId",
    "quantum",
    "round_amount",
    "to_amount",
]
