"""
Policy -- Settlement numeric and matching policy.

Responsibility:
    Frozen value object carrying the knobs the settlement engines honour:
    output precision, the zero-tolerance band, the rounding mode, and the
    order in which creditors and debtors are matched.

Architecture position:
    Kernel > Domain -- pure value object. Built from YAML by
    ``settlement_config.bridges``; the kernel never imports the config
    package.

Failure modes:
    - ValueError on construction with out-of-range precision, a
      non-positive tolerance, or an unknown rounding mode.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from settlement_kernel.domain.values import quantum, to_amount

_ROUNDING_MODES = frozenset(
    getattr(decimal, name) for name in dir(decimal) if name.startswith("ROUND_")
)


class MatchOrdering(str, Enum):
    """Order in which creditors and debtors are paired."""

    MAGNITUDE = "magnitude"  # Largest remaining balance first
    INSERTION = "insertion"  # Order balances were discovered


@dataclass(frozen=True)
class SettlementPolicy:
    """
    Numeric and matching rules for settlement.

    Contract:
        Immutable configuration shared by the planner and report builder.

    Guarantees:
        - ``tolerance`` is a positive Decimal.
        - ``decimal_places`` is between 0 and 6.
        - ``rounding`` is one of the ``decimal`` module's ROUND_* modes.
    """

    decimal_places: int = 2
    tolerance: Decimal = Decimal("0.01")
    ordering: MatchOrdering = MatchOrdering.MAGNITUDE
    rounding: str = ROUND_HALF_UP

    def __post_init__(self) -> None:
        if isinstance(self.decimal_places, bool) or not isinstance(self.decimal_places, int):
            raise ValueError(f"decimal_places must be an int, got {self.decimal_places!r}")
        if not 0 <= self.decimal_places <= 6:
            raise ValueError(f"decimal_places out of range: {self.decimal_places}")

        tolerance = to_amount(self.tolerance)
        if tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {tolerance}")
        object.__setattr__(self, "tolerance", tolerance)

        if not isinstance(self.ordering, MatchOrdering):
            try:
                object.__setattr__(self, "ordering", MatchOrdering(self.ordering))
            except ValueError as e:
                raise ValueError(f"Unknown match ordering: {self.ordering!r}") from e

        if self.rounding not in _ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode: {self.rounding!r}")

    @property
    def quantum(self) -> Decimal:
        """Smallest output unit (0.01 for two decimal places)."""
        return quantum(self.decimal_places)


DEFAULT_POLICY = SettlementPolicy()
