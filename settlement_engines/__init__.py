"""
Module: settlement_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    settlement engines. This is the import surface for callers such as
    request handlers of the expense-group API.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import settlement_kernel.

Invariants enforced:
    - Purity: engines never read a clock, a file, or the environment.
    - Decimal-only arithmetic; floats are converted at the domain boundary.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from settlement_engines import compute_balances, plan_settlement, build_report
"""

from settlement_engines.balances import BalanceCalculator, compute_balances
from settlement_engines.report import (
    SettlementReport,
    SettlementReportBuilder,
    build_report,
)
from settlement_engines.settlement import SettlementPlanner, Transfer, plan_settlement
from settlement_engines.verification import (
    ConservationCheck,
    SettlementCheck,
    check_conservation,
    check_settlement,
)

__all__ = [
    "BalanceCalculator",
    "compute_balances",
    "SettlementPlanner",
    "Transfer",
    "plan_settlement",
    "SettlementReport",
    "SettlementReportBuilder",
    "build_report",
    "ConservationCheck",
    "SettlementCheck",
    "check_conservation",
    "check_settlement",
]
