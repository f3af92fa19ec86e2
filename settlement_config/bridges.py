"""
Config -> Kernel Bridges.

Convert a SettlementConfigurationSet into kernel inputs. These live in
settlement_config (the producer) because the kernel must never import
settlement_config.

Usage:
    from settlement_config import get_active_config
    from settlement_config.bridges import build_settlement_policy

    policy = build_settlement_policy(get_active_config())
"""

from __future__ import annotations

from settlement_config.schema import SettlementConfigurationSet
from settlement_kernel.domain.ledger import ExpenseGroup, GroupStatus, coerce_status
from settlement_kernel.domain.policy import MatchOrdering, SettlementPolicy


def build_settlement_policy(config: SettlementConfigurationSet) -> SettlementPolicy:
    """
    Build the kernel SettlementPolicy from the ``settlement`` section.

    Raises:
        ValueError: if any value is rejected by SettlementPolicy.
    """
    section = config.settlement
    try:
        ordering = MatchOrdering(section.ordering)
    except ValueError as e:
        raise ValueError(f"Unknown ordering in config {config.config_id}: {section.ordering!r}") from e

    return SettlementPolicy(
        decimal_places=section.decimal_places,
        tolerance=section.tolerance,
        ordering=ordering,
        rounding=section.rounding,
    )


def default_group_status(config: SettlementConfigurationSet) -> GroupStatus:
    return coerce_status(config.group.default_status)


def new_group(config: SettlementConfigurationSet, group_name: str, created_by: str, **kwargs) -> ExpenseGroup:
    """Create an ExpenseGroup with the configured currency and status defaults."""
    kwargs.setdefault("currency", config.group.default_currency)
    kwargs.setdefault("status", default_group_status(config))
    return ExpenseGroup(group_name=group_name, created_by=created_by, **kwargs)
