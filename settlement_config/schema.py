"""
SettlementConfigurationSet schema.

Human-authored, reviewable configuration for the settlement engines and
group defaults. YAML files are parsed into these frozen types by the
loader; ``bridges`` turns them into kernel inputs.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SettlementSection:
    """Numeric and matching rules (``settlement:`` in root.yaml)."""

    decimal_places: int = 2
    tolerance: str = "0.01"
    ordering: str = "magnitude"  # magnitude | insertion
    rounding: str = "ROUND_HALF_UP"


@dataclass(frozen=True)
class GroupDefaults:
    """Defaults applied to newly created groups (``group:`` in root.yaml)."""

    default_currency: str = "INR"
    default_status: str = "active"


@dataclass(frozen=True)
class SettlementConfigurationSet:
    """A complete, identified configuration set."""

    config_id: str
    version: int
    settlement: SettlementSection
    group: GroupDefaults
    checksum: str = ""
