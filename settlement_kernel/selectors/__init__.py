"""Read-only query helpers over expense groups."""

from settlement_kernel.selectors.group_selector import GroupSelector

__all__ = ["GroupSelector"]
