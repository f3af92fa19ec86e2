"""
Module: settlement_kernel.selectors.group_selector
Responsibility: Read-only lookup and filtering over a collection of expense
    groups held by the caller (e.g. the page of groups a ledger store
    returned).
Architecture position: Kernel > Selectors. Imports only domain types.
    Selectors NEVER create, modify, or delete groups.

Invariants enforced:
    - Read-only access: the selector never mutates the groups it is given.
    - Deterministic ordering: newest ``created_at`` first, ties kept in the
      order the caller supplied.

Failure modes:
    - GroupNotFoundError from ``get`` for an unknown id.
    - InvalidGroupStatusError when filtering by an unknown status.
"""

from __future__ import annotations

from collections.abc import Iterable

from settlement_kernel.domain.ledger import ExpenseGroup, GroupStatus, coerce_status
from settlement_kernel.exceptions import GroupNotFoundError


class GroupSelector:
    """Query helper over an in-memory collection of ExpenseGroups."""

    def __init__(self, groups: Iterable[ExpenseGroup]):
        self._groups = tuple(groups)

    def get(self, group_id: str) -> ExpenseGroup:
        for group in self._groups:
            if group.group_id == group_id:
                return group
        raise GroupNotFoundError(group_id)

    def for_user(
        self,
        user_id: str | None = None,
        status: GroupStatus | str | None = None,
    ) -> list[ExpenseGroup]:
        """
        Groups visible to a user, newest first.

        A group matches ``user_id`` when the user created it or is a member
        whose email equals ``user_id`` (case-insensitive). ``None`` for
        either filter disables it.
        """
        wanted_status = coerce_status(status) if status is not None else None
        needle = user_id.strip().lower() if user_id else None

        matches = []
        for group in self._groups:
            if needle is not None and not _visible_to(group, user_id, needle):
                continue
            if wanted_status is not None and group.status != wanted_status:
                continue
            matches.append(group)

        # sorted() is stable, so equal timestamps keep input order
        return sorted(matches, key=lambda g: g.created_at, reverse=True)


def _visible_to(group: ExpenseGroup, user_id: str, email: str) -> bool:
    if group.created_by == user_id:
        return True
    return any(m.email == email for m in group.members)
