"""Manual edits to an existing plan."""
from __future__ import annotations

import logging

from .models import Guest, InvalidMoveError, Table, TablePlan

logger = logging.getLogger(__name__)


def _check_table_index(plan: TablePlan, index: int, role: str) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(plan):
        raise InvalidMoveError(f"{role} table index {index!r} is out of range (plan has {len(plan)} tables)")


def _check_guest_index(table: Table, index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(table):
        raise InvalidMoveError(f"Guest index {index!r} is out of range for {table.label()} ({len(table)} guests)")


def move_guest(
    plan: TablePlan,
    guest: Guest,
    source_index: int,
    guest_index: int,
    target_index: int,
) -> TablePlan:
    """Return a new plan with one guest moved to the end of another table.

    Only the source and target tables are rebuilt; every other table object is
    shared with ``plan``. Capacity is not enforced here. Raises
    :class:`InvalidMoveError` if an index is out of range or ``guest`` is no
    longer at ``guest_index`` in the source table.
    """
    _check_table_index(plan, source_index, "Source")
    _check_table_index(plan, target_index, "Target")
    source = plan[source_index]
    _check_guest_index(source, guest_index)
    if source.guests[guest_index] is not guest:
        raise InvalidMoveError(f"{guest.name} is no longer at position {guest_index} of {source.label()}")

    if source_index == target_index:
        return plan

    target = plan[target_index]
    remaining = source.guests[:guest_index] + source.guests[guest_index + 1:]
    tables = list(plan.tables)
    tables[source_index] = Table.build(source.id, remaining, plan.config)
    tables[target_index] = Table.build(target.id, target.guests + (guest,), plan.config)
    logger.debug("Moved %s from %s to %s", guest.name, source.label(), target.label())
    return TablePlan(tables=tuple(tables), config=plan.config)


def move_to_table_number(plan: TablePlan, source_index: int, guest_index: int, table_number: int) -> TablePlan:
    """Move using a 1-based table number, as typed by a user."""
    if isinstance(table_number, bool) or not isinstance(table_number, int) or not 1 <= table_number <= len(plan):
        raise InvalidMoveError(f"Invalid table number {table_number!r}; choose 1-{len(plan)}")
    _check_table_index(plan, source_index, "Source")
    source = plan[source_index]
    _check_guest_index(source, guest_index)
    return move_guest(plan, source.guests[guest_index], source_index, guest_index, table_number - 1)
