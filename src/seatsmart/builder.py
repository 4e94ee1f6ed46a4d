"""Chunk an ordered guest sequence into tables."""
from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Sequence

from .models import Guest, RawRecord, Table, TableConfig, TablePlan
from .resolver import resolve_all
from .strategies import order

logger = logging.getLogger(__name__)


def chunk(guests: Sequence[Guest], size: int) -> List[Sequence[Guest]]:
    """Split ``guests`` into consecutive runs of ``size``; the last may be short."""
    return [guests[i:i + size] for i in range(0, len(guests), size)]


def build(ordered_guests: Sequence[Guest], config: TableConfig) -> TablePlan:
    """Seat guests in the given order, ``config.capacity`` per table.

    Table ids follow chunk order starting at 0. No randomness is involved, so
    the same ordered guests and config always give the same plan.
    """
    tables = tuple(
        Table.build(table_id, seats, config)
        for table_id, seats in enumerate(chunk(list(ordered_guests), config.capacity))
    )
    logger.debug("Built %d tables of up to %d for %d guests", len(tables), config.capacity, len(ordered_guests))
    return TablePlan(tables=tables, config=config)


def generate_plan(
    records: Iterable[RawRecord],
    config: TableConfig,
    shuffle: bool = False,
    rng: Optional[random.Random] = None,
) -> TablePlan:
    """Resolve, order and seat raw records in one pass."""
    guests = resolve_all(records)
    if not guests:
        logger.info("No guests to seat; returning an empty plan")
        return TablePlan(config=config)
    plan = build(order(guests, config, shuffle=shuffle, rng=rng), config)
    logger.info("Seating plan generated with %d tables for %d guests", len(plan), plan.guest_count)
    return plan
