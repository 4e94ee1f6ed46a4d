"""Summaries derived from a plan on demand."""
from __future__ import annotations

import math
from typing import Dict, List, Tuple, Union

from .models import NO_DIET, Guest, TablePlan, is_blank


def summarize(plan: TablePlan) -> Dict[str, int]:
    """Count guests per diet for catering, leaving out ``"None"``."""
    counts: Dict[str, int] = {}
    for table in plan:
        for guest in table.guests:
            if not is_blank(guest.diet) and guest.diet != NO_DIET:
                counts[guest.diet] = counts.get(guest.diet, 0) + 1
    return counts


def estimated_table_count(guest_count: int, capacity: int) -> int:
    if capacity < 1:
        raise ValueError(f"Table capacity must be at least 1, got {capacity}")
    return math.ceil(guest_count / capacity)


def over_capacity_tables(plan: TablePlan) -> List[int]:
    """Indices of tables holding more guests than the configured capacity."""
    return [i for i, table in enumerate(plan) if table.is_over_capacity(plan.config.capacity)]


def find_guests(plan: TablePlan, query: str) -> List[Tuple[int, int, Guest]]:
    """Case-insensitive name search returning ``(table_index, guest_index, guest)``."""
    needle = (query or "").strip().lower()
    if not needle:
        return []
    return [
        (table_index, guest_index, guest)
        for table_index, table in enumerate(plan)
        for guest_index, guest in enumerate(table.guests)
        if needle in guest.name.lower()
    ]


def table_report(plan: TablePlan) -> List[Dict[str, Union[str, int, bool]]]:
    """One row per table with size, capacity warnings and derived tags."""
    capacity = plan.config.capacity
    return [
        {
            "table": table.label(plan.config.shape),
            "guests": len(table),
            "capacity": capacity,
            "over_capacity": table.is_over_capacity(capacity),
            "restrictions": "|".join(table.restrictions),
            "attribute_tag": table.attribute_tag or "",
        }
        for table in plan
    ]
