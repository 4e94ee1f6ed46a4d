"""Flatten a plan into rows for spreadsheets and reports."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from .models import EventType, SeatingError, TablePlan, is_blank

TABLE_COLUMN = "Table Number"
NAME_COLUMN = "Guest Name"
DIET_COLUMN = "Dietary Restrictions"
SHEET_NAME = "Seating Plan"


class ExportError(SeatingError):
    """The plan could not be written."""


def export_columns(plan: TablePlan) -> List[str]:
    config = plan.config
    columns = [TABLE_COLUMN, NAME_COLUMN]
    if config.event_type == EventType.MEAL:
        columns.append(DIET_COLUMN)
    if config.tags_attributes:
        columns.append(config.group_by_column)
    return columns


def export_rows(plan: TablePlan) -> List[Dict[str, Any]]:
    """One row per seated guest.

    The diet column appears in meal mode only and the grouping column only
    for attribute strategies.
    """
    config = plan.config
    rows = []
    for table in plan:
        for guest in table.guests:
            row: Dict[str, Any] = {TABLE_COLUMN: table.number, NAME_COLUMN: guest.name}
            if config.event_type == EventType.MEAL:
                row[DIET_COLUMN] = guest.diet
            if config.tags_attributes:
                value = guest.get(config.group_by_column)
                row[config.group_by_column] = "" if is_blank(value) else value
            rows.append(row)
    return rows


def plan_frame(plan: TablePlan) -> pd.DataFrame:
    return pd.DataFrame(export_rows(plan), columns=export_columns(plan))


def write_plan(plan: TablePlan, path: Path | str) -> Path:
    """Write the plan to ``.csv`` or ``.xlsx``."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in (".csv", ".xlsx"):
        raise ExportError(f"Unsupported export format {suffix!r}; use .csv or .xlsx")
    path.parent.mkdir(parents=True, exist_ok=True)
    df = plan_frame(plan)
    if suffix == ".csv":
        df.to_csv(path, index=False)
    else:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
    return path
