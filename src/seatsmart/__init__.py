"""SeatSmart package."""
from .models import (
    ConfigError,
    EventType,
    Guest,
    InvalidMoveError,
    SeatingError,
    Strategy,
    Table,
    TableConfig,
    TablePlan,
    TableShape,
)
from .resolver import available_columns, default_group_column, resolve, resolve_all
from .strategies import order
from .builder import build, generate_plan
from .mutator import move_guest, move_to_table_number
from .stats import summarize
from .loader import load_records, sample_records

__all__ = [
    "ConfigError",
    "EventType",
    "Guest",
    "InvalidMoveError",
    "SeatingError",
    "Strategy",
    "Table",
    "TableConfig",
    "TablePlan",
    "TableShape",
    "available_columns",
    "default_group_column",
    "resolve",
    "resolve_all",
    "order",
    "build",
    "generate_plan",
    "move_guest",
    "move_to_table_number",
    "summarize",
    "load_records",
    "sample_records",
]
