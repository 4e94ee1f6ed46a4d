"""Data models for SeatSmart."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple
import math

RawRecord = Mapping[str, Any]

UNKNOWN_GUEST = "Unknown Guest"
NO_DIET = "None"


class SeatingError(ValueError):
    """Base class for errors raised by the seating engine."""


class ConfigError(SeatingError):
    """Invalid table configuration."""


class InvalidMoveError(SeatingError):
    """A move request referenced a table or guest that does not exist."""


def is_blank(value: object) -> bool:
    """Return ``True`` for values that count as an empty spreadsheet cell.

    ``None``, whitespace-only strings and ``float('nan')`` (what ``pandas``
    uses for missing cells) are all blank.
    """
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def cell_text(value: object) -> str:
    """Render a non-blank cell as stripped text."""
    return str(value).strip()


class Strategy(str, Enum):
    SEQUENTIAL = "sequential"
    RANDOM = "random"
    GROUP_DIET = "group_diet"
    GROUP_ATTRIBUTE = "group_attribute"
    SEPARATE_ATTRIBUTE = "separate_attribute"

    @property
    def is_attribute_based(self) -> bool:
        return self in (Strategy.GROUP_ATTRIBUTE, Strategy.SEPARATE_ATTRIBUTE)


class TableShape(str, Enum):
    ROUND = "round"
    RECTANGLE = "rectangle"
    GROUPS = "groups"


class EventType(str, Enum):
    MEAL = "meal"
    WORKSHOP = "workshop"


def _coerce(enum_cls, value, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Unknown {label} {value!r}; expected one of: {choices}") from None


@dataclass(frozen=True, eq=False)
class Guest:
    """A resolved, display-ready guest.

    ``attributes`` is the originating record itself, not a copy, so any
    column can still be read by name after resolution. Equality is identity:
    two rows with the same name are still two guests.
    """

    name: str
    diet: str = NO_DIET
    attributes: RawRecord = field(default_factory=dict, repr=False)

    @property
    def has_restriction(self) -> bool:
        return not is_blank(self.diet) and self.diet.strip().lower() != "none"

    def get(self, column: str, default: Any = None) -> Any:
        return self.attributes.get(column, default)


@dataclass(frozen=True)
class TableConfig:
    """Session configuration passed into every planning call."""

    capacity: int = 8
    strategy: Strategy = Strategy.SEQUENTIAL
    group_by_column: Optional[str] = None
    shape: TableShape = TableShape.ROUND
    event_type: EventType = EventType.MEAL

    def __post_init__(self) -> None:
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, int):
            raise ConfigError(f"Table capacity must be an integer, got {self.capacity!r}")
        if self.capacity < 1:
            raise ConfigError(f"Table capacity must be at least 1, got {self.capacity}")
        # frozen, so normalise through object.__setattr__
        object.__setattr__(self, "strategy", _coerce(Strategy, self.strategy, "strategy"))
        object.__setattr__(self, "shape", _coerce(TableShape, self.shape, "table shape"))
        object.__setattr__(self, "event_type", _coerce(EventType, self.event_type, "event type"))
        if self.group_by_column is not None and not str(self.group_by_column).strip():
            object.__setattr__(self, "group_by_column", None)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TableConfig":
        """Build a config from loosely typed values such as CLI or JSON input."""
        kwargs: Dict[str, Any] = {}
        if data.get("capacity") is not None:
            try:
                kwargs["capacity"] = int(data["capacity"])
            except (TypeError, ValueError):
                raise ConfigError(f"Table capacity must be an integer, got {data['capacity']!r}") from None
        for key in ("strategy", "shape", "event_type"):
            if data.get(key) is not None:
                kwargs[key] = str(data[key]).strip().lower()
        if data.get("group_by_column") is not None:
            kwargs["group_by_column"] = str(data["group_by_column"])
        return cls(**kwargs)

    @property
    def tags_attributes(self) -> bool:
        """Whether tables carry an attribute tag under this config."""
        return self.strategy.is_attribute_based and self.group_by_column is not None


def _restrictions(guests: Sequence[Guest]) -> Tuple[str, ...]:
    seen: Dict[str, None] = {}
    for guest in guests:
        if guest.has_restriction:
            seen.setdefault(guest.diet, None)
    return tuple(seen)


def attribute_tag(guests: Sequence[Guest], column: str) -> Optional[str]:
    """Summarise the distinct non-blank values of ``column`` at one table."""
    values: Dict[str, None] = {}
    for guest in guests:
        value = guest.get(column)
        if not is_blank(value):
            values.setdefault(str(value), None)
    distinct = list(values)
    if not distinct:
        return None
    if len(distinct) == 1:
        return distinct[0]
    if len(distinct) == 2:
        return f"Mixed: {distinct[0]} & {distinct[1]}"
    return "Mixed Group"


@dataclass(frozen=True)
class Table:
    """One table of a plan with metadata derived from its guests."""

    id: int
    guests: Tuple[Guest, ...] = ()
    has_restrictions: bool = False
    restrictions: Tuple[str, ...] = ()
    attribute_tag: Optional[str] = None

    @classmethod
    def build(cls, table_id: int, guests: Sequence[Guest], config: TableConfig) -> "Table":
        """Create a table, computing every derived field from ``guests``."""
        guests = tuple(guests)
        restrictions = _restrictions(guests)
        tag = attribute_tag(guests, config.group_by_column) if config.tags_attributes else None
        return cls(
            id=table_id,
            guests=guests,
            has_restrictions=bool(restrictions),
            restrictions=restrictions,
            attribute_tag=tag,
        )

    def __len__(self) -> int:
        return len(self.guests)

    @property
    def number(self) -> int:
        return self.id + 1

    def label(self, shape: TableShape = TableShape.ROUND) -> str:
        prefix = "Group" if shape == TableShape.GROUPS else "Table"
        return f"{prefix} {self.number}"

    def is_over_capacity(self, capacity: int) -> bool:
        return len(self.guests) > capacity


@dataclass(frozen=True)
class TablePlan:
    """Ordered tables produced by one generation pass."""

    tables: Tuple[Table, ...] = ()
    config: TableConfig = field(default_factory=TableConfig)

    def __len__(self) -> int:
        return len(self.tables)

    def __getitem__(self, index: int) -> Table:
        return self.tables[index]

    def __iter__(self) -> Iterator[Table]:
        return iter(self.tables)

    @property
    def guests(self) -> List[Guest]:
        return [guest for table in self.tables for guest in table.guests]

    @property
    def guest_count(self) -> int:
        return sum(len(table) for table in self.tables)

    def sizes(self) -> List[int]:
        return [len(table) for table in self.tables]
