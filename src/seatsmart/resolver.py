"""Infer display names and diets from arbitrarily named spreadsheet columns.

Name inference is an ordered rule table: each rule either returns a name or
``None`` and the first hit wins. Keeping the precedence in ``NAME_RULES``
makes every branch testable on its own.

The exact ``firstname`` rule only applies once no last name resolves, so
``{"firstname": "Ann", "Surname": "Lee"}`` gives ``"Ann Lee"`` rather than
``"Ann"``.
"""
from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .models import NO_DIET, UNKNOWN_GUEST, Guest, RawRecord, cell_text, is_blank

FIRST_NAME_KEYS = {"fname", "forename", "first", "firstname"}
LAST_NAME_KEYS = {"lname", "last", "lastname"}
DIET_MARKERS = ("diet", "restriction", "allergy")


def _find_key(record: RawRecord, predicate: Callable[[str], bool]) -> Optional[str]:
    """Return the first key (in record order) whose lowercase form matches."""
    for key in record:
        if predicate(str(key).lower()):
            return key
    return None


def _value(record: RawRecord, key: Optional[str]) -> Optional[str]:
    if key is None:
        return None
    value = record.get(key)
    return None if is_blank(value) else cell_text(value)


def _exact(record: RawRecord, name: str) -> Optional[str]:
    return _value(record, _find_key(record, lambda k: k == name))


def _is_first_name_key(key: str) -> bool:
    return ("first" in key and "name" in key) or key in FIRST_NAME_KEYS


def _is_last_name_key(key: str) -> bool:
    return ("last" in key and "name" in key) or "surname" in key or key in LAST_NAME_KEYS


def _join(first: Optional[str], last: Optional[str]) -> Optional[str]:
    if first and last:
        return f"{first} {last}".strip()
    return None


def _exact_pair(record: RawRecord) -> Optional[str]:
    return _join(_exact(record, "firstname"), _exact(record, "lastname"))


def _fuzzy_pair(record: RawRecord) -> Optional[str]:
    first = _value(record, _find_key(record, _is_first_name_key))
    last = _value(record, _find_key(record, _is_last_name_key))
    return _join(first, last)


def _first_name_only(record: RawRecord) -> Optional[str]:
    return _exact(record, "firstname")


def _any_name_column(record: RawRecord) -> Optional[str]:
    key = _find_key(record, lambda k: "name" in k or "guest" in k)
    if key is None:
        key = next(iter(record), None)
    return _value(record, key)


NAME_RULES: Tuple[Tuple[str, Callable[[RawRecord], Optional[str]]], ...] = (
    ("firstname+lastname", _exact_pair),
    ("first+last columns", _fuzzy_pair),
    ("firstname only", _first_name_only),
    ("name column", _any_name_column),
)


def resolve_name(record: RawRecord) -> str:
    for _, rule in NAME_RULES:
        name = rule(record)
        if name:
            return name
    return UNKNOWN_GUEST


def resolve_diet(record: RawRecord) -> str:
    key = _find_key(record, lambda k: any(marker in k for marker in DIET_MARKERS))
    return _value(record, key) or NO_DIET


def resolve(record: RawRecord) -> Guest:
    """Turn one raw record into a :class:`Guest` sharing that record."""
    return Guest(name=resolve_name(record), diet=resolve_diet(record), attributes=record)


def resolve_all(records: Iterable[RawRecord]) -> List[Guest]:
    return [resolve(record) for record in records]


# ----------------------------- grouping columns -----------------------------
def available_columns(records: Sequence[RawRecord]) -> List[str]:
    """Column names of the first record, in order."""
    if not records:
        return []
    return list(dict.fromkeys(records[0]))


GROUP_COLUMN_RULES: Tuple[Callable[[str], bool], ...] = (
    lambda column: "name" not in column.lower() and "diet" not in column.lower(),
    lambda column: True,
)


def default_group_column(columns: Sequence[str]) -> Optional[str]:
    """Pick a sensible grouping column: the first that is not a name or diet."""
    for rule in GROUP_COLUMN_RULES:
        for column in columns:
            if rule(column):
                return column
    return None
