"""Spreadsheet loading utilities."""
from __future__ import annotations

import json
from pathlib import Path
from typing import IO, Any, Dict, List, Tuple

import pandas as pd

from .models import SeatingError
from .resolver import available_columns

TEMPLATE_COLUMNS = ["First Name", "Last Name", "Dietary Restrictions", "Department", "Role", "Group"]
SAMPLE_GROUP_COLUMN = "language"

_SAMPLE_NAMES = [
    "Alice", "Bob", "Charlie", "David", "Eve", "Frank", "Grace", "Heidi", "Ivan", "Judy",
    "Mallory", "Niaj", "Olivia", "Peggy", "Rupert", "Sybil", "Ted", "Victor", "Walter",
]
_SAMPLE_DIETS = [
    "None", "None", "Vegetarian", "None", "Gluten-Free", "None", "None", "Vegan", "None", "Nut Allergy",
    "None", "None", "None", "None", "Vegetarian", "None", "None", "None", "None",
]
_SAMPLE_DEPARTMENTS = ["Sales", "Marketing", "Engineering", "HR", "Product", "Legal"]
_SAMPLE_LANGUAGES = ["English", "Spanish", "French", "German", "Mandarin", "Hindi"]


class LoaderError(SeatingError):
    """The guest list could not be read."""


def _ensure_path(path: Path | str) -> Path:
    return Path(path)


def records_from_frame(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert a DataFrame into one dict per row, column order preserved.

    Missing cells become ``None``.
    """
    df = df.astype(object).where(pd.notna(df), None)
    columns = [str(col) for col in df.columns]
    return [dict(zip(columns, row)) for row in df.itertuples(index=False, name=None)]


def _read_frame(path: Path | str | IO[Any], suffix: str) -> pd.DataFrame:
    # Cells stay text; blanks become "" rather than NaN.
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    if suffix == ".xlsx":
        return pd.read_excel(path, sheet_name=0, dtype=str, keep_default_na=False)
    raise LoaderError(f"Unsupported guest list format {suffix!r}; use .csv, .xlsx or .json")


def _read_json(path: Path) -> List[Dict[str, Any]]:
    with path.open(encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise LoaderError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        raise LoaderError(f"{path} must contain a JSON array of objects")
    return data


def load_records(path: Path | str) -> Tuple[List[Dict[str, Any]], List[str]]:
    """Load a guest list.

    Returns the raw records and the column names of the first record, which
    drive the choice of grouping column.
    """
    path = _ensure_path(path)
    suffix = path.suffix.lower()
    if not path.is_file():
        raise LoaderError(f"Guest list not found: {path}")
    if suffix == ".json":
        records = _read_json(path)
    else:
        records = records_from_frame(_read_frame(path, suffix))
    return records, available_columns(records)


def sample_records() -> List[Dict[str, Any]]:
    """Demo guest list of 45 people across six departments and languages."""
    return [
        {
            "firstname": _SAMPLE_NAMES[i % len(_SAMPLE_NAMES)],
            "lastname": f"Doe {i // len(_SAMPLE_NAMES) + 1}",
            "diet": _SAMPLE_DIETS[i % len(_SAMPLE_DIETS)],
            "department": _SAMPLE_DEPARTMENTS[i % len(_SAMPLE_DEPARTMENTS)],
            "language": _SAMPLE_LANGUAGES[i % len(_SAMPLE_LANGUAGES)],
            "id": i,
        }
        for i in range(45)
    ]


def write_template(path: Path | str) -> Path:
    """Write an empty guest list with the suggested headers."""
    path = _ensure_path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(columns=TEMPLATE_COLUMNS)
    if path.suffix.lower() == ".csv":
        df.to_csv(path, index=False)
    else:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Template")
    return path
