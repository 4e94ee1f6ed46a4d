"""Shared fixtures for SeatSmart tests."""
from __future__ import annotations

import pathlib
from typing import List

import pytest

from seatsmart.models import Guest, TableConfig

DATA_DIR = pathlib.Path(__file__).parent / "data"


def make_guest(name: str, diet: str = "None", **attributes) -> Guest:
    record = {"name": name, "diet": diet, **attributes}
    return Guest(name=name, diet=diet, attributes=record)


@pytest.fixture
def guests_csv() -> pathlib.Path:
    return DATA_DIR / "guests.csv"


@pytest.fixture
def nineteen_guests() -> List[Guest]:
    return [make_guest(f"Guest {i}") for i in range(19)]


@pytest.fixture
def sequential_config() -> TableConfig:
    return TableConfig(capacity=8)
