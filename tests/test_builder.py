"""Tests for chunking guests into tables and the full generation pass."""
import math
import random
from collections import Counter

import pytest

from seatsmart.builder import build, chunk, generate_plan
from seatsmart.models import TableConfig, TablePlan

from conftest import make_guest


def test_chunk():
    assert chunk([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert chunk([], 3) == []


@pytest.mark.parametrize("n", [1, 7, 8, 9, 16, 19, 50])
@pytest.mark.parametrize("capacity", [1, 3, 8])
def test_build_table_counts_and_membership(n, capacity):
    guests = [make_guest(f"g{i}") for i in range(n)]
    plan = build(guests, TableConfig(capacity=capacity))

    assert len(plan) == math.ceil(n / capacity)
    sizes = plan.sizes()
    assert all(size == capacity for size in sizes[:-1])
    assert sizes[-1] == (n % capacity or capacity)
    assert [t.id for t in plan] == list(range(len(plan)))
    assert Counter(map(id, plan.guests)) == Counter(map(id, guests))
    assert plan.guests == guests


def test_build_empty():
    plan = build([], TableConfig())
    assert len(plan) == 0
    assert plan.guest_count == 0


def test_nineteen_guests_capacity_eight(nineteen_guests, sequential_config):
    plan = build(nineteen_guests, sequential_config)
    assert plan.sizes() == [8, 8, 3]
    assert [t.id for t in plan] == [0, 1, 2]
    assert plan.config is sequential_config


def test_build_is_deterministic():
    guests = [make_guest(f"g{i}", "Vegan" if i % 4 == 0 else "None", Team=f"t{i % 3}") for i in range(20)]
    config = TableConfig(capacity=6, strategy="separate_attribute", group_by_column="Team")
    assert build(guests, config) == build(guests, config)


def test_build_computes_metadata():
    guests = [
        make_guest("a", "Vegan", Team="Red"),
        make_guest("b", Team="Red"),
        make_guest("c", Team="Blue"),
        make_guest("d", Team="Green"),
        make_guest("e", Team="Green"),
    ]
    config = TableConfig(capacity=2, strategy="group_attribute", group_by_column="Team")
    plan = build(guests, config)
    assert [t.attribute_tag for t in plan] == ["Red", "Mixed: Blue & Green", "Green"]
    assert [t.has_restrictions for t in plan] == [True, False, False]
    assert plan[0].restrictions == ("Vegan",)


def test_no_attribute_tag_for_non_attribute_strategy():
    guests = [make_guest("a", Team="Red")]
    plan = build(guests, TableConfig(strategy="group_diet", group_by_column="Team"))
    assert plan[0].attribute_tag is None


class TestGeneratePlan:
    def records(self):
        return [
            {"First Name": "Ann", "Last Name": "Lee", "Diet": "Vegan", "Team": "Red"},
            {"First Name": "Ben", "Last Name": "Ray", "Diet": "", "Team": "Blue"},
            {"First Name": "Cy", "Last Name": "Obi", "Diet": "None", "Team": "Red"},
            {"First Name": "Di", "Last Name": "Hu", "Diet": "Halal", "Team": "Blue"},
            {"First Name": "Ed", "Last Name": "Yu", "Diet": "None", "Team": "Red"},
        ]

    def test_empty_records(self):
        plan = generate_plan([], TableConfig())
        assert plan == TablePlan(config=TableConfig())

    def test_pipeline(self):
        records = self.records()
        config = TableConfig(capacity=2, strategy="separate_attribute", group_by_column="Team")
        plan = generate_plan(records, config)
        assert [[g.name for g in t.guests] for t in plan] == [
            ["Ann Lee", "Ben Ray"], ["Cy Obi", "Di Hu"], ["Ed Yu"],
        ]
        assert [t.attribute_tag for t in plan] == ["Mixed: Red & Blue", "Mixed: Red & Blue", "Red"]
        assert plan[0].guests[0].attributes is records[0]

    def test_seeded_shuffle_replays(self):
        config = TableConfig(capacity=2, strategy="group_attribute", group_by_column="Team")
        first = generate_plan(self.records(), config, shuffle=True, rng=random.Random(8))
        second = generate_plan(self.records(), config, shuffle=True, rng=random.Random(8))
        assert [[g.name for g in t.guests] for t in first] == [[g.name for g in t.guests] for t in second]
