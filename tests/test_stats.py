import pytest

from seatsmart.builder import build
from seatsmart.models import TableConfig
from seatsmart.mutator import move_guest
from seatsmart.stats import estimated_table_count, find_guests, over_capacity_tables, summarize, table_report

from conftest import make_guest


def test_summarize_counts_diets():
    diets = ["None", "Vegetarian", "None", "Vegetarian", "Gluten-Free"]
    plan = build([make_guest(f"g{i}", d) for i, d in enumerate(diets)], TableConfig(capacity=2))
    assert summarize(plan) == {"Vegetarian": 2, "Gluten-Free": 1}


def test_summarize_only_skips_literal_none():
    plan = build([make_guest("a", "none"), make_guest("b", "None"), make_guest("c", "")], TableConfig())
    assert summarize(plan) == {"none": 1}


def test_summarize_empty_plan():
    assert summarize(build([], TableConfig())) == {}


def test_summarize_follows_moves():
    plan = build([make_guest("a", "Vegan"), make_guest("b")], TableConfig(capacity=1))
    moved = move_guest(plan, plan[0].guests[0], 0, 0, 1)
    assert summarize(moved) == summarize(plan) == {"Vegan": 1}


@pytest.mark.parametrize("n,capacity,expected", [(0, 8, 0), (19, 8, 3), (16, 8, 2), (1, 1, 1)])
def test_estimated_table_count(n, capacity, expected):
    assert estimated_table_count(n, capacity) == expected


def test_estimated_table_count_rejects_zero_capacity():
    with pytest.raises(ValueError):
        estimated_table_count(5, 0)


def test_over_capacity_tables(nineteen_guests, sequential_config):
    plan = build(nineteen_guests, sequential_config)
    assert over_capacity_tables(plan) == []
    plan = move_guest(plan, plan[2].guests[0], 2, 0, 1)
    assert over_capacity_tables(plan) == [1]


def test_find_guests():
    plan = build([make_guest("Ann Lee"), make_guest("Ben Ray"), make_guest("Joanne Li")], TableConfig(capacity=2))
    hits = find_guests(plan, "  ANN ")
    assert [(t, g, guest.name) for t, g, guest in hits] == [(0, 0, "Ann Lee"), (1, 0, "Joanne Li")]
    assert find_guests(plan, "") == []
    assert find_guests(plan, "zed") == []


def test_table_report():
    guests = [make_guest("a", "Vegan", Team="Red"), make_guest("b", "Halal", Team="Blue"), make_guest("c", Team="Red")]
    config = TableConfig(capacity=2, strategy="group_attribute", group_by_column="Team", shape="groups")
    report = table_report(build(guests, config))
    assert report[0] == {
        "table": "Group 1",
        "guests": 2,
        "capacity": 2,
        "over_capacity": False,
        "restrictions": "Vegan|Halal",
        "attribute_tag": "Mixed: Red & Blue",
    }
    assert report[1]["attribute_tag"] == "Red"
    assert report[1]["restrictions"] == ""
