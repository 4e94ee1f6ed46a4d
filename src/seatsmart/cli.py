"""Command line interface for SeatSmart."""
from __future__ import annotations

import argparse
import csv
import logging
import random
from pathlib import Path
from typing import List, Sequence, Tuple

from .builder import generate_plan
from .export import write_plan
from .loader import SAMPLE_GROUP_COLUMN, load_records, sample_records, write_template
from .models import EventType, SeatingError, Strategy, TableConfig, TablePlan, TableShape
from .mutator import move_to_table_number
from .resolver import default_group_column
from .stats import estimated_table_count, find_guests, over_capacity_tables, summarize, table_report

logger = logging.getLogger(__name__)


def parse_move(text: str) -> Tuple[int, int, int]:
    """Parse ``SRC:POS:DST`` (all 1-based) into a move request."""
    try:
        source, position, target = (int(part) for part in text.split(":"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected SRC:POS:DST, got {text!r}") from None
    return source, position, target


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seat event guests at tables")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--guests", type=Path, help="Path to the guest list (.csv, .xlsx or .json)")
    source.add_argument("--sample", action="store_true", help="Use the built-in 45 guest demo list.")
    source.add_argument("--template", type=Path, help="Write a blank guest list template and exit.")
    parser.add_argument("--capacity", type=int, default=8, help="Guests per table.")
    parser.add_argument("--strategy", choices=[s.value for s in Strategy], default=Strategy.SEQUENTIAL.value,
                        help="How guests are ordered before being seated.")
    parser.add_argument("--group-by", dest="group_by",
                        help="Column used by the attribute strategies. Defaults to the first column "
                             "that is not a name or diet column.")
    parser.add_argument("--shape", choices=[s.value for s in TableShape], default=TableShape.ROUND.value)
    parser.add_argument("--event-type", choices=[e.value for e in EventType], default=EventType.MEAL.value,
                        help="Meal events report dietary restrictions.")
    parser.add_argument("--shuffle", action="store_true",
                        help="Reshuffle guests within the chosen grouping.")
    parser.add_argument("--seed", type=int, help="Seed for random strategies and shuffles.")
    parser.add_argument("--move", type=parse_move, action="append", default=[], metavar="SRC:POS:DST",
                        help="Move the guest at position POS of table SRC to table DST (1-based). Repeatable.")
    parser.add_argument("--search", help="List tables of guests whose name contains this text.")
    parser.add_argument("--out-plan", type=Path, help="Write the seating plan (.csv or .xlsx).")
    parser.add_argument("--out-report", type=Path, help="Write per-table report CSV.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def apply_moves(plan: TablePlan, moves: Sequence[Tuple[int, int, int]]) -> TablePlan:
    for source, position, target in moves:
        plan = move_to_table_number(plan, source - 1, position - 1, target)
    return plan


def print_plan(plan: TablePlan) -> None:
    shape = plan.config.shape
    for table in plan:
        header = f"{table.label(shape)} ({len(table)}/{plan.config.capacity})"
        if table.attribute_tag:
            header += f" [{table.attribute_tag}]"
        if table.has_restrictions and plan.config.event_type == EventType.MEAL:
            header += f" diets: {', '.join(table.restrictions)}"
        print(header)
        for guest in table.guests:
            print(f"  {guest.name}")


def write_report(rows: List[dict], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=[
            "table", "guests", "capacity", "over_capacity", "restrictions", "attribute_tag"
        ])
        w.writeheader()
        for row in rows:
            w.writerow(row)


def run(args: argparse.Namespace) -> TablePlan:
    if args.sample:
        records, columns = sample_records(), [SAMPLE_GROUP_COLUMN]
    else:
        records, columns = load_records(args.guests)

    group_by = args.group_by
    if group_by is None and Strategy(args.strategy).is_attribute_based:
        group_by = default_group_column(columns)
        logger.info("Grouping by column %r", group_by)

    config = TableConfig.from_mapping({
        "capacity": args.capacity,
        "strategy": args.strategy,
        "group_by_column": group_by,
        "shape": args.shape,
        "event_type": args.event_type,
    })
    rng = random.Random(args.seed) if args.seed is not None else None
    plan = generate_plan(records, config, shuffle=args.shuffle, rng=rng)
    return apply_moves(plan, args.move)


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point used by ``python -m seatsmart.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.template:
        print(f"Template written to {write_template(args.template)}")
        return
    if not args.guests and not args.sample:
        parser.error("one of --guests, --sample or --template is required")

    try:
        plan = run(args)
    except SeatingError as exc:
        logger.error("%s", exc)
        parser.exit(2, f"error: {exc}\n")

    print(f"Estimated tables: {estimated_table_count(plan.guest_count, plan.config.capacity)}")
    print_plan(plan)

    for index in over_capacity_tables(plan):
        logger.warning("%s is over capacity (%d/%d)", plan[index].label(plan.config.shape),
                       len(plan[index]), plan.config.capacity)

    if plan.config.event_type == EventType.MEAL:
        for diet, count in sorted(summarize(plan).items()):
            print(f"[CATERING] {diet}: {count}")

    if args.search:
        matches = find_guests(plan, args.search)
        if not matches:
            print(f"[SEARCH] no guest matches {args.search!r}")
        for table_index, _, guest in matches:
            print(f"[SEARCH] {guest.name} -> {plan[table_index].label(plan.config.shape)}")

    if args.out_plan:
        try:
            write_plan(plan, args.out_plan)
        except SeatingError as exc:
            logger.error("%s", exc)
            parser.exit(2, f"error: {exc}\n")

    if args.out_report:
        write_report(table_report(plan), args.out_report)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
