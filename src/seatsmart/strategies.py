"""Guest ordering strategies applied before guests are chunked into tables.

Every strategy takes the guests and the config and returns a new list; the
input sequence is never modified. Randomness comes from an injectable
``random.Random`` so callers (and tests) can replay an ordering from a seed.
"""
from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional, Sequence

from .models import Guest, Strategy, TableConfig, is_blank

logger = logging.getLogger(__name__)

UNKNOWN_BUCKET = "Unknown"

OrderFn = Callable[[List[Guest], TableConfig, random.Random], List[Guest]]


def _attribute_text(guest: Guest, column: str, missing: str) -> str:
    value = guest.get(column)
    if is_blank(value):
        return missing
    return str(value)


def sequential(guests: List[Guest], config: TableConfig, rng: random.Random) -> List[Guest]:
    return list(guests)


def randomized(guests: List[Guest], config: TableConfig, rng: random.Random) -> List[Guest]:
    shuffled = list(guests)
    rng.shuffle(shuffled)
    return shuffled


def group_diet(guests: List[Guest], config: TableConfig, rng: random.Random) -> List[Guest]:
    # sorted() is stable, so guests with the same diet keep their order
    return sorted(guests, key=lambda g: str(g.diet or "").lower())


def group_attribute(guests: List[Guest], config: TableConfig, rng: random.Random) -> List[Guest]:
    column = config.group_by_column
    return sorted(guests, key=lambda g: _attribute_text(g, column, "").lower())


def separate_attribute(guests: List[Guest], config: TableConfig, rng: random.Random) -> List[Guest]:
    """Round robin over attribute buckets so neighbours differ where possible.

    Buckets are visited largest first (ties in order of first appearance) and
    each pass takes the next guest from every bucket that still has one.
    """
    column = config.group_by_column
    buckets: Dict[str, List[Guest]] = {}
    for guest in guests:
        buckets.setdefault(_attribute_text(guest, column, UNKNOWN_BUCKET), []).append(guest)

    ordered = sorted(buckets.values(), key=len, reverse=True)
    logger.debug("Separating %d guests across %d buckets of %s", len(guests), len(ordered), column)

    result: List[Guest] = []
    for index in range(len(ordered[0]) if ordered else 0):
        for bucket in ordered:
            if index < len(bucket):
                result.append(bucket[index])
    return result


STRATEGIES: Dict[Strategy, OrderFn] = {
    Strategy.SEQUENTIAL: sequential,
    Strategy.RANDOM: randomized,
    Strategy.GROUP_DIET: group_diet,
    Strategy.GROUP_ATTRIBUTE: group_attribute,
    Strategy.SEPARATE_ATTRIBUTE: separate_attribute,
}


def order(
    guests: Sequence[Guest],
    config: TableConfig,
    shuffle: bool = False,
    rng: Optional[random.Random] = None,
) -> List[Guest]:
    """Return ``guests`` in the sequence the configured strategy seats them.

    ``shuffle`` permutes the input first, which reshuffles guests within
    their groups for the grouping strategies. Bucket ties for
    ``separate_attribute`` are then broken by the shuffled order.
    """
    rng = rng if rng is not None else random
    strategy = config.strategy
    pending = list(guests)

    if strategy.is_attribute_based and config.group_by_column is None:
        logger.warning("Strategy %s needs a group-by column; keeping input order", strategy.value)
        strategy = Strategy.SEQUENTIAL

    if shuffle and strategy != Strategy.RANDOM:
        rng.shuffle(pending)

    logger.debug("Ordering %d guests with strategy %s", len(pending), strategy.value)
    return STRATEGIES[strategy](pending, config, rng)
