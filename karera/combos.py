"""Combination counting for every bet shape."""

import logging
from typing import Any

from karera.bet_types import BetType
from karera.selection import (
    MultiLegSelection,
    OrderSelection,
    Selection,
    SimpleSelection,
    check_shape,
    selection_from_payload,
)

logger = logging.getLogger(__name__)


def count_order_combos(positions: list[list[int]]) -> int:
    """Count assignments of one distinct horse per finishing position.

    The same horse may be a candidate for several positions but can only
    occupy one of them within a single combination.
    """
    if not positions or any(not p for p in positions):
        return 0

    total = 0
    used: set[int] = set()

    def walk(idx: int) -> None:
        nonlocal total
        if idx >= len(positions):
            total += 1
            return
        for horse in positions[idx]:
            if horse in used:
                continue
            used.add(horse)
            walk(idx + 1)
            used.discard(horse)

    walk(0)
    return total


def count_leg_combos(legs: list[list[int]]) -> int:
    """Product of leg sizes; any empty leg (or no legs) means zero."""
    if not legs:
        return 0
    total = 1
    for horses in legs:
        if not horses:
            return 0
        total *= len(horses)
    return total


def count_combos(bet_type: BetType | str, selection: Selection) -> int:
    """Number of valid winning combinations covered by the selection."""
    check_shape(bet_type, selection)

    if isinstance(selection, SimpleSelection):
        return len(selection.horses)
    if isinstance(selection, OrderSelection):
        return count_order_combos(selection.positions)
    if isinstance(selection, MultiLegSelection):
        return count_leg_combos([leg.horses for leg in selection.legs])
    return 0


def count_payload_combos(bet_type: BetType | str, payload: Any) -> int:
    """Count combinations straight from a stored settlement payload."""
    selection = selection_from_payload(bet_type, payload)
    if selection is None:
        logger.debug(f"No readable selection in stored {bet_type} payload")
        return 0
    return count_combos(bet_type, selection)
