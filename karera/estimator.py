"""Live payout range from the posted pair boards.

Only the daily double and forecast boards are pair matrices, so only those
bets get a live preview. Nothing is ever estimated without a posted cell.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping

from karera.bet_types import BetType
from karera.board import LiveBoard, LiveBoards
from karera.pricing import Ticket, unit_cost
from karera.promo import PromoConfig, promo_factor
from karera.selection import (
    MultiLegSelection,
    OrderSelection,
    Selection,
    SimpleSelection,
    safe_units,
    to_number,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayoutEstimate:
    """Reachable payout range for the current selection."""

    min_multiplier: float
    max_multiplier: float
    min_payout: float
    max_payout: float
    cells: int = 1
    label: str = "Live pays"
    promo_percent: float | None = None


def _pair_axes(
    bet_type: BetType, selection: Selection
) -> tuple[list[int], list[int], bool, str] | None:
    """Rows, columns, same-horse exclusion and label for a pair-board bet."""
    if bet_type is BetType.FORECAST and isinstance(selection, OrderSelection):
        if len(selection.positions) < 2:
            return None
        return selection.positions[0], selection.positions[1], True, "Live pays"

    if bet_type in (BetType.DAILY_DOUBLE, BetType.DAILY_DOUBLE_PLUS_ONE) and isinstance(
        selection, MultiLegSelection
    ):
        if len(selection.legs) < 2:
            return None
        label = "Live pays (L1-L2)" if bet_type is BetType.DAILY_DOUBLE_PLUS_ONE else "Live pays"
        # Different races: the same number in both legs is a valid pair
        return selection.legs[0].horses, selection.legs[1].horses, False, label

    return None


def collect_board_values(
    rows: list[int], cols: list[int], board: LiveBoard, exclude_same_horse: bool
) -> list[float]:
    """Posted positive dividends for every distinct (row, col) pair."""
    values = []
    seen: set[tuple[int, int]] = set()
    for r in rows:
        for c in cols:
            if r <= 0 or c <= 0:
                continue
            if exclude_same_horse and r == c:
                continue
            if (r, c) in seen:
                continue
            seen.add((r, c))
            cell = board.get(r, c)
            if cell is None or not math.isfinite(cell.display) or cell.display <= 0:
                continue
            values.append(cell.display)
    return values


def _range(
    values: list[float], stake: float, label: str, promo: PromoConfig | None
) -> PayoutEstimate | None:
    if not values:
        return None
    low, high = min(values), max(values)
    return PayoutEstimate(
        min_multiplier=low,
        max_multiplier=high,
        min_payout=stake * low,
        max_payout=stake * high,
        cells=len(values),
        label=label,
        promo_percent=promo.percent if promo and promo.is_active else None,
    )


def estimate(
    bet_type: BetType | str,
    selection: Selection,
    board: LiveBoard | LiveBoards | None,
    promo: PromoConfig | None = None,
    units: Any = 1,
) -> PayoutEstimate | None:
    """Payout range for the selection against one board snapshot.

    ``board`` may be the full LiveBoards set, in which case the matching
    matrix is picked. The promo inflates the previewed payout only.
    """
    bt = BetType.parse(bet_type)
    if isinstance(board, LiveBoards):
        board = board.matrix_for(bt)
    if board is None or len(board) == 0:
        return None

    axes = _pair_axes(bt, selection)
    if axes is None:
        return None
    rows, cols, exclude_same, label = axes

    values = collect_board_values(rows, cols, board, exclude_same)
    if not values:
        logger.debug(f"No posted {bt.value} cells for {len(rows)}x{len(cols)} selection")
        return None

    stake = unit_cost(bt) * safe_units(units) * promo_factor(promo)
    return _range(values, stake, label, promo)


def estimate_win_dividends(
    horses: list[int],
    dividend_by_horse: Mapping[int, Any],
    stake: float,
    promo: PromoConfig | None = None,
) -> PayoutEstimate | None:
    """Win/Place range from each horse's current posted dividend."""
    values = []
    for n in horses:
        d = to_number(dividend_by_horse.get(n))
        if d is not None and d > 0:
            values.append(d)
    return _range(values, stake * promo_factor(promo), "Live div", promo)


def estimate_horse_dividend_from_row_total(row_total: Any) -> float:
    """Rough single-horse dividend from the pool total bet on its row."""
    total = to_number(row_total) or 0.0
    return round(max(1.1, 50000 / (total + 100)), 2)


# ──────────────────────────────────────────────
# Summaries for placed bets
# ──────────────────────────────────────────────

def _num_text(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def live_summary(
    ticket: Ticket,
    boards: LiveBoards,
    dividend_by_horse: Mapping[int, Any] | None = None,
) -> str | None:
    """One-line live figure for a bet the user already placed."""
    promo = PromoConfig.build(ticket.promo_percent or 0)
    stake = ticket.unit_cost * ticket.units * promo_factor(promo)
    selection = ticket.selection

    if isinstance(selection, SimpleSelection):
        est = estimate_win_dividends(selection.horses, dividend_by_horse or {}, stake)
        if est is None:
            return None
        if est.cells == 1:
            return f"Live div: {est.min_multiplier:.2f} | Est payout: ₱{est.min_payout:.2f}"
        return (
            f"Live div: {est.min_multiplier:.2f}-{est.max_multiplier:.2f} | "
            f"Est payout: ₱{est.min_payout:.2f}-₱{est.max_payout:.2f}"
        )

    if selection is None:
        return None
    board = boards.matrix_for(ticket.bet_type)
    if board is None:
        return None
    axes = _pair_axes(ticket.bet_type, selection)
    if axes is None:
        return None
    rows, cols, exclude_same, label = axes
    est = _range(collect_board_values(rows, cols, board, exclude_same), stake, label, promo)
    if est is None:
        return None

    if est.cells == 1:
        return f"{label}: {_num_text(est.min_multiplier)} | Est payout: ₱{est.min_payout:.2f}"
    return (
        f"{label}: {_num_text(est.min_multiplier)}-{_num_text(est.max_multiplier)} | "
        f"Est payout: ₱{est.min_payout:.2f}-₱{est.max_payout:.2f}"
    )
