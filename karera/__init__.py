"""Karera bet-combination engine."""

from karera.bet_types import BetType
from karera.board import LiveBoard, LiveBoards, ProgramBoard
from karera.combos import count_combos, count_payload_combos
from karera.estimator import PayoutEstimate, estimate, live_summary
from karera.feasibility import find_infeasible_prefix
from karera.pricing import (
    Quote,
    Ticket,
    confirm_ticket,
    derive_units,
    quote,
    ticket_from_history,
    total_cost,
    unit_cost,
)
from karera.promo import PromoConfig
from karera.selection import (
    Leg,
    MultiLegSelection,
    OrderSelection,
    SimpleSelection,
    apply_status_event,
    empty_selection,
    heal_scratch,
    normalize_horse_numbers,
    to_payload,
    toggle_horse,
)

__all__ = [
    "BetType",
    "LiveBoard",
    "LiveBoards",
    "ProgramBoard",
    "count_combos",
    "count_payload_combos",
    "PayoutEstimate",
    "estimate",
    "live_summary",
    "find_infeasible_prefix",
    "Quote",
    "Ticket",
    "confirm_ticket",
    "derive_units",
    "quote",
    "ticket_from_history",
    "total_cost",
    "unit_cost",
    "PromoConfig",
    "Leg",
    "MultiLegSelection",
    "OrderSelection",
    "SimpleSelection",
    "apply_status_event",
    "empty_selection",
    "heal_scratch",
    "normalize_horse_numbers",
    "to_payload",
    "toggle_horse",
]
