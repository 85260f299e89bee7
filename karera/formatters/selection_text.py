"""Canonical selection lines for receipts and bet history."""

import json
from typing import Any, Mapping

from karera.bet_types import BetType, position_label
from karera.selection import (
    OrderSelection,
    Selection,
    SimpleSelection,
    check_shape,
    selection_from_payload,
)

# race_id -> {"name": ..., "racing_time": ...}
RaceNames = Mapping[str, Mapping[str, Any]]

EMPTY = "-"


def _horses_text(horses: list[int]) -> str:
    return ", ".join(str(n) for n in horses) if horses else EMPTY


def _race_name(race_id: str, idx: int, races_by_id: RaceNames) -> str:
    if not race_id:
        return f"LEG {idx + 1}"
    name = (races_by_id.get(race_id) or {}).get("name")
    return name if name else race_id[:8].upper()


def format_selection_lines(
    bet_type: BetType | str,
    selection: Selection,
    races_by_id: RaceNames | None = None,
) -> list[str]:
    """One line per slot or leg. Pure: same input, same lines."""
    check_shape(bet_type, selection)
    races_by_id = races_by_id or {}

    if isinstance(selection, SimpleSelection):
        return [f"HORSES: {_horses_text(selection.horses)}"]

    if isinstance(selection, OrderSelection):
        return [
            f"{position_label(idx)}: {_horses_text(horses)}"
            for idx, horses in enumerate(selection.positions)
        ]

    return [
        f"LEG {idx + 1} ({_race_name(leg.race_id, idx, races_by_id)}): {_horses_text(leg.horses)}"
        for idx, leg in enumerate(selection.legs)
    ]


def format_payload_lines(
    bet_type: BetType | str,
    payload: Any,
    races_by_id: RaceNames | None = None,
) -> list[str]:
    """Selection lines for a stored payload, falling back to its raw JSON."""
    selection = selection_from_payload(bet_type, payload)
    if selection is not None:
        return format_selection_lines(bet_type, selection, races_by_id)
    try:
        return [f"SELECTIONS: {json.dumps(payload, separators=(',', ':'))}"]
    except (TypeError, ValueError):
        return [f"SELECTIONS: {EMPTY}"]
