"""Selection model: clean horse-number sets per slot or leg.

A selection is rebuilt from scratch whenever the bet type changes and is
healed in place (well, replaced) whenever a referenced horse is scratched.
All helpers return new selection objects; callers swap them in.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Union

from pydantic import BaseModel

from karera.bet_types import MULTI_LEG, ORDER, SIMPLE, BetType
from karera.errors import SelectionShapeError

logger = logging.getLogger(__name__)

ACTIVE = "active"
SCRATCHED = "scratched"


# ──────────────────────────────────────────────
# Input coercion
# ──────────────────────────────────────────────

def to_number(value: Any) -> float | None:
    """Lenient numeric coercion for stored/raw values ("1,250" -> 1250.0)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        cleaned = value.replace(",", "").strip()
        if not cleaned:
            return None
        try:
            n = float(cleaned)
        except ValueError:
            return None
        return n if math.isfinite(n) else None
    return None


def _to_int(value: Any) -> int | None:
    n = to_number(value)
    if n is None:
        return None
    return math.trunc(n)


def normalize_horse_numbers(values: Any) -> list[int]:
    """Deduplicated, ascending list of positive horse numbers.

    Anything that is not a list-like container yields an empty list; entries
    that are not numeric or not positive are dropped.
    """
    if not isinstance(values, (list, tuple, set, frozenset)):
        return []
    out: set[int] = set()
    for item in values:
        n = _to_int(item)
        if n is None or n <= 0:
            continue
        out.add(n)
    return sorted(out)


def safe_units(value: Any) -> int:
    """Ticket unit count from user input: floored, never below 1."""
    n = to_number(value)
    if n is None:
        return 1
    return max(1, math.floor(n))


# ──────────────────────────────────────────────
# Model
# ──────────────────────────────────────────────

@dataclass
class Horse:
    """A runner on a race roster."""

    race_id: str
    horse_number: int
    horse_name: str = ""
    status: str = ACTIVE
    current_dividend: float = 0.0

    @property
    def is_scratched(self) -> bool:
        return self.status == SCRATCHED


@dataclass
class SimpleSelection:
    """Win / Place: one unordered set of horses."""

    horses: list[int] = field(default_factory=list)

    def __post_init__(self):
        self.horses = normalize_horse_numbers(self.horses)


@dataclass
class OrderSelection:
    """Forecast / Trifecta / Quartet: one candidate set per finishing position."""

    positions: list[list[int]] = field(default_factory=list)

    def __post_init__(self):
        self.positions = [normalize_horse_numbers(p) for p in self.positions]


@dataclass
class Leg:
    """One race of a multi-leg bet."""

    race_id: str
    horses: list[int] = field(default_factory=list)

    def __post_init__(self):
        self.race_id = str(self.race_id or "")
        self.horses = normalize_horse_numbers(self.horses)


@dataclass
class MultiLegSelection:
    """Daily double, pick-n and WTA: one candidate set per leg."""

    legs: list[Leg] = field(default_factory=list)


Selection = Union[SimpleSelection, OrderSelection, MultiLegSelection]


class HorseStatusEvent(BaseModel):
    """Horse status change delivered by the realtime transport."""

    race_id: str
    horse_number: int
    status: Literal["active", "scratched"]


# ──────────────────────────────────────────────
# Construction and shape checks
# ──────────────────────────────────────────────

def empty_selection(bet_type: BetType | str, race_ids: Iterable[str] | None = None) -> Selection:
    """Fresh selection for a bet type. Nothing carries over between bet types."""
    bt = BetType.parse(bet_type)
    if bt.is_simple:
        return SimpleSelection()
    if bt.is_order:
        return OrderSelection(positions=[[] for _ in range(bt.slots)])

    ids = [str(r) for r in (race_ids or [])]
    if len(ids) != bt.slots:
        raise SelectionShapeError(
            f"{bt.value} needs {bt.slots} leg races, got {len(ids)}"
        )
    return MultiLegSelection(legs=[Leg(race_id=rid) for rid in ids])


def check_shape(bet_type: BetType | str, selection: Selection) -> BetType:
    """Raise SelectionShapeError if the selection class does not fit the bet type."""
    bt = BetType.parse(bet_type)
    expected = {
        SIMPLE: SimpleSelection,
        ORDER: OrderSelection,
        MULTI_LEG: MultiLegSelection,
    }[bt.kind]
    if not isinstance(selection, expected):
        raise SelectionShapeError(
            f"{bt.value} expects {expected.__name__}, got {type(selection).__name__}"
        )
    return bt


def slot_sets(selection: Selection) -> list[list[int]]:
    """Horse sets in slot order (a simple selection has one slot)."""
    if isinstance(selection, SimpleSelection):
        return [selection.horses]
    if isinstance(selection, OrderSelection):
        return selection.positions
    return [leg.horses for leg in selection.legs]


def is_complete(selection: Selection) -> bool:
    """True when every required slot or leg has at least one horse."""
    sets = slot_sets(selection)
    return bool(sets) and all(sets)


# ──────────────────────────────────────────────
# Mutation (returns new selections)
# ──────────────────────────────────────────────

def toggle_horse(
    selection: Selection,
    horse_number: int,
    slot: int = 0,
    scratched: Iterable[int] = (),
) -> Selection:
    """Add the horse to the slot (or leg) if absent, remove it if present.

    Adding a horse listed in ``scratched`` is refused; the selection is
    returned unchanged.
    """
    sets = slot_sets(selection)
    if not 0 <= slot < len(sets):
        raise SelectionShapeError(f"Slot {slot} out of range (0..{len(sets) - 1})")

    number = _to_int(horse_number)
    if number is None or number <= 0:
        logger.debug(f"Ignoring invalid horse number {horse_number!r}")
        return selection
    horse_number = number

    current = sets[slot]
    if horse_number in current:
        updated = [n for n in current if n != horse_number]
    else:
        if horse_number in normalize_horse_numbers(list(scratched)):
            logger.debug(f"Ignoring scratched horse {horse_number} for slot {slot}")
            return selection
        updated = current + [horse_number]

    return _replace_slot(selection, slot, updated)


def _replace_slot(selection: Selection, slot: int, horses: list[int]) -> Selection:
    if isinstance(selection, SimpleSelection):
        return SimpleSelection(horses=horses)
    if isinstance(selection, OrderSelection):
        positions = [list(p) for p in selection.positions]
        positions[slot] = horses
        return OrderSelection(positions=positions)
    legs = [Leg(race_id=leg.race_id, horses=list(leg.horses)) for leg in selection.legs]
    legs[slot] = Leg(race_id=legs[slot].race_id, horses=horses)
    return MultiLegSelection(legs=legs)


def heal_scratch(
    selection: Selection,
    race_id: str,
    horse_number: int,
    current_race_id: str | None = None,
) -> Selection:
    """Remove a scratched horse from every slot or leg that references it.

    Simple and order selections belong to ``current_race_id`` (any race when
    it is None); multi-leg selections are matched leg by leg. Other choices
    are left untouched, and the same object comes back when nothing changed.
    """
    race_id = str(race_id or "")

    if isinstance(selection, MultiLegSelection):
        changed = False
        legs = []
        for leg in selection.legs:
            if leg.race_id == race_id and horse_number in leg.horses:
                legs.append(Leg(race_id=leg.race_id, horses=[n for n in leg.horses if n != horse_number]))
                changed = True
            else:
                legs.append(leg)
        if not changed:
            return selection
        logger.info(f"Removed scratched horse {horse_number} from legs of race {race_id}")
        return MultiLegSelection(legs=legs)

    if current_race_id is not None and race_id != str(current_race_id):
        return selection

    if isinstance(selection, SimpleSelection):
        if horse_number not in selection.horses:
            return selection
        logger.info(f"Removed scratched horse {horse_number} from selection")
        return SimpleSelection(horses=[n for n in selection.horses if n != horse_number])

    if not any(horse_number in p for p in selection.positions):
        return selection
    logger.info(f"Removed scratched horse {horse_number} from all positions")
    return OrderSelection(
        positions=[[n for n in p if n != horse_number] for p in selection.positions]
    )


def apply_status_event(
    selection: Selection,
    event: HorseStatusEvent | dict,
    current_race_id: str | None = None,
) -> Selection:
    """Apply a transport status event; only scratches touch the selection."""
    if isinstance(event, dict):
        event = HorseStatusEvent.model_validate(event)
    if event.status != SCRATCHED:
        return selection
    return heal_scratch(selection, event.race_id, event.horse_number, current_race_id)


def drop_scratched(
    selection: Selection,
    roster: Iterable[Horse],
    current_race_id: str | None = None,
) -> Selection:
    """Heal against a whole roster (used after loading race horses)."""
    for horse in roster:
        if horse.is_scratched:
            selection = heal_scratch(selection, horse.race_id, horse.horse_number, current_race_id)
    return selection


# ──────────────────────────────────────────────
# Settlement payload codec
# ──────────────────────────────────────────────

def to_payload(selection: Selection) -> dict:
    """JSON-shaped payload sent to the settlement RPC."""
    if isinstance(selection, SimpleSelection):
        return {"horses": list(selection.horses)}
    if isinstance(selection, OrderSelection):
        return {"mode": "combo", "positions": [list(p) for p in selection.positions]}
    return {
        "legs": [
            {"race_id": leg.race_id, "horses": list(leg.horses)}
            for leg in selection.legs
        ]
    }


def selection_from_payload(bet_type: BetType | str, payload: Any) -> Selection | None:
    """Rebuild a selection from a stored payload.

    Stored payloads are read leniently: bad entries are normalised away.
    Returns None for a multi-leg bet whose payload carries no leg list.
    """
    bt = BetType.parse(bet_type)
    data = payload if isinstance(payload, dict) else {}

    if bt.is_simple:
        return SimpleSelection(horses=data.get("horses"))

    if bt.is_order:
        raw = data.get("positions")
        raw = raw if isinstance(raw, list) else []
        return OrderSelection(positions=list(raw))

    raw_legs = data.get("legs")
    if not isinstance(raw_legs, list):
        return None
    legs = []
    for leg in raw_legs:
        leg = leg if isinstance(leg, dict) else {}
        legs.append(Leg(race_id=leg.get("race_id") or "", horses=leg.get("horses")))
    return MultiLegSelection(legs=legs)
