"""Bet type catalogue: wire names, selection shape and display labels."""

from enum import Enum

from karera.errors import UnknownBetType

# Selection shapes
SIMPLE = "simple"
ORDER = "order"
MULTI_LEG = "multi_leg"

# Finishing position labels for order-capable bets
POSITION_LABELS = ["1ST", "2ND", "3RD", "4TH"]


class BetType(str, Enum):
    """Every bet the client can build. Values are the wire names."""

    WIN = "win"
    PLACE = "place"
    FORECAST = "forecast"
    TRIFECTA = "trifecta"
    QUARTET = "quartet"
    DAILY_DOUBLE = "daily_double"
    DAILY_DOUBLE_PLUS_ONE = "daily_double_plus_one"
    PICK_4 = "pick_4"
    PICK_5 = "pick_5"
    PICK_6 = "pick_6"
    WTA = "wta"

    @classmethod
    def parse(cls, value) -> "BetType":
        """Accept a BetType or its wire name (case/whitespace tolerant)."""
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        key = _LEGACY_NAMES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownBetType(value) from None

    @property
    def kind(self) -> str:
        return _SHAPES[self][0]

    @property
    def slots(self) -> int:
        """Positions (order bets), legs (multi-leg bets) or 1 for simple bets."""
        return _SHAPES[self][1]

    @property
    def is_simple(self) -> bool:
        return self.kind == SIMPLE

    @property
    def is_order(self) -> bool:
        return self.kind == ORDER

    @property
    def is_multi_leg(self) -> bool:
        return self.kind == MULTI_LEG

    @property
    def program_label(self) -> str | None:
        """Program-bet name (pick-n / WTA), None for race bets."""
        return _PROGRAM_LABELS.get(self)

    @property
    def tab_label(self) -> str:
        if self is BetType.DAILY_DOUBLE:
            return "DD"
        if self is BetType.DAILY_DOUBLE_PLUS_ONE:
            return "DD+1"
        return self.value.replace("_", " ")


_SHAPES: dict[BetType, tuple[str, int]] = {
    BetType.WIN: (SIMPLE, 1),
    BetType.PLACE: (SIMPLE, 1),
    BetType.FORECAST: (ORDER, 2),
    BetType.TRIFECTA: (ORDER, 3),
    BetType.QUARTET: (ORDER, 4),
    BetType.DAILY_DOUBLE: (MULTI_LEG, 2),
    BetType.DAILY_DOUBLE_PLUS_ONE: (MULTI_LEG, 3),
    BetType.PICK_4: (MULTI_LEG, 4),
    BetType.PICK_5: (MULTI_LEG, 5),
    BetType.PICK_6: (MULTI_LEG, 6),
    BetType.WTA: (MULTI_LEG, 7),
}

# Older rows stored some bet types under other names
_LEGACY_NAMES = {
    "winner_take_all": "wta",
}

_PROGRAM_LABELS = {
    BetType.PICK_4: "Pick 4",
    BetType.PICK_5: "Pick 5",
    BetType.PICK_6: "Pick 6",
    BetType.WTA: "Winner Take All",
}


def position_label(index: int) -> str:
    """Ordinal label for a 0-based finishing position."""
    if 0 <= index < len(POSITION_LABELS):
        return POSITION_LABELS[index]
    return f"POS {index + 1}"
