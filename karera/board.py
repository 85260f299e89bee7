"""Live board snapshots from the odds feed.

A board is replaced whole on every refresh; nothing is merged field by
field. Snapshots are read-only once built, so an estimate always sees one
consistent board.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from karera.bet_types import BetType
from karera.selection import to_number

logger = logging.getLogger(__name__)

# Stored board keys, in the order the client falls back through them
BOARD_KEYS = ("daily_double", "forecast", "pick_4", "pick_5", "pick_6", "wta")
MATRIX_BOARD_KEYS = ("daily_double", "forecast")


def _positive_int(value: Any) -> int | None:
    n = to_number(value)
    if n is None or n <= 0 or not float(n).is_integer():
        return None
    return int(n)


@dataclass(frozen=True)
class LiveBoardCell:
    """One posted dividend: row ``i`` (1st selection) by column ``j``."""

    i: int
    j: int
    display: float
    is_capped: bool = False
    est: float | None = None
    confidence: str | None = None


@dataclass(frozen=True)
class LiveBoard:
    """Sparse matrix board (daily double or forecast pays)."""

    cells: Mapping[tuple[int, int], LiveBoardCell] = field(
        default_factory=lambda: MappingProxyType({})
    )
    timestamp: str | None = None
    pool_gross: float = 0.0
    row_totals: Mapping[int, float] = field(default_factory=lambda: MappingProxyType({}))
    col_totals: Mapping[int, float] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_snapshot(cls, data: Any) -> "LiveBoard":
        """Build a board from a feed snapshot ``{"cells": [{i, j, display, ...}]}``.

        Cells with bad coordinates or a non-finite / non-positive display are
        dropped: they mean "no data", not an error.
        """
        data = data if isinstance(data, dict) else {}
        raw_cells = data.get("cells")
        raw_cells = raw_cells if isinstance(raw_cells, list) else []

        cells: dict[tuple[int, int], LiveBoardCell] = {}
        dropped = 0
        for raw in raw_cells:
            cell = _parse_cell(raw)
            if cell is None:
                dropped += 1
                continue
            cells[(cell.i, cell.j)] = cell

        if dropped:
            logger.debug(f"Dropped {dropped} malformed board cells")

        return cls(
            cells=MappingProxyType(cells),
            timestamp=data.get("timestamp"),
            pool_gross=to_number(data.get("pool_gross")) or 0.0,
            row_totals=MappingProxyType(_parse_totals(data.get("row_totals"))),
            col_totals=MappingProxyType(_parse_totals(data.get("col_totals"))),
        )

    def get(self, row: int, col: int) -> LiveBoardCell | None:
        return self.cells.get((row, col))

    def __len__(self) -> int:
        return len(self.cells)


def _parse_cell(raw: Any) -> LiveBoardCell | None:
    if not isinstance(raw, dict):
        return None
    i = _positive_int(raw.get("i"))
    j = _positive_int(raw.get("j"))
    display = to_number(raw.get("display"))
    if i is None or j is None or display is None or display <= 0:
        return None
    est = to_number(raw.get("est"))
    return LiveBoardCell(
        i=i,
        j=j,
        display=display,
        is_capped=bool(raw.get("is_capped")),
        est=est,
        confidence=raw.get("confidence"),
    )


def _parse_totals(raw: Any) -> dict[int, float]:
    if not isinstance(raw, dict):
        return {}
    out = {}
    for k, v in raw.items():
        key = _positive_int(k)
        val = to_number(v)
        if key is not None and val is not None:
            out[key] = val
    return out


@dataclass(frozen=True)
class ProgramBoardEntry:
    leg: int
    value: float


@dataclass(frozen=True)
class ProgramBoard:
    """Per-leg board for pick-n / WTA pools. Display only, no pair lookup."""

    entries: tuple[ProgramBoardEntry, ...] = ()
    timestamp: str | None = None
    pool_gross: float = 0.0
    spread: float | None = None
    mtr: float | None = None

    @classmethod
    def from_snapshot(cls, data: Any) -> "ProgramBoard":
        data = data if isinstance(data, dict) else {}
        raw_entries = data.get("entries")
        raw_entries = raw_entries if isinstance(raw_entries, list) else []

        entries = []
        for raw in raw_entries:
            if not isinstance(raw, dict):
                continue
            leg = to_number(raw.get("leg"))
            value = to_number(raw.get("value"))
            if leg is None or leg <= 0 or value is None:
                continue
            entries.append(ProgramBoardEntry(leg=int(leg), value=value))
        entries.sort(key=lambda e: e.leg)

        return cls(
            entries=tuple(entries),
            timestamp=data.get("timestamp"),
            pool_gross=to_number(data.get("pool_gross")) or 0.0,
            spread=to_number(data.get("spread")),
            mtr=to_number(data.get("mtr")),
        )


def _is_matrix_like(raw: Any) -> bool:
    return isinstance(raw, dict) and isinstance(raw.get("cells"), list)


def _is_program_like(raw: Any) -> bool:
    return isinstance(raw, dict) and isinstance(raw.get("entries"), list)


@dataclass(frozen=True)
class LiveBoards:
    """Every board currently posted for a race."""

    daily_double: LiveBoard | None = None
    forecast: LiveBoard | None = None
    pick_4: ProgramBoard | None = None
    pick_5: ProgramBoard | None = None
    pick_6: ProgramBoard | None = None
    wta: ProgramBoard | None = None

    @classmethod
    def from_stored(cls, raw: Any) -> "LiveBoards":
        """Parse the stored boards blob.

        Older rows stored a single matrix board directly instead of a dict
        keyed by board name; that board is the daily double.
        """
        if not isinstance(raw, dict):
            return cls()

        if _is_matrix_like(raw) and not any(k in raw for k in BOARD_KEYS):
            return cls(daily_double=LiveBoard.from_snapshot(raw))

        boards: dict[str, Any] = {}
        for key in MATRIX_BOARD_KEYS:
            if _is_matrix_like(raw.get(key)):
                boards[key] = LiveBoard.from_snapshot(raw[key])
        for key in BOARD_KEYS:
            if key not in MATRIX_BOARD_KEYS and _is_program_like(raw.get(key)):
                boards[key] = ProgramBoard.from_snapshot(raw[key])
        return cls(**boards)

    def matrix_for(self, bet_type: BetType | str) -> LiveBoard | None:
        """The pair board a bet type previews against, if any."""
        bt = BetType.parse(bet_type)
        if bt is BetType.FORECAST:
            return self.forecast
        if bt in (BetType.DAILY_DOUBLE, BetType.DAILY_DOUBLE_PLUS_ONE):
            return self.daily_double
        return None

    def first_available(self) -> str | None:
        """Name of the first posted board, for picking a default tab."""
        for key in BOARD_KEYS:
            if getattr(self, key) is not None:
                return key
        return None
