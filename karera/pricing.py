"""Ticket pricing, quotes, confirmed tickets and historical unit reconciliation.

Locally computed combos/cost/units are advisory. Once the settlement service
answers, its values replace all four before anything is shown on a receipt.
"""

import copy
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from karera.bet_types import BetType
from karera.combos import count_combos, count_payload_combos
from karera.errors import BetBlockedError, BetRejectedError
from karera.feasibility import feasibility_for
from karera.promo import PromoConfig
from karera.selection import (
    Selection,
    is_complete,
    safe_units,
    selection_from_payload,
    to_number,
)

logger = logging.getLogger(__name__)

# Minimum ticket price per combination, in pesos
HIGH_UNIT_COST = 5
LOW_UNIT_COST = 2
HIGH_UNIT_COST_TYPES = {
    BetType.WIN,
    BetType.PLACE,
    BetType.FORECAST,
    BetType.DAILY_DOUBLE,
    BetType.DAILY_DOUBLE_PLUS_ONE,
}

# Tolerance for snapping a reconstructed unit count to an integer
UNIT_SNAP_EPSILON = 1e-6

INCOMPLETE_MESSAGE = "Please complete your selections."


def unit_cost(bet_type: BetType | str) -> int:
    """Fixed price of one unit of one combination."""
    bt = BetType.parse(bet_type)
    return HIGH_UNIT_COST if bt in HIGH_UNIT_COST_TYPES else LOW_UNIT_COST


def total_cost(combos: int, unit_cost: float, units: int) -> float:
    return combos * unit_cost * units


def derive_units(amount: Any, combos: int, unit_cost: float) -> int:
    """Reverse-derive the unit count of a stored ticket from its amount.

    Never returns less than 1: a placed ticket is at least one unit. Amounts
    that do not divide evenly are floored.
    """
    amt = to_number(amount)
    if amt is None or amt <= 0:
        return 1
    denom = combos * unit_cost
    if not math.isfinite(denom) or denom <= 0:
        return 1

    raw = amt / denom
    if not math.isfinite(raw) or raw <= 0:
        return 1

    nearest = round(raw)
    if abs(raw - nearest) < UNIT_SNAP_EPSILON:
        return max(1, int(nearest))
    return max(1, math.floor(raw))


# ──────────────────────────────────────────────
# Quotes
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Quote:
    """Local price preview for the current selection."""

    bet_type: BetType
    combos: int
    unit_cost: int
    units: int
    amount: float
    blocked_reason: str | None = None

    @property
    def can_confirm(self) -> bool:
        return self.blocked_reason is None and self.combos > 0 and self.amount > 0


def quote(bet_type: BetType | str, selection: Selection, units: Any = 1) -> Quote:
    """Price a selection and say whether it can be confirmed.

    Incomplete selections price at zero; impossible order selections carry
    the feasibility message so the UI can show it verbatim.
    """
    bt = BetType.parse(bet_type)
    combos = count_combos(bt, selection)
    cost = unit_cost(bt)
    n_units = safe_units(units)
    amount = total_cost(combos, cost, n_units)

    reason = None
    if not is_complete(selection):
        reason = INCOMPLETE_MESSAGE
    else:
        reason = feasibility_for(bt, selection)
        if reason is None and combos <= 0:
            reason = INCOMPLETE_MESSAGE

    return Quote(
        bet_type=bt,
        combos=combos,
        unit_cost=cost,
        units=n_units,
        amount=amount,
        blocked_reason=reason,
    )


# ──────────────────────────────────────────────
# Tickets
# ──────────────────────────────────────────────

class SettlementResponse(BaseModel):
    """Answer from the place-bet RPC. Missing figures fall back to the quote."""

    model_config = ConfigDict(extra="ignore")

    success: bool = True
    error: Optional[str] = None
    bet_id: Optional[str] = None
    created_at: Optional[str] = None
    combos: Optional[int] = None
    unit_cost: Optional[float] = None
    units: Optional[int] = None
    amount: Optional[float] = None


@dataclass(frozen=True)
class Ticket:
    """A placed bet. Never mutated; a rebet produces a new ticket."""

    bet_type: BetType
    selection: Selection | None
    combos: int
    unit_cost: float
    units: int
    amount: float
    promo_percent: float | None = None
    promo_text: str | None = None
    bet_id: str | None = None
    issued_at: str | None = None


def confirm_ticket(
    q: Quote,
    selection: Selection,
    response: SettlementResponse | dict | None = None,
    promo: PromoConfig | None = None,
) -> Ticket:
    """Freeze a confirmed quote into a Ticket, preferring the server's figures."""
    if not q.can_confirm:
        raise BetBlockedError(q.blocked_reason or INCOMPLETE_MESSAGE)

    if isinstance(response, dict):
        response = SettlementResponse.model_validate(response)
    if response is None:
        response = SettlementResponse()
    if not response.success:
        raise BetRejectedError(response.error or "Failed to place bet")

    combos = response.combos if response.combos is not None else q.combos
    cost = response.unit_cost if response.unit_cost is not None else q.unit_cost
    units = response.units if response.units is not None else q.units
    amount = response.amount if response.amount is not None else q.amount

    if (combos, cost, units, amount) != (q.combos, q.unit_cost, q.units, q.amount):
        logger.warning(
            f"Server figures differ from local quote for {q.bet_type.value}: "
            f"combos {q.combos}->{combos}, unit {q.unit_cost}->{cost}, "
            f"units {q.units}->{units}, amount {q.amount}->{amount}"
        )

    return Ticket(
        bet_type=q.bet_type,
        selection=copy.deepcopy(selection),
        combos=combos,
        unit_cost=cost,
        units=units,
        amount=amount,
        promo_percent=promo.percent if promo else None,
        promo_text=promo.text if promo else None,
        bet_id=response.bet_id,
        issued_at=response.created_at,
    )


def ticket_from_history(record: dict) -> Ticket:
    """Rebuild a Ticket from a stored bet row that only kept the final amount."""
    bt = BetType.parse(record.get("bet_type"))
    payload = record.get("combinations")
    selection = selection_from_payload(bt, payload)
    combos = count_payload_combos(bt, payload)
    cost = unit_cost(bt)
    units = derive_units(record.get("amount"), combos, cost)
    amount = to_number(record.get("amount")) or 0.0

    promo = PromoConfig.build(record.get("promo_percent") or 0, record.get("promo_text"))

    return Ticket(
        bet_type=bt,
        selection=selection,
        combos=combos,
        unit_cost=cost,
        units=units,
        amount=amount,
        promo_percent=promo.percent if promo else None,
        promo_text=promo.text if promo else None,
        bet_id=str(record["id"]) if record.get("id") else None,
        issued_at=record.get("created_at"),
    )
