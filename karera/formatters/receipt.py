"""Receipt payload handed to the external receipt renderer."""

import math
from typing import Any

from karera.config import get_settings, manila_now
from karera.formatters.selection_text import RaceNames, format_selection_lines
from karera.pricing import Ticket


def format_peso(value: Any, symbol: str | None = None) -> str:
    """``₱1,234.50`` style money text; anything non-numeric shows as zero."""
    symbol = get_settings().currency_symbol if symbol is None else symbol
    try:
        amount = float(value)
    except (TypeError, ValueError):
        amount = 0.0
    if not math.isfinite(amount):
        amount = 0.0
    return f"{symbol}{amount:,.2f}"


def build_receipt(
    ticket: Ticket,
    races_by_id: RaceNames | None = None,
    race_name: str | None = None,
    race_time: str | None = None,
    website: str | None = None,
) -> dict:
    """Receipt fields for a ticket. Promo fields only appear when a promo applied."""
    if ticket.selection is not None:
        lines = format_selection_lines(ticket.bet_type, ticket.selection, races_by_id)
    else:
        lines = ["SELECTIONS: -"]

    receipt = {
        "website": website if website is not None else get_settings().receipt_website,
        "betId": ticket.bet_id or "",
        "issuedAt": ticket.issued_at or manila_now().isoformat(),
        "raceName": race_name,
        "raceTime": race_time,
        "betType": ticket.bet_type.value,
        "selectionLines": lines,
        "combos": ticket.combos,
        "unitCost": ticket.unit_cost,
        "units": ticket.units,
        "amount": ticket.amount,
    }
    if ticket.promo_percent:
        receipt["promoPercent"] = ticket.promo_percent
        receipt["promoText"] = ticket.promo_text
    return receipt
