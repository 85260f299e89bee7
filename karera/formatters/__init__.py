"""Text and receipt formatters for placed and pending bets."""

from karera.formatters.receipt import build_receipt, format_peso
from karera.formatters.selection_text import format_payload_lines, format_selection_lines

__all__ = [
    "build_receipt",
    "format_peso",
    "format_payload_lines",
    "format_selection_lines",
]
