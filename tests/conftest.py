"""Shared test fixtures for the karera engine."""

import pytest

from karera.board import LiveBoard
from karera.promo import PromoConfig
from karera.selection import Leg, MultiLegSelection, OrderSelection


@pytest.fixture
def race_names() -> dict:
    """Race id -> race info, as the host keeps it for open races."""
    return {
        "race-aaaa-1111": {"name": "Race 1", "racing_time": "2026-10-18T13:00:00+08:00"},
        "race-bbbb-2222": {"name": "Race 2", "racing_time": "2026-10-18T13:30:00+08:00"},
    }


@pytest.fixture
def forecast_selection() -> OrderSelection:
    return OrderSelection(positions=[[1, 2], [2, 3]])


@pytest.fixture
def dd_selection() -> MultiLegSelection:
    return MultiLegSelection(legs=[
        Leg(race_id="race-aaaa-1111", horses=[1, 2]),
        Leg(race_id="race-bbbb-2222", horses=[2, 3]),
    ])


@pytest.fixture
def board_snapshot() -> dict:
    """Feed snapshot with a few posted cells and some junk."""
    return {
        "timestamp": "2026-10-18T12:55:00+08:00",
        "pool_gross": 15000,
        "row_totals": {"1": 5000, "2": 3000},
        "col_totals": {"2": 4000, "3": 2500},
        "cells": [
            {"i": 1, "j": 2, "display": 12.5, "is_capped": False, "confidence": "HIGH"},
            {"i": 1, "j": 3, "display": 40, "is_capped": False, "confidence": "MED"},
            {"i": 2, "j": 2, "display": 8, "is_capped": False, "confidence": "LOW"},
            {"i": 2, "j": 3, "display": 999, "est": 1450.0, "is_capped": True, "confidence": "LOW"},
            {"i": 3, "j": 1, "display": 0, "is_capped": False},
            {"i": 0, "j": 1, "display": 5},
            {"i": 3, "j": 2, "display": "abc"},
        ],
    }


@pytest.fixture
def board(board_snapshot) -> LiveBoard:
    return LiveBoard.from_snapshot(board_snapshot)


@pytest.fixture
def promo() -> PromoConfig:
    return PromoConfig(percent=10)
