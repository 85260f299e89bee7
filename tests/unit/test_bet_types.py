"""Tests for the bet type catalogue."""

import pytest

from karera.bet_types import MULTI_LEG, ORDER, SIMPLE, BetType, position_label
from karera.errors import UnknownBetType


class TestBetType:
    @pytest.mark.parametrize("bet_type,kind,slots", [
        (BetType.WIN, SIMPLE, 1),
        (BetType.PLACE, SIMPLE, 1),
        (BetType.FORECAST, ORDER, 2),
        (BetType.TRIFECTA, ORDER, 3),
        (BetType.QUARTET, ORDER, 4),
        (BetType.DAILY_DOUBLE, MULTI_LEG, 2),
        (BetType.DAILY_DOUBLE_PLUS_ONE, MULTI_LEG, 3),
        (BetType.PICK_4, MULTI_LEG, 4),
        (BetType.PICK_5, MULTI_LEG, 5),
        (BetType.PICK_6, MULTI_LEG, 6),
        (BetType.WTA, MULTI_LEG, 7),
    ])
    def test_shapes(self, bet_type, kind, slots):
        assert bet_type.kind == kind
        assert bet_type.slots == slots

    def test_parse(self):
        assert BetType.parse("daily_double") is BetType.DAILY_DOUBLE
        assert BetType.parse(" WTA ") is BetType.WTA
        assert BetType.parse(BetType.PICK_4) is BetType.PICK_4
        assert BetType.parse("winner_take_all") is BetType.WTA
        with pytest.raises(UnknownBetType):
            BetType.parse("")
        with pytest.raises(ValueError):
            BetType.parse("exacta")

    def test_labels(self):
        assert BetType.DAILY_DOUBLE.tab_label == "DD"
        assert BetType.DAILY_DOUBLE_PLUS_ONE.tab_label == "DD+1"
        assert BetType.PICK_4.tab_label == "pick 4"
        assert BetType.WTA.program_label == "Winner Take All"
        assert BetType.FORECAST.program_label is None

    def test_position_label(self):
        assert [position_label(i) for i in range(5)] == ["1ST", "2ND", "3RD", "4TH", "POS 5"]
