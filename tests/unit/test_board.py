"""Tests for live board snapshot parsing."""

import dataclasses

import pytest

from karera.board import LiveBoard, LiveBoards, ProgramBoard


class TestLiveBoard:
    def test_malformed_cells_dropped(self, board):
        assert len(board) == 4
        assert board.get(3, 1) is None
        assert board.get(0, 1) is None
        assert board.get(3, 2) is None

    def test_cell_fields(self, board):
        cell = board.get(2, 3)
        assert cell.display == 999
        assert cell.is_capped is True
        assert cell.est == 1450.0
        assert cell.confidence == "LOW"

    def test_totals_and_pool(self, board):
        assert board.pool_gross == 15000
        assert board.row_totals[1] == 5000
        assert board.col_totals[3] == 2500

    def test_snapshot_is_read_only(self, board):
        with pytest.raises(TypeError):
            board.cells[(9, 9)] = None
        with pytest.raises(dataclasses.FrozenInstanceError):
            board.pool_gross = 0

    def test_later_duplicate_wins(self):
        b = LiveBoard.from_snapshot({"cells": [
            {"i": 1, "j": 2, "display": 10},
            {"i": 1, "j": 2, "display": 11},
        ]})
        assert b.get(1, 2).display == 11

    def test_garbage(self):
        assert len(LiveBoard.from_snapshot(None)) == 0
        assert len(LiveBoard.from_snapshot({"cells": "nope"})) == 0
        assert len(LiveBoard.from_snapshot({"cells": [None, 4, {"i": 1}]})) == 0

    def test_non_finite_display(self):
        b = LiveBoard.from_snapshot({"cells": [{"i": 1, "j": 2, "display": float("inf")}]})
        assert len(b) == 0


class TestProgramBoard:
    def test_entries_sorted_and_filtered(self):
        pb = ProgramBoard.from_snapshot({
            "pool_gross": 8000,
            "spread": 1.5,
            "entries": [
                {"leg": 3, "value": 120},
                {"leg": 1, "value": 45},
                {"leg": 0, "value": 10},
                {"leg": "x", "value": 10},
            ],
        })
        assert [e.leg for e in pb.entries] == [1, 3]
        assert pb.spread == 1.5
        assert pb.mtr is None


class TestLiveBoards:
    def test_keyed_shape(self, board_snapshot):
        boards = LiveBoards.from_stored({
            "forecast": board_snapshot,
            "pick_4": {"entries": [{"leg": 1, "value": 3}]},
            "wta": {"cells": []},
        })
        assert boards.forecast is not None
        assert boards.daily_double is None
        assert boards.pick_4.entries[0].value == 3
        assert boards.wta is None
        assert boards.first_available() == "forecast"

    def test_legacy_single_board_is_daily_double(self, board_snapshot):
        boards = LiveBoards.from_stored(board_snapshot)
        assert boards.daily_double is not None
        assert len(boards.daily_double) == 4
        assert boards.forecast is None

    def test_empty(self):
        assert LiveBoards.from_stored(None) == LiveBoards()
        assert LiveBoards().first_available() is None

    def test_matrix_for(self, board):
        boards = LiveBoards(daily_double=board)
        assert boards.matrix_for("daily_double_plus_one") is board
        assert boards.matrix_for("forecast") is None
        assert boards.matrix_for("pick_4") is None
