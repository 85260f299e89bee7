"""Tests for the impossible-selection explainer."""

from karera.combos import count_order_combos
from karera.feasibility import feasibility_for, find_infeasible_prefix
from karera.selection import OrderSelection, SimpleSelection


class TestFindInfeasiblePrefix:
    def test_trifecta_same_singleton(self):
        msg = find_infeasible_prefix([[5], [5], [5]])
        assert msg is not None
        assert "1ST: 5" in msg
        assert msg == "Impossible bet: if 1ST: 5, there is no valid completion."

    def test_forecast_same_singleton(self):
        assert find_infeasible_prefix([[1], [1]]) == (
            "Impossible bet: if 1ST: 1, there is no valid completion."
        )

    def test_feasible_returns_none(self):
        assert find_infeasible_prefix([[1, 2], [2, 3]]) is None
        assert find_infeasible_prefix([[1, 2, 3]] * 3) is None

    def test_incomplete_is_not_infeasible(self):
        assert find_infeasible_prefix([[5], []]) is None
        assert find_infeasible_prefix([]) is None

    def test_partially_feasible_reports_first_dead_prefix(self):
        """1ST: 2 leaves nothing for 2ND, even though 1ST: 1 works."""
        msg = find_infeasible_prefix([[1, 2], [2]])
        assert count_order_combos([[1, 2], [2]]) == 1
        assert msg == "Impossible bet: if 1ST: 2, there is no valid completion."

    def test_multi_position_prefix(self):
        """1ST: 1 | 2ND: 2 uses up everything 3RD could take."""
        msg = find_infeasible_prefix([[1], [2, 3], [1, 2]])
        assert msg == "Impossible bet: if 1ST: 1 | 2ND: 2, there is no valid completion."

    def test_first_found_not_shortest(self):
        """Left-to-right walk reports a deep prefix under 1ST: 1 before the
        shorter dead prefix 1ST: 3."""
        positions = [[1, 3], [2, 3], [3, 4], [4]]
        msg = find_infeasible_prefix(positions)
        assert msg == "Impossible bet: if 1ST: 1 | 2ND: 2 | 3RD: 4, there is no valid completion."
        assert find_infeasible_prefix([[3], [2, 3], [3, 4], [4]]) == (
            "Impossible bet: if 1ST: 3, there is no valid completion."
        )

    def test_zero_combos_always_explained(self):
        positions = [[2, 4], [2, 4], [2, 4]]
        assert count_order_combos(positions) == 0
        assert find_infeasible_prefix(positions).startswith("Impossible bet: if 1ST: 2")


class TestFeasibilityFor:
    def test_only_order_bets(self):
        assert feasibility_for("win", SimpleSelection(horses=[1])) is None
        assert feasibility_for("forecast", OrderSelection(positions=[[4], [4]])) is not None


class TestRawInput:
    def test_junk_entries_normalised(self):
        assert find_infeasible_prefix([["5", -1], [5, "x"]]) == (
            "Impossible bet: if 1ST: 5, there is no valid completion."
        )

    def test_only_junk_is_incomplete(self):
        assert find_infeasible_prefix([[-3, "x"], [1]]) is None
