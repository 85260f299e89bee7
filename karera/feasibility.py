"""Explain order selections that have candidates everywhere but no valid result.

"1st: {5}, 2nd: {5}" has a horse in every position yet zero combinations,
because no result can use horse 5 twice. The checker walks assignment
prefixes left to right and reports the first prefix that cannot be completed.
"""

from karera.bet_types import BetType, position_label
from karera.selection import OrderSelection, Selection, normalize_horse_numbers


def _mask(horse: int) -> int:
    return 1 << horse


def find_infeasible_prefix(positions: list[list[int]]) -> str | None:
    """Diagnostic for the first uncompletable prefix, or None.

    Incomplete selections (an empty position) return None: they are blocked
    as incomplete, not as impossible. Prefixes are extended up to the
    second-to-last position only, since a full assignment is never checked
    for a completion. The first prefix found is reported, which is not
    always the shortest one.
    """
    positions = [normalize_horse_numbers(p) for p in positions or []]
    if not positions or any(not p for p in positions):
        return None

    n = len(positions)
    memo: dict[tuple[int, int], bool] = {}

    def has_completion(idx: int, used: int) -> bool:
        if idx >= n:
            return True
        key = (idx, used)
        cached = memo.get(key)
        if cached is not None:
            return cached
        for horse in positions[idx]:
            bit = _mask(horse)
            if used & bit:
                continue
            if has_completion(idx + 1, used | bit):
                memo[key] = True
                return True
        memo[key] = False
        return False

    path: list[int] = []

    def explore(idx: int, used: int) -> str | None:
        if idx >= n - 1:
            return None
        for horse in positions[idx]:
            bit = _mask(horse)
            if used & bit:
                continue
            path.append(horse)
            try:
                if not has_completion(idx + 1, used | bit):
                    prefix = " | ".join(
                        f"{position_label(i)}: {h}" for i, h in enumerate(path)
                    )
                    return f"Impossible bet: if {prefix}, there is no valid completion."
                deeper = explore(idx + 1, used | bit)
                if deeper:
                    return deeper
            finally:
                path.pop()
        return None

    return explore(0, 0)


def feasibility_for(bet_type: BetType | str, selection: Selection) -> str | None:
    """Feasibility message for order-capable bets; None for everything else."""
    bt = BetType.parse(bet_type)
    if not bt.is_order or not isinstance(selection, OrderSelection):
        return None
    return find_infeasible_prefix(selection.positions)
