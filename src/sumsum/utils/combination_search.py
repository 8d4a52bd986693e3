"""Bounded enumeration of cube combinations by sum.

Combinations are tuples of *indices* into the input sequence, so equal values
at different positions count as different cubes. All values must be positive;
``solve`` prunes any branch whose partial sum already exceeds the target.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from sumsum.constants import MAX_CUBES_FOR_SUM, MIN_CUBES_FOR_SUM

Combination = Tuple[int, ...]


def find_all_sums(
    values: Sequence[int],
    min_count: int = MIN_CUBES_FOR_SUM,
    max_count: int = MAX_CUBES_FOR_SUM,
) -> Dict[int, List[Combination]]:
    """Map every sum reachable with ``min_count..max_count`` items to its combinations.

    The search is exponential in ``len(values)``; callers keep the pool small.
    """
    results: Dict[int, List[Combination]] = {}
    size = len(values)
    stack: List[int] = []

    def search(start: int, total: int) -> None:
        depth = len(stack)
        if depth >= min_count:
            results.setdefault(total, []).append(tuple(stack))
        if depth >= max_count:
            return
        for index in range(start, size):
            stack.append(index)
            search(index + 1, total + values[index])
            stack.pop()

    search(0, 0)
    return results


def solve(
    values: Sequence[int],
    target: int,
    exact_count: Optional[int] = None,
    *,
    min_count: int = MIN_CUBES_FOR_SUM,
    max_count: int = MAX_CUBES_FOR_SUM,
    limit: Optional[int] = None,
) -> List[Combination]:
    """Return index combinations summing exactly to ``target``.

    ``exact_count`` pins the combination size; otherwise sizes range over
    ``min_count..max_count``. ``limit`` stops the search after that many hits.
    """
    if exact_count is not None:
        min_count = max_count = exact_count
    results: List[Combination] = []
    if target <= 0 or max_count < 1:
        return results
    size = len(values)
    stack: List[int] = []

    def search(start: int, total: int) -> bool:
        depth = len(stack)
        if total == target:
            if depth >= min_count:
                results.append(tuple(stack))
                return limit is not None and len(results) >= limit
            # Any further positive value overshoots.
            return False
        if depth >= max_count:
            return False
        for index in range(start, size):
            next_total = total + values[index]
            if next_total > target:
                continue
            stack.append(index)
            done = search(index + 1, next_total)
            stack.pop()
            if done:
                return True
        return False

    search(0, 0)
    return results


def can_reach(
    values: Sequence[int],
    target: int,
    *,
    min_count: int = MIN_CUBES_FOR_SUM,
    max_count: int = MAX_CUBES_FOR_SUM,
) -> bool:
    return bool(solve(values, target, min_count=min_count, max_count=max_count, limit=1))


def min_combination_sizes(sums: Dict[int, List[Combination]]) -> Dict[int, int]:
    """Smallest number of items that reaches each sum."""
    return {total: min(len(combo) for combo in combos) for total, combos in sums.items() if combos}
