"""
Pareto dominance, non-dominated sorting and ranking.

All objectives are minimized. When constraint violations are supplied,
dominance is feasibility-aware: of two solutions with different overall
violation the less violated one dominates; ties fall back to Pareto
dominance on the objectives.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ibeakit.foundation.solution import Solution, SolutionSet


def dominance_compare(
    f_a: np.ndarray,
    f_b: np.ndarray,
    cv_a: float = 0.0,
    cv_b: float = 0.0,
) -> int:
    """Compare two objective vectors.

    Returns
    -------
    int
        -1 if ``a`` dominates ``b``, 1 if ``b`` dominates ``a``, 0 otherwise.
    """
    if cv_a != cv_b and (cv_a > 0.0 or cv_b > 0.0):
        return -1 if cv_a < cv_b else 1
    a_better = False
    b_better = False
    for va, vb in zip(f_a, f_b):
        if va < vb:
            a_better = True
        elif vb < va:
            b_better = True
        if a_better and b_better:
            return 0
    if a_better:
        return -1
    if b_better:
        return 1
    return 0


def dominance_matrix(F: np.ndarray, cv: np.ndarray | None = None) -> np.ndarray:
    """Boolean matrix ``D`` with ``D[i, j]`` True when i dominates j."""
    F = np.asarray(F, dtype=float)
    less_equal = F[:, None, :] <= F[None, :, :]
    strictly_less = F[:, None, :] < F[None, :, :]
    dom = np.logical_and(np.all(less_equal, axis=2), np.any(strictly_less, axis=2))
    if cv is None:
        return dom
    cv = np.asarray(cv, dtype=float)
    differ = cv[:, None] != cv[None, :]
    infeasible_pair = (cv[:, None] > 0.0) | (cv[None, :] > 0.0)
    by_violation = differ & infeasible_pair
    return np.where(by_violation, cv[:, None] < cv[None, :], dom)


def fast_non_dominated_sort(F: np.ndarray, cv: np.ndarray | None = None) -> tuple[list[list[int]], np.ndarray]:
    """
    Classic O(N^2) fast non-dominated sort.

    Args:
        F: objective matrix (N, M), float64.
        cv: optional overall constraint violation per row, shape (N,).
    Returns:
      - fronts: list of lists with indices per front (0, 1, ...)
      - rank: array with the front rank for each solution
    """
    F = np.asarray(F, dtype=float)
    N = F.shape[0]
    if N == 0:
        return [], np.empty(0, dtype=int)

    dom_matrix = dominance_matrix(F, cv)

    dominated_count = dom_matrix.sum(axis=0).astype(np.int64)
    rank = np.empty(N, dtype=int)
    fronts = []

    current = np.flatnonzero(dominated_count == 0)
    level = 0
    while current.size > 0:
        fronts.append(current.tolist())
        rank[current] = level
        dom_contrib = dom_matrix[current].sum(axis=0)
        dominated_count -= dom_contrib
        dominated_count[current] = -1
        dom_matrix[current] = False
        level += 1
        current = np.flatnonzero(dominated_count == 0)

    return fronts, rank


class Ranking:
    """Partition a solution collection into non-dominated fronts.

    Front 0 holds the solutions no other member dominates; front ``k`` holds
    those dominated only by members of fronts ``< k``. Within a front the
    original collection order is preserved.
    """

    def __init__(self, solutions: Sequence[Solution]) -> None:
        members = SolutionSet(solutions)
        if members:
            fronts, rank = fast_non_dominated_sort(members.objectives_matrix(), members.violations())
        else:
            fronts, rank = [], np.empty(0, dtype=int)
        self._fronts = [SolutionSet(members[i] for i in sorted(front)) for front in fronts]
        self.rank = rank

    @property
    def number_of_subfronts(self) -> int:
        return len(self._fronts)

    def get_subfront(self, index: int) -> SolutionSet:
        if index < 0 or index >= len(self._fronts):
            raise IndexError(f"Front {index} does not exist (have {len(self._fronts)}).")
        return self._fronts[index]

    def __call__(self) -> list[SolutionSet]:
        return list(self._fronts)


def rank_solutions(solutions: Sequence[Solution]) -> list[SolutionSet]:
    """Ranking callable with the ``rank(collection) -> fronts`` signature."""
    return Ranking(solutions)()


__all__ = [
    "dominance_compare",
    "dominance_matrix",
    "fast_non_dominated_sort",
    "Ranking",
    "rank_solutions",
]
