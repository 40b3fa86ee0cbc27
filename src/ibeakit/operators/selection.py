"""Mating selection operators."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ibeakit.foundation.solution import Solution

from .base import SelectionOperator


class BinaryTournament(SelectionOperator):
    """
    Binary tournament on IBEA fitness:
    two distinct candidates are drawn, the lower fitness wins and ties are
    broken uniformly at random.
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()

    def execute(self, solutions: Sequence[Solution]) -> Solution:
        n = len(solutions)
        if n == 0:
            raise ValueError("Cannot run a tournament on an empty collection.")
        if n == 1:
            return solutions[0]
        i, j = self.rng.choice(n, size=2, replace=False)
        a, b = solutions[int(i)], solutions[int(j)]
        if a.fitness < b.fitness:
            return a
        if b.fitness < a.fitness:
            return b
        return a if self.rng.random() < 0.5 else b


__all__ = ["BinaryTournament"]
