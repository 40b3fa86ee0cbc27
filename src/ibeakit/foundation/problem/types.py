from __future__ import annotations

from typing import Protocol

import numpy as np

from ibeakit.foundation.solution import Solution


class ProblemProtocol(Protocol):
    n_var: int
    n_obj: int
    n_constraints: int

    def evaluate(self, solution: Solution) -> None: ...

    def evaluate_constraints(self, solution: Solution) -> None: ...

    def create_solution(self, rng: np.random.Generator) -> Solution: ...


__all__ = ["ProblemProtocol"]
