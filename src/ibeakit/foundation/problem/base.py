"""
Base class for class-based optimization problems.
"""

from __future__ import annotations

import numpy as np

from ibeakit.foundation.solution import Solution


class Problem:
    """Base class for real-valued optimization problems.

    **Required:** set ``n_var``, ``n_obj``, ``xl``, ``xu`` in ``__init__`` and
    implement :meth:`objectives`.
    **Optional:** set ``n_constraints`` at class level and implement
    :meth:`constraints`.

    Constrained example::

        class MyConstrainedProblem(Problem):
            n_constraints = 1

            def __init__(self):
                self.n_var = 3
                self.n_obj = 2
                self.xl = np.zeros(3)
                self.xu = np.ones(3)

            def objectives(self, x):
                return np.array([np.sum(x ** 2), np.sum((x - 1) ** 2)])

            def constraints(self, x):
                # Sign convention: g(x) <= 0 means feasible.
                return np.array([np.sum(x) - 2.0])
    """

    n_var: int
    n_obj: int
    xl: float | np.ndarray
    xu: float | np.ndarray

    n_constraints: int = 0
    """Number of inequality constraints.  Default: ``0`` (unconstrained)."""

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Lower and upper bounds broadcast to ``(n_var,)`` float arrays."""
        lower = np.broadcast_to(np.asarray(self.xl, dtype=float), (self.n_var,)).copy()
        upper = np.broadcast_to(np.asarray(self.xu, dtype=float), (self.n_var,)).copy()
        if np.any(lower > upper):
            raise ValueError("Each lower bound must be <= corresponding upper bound.")
        return lower, upper

    def create_solution(self, rng: np.random.Generator) -> Solution:
        """Sample a solution uniformly inside the bounds (not evaluated)."""
        lower, upper = self.bounds()
        solution = Solution.empty(self.n_var, self.n_obj, self.n_constraints)
        solution.variables = rng.uniform(lower, upper)
        return solution

    def objectives(self, x: np.ndarray) -> np.ndarray:
        raise NotImplementedError(f"{type(self).__name__} must implement objectives(x)")

    def constraints(self, x: np.ndarray) -> np.ndarray:
        return np.empty(0, dtype=float)

    def evaluate(self, solution: Solution) -> None:
        x = np.asarray(solution.variables, dtype=float)
        if x.shape != (self.n_var,):
            raise ValueError(f"Expected decision vector of shape ({self.n_var},), got {x.shape}.")
        solution.objectives = np.asarray(self.objectives(x), dtype=float).reshape(self.n_obj)

    def evaluate_constraints(self, solution: Solution) -> None:
        if self.n_constraints <= 0:
            return
        x = np.asarray(solution.variables, dtype=float)
        solution.constraints = np.asarray(self.constraints(x), dtype=float).reshape(self.n_constraints)


__all__ = ["Problem"]
