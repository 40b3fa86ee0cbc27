"""
Solution containers.

A ``Solution`` carries a real-valued decision vector, its objective and
constraint values, and the scalar fitness written by IBEA's fitness
assignment. ``SolutionSet`` is the ordered, index-addressable collection the
selection machinery works on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from ibeakit.foundation.constraints.utils import violation_of


@dataclass(eq=False)
class Solution:
    """Candidate solution.

    Attributes
    ----------
    variables : np.ndarray
        Decision vector, shape (n_var,).
    objectives : np.ndarray
        Objective vector, shape (n_obj,). Minimization is assumed.
    constraints : np.ndarray | None
        Constraint values, ``g <= 0`` means satisfied. ``None`` when the
        problem is unconstrained.
    fitness : float
        IBEA fitness, lower is better.
    """

    variables: np.ndarray
    objectives: np.ndarray
    constraints: np.ndarray | None = None
    fitness: float = 0.0

    @classmethod
    def empty(cls, n_var: int, n_obj: int, n_constraints: int = 0) -> Solution:
        return cls(
            variables=np.zeros(n_var, dtype=float),
            objectives=np.zeros(n_obj, dtype=float),
            constraints=np.zeros(n_constraints, dtype=float) if n_constraints > 0 else None,
        )

    @property
    def n_obj(self) -> int:
        return int(self.objectives.shape[0])

    @property
    def constraint_violation(self) -> float:
        return violation_of(self.constraints)

    @property
    def feasible(self) -> bool:
        return self.constraint_violation <= 0.0

    def copy(self) -> Solution:
        return Solution(
            variables=self.variables.copy(),
            objectives=self.objectives.copy(),
            constraints=None if self.constraints is None else self.constraints.copy(),
            fitness=self.fitness,
        )


class SolutionSet(list):
    """Ordered mutable collection of :class:`Solution` objects."""

    def __init__(self, solutions: Iterable[Solution] = ()) -> None:
        super().__init__(solutions)

    def union(self, other: Iterable[Solution]) -> SolutionSet:
        """Return a new set holding ``self`` followed by ``other``."""
        merged = SolutionSet(self)
        merged.extend(other)
        return merged

    def objectives_matrix(self) -> np.ndarray:
        if not self:
            return np.empty((0, 0), dtype=float)
        return np.vstack([np.asarray(s.objectives, dtype=float) for s in self])

    def variables_matrix(self) -> np.ndarray:
        if not self:
            return np.empty((0, 0), dtype=float)
        return np.vstack([np.asarray(s.variables, dtype=float) for s in self])

    def constraints_matrix(self) -> np.ndarray | None:
        if not self or any(s.constraints is None for s in self):
            return None
        return np.vstack([np.asarray(s.constraints, dtype=float) for s in self])

    def violations(self) -> np.ndarray:
        return np.array([s.constraint_violation for s in self], dtype=float)

    def fitness_values(self) -> np.ndarray:
        return np.array([s.fitness for s in self], dtype=float)


__all__ = ["Solution", "SolutionSet"]
