# algorithm/ibea/fitness.py
"""
IBEA fitness assignment.

Fitness of the individual at position ``pos`` is

    sum_{i != pos} exp((-I[i, pos] / max|I|) / kappa)

so an individual dominated strongly by many others accumulates a large
value. Lower fitness is better.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ibeakit.foundation.exceptions import DegenerateBoundsError
from ibeakit.foundation.solution import Solution, SolutionSet

from .indicator import RHO, IndicatorMatrix

KAPPA = 0.05


@dataclass(frozen=True)
class ObjectiveBounds:
    """Per-objective maximum and minimum over one collection."""

    maximum: np.ndarray
    minimum: np.ndarray

    @property
    def n_obj(self) -> int:
        return int(self.maximum.shape[0])


def compute_bounds(solutions: Sequence[Solution]) -> ObjectiveBounds:
    """Compute objective bounds over exactly ``solutions``.

    Raises
    ------
    ValueError
        If the collection is empty.
    DegenerateBoundsError
        If any objective value is not finite.
    """
    if len(solutions) == 0:
        raise ValueError("Cannot compute objective bounds of an empty collection.")
    F = SolutionSet(solutions).objectives_matrix()
    bad = np.flatnonzero(~np.all(np.isfinite(F), axis=0))
    if bad.size:
        raise DegenerateBoundsError(f"Objective {int(bad[0])} has non-finite values.", objective=int(bad[0]))
    return ObjectiveBounds(maximum=np.max(F, axis=0), minimum=np.min(F, axis=0))


def fitness_at(matrix: IndicatorMatrix, pos: int, kappa: float = KAPPA) -> float:
    """Fitness of the individual at ``pos`` from column ``pos`` of the matrix."""
    fitness = 0.0
    for i in range(matrix.size):
        if i != pos:
            fitness += matrix.contribution(i, pos, kappa)
    return fitness


def ibea_fitness(matrix: IndicatorMatrix, kappa: float = KAPPA) -> np.ndarray:
    """Fitness of every individual, shape (N,)."""
    contrib = matrix.contributions(kappa)
    np.fill_diagonal(contrib, 0.0)
    return np.asarray(np.sum(contrib, axis=0), dtype=float)


def assign_fitness(
    solutions: Sequence[Solution],
    kappa: float = KAPPA,
    *,
    rho: float = RHO,
    n_jobs: int | None = 1,
) -> IndicatorMatrix:
    """Recompute bounds, the indicator matrix and every fitness value.

    Writes ``fitness`` on each solution exactly once and returns the matrix,
    whose indices match the positions in ``solutions``.
    """
    if len(solutions) == 0:
        return IndicatorMatrix(np.empty((0, 0)), 0.0)
    members = SolutionSet(solutions)
    bounds = compute_bounds(members)
    matrix = IndicatorMatrix.build(
        members.objectives_matrix(),
        bounds.maximum,
        bounds.minimum,
        members.violations(),
        rho=rho,
        n_jobs=n_jobs,
    )
    values = ibea_fitness(matrix, kappa)
    for solution, value in zip(solutions, values):
        solution.fitness = float(value)
    return matrix


__all__ = [
    "KAPPA",
    "ObjectiveBounds",
    "compute_bounds",
    "fitness_at",
    "ibea_fitness",
    "assign_fitness",
]
