"""IBEA-specific state container.

This module provides the state dataclass for IBEA's run and ask/tell loops.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

import numpy as np

from ibeakit.foundation.solution import Solution, SolutionSet

RankingFn = Callable[[Sequence[Solution]], Sequence[Sequence[Solution]]]


@dataclass
class IBEAState:
    """State container for IBEA.

    Attributes
    ----------
    population : SolutionSet
        Current working population (initial population or latest offspring).
    archive : SolutionSet
        Survivors of the latest environmental selection.
    rng : np.random.Generator
        Random generator shared by the default operators.
    pop_size, archive_size, max_evaluations : int
        Sizes and evaluation budget.
    kappa, rho : float
        Fitness scaling factor and reference box inflation factor.
    tournament_rounds : int
        Selection calls per parent draw.
    n_jobs : int or None
        Workers used to build the indicator matrix.
    selection, crossover, mutation : Any
        Operator objects exposing ``execute``.
    """

    population: SolutionSet
    archive: SolutionSet
    rng: np.random.Generator
    pop_size: int
    archive_size: int
    max_evaluations: int
    selection: Any
    crossover: Any
    mutation: Any
    kappa: float = 0.05
    rho: float = 2.0
    tournament_rounds: int = 1
    n_jobs: int | None = 1

    generation: int = 0
    n_eval: int = 0
    pending_offspring: SolutionSet | None = None


def build_ibea_result(state: IBEAState, ranking: RankingFn) -> dict[str, Any]:
    """Build the IBEA result dictionary from state.

    Only the first non-dominated front of the final archive is reported as
    the result; the full archive is included under ``"archive"``.

    Returns
    -------
    dict
        ``solutions`` (front as SolutionSet), ``X``, ``F``, ``G`` arrays of the
        front, ``archive``, ``n_eval`` and ``generation``.
    """
    fronts = ranking(state.archive) if len(state.archive) else []
    front = SolutionSet(fronts[0]) if len(fronts) else SolutionSet()
    return {
        "solutions": front,
        "X": front.variables_matrix(),
        "F": front.objectives_matrix(),
        "G": front.constraints_matrix(),
        "archive": SolutionSet(state.archive),
        "evaluations": state.n_eval,
        "n_eval": state.n_eval,
        "generation": state.generation,
    }


__all__ = [
    "IBEAState",
    "RankingFn",
    "build_ibea_result",
]
