# algorithm/ibea/selection.py
"""
IBEA environmental selection.

The worst individual (highest fitness) is removed one at a time. Before it
leaves, its contribution is subtracted from every survivor's fitness, so the
remaining values equal a fresh fitness assignment over the smaller
collection without rebuilding the indicator matrix.
"""

from __future__ import annotations

import logging
from typing import MutableSequence

from ibeakit.foundation.exceptions import InvalidParameterError, SelectionError
from ibeakit.foundation.solution import Solution

from .fitness import KAPPA
from .indicator import IndicatorMatrix

_logger = logging.getLogger(__name__)


def find_worst(solutions: MutableSequence[Solution]) -> int:
    """Index of the highest fitness; ties go to the lowest index."""
    if len(solutions) == 0:
        raise SelectionError("Cannot select the worst individual of an empty collection.")
    worst_index = 0
    worst = solutions[0].fitness
    for i in range(1, len(solutions)):
        if solutions[i].fitness > worst:
            worst = solutions[i].fitness
            worst_index = i
    return worst_index


def remove_worst(
    solutions: MutableSequence[Solution],
    matrix: IndicatorMatrix,
    kappa: float = KAPPA,
) -> Solution:
    """Remove the worst individual, patching survivors' fitness in place.

    ``solutions`` and ``matrix`` shrink together so that matrix index ``k``
    keeps referring to ``solutions[k]``.

    Returns
    -------
    Solution
        The removed individual.
    """
    if len(solutions) != matrix.size:
        raise SelectionError(
            f"Collection size {len(solutions)} does not match indicator matrix size {matrix.size}."
        )
    worst_index = find_worst(solutions)

    for i in range(len(solutions)):
        if i != worst_index:
            solutions[i].fitness -= matrix.contribution(worst_index, i, kappa)

    matrix.remove(worst_index)
    return solutions.pop(worst_index)


def truncate(
    solutions: MutableSequence[Solution],
    matrix: IndicatorMatrix,
    target: int,
    kappa: float = KAPPA,
) -> list[Solution]:
    """Shrink ``solutions`` to ``target`` members, worst first.

    Returns the removed individuals in removal order. A collection already at
    or below ``target`` is left untouched.
    """
    if target < 1:
        raise InvalidParameterError("target", target, "a positive integer")
    removed: list[Solution] = []
    while len(solutions) > target:
        removed.append(remove_worst(solutions, matrix, kappa))
    if removed:
        _logger.debug("Environmental selection removed %d individuals, %d remain.", len(removed), len(solutions))
    return removed


__all__ = ["find_worst", "remove_worst", "truncate"]
