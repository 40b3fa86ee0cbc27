"""
Operator interfaces consumed by the IBEA loop.

Any object exposing a matching ``execute`` method can be plugged in; the
abstract classes below only document the three roles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ibeakit.foundation.solution import Solution


class SelectionOperator(ABC):
    """Mating selection: pick one parent from a collection."""

    @abstractmethod
    def execute(self, solutions: Sequence[Solution]) -> Solution:
        raise NotImplementedError


class CrossoverOperator(ABC):
    """Recombination: map a parent pair to an offspring pair."""

    @abstractmethod
    def execute(self, parents: Sequence[Solution]) -> list[Solution]:
        raise NotImplementedError


class MutationOperator(ABC):
    """Mutation: perturb a solution in place."""

    @abstractmethod
    def execute(self, solution: Solution) -> None:
        raise NotImplementedError


__all__ = ["SelectionOperator", "CrossoverOperator", "MutationOperator"]
