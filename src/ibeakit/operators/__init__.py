"""Selection and variation operators."""

from .base import CrossoverOperator, MutationOperator, SelectionOperator
from .real import PolynomialMutation, SBXCrossover
from .registry import available_operators, build_operator, resolve_probability
from .selection import BinaryTournament

__all__ = [
    "SelectionOperator",
    "CrossoverOperator",
    "MutationOperator",
    "BinaryTournament",
    "SBXCrossover",
    "PolynomialMutation",
    "available_operators",
    "build_operator",
    "resolve_probability",
]
