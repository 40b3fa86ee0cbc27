"""Real-valued evolutionary operators."""

from .crossover import SBXCrossover
from .mutation import PolynomialMutation
from .utils import ArrayLike, RealOperator

__all__ = [
    "ArrayLike",
    "PolynomialMutation",
    "RealOperator",
    "SBXCrossover",
]
