from .base import Problem
from .benchmarks import BinhKornProblem, DTLZ2Problem, ZDT1Problem, ZDT2Problem
from .types import ProblemProtocol

__all__ = [
    "Problem",
    "ProblemProtocol",
    "ZDT1Problem",
    "ZDT2Problem",
    "DTLZ2Problem",
    "BinhKornProblem",
]
