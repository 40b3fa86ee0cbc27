"""
ibeakit: hypervolume-based Indicator-Based Evolutionary Algorithm.

Example:
    >>> from ibeakit import IBEA, IBEAConfig, ZDT1Problem
    >>> result = IBEA(IBEAConfig.default(pop_size=50)).run(ZDT1Problem(n_var=10), seed=1)
    >>> front = result["F"]
"""

from __future__ import annotations

from ibeakit.engine.algorithm.config import IBEAConfig
from ibeakit.engine.algorithm.ibea import IBEA, IndicatorMatrix, assign_fitness, hypervolume_contribution, truncate
from ibeakit.foundation.exceptions import (
    ConfigurationError,
    DegenerateBoundsError,
    IBEAKitError,
    OperatorFailure,
    SelectionError,
)
from ibeakit.foundation.logging import configure_ibeakit_logging
from ibeakit.foundation.metrics.pareto import Ranking
from ibeakit.foundation.problem import BinhKornProblem, DTLZ2Problem, Problem, ZDT1Problem, ZDT2Problem
from ibeakit.foundation.solution import Solution, SolutionSet
from ibeakit.foundation.version import get_version

__all__ = [
    "IBEA",
    "IBEAConfig",
    "IndicatorMatrix",
    "assign_fitness",
    "hypervolume_contribution",
    "truncate",
    "Solution",
    "SolutionSet",
    "Ranking",
    "Problem",
    "ZDT1Problem",
    "ZDT2Problem",
    "DTLZ2Problem",
    "BinhKornProblem",
    "IBEAKitError",
    "ConfigurationError",
    "DegenerateBoundsError",
    "SelectionError",
    "OperatorFailure",
    "configure_ibeakit_logging",
    "get_version",
]
