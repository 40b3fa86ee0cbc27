"""
IBEA algorithm module.

This package provides the hypervolume-based IBEA (Indicator-Based
Evolutionary Algorithm) with modular components:
- `ibea.py`: main IBEA class (run/ask/tell loop)
- `initialization.py`: configuration, operators and initial population
- `state.py`: IBEAState + result building
- `indicator.py`: hypervolume contribution and the pairwise indicator matrix
- `fitness.py`: bounds and exponential fitness assignment
- `selection.py`: incremental environmental selection

References:
    E. Zitzler and S. Künzli, "Indicator-Based Selection in Multiobjective
    Search," in Proc. PPSN VIII, 2004, pp. 832-842.
"""

from .ibea import IBEA
from .fitness import KAPPA, ObjectiveBounds, assign_fitness, compute_bounds, fitness_at, ibea_fitness
from .indicator import RHO, IndicatorMatrix, hypervolume_contribution, validate_bounds
from .initialization import initialize_ibea_run, parse_termination, resolve_config, resolve_seed
from .selection import find_worst, remove_worst, truncate
from .state import IBEAState, build_ibea_result

__all__ = [
    "IBEA",
    # Indicator
    "RHO",
    "IndicatorMatrix",
    "hypervolume_contribution",
    "validate_bounds",
    # Fitness
    "KAPPA",
    "ObjectiveBounds",
    "assign_fitness",
    "compute_bounds",
    "fitness_at",
    "ibea_fitness",
    # Selection
    "find_worst",
    "remove_worst",
    "truncate",
    # Setup
    "initialize_ibea_run",
    "parse_termination",
    "resolve_config",
    "resolve_seed",
    # State
    "IBEAState",
    "build_ibea_result",
]
