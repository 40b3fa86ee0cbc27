from .pareto import (
    Ranking,
    dominance_compare,
    dominance_matrix,
    fast_non_dominated_sort,
    rank_solutions,
)

__all__ = [
    "Ranking",
    "dominance_compare",
    "dominance_matrix",
    "fast_non_dominated_sort",
    "rank_solutions",
]
