# algorithm/ibea/ibea.py
"""
IBEA evolutionary algorithm core.

This module contains the main IBEA class with the evolutionary loop (run/ask/tell).
- Setup logic: initialization.py
- State and results: state.py
- Indicator, fitness and truncation: indicator.py, fitness.py, selection.py

References:
    E. Zitzler and S. Künzli, "Indicator-Based Selection in Multiobjective
    Search," in Proc. PPSN VIII, 2004, pp. 832-842.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Sequence

from ibeakit.engine.algorithm.config import IBEAConfig
from ibeakit.foundation.metrics.pareto import rank_solutions
from ibeakit.foundation.solution import Solution, SolutionSet

from .fitness import assign_fitness
from .initialization import evaluate_solution, guarded, initialize_ibea_run, resolve_config
from .selection import truncate
from .state import IBEAState, RankingFn, build_ibea_result

if TYPE_CHECKING:
    from ibeakit.foundation.problem.types import ProblemProtocol

_logger = logging.getLogger(__name__)


class IBEA:
    """Indicator-Based Evolutionary Algorithm.

    Every generation the population is merged with the archive, fitness is
    recomputed from the hypervolume-contribution indicator over that union
    and the union is truncated back to ``pop_size`` by removing the worst
    individual one at a time. Offspring are bred from the survivors.

    Parameters
    ----------
    config : IBEAConfig or dict
        Algorithm configuration with keys:
        - pop_size (int): Population size, also the truncation target
        - archive_size (int): Archive capacity
        - max_evaluations (int): Evaluation budget
        - crossover / mutation / selection (tuple, optional): Operator configs
        - kappa (float, optional): Fitness scaling factor (default: 0.05)
        - rho (float, optional): Reference box inflation (default: 2.0)
        - tournament_rounds (int, optional): Selection calls per parent (default: 1)
        - n_jobs (int, optional): Workers for the indicator matrix (default: 1)
    selection, crossover, mutation : optional
        Operator objects with an ``execute`` method; override the configured ones.
    ranking : callable, optional
        ``rank(solutions) -> fronts`` used to extract the final front.

    Examples
    --------
    >>> from ibeakit import IBEA, IBEAConfig, ZDT1Problem
    >>> config = IBEAConfig.default(pop_size=100)
    >>> result = IBEA(config).run(ZDT1Problem(n_var=30), seed=42)

    Ask/tell interface:
    >>> ibea = IBEA(config)
    >>> ibea.initialize(problem, seed=42)
    >>> while not ibea.should_terminate():
    ...     offspring = ibea.ask()
    ...     for child in offspring:
    ...         problem.evaluate(child)
    ...     ibea.tell(offspring)
    >>> result = ibea.result()
    """

    def __init__(
        self,
        config: IBEAConfig | Mapping[str, Any],
        *,
        selection: Any = None,
        crossover: Any = None,
        mutation: Any = None,
        ranking: RankingFn | None = None,
    ) -> None:
        self.cfg = config
        self._operators = {"selection": selection, "crossover": crossover, "mutation": mutation}
        self._ranking: RankingFn = ranking or rank_solutions
        self._st: IBEAState | None = None
        self._problem: ProblemProtocol | None = None

    # -------------------------------------------------------------------------
    # Main run method (batch mode)
    # -------------------------------------------------------------------------

    def run(
        self,
        problem: ProblemProtocol,
        termination: tuple[str, Any] | None = None,
        seed: int | None = None,
    ) -> dict[str, Any]:
        """Run the IBEA optimization loop until the budget is spent.

        Parameters
        ----------
        problem : ProblemProtocol
            Problem to optimize.
        termination : tuple, optional
            ``("max_evaluations", N)``; defaults to the configured budget.
        seed : int, optional
            Random seed for the default operators and initial population.
            ``None`` falls back to ``config.seed``, then to ``0``.

        Returns
        -------
        dict
            Result dictionary; ``solutions`` holds the first non-dominated
            front of the final archive.
        """
        self.initialize(problem, termination, seed)
        st = self._require_state()

        while st.n_eval < st.max_evaluations:
            self._environmental_selection(st)
            offspring = self._generate_offspring(st, problem)
            self._advance(st, offspring)

        return self.result()

    # -------------------------------------------------------------------------
    # Generation steps
    # -------------------------------------------------------------------------

    def _environmental_selection(self, st: IBEAState) -> None:
        """Merge population and archive, refit and truncate to ``pop_size``."""
        union = st.population.union(st.archive)
        matrix = assign_fitness(union, st.kappa, rho=st.rho, n_jobs=st.n_jobs)
        removed = truncate(union, matrix, st.pop_size, st.kappa)
        st.archive = union
        _logger.debug(
            "Generation %d: union=%d, removed=%d, archive=%d, max|I|=%.6g.",
            st.generation,
            len(union) + len(removed),
            len(removed),
            len(st.archive),
            matrix.max_abs_value,
        )

    def _select_parent(self, st: IBEAState) -> Solution:
        parent = None
        for _ in range(st.tournament_rounds):
            parent = guarded("selection", st.selection.execute, st.archive, n_eval=st.n_eval)
        return parent

    def _generate_offspring(self, st: IBEAState, problem: ProblemProtocol | None) -> SolutionSet:
        """Breed ``pop_size`` children; evaluate each one if ``problem`` is given."""
        offspring = SolutionSet()
        while len(offspring) < st.pop_size:
            parents = [self._select_parent(st), self._select_parent(st)]
            children = guarded("crossover", st.crossover.execute, parents, n_eval=st.n_eval)
            child = children[0]
            guarded("mutation", st.mutation.execute, child, n_eval=st.n_eval)
            if problem is not None:
                evaluate_solution(problem, child, st.n_eval)
                st.n_eval += 1
            offspring.append(child)
        return offspring

    def _advance(self, st: IBEAState, offspring: SolutionSet) -> None:
        st.population = offspring
        st.generation += 1

    def _require_state(self) -> IBEAState:
        if self._st is None:
            raise RuntimeError("Algorithm not initialized. Call initialize() first.")
        return self._st

    # -------------------------------------------------------------------------
    # Ask/Tell Interface
    # -------------------------------------------------------------------------

    def initialize(
        self,
        problem: ProblemProtocol,
        termination: tuple[str, Any] | None = None,
        seed: int | None = None,
    ) -> None:
        """Validate configuration, then create and evaluate the initial population."""
        self.cfg = resolve_config(self.cfg)
        self._st = initialize_ibea_run(self.cfg, problem, termination, seed, **self._operators)
        self._problem = problem

    def ask(self) -> SolutionSet:
        """Run environmental selection and return unevaluated offspring.

        Raises
        ------
        RuntimeError
            If not initialized or previous offspring not consumed.
        """
        st = self._require_state()
        if st.pending_offspring is not None:
            raise RuntimeError("Previous offspring not yet consumed by tell().")
        self._environmental_selection(st)
        offspring = self._generate_offspring(st, None)
        st.pending_offspring = offspring
        return SolutionSet(offspring)

    def tell(self, offspring: Sequence[Solution]) -> None:
        """Receive the evaluated offspring returned by :meth:`ask`.

        Each offspring counts as one evaluation.
        """
        st = self._require_state()
        if st.pending_offspring is None:
            raise RuntimeError("No pending offspring. Call ask() first.")
        if len(offspring) != len(st.pending_offspring):
            raise ValueError(f"Expected {len(st.pending_offspring)} evaluated offspring, got {len(offspring)}.")
        st.pending_offspring = None
        st.n_eval += len(offspring)
        self._advance(st, SolutionSet(offspring))

    def should_terminate(self) -> bool:
        """Check if the evaluation budget is spent."""
        if self._st is None:
            return True
        return self._st.n_eval >= self._st.max_evaluations

    def result(self) -> dict[str, Any]:
        """First non-dominated front of the final archive.

        Notes
        -----
        When no generation ran (budget spent by the initial population) this
        call runs environmental selection once before building the result:
        ``state.archive`` becomes the ``pop_size`` survivors of the initial
        population and their ``fitness`` values are assigned.
        """
        st = self._require_state()
        if not st.archive and st.population:
            self._environmental_selection(st)
        return build_ibea_result(st, self._ranking)

    @property
    def state(self) -> IBEAState | None:
        """Access current algorithm state."""
        return self._st


__all__ = ["IBEA"]
