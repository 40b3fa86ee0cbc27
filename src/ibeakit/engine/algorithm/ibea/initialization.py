# algorithm/ibea/initialization.py
"""
Setup and initialization helpers for IBEA.

This module parses configuration and termination, builds the operators and
creates the evaluated initial population.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping, TypeVar

import numpy as np

from ibeakit.engine.algorithm.config import IBEAConfig
from ibeakit.foundation.exceptions import ConfigurationError, IBEAKitError, InvalidParameterError, OperatorFailure
from ibeakit.foundation.solution import Solution, SolutionSet
from ibeakit.operators.registry import build_operator

from .state import IBEAState

if TYPE_CHECKING:
    from ibeakit.foundation.problem.types import ProblemProtocol

_logger = logging.getLogger(__name__)

T = TypeVar("T")

_TERMINATION_KEYS = ("max_evaluations", "n_eval")


def resolve_config(config: IBEAConfig | Mapping[str, Any]) -> IBEAConfig:
    """Accept an :class:`IBEAConfig` or a plain mapping; always validated."""
    if isinstance(config, IBEAConfig):
        config.validate()
        return config
    if isinstance(config, Mapping):
        return IBEAConfig.from_dict(config)
    raise ConfigurationError(f"Unsupported configuration type {type(config).__name__}.")


def parse_termination(termination: tuple[str, Any] | None, cfg: IBEAConfig) -> int:
    """Return the evaluation budget; ``None`` uses ``cfg.max_evaluations``."""
    if termination is None:
        return cfg.max_evaluations
    kind, value = termination
    if kind not in _TERMINATION_KEYS:
        raise ConfigurationError(
            f"Unsupported termination criterion '{kind}'.",
            f"Use one of: {', '.join(_TERMINATION_KEYS)}",
        )
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise InvalidParameterError(kind, value, "a positive integer")
    return value


def resolve_seed(seed: int | None, cfg: IBEAConfig) -> int:
    """An explicit ``seed`` wins over ``cfg.seed``; ``0`` when neither is set."""
    if seed is not None:
        return seed
    return cfg.seed if cfg.seed is not None else 0


def guarded(stage: str, fn: Callable[..., T], *args: Any, n_eval: int | None = None) -> T:
    """Call ``fn``; any non-ibeakit failure aborts the run as OperatorFailure."""
    try:
        return fn(*args)
    except IBEAKitError:
        raise
    except Exception as exc:
        raise OperatorFailure(stage, exc, n_eval) from exc


def evaluate_solution(problem: "ProblemProtocol", solution: Solution, n_eval: int | None = None) -> None:
    """Objectives then constraints, as one evaluation."""
    guarded("evaluate", problem.evaluate, solution, n_eval=n_eval)
    guarded("evaluate_constraints", problem.evaluate_constraints, solution, n_eval=n_eval)


def _build_operators(
    cfg: IBEAConfig,
    problem: "ProblemProtocol",
    rng: np.random.Generator,
    overrides: Mapping[str, Any],
) -> dict[str, Any]:
    operators = {role: op for role, op in overrides.items() if op is not None}
    missing = [role for role in ("selection", "crossover", "mutation") if role not in operators]
    if not missing:
        return operators
    bounds = getattr(problem, "bounds", None)
    if bounds is None:
        raise ConfigurationError(
            f"Cannot build default {', '.join(missing)} operator(s) for a problem without bounds().",
            "Pass operator objects explicitly to IBEA(...).",
        )
    lower, upper = bounds()
    for role in missing:
        operators[role] = build_operator(role, getattr(cfg, role), lower=lower, upper=upper, rng=rng)
    return operators


def initialize_ibea_run(
    config: IBEAConfig | Mapping[str, Any],
    problem: "ProblemProtocol",
    termination: tuple[str, Any] | None = None,
    seed: int | None = None,
    *,
    selection: Any = None,
    crossover: Any = None,
    mutation: Any = None,
) -> IBEAState:
    """Initialize all components for an IBEA run.

    Configuration is validated before any evaluation happens. The initial
    population of ``pop_size`` solutions is created with
    ``problem.create_solution`` and evaluated, one evaluation each.

    Parameters
    ----------
    config : IBEAConfig or mapping
        Algorithm configuration.
    problem : ProblemProtocol
        The optimization problem.
    termination : tuple[str, Any], optional
        ``("max_evaluations", N)``; defaults to the configured budget.
    seed : int, optional
        Random seed. ``None`` falls back to ``cfg.seed``, then to ``0``.
    selection, crossover, mutation : optional
        Operator objects overriding the configured ones.

    Returns
    -------
    IBEAState
        State with the evaluated initial population and an empty archive.
    """
    cfg = resolve_config(config)
    max_eval = parse_termination(termination, cfg)
    rng = np.random.default_rng(resolve_seed(seed, cfg))

    operators = _build_operators(
        cfg,
        problem,
        rng,
        {"selection": selection, "crossover": crossover, "mutation": mutation},
    )

    population = SolutionSet()
    n_eval = 0
    for _ in range(cfg.pop_size):
        solution = guarded("create_solution", problem.create_solution, rng, n_eval=n_eval)
        evaluate_solution(problem, solution, n_eval)
        n_eval += 1
        population.append(solution)

    _logger.debug("IBEA initialized: pop_size=%d, budget=%d, n_obj=%d.", cfg.pop_size, max_eval, problem.n_obj)

    return IBEAState(
        population=population,
        archive=SolutionSet(),
        rng=rng,
        pop_size=cfg.pop_size,
        archive_size=cfg.archive_size,
        max_evaluations=max_eval,
        selection=operators["selection"],
        crossover=operators["crossover"],
        mutation=operators["mutation"],
        kappa=cfg.kappa,
        rho=cfg.rho,
        tournament_rounds=cfg.tournament_rounds,
        n_jobs=cfg.n_jobs,
        n_eval=n_eval,
    )


__all__ = [
    "resolve_config",
    "parse_termination",
    "resolve_seed",
    "guarded",
    "evaluate_solution",
    "initialize_ibea_run",
]
