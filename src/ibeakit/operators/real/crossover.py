"""Real-valued crossover operators."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ibeakit.foundation.solution import Solution

from ..base import CrossoverOperator
from .utils import ArrayLike, RealOperator, _ensure_bounds


class SBXCrossover(CrossoverOperator, RealOperator):
    """Simulated Binary Crossover (SBX) operator.

    ``__call__`` works on a batch of matings, shape (n_matings, 2, n_vars);
    ``execute`` recombines one parent pair of :class:`Solution` objects and
    returns two unevaluated children.
    """

    def __init__(
        self,
        prob_crossover: float = 0.9,
        eta: float = 20.0,
        *,
        lower: ArrayLike,
        upper: ArrayLike,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.prob = float(prob_crossover)
        self.eta = float(eta)
        self.lower, self.upper = _ensure_bounds(lower, upper)
        self.rng = rng if rng is not None else np.random.default_rng()

    def __call__(self, parents: ArrayLike, rng: np.random.Generator) -> ArrayLike:
        parents_arr = self._as_matings(parents)
        offspring = parents_arr.copy()
        n_pairs, _, _ = offspring.shape
        if n_pairs == 0:
            return offspring

        apply_mask = rng.random(n_pairs) <= self.prob
        if not np.any(apply_mask):
            return offspring

        active = offspring[apply_mask]
        parent1 = active[:, 0, :].copy()
        parent2 = active[:, 1, :].copy()
        eps = 1.0e-14

        y1 = np.minimum(parent1, parent2)
        y2 = np.maximum(parent1, parent2)
        diff = y2 - y1
        valid = diff > eps
        if not np.any(valid):
            return offspring

        xl = self.lower.reshape(1, -1)
        xu = self.upper.reshape(1, -1)
        rand = rng.random(parent1.shape)
        betaq = np.empty_like(parent1)
        inv_eta = 1.0 / (self.eta + 1.0)

        beta = 1.0 + (2.0 * (y1 - xl) / diff.clip(min=eps))
        beta = np.maximum(beta, eps)
        alpha = np.maximum(2.0 - np.power(beta, -(self.eta + 1.0)), eps)
        term = rand <= (1.0 / alpha)
        betaq[term] = np.power(rand[term] * alpha[term], inv_eta)
        betaq[~term] = np.power(1.0 / (2.0 - rand[~term] * alpha[~term]), inv_eta)
        c1 = 0.5 * ((y1 + y2) - betaq * diff)

        beta = 1.0 + (2.0 * (xu - y2) / diff.clip(min=eps))
        beta = np.maximum(beta, eps)
        alpha = np.maximum(2.0 - np.power(beta, -(self.eta + 1.0)), eps)
        term = rand <= (1.0 / alpha)
        betaq[term] = np.power(rand[term] * alpha[term], inv_eta)
        betaq[~term] = np.power(1.0 / (2.0 - rand[~term] * alpha[~term]), inv_eta)
        c2 = 0.5 * ((y1 + y2) + betaq * diff)

        c1 = np.clip(c1, self.lower, self.upper)
        c2 = np.clip(c2, self.lower, self.upper)
        swap = rng.random(parent1.shape) <= 0.5
        child1 = np.where(swap, c2, c1)
        child2 = np.where(swap, c1, c2)
        # Genes whose parents coincide are inherited unchanged.
        child1 = np.where(valid, child1, parent1)
        child2 = np.where(valid, child2, parent2)

        active[:, 0, :] = child1
        active[:, 1, :] = child2
        offspring[apply_mask] = active
        return offspring

    def execute(self, parents: Sequence[Solution]) -> list[Solution]:
        if len(parents) != 2:
            raise ValueError(f"SBX needs exactly 2 parents, got {len(parents)}.")
        matings = np.stack([parents[0].variables, parents[1].variables])[None, :, :]
        children = self(matings, self.rng)[0]
        offspring = []
        for parent, variables in zip(parents, children):
            child = parent.copy()
            child.variables = variables.copy()
            child.fitness = 0.0
            offspring.append(child)
        return offspring


__all__ = ["SBXCrossover"]
