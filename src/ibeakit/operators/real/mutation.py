"""Real-valued mutation operators."""

from __future__ import annotations

import numpy as np

from ibeakit.foundation.solution import Solution

from ..base import MutationOperator
from .utils import ArrayLike, RealOperator, _ensure_bounds


class PolynomialMutation(MutationOperator, RealOperator):
    """Standard polynomial mutation used in NSGA-II and IBEA."""

    def __init__(
        self,
        prob_mutation: float,
        eta: float = 20.0,
        *,
        lower: ArrayLike,
        upper: ArrayLike,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.prob = float(prob_mutation)
        self.eta = float(eta)
        self.lower, self.upper = _ensure_bounds(lower, upper)
        self.span = self.upper - self.lower
        self._span_safe = np.where(self.span == 0.0, 1.0, self.span)
        self.rng = rng if rng is not None else np.random.default_rng()

    def __call__(self, offspring: ArrayLike, rng: np.random.Generator) -> ArrayLike:
        X = self._as_population(offspring)
        n_ind, n_var = X.shape
        if n_ind == 0:
            return X
        mask = rng.random((n_ind, n_var)) <= self.prob
        rows, cols = np.nonzero(mask)
        if rows.size == 0:
            return X

        yl = self.lower
        yu = self.upper
        values = X[rows, cols].copy()
        span_vals = self.span[cols]
        span_safe = self._span_safe[cols]
        delta1 = (values - yl[cols]) / span_safe
        delta2 = (yu[cols] - values) / span_safe
        rnd = rng.random(rows.size)
        mut_pow = 1.0 / (self.eta + 1.0)
        deltaq = np.zeros(rows.size, dtype=float)

        idx_lower = rnd <= 0.5
        idx_upper = ~idx_lower
        if np.any(idx_lower):
            xy = 1.0 - delta1[idx_lower]
            val = 2.0 * rnd[idx_lower] + (1.0 - 2.0 * rnd[idx_lower]) * np.power(xy, self.eta + 1.0)
            deltaq[idx_lower] = np.power(val, mut_pow) - 1.0
        if np.any(idx_upper):
            xy = 1.0 - delta2[idx_upper]
            val = 2.0 * (1.0 - rnd[idx_upper]) + 2.0 * (rnd[idx_upper] - 0.5) * np.power(xy, self.eta + 1.0)
            deltaq[idx_upper] = 1.0 - np.power(val, mut_pow)

        values += deltaq * span_vals
        np.clip(values, yl[cols], yu[cols], out=values)
        X[rows, cols] = values
        return X

    def execute(self, solution: Solution) -> None:
        X = np.asarray(solution.variables, dtype=float).reshape(1, -1).copy()
        solution.variables = self(X, self.rng)[0]


__all__ = ["PolynomialMutation"]
