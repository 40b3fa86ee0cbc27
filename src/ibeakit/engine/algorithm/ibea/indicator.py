# algorithm/ibea/indicator.py
"""
Hypervolume-contribution indicator for IBEA.

- ``hypervolume_contribution``: volume dominated by one point but not by a
  competitor, recursively over the objectives.
- ``IndicatorMatrix``: dense pairwise indicator values for a collection plus
  the normalization constant captured when the matrix is built.

Row ``i`` of the matrix describes solution ``i`` as the first argument of the
comparison, column ``j`` the second one.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from joblib import Parallel, delayed

from ibeakit.foundation.exceptions import DegenerateBoundsError
from ibeakit.foundation.metrics.pareto import dominance_compare

_logger = logging.getLogger(__name__)

RHO = 2.0


def hypervolume_contribution(
    a: Sequence[float],
    b: Sequence[float] | None,
    d: int,
    maximum: Sequence[float],
    minimum: Sequence[float],
    rho: float = RHO,
) -> float:
    """Volume of the region dominated by ``a`` and not by ``b``.

    The reference box spans ``[min, min + rho * (max - min)]`` on every
    objective and the result is expressed as a fraction of it.

    Parameters
    ----------
    a : sequence of float
        Objective vector of the contributing point.
    b : sequence of float or None
        Objective vector of the competitor. ``None`` means no competitor: the
        box ceiling is used instead.
    d : int
        Number of leading objectives to account for (1-indexed).
    maximum, minimum : sequence of float
        Per-objective bounds of the collection.
    rho : float
        Inflation factor of the reference box.

    Returns
    -------
    float
        Normalized contribution. An objective with a zero-width range adds no
        volume and is skipped; the remaining objectives still decide the
        result.
    """
    r = rho * (maximum[d - 1] - minimum[d - 1])
    if r == 0.0:
        if d == 1:
            # Empty product: the whole unit box without a competitor, nothing with one.
            return 1.0 if b is None else 0.0
        return hypervolume_contribution(a, b, d - 1, maximum, minimum, rho)
    ceiling = minimum[d - 1] + r

    av = a[d - 1]
    bv = ceiling if b is None else b[d - 1]

    if d == 1:
        if av < bv:
            return (bv - av) / r
        return 0.0

    if av < bv:
        volume = hypervolume_contribution(a, None, d - 1, maximum, minimum, rho) * (bv - av) / r
        volume += hypervolume_contribution(a, b, d - 1, maximum, minimum, rho) * (ceiling - bv) / r
        return volume
    return hypervolume_contribution(a, b, d - 1, maximum, minimum, rho) * (ceiling - bv) / r


def validate_bounds(maximum: np.ndarray, minimum: np.ndarray) -> None:
    """Reject non-finite or inverted bounds; zero-width ranges are allowed."""
    maximum = np.asarray(maximum, dtype=float)
    minimum = np.asarray(minimum, dtype=float)
    if maximum.shape != minimum.shape or maximum.ndim != 1:
        raise DegenerateBoundsError("maximum and minimum bounds must be 1-D arrays of the same length.")
    for k in range(maximum.shape[0]):
        if not (np.isfinite(maximum[k]) and np.isfinite(minimum[k])):
            raise DegenerateBoundsError(f"Objective {k} has non-finite bounds.", objective=k)
        if maximum[k] < minimum[k]:
            raise DegenerateBoundsError(
                f"Objective {k} has maximum {maximum[k]} below minimum {minimum[k]}.", objective=k
            )


def _indicator_row(
    i: int,
    F: list[list[float]],
    cv: list[float],
    maximum: list[float],
    minimum: list[float],
    rho: float,
) -> list[float]:
    n_obj = len(maximum)
    a = F[i]
    row = []
    for j in range(len(F)):
        b = F[j]
        flag = dominance_compare(a, b, cv[i], cv[j])
        if flag == -1:
            value = -hypervolume_contribution(a, b, n_obj, maximum, minimum, rho)
        else:
            value = hypervolume_contribution(b, a, n_obj, maximum, minimum, rho)
        row.append(value)
    return row


class IndicatorMatrix:
    """Pairwise indicator values of a solution collection.

    ``values[i, j]`` is the signed indicator of solution ``i`` relative to
    solution ``j``: negative when ``i`` dominates ``j``. ``max_abs_value`` is
    captured at construction and stays fixed while rows and columns are
    removed during truncation.
    """

    def __init__(self, values: np.ndarray, max_abs_value: float) -> None:
        values = np.asarray(values, dtype=float)
        if values.ndim != 2 or values.shape[0] != values.shape[1]:
            raise ValueError(f"Indicator matrix must be square, got shape {values.shape}.")
        self._values = values
        self.max_abs_value = float(max_abs_value)

    @classmethod
    def build(
        cls,
        F: np.ndarray,
        maximum: np.ndarray,
        minimum: np.ndarray,
        violations: np.ndarray | None = None,
        *,
        rho: float = RHO,
        n_jobs: int | None = 1,
    ) -> IndicatorMatrix:
        """Compute all N^2 indicator values of the objective matrix ``F``.

        Parameters
        ----------
        F : np.ndarray
            Objective values, shape (N, n_obj).
        maximum, minimum : np.ndarray
            Per-objective bounds over exactly these N rows.
        violations : np.ndarray, optional
            Overall constraint violation per row, used for dominance.
        rho : float
            Reference box inflation factor.
        n_jobs : int or None
            Number of joblib workers for the row computation. ``1`` runs
            sequentially.
        """
        F = np.atleast_2d(np.asarray(F, dtype=float))
        n = F.shape[0] if F.size else 0
        if n == 0:
            return cls(np.empty((0, 0)), 0.0)
        validate_bounds(maximum, minimum)
        if F.shape[1] != np.asarray(maximum).shape[0]:
            raise ValueError(f"Objective matrix has {F.shape[1]} columns but bounds cover {np.asarray(maximum).shape[0]}.")

        degenerate = np.flatnonzero(np.asarray(maximum) == np.asarray(minimum))
        if degenerate.size:
            _logger.debug("Objectives %s have zero-width range and are skipped in the volume recursion.", degenerate.tolist())

        F_list = F.tolist()
        cv_list = [0.0] * n if violations is None else np.asarray(violations, dtype=float).tolist()
        max_list = np.asarray(maximum, dtype=float).tolist()
        min_list = np.asarray(minimum, dtype=float).tolist()

        if n_jobs is not None and n_jobs == 1:
            rows = [_indicator_row(i, F_list, cv_list, max_list, min_list, rho) for i in range(n)]
        else:
            rows = Parallel(n_jobs=n_jobs)(
                delayed(_indicator_row)(i, F_list, cv_list, max_list, min_list, rho) for i in range(n)
            )

        values = np.asarray(rows, dtype=float)
        # Reduction runs only once every row is available.
        max_abs = float(np.max(np.abs(values)))
        return cls(values, max_abs)

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def size(self) -> int:
        return int(self._values.shape[0])

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, key):
        return self._values[key]

    def normalized(self) -> np.ndarray:
        """Indicator values divided by ``max_abs_value`` (zeros if it is 0)."""
        if self.max_abs_value == 0.0:
            return np.zeros_like(self._values)
        return self._values / self.max_abs_value

    def contributions(self, kappa: float) -> np.ndarray:
        """``exp((-I / max|I|) / kappa)`` for every cell."""
        return np.exp(-self.normalized() / kappa)

    def contribution(self, i: int, j: int, kappa: float) -> float:
        """``exp((-I[i, j] / max|I|) / kappa)`` for one cell."""
        if self.max_abs_value == 0.0:
            return 1.0
        return float(np.exp((-self._values[i, j] / self.max_abs_value) / kappa))

    def remove(self, index: int) -> None:
        """Delete row and column ``index``; later indices shift down by one."""
        if index < 0 or index >= self.size:
            raise IndexError(f"Index {index} out of range for indicator matrix of size {self.size}.")
        self._values = np.delete(np.delete(self._values, index, axis=0), index, axis=1)


__all__ = [
    "RHO",
    "hypervolume_contribution",
    "validate_bounds",
    "IndicatorMatrix",
]
