"""Bounds and shape validation shared by the real-coded operators."""

from __future__ import annotations

from typing import Tuple

import numpy as np

ArrayLike = np.ndarray


def _ensure_bounds(lower: ArrayLike, upper: ArrayLike) -> Tuple[np.ndarray, np.ndarray]:
    """Validate bounds and return float arrays of identical shape."""
    lower_arr = np.asarray(lower, dtype=float)
    upper_arr = np.asarray(upper, dtype=float)
    if lower_arr.shape != upper_arr.shape:
        raise ValueError("lower and upper bounds must have the same shape.")
    if lower_arr.ndim != 1:
        raise ValueError("Bounds must be one-dimensional arrays.")
    if np.any(lower_arr > upper_arr):
        raise ValueError("Each lower bound must be <= corresponding upper bound.")
    return lower_arr, upper_arr


class RealOperator:
    """Box-bounded operator working on batches of decision vectors."""

    lower: np.ndarray
    upper: np.ndarray

    def _batch(self, values: ArrayLike, ndim: int, layout: str) -> np.ndarray:
        arr = np.asarray(values, dtype=float)
        if arr.ndim != ndim:
            raise ValueError(f"Expected an array of shape {layout}, got {arr.shape}.")
        if arr.shape[-1] != self.lower.shape[0]:
            raise ValueError(f"Individuals have {arr.shape[-1]} variables but the bounds cover {self.lower.shape[0]}.")
        return arr

    def _as_matings(self, parents: ArrayLike) -> np.ndarray:
        arr = self._batch(parents, 3, "(n_matings, 2, n_var)")
        if arr.shape[1] != 2:
            raise ValueError(f"Each mating needs exactly 2 parents, got {arr.shape[1]}.")
        return arr

    def _as_population(self, values: ArrayLike) -> np.ndarray:
        return self._batch(values, 2, "(n_individuals, n_var)")


__all__ = ["ArrayLike", "RealOperator", "_ensure_bounds"]
