"""
Utility helpers for constraint handling.

Sign convention: a constraint value ``g(x) <= 0`` is satisfied.
"""

from __future__ import annotations

import numpy as np


def violation_of(g: np.ndarray | None) -> float:
    """Overall constraint violation of a single constraint vector.

    Sum of the positive parts; ``None`` or an empty vector (unconstrained)
    gives ``0.0``.
    """
    if g is None:
        return 0.0
    g_arr = np.asarray(g, dtype=float).reshape(-1)
    if g_arr.size == 0:
        return 0.0
    return float(np.sum(np.maximum(g_arr, 0.0)))


__all__ = ["violation_of"]
