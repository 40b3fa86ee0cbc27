"""Classic benchmark problems (minimization)."""

from __future__ import annotations

import numpy as np

from ibeakit.foundation.problem.base import Problem


class ZDT1Problem(Problem):
    """Bi-objective benchmark with a convex Pareto front."""

    def __init__(self, n_var: int = 30) -> None:
        if n_var < 2:
            raise ValueError("ZDT1 requires at least 2 decision variables.")
        self.n_var = int(n_var)
        self.n_obj = 2
        # Bounds (identical for all decision variables in this problem)
        self.xl = 0.0
        self.xu = 1.0

    def objectives(self, x: np.ndarray) -> np.ndarray:
        f1 = x[0]
        g = 1.0 + 9.0 * np.mean(x[1:])
        f2 = g * (1.0 - np.sqrt(f1 / g))
        return np.array([f1, f2])


class ZDT2Problem(Problem):
    """
    Bi-objective benchmark with a concave Pareto front.
    Shares structure with ZDT1 but uses a quadratic term in the second objective.
    """

    def __init__(self, n_var: int = 30) -> None:
        if n_var < 2:
            raise ValueError("ZDT2 requires at least 2 decision variables.")
        self.n_var = int(n_var)
        self.n_obj = 2
        self.xl = 0.0
        self.xu = 1.0

    def objectives(self, x: np.ndarray) -> np.ndarray:
        f1 = x[0]
        g = 1.0 + 9.0 * np.mean(x[1:])
        f2 = g * (1.0 - (f1 / g) ** 2)
        return np.array([f1, f2])


class DTLZ2Problem(Problem):
    def __init__(self, n_var: int = 12, n_obj: int = 3) -> None:
        if n_obj < 2 or n_var < n_obj:
            raise ValueError("DTLZ2 requires n_obj >= 2 and n_var >= n_obj.")
        self.n_var = int(n_var)
        self.n_obj = int(n_obj)
        self.xl = 0.0
        self.xu = 1.0

    def objectives(self, x: np.ndarray) -> np.ndarray:
        g = np.sum((x[self.n_obj - 1 :] - 0.5) ** 2)
        F = np.ones(self.n_obj)
        for i in range(self.n_obj):
            f = 1.0
            for j in range(self.n_obj - i - 1):
                f *= np.cos(x[j] * np.pi / 2.0)
            if i > 0:
                f *= np.sin(x[self.n_obj - i - 1] * np.pi / 2.0)
            F[i] = f
        return (1.0 + g) * F


class BinhKornProblem(Problem):
    """Binh and Korn constrained bi-objective problem."""

    n_constraints = 2

    def __init__(self) -> None:
        self.n_var = 2
        self.n_obj = 2
        self.xl = np.array([0.0, 0.0])
        self.xu = np.array([5.0, 3.0])

    def objectives(self, x: np.ndarray) -> np.ndarray:
        f1 = 4.0 * x[0] ** 2 + 4.0 * x[1] ** 2
        f2 = (x[0] - 5.0) ** 2 + (x[1] - 5.0) ** 2
        return np.array([f1, f2])

    def constraints(self, x: np.ndarray) -> np.ndarray:
        g1 = (x[0] - 5.0) ** 2 + x[1] ** 2 - 25.0
        g2 = 7.7 - (x[0] - 8.0) ** 2 - (x[1] + 3.0) ** 2
        return np.array([g1, g2])


__all__ = ["ZDT1Problem", "ZDT2Problem", "DTLZ2Problem", "BinhKornProblem"]
