"""
Registry for IBEA's selection and variation operators.

Operators are described in configuration as ``(name, params)`` tuples and
instantiated against the problem's bounds and the run's random generator.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np

from ibeakit.foundation.exceptions import InvalidOperatorError, InvalidParameterError

from .real import PolynomialMutation, SBXCrossover
from .selection import BinaryTournament

Factory = Callable[..., Any]


def _tournament(params: dict[str, Any], *, lower, upper, rng: np.random.Generator) -> BinaryTournament:
    return BinaryTournament(rng=rng)


def _sbx(params: dict[str, Any], *, lower, upper, rng: np.random.Generator) -> SBXCrossover:
    return SBXCrossover(
        float(params.get("prob", 0.9)),
        float(params.get("eta", 20.0)),
        lower=lower,
        upper=upper,
        rng=rng,
    )


def _pm(params: dict[str, Any], *, lower, upper, rng: np.random.Generator) -> PolynomialMutation:
    return PolynomialMutation(
        resolve_probability(params.get("prob", "1/n"), int(np.asarray(lower).shape[0])),
        float(params.get("eta", 20.0)),
        lower=lower,
        upper=upper,
        rng=rng,
    )


_SELECTION: dict[str, Factory] = {"tournament": _tournament, "binary_tournament": _tournament}
_CROSSOVER: dict[str, Factory] = {"sbx": _sbx}
_MUTATION: dict[str, Factory] = {"pm": _pm, "polynomial": _pm}

_TABLES = {"selection": _SELECTION, "crossover": _CROSSOVER, "mutation": _MUTATION}


def resolve_probability(prob: float | str, n_var: int) -> float:
    """Turn ``"1/n"`` style expressions into a number."""
    if isinstance(prob, str):
        text = prob.strip().lower().replace(" ", "")
        if text in ("1/n", "1/n_var"):
            return 1.0 / max(n_var, 1)
        try:
            prob = float(text)
        except ValueError:
            raise InvalidParameterError("prob", prob, "a float or '1/n'") from None
    value = float(prob)
    if not 0.0 <= value <= 1.0:
        raise InvalidParameterError("prob", prob, "within [0, 1]")
    return value


def available_operators(role: str) -> list[str]:
    return sorted(_TABLES[role])


def build_operator(
    role: str,
    spec: tuple[str, dict[str, Any]],
    *,
    lower: np.ndarray,
    upper: np.ndarray,
    rng: np.random.Generator,
) -> Any:
    """Instantiate the ``role`` operator described by ``spec``."""
    method, params = spec
    table = _TABLES[role]
    factory = table.get(str(method).lower())
    if factory is None:
        raise InvalidOperatorError(role, str(method), available_operators(role))
    return factory(dict(params), lower=lower, upper=upper, rng=rng)


__all__ = ["available_operators", "build_operator", "resolve_probability"]
