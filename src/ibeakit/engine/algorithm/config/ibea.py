"""IBEA configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from ibeakit.foundation.exceptions import InvalidParameterError

from .base import _SerializableConfig, _require_fields

_REQUIRED = ("pop_size", "archive_size", "max_evaluations")


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class IBEAConfig(_SerializableConfig):
    pop_size: int
    archive_size: int
    max_evaluations: int
    crossover: tuple[str, dict[str, Any]] = ("sbx", {"prob": 0.9, "eta": 20.0})
    mutation: tuple[str, dict[str, Any]] = ("pm", {"prob": "1/n", "eta": 20.0})
    selection: tuple[str, dict[str, Any]] = ("tournament", {})
    kappa: float = 0.05
    rho: float = 2.0
    tournament_rounds: int = 1
    n_jobs: int | None = 1
    seed: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def default(
        cls,
        pop_size: int = 100,
        n_var: int | None = None,
    ) -> IBEAConfig:
        """Create the canonical IBEA configuration."""
        mut_prob: float | str = 1.0 / n_var if n_var else "1/n"
        return (
            cls.builder()
            .pop_size(pop_size)
            .archive_size(pop_size)
            .max_evaluations(25000)
            .crossover("sbx", prob=0.9, eta=20.0)
            .mutation("pm", prob=mut_prob, eta=20.0)
            .selection("tournament")
            .kappa(0.05)
            .build()
        )

    @classmethod
    def builder(cls) -> _IBEAConfigBuilder:
        return _IBEAConfigBuilder()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IBEAConfig:
        """Build a validated configuration from a plain mapping."""
        cfg = dict(data)
        nested_extra = dict(cfg.pop("extra", None) or {})
        _require_fields(cfg, _REQUIRED, "IBEA")
        known = {name for name in cls.__dataclass_fields__ if name != "extra"}
        kwargs = {k: v for k, v in cfg.items() if k in known}
        for key in ("crossover", "mutation", "selection"):
            if key in kwargs:
                method, params = kwargs[key]
                kwargs[key] = (str(method), dict(params))
        extra = {**nested_extra, **{k: v for k, v in cfg.items() if k not in known}}
        config = cls(**kwargs, extra=extra)
        config.validate()
        return config

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` for out-of-range values."""
        for name in _REQUIRED:
            value = getattr(self, name)
            if not _is_positive_int(value):
                raise InvalidParameterError(name, value, "a positive integer")
        if not _is_positive_int(self.tournament_rounds):
            raise InvalidParameterError("tournament_rounds", self.tournament_rounds, "a positive integer")
        for name in ("kappa", "rho"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
                raise InvalidParameterError(name, value, "a finite positive number")
        if self.n_jobs is not None and (not isinstance(self.n_jobs, int) or self.n_jobs == 0):
            raise InvalidParameterError("n_jobs", self.n_jobs, "a non-zero integer or None")
        if self.seed is not None and (not isinstance(self.seed, int) or isinstance(self.seed, bool) or self.seed < 0):
            raise InvalidParameterError("seed", self.seed, "a non-negative integer or None")


class _IBEAConfigBuilder:
    """Declarative configuration holder for IBEA settings."""

    def __init__(self) -> None:
        self._cfg: dict[str, Any] = {}

    def pop_size(self, value: int) -> _IBEAConfigBuilder:
        self._cfg["pop_size"] = value
        return self

    def archive_size(self, value: int) -> _IBEAConfigBuilder:
        self._cfg["archive_size"] = value
        return self

    def max_evaluations(self, value: int) -> _IBEAConfigBuilder:
        self._cfg["max_evaluations"] = value
        return self

    def crossover(self, method: str, **kwargs: Any) -> _IBEAConfigBuilder:
        self._cfg["crossover"] = (method, kwargs)
        return self

    def mutation(self, method: str, **kwargs: Any) -> _IBEAConfigBuilder:
        self._cfg["mutation"] = (method, kwargs)
        return self

    def selection(self, method: str, **kwargs: Any) -> _IBEAConfigBuilder:
        self._cfg["selection"] = (method, kwargs)
        return self

    def kappa(self, value: float) -> _IBEAConfigBuilder:
        self._cfg["kappa"] = float(value)
        return self

    def rho(self, value: float) -> _IBEAConfigBuilder:
        self._cfg["rho"] = float(value)
        return self

    def tournament_rounds(self, value: int) -> _IBEAConfigBuilder:
        self._cfg["tournament_rounds"] = value
        return self

    def n_jobs(self, value: int | None) -> _IBEAConfigBuilder:
        self._cfg["n_jobs"] = value
        return self

    def seed(self, value: int | None) -> _IBEAConfigBuilder:
        self._cfg["seed"] = value
        return self

    def build(self) -> IBEAConfig:
        return IBEAConfig.from_dict(self._cfg)


__all__ = ["IBEAConfig"]
