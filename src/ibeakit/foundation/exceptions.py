"""
ibeakit exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All ibeakit-specific exceptions inherit from IBEAKitError for easy catching.

Example:
    try:
        result = IBEA(config).run(problem)
    except IBEAKitError as e:
        print(f"Optimization failed: {e}")
        print(f"Suggestion: {e.suggestion}")
"""

from __future__ import annotations

from typing import Any


class IBEAKitError(Exception):
    """
    Base exception for all ibeakit errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(IBEAKitError):
    """Raised when configuration is invalid or incomplete."""

    pass


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_class: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to your configuration"
        if config_class:
            suggestion += f" or use {config_class}.default() for sensible defaults"
        super().__init__(message, suggestion, {"field": field})


class InvalidOperatorError(ConfigurationError):
    """Raised when an unknown operator is specified."""

    def __init__(
        self,
        operator_type: str,
        operator_name: str,
        available: list[str] | None = None,
    ) -> None:
        message = f"Unknown {operator_type} operator '{operator_name}'."
        suggestion = f"Available {operator_type} operators: {', '.join(available)}" if available else None
        super().__init__(
            message,
            suggestion,
            {"operator_type": operator_type, "operator_name": operator_name},
        )


class InvalidParameterError(ConfigurationError):
    """Raised when a configuration value is out of its admissible range."""

    def __init__(self, field: str, value: Any, requirement: str) -> None:
        message = f"Invalid value for '{field}': {value!r} ({requirement})."
        super().__init__(message, f"Set '{field}' so that it is {requirement}", {"field": field, "value": value})


# =============================================================================
# Indicator / Selection Errors
# =============================================================================


class DegenerateBoundsError(IBEAKitError):
    """Raised when objective bounds are non-finite or inverted.

    Zero-width ranges (max == min) are not an error: the objective is
    skipped in the volume recursion.
    """

    def __init__(self, message: str, objective: int | None = None) -> None:
        suggestion = "Check that every objective value is finite after evaluation"
        super().__init__(message, suggestion, {"objective": objective})


class SelectionError(IBEAKitError):
    """Raised when environmental selection cannot proceed."""

    pass


# =============================================================================
# Runtime Errors
# =============================================================================


class OperatorFailure(IBEAKitError):
    """Raised when an evaluation or a variation/selection operator fails.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, stage: str, error: BaseException, evaluations: int | None = None) -> None:
        message = f"{stage} failed: {type(error).__name__}: {error}"
        suggestion = "Check your problem's evaluate() and the configured operators for errors"
        super().__init__(message, suggestion, {"stage": stage, "evaluations": evaluations})
        self.stage = stage


__all__ = [
    "IBEAKitError",
    "ConfigurationError",
    "MissingConfigError",
    "InvalidOperatorError",
    "InvalidParameterError",
    "DegenerateBoundsError",
    "SelectionError",
    "OperatorFailure",
]
