"""Input validation utilities."""

from __future__ import annotations

from typing import Iterable

from ..models.parameters import SimulationParameters


class ParameterError(ValueError):
    """Raised when a parameter update cannot be applied."""


def validate_parameter_key(key: str) -> None:
    """Ensure ``key`` names a numeric field of ``SimulationParameters``."""
    if key not in SimulationParameters.model_fields:
        known = ", ".join(sorted(SimulationParameters.model_fields))
        raise ParameterError(f"Unknown parameter {key!r}; expected one of: {known}")


def validate_parameter_keys(keys: Iterable[str]) -> None:
    """Ensure every key in ``keys`` is a known parameter."""
    unknown = sorted(set(keys) - set(SimulationParameters.model_fields))
    if unknown:
        raise ParameterError("Unknown parameter(s): " + ", ".join(unknown))


__all__ = ["ParameterError", "validate_parameter_key", "validate_parameter_keys"]
