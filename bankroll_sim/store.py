"""Mutable owner of the current simulation parameters."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from .config import DEFAULT_MODEL_CONTROLS, PROBABILITY_KEYS
from .core.validator import ParameterError, validate_parameter_key, validate_parameter_keys
from .models.parameters import SimulationParameters

LOGGER = logging.getLogger(__name__)

# When one probability changes, the slack goes to the first key; if that
# key hits a bound, the remainder is handed on as if the second key changed.
_ADJUSTMENT_ORDER = {
    "win_prob": ("lose_prob", "lose_prob"),
    "lose_prob": ("win_prob", "ruin_prob"),
    "ruin_prob": ("win_prob", "win_prob"),
}

_MAX_ADJUSTMENT_PASSES = 8


def _clamp_probability(value: float) -> float:
    return min(max(value, 0.0), 100.0)


def adjust_probabilities(values: Dict[str, Any], changed_key: str) -> Dict[str, Any]:
    """
    Rebalance the outcome probabilities so they add up to 100.

    Only acts when ``changed_key`` is one of the probabilities. The difference
    from 100 is added to a sibling probability (clamped to ``[0, 100]``) and
    the process repeats from that sibling until the three sum to 100.
    """
    if changed_key not in _ADJUSTMENT_ORDER:
        return values

    adjusted = dict(values)
    key = changed_key
    for _ in range(_MAX_ADJUSTMENT_PASSES):
        slack = 100 - sum(adjusted[name] for name in PROBABILITY_KEYS)
        if slack == 0:
            return adjusted
        to_adjust, key = _ADJUSTMENT_ORDER[key]
        adjusted[to_adjust] = _clamp_probability(adjusted[to_adjust] + slack)

    LOGGER.warning(
        "Probabilities still sum to %s after rebalancing %s",
        sum(adjusted[name] for name in PROBABILITY_KEYS),
        changed_key,
    )
    return adjusted


class ParameterStore:
    """
    Holds the current ``SimulationParameters`` and applies edits to it.

    Every edit produces a new immutable snapshot; callers that already hold
    a snapshot keep seeing the values they were given.
    """

    def __init__(self, params: Optional[SimulationParameters] = None) -> None:
        self._params = params or SimulationParameters()

    @classmethod
    def from_overrides(cls, **overrides: Any) -> "ParameterStore":
        """Build a store from defaults plus keyword overrides."""
        validate_parameter_keys(overrides)
        return cls(SimulationParameters(**overrides))

    def current(self) -> SimulationParameters:
        return self._params

    def update(self, key: str, fn: Callable[[Any], Any]) -> SimulationParameters:
        """Apply ``fn`` to one field, rebalance probabilities and store the result."""
        validate_parameter_key(key)
        values = self._params.model_dump()
        try:
            new_value = fn(values[key])
            if key in PROBABILITY_KEYS:
                new_value = _clamp_probability(float(new_value))
        except (TypeError, ValueError) as exc:
            raise ParameterError(f"Cannot update {key!r}: {exc}") from exc
        values[key] = new_value
        values = adjust_probabilities(values, key)
        self._params = SimulationParameters.model_validate(values)
        LOGGER.debug("Parameter %s set to %s", key, values[key])
        return self._params

    def set(self, key: str, value: Any) -> SimulationParameters:
        """Replace one field, rebalancing probabilities when needed."""
        return self.update(key, lambda _old: value)

    def reset_model_controls(self) -> SimulationParameters:
        """Restore the claim price, values and probabilities to their defaults."""
        values = self._params.model_dump()
        values.update(DEFAULT_MODEL_CONTROLS)
        self._params = SimulationParameters.model_validate(values)
        return self._params


__all__ = ["adjust_probabilities", "ParameterStore"]
