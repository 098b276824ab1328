"""Resolution of a single claim into its payout value."""

from __future__ import annotations

from typing import Callable

from ..models.parameters import SimulationParameters


def resolve_outcome(params: SimulationParameters, draw: float) -> float:
    """
    Map a draw in ``[0, 100)`` onto the ruin, lose or win value.

    Bands are checked in order with strict comparisons: ``[0, ruin)`` is ruin,
    ``[ruin, ruin + lose)`` is lose and everything else is win. When the
    probabilities do not add up to 100 the remaining mass (positive or
    negative) falls to the win value.
    """
    if draw < params.ruin_prob:
        return params.ruin_value
    if draw < params.ruin_prob + params.lose_prob:
        return params.lose_value
    return params.win_value


def bet_on_claim(params: SimulationParameters, rng: Callable[[], float]) -> float:
    """Take one draw from ``rng`` and resolve the claim it lands on."""
    return resolve_outcome(params, rng() * 100)


def expected_value(params: SimulationParameters) -> float:
    """Return the probability-weighted payout of one claim."""
    return (
        params.win_prob * params.win_value
        + params.lose_prob * params.lose_value
        + params.ruin_prob * params.ruin_value
    ) / 100.0


__all__ = ["resolve_outcome", "bet_on_claim", "expected_value"]
