"""Lazy generation of a single portfolio's value path."""

from __future__ import annotations

from itertools import islice
from typing import Callable, Iterator

import numpy as np

from ..config import INITIAL_PORTFOLIO_VALUE
from ..models.parameters import SimulationParameters
from .outcome import bet_on_claim


def apply_bet(portfolio_value: float, params: SimulationParameters, outcome: float) -> float:
    """
    Return the portfolio value after wagering ``bet_size`` percent on one claim.

    The arithmetic runs in float64 with floating point errors silenced, so a
    zero claim price turns into ``inf``/``nan`` instead of raising.
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        value = np.float64(portfolio_value)
        bet_amount = max(value * (params.bet_size / 100.0), 0.0)
        n_claims = bet_amount / np.float64(params.claim_price)
        bet_value = outcome * n_claims
        return float(value - bet_amount + bet_value)


def iter_portfolio_values(
    portfolio_value: float,
    params: SimulationParameters,
    rng: Callable[[], float],
) -> Iterator[float]:
    """
    Yield the portfolio value before every bet, forever.

    The next bet is only drawn once the caller asks for the following value,
    so taking ``k`` values consumes exactly ``k - 1`` draws from ``rng``.
    """
    value = float(portfolio_value)
    while True:
        yield value
        value = apply_bet(value, params, bet_on_claim(params, rng))


def generate_path(
    params: SimulationParameters,
    rng: Callable[[], float],
    length: int,
    *,
    initial_value: float = INITIAL_PORTFOLIO_VALUE,
) -> np.ndarray:
    """Return the first ``length`` values of a fresh portfolio path."""
    values = iter_portfolio_values(initial_value, params, rng)
    return np.fromiter(islice(values, length), dtype=float, count=length)


__all__ = ["apply_bet", "iter_portfolio_values", "generate_path"]
