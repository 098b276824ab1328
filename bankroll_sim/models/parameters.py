"""Simulation parameter models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..config import (
    DEFAULT_MODEL_CONTROLS,
    DEFAULT_SEED,
    DEFAULT_SIMULATION_CONTROLS,
    MAX_BET_SIZE,
    MIN_BET_SIZE,
)


class SimulationParameters(BaseModel):
    """
    Immutable snapshot of every input a simulation needs.

    Probabilities are percentages and are expected to sum to 100; keeping them
    normalised is the parameter store's job, not the model's. ``claim_price``
    is not range-checked: a zero price is allowed through and produces
    non-finite portfolio values downstream.
    """

    model_config = ConfigDict(frozen=True)

    claim_price: float = Field(
        DEFAULT_MODEL_CONTROLS["claim_price"], description="Cost of one claim (cents)."
    )
    win_value: float = Field(
        DEFAULT_MODEL_CONTROLS["win_value"], description="Claim payout on a win (cents)."
    )
    lose_value: float = Field(
        DEFAULT_MODEL_CONTROLS["lose_value"], description="Claim payout on a loss (cents)."
    )
    ruin_value: float = Field(
        DEFAULT_MODEL_CONTROLS["ruin_value"], description="Claim payout on ruin (cents)."
    )
    win_prob: float = Field(
        DEFAULT_MODEL_CONTROLS["win_prob"], description="Win probability (percent)."
    )
    lose_prob: float = Field(
        DEFAULT_MODEL_CONTROLS["lose_prob"], description="Lose probability (percent)."
    )
    ruin_prob: float = Field(
        DEFAULT_MODEL_CONTROLS["ruin_prob"], description="Ruin probability (percent)."
    )
    bet_size: float = Field(
        DEFAULT_SIMULATION_CONTROLS["bet_size"],
        ge=MIN_BET_SIZE,
        le=MAX_BET_SIZE,
        description="Share of the current portfolio value wagered on each bet (percent).",
    )
    portfolio_count: int = Field(
        DEFAULT_SIMULATION_CONTROLS["portfolio_count"],
        ge=1,
        description="Number of portfolios simulated in one batch.",
    )
    step_count: int = Field(
        DEFAULT_SIMULATION_CONTROLS["step_count"],
        ge=1,
        description="Number of bets placed by every portfolio.",
    )
    seed: int = Field(DEFAULT_SEED, description="Seed of the shared random stream.")

    def with_bet_size(self, bet_size: float) -> "SimulationParameters":
        """Return a copy that differs only in bet size."""
        return self.model_validate({**self.model_dump(), "bet_size": bet_size})

    def probability_total(self) -> float:
        """Return the sum of the three outcome probabilities."""
        return self.win_prob + self.lose_prob + self.ruin_prob


__all__ = ["SimulationParameters"]
