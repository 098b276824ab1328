"""Default model inputs and runtime settings for the bankroll simulator."""

from __future__ import annotations

import os
from typing import Dict

# Seed shared by every simulation run so results are reproducible between runs.
DEFAULT_SEED = 1

# Every portfolio starts as a 1.0 multiple of its bankroll.
INITIAL_PORTFOLIO_VALUE = 1.0

# Bet sizes are percentages of the current portfolio value.
MIN_BET_SIZE = 0
MAX_BET_SIZE = 100

# Per-claim prices and resolution values are quoted in cents.
DEFAULT_MODEL_CONTROLS: Dict[str, float] = {
    "claim_price": 10,
    "win_value": 30,
    "lose_value": 3,
    "ruin_value": 0,
    "win_prob": 45,
    "lose_prob": 45,
    "ruin_prob": 10,
}

DEFAULT_SIMULATION_CONTROLS: Dict[str, int] = {
    "bet_size": 10,
    "portfolio_count": 100,
    "step_count": 100,
}

PROBABILITY_KEYS = ("win_prob", "lose_prob", "ruin_prob")

LOG_LEVEL = os.environ.get("BANKROLL_SIM_LOG_LEVEL", "WARNING").upper()

__all__ = [
    "DEFAULT_SEED",
    "INITIAL_PORTFOLIO_VALUE",
    "MIN_BET_SIZE",
    "MAX_BET_SIZE",
    "DEFAULT_MODEL_CONTROLS",
    "DEFAULT_SIMULATION_CONTROLS",
    "PROBABILITY_KEYS",
    "LOG_LEVEL",
]
