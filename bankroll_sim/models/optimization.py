"""Data models for the bet-size sweep."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import pandas as pd


class OptimizerState(str, Enum):
    """Lifecycle of a bet-size sweep."""

    IDLE = "idle"
    SWEEPING = "sweeping"
    DONE = "done"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class OptimizationSample:
    """Median terminal value observed at one bet size."""

    bet_size: int
    median: float


@dataclass(frozen=True)
class StepResult:
    """Outcome of a single ``advance()`` call."""

    state: OptimizerState
    sample: Optional[OptimizationSample] = None
    optimum: Optional[OptimizationSample] = None


@dataclass(frozen=True)
class OptimizationResult:
    """Point-in-time view of a sweep; ``optimum`` is set once it is done."""

    state: OptimizerState
    samples: Tuple[OptimizationSample, ...] = field(default_factory=tuple)
    optimum: Optional[OptimizationSample] = None
    next_bet_size: Optional[int] = None

    @property
    def done(self) -> bool:
        return self.state == OptimizerState.DONE

    def best_so_far(self) -> Optional[OptimizationSample]:
        """Return the optimum when known, otherwise the latest sample."""
        if self.optimum is not None:
            return self.optimum
        return self.samples[-1] if self.samples else None

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{"bet_size": s.bet_size, "median": s.median} for s in self.samples],
            columns=["bet_size", "median"],
        )


__all__ = [
    "OptimizerState",
    "OptimizationSample",
    "StepResult",
    "OptimizationResult",
]
