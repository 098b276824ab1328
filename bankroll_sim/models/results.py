"""Result data models for simulation batches and their statistics."""

from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from .parameters import SimulationParameters


class SimulationBatch(BaseModel):
    """Every portfolio path produced by one run, in generation order."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    params: SimulationParameters = Field(..., description="Parameters used for the run")
    paths: np.ndarray = Field(
        ...,
        description=(
            "Float array of shape (portfolio_count, step_count + 1); row i is "
            "portfolio i and column t the value after t bets."
        ),
    )

    @property
    def portfolio_count(self) -> int:
        return int(self.paths.shape[0])

    @property
    def step_count(self) -> int:
        return int(self.paths.shape[1]) - 1

    def terminal_values(self) -> np.ndarray:
        """Return the final value of every portfolio."""
        return self.paths[:, -1]

    def to_frame(self) -> pd.DataFrame:
        """Return the paths in long format with columns ['portfolio', 'bet', 'value']."""
        portfolios, columns = self.paths.shape
        return pd.DataFrame(
            {
                "portfolio": np.repeat(np.arange(portfolios), columns),
                "bet": np.tile(np.arange(columns), portfolios),
                "value": self.paths.reshape(-1),
            }
        )


class SummaryStats(BaseModel):
    """
    Terminal-value statistics of a batch.

    ``n_gained`` and ``n_lost`` count portfolios that finished strictly above
    or strictly below the starting value; portfolios that finished exactly at
    1.0 are in neither bucket, so ``n_gained + n_lost`` can be less than ``n``.
    """

    mean: float = Field(..., description="Mean terminal value")
    median: float = Field(..., description="Last entry of the median trajectory")
    stdev: float = Field(..., description="Sample standard deviation of terminal values")
    n: int = Field(..., ge=0, description="Number of portfolios")
    n_gained: int = Field(..., ge=0, description="Portfolios ending above 1.0")
    n_lost: int = Field(..., ge=0, description="Portfolios ending below 1.0")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class SimulationRun(BaseModel):
    """Everything the presentation layer needs from one simulation."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    batch: SimulationBatch
    medians: np.ndarray = Field(..., description="Median trajectory, length step_count")
    stats: SummaryStats
    validation: Optional[Dict[str, object]] = Field(
        default=None, description="Batch sanity check outcome"
    )


__all__ = ["SimulationBatch", "SummaryStats", "SimulationRun"]
