"""Cross-sectional and terminal statistics over a simulation batch."""

from __future__ import annotations

import math
from bisect import insort
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

from ..config import INITIAL_PORTFOLIO_VALUE
from ..models.results import SimulationBatch, SummaryStats


def select_median(values: Sequence[float]) -> float:
    """
    Return the element at position ``n // 2`` of the sorted values.

    For an even count this is the upper of the two central values; the two
    are never averaged.
    """
    ordered = np.sort(np.asarray(values, dtype=float))
    return float(ordered[ordered.size // 2])


class RunningMedian:
    """
    Order-statistics buffer that yields the same median as ``select_median``.

    NaN has no place in a bisected list, so NaN values are only counted and
    treated as sorting after every other value, matching ``np.sort``.
    """

    def __init__(self, values: Iterable[float] = ()) -> None:
        self._ordered: List[float] = []
        self._nan_count = 0
        for value in values:
            self.add(value)

    def add(self, value: float) -> None:
        value = float(value)
        if math.isnan(value):
            self._nan_count += 1
        else:
            insort(self._ordered, value)

    def median(self) -> float:
        if not len(self):
            raise ValueError("RunningMedian is empty")
        index = len(self) // 2
        if index < len(self._ordered):
            return self._ordered[index]
        return math.nan

    def __len__(self) -> int:
        return len(self._ordered) + self._nan_count


def median_trajectory(batch: SimulationBatch) -> np.ndarray:
    """
    Return the per-bet median across portfolios for bet indices ``0..step_count-1``.

    The trajectory deliberately stops one short of the path length: the final
    column of the paths is summarised by ``terminal_median`` instead.
    """
    n = batch.portfolio_count
    columns = np.sort(batch.paths[:, : batch.step_count], axis=0)
    return columns[n // 2].copy()


def terminal_median(batch: SimulationBatch) -> float:
    """Return the median of the final portfolio values."""
    return select_median(batch.terminal_values())


def summary_stats(batch: SimulationBatch, medians: Sequence[float]) -> SummaryStats:
    """
    Summarise the terminal values of a batch.

    ``stdev`` is the sample standard deviation (``ddof=1``) and is reported as
    0.0 for a single portfolio. Non-finite terminal values propagate into
    ``mean`` and ``stdev`` unchanged.
    """
    final_values = batch.terminal_values()
    n = int(final_values.size)
    mean = float(np.mean(final_values))
    stdev = float(np.std(final_values, ddof=1)) if n > 1 else 0.0
    return SummaryStats(
        mean=mean,
        median=float(medians[-1]),
        stdev=stdev,
        n=n,
        n_gained=int(np.count_nonzero(final_values > INITIAL_PORTFOLIO_VALUE)),
        n_lost=int(np.count_nonzero(final_values < INITIAL_PORTFOLIO_VALUE)),
    )


def trajectory_frame(medians: Sequence[float]) -> pd.DataFrame:
    """Return the median trajectory as a table with columns ['bet', 'median']."""
    values = np.asarray(medians, dtype=float)
    return pd.DataFrame({"bet": np.arange(values.size), "median": values})


def summary_frame(stats: SummaryStats) -> pd.DataFrame:
    """Return the summary statistics as a two-column metric/value table."""
    labels = {
        "mean": "Mean",
        "median": "Median",
        "stdev": "Stdev",
        "n": "N",
        "n_gained": "N(Gained)",
        "n_lost": "N(Lost)",
    }
    payload = stats.to_dict()
    return pd.DataFrame(
        [{"metric": label, "value": payload[key]} for key, label in labels.items()],
        dtype=object,
    )


__all__ = [
    "select_median",
    "RunningMedian",
    "median_trajectory",
    "terminal_median",
    "summary_stats",
    "trajectory_frame",
    "summary_frame",
]
