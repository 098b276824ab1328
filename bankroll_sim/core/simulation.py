"""Batch runner producing many portfolio paths from one random stream."""

from __future__ import annotations

import logging
from typing import Callable, Optional

import numpy as np

from ..config import INITIAL_PORTFOLIO_VALUE
from ..models.parameters import SimulationParameters
from ..models.progress import PortfolioProgressEvent
from ..models.results import SimulationBatch
from .paths import generate_path
from .rng import SeededRandom
from .statistics import RunningMedian

LOGGER = logging.getLogger(__name__)


def simulate(
    params: SimulationParameters,
    *,
    progress_observer: Optional[Callable[[PortfolioProgressEvent], None]] = None,
) -> SimulationBatch:
    """
    Generate ``portfolio_count`` paths of ``step_count + 1`` values each.

    All portfolios draw from a single ``SeededRandom(params.seed)`` and are
    generated strictly one after another: portfolio ``i`` is complete before
    portfolio ``i + 1`` takes its first draw. The resulting batch depends on
    that order, so it must not be reordered or split across workers.
    """
    rng = SeededRandom(params.seed)
    length = params.step_count + 1
    paths = np.empty((params.portfolio_count, length), dtype=float)

    running_total = 0.0
    running_median = RunningMedian() if progress_observer else None

    for index in range(params.portfolio_count):
        paths[index] = generate_path(
            params, rng, length, initial_value=INITIAL_PORTFOLIO_VALUE
        )
        if progress_observer is None:
            continue

        terminal = float(paths[index, -1])
        running_total += terminal
        running_median.add(terminal)
        try:
            progress_observer(
                PortfolioProgressEvent(
                    portfolio_index=index + 1,
                    total_portfolios=params.portfolio_count,
                    terminal_value=terminal,
                    running_mean=running_total / (index + 1),
                    running_median=running_median.median(),
                )
            )
        except Exception as exc:
            LOGGER.warning("Progress observer failed on portfolio %s: %s", index + 1, exc)

    LOGGER.debug(
        "Simulated %s portfolios x %s bets at bet size %s%% (%s draws)",
        params.portfolio_count,
        params.step_count,
        params.bet_size,
        rng.draws,
    )
    return SimulationBatch(params=params, paths=paths)


__all__ = ["simulate"]
