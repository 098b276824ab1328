"""High-level entry points used by the presentation layer."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .core.batch_validation import validate_batch
from .core.optimizer import BetSizeOptimizer, OptimizationHandle
from .core.scheduling import Scheduler
from .core.simulation import simulate
from .core.statistics import median_trajectory, summary_stats
from .models.optimization import OptimizationResult
from .models.parameters import SimulationParameters
from .models.progress import PortfolioProgressEvent
from .models.results import SimulationRun
from .store import ParameterStore

LOGGER = logging.getLogger(__name__)


def run_simulation(
    params: SimulationParameters,
    *,
    progress_observer: Optional[Callable[[PortfolioProgressEvent], None]] = None,
) -> SimulationRun:
    """Simulate a batch and compute its median trajectory and summary statistics."""
    batch = simulate(params, progress_observer=progress_observer)
    medians = median_trajectory(batch)
    stats = summary_stats(batch, medians)
    validation = validate_batch(batch)
    if validation.status != "PASS":
        LOGGER.warning(
            "Simulation produced unreliable values (%s); claim price is %s",
            ", ".join(validation.failed_checks),
            params.claim_price,
        )
    LOGGER.info(
        "Simulated %s portfolios over %s bets: median %s, mean %s",
        stats.n,
        params.step_count,
        stats.median,
        stats.mean,
    )
    return SimulationRun(
        batch=batch,
        medians=medians,
        stats=stats,
        validation=validation.to_dict(),
    )


def start_optimization(
    params: SimulationParameters,
    scheduler: Scheduler,
    *,
    on_update: Optional[Callable[[OptimizationResult], None]] = None,
    store: Optional[ParameterStore] = None,
) -> OptimizationHandle:
    """
    Begin a bet-size sweep that advances one bet size per scheduler turn.

    The returned handle exposes ``result()`` snapshots while the sweep runs
    and ``cancel()`` to stop it. If ``store`` is given, its bet size is set to
    the optimum when the sweep finishes; a cancelled sweep leaves it alone.
    """
    handle = OptimizationHandle(
        BetSizeOptimizer(params), scheduler, on_update=on_update, store=store
    )
    return handle.start()


__all__ = ["run_simulation", "start_optimization"]
