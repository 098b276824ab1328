"""Stepwise sweep over bet sizes 0-100 looking for the best median outcome."""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Tuple

from ..config import MAX_BET_SIZE, MIN_BET_SIZE
from ..models.optimization import (
    OptimizationResult,
    OptimizationSample,
    OptimizerState,
    StepResult,
)
from ..models.parameters import SimulationParameters
from ..models.results import SimulationBatch
from ..store import ParameterStore
from .scheduling import Scheduler
from .simulation import simulate
from .statistics import terminal_median

LOGGER = logging.getLogger(__name__)


def _descending_median(sample: OptimizationSample) -> Tuple[bool, float]:
    # NaN medians rank after every real value.
    return (math.isnan(sample.median), -sample.median)


def select_optimum(samples: List[OptimizationSample]) -> Optional[OptimizationSample]:
    """
    Return the first sample of a stable descending sort on median.

    ``sorted`` is stable, so among equal medians the sample recorded first
    wins; samples are recorded in increasing bet size, which makes the
    smallest tied bet size the optimum.
    """
    if not samples:
        return None
    return sorted(samples, key=_descending_median)[0]


class BetSizeOptimizer:
    """
    State machine sweeping bet sizes one simulation at a time.

    ``start()`` resets the sweep and every ``advance()`` runs at most one
    simulation, which lets the host interleave other work between steps.
    ``cancel()`` stops the sweep before its next step; samples recorded so
    far are kept.
    """

    def __init__(
        self,
        params: SimulationParameters,
        *,
        runner: Callable[[SimulationParameters], SimulationBatch] = simulate,
    ) -> None:
        self.params = params
        self._runner = runner
        self._state = OptimizerState.IDLE
        self._bet_size: Optional[int] = None
        self._samples: List[OptimizationSample] = []
        self._optimum: Optional[OptimizationSample] = None
        self._cancelled = False

    @property
    def state(self) -> OptimizerState:
        return self._state

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> None:
        """Clear previous samples and begin sweeping at bet size 0."""
        self._samples = []
        self._optimum = None
        self._cancelled = False
        self._bet_size = MIN_BET_SIZE
        self._state = OptimizerState.SWEEPING
        LOGGER.info(
            "Starting bet size sweep over %s portfolios x %s bets",
            self.params.portfolio_count,
            self.params.step_count,
        )

    def cancel(self) -> None:
        """Stop the sweep; has no effect once the sweep is done."""
        if self._state == OptimizerState.DONE:
            return
        self._cancelled = True
        self._state = OptimizerState.CANCELLED
        LOGGER.info("Bet size sweep cancelled after %s samples", len(self._samples))

    def advance(self) -> StepResult:
        """Run the next step of the sweep and report where it left off."""
        if self._cancelled or self._state != OptimizerState.SWEEPING:
            return StepResult(state=self._state, optimum=self._optimum)

        assert self._bet_size is not None
        if self._bet_size > MAX_BET_SIZE:
            self._optimum = select_optimum(self._samples)
            self._state = OptimizerState.DONE
            self._bet_size = None
            LOGGER.info(
                "Optimal bet size %s%% with median return %s",
                self._optimum.bet_size,
                self._optimum.median,
            )
            return StepResult(state=self._state, optimum=self._optimum)

        bet_size = self._bet_size
        batch = self._runner(self.params.with_bet_size(bet_size))
        sample = OptimizationSample(bet_size=bet_size, median=terminal_median(batch))
        self._samples.append(sample)
        self._bet_size = bet_size + 1
        LOGGER.debug("Bet size %s%% -> median %s", bet_size, sample.median)
        return StepResult(state=self._state, sample=sample)

    def result(self) -> OptimizationResult:
        """Return a snapshot of the sweep as it stands."""
        return OptimizationResult(
            state=self._state,
            samples=tuple(self._samples),
            optimum=self._optimum,
            next_bet_size=self._bet_size if self._state == OptimizerState.SWEEPING else None,
        )

    def run(self) -> OptimizationResult:
        """Run the whole sweep synchronously."""
        if self._state != OptimizerState.SWEEPING:
            self.start()
        while self.advance().state == OptimizerState.SWEEPING:
            pass
        return self.result()


class OptimizationHandle:
    """
    Drives a ``BetSizeOptimizer`` through a scheduler, one step per turn.

    Each step is submitted with ``scheduler.defer`` and re-submits itself
    until the sweep is done or cancelled. A step that fires after
    ``cancel()`` does nothing. When a ``store`` is given, the optimal bet
    size is written back to it once the sweep is done, so the next
    simulation built from the store runs at the optimum.
    """

    def __init__(
        self,
        optimizer: BetSizeOptimizer,
        scheduler: Scheduler,
        *,
        on_update: Optional[Callable[[OptimizationResult], None]] = None,
        store: Optional[ParameterStore] = None,
    ) -> None:
        self.optimizer = optimizer
        self.scheduler = scheduler
        self._on_update = on_update
        self._store = store

    def start(self) -> "OptimizationHandle":
        self.optimizer.start()
        self.scheduler.defer(self._step)
        return self

    def cancel(self) -> None:
        self.optimizer.cancel()

    def result(self) -> OptimizationResult:
        return self.optimizer.result()

    @property
    def done(self) -> bool:
        return self.optimizer.state == OptimizerState.DONE

    def _step(self) -> None:
        if self.optimizer.cancelled:
            return
        step = self.optimizer.advance()
        if step.state == OptimizerState.DONE and self._store is not None:
            self._store.set("bet_size", step.optimum.bet_size)
        if self._on_update:
            try:
                self._on_update(self.optimizer.result())
            except Exception as exc:
                LOGGER.warning("Optimization observer failed: %s", exc)
        if step.state == OptimizerState.SWEEPING:
            self.scheduler.defer(self._step)


__all__ = ["select_optimum", "BetSizeOptimizer", "OptimizationHandle"]
