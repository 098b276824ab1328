import math
import unittest

import numpy as np

from bankroll_sim.core.optimizer import BetSizeOptimizer, OptimizationHandle, select_optimum
from bankroll_sim.core.scheduling import QueueScheduler
from bankroll_sim.models.optimization import OptimizationSample, OptimizerState
from bankroll_sim.models.parameters import SimulationParameters
from bankroll_sim.models.results import SimulationBatch
from bankroll_sim.store import ParameterStore


def _constant_runner(median_for_bet_size):
    """Build a runner whose terminal values all equal ``median_for_bet_size(bet)``."""

    def runner(params: SimulationParameters) -> SimulationBatch:
        value = median_for_bet_size(int(params.bet_size))
        paths = np.full((params.portfolio_count, params.step_count + 1), value, dtype=float)
        return SimulationBatch(params=params, paths=paths)

    return runner


class SelectOptimumTests(unittest.TestCase):
    def test_highest_median_wins(self) -> None:
        samples = [OptimizationSample(0, 1.0), OptimizationSample(1, 3.0), OptimizationSample(2, 2.0)]
        self.assertEqual(select_optimum(samples), OptimizationSample(1, 3.0))

    def test_ties_resolve_to_first_recorded(self) -> None:
        samples = [OptimizationSample(b, 2.0 if b in (30, 40) else 1.0) for b in range(101)]
        self.assertEqual(select_optimum(samples).bet_size, 30)

    def test_nan_medians_rank_last(self) -> None:
        samples = [OptimizationSample(0, math.nan), OptimizationSample(1, 0.5)]
        self.assertEqual(select_optimum(samples).bet_size, 1)

    def test_empty(self) -> None:
        self.assertIsNone(select_optimum([]))


class BetSizeOptimizerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.params = SimulationParameters(portfolio_count=3, step_count=2)

    def test_starts_idle_and_ignores_advance(self) -> None:
        optimizer = BetSizeOptimizer(self.params)
        self.assertEqual(optimizer.advance().state, OptimizerState.IDLE)
        self.assertEqual(optimizer.result().samples, ())

    def test_sweep_records_every_bet_size_then_finishes(self) -> None:
        optimizer = BetSizeOptimizer(
            self.params, runner=_constant_runner(lambda b: 1.0 + b / 100.0)
        )
        optimizer.start()
        steps = 0
        while optimizer.advance().state == OptimizerState.SWEEPING:
            steps += 1
        self.assertEqual(steps, 101)
        result = optimizer.result()
        self.assertTrue(result.done)
        self.assertEqual([s.bet_size for s in result.samples], list(range(101)))
        self.assertEqual(result.optimum, OptimizationSample(100, 2.0))
        self.assertIsNone(result.next_bet_size)

    def test_tied_medians_pick_smallest_bet_size(self) -> None:
        optimizer = BetSizeOptimizer(
            self.params, runner=_constant_runner(lambda b: 5.0 if b in (17, 60, 99) else 1.0)
        )
        result = optimizer.run()
        self.assertEqual(result.optimum.bet_size, 17)

    def test_flat_medians_pick_zero(self) -> None:
        result = BetSizeOptimizer(self.params, runner=_constant_runner(lambda b: 1.0)).run()
        self.assertEqual(result.optimum, OptimizationSample(0, 1.0))

    def test_runner_receives_bet_size_and_held_parameters(self) -> None:
        seen = []

        def runner(params):
            seen.append(params)
            return _constant_runner(lambda b: 1.0)(params)

        BetSizeOptimizer(self.params, runner=runner).run()
        self.assertEqual([p.bet_size for p in seen], list(range(101)))
        self.assertTrue(all(p.portfolio_count == 3 and p.claim_price == 10 for p in seen))

    def test_real_sweep_optimum_is_maximum(self) -> None:
        result = BetSizeOptimizer(SimulationParameters(portfolio_count=9, step_count=12)).run()
        medians = [s.median for s in result.samples]
        self.assertEqual(len(medians), 101)
        self.assertEqual(medians[0], 1.0)
        self.assertEqual(result.optimum.median, max(medians))
        self.assertEqual(result.optimum.bet_size, medians.index(max(medians)))

    def test_start_clears_previous_sweep(self) -> None:
        optimizer = BetSizeOptimizer(self.params, runner=_constant_runner(lambda b: 1.0))
        optimizer.run()
        optimizer.start()
        self.assertEqual(optimizer.result().samples, ())
        self.assertIsNone(optimizer.result().optimum)
        self.assertEqual(optimizer.result().next_bet_size, 0)

    def test_cancel_stops_sweep(self) -> None:
        optimizer = BetSizeOptimizer(self.params, runner=_constant_runner(lambda b: 1.0))
        optimizer.start()
        optimizer.advance()
        optimizer.advance()
        optimizer.cancel()
        self.assertTrue(optimizer.cancelled)
        self.assertEqual(optimizer.advance().state, OptimizerState.CANCELLED)
        self.assertEqual(len(optimizer.result().samples), 2)
        self.assertIsNone(optimizer.result().optimum)


class OptimizationHandleTests(unittest.TestCase):
    def setUp(self) -> None:
        self.scheduler = QueueScheduler()
        self.optimizer = BetSizeOptimizer(
            SimulationParameters(portfolio_count=3, step_count=2),
            runner=_constant_runner(lambda b: 1.0 + (b % 7)),
        )

    def test_one_bet_size_per_turn(self) -> None:
        handle = OptimizationHandle(self.optimizer, self.scheduler).start()
        self.assertEqual(self.scheduler.pending, 1)
        self.assertEqual(len(handle.result().samples), 0)
        self.scheduler.run_pending()
        self.assertEqual(len(handle.result().samples), 1)
        self.scheduler.run_pending()
        self.assertEqual(len(handle.result().samples), 2)
        self.assertFalse(handle.done)

    def test_runs_to_completion(self) -> None:
        snapshots = []
        handle = OptimizationHandle(
            self.optimizer, self.scheduler, on_update=snapshots.append
        ).start()
        turns = self.scheduler.run_until_idle()
        self.assertEqual(turns, 102)
        self.assertTrue(handle.done)
        self.assertEqual(len(handle.result().samples), 101)
        self.assertEqual(handle.result().optimum, OptimizationSample(6, 7.0))
        self.assertEqual(len(snapshots), 102)
        self.assertTrue(snapshots[-1].done)

    def test_cancelled_continuations_do_nothing(self) -> None:
        handle = OptimizationHandle(self.optimizer, self.scheduler).start()
        self.scheduler.run_pending()
        self.scheduler.run_pending()
        handle.cancel()
        self.scheduler.run_until_idle()
        self.assertEqual(self.scheduler.pending, 0)
        self.assertEqual(len(handle.result().samples), 2)
        self.assertEqual(handle.result().state, OptimizerState.CANCELLED)

    def test_cancel_after_done_keeps_result(self) -> None:
        handle = OptimizationHandle(self.optimizer, self.scheduler).start()
        self.scheduler.run_until_idle()
        handle.cancel()
        self.assertTrue(handle.done)
        self.assertIsNotNone(handle.result().optimum)

    def test_done_sweep_writes_optimum_to_store(self) -> None:
        store = ParameterStore()
        handle = OptimizationHandle(self.optimizer, self.scheduler, store=store).start()
        self.scheduler.run_until_idle()
        self.assertTrue(handle.done)
        self.assertEqual(store.current().bet_size, 6)

    def test_cancelled_sweep_does_not_touch_store(self) -> None:
        store = ParameterStore()
        handle = OptimizationHandle(self.optimizer, self.scheduler, store=store).start()
        self.scheduler.run_pending()
        handle.cancel()
        self.scheduler.run_until_idle()
        self.assertEqual(store.current().bet_size, 10)


if __name__ == "__main__":
    unittest.main()
