import tempfile
import unittest
from pathlib import Path
from unittest import mock

import pandas as pd
from typer.testing import CliRunner

from bankroll_sim.ui.cli import app, main


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()

    def test_simulate_prints_statistics(self) -> None:
        result = self.runner.invoke(
            app, ["simulate", "--portfolios", "10", "--bets", "10", "--trajectory-points", "3"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Median return multiple", result.output)
        self.assertIn("N(Gained)", result.output)
        self.assertIn("Median Portfolio", result.output)

    def test_simulate_writes_paths_csv(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "paths.csv"
            result = self.runner.invoke(
                app,
                ["simulate", "--portfolios", "3", "--bets", "4", "--paths-csv", str(target)],
            )
            self.assertEqual(result.exit_code, 0, result.output)
            frame = pd.read_csv(target)
        self.assertEqual(list(frame.columns), ["portfolio", "bet", "value"])
        self.assertEqual(len(frame), 15)
        self.assertTrue((frame.loc[frame["bet"] == 0, "value"] == 1.0).all())

    def test_optimize_reports_best_bet(self) -> None:
        result = self.runner.invoke(
            app, ["optimize", "--portfolios", "4", "--bets", "5", "--show-samples"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("x return", result.output)
        self.assertIn("Median Portfolio Return by Bet Size", result.output)

    def test_optimize_can_simulate_at_optimum(self) -> None:
        result = self.runner.invoke(
            app, ["optimize", "--portfolios", "4", "--bets", "5", "--simulate-best"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Median return multiple", result.output)

    def test_invalid_bet_size_is_rejected(self) -> None:
        result = self.runner.invoke(app, ["simulate", "--bet-size", "150"])
        self.assertNotEqual(result.exit_code, 0)

    def test_unknown_log_level_is_a_usage_error(self) -> None:
        result = self.runner.invoke(app, ["--log-level", "foo", "simulate", "--portfolios", "2"])
        self.assertEqual(result.exit_code, 2)
        self.assertNotIsInstance(result.exception, ValueError)


    def test_console_script_entry_point_runs_app(self) -> None:
        with mock.patch("sys.argv", ["bankroll-sim", "--help"]):
            with self.assertRaises(SystemExit) as exit_info:
                main()
        self.assertEqual(exit_info.exception.code, 0)

if __name__ == "__main__":
    unittest.main()
