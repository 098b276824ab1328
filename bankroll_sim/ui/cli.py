"""Typer-based command line interface for running simulations and sweeps."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import numpy as np
import pandas as pd
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table

from bankroll_sim.config import (
    DEFAULT_SEED,
    DEFAULT_SIMULATION_CONTROLS,
    LOG_LEVEL,
    PROBABILITY_KEYS,
)
from bankroll_sim.core.outcome import expected_value
from bankroll_sim.core.scheduling import QueueScheduler
from bankroll_sim.core.statistics import summary_frame, trajectory_frame
from bankroll_sim.core.validator import ParameterError
from bankroll_sim.engine import run_simulation, start_optimization
from bankroll_sim.models.optimization import OptimizationResult
from bankroll_sim.models.parameters import SimulationParameters
from bankroll_sim.models.results import SimulationRun
from bankroll_sim.store import ParameterStore
from bankroll_sim.utils.numbers import abbreviate

app = typer.Typer(help="Simulate repeated fractional bets across many portfolios")
console = Console()


@app.callback()
def _configure(
    log_level: str = typer.Option(LOG_LEVEL, help="Logging level (DEBUG, INFO, WARNING...)"),
) -> None:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level {log_level!r}", param_hint="--log-level")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_store(
    model_inputs: Dict[str, Optional[float]],
    bet_size: float,
    portfolios: int,
    bets: int,
    seed: int,
) -> ParameterStore:
    """Apply CLI overrides through the parameter store so probabilities stay balanced."""
    try:
        store = ParameterStore.from_overrides(
            bet_size=bet_size,
            portfolio_count=portfolios,
            step_count=bets,
            seed=seed,
        )
        for key, value in model_inputs.items():
            if value is not None and key not in PROBABILITY_KEYS:
                store.set(key, value)
        for key in PROBABILITY_KEYS:
            if model_inputs.get(key) is not None:
                store.set(key, model_inputs[key])
    except (ParameterError, ValidationError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    return store


def _describe_model(params: SimulationParameters) -> str:
    return (
        f"Simulation of {params.portfolio_count} portfolios betting "
        f"[bold]{params.bet_size:g}%[/bold] of their bankroll on each of "
        f"{params.step_count} bets.\n"
        f"Each claim costs [bold]{params.claim_price:g}¢[/bold] and has a "
        f"[bold]{params.win_prob:g}%[/bold] chance of resolving to [bold]{params.win_value:g}¢[/bold], "
        f"a [bold]{params.lose_prob:g}%[/bold] chance of resolving to [bold]{params.lose_value:g}¢[/bold], "
        f"and a [bold]{params.ruin_prob:g}%[/bold] chance of resolving to "
        f"[bold]{params.ruin_value:g}¢[/bold], for an EV of [bold]{expected_value(params):g}¢[/bold]."
    )


def _display_frame(df: pd.DataFrame, title: str) -> None:
    table = Table(title=title, show_lines=False)
    for column in df.columns:
        table.add_column(str(column), justify="right")
    for _, row in df.iterrows():
        table.add_row(*[str(value) for value in row])
    console.print(table)


def _display_run(run: SimulationRun, trajectory_points: int) -> None:
    stats = run.stats
    console.print(
        f"\n[bold]Median return multiple: {abbreviate(stats.median, 4)} ± "
        f"{abbreviate(stats.stdev, 4)} (μ = {abbreviate(stats.mean, 4)})[/bold]"
    )
    _display_frame(summary_frame(stats), "Terminal Portfolio Statistics")

    if trajectory_points > 0:
        trajectory = trajectory_frame(run.medians)
        indices = np.unique(
            np.linspace(0, len(trajectory) - 1, min(trajectory_points, len(trajectory))).astype(int)
        )
        table = Table(title="Median Portfolio", show_lines=False)
        table.add_column("Bet #", justify="right")
        table.add_column("Bankroll", justify="right")
        for _, row in trajectory.iloc[indices].iterrows():
            table.add_row(str(int(row["bet"])), abbreviate(float(row["median"]), 4))
        console.print(table)

    validation = run.validation or {}
    for check in validation.get("failed_checks", []):
        console.print(f"[yellow]Warning: {check.replace('_', ' ')}[/yellow]")
    for warning in validation.get("warnings", []):
        console.print(f"[yellow]{warning.replace('_', ' ')}[/yellow]")


def _display_sweep(result: OptimizationResult, show_samples: bool) -> None:
    if show_samples:
        table = Table(title="Median Portfolio Return by Bet Size", show_lines=False)
        table.add_column("Bet size %", justify="right")
        table.add_column("Median return", justify="right")
        for _, row in result.to_frame().iterrows():
            table.add_row(str(int(row["bet_size"])), abbreviate(float(row["median"]), 4))
        console.print(table)

    best = result.best_so_far()
    if best is None:
        console.print("[yellow]No bet sizes were evaluated.[/yellow]")
        return
    console.print(
        f"\n[bold green]Bet {best.bet_size}% for {abbreviate(best.median, 4)}x return[/bold green]"
    )


@app.command()
def simulate(
    claim_price: Optional[float] = typer.Option(None, help="Cost of one claim (cents)"),
    win_value: Optional[float] = typer.Option(None, help="Claim payout on a win (cents)"),
    lose_value: Optional[float] = typer.Option(None, help="Claim payout on a loss (cents)"),
    ruin_value: Optional[float] = typer.Option(None, help="Claim payout on ruin (cents)"),
    win_prob: Optional[float] = typer.Option(None, help="Win probability (percent)"),
    lose_prob: Optional[float] = typer.Option(None, help="Lose probability (percent)"),
    ruin_prob: Optional[float] = typer.Option(None, help="Ruin probability (percent)"),
    bet_size: float = typer.Option(
        DEFAULT_SIMULATION_CONTROLS["bet_size"], help="Percent of the bankroll wagered per bet"
    ),
    portfolios: int = typer.Option(
        DEFAULT_SIMULATION_CONTROLS["portfolio_count"], help="Number of portfolios"
    ),
    bets: int = typer.Option(
        DEFAULT_SIMULATION_CONTROLS["step_count"], help="Number of bets per portfolio"
    ),
    seed: int = typer.Option(DEFAULT_SEED, help="Random seed"),
    trajectory_points: int = typer.Option(
        0, help="Print this many evenly spaced points of the median trajectory"
    ),
    paths_csv: Optional[Path] = typer.Option(
        None, help="Write every portfolio path to this CSV file (portfolio, bet, value)"
    ),
) -> None:
    """Simulate a batch of portfolios and print summary statistics."""
    store = _build_store(
        {
            "claim_price": claim_price,
            "win_value": win_value,
            "lose_value": lose_value,
            "ruin_value": ruin_value,
            "win_prob": win_prob,
            "lose_prob": lose_prob,
            "ruin_prob": ruin_prob,
        },
        bet_size,
        portfolios,
        bets,
        seed,
    )
    params = store.current()
    console.print(_describe_model(params))
    run = run_simulation(params)
    _display_run(run, trajectory_points)
    if paths_csv is not None:
        run.batch.to_frame().to_csv(paths_csv, index=False)
        console.print(f"Paths written to {paths_csv}")


@app.command()
def optimize(
    claim_price: Optional[float] = typer.Option(None, help="Cost of one claim (cents)"),
    win_value: Optional[float] = typer.Option(None, help="Claim payout on a win (cents)"),
    lose_value: Optional[float] = typer.Option(None, help="Claim payout on a loss (cents)"),
    ruin_value: Optional[float] = typer.Option(None, help="Claim payout on ruin (cents)"),
    win_prob: Optional[float] = typer.Option(None, help="Win probability (percent)"),
    lose_prob: Optional[float] = typer.Option(None, help="Lose probability (percent)"),
    ruin_prob: Optional[float] = typer.Option(None, help="Ruin probability (percent)"),
    portfolios: int = typer.Option(
        DEFAULT_SIMULATION_CONTROLS["portfolio_count"], help="Number of portfolios"
    ),
    bets: int = typer.Option(
        DEFAULT_SIMULATION_CONTROLS["step_count"], help="Number of bets per portfolio"
    ),
    seed: int = typer.Option(DEFAULT_SEED, help="Random seed"),
    show_samples: bool = typer.Option(False, help="Print the median return of every bet size"),
    simulate_best: bool = typer.Option(
        False, help="Simulate again at the optimal bet size once the sweep finishes"
    ),
) -> None:
    """Sweep bet sizes 0-100% and report the one with the best median return."""
    store = _build_store(
        {
            "claim_price": claim_price,
            "win_value": win_value,
            "lose_value": lose_value,
            "ruin_value": ruin_value,
            "win_prob": win_prob,
            "lose_prob": lose_prob,
            "ruin_prob": ruin_prob,
        },
        0,
        portfolios,
        bets,
        seed,
    )
    scheduler = QueueScheduler()
    with Progress(
        TextColumn("[bold]Computing median portfolio return by bet size"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
    ) as progress:
        task = progress.add_task("sweep", total=101)

        def on_update(snapshot: OptimizationResult) -> None:
            progress.update(task, completed=len(snapshot.samples))

        handle = start_optimization(store.current(), scheduler, on_update=on_update, store=store)
        try:
            scheduler.run_until_idle()
        except KeyboardInterrupt:
            handle.cancel()
            console.print("[yellow]Sweep cancelled; showing partial results.[/yellow]")

    _display_sweep(handle.result(), show_samples)
    if simulate_best and handle.done:
        params = store.current()
        console.print(_describe_model(params))
        _display_run(run_simulation(params), 0)


def main() -> None:
    """Entry point for CLI execution."""
    app()


if __name__ == "__main__":
    main()
