"""Data models for streaming simulation progress."""

from __future__ import annotations

from dataclasses import dataclass, field

import time


@dataclass(frozen=True)
class PortfolioProgressEvent:
    """
    Emitted once a portfolio path has been fully generated.

    Running statistics cover the terminal values of every portfolio finished
    so far, which lets a live view show the distribution settling while the
    batch is still being produced.
    """

    portfolio_index: int
    total_portfolios: int
    terminal_value: float
    running_mean: float
    running_median: float
    timestamp: float = field(default_factory=time.time)


__all__ = ["PortfolioProgressEvent"]
