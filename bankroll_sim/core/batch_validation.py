"""Sanity checks for simulated portfolio batches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence

import numpy as np

from ..config import INITIAL_PORTFOLIO_VALUE
from ..models.results import SimulationBatch


@dataclass
class ValidationResult:
    """Basic container for validation outcomes."""

    status: str
    failed_checks: Sequence[str]
    warnings: Sequence[str]

    def to_dict(self) -> Dict[str, object]:
        return {
            "status": self.status,
            "failed_checks": list(self.failed_checks),
            "warnings": list(self.warnings),
        }


def validate_batch(batch: SimulationBatch) -> ValidationResult:
    """
    Flag batches whose statistics should not be trusted.

    Nothing here raises: a zero claim price legitimately produces ``inf`` or
    ``nan`` values, and the caller decides how loudly to report it.
    """
    failed: list[str] = []
    warnings: list[str] = []

    paths = batch.paths
    if not np.all(np.isfinite(paths)):
        failed.append("non_finite_values")

    terminal = batch.terminal_values()
    finite_terminal = terminal[np.isfinite(terminal)]
    if finite_terminal.size and bool(np.all(finite_terminal <= 0.0)):
        warnings.append("all_portfolios_ruined")
    if batch.step_count > 0 and bool(np.all(paths == INITIAL_PORTFOLIO_VALUE)):
        warnings.append("degenerate_constant_paths")

    status = "PASS" if not failed else "FAIL"
    return ValidationResult(status=status, failed_checks=failed, warnings=warnings)


__all__ = ["ValidationResult", "validate_batch"]
