"""Seeded uniform random stream shared by the simulation components."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..config import DEFAULT_SEED


class SeededRandom:
    """
    Callable source of uniform draws in ``[0, 1)``.

    Each call advances the underlying PCG64 generator by exactly one draw, so
    two instances built from the same seed return the same sequence for the
    same number of calls, including across interpreter restarts.
    """

    def __init__(self, seed: Optional[int] = DEFAULT_SEED) -> None:
        self.seed = seed
        self._generator = np.random.default_rng(seed)
        self.draws = 0

    def __call__(self) -> float:
        self.draws += 1
        return float(self._generator.random())

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self.seed!r}, draws={self.draws})"


__all__ = ["SeededRandom"]
