"""Numeric helper functions shared across the application."""

from __future__ import annotations

import math

_SUFFIXES = (
    (1_000_000_000_000, "t"),
    (1_000_000_000, "b"),
    (1_000_000, "m"),
    (1_000, "k"),
)


def _round_significant(value: float, min_sigs: int) -> str:
    scale = math.floor(math.log10(value))
    if scale < 0:
        digits = min_sigs - scale
    else:
        digits = max(min_sigs - (scale + 1), 0)
    return f"{value:.{digits}f}"


def abbreviate(value: float, min_sigs: int = 4) -> str:
    """Abbreviate a number keeping ``min_sigs`` significant digits, e.g. 11153.23 => 11.15k."""
    if not math.isfinite(value):
        return str(value)
    if value < 0:
        return "-" + abbreviate(-value, min_sigs)
    for threshold, suffix in _SUFFIXES:
        if value > threshold:
            return _round_significant(value / threshold, min_sigs) + suffix
    if value == 0:
        return "0"
    return _round_significant(value, min_sigs)


__all__ = ["abbreviate"]
