"""Terminal interface for the bankroll simulator."""

from .cli import app, main

__all__ = ["app", "main"]
