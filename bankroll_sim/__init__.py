"""Monte Carlo simulation of fractional betting across many portfolios."""

from .engine import run_simulation, start_optimization
from .models.parameters import SimulationParameters
from .store import ParameterStore

__version__ = "0.1.0"

__all__ = [
    "run_simulation",
    "start_optimization",
    "SimulationParameters",
    "ParameterStore",
    "__version__",
]
