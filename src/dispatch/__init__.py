"""Time-to-serve estimation and hall-call matching for SweepLift."""

from .interface import Dispatchable, MatchOutcome
from .matching import CostMatcher
from .utils import SweepResult, can_stop_between, sweep_time

__all__ = [
    "CostMatcher",
    "Dispatchable",
    "MatchOutcome",
    "SweepResult",
    "can_stop_between",
    "sweep_time",
]
