"""Elevator fleet model for SweepLift."""

from .car import Car
from .config import BOARDING_TIME, FleetConfig
from .direction import Direction
from .errors import FleetError, NotFoundError, RangeError
from .fleet import FleetScheduler
from .log import CollectingSink, LineSink, logging_sink, null_sink
from .request import Request
from .state import CarState, CarStatus, FleetState, FleetStatus

__all__ = [
    "BOARDING_TIME",
    "Car",
    "CarState",
    "CarStatus",
    "CollectingSink",
    "Direction",
    "FleetConfig",
    "FleetError",
    "FleetScheduler",
    "FleetState",
    "FleetStatus",
    "LineSink",
    "NotFoundError",
    "RangeError",
    "Request",
    "logging_sink",
    "null_sink",
]
