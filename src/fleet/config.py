from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .log import LineSink, null_sink

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .fleet import FleetScheduler

# Ticks a car pauses at a stop; also the per-stop penalty used in estimates.
BOARDING_TIME = 2

DEFAULT_FLOOR_COUNT = 10
DEFAULT_CAR_COUNT = 4


@dataclass
class FleetConfig:
    """Building parameters used to construct a scheduler."""

    floor_count: int = DEFAULT_FLOOR_COUNT
    car_count: int = DEFAULT_CAR_COUNT

    def build(self, emit: LineSink = null_sink) -> "FleetScheduler":
        from .fleet import FleetScheduler

        return FleetScheduler(self.floor_count, self.car_count, emit=emit)
