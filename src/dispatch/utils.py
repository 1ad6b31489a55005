from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class SweepResult:
    """Outcome of simulating one directional sweep through queued stops."""

    time: int
    stop_on_the_way: bool
    last_floor: int


def can_stop_between(first: int, second: int, floor: int) -> bool:
    """Whether ``floor`` lies on the closed segment between two positions."""
    return min(first, second) <= floor <= max(first, second)


def sweep_time(
    from_floor: int,
    stops: Iterable[int],
    to_floor: int,
    attempt_stop: bool,
    boarding_time: int,
) -> SweepResult:
    """Simulate a car walking ``stops`` in order, starting at ``from_floor``.

    Every floor travelled costs one tick and every queued stop adds
    ``boarding_time``. When ``attempt_stop`` is set and ``to_floor`` lies
    between two consecutive positions, the walk ends there and only the
    distance from the segment start to ``to_floor`` is added.
    """
    time = 0
    position = from_floor
    for stop in stops:
        if attempt_stop and can_stop_between(position, stop, to_floor):
            time += abs(position - to_floor)
            return SweepResult(time=time, stop_on_the_way=True, last_floor=to_floor)
        time += abs(position - stop) + boarding_time
        position = stop
    return SweepResult(time=time, stop_on_the_way=False, last_floor=position)
