from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from dispatch.utils import sweep_time

from . import config
from .direction import Direction
from .errors import RangeError
from .log import LineSink, null_sink


def is_floor_number(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _empty_jobs() -> Dict[Direction, List[int]]:
    return {Direction.UP: [], Direction.DOWN: []}


@dataclass
class Car:
    """One elevator car with per-direction stop queues and a boarding timer.

    The ``UP`` queue is kept ascending and the ``DOWN`` queue descending, so
    the head of the active queue is always the next stop of the sweep.
    """

    car_id: int
    floor_count: int
    current_floor: int = 1
    travel_direction: Direction = Direction.NONE
    boarding_countdown: int = 0
    jobs: Dict[Direction, List[int]] = field(default_factory=_empty_jobs)
    emit: LineSink = field(default=null_sink, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.car_id < 1:
            raise RangeError(f"car id must be 1 or greater, provided value is {self.car_id}")
        self._check_floor(self.current_floor, "current_floor")

    @property
    def is_idle(self) -> bool:
        return self.travel_direction is Direction.NONE

    def estimate(self, to_floor: int, wanted_direction: Direction) -> int:
        """Ticks this car needs before it can serve ``to_floor``.

        An idle car is available right away, so only the distance counts.
        A busy car honours its current sweep and tries to add a stop on the
        way, then tries the same on the return sweep, and otherwise finishes
        all queued work before heading to ``to_floor``. Each floor travelled
        costs one tick and each queued stop adds ``BOARDING_TIME``.
        """
        if self.is_idle:
            return abs(to_floor - self.current_floor)
        result = self.boarding_countdown

        current = self.travel_direction
        first = sweep_time(
            self.current_floor,
            self.jobs[current],
            to_floor,
            current is wanted_direction,
            config.BOARDING_TIME,
        )
        result += first.time
        if first.stop_on_the_way:
            return result

        other = current.opposite
        second = sweep_time(
            first.last_floor,
            self.jobs[other],
            to_floor,
            other is wanted_direction,
            config.BOARDING_TIME,
        )
        result += second.time
        if second.stop_on_the_way:
            return result

        return result + abs(to_floor - second.last_floor)

    def assign_floor(self, to_floor: int) -> None:
        """Register a stop, as if the floor button inside the car was pressed."""
        self._check_floor(to_floor, "to_floor")
        if to_floor == self.current_floor:
            direction = self.travel_direction
        elif to_floor > self.current_floor:
            direction = Direction.UP
        else:
            direction = Direction.DOWN
        if direction is Direction.NONE:
            # idle and already there
            return

        queue = self.jobs[direction]
        queue.append(to_floor)
        queue.sort(reverse=direction is Direction.DOWN)
        self.emit(
            f"new job registered for direction {direction}. "
            f"Current jobs for that direction: [{', '.join(map(str, queue))}]"
        )
        if self.is_idle:
            self.travel_direction = direction

    def tick(self) -> bool:
        """Advance one tick. Returns whether the car changed floor."""
        if self.boarding_countdown > 0:
            self.boarding_countdown -= 1
            self.emit(
                f"waiting for boarding/disembarking, wait time remaining: {self.boarding_countdown}"
            )
            if self.boarding_countdown == 0:
                self._resolve_direction()
            return False

        if self.is_idle:
            return False

        queue = self.jobs[self.travel_direction]
        if not queue:
            self._resolve_direction()
            return False

        moved = False
        target = queue[0]
        if self.current_floor < target:
            self.current_floor += 1
            moved = True
            self.emit(f"moved up to floor {self.current_floor}")
        elif self.current_floor > target:
            self.current_floor -= 1
            moved = True
            self.emit(f"moved down to floor {self.current_floor}")

        if self.current_floor == target:
            while queue and queue[0] == self.current_floor:
                queue.pop(0)
            self.boarding_countdown = config.BOARDING_TIME
            if queue:
                next_stops = (
                    f"next stops in the current direction ({self.travel_direction}): "
                    f"[{', '.join(map(str, queue))}]"
                )
            else:
                next_stops = f"no more stops in the current direction ({self.travel_direction})"
            self.emit(f"arrived at floor {self.current_floor}, {next_stops}")
        return moved

    def move_closer(self, floor: int) -> bool:
        """Move an idle car one floor towards ``floor`` without queueing a stop.

        Returns whether the car moved. Cars that are sweeping or still
        boarding stay put.
        """
        if not self.is_idle or floor == self.current_floor or self.boarding_countdown > 0:
            return False
        step = 1 if floor > self.current_floor else -1
        self.current_floor += step
        self.emit(
            f"moved {'up' if step > 0 else 'down'} a single floor closer to {floor} "
            "to pick up a passenger"
        )
        return True

    def hold(self) -> None:
        """Reset the boarding countdown to let passengers board or leave."""
        self.boarding_countdown = config.BOARDING_TIME
        self.emit("hold requested")

    def _resolve_direction(self) -> None:
        if self.is_idle or self.jobs[self.travel_direction]:
            return
        other = self.travel_direction.opposite
        if self.jobs[other]:
            self.travel_direction = other
            self.emit(f"new direction: {other}")
        else:
            self.travel_direction = Direction.NONE
            self.emit("out of jobs")

    def _check_floor(self, floor: int, name: str) -> None:
        if not is_floor_number(floor) or floor < 1 or floor > self.floor_count:
            raise RangeError(
                f"{name} must be an integer between 1 and {self.floor_count}, provided value is {floor}"
            )
