from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Set

from dispatch import CostMatcher

from .car import Car, is_floor_number
from .direction import Direction
from .errors import NotFoundError, RangeError
from .log import LineSink, null_sink, prefixed
from .request import Request
from .state import CarState, CarStatus, FleetState, FleetStatus


class FleetScheduler:
    """Elevator system with several cars in a single building.

    Hall calls are queued and resolved on the following ticks; every tick
    moves all cars first and then re-scores all pending calls against the
    post-movement state.
    """

    def __init__(
        self,
        floor_count: int,
        car_count: int = 1,
        emit: LineSink = null_sink,
        matcher: Optional[CostMatcher] = None,
    ) -> None:
        if car_count < 1:
            raise RangeError(f"car_count must be 1 or greater, provided value is {car_count}")
        if floor_count < 1:
            raise RangeError(f"floor_count must be 1 or greater, provided value is {floor_count}")
        self.floor_count = floor_count
        self.time = 0
        self.requests: List[Request] = []
        self.matcher = matcher or CostMatcher()
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self._sink = emit
        self._cars: List[Car] = [self._new_car(i + 1) for i in range(car_count)]

    @classmethod
    def from_state(
        cls,
        state: FleetState,
        emit: LineSink = null_sink,
        matcher: Optional[CostMatcher] = None,
    ) -> "FleetScheduler":
        """Rebuild a scheduler from a saved state; every car comes back idle."""
        ids = [car.car_id for car in state.cars]
        if len(set(ids)) != len(ids):
            raise RangeError(f"car ids must be unique, provided ids are {ids}")
        result = cls(state.floor_count, len(state.cars), emit=emit, matcher=matcher)
        result._cars = [result._new_car(car.car_id, car.floor) for car in state.cars]
        result.time = state.time
        result.requests = list(state.requests)
        return result

    @property
    def cars(self) -> Sequence[Car]:
        return tuple(self._cars)

    def car(self, car_id: int) -> Car:
        for car in self._cars:
            if car.car_id == car_id:
                return car
        raise NotFoundError(f"No car with id {car_id}")

    def request_call(self, floor: int, direction: Direction | str) -> Request:
        """Queue a hall call; a car is matched to it on the next tick."""
        if not is_floor_number(floor) or floor < 1 or floor > self.floor_count:
            raise RangeError(
                f"floor must be an integer between 1 and {self.floor_count}, provided value is {floor}"
            )
        request = Request(floor=floor, direction=Direction.parse(direction))
        self.requests.append(request)
        self._log(f"System: calling elevator to floor {floor} going {request.direction}")
        return request

    def assign_floor(self, car_id: int, floor: int) -> None:
        """Press the floor button inside car ``car_id``."""
        self.car(car_id).assign_floor(floor)

    def tick(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            self.time += 1
            self._match_requests(self._advance_cars())
            status = self.status()
            self._log(f"System: current status {status.describe()}")
            self._emit("status", status)

    def status(self) -> FleetStatus:
        return FleetStatus(
            time=self.time,
            cars=[
                CarStatus(car_id=car.car_id, floor=car.current_floor, direction=car.travel_direction)
                for car in self._cars
            ],
            requests=list(self.requests),
        )

    def current_state(self) -> FleetState:
        return FleetState(
            floor_count=self.floor_count,
            time=self.time,
            requests=list(self.requests),
            cars=[CarState(car_id=car.car_id, floor=car.current_floor) for car in self._cars],
        )

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def _advance_cars(self) -> Set[int]:
        """Tick every car in fleet order.

        Returns the ids of cars that already acted this tick: those that
        changed floor and those that spent the tick boarding.
        """
        acted: Set[int] = set()
        for car in self._cars:
            boarding = car.boarding_countdown > 0
            if car.tick() or boarding:
                acted.add(car.car_id)
        return acted

    def _match_requests(self, moved: Set[int]) -> None:
        outcome = self.matcher.match(self._cars, self.requests, moved)
        self.requests = outcome.pending
        for car_id, floor in outcome.nudged:
            self._emit("nudge", {"car_id": car_id, "floor": floor, "time": self.time})
        for request, car_id in outcome.fulfilled:
            self._log(f"System: request {request.label} fulfilled by car {car_id}")
            self._emit("fulfilled", {"request": request, "car_id": car_id, "time": self.time})

    def _new_car(self, car_id: int, floor: int = 1) -> Car:
        return Car(
            car_id=car_id,
            floor_count=self.floor_count,
            current_floor=floor,
            emit=prefixed(self._log, f"Car {car_id}: "),
        )

    def _log(self, line: str) -> None:
        self._sink(f"T{self.time:04d} {line}")

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)