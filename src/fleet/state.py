from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .direction import Direction
from .request import Request


@dataclass(frozen=True)
class CarState:
    car_id: int
    floor: int

    def to_dict(self) -> dict:
        return {"id": self.car_id, "floor": self.floor}

    @classmethod
    def from_dict(cls, data: dict) -> "CarState":
        return cls(car_id=int(data["id"]), floor=int(data["floor"]))


@dataclass(frozen=True)
class FleetState:
    """Saved form of a scheduler.

    Only car positions survive; queued jobs, travel directions and boarding
    timers are not recorded, so restored cars start idle.
    """

    floor_count: int
    time: int
    requests: List[Request] = field(default_factory=list)
    cars: List[CarState] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "floor_count": self.floor_count,
            "time": self.time,
            "requests": [request.to_dict() for request in self.requests],
            "cars": [car.to_dict() for car in self.cars],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FleetState":
        return cls(
            floor_count=int(data["floor_count"]),
            time=int(data.get("time", 0)),
            requests=[Request.from_dict(item) for item in data.get("requests", [])],
            cars=[CarState.from_dict(item) for item in data.get("cars", [])],
        )


@dataclass(frozen=True)
class CarStatus:
    car_id: int
    floor: int
    direction: Direction

    @property
    def label(self) -> str:
        return f"{self.car_id}:{self.floor}{self.direction.glyph}"


@dataclass(frozen=True)
class FleetStatus:
    """What observers see after each tick."""

    time: int
    cars: List[CarStatus]
    requests: List[Request]

    @property
    def car_labels(self) -> List[str]:
        return [car.label for car in self.cars]

    @property
    def request_labels(self) -> List[str]:
        return [request.label for request in self.requests]

    def describe(self) -> str:
        return f"{' '.join(self.car_labels)} pending [{' '.join(self.request_labels)}]"

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "cars": self.car_labels,
            "requests": self.request_labels,
            "details": [
                {"id": car.car_id, "floor": car.floor, "direction": car.direction.value}
                for car in self.cars
            ],
        }
