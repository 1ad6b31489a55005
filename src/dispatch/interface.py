from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Protocol, Tuple

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from fleet.direction import Direction
    from fleet.request import Request


class Dispatchable(Protocol):
    """What the matching pass needs from a car."""

    car_id: int

    @property
    def is_idle(self) -> bool:
        ...

    def estimate(self, to_floor: int, wanted_direction: "Direction") -> int:
        ...

    def hold(self) -> None:
        ...

    def move_closer(self, floor: int) -> bool:
        ...


@dataclass
class MatchOutcome:
    """Result of one matching pass over the pending hall calls."""

    pending: List["Request"] = field(default_factory=list)
    fulfilled: List[Tuple["Request", int]] = field(default_factory=list)
    nudged: List[Tuple[int, int]] = field(default_factory=list)
