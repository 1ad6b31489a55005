from __future__ import annotations

from dataclasses import dataclass

from .direction import Direction


@dataclass(frozen=True)
class Request:
    """A hall call waiting for a car."""

    floor: int
    direction: Direction

    @property
    def label(self) -> str:
        return f"{self.floor}:{self.direction.glyph}"

    def to_dict(self) -> dict:
        return {"floor": self.floor, "direction": self.direction.value}

    @classmethod
    def from_dict(cls, data: dict) -> "Request":
        return cls(floor=int(data["floor"]), direction=Direction.parse(data["direction"]))
