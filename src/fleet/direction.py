from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Travel direction of a car or of a hall call."""

    UP = "Up"
    DOWN = "Down"
    NONE = "None"

    @property
    def opposite(self) -> "Direction":
        if self is Direction.UP:
            return Direction.DOWN
        if self is Direction.DOWN:
            return Direction.UP
        return Direction.NONE

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    @classmethod
    def parse(cls, value: "str | Direction") -> "Direction":
        """Parse a hall-call direction such as ``"up"``, ``"D"`` or ``Direction.UP``.

        Only ``UP`` and ``DOWN`` are accepted; a call always has a direction.
        """
        if isinstance(value, Direction):
            direction = value
        else:
            direction = _ALIASES.get(str(value).strip().lower())
        if direction is None or direction is Direction.NONE:
            raise ValueError(f"Invalid direction selector: '{value}'")
        return direction

    def __str__(self) -> str:
        return self.value


_GLYPHS = {
    Direction.UP: "↑",
    Direction.DOWN: "↓",
    Direction.NONE: "·",
}

_ALIASES = {
    "up": Direction.UP,
    "u": Direction.UP,
    "down": Direction.DOWN,
    "d": Direction.DOWN,
}
