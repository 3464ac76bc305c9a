"""Coordinates and cardinal directions for the warehouse grid.

The grid uses screen orientation: NORTH decreases ``y``, SOUTH increases it,
EAST increases ``x`` and WEST decreases it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Direction(str, Enum):
    """Cardinal direction. The value doubles as the persisted name."""

    NORTH = "NORTH"
    EAST = "EAST"
    SOUTH = "SOUTH"
    WEST = "WEST"

    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @property
    def delta(self) -> Tuple[int, int]:
        """(dx, dy) of a single step in this direction."""
        return _DELTAS[self]

    @property
    def index(self) -> int:
        """Stable slot 0..3 (N, E, S, W) used by fixed-size wall sets."""
        return _ORDER.index(self)

    @classmethod
    def parse(cls, text: str) -> "Direction":
        """Look up a direction by name or one-letter abbreviation, ignoring case."""
        key = text.strip().upper()
        if key in _ABBREVIATIONS:
            return _ABBREVIATIONS[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown direction: {text!r}") from None


_ORDER: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
)

_OPPOSITES: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}

_ABBREVIATIONS: Dict[str, Direction] = {d.value[0]: d for d in _ORDER}

ALL_DIRECTIONS: Tuple[Direction, ...] = _ORDER


@dataclass(frozen=True)
class Coords2D:
    """Integer grid position. Hashable so it can key the sparse grid."""

    x: int
    y: int

    def go(self, direction: Direction, steps: int = 1) -> "Coords2D":
        """Return the position ``steps`` cells away in ``direction``."""
        dx, dy = direction.delta
        return Coords2D(self.x + dx * steps, self.y + dy * steps)

    def north_west(self) -> "Coords2D":
        return Coords2D(self.x - 1, self.y - 1)

    def to_key(self) -> str:
        """Canonical ``"x,y"`` form used as the persisted map key."""
        return f"{self.x},{self.y}"

    @classmethod
    def from_key(cls, key: str) -> "Coords2D":
        """Parse ``"x,y"`` back into a coordinate.

        Raises:
            ValueError: If ``key`` is not two comma-separated integers
        """
        parts = key.split(",")
        if len(parts) != 2:
            raise ValueError(f"Malformed coordinate key: {key!r}")
        try:
            return cls(int(parts[0].strip()), int(parts[1].strip()))
        except ValueError:
            raise ValueError(f"Malformed coordinate key: {key!r}") from None

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


ORIGIN = Coords2D(0, 0)
