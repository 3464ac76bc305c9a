"""Per-position warehouse state: walls, shape, shelf and visit flag.

A cell's shape is derived from its walls and decides how many items its shelf
can hold. Cells do not know their own coordinate; the grid owns that mapping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from warehousebot.logging_utils import log_debug

from .coords import ALL_DIRECTIONS, Direction
from .errors import CellFull, IncompatibleItem, ShelfFull, WallExists

EMPTY_ITEM = "-"
MAX_WALLS = 3


class CellType(str, Enum):
    """Structural classification of a cell. The value is the persisted name."""

    XCROSS = "XCross"
    TCROSS = "TCross"
    HALLWAY = "Hallway"
    CORNER = "Corner"
    DEADEND = "DeadEnd"

    @property
    def capacity(self) -> int:
        return _CAPACITY[self]


_CAPACITY = {
    CellType.XCROSS: 4,
    CellType.TCROSS: 6,
    CellType.HALLWAY: 8,
    CellType.CORNER: 9,
    CellType.DEADEND: 12,
}


def classify_walls(wall_flags: Sequence[bool]) -> CellType:
    """Return the shape for a 4-slot wall set (N, E, S, W).

    Two walls form a hallway when they face each other (N+S or E+W) and a
    corner otherwise.
    """
    count = sum(1 for flag in wall_flags if flag)
    if count == 0:
        return CellType.XCROSS
    if count == 1:
        return CellType.TCROSS
    if count == 2:
        north, east, south, west = wall_flags
        if (north and south) or (east and west):
            return CellType.HALLWAY
        return CellType.CORNER
    if count == 3:
        return CellType.DEADEND
    raise ValueError("A cell cannot have 4 walls")


@dataclass
class Cell:
    """One storage position in the warehouse.

    ``wall_flags`` is a fixed 4-slot set indexed by ``Direction.index``.
    ``shape`` is recomputed after every wall change and is never set directly.
    """

    wall_flags: List[bool] = field(default_factory=lambda: [False] * 4)
    items: List[str] = field(default_factory=list)
    visited: bool = False
    shape: CellType = field(init=False)

    def __post_init__(self) -> None:
        if len(self.wall_flags) != 4:
            raise ValueError(f"Expected 4 wall flags, got {len(self.wall_flags)}")
        self.wall_flags = [bool(flag) for flag in self.wall_flags]
        self.shape = classify_walls(self.wall_flags)

        if self.items:
            first = self.items[0]
            for label in self.items[1:]:
                if label != first:
                    raise IncompatibleItem(first, label)
            if len(self.items) > self.capacity():
                raise ShelfFull(self.capacity())

    @classmethod
    def with_walls(
        cls,
        *directions: Direction,
        items: Iterable[str] = (),
        visited: bool = False,
    ) -> "Cell":
        """Build a cell from a list of walled sides and shelf contents."""
        cell = cls(visited=visited)
        for direction in directions:
            cell.add_wall(direction)
        for label in items:
            cell.put_item(label)
        return cell

    # ------------------------------------------------------------------ walls

    @property
    def walls(self) -> Tuple[Direction, ...]:
        """Walled sides in N, E, S, W order."""
        return tuple(d for d in ALL_DIRECTIONS if self.wall_flags[d.index])

    def wall_count(self) -> int:
        return sum(1 for flag in self.wall_flags if flag)

    def has_wall(self, direction: Direction) -> bool:
        return self.wall_flags[direction.index]

    def add_wall(self, direction: Direction) -> CellType:
        """Add a wall on ``direction`` and return the new shape.

        Raises:
            WallExists: If that side is already walled
            CellFull: If the cell already has 3 walls
        """
        if self.has_wall(direction):
            raise WallExists(direction)
        if self.wall_count() >= MAX_WALLS:
            raise CellFull(direction)

        self.wall_flags[direction.index] = True
        previous = self.shape
        self.shape = classify_walls(self.wall_flags)
        log_debug(f"Wall {direction.value} added: {previous.value} -> {self.shape.value}")
        return self.shape

    # ------------------------------------------------------------------ shelf

    def capacity(self) -> int:
        return self.shape.capacity

    def occupied(self) -> int:
        return len(self.items)

    def dominant_item(self) -> str:
        """The label stored on the shelf, or ``EMPTY_ITEM`` when empty."""
        return self.items[0] if self.items else EMPTY_ITEM

    def put_item(self, label: str) -> int:
        """Put one item on the shelf and return the new occupied count.

        Raises:
            IncompatibleItem: If the shelf already holds a different label
            ShelfFull: If the shelf is at capacity
        """
        if self.items and self.items[0] != label:
            raise IncompatibleItem(self.items[0], label)
        if self.occupied() >= self.capacity():
            raise ShelfFull(self.capacity())
        self.items.append(label)
        return self.occupied()

    # ------------------------------------------------------------------ visits

    def visit(self) -> None:
        self.visited = True

    def was_visited(self) -> bool:
        return self.visited

    def __str__(self) -> str:
        return (
            f"Cell - Storage ({self.occupied()}/{self.capacity()}) "
            f"- Goods: {self.dominant_item()}"
        )
