"""Text rendering of the explored warehouse.

Every cell is drawn as its north edge (top line) and its west edge plus content
(side line). East and south edges are drawn by the next column or row, so the
renderer walks one column and one row past the bounding box to close the map.
Where no cell is stored, the edge is taken from the neighbor that shares it,
so walls reported by only one side still show up.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from warehousebot.logging_utils import log_debug

from .coords import Coords2D, Direction
from .grid import CellGrid

BOT_SPRITE = "o"
NORTH_WALL = "+-"
NORTH_WEST_CORNER = "+ "
WEST_WALL = "|"
BLANK = " "


def min_max_xy(positions: Iterable[Coords2D]) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """Return ``((min_x, max_x), (min_y, max_y))`` over ``positions``.

    Raises:
        ValueError: If ``positions`` is empty
    """
    xs = []
    ys = []
    for pos in positions:
        xs.append(pos.x)
        ys.append(pos.y)
    if not xs:
        raise ValueError("Cannot compute the bounds of an empty grid")
    log_debug(f"X: [{min(xs)}..{max(xs)}] Y: [{min(ys)}..{max(ys)}]")
    return (min(xs), max(xs)), (min(ys), max(ys))


def output_gridsize(minimum: int, maximum: int) -> int:
    """Characters needed along one axis: two per cell plus the closing border.

    Raises:
        ValueError: If ``maximum < minimum``
    """
    if maximum < minimum:
        raise ValueError(f"Max ({maximum}) cannot be smaller than min ({minimum})")
    return (maximum - minimum) * 2 + 3


def draw_warehouse(grid: CellGrid, bot_position: Optional[Coords2D] = None) -> str:
    """Render ``grid`` as a bordered text map, marking ``bot_position`` if given.

    Returns ``"\\n"`` for an empty grid. Otherwise the result starts with a
    newline and holds two newline-terminated lines per row.
    """
    if grid.is_empty():
        return "\n"

    (x_min, x_max), (y_min, y_max) = min_max_xy(grid)
    log_debug(
        f"Rendering {output_gridsize(x_min, x_max)}x{output_gridsize(y_min, y_max)} map"
    )

    lines = [""]
    for y in range(y_min, y_max + 2):
        top_wall = []
        side_walls = []
        for x in range(x_min, x_max + 2):
            current = Coords2D(x, y)
            cell = grid.get(current)

            if cell is not None:
                top_wall.append(NORTH_WALL if cell.has_wall(Direction.NORTH) else NORTH_WEST_CORNER)
                side_walls.append(WEST_WALL if cell.has_wall(Direction.WEST) else BLANK)
                side_walls.append(BOT_SPRITE if current == bot_position else BLANK)
                continue

            # No cell here: borrow the shared edges from the northern and western neighbors.
            north = grid.get(current.go(Direction.NORTH))
            west = grid.get(current.go(Direction.WEST))

            if north is not None:
                top_wall.append(NORTH_WALL if north.has_wall(Direction.SOUTH) else NORTH_WEST_CORNER)
            elif west is not None or current.north_west() in grid:
                top_wall.append(NORTH_WEST_CORNER)
            else:
                top_wall.append(BLANK * 2)

            if west is not None and west.has_wall(Direction.EAST):
                side_walls.append(WEST_WALL + BLANK)
            else:
                side_walls.append(BLANK * 2)

        lines.append("".join(top_wall))
        lines.append("".join(side_walls))

    return "\n".join(lines) + "\n"
