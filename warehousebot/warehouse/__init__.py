"""Warehouse map: coordinates, cells, the sparse grid and its renderer."""

from .coords import ALL_DIRECTIONS, ORIGIN, Coords2D, Direction
from .cell import EMPTY_ITEM, Cell, CellType, classify_walls
from .errors import (
    CellFull,
    IncompatibleItem,
    InvalidArgument,
    ShelfFull,
    WallExists,
    WarehouseError,
)
from .schemas import CellState, WarehouseState
from .grid import CellGrid
from .plotter import draw_warehouse, min_max_xy, output_gridsize

__all__ = [
    "ALL_DIRECTIONS",
    "ORIGIN",
    "Coords2D",
    "Direction",
    "EMPTY_ITEM",
    "Cell",
    "CellType",
    "classify_walls",
    "CellFull",
    "IncompatibleItem",
    "InvalidArgument",
    "ShelfFull",
    "WallExists",
    "WarehouseError",
    "CellState",
    "WarehouseState",
    "CellGrid",
    "draw_warehouse",
    "min_max_xy",
    "output_gridsize",
]
