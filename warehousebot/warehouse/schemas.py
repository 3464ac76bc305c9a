"""Pydantic schemas for persisted warehouse maps.

These models mirror the in-memory ``Cell``/``CellGrid`` structures but keep
saved maps serializable. The ``shape`` field duplicates ``walls``; loading
recomputes it and rejects records where the two disagree.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .cell import CellType
from .coords import Coords2D, Direction


class CellState(BaseModel):
    """Serializable record for one cell of the map."""

    x: int
    y: int
    walls: List[Direction] = Field(
        default_factory=list,
        description="Walled sides by name (NORTH, EAST, SOUTH, WEST)",
    )
    items: List[str] = Field(
        default_factory=list,
        description="Shelf contents in insertion order",
    )
    visited: bool = False
    shape: CellType = Field(
        CellType.XCROSS,
        description="Shape derived from walls; checked on load",
    )

    @field_validator("walls")
    @classmethod
    def _unique_walls(cls, value: List[Direction]) -> List[Direction]:
        if len(set(value)) != len(value):
            raise ValueError("walls must not repeat a direction")
        if len(value) > 3:
            raise ValueError("a cell has at most 3 walls")
        return value

    @property
    def position(self) -> Coords2D:
        return Coords2D(self.x, self.y)


class WarehouseState(BaseModel):
    """Sparse snapshot of an explored warehouse."""

    cells: Dict[str, CellState] = Field(
        default_factory=dict,
        description='Sparse map: "x,y" → cell record',
    )
    bot_position: Optional[str] = Field(
        None, description='Last known bot coordinate as "x,y"',
    )
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Free-form metadata (e.g. bot name, notes)",
    )
