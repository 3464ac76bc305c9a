"""
BotCommands interface for pluggable bot transports.

A bot moves one cell at a time and reports two kinds of observations:

- near scan: walls around the current cell plus the items stored there
- far scan: number of cells to the nearest wall in each direction

Implementations block until the bot answers and either return a complete
result or raise a ``CommandError``. Callers update the map only after a
successful result, so a failed command never leaves a half-applied update.

Included implementations:
1. MockBot - in-process simulated warehouse (testing, offline play)
2. RestBot - HTTP client for a remote bot service
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Tuple

from pydantic import BaseModel, Field

from warehousebot.warehouse import ALL_DIRECTIONS, Cell, Direction


# =============================
# Command errors
# =============================

class CommandError(Exception):
    """Base class for failures reported by a bot transport."""


class HitWall(CommandError):
    """The bot refused to move because a wall is in the way."""


class InvalidTarget(CommandError):
    """The bot or the requested target does not exist."""


class ScanFailed(CommandError):
    """A scan did not produce a usable result."""


class TransportError(CommandError):
    """The bot service could not be reached or answered unexpectedly."""


# =============================
# Scan results
# =============================

class NearScan(BaseModel):
    """Walls around the bot's cell and the items stored on its shelf."""

    north: bool = False
    east: bool = False
    south: bool = False
    west: bool = False
    items: List[str] = Field(default_factory=list, description="Shelf contents in order")

    def has_wall(self, direction: Direction) -> bool:
        return getattr(self, direction.value.lower())

    def walls(self) -> Tuple[Direction, ...]:
        return tuple(d for d in ALL_DIRECTIONS if self.has_wall(d))

    def to_cell(self) -> Cell:
        """Build the observed cell, marked visited since the bot stands on it."""
        return Cell.with_walls(*self.walls(), items=self.items, visited=True)


class FarScan(BaseModel):
    """Distance in cells to the nearest wall in each direction."""

    north: int = Field(..., ge=0)
    east: int = Field(..., ge=0)
    south: int = Field(..., ge=0)
    west: int = Field(..., ge=0)

    def distance(self, direction: Direction) -> int:
        return getattr(self, direction.value.lower())


# =============================
# Interface
# =============================

class BotCommands(ABC):
    """Abstract bot transport used by the command interpreter.

    Design pattern: Strategy - the interpreter depends on this interface, so a
    simulated bot and a remote one are interchangeable.
    """

    @abstractmethod
    def go(self, direction: Direction) -> None:
        """Move one cell in ``direction``.

        Raises:
            HitWall: If a wall blocks the move
            InvalidTarget: If the bot or target cell does not exist
            TransportError: If the bot could not be reached
        """

    @abstractmethod
    def scan_near(self) -> NearScan:
        """Report walls and items at the current cell.

        Raises:
            ScanFailed: If the scan produced no usable result
            TransportError: If the bot could not be reached
        """

    @abstractmethod
    def scan_far(self) -> FarScan:
        """Report distances to the nearest wall in every direction.

        Raises:
            ScanFailed: If the scan produced no usable result
            TransportError: If the bot could not be reached
        """

    @abstractmethod
    def reset(self) -> None:
        """Return the bot to its starting position."""

    def go_north(self) -> None:
        self.go(Direction.NORTH)

    def go_east(self) -> None:
        self.go(Direction.EAST)

    def go_south(self) -> None:
        self.go(Direction.SOUTH)

    def go_west(self) -> None:
        self.go(Direction.WEST)
