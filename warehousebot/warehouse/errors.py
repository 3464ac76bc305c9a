"""Exceptions raised by the warehouse map.

All of these are recoverable: a failed operation leaves the cell or grid it was
called on unchanged, and the command interpreter turns them into user-facing
messages.
"""

from __future__ import annotations


class WarehouseError(Exception):
    """Base class for map-level failures."""


class WallExists(WarehouseError):
    """The requested side of the cell is already walled."""

    def __init__(self, direction) -> None:
        self.direction = direction
        super().__init__(f"Cell already has a wall on side {direction.value}")


class CellFull(WarehouseError):
    """A fourth wall would make the cell unreachable."""

    def __init__(self, direction) -> None:
        self.direction = direction
        super().__init__(
            f"Cannot add wall {direction.value}: cells have at most 3 walls"
        )


class IncompatibleItem(WarehouseError):
    """The shelf already holds a different item label."""

    def __init__(self, stored: str, offered: str) -> None:
        self.stored = stored
        self.offered = offered
        super().__init__(f"Shelf holds '{stored}', cannot store '{offered}'")


class ShelfFull(WarehouseError):
    """The shelf is at the capacity of the cell's shape."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        super().__init__(f"Shelf is full ({capacity}/{capacity})")


class InvalidArgument(WarehouseError, ValueError):
    """A grid operation received an argument outside its domain."""
