"""Sparse warehouse map built from near and far scans.

``CellGrid`` maps coordinates to cells and keeps walls consistent across cell
boundaries: a wall is a property of the edge between two positions, so once
both sides of an edge are known they must agree.

Two entry points write cells, with different overwrite rules:

- ``upsert_observed`` records a direct near-scan observation. It replaces
  whatever was stored and merges walls with known neighbors.
- ``insert_frontier_cell`` records a cell inferred from far-scan distances. It
  never replaces an existing cell, because an inferred cell carries less
  information than an observed one.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Tuple

from warehousebot.logging_utils import log_debug

from .cell import MAX_WALLS, Cell
from .coords import ALL_DIRECTIONS, Coords2D, Direction
from .errors import CellFull, InvalidArgument, WarehouseError
from .schemas import CellState, WarehouseState


class CellGrid:
    """Mapping of ``Coords2D`` → ``Cell`` with wall mirroring between neighbors.

    Cells are created the first time an observation touches their coordinate and
    are only ever removed all at once by ``reset()``.
    """

    def __init__(self) -> None:
        self._cells: Dict[Coords2D, Cell] = {}

    # ------------------------------------------------------------------ queries

    def get(self, pos: Coords2D) -> Optional[Cell]:
        return self._cells.get(pos)

    def __contains__(self, pos: object) -> bool:
        return pos in self._cells

    def __iter__(self) -> Iterator[Coords2D]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CellGrid):
            return NotImplemented
        return self._cells == other._cells

    def count(self) -> int:
        return len(self._cells)

    def is_empty(self) -> bool:
        return not self._cells

    def positions(self) -> List[Coords2D]:
        return list(self._cells)

    def items(self) -> Iterator[Tuple[Coords2D, Cell]]:
        return iter(self._cells.items())

    def aggregate_capacity(self) -> Tuple[int, int]:
        """Return ``(occupied, total)`` shelf slots summed over every cell."""
        occupied = 0
        total = 0
        for cell in self._cells.values():
            occupied += cell.occupied()
            total += cell.capacity()
        return occupied, total

    def check_consistency(self) -> List[Tuple[Coords2D, Direction]]:
        """Return edges whose two sides disagree about having a wall.

        Each edge is reported once, from its western or northern cell.
        """
        violations: List[Tuple[Coords2D, Direction]] = []
        for pos, cell in self._cells.items():
            for direction in (Direction.EAST, Direction.SOUTH):
                neighbor = self._cells.get(pos.go(direction))
                if neighbor is None:
                    continue
                if cell.has_wall(direction) != neighbor.has_wall(direction.opposite()):
                    violations.append((pos, direction))
        return violations

    # ------------------------------------------------------------------ updates

    def upsert_observed(self, pos: Coords2D, cell: Cell) -> Cell:
        """Record a near-scan observation at ``pos`` and mirror walls.

        Walls on edges shared with known neighbors are merged in both directions:
        a wall on the new cell is added to the neighbor's opposite side, and a
        wall the neighbor reports on the shared edge is added to the new cell.
        Every required wall is checked before anything is written.

        Returns:
            The stored cell (``cell`` itself, possibly with merged walls)

        Raises:
            CellFull: If merging would give any cell a fourth wall; the grid is
                left unchanged
        """
        # Plan the merge first so a rejected observation leaves no trace.
        inherited: List[Direction] = []
        mirrored: List[Tuple[Cell, Direction]] = []
        for direction in ALL_DIRECTIONS:
            neighbor = self._cells.get(pos.go(direction))
            if neighbor is None:
                continue
            facing = direction.opposite()
            if neighbor.has_wall(facing) and not cell.has_wall(direction):
                inherited.append(direction)
            elif cell.has_wall(direction) and not neighbor.has_wall(facing):
                if neighbor.wall_count() >= MAX_WALLS:
                    raise CellFull(facing)
                mirrored.append((neighbor, facing))

        if inherited and cell.wall_count() + len(inherited) > MAX_WALLS:
            raise CellFull(inherited[-1])

        for direction in inherited:
            cell.add_wall(direction)
            log_debug(f"{pos} inherits wall {direction.value} from its neighbor")
        for neighbor, facing in mirrored:
            neighbor.add_wall(facing)
            log_debug(f"Mirrored wall {facing.value} onto neighbor of {pos}")

        if pos not in self._cells:
            log_debug(f"New cell at {pos}")
        self._cells[pos] = cell
        return cell

    def insert_frontier_cell(self, pos: Coords2D, cell: Cell) -> bool:
        """Insert an inferred cell at ``pos`` unless one is already recorded.

        Walls that stored neighbors report on a shared edge are added to the
        new cell. Stored neighbors themselves are never modified.

        Returns:
            True if the cell was inserted, False if ``pos`` was already known

        Raises:
            CellFull: If the inherited walls would give the cell a fourth wall;
                nothing is inserted
        """
        if pos in self._cells:
            return False

        inherited: List[Direction] = []
        for direction in ALL_DIRECTIONS:
            neighbor = self._cells.get(pos.go(direction))
            if neighbor is None or cell.has_wall(direction):
                continue
            if neighbor.has_wall(direction.opposite()):
                inherited.append(direction)

        if inherited and cell.wall_count() + len(inherited) > MAX_WALLS:
            raise CellFull(inherited[-1])
        for direction in inherited:
            cell.add_wall(direction)
            log_debug(f"Frontier cell {pos} inherits wall {direction.value} from its neighbor")

        log_debug(f"New frontier cell at {pos} (walls: {[d.value for d in cell.walls]})")
        self._cells[pos] = cell
        return True

    def reconstruct_ray(self, origin: Coords2D, direction: Direction, distance: int) -> int:
        """Fill in cells between ``origin`` and the wall ``distance`` steps away.

        Intermediate cells are wall-less; the terminal cell at
        ``origin.go(direction, distance)`` carries a single wall on the
        ``direction`` side. A distance of 0 means the wall is on ``origin``
        itself, which the near scan reports, so nothing is inserted.

        Returns:
            Number of cells actually inserted

        Raises:
            InvalidArgument: If ``distance`` is negative
        """
        if distance < 0:
            raise InvalidArgument(
                f"Far-scan distance must be non-negative (got {distance} {direction.value})"
            )

        inserted = 0
        for step in range(1, distance):
            if self.insert_frontier_cell(origin.go(direction, step), Cell()):
                inserted += 1
        if distance > 0:
            terminal = Cell.with_walls(direction)
            if self.insert_frontier_cell(origin.go(direction, distance), terminal):
                inserted += 1

        log_debug(
            f"Ray {direction.value} from {origin}: distance {distance}, {inserted} new cells"
        )
        return inserted

    def reset(self) -> None:
        log_debug(f"Resetting grid ({len(self._cells)} cells)")
        self._cells.clear()

    # ------------------------------------------------------------ serialization

    def to_state(
        self,
        bot_position: Optional[Coords2D] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> WarehouseState:
        """Snapshot the grid as a serializable ``WarehouseState``."""
        cells = {
            pos.to_key(): CellState(
                x=pos.x,
                y=pos.y,
                walls=list(cell.walls),
                items=list(cell.items),
                visited=cell.visited,
                shape=cell.shape,
            )
            for pos, cell in self._cells.items()
        }
        return WarehouseState(
            cells=cells,
            bot_position=bot_position.to_key() if bot_position is not None else None,
            metadata=dict(metadata or {}),
        )

    @classmethod
    def from_state(cls, state: WarehouseState) -> "CellGrid":
        """Rebuild a grid from a snapshot, checking each record for consistency.

        Raises:
            ValueError: If a key does not parse, disagrees with the record's
                coordinates, the stored shape does not match the walls, or the
                shelf contents are invalid for the cell
        """
        grid = cls()
        for key, record in state.cells.items():
            pos = Coords2D.from_key(key)
            if pos != record.position:
                raise ValueError(
                    f"Cell key {key!r} does not match its coordinates {record.position}"
                )
            try:
                cell = Cell(
                    wall_flags=[d in record.walls for d in ALL_DIRECTIONS],
                    items=list(record.items),
                    visited=record.visited,
                )
            except WarehouseError as exc:
                raise ValueError(f"Invalid cell record at {key!r}: {exc}") from exc
            if cell.shape != record.shape:
                raise ValueError(
                    f"Cell {key!r} stored as {record.shape.value} "
                    f"but its walls make it {cell.shape.value}"
                )
            grid._cells[pos] = cell
        return grid
