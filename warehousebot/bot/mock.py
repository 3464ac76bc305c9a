"""In-process simulated bot for tests and offline exploration."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from warehousebot.logging_utils import log_debug
from warehousebot.warehouse import ALL_DIRECTIONS, ORIGIN, Coords2D, Direction

from .commands import BotCommands, FarScan, HitWall, InvalidTarget, NearScan, ScanFailed


class MockBot(BotCommands):
    """Bot that walks a fixed, fully known warehouse layout.

    ``layout`` maps every walkable coordinate to the set of walled sides. Items
    are optional per coordinate. Moving through a wall raises ``HitWall``;
    moving onto a coordinate outside the layout raises ``InvalidTarget``.
    """

    def __init__(
        self,
        layout: Dict[Coords2D, Set[Direction]],
        *,
        items: Optional[Dict[Coords2D, List[str]]] = None,
        start: Coords2D = ORIGIN,
        fail_scans: bool = False,
    ):
        if start not in layout:
            raise ValueError(f"Start position {start} is not part of the layout")
        self.layout = {pos: set(walls) for pos, walls in layout.items()}
        self.items = {pos: list(labels) for pos, labels in (items or {}).items()}
        self.start = start
        self.position = start
        self.fail_scans = fail_scans
        # Commands received, in order; handy for asserting on interpreter behaviour.
        self.history: List[str] = []

    @classmethod
    def rectangle(
        cls,
        width: int,
        height: int,
        *,
        items: Optional[Dict[Coords2D, List[str]]] = None,
        start: Coords2D = ORIGIN,
        inner_walls: Iterable[tuple[Coords2D, Direction]] = (),
    ) -> "MockBot":
        """Build a walled ``width`` x ``height`` room with its top-left cell at (0, 0).

        ``inner_walls`` adds extra walls; each is mirrored onto the neighbor
        sharing the edge.
        """
        if width < 2 or height < 2:
            raise ValueError("A rectangle needs at least 2x2 cells")
        layout: Dict[Coords2D, Set[Direction]] = {}
        for x in range(width):
            for y in range(height):
                walls: Set[Direction] = set()
                if y == 0:
                    walls.add(Direction.NORTH)
                if y == height - 1:
                    walls.add(Direction.SOUTH)
                if x == 0:
                    walls.add(Direction.WEST)
                if x == width - 1:
                    walls.add(Direction.EAST)
                layout[Coords2D(x, y)] = walls

        for pos, direction in inner_walls:
            layout[pos].add(direction)
            neighbor = pos.go(direction)
            if neighbor in layout:
                layout[neighbor].add(direction.opposite())

        return cls(layout, items=items, start=start)

    def go(self, direction: Direction) -> None:
        self.history.append(f"go {direction.value}")
        log_debug(f"MockBot go {direction.value} from {self.position}")
        if direction in self.layout[self.position]:
            raise HitWall(f"Wall on the {direction.value} side of {self.position}")
        target = self.position.go(direction)
        if target not in self.layout:
            raise InvalidTarget(f"No cell at {target}")
        self.position = target

    def scan_near(self) -> NearScan:
        self.history.append("scan near")
        if self.fail_scans:
            raise ScanFailed("Near scan sensor offline")
        walls = self.layout[self.position]
        return NearScan(
            north=Direction.NORTH in walls,
            east=Direction.EAST in walls,
            south=Direction.SOUTH in walls,
            west=Direction.WEST in walls,
            items=list(self.items.get(self.position, [])),
        )

    def scan_far(self) -> FarScan:
        self.history.append("scan far")
        if self.fail_scans:
            raise ScanFailed("Far scan sensor offline")
        distances = {d.value.lower(): self._distance_to_wall(d) for d in ALL_DIRECTIONS}
        return FarScan(**distances)

    def reset(self) -> None:
        self.history.append("reset")
        self.position = self.start

    def _distance_to_wall(self, direction: Direction) -> int:
        steps = 0
        current = self.position
        while direction not in self.layout[current]:
            following = current.go(direction)
            if following not in self.layout:
                break
            current = following
            steps += 1
        return steps
