"""
Command interpreter tying a bot transport to the warehouse map.

The interpreter keeps the bot's position (relative to where exploration
started) and the ``CellGrid``. Every command first talks to the bot and only
updates the map once the bot answered successfully, so a failed move or scan
never leaves a partial update behind. The command list is in ``HELP_TEXT``.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Dict, List, Optional

from .bot import BotCommands, CommandError, HitWall, InvalidTarget, ScanFailed, TransportError
from .logging_utils import log_debug
from .persistence import PersistenceStrategy
from .warehouse import (
    ALL_DIRECTIONS,
    ORIGIN,
    CellGrid,
    Coords2D,
    Direction,
    WarehouseError,
    draw_warehouse,
)


HELP_TEXT = """\
Commands (case-insensitive):
    NORTH | EAST | SOUTH | WEST   move one cell (N, E, S, W also accepted)
    NEAR                          scan walls and items at the current cell
    FAR                           scan distances and fill in the frontier
    SCAN                          NEAR followed by FAR
    MAP                           draw the explored map
    INFO                          describe the current cell
    STATS                         number of cells and storage usage
    RESET                         reset the bot and forget the map
    SAVE <name> | LOAD <name>     store or restore the map
    LIST                          list saved maps
    HELP                          show this help"""


# =============================
# Interpreter errors
# =============================

class CliError(Exception):
    """Base class for commands the interpreter could not carry out."""


class CommandFailed(CliError):
    """The command was understood but failed; ``message`` is user-facing."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CommandUnknown(CliError):
    """The input does not name a command."""


class CommandNotImplemented(CliError):
    """The command exists but is unavailable in this configuration."""


_COMMAND_FAILURES = {
    HitWall: "hit the wall",
    InvalidTarget: "invalid target",
    ScanFailed: "scan failed",
    TransportError: "bot unreachable",
}


def command_error_to_cli_error(err: CommandError) -> CommandFailed:
    """Translate a bot failure into a user-facing ``CommandFailed``."""
    for error_type, text in _COMMAND_FAILURES.items():
        if isinstance(err, error_type):
            return CommandFailed(text)
    return CommandFailed(f"bot command failed: {err}")


_MOVES: Dict[str, Direction] = {}
for _direction in ALL_DIRECTIONS:
    _MOVES[_direction.value] = _direction
    _MOVES[_direction.value[0]] = _direction


class Cli:
    """Interactive command dispatcher for one bot and its map.

    Args:
        bot: Transport used to move and scan
        grid: Map to update; a fresh ``CellGrid`` by default
        persistence: Optional backend for SAVE/LOAD/LIST
    """

    def __init__(
        self,
        bot: BotCommands,
        grid: Optional[CellGrid] = None,
        persistence: Optional[PersistenceStrategy] = None,
    ):
        self.bot = bot
        # CellGrid defines __len__, so an empty grid is falsy; test against None.
        self.grid = grid if grid is not None else CellGrid()
        self.persistence = persistence
        self.position: Coords2D = ORIGIN

        self._handlers: Dict[str, Callable[[List[str]], Awaitable[str]]] = {
            "NEAR": self._cmd_near,
            "FAR": self._cmd_far,
            "SCAN": self._cmd_scan,
            "MAP": self._cmd_map,
            "INFO": self._cmd_info,
            "STATS": self._cmd_stats,
            "RESET": self._cmd_reset,
            "SAVE": self._cmd_save,
            "LOAD": self._cmd_load,
            "LIST": self._cmd_list,
            "HELP": self._cmd_help,
        }

    async def init_state(self) -> str:
        """Reset bot and map, then survey the starting cell."""
        await self._cmd_reset([])
        near = self.scan_near()
        far = self.scan_far()
        return f"{near}\n{far}"

    async def dispatch_command(self, line: str) -> str:
        """Run one command line and return its output.

        Raises:
            CommandUnknown: If the line does not start with a known command
            CommandFailed: If the command was attempted and failed
            CommandNotImplemented: If the command is unavailable here
        """
        parts = line.strip().split()
        if not parts:
            raise CommandUnknown("empty command")

        command, args = parts[0].upper(), parts[1:]
        log_debug(f"Dispatching {command} {args}")

        if command in _MOVES:
            return self.move(_MOVES[command])

        handler = self._handlers.get(command)
        if handler is None:
            raise CommandUnknown(command)
        return await handler(args)

    # ------------------------------------------------------------------ bot

    def move(self, direction: Direction) -> str:
        try:
            self.bot.go(direction)
        except CommandError as exc:
            raise command_error_to_cli_error(exc) from exc

        self.position = self.position.go(direction)
        cell = self.grid.get(self.position)
        if cell is not None:
            cell.visit()
        return f"going {direction.value.lower()}"

    def scan_near(self) -> str:
        try:
            scan = self.bot.scan_near()
        except CommandError as exc:
            raise command_error_to_cli_error(exc) from exc

        try:
            cell = self.grid.upsert_observed(self.position, scan.to_cell())
        except WarehouseError as exc:
            raise CommandFailed(f"inconsistent near scan at {self.position}: {exc}") from exc

        walls = ", ".join(d.value.lower() for d in cell.walls) or "none"
        return f"{self.position} {cell.shape.value} - walls: {walls} - {cell}"

    def scan_far(self) -> str:
        try:
            scan = self.bot.scan_far()
        except CommandError as exc:
            raise command_error_to_cli_error(exc) from exc

        inserted = 0
        try:
            for direction in ALL_DIRECTIONS:
                inserted += self.grid.reconstruct_ray(
                    self.position, direction, scan.distance(direction)
                )
        except WarehouseError as exc:
            raise CommandFailed(f"invalid far scan: {exc}") from exc

        distances = " ".join(
            f"{d.value[0]}={scan.distance(d)}" for d in ALL_DIRECTIONS
        )
        return f"far scan {distances} ({inserted} new cells)"

    # ------------------------------------------------------------- commands

    async def _cmd_near(self, args: List[str]) -> str:
        return self.scan_near()

    async def _cmd_far(self, args: List[str]) -> str:
        return self.scan_far()

    async def _cmd_scan(self, args: List[str]) -> str:
        return f"{self.scan_near()}\n{self.scan_far()}"

    async def _cmd_map(self, args: List[str]) -> str:
        return draw_warehouse(self.grid, self.position)

    async def _cmd_info(self, args: List[str]) -> str:
        cell = self.grid.get(self.position)
        if cell is None:
            return f"{self.position} unexplored"
        visited = "visited" if cell.was_visited() else "not visited"
        return f"{self.position} {cell.shape.value} ({visited}) - {cell}"

    async def _cmd_stats(self, args: List[str]) -> str:
        occupied, total = self.grid.aggregate_capacity()
        return f"{self.grid.count()} cells - storage {occupied}/{total}"

    async def _cmd_reset(self, args: List[str]) -> str:
        try:
            self.bot.reset()
        except CommandError as exc:
            raise command_error_to_cli_error(exc) from exc
        self.grid.reset()
        self.position = ORIGIN
        return "reset"

    async def _cmd_save(self, args: List[str]) -> str:
        persistence = self._require_persistence()
        name = self._require_name("SAVE", args)
        state = self.grid.to_state(bot_position=self.position)
        try:
            await persistence.save_warehouse(name, state)
        except ValueError as exc:
            raise CommandFailed(str(exc)) from exc
        return f"saved {self.grid.count()} cells as '{name}'"

    async def _cmd_load(self, args: List[str]) -> str:
        persistence = self._require_persistence()
        name = self._require_name("LOAD", args)
        try:
            state = await persistence.load_warehouse(name)
        except ValueError as exc:
            raise CommandFailed(str(exc)) from exc
        if state is None:
            raise CommandFailed(f"no saved map named '{name}'")

        try:
            grid = CellGrid.from_state(state)
            position = (
                Coords2D.from_key(state.bot_position)
                if state.bot_position is not None
                else ORIGIN
            )
        except ValueError as exc:
            raise CommandFailed(f"corrupt map '{name}': {exc}") from exc

        self.grid = grid
        self.position = position
        return f"loaded {grid.count()} cells from '{name}'"

    async def _cmd_list(self, args: List[str]) -> str:
        persistence = self._require_persistence()
        names = await persistence.list_warehouses()
        return "\n".join(names) if names else "no saved maps"

    async def _cmd_help(self, args: List[str]) -> str:
        return HELP_TEXT

    def _require_persistence(self) -> PersistenceStrategy:
        if self.persistence is None:
            raise CommandNotImplemented("no storage configured")
        return self.persistence

    @staticmethod
    def _require_name(command: str, args: List[str]) -> str:
        if len(args) != 1:
            raise CommandFailed(f"usage: {command} <name>")
        return args[0]
