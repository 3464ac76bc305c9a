"""
Warehousebot - map a grid warehouse from a bot's partial observations.

The bot reports near scans (walls and items at its cell) and far scans
(distance to the nearest wall in each direction). Warehousebot merges them into
one consistent sparse map, classifies every cell by shape and storage capacity,
and renders the explored area as text.

The map core needs no file I/O and no network. Bot transports and storage
backends are injected by the caller.
"""

__version__ = "0.1.0"

# Map core
from .warehouse import (
    ALL_DIRECTIONS,
    ORIGIN,
    Cell,
    CellFull,
    CellGrid,
    CellState,
    CellType,
    Coords2D,
    Direction,
    EMPTY_ITEM,
    IncompatibleItem,
    InvalidArgument,
    ShelfFull,
    WallExists,
    WarehouseError,
    WarehouseState,
    draw_warehouse,
    min_max_xy,
    output_gridsize,
)

# Bot transports
from .bot import (
    BotCommands,
    CommandError,
    FarScan,
    HitWall,
    InvalidTarget,
    MockBot,
    NearScan,
    RestBot,
    ScanFailed,
    TransportError,
)

# Storage backends
from .persistence import PersistenceStrategy, InMemoryPersistence, JsonPersistence

# Interpreter
from .cli import Cli, CliError, CommandFailed, CommandNotImplemented, CommandUnknown

__all__ = [
    # Map core
    "ALL_DIRECTIONS",
    "ORIGIN",
    "Cell",
    "CellGrid",
    "CellState",
    "CellType",
    "Coords2D",
    "Direction",
    "EMPTY_ITEM",
    "WarehouseState",
    "draw_warehouse",
    "min_max_xy",
    "output_gridsize",
    # Map errors
    "WarehouseError",
    "WallExists",
    "CellFull",
    "IncompatibleItem",
    "ShelfFull",
    "InvalidArgument",
    # Bot transports
    "BotCommands",
    "MockBot",
    "RestBot",
    "NearScan",
    "FarScan",
    "CommandError",
    "HitWall",
    "InvalidTarget",
    "ScanFailed",
    "TransportError",
    # Storage
    "PersistenceStrategy",
    "InMemoryPersistence",
    "JsonPersistence",
    # Interpreter
    "Cli",
    "CliError",
    "CommandFailed",
    "CommandNotImplemented",
    "CommandUnknown",
]
