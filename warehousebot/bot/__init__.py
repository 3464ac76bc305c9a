"""Bot transports: the command interface, a simulated bot and a REST client."""

from .commands import (
    BotCommands,
    CommandError,
    FarScan,
    HitWall,
    InvalidTarget,
    NearScan,
    ScanFailed,
    TransportError,
)
from .mock import MockBot
from .rest import RestBot

__all__ = [
    "BotCommands",
    "CommandError",
    "FarScan",
    "HitWall",
    "InvalidTarget",
    "NearScan",
    "ScanFailed",
    "TransportError",
    "MockBot",
    "RestBot",
]
