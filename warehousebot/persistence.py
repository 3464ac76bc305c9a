"""
PersistenceStrategy interface for pluggable map storage backends.

This module provides the abstract PersistenceStrategy interface and two concrete
implementations for storing explored warehouse maps. Persistence is OPTIONAL -
the map lives entirely in memory and the interpreter works without any backend.

Included implementations:
1. InMemoryPersistence - Dict-based storage, data lost on exit (testing)
2. JsonPersistence - One human-readable JSON file per saved map

Maps are exchanged as ``WarehouseState`` snapshots (see
``CellGrid.to_state``/``CellGrid.from_state``), so backends never touch the live
grid and a failed save or load leaves it untouched.

Usage pattern:
    persistence = JsonPersistence("warehouses")
    await persistence.initialize()
    await persistence.save_warehouse("hall-a", grid.to_state(bot_position=pos))
    state = await persistence.load_warehouse("hall-a")
    await persistence.close()
"""

import asyncio
import json
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from warehousebot.warehouse import WarehouseState

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def validate_name(name: str) -> str:
    """Return ``name`` if it is usable as a map name, else raise ``ValueError``."""
    if not _NAME_PATTERN.match(name):
        raise ValueError(
            f"Invalid map name {name!r}: use letters, digits, '-' or '_'"
        )
    return name


class PersistenceStrategy(ABC):
    """Abstract base class for saved-map storage.

    All methods are async so file or network backends do not block the
    interactive loop; the in-memory backend simply completes immediately.

    Method categories:
    1. Lifecycle: initialize(), close()
    2. Maps: save_warehouse(), load_warehouse(), list_warehouses(), delete_warehouse()
    """

    @abstractmethod
    async def initialize(self) -> None:
        """
        Initialize the persistence backend (create directories, open pools).

        Raises:
            Exception: If initialization fails
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """
        Release any resources held by the backend.
        """
        pass

    @abstractmethod
    async def save_warehouse(self, name: str, state: WarehouseState) -> None:
        """
        Save a map snapshot under ``name``, replacing any previous one.

        Raises:
            ValueError: If ``name`` is not a valid map name
        """
        pass

    @abstractmethod
    async def load_warehouse(self, name: str) -> Optional[WarehouseState]:
        """
        Load the snapshot saved under ``name``.

        Returns:
            WarehouseState if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_warehouses(self) -> List[str]:
        """
        Return the names of all saved maps, sorted.
        """
        pass

    @abstractmethod
    async def delete_warehouse(self, name: str) -> None:
        """
        Delete the map saved under ``name``. Missing maps are ignored.
        """
        pass


class InMemoryPersistence(PersistenceStrategy):
    """In-memory persistence using a Python dict (no files).

    Snapshots are deep-copied on save and load so later changes to either side
    do not leak into the stored copy.
    """

    def __init__(self):
        self.warehouses: Dict[str, WarehouseState] = {}

    async def initialize(self) -> None:
        pass

    async def close(self) -> None:
        """
        No-op: data is kept so callers can inspect it after closing.
        """
        pass

    async def save_warehouse(self, name: str, state: WarehouseState) -> None:
        self.warehouses[validate_name(name)] = state.model_copy(deep=True)

    async def load_warehouse(self, name: str) -> Optional[WarehouseState]:
        state = self.warehouses.get(validate_name(name))
        return state.model_copy(deep=True) if state is not None else None

    async def list_warehouses(self) -> List[str]:
        return sorted(self.warehouses)

    async def delete_warehouse(self, name: str) -> None:
        self.warehouses.pop(validate_name(name), None)


class JsonPersistence(PersistenceStrategy):
    """File-based persistence using JSON for human-readable storage.

    Directory structure:
    ```
    {base_path}/
      hall-a.json        # WarehouseState for map "hall-a"
      hall-b.json
    ```

    Files are pretty-printed (indent=2). All file I/O runs in a worker thread
    (asyncio.to_thread) so the event loop is never blocked on disk.
    """

    def __init__(self, base_path: Path | str = "warehouses"):
        self.base_path = Path(base_path)

    async def initialize(self) -> None:
        await asyncio.to_thread(self.base_path.mkdir, parents=True, exist_ok=True)

    async def close(self) -> None:
        # Nothing to clean up for JSON persistence
        return None

    async def save_warehouse(self, name: str, state: WarehouseState) -> None:
        path = self._path(name)
        await asyncio.to_thread(path.parent.mkdir, parents=True, exist_ok=True)
        payload = state.model_dump(mode="json")
        await asyncio.to_thread(
            path.write_text, json.dumps(payload, indent=2), "utf-8"
        )

    async def load_warehouse(self, name: str) -> Optional[WarehouseState]:
        path = self._path(name)
        if not path.exists():
            return None

        payload = await asyncio.to_thread(json.loads, path.read_text("utf-8"))
        return WarehouseState.model_validate(payload)

    async def list_warehouses(self) -> List[str]:
        if not self.base_path.exists():
            return []

        def _scan() -> List[str]:
            return sorted(path.stem for path in self.base_path.glob("*.json"))

        return await asyncio.to_thread(_scan)

    async def delete_warehouse(self, name: str) -> None:
        path = self._path(name)
        if path.exists():
            await asyncio.to_thread(path.unlink)

    def _path(self, name: str) -> Path:
        return self.base_path / f"{validate_name(name)}.json"
