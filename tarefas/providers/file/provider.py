"""JSON-file implementation of the KeyValueStoreProvider.

Each key is one ``<key>.json`` file under the data directory. Writes go to
``<file>.tmp`` first and are moved into place with a single rename, so a
crash mid-write never leaves a truncated file behind.

The lock guarding ``incr`` is an ``asyncio.Lock``, so the store must be used
by a single server process.
"""

import asyncio
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Optional

from pydantic import Field

from tarefas.providers.base import KeyValueStoreProvider, ProviderSettings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class FileStoreSettings(ProviderSettings):
    """File store settings."""

    data_dir: str = Field(default="./data", description="Directory holding one JSON file per key")
    indent: int = Field(default=2, description="Indentation used when writing JSON")


class FileStoreProvider(KeyValueStoreProvider[FileStoreSettings]):
    """Store that keeps every key in its own JSON file."""

    provider_type = "file"

    def __init__(self, name: str = "file-store", settings: Optional[FileStoreSettings] = None):
        super().__init__(name=name, settings=settings or FileStoreSettings())
        self._root = Path(self.settings.data_dir).expanduser()
        # Serializes writers inside this process only.
        self._lock = asyncio.Lock()

    @property
    def root(self) -> Path:
        return self._root

    async def _initialize(self) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        logger.info("File store '%s' using %s", self.name, self._root.resolve())

    async def check_connection(self) -> bool:
        return self._root.is_dir() and os.access(self._root, os.W_OK)

    def path_for(self, key: str) -> Path:
        """File that holds ``key``."""
        ns_key = self.make_namespaced_key(key).replace(":", "__")
        return self._root / f"{_UNSAFE_CHARS.sub('_', ns_key)}.json"

    def _read(self, path: Path) -> Optional[Any]:
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        if not raw.strip():
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable store file %s: %s", path, e)
            return None

    def _write_atomic(self, path: Path, value: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(
            json.dumps(value, ensure_ascii=False, indent=self.settings.indent),
            encoding="utf-8",
        )
        os.replace(tmp, path)

    async def get(self, key: str) -> Optional[Any]:
        path = self.path_for(key)
        try:
            return await asyncio.to_thread(self._read, path)
        except OSError as e:
            raise self._error("get", e) from e

    async def set(self, key: str, value: Any) -> bool:
        path = self.path_for(key)
        async with self._lock:
            try:
                await asyncio.to_thread(self._write_atomic, path, value)
            except (OSError, TypeError, ValueError) as e:
                raise self._error("set", e) from e
        return True

    async def delete(self, key: str) -> bool:
        path = self.path_for(key)
        async with self._lock:
            try:
                path.unlink()
            except FileNotFoundError:
                return False
            except OSError as e:
                raise self._error("delete", e) from e
        return True

    async def exists(self, key: str) -> bool:
        return self.path_for(key).exists()

    async def incr(self, key: str) -> int:
        path = self.path_for(key)
        async with self._lock:
            try:
                current = int(await asyncio.to_thread(self._read, path) or 0) + 1
                await asyncio.to_thread(self._write_atomic, path, current)
            except (OSError, TypeError, ValueError) as e:
                raise self._error("incr", e) from e
        return current
