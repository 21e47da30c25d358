"""In-memory implementation of the KeyValueStoreProvider.

Nothing is persisted; used for tests and throwaway local runs.
"""

import asyncio
import copy
import logging
from typing import Any, Dict, Optional

from tarefas.providers.base import KeyValueStoreProvider, ProviderSettings

logger = logging.getLogger(__name__)


class MemoryStoreSettings(ProviderSettings):
    """In-memory store settings. No connection details needed."""


class MemoryStoreProvider(KeyValueStoreProvider[MemoryStoreSettings]):
    """Dictionary-backed store guarded by an asyncio lock."""

    provider_type = "memory"

    def __init__(self, name: str = "memory-store", settings: Optional[MemoryStoreSettings] = None):
        super().__init__(name=name, settings=settings or MemoryStoreSettings())
        self._lock = asyncio.Lock()
        self._data: Dict[str, Any] = {}

    async def _initialize(self) -> None:
        logger.info("In-memory store '%s' ready", self.name)

    async def _shutdown(self) -> None:
        async with self._lock:
            self._data.clear()

    async def check_connection(self) -> bool:
        return self.initialized

    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            value = self._data.get(self.make_namespaced_key(key))
            # Callers mutate what they read before writing it back.
            return copy.deepcopy(value)

    async def set(self, key: str, value: Any) -> bool:
        async with self._lock:
            self._data[self.make_namespaced_key(key)] = copy.deepcopy(value)
            return True

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return self._data.pop(self.make_namespaced_key(key), None) is not None

    async def exists(self, key: str) -> bool:
        async with self._lock:
            return self.make_namespaced_key(key) in self._data

    async def incr(self, key: str) -> int:
        ns_key = self.make_namespaced_key(key)
        async with self._lock:
            try:
                current = int(self._data.get(ns_key) or 0)
            except (TypeError, ValueError) as e:
                raise self._error("incr", e) from e
            current += 1
            self._data[ns_key] = current
            return current
