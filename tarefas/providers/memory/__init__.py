"""In-memory key-value store."""

from .provider import MemoryStoreProvider, MemoryStoreSettings

__all__ = ["MemoryStoreProvider", "MemoryStoreSettings"]
