"""Key-value store providers.

Three interchangeable backends share the KeyValueStoreProvider contract:
JSON files on disk, Redis, and process memory.
"""

from .base import KeyValueStoreProvider, Provider, ProviderSettings
from .factory import create_store
from .file.provider import FileStoreProvider, FileStoreSettings
from .memory.provider import MemoryStoreProvider, MemoryStoreSettings
from .redis.provider import RedisStoreProvider, RedisStoreSettings

__all__ = [
    "KeyValueStoreProvider",
    "Provider",
    "ProviderSettings",
    "create_store",
    "FileStoreProvider",
    "FileStoreSettings",
    "MemoryStoreProvider",
    "MemoryStoreSettings",
    "RedisStoreProvider",
    "RedisStoreSettings",
]
