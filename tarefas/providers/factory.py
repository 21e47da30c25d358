"""Build the configured store provider."""

import logging

from tarefas.core.config import Settings
from tarefas.providers.base import KeyValueStoreProvider
from tarefas.providers.file.provider import FileStoreProvider, FileStoreSettings
from tarefas.providers.memory.provider import MemoryStoreProvider, MemoryStoreSettings
from tarefas.providers.redis.provider import RedisStoreProvider, RedisStoreSettings

logger = logging.getLogger(__name__)


def create_store(settings: Settings) -> KeyValueStoreProvider:
    """Create the store selected by ``settings.STORE_BACKEND``.

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = settings.STORE_BACKEND
    logger.info("Using '%s' store backend", backend)

    if backend == "file":
        return FileStoreProvider(settings=FileStoreSettings(data_dir=settings.DATA_DIR))
    if backend == "memory":
        return MemoryStoreProvider(settings=MemoryStoreSettings())
    if backend == "redis":
        return RedisStoreProvider(
            settings=RedisStoreSettings(url=settings.REDIS_URL, namespace=settings.REDIS_NAMESPACE)
        )
    raise ValueError(f"Unknown store backend: {backend!r}")
