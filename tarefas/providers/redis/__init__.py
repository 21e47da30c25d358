"""Redis key-value store."""

from .provider import RedisStoreProvider, RedisStoreSettings

__all__ = ["RedisStoreProvider", "RedisStoreSettings"]
