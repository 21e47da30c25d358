"""Redis implementation of the KeyValueStoreProvider.

Uses the async Redis client. Values are stored as JSON strings; counters
are plain Redis integers so INCR stays atomic on the server.
"""

import json
import logging
from typing import Any, Optional

import redis.asyncio as redis_client
from pydantic import Field
from redis.exceptions import RedisError

from tarefas.core.errors import ProviderError
from tarefas.providers.base import KeyValueStoreProvider, ProviderSettings

logger = logging.getLogger(__name__)


class RedisStoreSettings(ProviderSettings):
    """Redis store settings."""

    url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    encoding: str = Field(default="utf-8", description="Redis response encoding")
    socket_timeout: Optional[float] = Field(default=None, description="Socket timeout in seconds")
    max_connections: int = Field(default=10, description="Maximum connection pool size")


class RedisStoreProvider(KeyValueStoreProvider[RedisStoreSettings]):
    """Key-value store backed by Redis."""

    provider_type = "redis"

    def __init__(self, name: str = "redis-store", settings: Optional[RedisStoreSettings] = None):
        super().__init__(name=name, settings=settings or RedisStoreSettings())
        self._redis: Optional[redis_client.Redis] = None

    async def _initialize(self) -> None:
        """Create the client and verify the connection.

        Raises:
            ProviderError: If Redis cannot be reached
        """
        self._redis = redis_client.Redis.from_url(
            self.settings.url,
            encoding=self.settings.encoding,
            decode_responses=True,
            socket_timeout=self.settings.socket_timeout,
            max_connections=self.settings.max_connections,
        )
        if not await self.check_connection():
            self._redis = None
            raise ProviderError.for_operation(
                message="Failed to connect to Redis server",
                provider_name=self.name,
                provider_type=self.provider_type,
                operation="connection_test",
            )

    async def _shutdown(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None

    async def check_connection(self) -> bool:
        if self._redis is None:
            return False
        try:
            return bool(await self._redis.ping())
        except RedisError:
            return False

    def _client(self, operation: str) -> redis_client.Redis:
        if self._redis is None:
            raise ProviderError.for_operation(
                message="Redis client not initialized",
                provider_name=self.name,
                provider_type=self.provider_type,
                operation=operation,
            )
        return self._redis

    async def get(self, key: str) -> Optional[Any]:
        client = self._client("get")
        try:
            raw = await client.get(self.make_namespaced_key(key))
        except RedisError as e:
            raise self._error("get", e) from e
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise self._error("get", e) from e

    async def set(self, key: str, value: Any) -> bool:
        client = self._client("set")
        try:
            result = await client.set(self.make_namespaced_key(key), json.dumps(value, ensure_ascii=False))
        except (RedisError, TypeError, ValueError) as e:
            raise self._error("set", e) from e
        return bool(result)

    async def delete(self, key: str) -> bool:
        client = self._client("delete")
        try:
            return bool(await client.delete(self.make_namespaced_key(key)))
        except RedisError as e:
            raise self._error("delete", e) from e

    async def exists(self, key: str) -> bool:
        client = self._client("exists")
        try:
            return bool(await client.exists(self.make_namespaced_key(key)))
        except RedisError as e:
            raise self._error("exists", e) from e

    async def incr(self, key: str) -> int:
        client = self._client("incr")
        try:
            return int(await client.incr(self.make_namespaced_key(key)))
        except RedisError as e:
            raise self._error("incr", e) from e
