"""Key-value store provider base classes.

A store exposes JSON-serializable values by key plus an atomic counter
increment. The task and user services build everything else on top of it
(whole-array read-modify-write for collections, INCR for sequential ids).
"""

import asyncio
import logging
from typing import Any, Generic, Optional, TypeVar

from pydantic import Field

from tarefas.core.errors import ProviderError
from tarefas.core.models import StrictBaseModel

logger = logging.getLogger(__name__)


class ProviderSettings(StrictBaseModel):
    """Settings common to every store provider."""

    namespace: str = Field(default="", description="Prefix for all keys (empty = none)")
    verbose: bool = Field(default=False, description="Enable verbose logging for debugging")


SettingsT = TypeVar("SettingsT", bound=ProviderSettings)


class Provider(Generic[SettingsT]):
    """Base class for providers with lifecycle management.

    This class provides:
    1. Consistent initialization and cleanup pattern
    2. Configuration via settings models
    3. Idempotent, lock-guarded initialize()
    """

    provider_type = "store"

    def __init__(self, name: str, settings: SettingsT):
        self.name = name
        self.settings = settings
        self._initialized = False
        self._setup_lock = asyncio.Lock()
        logger.debug("Created provider: %s (%s) with settings: %s", name, self.provider_type, settings)

    @property
    def initialized(self) -> bool:
        """Check if provider is initialized."""
        return self._initialized

    async def initialize(self) -> None:
        """Initialize the provider once.

        Raises:
            ProviderError: If initialization fails
        """
        if self._initialized:
            return

        async with self._setup_lock:
            if self._initialized:
                return

            try:
                await self._initialize()
                self._initialized = True
                logger.info("Provider '%s' initialized successfully", self.name)
            except ProviderError:
                raise
            except Exception as e:
                logger.error("Failed to initialize provider '%s': %s", self.name, e)
                raise ProviderError.for_operation(
                    message=f"Failed to initialize provider: {e}",
                    provider_name=self.name,
                    provider_type=self.provider_type,
                    operation="initialize",
                    cause=e,
                ) from e

    async def shutdown(self) -> None:
        """Close provider resources; errors are logged, not raised."""
        if not self._initialized:
            return

        try:
            await self._shutdown()
            self._initialized = False
            logger.info("Provider '%s' shut down successfully", self.name)
        except Exception as e:
            logger.error("Error shutting down provider '%s': %s", self.name, e)

    async def _initialize(self) -> None:
        """Concrete initialization logic implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement _initialize().")

    async def _shutdown(self) -> None:
        """Concrete shutdown logic; default does nothing."""
        pass

    def _error(self, operation: str, exc: Exception) -> ProviderError:
        logger.error("Store '%s' failed during %s: %s", self.name, operation, exc)
        return ProviderError.for_operation(
            message=f"Store operation '{operation}' failed: {exc}",
            provider_name=self.name,
            provider_type=self.provider_type,
            operation=operation,
            cause=exc,
        )


class KeyValueStoreProvider(Provider[SettingsT], Generic[SettingsT]):
    """Base class for key-value stores.

    Values are JSON-serializable Python objects. Missing keys read as None.
    """

    async def get(self, key: str) -> Optional[Any]:
        """Get a value.

        Args:
            key: Store key

        Returns:
            Stored value or None if not found

        Raises:
            ProviderError: If retrieval fails
        """
        raise NotImplementedError("Subclasses must implement get()")

    async def set(self, key: str, value: Any) -> bool:
        """Replace the value stored at ``key``.

        Returns:
            True if the value was stored

        Raises:
            ProviderError: If the write fails
        """
        raise NotImplementedError("Subclasses must implement set()")

    async def delete(self, key: str) -> bool:
        """Delete a key.

        Returns:
            True if the key existed
        """
        raise NotImplementedError("Subclasses must implement delete()")

    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        raise NotImplementedError("Subclasses must implement exists()")

    async def incr(self, key: str) -> int:
        """Atomically increment the integer at ``key`` and return the new value.

        A missing key counts as 0, so the first increment returns 1.
        """
        raise NotImplementedError("Subclasses must implement incr()")

    async def check_connection(self) -> bool:
        """Check if the store is reachable."""
        raise NotImplementedError("Subclasses must implement check_connection()")

    def make_namespaced_key(self, key: str) -> str:
        """Prefix ``key`` with the configured namespace."""
        if not self.settings.namespace:
            return key
        return f"{self.settings.namespace}:{key}"
