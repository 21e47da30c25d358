"""JSON-file key-value store."""

from .provider import FileStoreProvider, FileStoreSettings

__all__ = ["FileStoreProvider", "FileStoreSettings"]
