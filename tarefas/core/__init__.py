"""Core building blocks: base models, errors and settings."""

from tarefas.core.config import Settings, get_settings
from tarefas.core.models import MutableStrictBaseModel, StrictBaseModel

__all__ = [
    "Settings",
    "get_settings",
    "StrictBaseModel",
    "MutableStrictBaseModel",
]
