"""Domain models."""

from tarefas.models.task import (
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    PRIORITY_WEIGHT,
    Priority,
    Task,
    TaskStatus,
    normalize_priority,
    normalize_status,
    parse_priority,
    parse_status,
    resolve_task_field,
)
from tarefas.models.user import EDITABLE_USER_FIELDS, UserRecord

__all__ = [
    "DEFAULT_PRIORITY",
    "DEFAULT_STATUS",
    "EDITABLE_USER_FIELDS",
    "PRIORITY_WEIGHT",
    "Priority",
    "Task",
    "TaskStatus",
    "UserRecord",
    "normalize_priority",
    "normalize_status",
    "parse_priority",
    "parse_status",
    "resolve_task_field",
]
