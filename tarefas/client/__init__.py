"""HTTP client services for the tarefas backend."""

from tarefas.client.auth import AuthService
from tarefas.client.repository import TaskRepositoryService, normalize_task, unwrap_task

__all__ = ["AuthService", "TaskRepositoryService", "normalize_task", "unwrap_task"]
