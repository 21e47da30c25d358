"""Backend services."""

from tarefas.server.services.task_service import TaskService
from tarefas.server.services.user_service import UserService

__all__ = ["TaskService", "UserService"]
