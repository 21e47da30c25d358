"""tarefas: task-management backend, HTTP client and list view-model."""

__version__ = "0.1.0"
