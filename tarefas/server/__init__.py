"""FastAPI backend for tarefas."""
