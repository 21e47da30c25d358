"""Backend task CRUD on top of a key-value store.

The whole task array lives under one key and every write replaces it
(read-modify-write). Ids come from an INCR counter so concurrent creators
never share an id, as long as the store's INCR is atomic.
"""

from __future__ import annotations

import logging
from typing import Any

from tarefas.core.errors import NotFoundError, ValidationError
from tarefas.models.task import Task, normalize_priority, normalize_status
from tarefas.providers.base import KeyValueStoreProvider
from tarefas.server.models import TaskCreateRequest, TaskUpdateRequest
from tarefas.utils.dates import utc_now_iso

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
COUNTER_KEY = "tasks:counter"


def task_from_storage(item: dict[str, Any]) -> Task:
    """Rebuild a Task from a stored record, filling defaults for legacy rows."""
    return Task(
        id=int(item["id"]),
        titulo=str(item.get("titulo") or ""),
        descricao=str(item.get("descricao") or ""),
        responsavel=str(item.get("responsavel") or ""),
        prioridade=str(item.get("prioridade") or normalize_priority(None)),
        status=str(item.get("status") or normalize_status(None)),
        data_limite=str(item.get("dataLimite") or "") or None,
        data_criacao=str(item.get("dataCriacao") or item.get("createdAt") or "") or None,
    )


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class TaskService:
    """Service for managing tasks in a key-value store."""

    def __init__(self, store: KeyValueStoreProvider, force_reset_counter: bool = False):
        """Initialize task service.

        Args:
            store: Initialized key-value store
            force_reset_counter: Reset the id counter to 0 before each create
        """
        self._store = store
        self._force_reset_counter = force_reset_counter

    async def load_all(self) -> list[Task]:
        """Read the stored task array. Malformed rows are skipped."""
        raw = await self._store.get(TASKS_KEY)
        if not isinstance(raw, list):
            if raw is not None:
                logger.warning("Stored '%s' is not a list (%s); treating as empty", TASKS_KEY, type(raw).__name__)
            return []

        tasks: list[Task] = []
        for item in raw:
            try:
                tasks.append(task_from_storage(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed stored task %r: %s", item, e)
        return tasks

    async def save_all(self, tasks: list[Task]) -> None:
        await self._store.set(TASKS_KEY, [t.to_wire() for t in tasks])

    async def next_id(self, existing: list[Task]) -> int:
        """Allocate the next sequential id.

        A missing counter is seeded with the largest stored id so the first
        INCR never collides with rows written before the counter existed.
        """
        if self._force_reset_counter:
            logger.warning("FORCE_RESET_COUNTER active: '%s' set to 0", COUNTER_KEY)
            await self._store.set(COUNTER_KEY, 0)
        elif not await self._store.exists(COUNTER_KEY):
            seed = max((t.id for t in existing), default=0)
            logger.info("Initializing '%s' = %d", COUNTER_KEY, seed)
            await self._store.set(COUNTER_KEY, seed)
        return await self._store.incr(COUNTER_KEY)

    async def list_tasks(self) -> list[Task]:
        """List all tasks, newest first as stored."""
        return await self.load_all()

    async def get_task(self, task_id: int) -> Task:
        """Get one task.

        Raises:
            NotFoundError: If no task has ``task_id``
        """
        for task in await self.load_all():
            if task.id == task_id:
                return task
        raise NotFoundError.for_resource("Tarefa não encontrada.", "task", task_id, "get")

    async def create_task(self, payload: TaskCreateRequest) -> Task:
        """Create a task and prepend it to the stored list.

        Raises:
            ValidationError: If the title is missing
        """
        titulo = (payload.titulo or "").strip()
        if not titulo:
            raise ValidationError.for_field(
                "titulo", "Título da tarefa é obrigatório.", component="task_service", operation="create"
            )

        tasks = await self.load_all()
        task = Task(
            id=await self.next_id(tasks),
            titulo=titulo,
            descricao=payload.descricao or "",
            responsavel=payload.responsavel or "",
            prioridade=normalize_priority(payload.prioridade),
            status=normalize_status(payload.status),
            data_limite=_clean(payload.data_limite),
            data_criacao=utc_now_iso(),
        )

        tasks.insert(0, task)
        await self.save_all(tasks)
        logger.info("Created task id=%d", task.id)
        return task

    async def update_task(self, task_id: int, patch: TaskUpdateRequest) -> Task:
        """Apply the fields present in ``patch``. The id never changes.

        Raises:
            NotFoundError: If no task has ``task_id``
            ValidationError: If the new title is blank
        """
        tasks = await self.load_all()
        for idx, current in enumerate(tasks):
            if current.id == task_id:
                break
        else:
            raise NotFoundError.for_resource("Tarefa não encontrada.", "task", task_id, "update")

        changes = patch.model_dump(exclude_unset=True)
        updated = current.model_copy()
        if changes.get("titulo") is not None:
            titulo = changes["titulo"].strip()
            if not titulo:
                raise ValidationError.for_field(
                    "titulo", "Título da tarefa é obrigatório.", component="task_service", operation="update"
                )
            updated.titulo = titulo
        for field in ("descricao", "responsavel"):
            if field in changes:
                setattr(updated, field, changes[field] or "")
        if "prioridade" in changes:
            updated.prioridade = normalize_priority(changes["prioridade"])
        if "status" in changes:
            updated.status = normalize_status(changes["status"])
        if "data_limite" in changes:
            updated.data_limite = _clean(changes["data_limite"])

        tasks[idx] = updated
        await self.save_all(tasks)
        logger.info("Updated task id=%d", task_id)
        return updated

    async def delete_task(self, task_id: int) -> Task:
        """Remove a task and return it.

        Raises:
            NotFoundError: If no task has ``task_id``
        """
        tasks = await self.load_all()
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            raise NotFoundError.for_resource("Tarefa não encontrada.", "task", task_id, "delete")

        removed = next(t for t in tasks if t.id == task_id)
        await self.save_all(remaining)
        logger.info("Deleted task id=%d", task_id)
        return removed
