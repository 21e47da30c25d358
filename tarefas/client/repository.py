"""HTTP repository for tasks.

Backends differ in what they return: some wrap created/updated tasks in an
``{ok, task}`` envelope, some send ``createdAt`` instead of ``dataCriacao``,
and legacy rows may miss text fields. Everything is normalized into
:class:`~tarefas.models.task.Task` here, so callers only ever see one shape.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from tarefas.client.auth import AuthService
from tarefas.core.config import get_settings
from tarefas.models.task import Task, normalize_priority, normalize_status

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def normalize_task(raw: dict[str, Any]) -> Task:
    """Build a Task from whatever the backend sent."""
    data_criacao = _text(raw.get("dataCriacao") or raw.get("createdAt")) or None
    return Task(
        id=int(raw.get("id") or 0),
        titulo=_text(raw.get("titulo")),
        descricao=_text(raw.get("descricao")),
        responsavel=_text(raw.get("responsavel")),
        prioridade=normalize_priority(raw.get("prioridade")),
        status=normalize_status(raw.get("status")),
        data_limite=_text(raw.get("dataLimite")) or None,
        data_criacao=data_criacao,
    )


def unwrap_task(body: Any) -> dict[str, Any]:
    """Return the task object from ``{ok, task}`` or from a bare task."""
    if isinstance(body, dict) and isinstance(body.get("task"), dict):
        return body["task"]
    return body


class TaskRepositoryService:
    """Task CRUD over HTTP. HTTP and network errors reach the caller unmodified."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        auth: Optional[AuthService] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._auth = auth
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT)

    @property
    def tasks_url(self) -> str:
        return f"{self.base_url}/tasks"

    def _headers(self) -> dict[str, str]:
        return self._auth.auth_headers() if self._auth else {}

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def list(self) -> list[Task]:
        response = await self._http.get(self.tasks_url, headers=self._headers())
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, list):
            logger.warning("GET /tasks returned %s instead of a list", type(body).__name__)
            return []
        return [normalize_task(item) for item in body]

    async def get_by_id(self, task_id: int) -> Task:
        response = await self._http.get(f"{self.tasks_url}/{task_id}", headers=self._headers())
        response.raise_for_status()
        return normalize_task(response.json())

    async def create(self, task: dict[str, Any]) -> Task:
        """POST a new task. ``id`` and ``dataCriacao`` are left to the backend."""
        body = {k: v for k, v in task.items() if k not in ("id", "dataCriacao", "createdAt")}
        response = await self._http.post(self.tasks_url, json=body, headers=self._headers())
        response.raise_for_status()
        return normalize_task(unwrap_task(response.json()))

    async def update(self, task: Task) -> Task:
        body = task.to_wire()
        response = await self._http.put(f"{self.tasks_url}/{task.id}", json=body, headers=self._headers())
        response.raise_for_status()
        return normalize_task(unwrap_task(response.json()))

    async def delete(self, task_id: int) -> None:
        response = await self._http.delete(f"{self.tasks_url}/{task_id}", headers=self._headers())
        response.raise_for_status()
