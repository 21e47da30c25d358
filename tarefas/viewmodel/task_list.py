"""Task list view-model: filter, sort and paginate an in-memory task set.

``TaskListState.all_tasks`` is the source of truth. The visible page is
always derived from it by :func:`derive_view`, which never mutates its
input, so the whole pipeline can be tested without a UI or a backend.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Literal, NamedTuple, Optional

import httpx

from tarefas.client.repository import TaskRepositoryService
from tarefas.core.config import get_settings
from tarefas.core.errors import BaseError
from tarefas.models.task import PRIORITY_WEIGHT, Task, resolve_task_field
from tarefas.utils.dates import sort_timestamp, to_calendar_date
from tarefas.viewmodel.import_export import ExportedFile, export_tasks, process_file

logger = logging.getLogger(__name__)

SortDirection = Literal["asc", "desc"]

DEFAULT_SORT_KEY = "id"


@dataclass
class TaskFilters:
    """User-entered filters. Empty strings are inactive."""

    titulo: str = ""
    descricao: str = ""
    status: str = ""
    prioridade: str = ""
    data_limite: str = ""
    responsavel: str = ""


@dataclass
class TaskListState:
    all_tasks: list[Task] = field(default_factory=list)
    filters: TaskFilters = field(default_factory=TaskFilters)
    sort_key: Optional[str] = DEFAULT_SORT_KEY
    sort_direction: SortDirection = "asc"
    current_page: int = 1
    items_per_page: int = 10


class TaskListView(NamedTuple):
    """Result of one derivation pass."""

    tasks: list[Task]
    page: list[Task]
    total_pages: int
    current_page: int


def _active(value: str) -> bool:
    return bool(value and value.strip())


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def apply_filters(tasks: list[Task], filters: TaskFilters) -> list[Task]:
    """Return the tasks matching every active filter (AND)."""
    result = list(tasks)

    if _active(filters.titulo):
        result = [t for t in result if _contains(t.titulo, filters.titulo)]
    if _active(filters.descricao):
        result = [t for t in result if _contains(t.descricao, filters.descricao)]
    if _active(filters.status):
        result = [t for t in result if t.status == filters.status]
    if _active(filters.prioridade):
        result = [t for t in result if t.prioridade == filters.prioridade]
    if _active(filters.data_limite):
        # Missing or unparsable due dates never match.
        result = [t for t in result if to_calendar_date(t.data_limite) == filters.data_limite]
    if _active(filters.responsavel):
        result = [t for t in result if _contains(t.responsavel, filters.responsavel)]

    return result


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _compare(a: Any, b: Any) -> int:
    if a == b:
        return 0
    return 1 if a > b else -1


def sort_tasks_list(tasks: list[Task], key: str, direction: SortDirection = "asc") -> list[Task]:
    """Stable sort by ``key`` (wire or attribute name).

    Priority sorts by weight (unknown values weigh 0), the due date by
    timestamp (missing dates sort as epoch 0). Other fields compare as
    numbers when both sides are numbers, else as lowercase strings.

    Raises:
        KeyError: If ``key`` is not a Task field
    """
    attr = resolve_task_field(key)
    sign = 1 if direction == "asc" else -1

    def compare(a: Task, b: Task) -> int:
        if attr == "prioridade":
            return sign * _compare(PRIORITY_WEIGHT.get(a.prioridade, 0), PRIORITY_WEIGHT.get(b.prioridade, 0))
        if attr == "data_limite":
            return sign * _compare(sort_timestamp(a.data_limite), sort_timestamp(b.data_limite))

        va = getattr(a, attr)
        vb = getattr(b, attr)
        va = "" if va is None else va
        vb = "" if vb is None else vb
        if _is_number(va) and _is_number(vb):
            return sign * _compare(va, vb)
        return sign * _compare(str(va).lower(), str(vb).lower())

    return sorted(tasks, key=cmp_to_key(compare))


def paginate(tasks: list[Task], current_page: int, items_per_page: int) -> tuple[list[Task], int, int]:
    """Slice out one page.

    Returns:
        ``(page, total_pages, current_page)`` with the page clamped to ``1..total_pages``

    Raises:
        ValueError: If ``items_per_page`` is below 1
    """
    if items_per_page < 1:
        raise ValueError(f"items_per_page must be at least 1, got {items_per_page}")
    total_pages = max(1, math.ceil(len(tasks) / items_per_page))
    page_no = min(max(current_page, 1), total_pages)
    start = (page_no - 1) * items_per_page
    return tasks[start:start + items_per_page], total_pages, page_no


def derive_view(state: TaskListState) -> TaskListView:
    """Filter, sort and paginate ``state.all_tasks`` without touching it."""
    tasks = apply_filters(state.all_tasks, state.filters)
    if state.sort_key:
        tasks = sort_tasks_list(tasks, state.sort_key, state.sort_direction)
    page, total_pages, current_page = paginate(tasks, state.current_page, state.items_per_page)
    return TaskListView(tasks, page, total_pages, current_page)


def derive_visible_page(state: TaskListState) -> list[Task]:
    return derive_view(state).page


class TaskListViewModel:
    """Stateful wrapper used by the task list screen.

    Mutating operations on ``all_tasks`` happen only after the backend
    confirms them; loads are sequence-stamped so a slow, superseded response
    never overwrites a newer one.
    """

    def __init__(
        self,
        repository: Optional[TaskRepositoryService] = None,
        items_per_page: Optional[int] = None,
    ):
        self._repository = repository
        if items_per_page is None:
            items_per_page = get_settings().ITEMS_PER_PAGE
        self.state = TaskListState(items_per_page=items_per_page)
        self._view = derive_view(self.state)
        self._load_seq = 0

    # Derived state

    @property
    def all_tasks(self) -> list[Task]:
        return self.state.all_tasks

    @property
    def filters(self) -> TaskFilters:
        return self.state.filters

    @property
    def tasks(self) -> list[Task]:
        """Filtered and sorted tasks (all pages)."""
        return self._view.tasks

    @property
    def paginated_tasks(self) -> list[Task]:
        return self._view.page

    @property
    def total_pages(self) -> int:
        return self._view.total_pages

    @property
    def current_page(self) -> int:
        return self.state.current_page

    @property
    def page_numbers(self) -> list[int]:
        return list(range(1, self.total_pages + 1))

    # Pipeline

    def apply_filters(self) -> None:
        """Re-derive the filtered list and the visible page."""
        self.update_pagination()

    def update_pagination(self) -> None:
        self._view = derive_view(self.state)
        self.state.current_page = self._view.current_page

    def update_filters(self, **changes: str) -> None:
        """Set filter fields by name and re-derive.

        Raises:
            TypeError: If a name is not a filter field
        """
        self.state.filters = dataclasses.replace(self.state.filters, **changes)
        self.apply_filters()

    def reset_filters(self) -> None:
        """Clear all filters, sort by id ascending and go back to page 1."""
        self.state.filters = TaskFilters()
        self.state.sort_key = DEFAULT_SORT_KEY
        self.state.sort_direction = "asc"
        self.state.current_page = 1
        self.apply_filters()

    def sort_tasks(self, key: str) -> None:
        """Toggle direction on the current key, otherwise sort ascending by ``key``.

        Raises:
            KeyError: If ``key`` is not a Task field
        """
        attr = resolve_task_field(key)
        current = resolve_task_field(self.state.sort_key) if self.state.sort_key else None
        if current == attr:
            self.state.sort_direction = "desc" if self.state.sort_direction == "asc" else "asc"
        else:
            self.state.sort_key = key
            self.state.sort_direction = "asc"
        self.state.current_page = 1
        self.apply_filters()

    def go_to_page(self, page: int) -> bool:
        """Move to ``page`` if it exists. Returns False when out of range."""
        if not 1 <= page <= self.total_pages:
            return False
        self.state.current_page = page
        self.update_pagination()
        return True

    def set_tasks(self, tasks: list[Task]) -> None:
        """Replace ``all_tasks`` wholesale."""
        self.state.all_tasks = list(tasks)
        self.apply_filters()

    # Backend

    def _require_repository(self) -> TaskRepositoryService:
        if self._repository is None:
            raise RuntimeError("TaskListViewModel has no task repository configured")
        return self._repository

    async def load_tasks(self) -> bool:
        """Fetch all tasks from the backend.

        Returns:
            True if the response was applied. Failures are logged and leave
            ``all_tasks`` unchanged; stale responses are dropped.
        """
        repository = self._require_repository()
        self._load_seq += 1
        seq = self._load_seq
        try:
            tasks = await repository.list()
        except (httpx.HTTPError, BaseError) as e:
            logger.error("Erro ao carregar tarefas: %s", e)
            return False

        if seq != self._load_seq:
            logger.debug("Discarding stale task load #%d (latest is #%d)", seq, self._load_seq)
            return False

        self.set_tasks(tasks)
        return True

    async def add_task(self, task: dict[str, Any]) -> Task:
        """Create ``task`` on the backend, then append the confirmed task."""
        repository = self._require_repository()
        try:
            created = await repository.create(task)
        except (httpx.HTTPError, BaseError) as e:
            logger.error("Erro ao adicionar tarefa: %s", e)
            raise
        self.state.all_tasks.append(created)
        self.apply_filters()
        return created

    async def delete_task(self, task_id: int) -> None:
        """Delete on the backend, then drop the task locally."""
        repository = self._require_repository()
        try:
            await repository.delete(task_id)
        except (httpx.HTTPError, BaseError) as e:
            logger.error("Erro ao excluir tarefa %d: %s", task_id, e)
            raise
        self.state.all_tasks = [t for t in self.state.all_tasks if t.id != task_id]
        self.apply_filters()

    # Files

    def import_file(self, filename: str, text: str) -> int:
        """Replace ``all_tasks`` with the tasks in an uploaded file.

        Returns:
            Number of imported tasks

        Raises:
            ImportFormatError: If the file is rejected; ``all_tasks`` is unchanged
        """
        imported = process_file(filename, text, existing=self.state.all_tasks)
        self.set_tasks(imported)
        return len(imported)

    def export_list(self, as_csv: bool = False) -> ExportedFile:
        """Export ``all_tasks`` as CSV or JSON.

        Raises:
            ValidationError: If there are no tasks
        """
        return export_tasks(self.state.all_tasks, as_csv)
