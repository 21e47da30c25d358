"""Create/edit form state for a single task."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Optional

from tarefas.client.repository import TaskRepositoryService
from tarefas.core.errors import ValidationError
from tarefas.models.task import DEFAULT_PRIORITY, DEFAULT_STATUS, Task, normalize_priority, normalize_status
from tarefas.utils.dates import normalize_to_input_date, today_iso

logger = logging.getLogger(__name__)


@dataclass
class TaskForm:
    """Values bound to the form inputs. Dates use the ``YYYY-MM-DD`` input format."""

    id: Optional[int] = None
    titulo: str = ""
    descricao: str = ""
    responsavel: str = ""
    prioridade: str = DEFAULT_PRIORITY.value
    status: str = DEFAULT_STATUS.value
    data_limite: str = ""
    data_criacao: Optional[str] = None


class TaskFormViewModel:
    """Fills the form for create or edit mode and submits it."""

    def __init__(self, repository: TaskRepositoryService):
        self._repository = repository
        self.form = TaskForm()
        self.is_edit_mode = False

    def start_create(self, today: Optional[str] = None) -> TaskForm:
        """Blank form with the due date preset to today."""
        self.is_edit_mode = False
        self.form = TaskForm(data_limite=today or today_iso())
        return self.form

    async def load_for_edit(self, task_id: int, today: Optional[str] = None) -> TaskForm:
        """Load ``task_id`` and convert its dates to input format.

        Backend errors propagate; the form keeps its previous values.
        """
        task = await self._repository.get_by_id(task_id)
        self.is_edit_mode = True
        self.form = TaskForm(
            id=task.id,
            titulo=task.titulo,
            descricao=task.descricao,
            responsavel=task.responsavel,
            prioridade=task.prioridade,
            status=task.status,
            data_limite=normalize_to_input_date(task.data_limite, today=today),
            data_criacao=normalize_to_input_date(task.data_criacao, today=today) if task.data_criacao else None,
        )
        return self.form

    def _cleaned(self) -> TaskForm:
        form = self.form
        titulo = form.titulo.strip()
        if not titulo:
            raise ValidationError.for_field(
                "titulo", "Título da tarefa é obrigatório.", component="task_form", operation="submit"
            )
        return TaskForm(
            id=form.id,
            titulo=titulo,
            descricao=form.descricao.strip(),
            responsavel=form.responsavel.strip(),
            prioridade=normalize_priority(form.prioridade),
            status=normalize_status(form.status),
            data_limite=form.data_limite or today_iso(),
            data_criacao=form.data_criacao,
        )

    async def submit(self) -> Task:
        """Create or update depending on the mode.

        Raises:
            ValidationError: If the title is blank or an edit has no id
        """
        form = self._cleaned()
        if not self.is_edit_mode:
            payload = {k: v for k, v in asdict(form).items() if k not in ("id", "data_criacao")}
            payload["dataLimite"] = payload.pop("data_limite")
            return await self._repository.create(payload)

        if form.id is None:
            raise ValidationError.for_field(
                "id", "Tarefa sem id não pode ser atualizada.", component="task_form", operation="submit"
            )
        task = Task(
            id=form.id,
            titulo=form.titulo,
            descricao=form.descricao,
            responsavel=form.responsavel,
            prioridade=form.prioridade,
            status=form.status,
            data_limite=form.data_limite,
            data_criacao=form.data_criacao,
        )
        logger.debug("Submitting edit for task id=%d", form.id)
        return await self._repository.update(task)
