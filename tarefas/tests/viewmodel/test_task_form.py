"""Tests for the task create/edit form."""

from unittest.mock import AsyncMock

import pytest

from tarefas.client.repository import TaskRepositoryService
from tarefas.core.errors import ValidationError
from tarefas.tests.factories import make_task
from tarefas.viewmodel.task_form import TaskForm, TaskFormViewModel


@pytest.fixture
def repository():
    return AsyncMock(spec=TaskRepositoryService)


class TestTaskFormViewModel:
    """Test form filling and submission."""

    def test_start_create_presets_due_date(self, repository):
        form = TaskFormViewModel(repository).start_create(today="2025-06-01")

        assert form == TaskForm(data_limite="2025-06-01")

    @pytest.mark.asyncio
    async def test_load_for_edit_normalizes_dates(self, repository):
        repository.get_by_id.return_value = make_task(
            3, data_limite="2025-11-20T00:00:00.000Z", data_criacao="01/02/2025"
        )
        vm = TaskFormViewModel(repository)

        form = await vm.load_for_edit(3, today="2000-01-01")

        assert vm.is_edit_mode
        assert form.data_limite == "2025-11-20"
        assert form.data_criacao == "2025-02-01"

    @pytest.mark.asyncio
    async def test_load_for_edit_missing_due_date_uses_today(self, repository):
        repository.get_by_id.return_value = make_task(3)

        form = await TaskFormViewModel(repository).load_for_edit(3, today="2025-06-01")

        assert form.data_limite == "2025-06-01"
        assert form.data_criacao is None

    @pytest.mark.asyncio
    async def test_submit_create_trims_and_normalizes(self, repository):
        repository.create.return_value = make_task(1)
        vm = TaskFormViewModel(repository)
        vm.start_create(today="2025-06-01")
        vm.form.titulo = "  Nova  "
        vm.form.responsavel = " Ana "
        vm.form.prioridade = "alta"

        await vm.submit()

        repository.create.assert_awaited_once_with(
            {
                "titulo": "Nova",
                "descricao": "",
                "responsavel": "Ana",
                "prioridade": "Alta",
                "status": "Pendente",
                "dataLimite": "2025-06-01",
            }
        )

    @pytest.mark.asyncio
    async def test_submit_edit_calls_update(self, repository):
        repository.get_by_id.return_value = make_task(3, titulo="Antiga", data_limite="2025-01-01")
        repository.update.side_effect = lambda task: task
        vm = TaskFormViewModel(repository)
        await vm.load_for_edit(3)
        vm.form.titulo = "Editada"

        updated = await vm.submit()

        assert updated.id == 3
        assert updated.titulo == "Editada"
        assert updated.data_limite == "2025-01-01"

    @pytest.mark.asyncio
    async def test_blank_title_rejected(self, repository):
        vm = TaskFormViewModel(repository)
        vm.start_create()

        with pytest.raises(ValidationError):
            await vm.submit()

        repository.create.assert_not_awaited()
