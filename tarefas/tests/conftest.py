"""Shared fixtures for the tarefas test suite."""

import pytest

from tarefas.models.task import Task
from tarefas.providers.memory.provider import MemoryStoreProvider
from tarefas.tests.factories import make_task


@pytest.fixture
def memory_store() -> MemoryStoreProvider:
    """Fresh in-memory store (usable without initialize())."""
    return MemoryStoreProvider(name="test-memory")


@pytest.fixture
def sample_tasks() -> list[Task]:
    return [
        make_task(1, titulo="Comprar pão", status="Pendente", prioridade="Baixa",
                  responsavel="Ana", data_limite="2025-01-10"),
        make_task(2, titulo="Revisar relatório", status="Concluída", prioridade="Alta",
                  responsavel="Bruno", data_limite="2024-12-01T15:00:00.000Z"),
        make_task(3, titulo="Ligar para cliente", descricao="Urgente: contrato", status="Em Andamento",
                  prioridade="Média", responsavel="ana paula"),
    ]
