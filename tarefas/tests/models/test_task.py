"""Tests for the Task model and its enum parsing."""

import pytest

from tarefas.models.task import (
    PRIORITY_WEIGHT,
    Priority,
    Task,
    TaskStatus,
    normalize_priority,
    normalize_status,
    parse_priority,
    parse_status,
    resolve_task_field,
)


class TestParsePriority:
    """Test free-form priority parsing."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Alta", Priority.ALTA),
            ("alta", Priority.ALTA),
            ("HIGH", Priority.ALTA),
            ("Média", Priority.MEDIA),
            ("media", Priority.MEDIA),
            ("medium", Priority.MEDIA),
            ("baixa", Priority.BAIXA),
            ("low", Priority.BAIXA),
            ("a", Priority.ALTA),
            ("M", Priority.MEDIA),
            ("b", Priority.BAIXA),
        ],
    )
    def test_known_values(self, raw, expected):
        assert parse_priority(raw) is expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "urgent", "x"])
    def test_unknown_values(self, raw):
        assert parse_priority(raw) is None

    def test_unknown_maps_to_default(self):
        assert normalize_priority("urgent") == "Média"
        assert normalize_priority(None) == "Média"
        assert normalize_priority("ALTA") == "Alta"


class TestParseStatus:
    """Test free-form status parsing."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Pendente", TaskStatus.PENDENTE),
            ("em andamento", TaskStatus.EM_ANDAMENTO),
            ("Em_Andamento", TaskStatus.EM_ANDAMENTO),
            ("concluida", TaskStatus.CONCLUIDA),
            ("Concluída", TaskStatus.CONCLUIDA),
            ("done", TaskStatus.CONCLUIDA),
            ("Aberta", TaskStatus.ABERTA),
        ],
    )
    def test_known_values(self, raw, expected):
        assert parse_status(raw) is expected

    def test_unknown_maps_to_default(self):
        assert parse_status("archived") is None
        assert normalize_status("archived") == "Pendente"


class TestTask:
    """Test the Task model."""

    def test_defaults(self):
        task = Task(id=1, titulo="Teste")

        assert task.descricao == ""
        assert task.responsavel == ""
        assert task.prioridade == "Média"
        assert task.status == "Pendente"
        assert task.data_limite is None

    def test_wire_names(self):
        task = Task(id=1, titulo="Teste", data_limite="2025-01-01", data_criacao="2024-12-01")

        wire = task.to_wire()

        assert wire["dataLimite"] == "2025-01-01"
        assert wire["dataCriacao"] == "2024-12-01"
        assert "data_limite" not in wire

    def test_validate_from_wire(self):
        task = Task.model_validate({"id": 3, "titulo": "T", "dataLimite": "2025-02-02"})

        assert task.data_limite == "2025-02-02"

    def test_strict_id(self):
        with pytest.raises(Exception):
            Task(id="1", titulo="T")

    def test_priority_weights(self):
        assert PRIORITY_WEIGHT["Alta"] > PRIORITY_WEIGHT["Média"] > PRIORITY_WEIGHT["Baixa"]


class TestResolveTaskField:
    """Test sort/filter key resolution."""

    def test_wire_and_attribute_names(self):
        assert resolve_task_field("dataLimite") == "data_limite"
        assert resolve_task_field("data_limite") == "data_limite"
        assert resolve_task_field("createdAt") == "data_criacao"
        assert resolve_task_field("titulo") == "titulo"

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            resolve_task_field("nope")
