"""Tests for task import and export."""

import json

import pytest

from tarefas.core.errors import ImportFormatError, ValidationError
from tarefas.tests.factories import make_task
from tarefas.viewmodel.import_export import (
    CSV_COLUMNS,
    csv_to_records,
    export_csv,
    export_json,
    export_tasks,
    normalize_imported_records,
    normalize_imported_task,
    parse_import_id,
    process_file,
    resolve_aliases,
    split_csv_line,
)


class TestSplitCsvLine:
    """Test quoted CSV field splitting."""

    def test_plain_line_is_trimmed(self):
        assert split_csv_line("1, a ,b") == ["1", "a", "b"]

    def test_comma_inside_quotes(self):
        line = '1,"Buy, milk",desc,Pendente,Média,2025-01-01,Bob,2025-01-01'

        assert split_csv_line(line)[1] == "Buy, milk"
        assert len(split_csv_line(line)) == 8

    def test_escaped_quotes(self):
        assert split_csv_line('1,"Diz ""olá""",x') == ["1", 'Diz "olá"', "x"]

    def test_trailing_empty_field(self):
        assert split_csv_line('"a",') == ["a", ""]


class TestCsvToRecords:
    """Test CSV text parsing."""

    def test_header_and_rows(self):
        text = "\n\nid,titulo\r\n1,Primeira\n\n2,\"Segunda, parte\"\n"

        assert csv_to_records(text) == [
            {"id": "1", "titulo": "Primeira"},
            {"id": "2", "titulo": "Segunda, parte"},
        ]

    def test_short_rows_padded(self):
        assert csv_to_records("id,titulo,descricao\n1,A") == [{"id": "1", "titulo": "A", "descricao": ""}]

    def test_empty(self):
        assert csv_to_records("  \n \n") == []


class TestNormalizeImportedTask:
    """Test alias resolution and field normalization."""

    def test_alias_order(self):
        assert resolve_aliases({"Title": "t", "Nome": "n"}) == {"titulo": "t"}
        assert resolve_aliases({"NOME": "n", "DueDate": "2025-01-01"}) == {"titulo": "n", "data_limite": "2025-01-01"}
        assert resolve_aliases({"titulo": None, "title": "fallback"}) == {"titulo": "fallback"}

    @pytest.mark.parametrize("raw,expected", [(7, 7), ("7", 7), (" 8 ", 8), (3.0, 3), ("4.0", 4)])
    def test_usable_ids(self, raw, expected):
        assert parse_import_id(raw) == expected

    @pytest.mark.parametrize("raw", [None, 0, "0", "", "abc", 2.5, True])
    def test_unusable_ids(self, raw):
        assert parse_import_id(raw) is None

    def test_english_record(self):
        task = normalize_imported_task(
            {"TaskId": "12", "Title": "Deploy", "Description": "prod", "Priority": "high",
             "Status": "done", "Deadline": "20/11/2025", "Owner": "Ana", "CreatedAt": "2025-01-01T10:00:00Z"},
            fallback_id=1,
        )

        assert task.id == 12
        assert task.titulo == "Deploy"
        assert task.descricao == "prod"
        assert task.prioridade == "Alta"
        assert task.status == "Concluída"
        assert task.data_limite == "2025-11-20T00:00:00.000Z"
        assert task.responsavel == "Ana"
        assert task.data_criacao == "2025-01-01T10:00:00.000Z"

    def test_defaults_and_bad_dates(self):
        task = normalize_imported_task({"titulo": "X", "dataLimite": "someday"}, fallback_id=5)

        assert task.id == 5
        assert task.prioridade == "Média"
        assert task.status == "Pendente"
        assert task.data_limite is None
        assert task.data_criacao is None

    def test_missing_title_rejected(self):
        with pytest.raises(ImportFormatError):
            normalize_imported_task({"id": 1, "descricao": "sem título"}, fallback_id=1)

    def test_non_object_rejected(self):
        with pytest.raises(ImportFormatError):
            normalize_imported_task(["not", "a", "dict"], fallback_id=1)

    def test_missing_id_into_empty_list_gets_one(self):
        assert [t.id for t in normalize_imported_records([{"titulo": "Sem id"}])] == [1]

    def test_generated_ids_start_above_every_id(self):
        records = [{"titulo": "a"}, {"id": 10, "titulo": "b"}, {"titulo": "c"}, {"titulo": "d"}]

        tasks = normalize_imported_records(records, existing=[make_task(3)])

        assert [t.id for t in tasks] == [11, 10, 12, 13]

    def test_generated_id_never_reused_by_later_row(self):
        tasks = normalize_imported_records([{"titulo": "a"}, {"id": 1, "titulo": "b"}])

        assert [t.id for t in tasks] == [2, 1]

    def test_repeated_id_reassigned(self):
        records = [{"id": 5, "titulo": "a"}, {"id": "5", "titulo": "b"}, {"titulo": "c"}]

        tasks = normalize_imported_records(records)

        assert [(t.id, t.titulo) for t in tasks] == [(5, "a"), (6, "b"), (7, "c")]


class TestProcessFile:
    """Test whole-file import."""

    def test_json_array(self):
        text = json.dumps([{"titulo": "Sem id"}])

        tasks = process_file("Tarefas.JSON", text)

        assert [(t.id, t.titulo) for t in tasks] == [(1, "Sem id")]

    def test_json_ids_unique_with_later_explicit_id(self):
        text = json.dumps([{"titulo": "a"}, {"id": 1, "titulo": "b"}])

        tasks = process_file("x.json", text)

        assert len({t.id for t in tasks}) == 2

    def test_json_must_be_array(self):
        with pytest.raises(ImportFormatError):
            process_file("t.json", '{"titulo": "x"}')

    def test_invalid_json(self):
        with pytest.raises(ImportFormatError):
            process_file("t.json", "[{")

    def test_unsupported_extension(self):
        with pytest.raises(ImportFormatError):
            process_file("t.xlsx", "whatever")

    def test_csv_with_quoted_title(self):
        text = (
            "id,titulo,descricao,status,prioridade,dataLimite,responsavel,dataCriacao\n"
            '1,"Buy, milk",desc,Pendente,Média,2025-01-01,Bob,2025-01-01\n'
        )

        [task] = process_file("t.csv", text)

        assert task.titulo == "Buy, milk"
        assert task.responsavel == "Bob"
        assert task.data_limite == "2025-01-01T00:00:00.000Z"


class TestExport:
    """Test JSON and CSV export."""

    def test_json_export(self):
        exported = export_json([make_task(1, data_limite="2025-01-01")])

        assert exported.filename == "tarefas.json"
        assert exported.media_type == "application/json"
        assert json.loads(exported.content)[0]["dataLimite"] == "2025-01-01"
        assert exported.content.startswith("[\n  {")

    def test_csv_quoting_and_nulls(self):
        exported = export_csv([make_task(1, titulo='Diz "oi", tchau', descricao="simples")])
        header, row = exported.content.split("\n")

        assert exported.filename == "tarefas.csv"
        assert header == ",".join(CSV_COLUMNS)
        assert row == '1,"Diz ""oi"", tchau",simples,Pendente,Média,,,'

    def test_csv_round_trip(self):
        original = [
            make_task(1, titulo="Primeira", descricao="d1", responsavel="Ana", prioridade="Alta",
                      status="Em Andamento", data_limite="2025-01-01T00:00:00.000Z",
                      data_criacao="2024-12-01T08:30:00.000Z"),
            make_task(2, titulo="Segunda", prioridade="Baixa"),
        ]

        imported = process_file("tarefas.csv", export_csv(original).content)

        assert imported == original

    def test_export_empty_rejected(self):
        with pytest.raises(ValidationError):
            export_tasks([], as_csv=False)
