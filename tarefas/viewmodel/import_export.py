"""Import and export of task lists as JSON or CSV files.

Imported records are loosely typed: keys may use Portuguese or English
names in any case, dates come in several shapes, ids may be missing. Each
record is mapped onto the Task shape through an ordered alias table, and
records without a usable id (or repeating an earlier one) get one above
every id in the batch and in the current list.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from tarefas.core.errors import ImportFormatError, ValidationError
from tarefas.models.task import Task, normalize_priority, normalize_status
from tarefas.utils.dates import to_iso_or_none

logger = logging.getLogger(__name__)

JSON_FILENAME = "tarefas.json"
CSV_FILENAME = "tarefas.csv"

CSV_COLUMNS: tuple[str, ...] = (
    "id",
    "titulo",
    "descricao",
    "status",
    "prioridade",
    "dataLimite",
    "responsavel",
    "dataCriacao",
)

# Canonical field -> accepted source keys (lowercase), first match wins.
FIELD_ALIASES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("id", ("id", "taskid", "codigo")),
    ("titulo", ("titulo", "title", "name", "nome")),
    ("descricao", ("descricao", "description")),
    ("status", ("status",)),
    ("prioridade", ("prioridade", "priority")),
    ("data_limite", ("datalimite", "deadline", "date", "data", "duedate")),
    ("responsavel", ("responsavel", "responsible", "owner")),
    ("data_criacao", ("datacriacao", "created", "createdat")),
)


@dataclass(frozen=True)
class ExportedFile:
    """A downloadable file produced by an export."""

    filename: str
    content: str
    media_type: str


def resolve_aliases(record: dict[str, Any]) -> dict[str, Any]:
    """Map ``record`` keys onto canonical field names.

    A field whose aliases are all absent (or None) is left out.
    """
    lowered = {str(k).strip().lower(): v for k, v in record.items()}
    resolved: dict[str, Any] = {}
    for field, aliases in FIELD_ALIASES:
        for alias in aliases:
            if lowered.get(alias) is not None:
                resolved[field] = lowered[alias]
                break
    return resolved


def parse_import_id(raw: Any) -> Optional[int]:
    """Usable id from ``raw``; None for missing, zero or non-numeric values."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not raw.is_integer():
            return None
        value = int(raw)
    else:
        text = str(raw).strip()
        try:
            value = int(text)
        except ValueError:
            try:
                as_float = float(text)
            except ValueError:
                return None
            if not as_float.is_integer():
                return None
            value = int(as_float)
    return value or None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def normalize_imported_task(record: dict[str, Any], fallback_id: int) -> Task:
    """Convert one imported record into a Task.

    Args:
        record: Raw object from a JSON array or a CSV row
        fallback_id: Id used when the record has no usable one

    Raises:
        ImportFormatError: If the record is not an object or has no title
    """
    if not isinstance(record, dict):
        raise ImportFormatError.for_field(
            "record", "Cada tarefa importada deve ser um objeto.", component="import_export", operation="import"
        )

    fields = resolve_aliases(record)
    titulo = _text(fields.get("titulo")).strip()
    if not titulo:
        raise ImportFormatError.for_field(
            "titulo", "Tarefa importada sem título.", component="import_export", operation="import"
        )

    return Task(
        id=parse_import_id(fields.get("id")) or fallback_id,
        titulo=titulo,
        descricao=_text(fields.get("descricao")),
        responsavel=_text(fields.get("responsavel")),
        prioridade=normalize_priority(fields.get("prioridade")),
        status=normalize_status(fields.get("status")),
        data_limite=to_iso_or_none(fields.get("data_limite")),
        data_criacao=to_iso_or_none(fields.get("data_criacao")),
    )


def _explicit_id(record: Any) -> Optional[int]:
    if not isinstance(record, dict):
        return None
    return parse_import_id(resolve_aliases(record).get("id"))


def normalize_imported_records(records: Iterable[Any], existing: Iterable[Task] = ()) -> list[Task]:
    """Normalize a batch so every resulting id is unique.

    Rows keep their own id unless an earlier row in the batch already took
    it. Rows without a usable id, and repeated ids, get fresh ids counted
    up from the largest id in ``existing`` and in the whole batch.
    """
    records = list(records)
    explicit_ids = [_explicit_id(record) for record in records]
    next_id = max([t.id for t in existing] + [i for i in explicit_ids if i is not None], default=0)

    seen: set[int] = set()
    tasks: list[Task] = []
    for record, explicit_id in zip(records, explicit_ids):
        if explicit_id is None or explicit_id in seen:
            next_id += 1
            task = normalize_imported_task(record, fallback_id=next_id)
            if explicit_id is not None:
                logger.warning("Imported id %d repeats in the file; reassigned to %d", explicit_id, next_id)
                task = task.model_copy(update={"id": next_id})
        else:
            task = normalize_imported_task(record, fallback_id=explicit_id)
        seen.add(task.id)
        tasks.append(task)
    return tasks


def split_csv_line(line: str) -> list[str]:
    """Split one CSV line, honoring double-quoted fields and ``""`` escapes."""
    if '"' not in line:
        return [part.strip() for part in line.split(",")]

    result: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            result.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    result.append("".join(current))
    return [part.strip() for part in result]


def csv_to_records(text: str) -> list[dict[str, str]]:
    """Parse CSV text: the first non-blank line is the header.

    Quoted fields spanning several lines are not supported.
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return []

    headers = [h.strip() for h in lines[0].split(",")]
    records = []
    for line in lines[1:]:
        cols = split_csv_line(line)
        records.append({h: cols[i] if i < len(cols) else "" for i, h in enumerate(headers)})
    return records


def process_file(filename: str, text: str, existing: Iterable[Task] = ()) -> list[Task]:
    """Turn an uploaded ``.json`` or ``.csv`` file into a task list.

    Args:
        filename: Name of the uploaded file; only the extension matters
        text: File contents
        existing: Current tasks, used to seed generated ids

    Raises:
        ImportFormatError: On an unsupported extension or unparsable content
    """
    name = filename.lower()
    if name.endswith(".json"):
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError as e:
            raise ImportFormatError.for_field(
                "file", f"JSON inválido: {e.msg}", component="import_export", operation="process_file"
            ) from e
        if not isinstance(parsed, list):
            raise ImportFormatError.for_field(
                "file",
                "O arquivo JSON deve conter um array de tarefas.",
                component="import_export",
                operation="process_file",
            )
        records: list[Any] = parsed
    elif name.endswith(".csv"):
        records = csv_to_records(text)
    else:
        raise ImportFormatError.for_field(
            "file", "Formato inválido. Use .json ou .csv", component="import_export", operation="process_file"
        )

    tasks = normalize_imported_records(records, existing)
    logger.info("Imported %d task(s) from %s", len(tasks), filename)
    return tasks


def export_json(tasks: Iterable[Task]) -> ExportedFile:
    content = json.dumps([t.to_wire() for t in tasks], indent=2, ensure_ascii=False)
    return ExportedFile(JSON_FILENAME, content, "application/json")


def _csv_cell(value: Any) -> str:
    if value is None:
        return ""
    text = str(value)
    if "," in text or '"' in text:
        text = '"' + text.replace('"', '""') + '"'
    return text


def export_csv(tasks: Iterable[Task]) -> ExportedFile:
    """Fixed eight-column CSV; cells with commas or quotes are quoted."""
    lines = [",".join(CSV_COLUMNS)]
    for task in tasks:
        wire = task.to_wire()
        lines.append(",".join(_csv_cell(wire.get(col)) for col in CSV_COLUMNS))
    return ExportedFile(CSV_FILENAME, "\n".join(lines), "text/csv;charset=utf-8")


def export_tasks(tasks: list[Task], as_csv: bool) -> ExportedFile:
    """Export ``tasks`` as CSV or JSON.

    Raises:
        ValidationError: If there is nothing to export
    """
    if not tasks:
        raise ValidationError.for_field(
            "tasks", "Não há tarefas para exportar.", component="import_export", operation="export"
        )
    return export_csv(tasks) if as_csv else export_json(tasks)
