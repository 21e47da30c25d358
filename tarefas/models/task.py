"""Task model and its enumerated fields."""

import unicodedata
from enum import Enum
from typing import Any, Optional

from pydantic import ConfigDict, Field

from tarefas.core.models import MutableStrictBaseModel


class Priority(str, Enum):
    """Task priority."""

    BAIXA = "Baixa"
    MEDIA = "Média"
    ALTA = "Alta"


class TaskStatus(str, Enum):
    """Task status.

    ``ABERTA`` is what the key-value backend historically wrote for new tasks.
    """

    PENDENTE = "Pendente"
    EM_ANDAMENTO = "Em Andamento"
    CONCLUIDA = "Concluída"
    ABERTA = "Aberta"


DEFAULT_PRIORITY = Priority.MEDIA
DEFAULT_STATUS = TaskStatus.PENDENTE

PRIORITY_WEIGHT: dict[str, int] = {
    Priority.ALTA.value: 3,
    Priority.MEDIA.value: 2,
    Priority.BAIXA.value: 1,
}


def _fold(raw: Any) -> str:
    """Lowercase, strip accents and collapse separators."""
    text = unicodedata.normalize("NFKD", str(raw))
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = text.casefold().replace("_", " ").replace("-", " ")
    return " ".join(text.split())


_PRIORITY_ALIASES: dict[str, Priority] = {
    "alta": Priority.ALTA,
    "high": Priority.ALTA,
    "media": Priority.MEDIA,
    "medium": Priority.MEDIA,
    "normal": Priority.MEDIA,
    "baixa": Priority.BAIXA,
    "low": Priority.BAIXA,
}

# Abbreviations resolve by the initial of the Portuguese name ("a", "m", "b", "alt", ...).
_PRIORITY_INITIALS: tuple[tuple[str, Priority], ...] = (
    ("alta", Priority.ALTA),
    ("media", Priority.MEDIA),
    ("baixa", Priority.BAIXA),
)

_STATUS_ALIASES: dict[str, TaskStatus] = {
    "pendente": TaskStatus.PENDENTE,
    "pending": TaskStatus.PENDENTE,
    "todo": TaskStatus.PENDENTE,
    "to do": TaskStatus.PENDENTE,
    "em andamento": TaskStatus.EM_ANDAMENTO,
    "andamento": TaskStatus.EM_ANDAMENTO,
    "in progress": TaskStatus.EM_ANDAMENTO,
    "doing": TaskStatus.EM_ANDAMENTO,
    "concluida": TaskStatus.CONCLUIDA,
    "concluido": TaskStatus.CONCLUIDA,
    "done": TaskStatus.CONCLUIDA,
    "completed": TaskStatus.CONCLUIDA,
    "aberta": TaskStatus.ABERTA,
    "open": TaskStatus.ABERTA,
}


def parse_priority(raw: Any) -> Optional[Priority]:
    """Map free-form input to a Priority.

    Matching ignores case and accents. Full names (Portuguese or English)
    match first, then abbreviations of the Portuguese names.

    Returns:
        The matching Priority, or None when the value is unknown
    """
    if raw is None:
        return None
    if isinstance(raw, Priority):
        return raw
    folded = _fold(raw)
    if not folded:
        return None
    if folded in _PRIORITY_ALIASES:
        return _PRIORITY_ALIASES[folded]
    for name, priority in _PRIORITY_INITIALS:
        if name.startswith(folded):
            return priority
    return None


def parse_status(raw: Any) -> Optional[TaskStatus]:
    """Map free-form input to a TaskStatus; None when unknown."""
    if raw is None:
        return None
    if isinstance(raw, TaskStatus):
        return raw
    folded = _fold(raw)
    if not folded:
        return None
    return _STATUS_ALIASES.get(folded)


def normalize_priority(raw: Any) -> str:
    """Canonical priority string; unknown values become the default."""
    return (parse_priority(raw) or DEFAULT_PRIORITY).value


def normalize_status(raw: Any) -> str:
    """Canonical status string; unknown values become the default."""
    return (parse_status(raw) or DEFAULT_STATUS).value


class Task(MutableStrictBaseModel):
    """A unit of work tracked by the system.

    Attribute names are snake_case; the JSON wire form uses ``dataLimite`` and
    ``dataCriacao`` (see :meth:`to_wire`).
    """

    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        validate_assignment=True,
        frozen=False,
        validate_default=True,
        populate_by_name=True,
    )

    id: int
    titulo: str = ""
    descricao: str = ""
    responsavel: str = ""
    prioridade: str = DEFAULT_PRIORITY.value
    status: str = DEFAULT_STATUS.value
    data_limite: Optional[str] = Field(default=None, alias="dataLimite")
    data_criacao: Optional[str] = Field(default=None, alias="dataCriacao")

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the wire field names."""
        return self.model_dump(by_alias=True)


# Sort/filter keys accepted from callers, by wire name or attribute name.
TASK_FIELDS: dict[str, str] = {
    "id": "id",
    "titulo": "titulo",
    "descricao": "descricao",
    "responsavel": "responsavel",
    "prioridade": "prioridade",
    "status": "status",
    "dataLimite": "data_limite",
    "data_limite": "data_limite",
    "dataCriacao": "data_criacao",
    "data_criacao": "data_criacao",
    "createdAt": "data_criacao",
}


def resolve_task_field(key: str) -> str:
    """Return the Task attribute for ``key``.

    Raises:
        KeyError: If ``key`` is not a Task field
    """
    return TASK_FIELDS[key]
