"""Request and response models for the HTTP API."""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from tarefas.models.task import Task


class _RequestModel(BaseModel):
    """Lenient base for request bodies: unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TaskCreateRequest(_RequestModel):
    """Body of POST /tasks. Accepts Portuguese and English field names."""

    titulo: Optional[str] = Field(default=None, validation_alias=AliasChoices("titulo", "title", "nome"))
    descricao: Optional[str] = Field(default=None, validation_alias=AliasChoices("descricao", "description"))
    responsavel: Optional[str] = Field(default=None, validation_alias=AliasChoices("responsavel", "responsible"))
    prioridade: Optional[str] = Field(default=None, validation_alias=AliasChoices("prioridade", "priority"))
    status: Optional[str] = None
    data_limite: Optional[str] = Field(default=None, validation_alias=AliasChoices("dataLimite", "dueDate"))


class TaskUpdateRequest(_RequestModel):
    """Body of PUT /tasks/{id}. Only fields present in the body are applied."""

    titulo: Optional[str] = None
    descricao: Optional[str] = None
    responsavel: Optional[str] = None
    prioridade: Optional[str] = None
    status: Optional[str] = None
    data_limite: Optional[str] = Field(default=None, validation_alias=AliasChoices("dataLimite", "data_limite"))


class TaskEnvelope(BaseModel):
    ok: bool = True
    task: Task


class TaskDeletedResponse(BaseModel):
    ok: bool = True
    removed: Task


class PublicUser(BaseModel):
    """User as exposed to clients (no password hash)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    nome_completo: str = Field(default="", alias="nomeCompleto")
    email: str = ""
    cpf: str = ""
    telefone: str = ""
    created_at: str = Field(default="", alias="createdAt")


class LoginRequest(_RequestModel):
    username: str = Field(default="", validation_alias=AliasChoices("username", "user"))
    password: str = Field(default="", validation_alias=AliasChoices("password", "senha"))


class LoginResponse(BaseModel):
    ok: bool = True
    token: str
    user: PublicUser


class RegisterRequest(_RequestModel):
    username: str = ""
    password: str = ""
    nome_completo: str = Field(default="", validation_alias=AliasChoices("nomeCompleto", "nome_completo"))
    email: str = ""
    cpf: str = ""
    telefone: str = ""


class RegisterResponse(BaseModel):
    ok: bool = True
    message: str
    user: PublicUser


class UserUpdateRequest(_RequestModel):
    """Editable profile fields; absent fields are left unchanged."""

    username: Optional[str] = None
    nome_completo: Optional[str] = Field(default=None, validation_alias=AliasChoices("nomeCompleto", "nome_completo"))
    email: Optional[str] = None
    telefone: Optional[str] = None
    password: Optional[str] = None


class UserUpdateResponse(BaseModel):
    message: str
    user: PublicUser


class HealthResponse(BaseModel):
    status: str
    store: str
    version: str
