"""User records kept by the backend."""

from typing import Any

from pydantic import ConfigDict, Field

from tarefas.core.models import MutableStrictBaseModel

# Profile fields a user may change through PUT /users/{id}.
EDITABLE_USER_FIELDS: tuple[str, ...] = ("username", "nomeCompleto", "email", "telefone", "password")


class UserRecord(MutableStrictBaseModel):
    """Stored user, including the password hash."""

    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        validate_assignment=True,
        populate_by_name=True,
    )

    id: int
    username: str
    password_hash: str = Field(alias="passwordHash")
    nome_completo: str = Field(default="", alias="nomeCompleto")
    email: str = ""
    cpf: str = ""
    telefone: str = ""
    created_at: str = Field(default="", alias="createdAt")

    def to_storage(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_public(self) -> dict[str, Any]:
        """Wire form without the password hash."""
        data = self.model_dump(by_alias=True)
        data.pop("passwordHash", None)
        return data

    @property
    def display_name(self) -> str:
        return self.nome_completo or self.username
