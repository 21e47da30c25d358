"""Strict Pydantic base models shared across the tarefas package.

Every model in the package derives from one of these two bases so that
validation behaves the same way everywhere.
"""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Immutable base model with strict validation.

    It enforces:
    - extra="forbid": unknown fields are rejected
    - validate_assignment=True: assignments are validated
    - frozen=True: instances are immutable
    """

    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        validate_assignment=True,
        frozen=True,
        validate_default=True,
        use_enum_values=False,
        arbitrary_types_allowed=False,
    )


class MutableStrictBaseModel(BaseModel):
    """Mutable version of StrictBaseModel for records that are edited in place.

    Still enforces all validation rules except frozen=False.
    """

    model_config = ConfigDict(
        strict=True,
        extra="forbid",
        validate_assignment=True,
        frozen=False,
        validate_default=True,
        use_enum_values=False,
        arbitrary_types_allowed=False,
    )


__all__ = [
    "StrictBaseModel",
    "MutableStrictBaseModel",
]
