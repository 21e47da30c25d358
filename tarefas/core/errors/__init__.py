"""Structured error types."""

from .errors import (
    AuthenticationError,
    BaseError,
    ConflictError,
    ErrorContext,
    ImportFormatError,
    NotFoundError,
    ProviderError,
    ResourceError,
    ValidationError,
)
from .models import (
    ErrorContextData,
    ProviderErrorContext,
    ResourceErrorContext,
    ValidationErrorDetail,
)

__all__ = [
    "AuthenticationError",
    "BaseError",
    "ConflictError",
    "ErrorContext",
    "ErrorContextData",
    "ImportFormatError",
    "NotFoundError",
    "ProviderError",
    "ProviderErrorContext",
    "ResourceError",
    "ResourceErrorContext",
    "ValidationError",
    "ValidationErrorDetail",
]
