"""Base error classes with structured error context.

Every failure the package reports to a caller is one of the classes below.
The HTTP layer maps them to status codes; the view-model turns them into
user-facing messages.
"""

from datetime import datetime
from typing import Any

from .models import (
    ErrorContextData,
    ProviderErrorContext,
    ResourceErrorContext,
    ValidationErrorDetail,
)


class ErrorContext:
    """Structured context attached to every framework error."""

    def __init__(self, context_data: ErrorContextData):
        self._data = context_data

    @classmethod
    def create(
        cls, component: str, operation: str, error_type: str, error_location: str
    ) -> "ErrorContext":
        """Create a new error context.

        Args:
            component: Component raising the error
            operation: Operation being performed
            error_type: Type of error
            error_location: Location in code

        Returns:
            New ErrorContext instance
        """
        context_data = ErrorContextData(
            component=component,
            operation=operation,
            error_type=error_type,
            error_location=error_location,
        )
        return cls(context_data)

    @property
    def data(self) -> ErrorContextData:
        """Get the context data."""
        return self._data

    @property
    def timestamp(self) -> datetime:
        """Get the context creation timestamp."""
        return self._data.timestamp

    def __str__(self) -> str:
        return f"ErrorContext({self._data.model_dump()})"


class BaseError(Exception):
    """Base class for all tarefas errors.

    This class provides:
    1. Structured error information with context
    2. Clean serialization for logging and API responses
    3. Cause tracking for nested errors
    """

    def __init__(self, message: str, context: ErrorContext, cause: Exception | None = None):
        """Initialize error.

        Args:
            message: Error message
            context: Required error context
            cause: Optional cause exception
        """
        self.message = message
        self.context = context
        self.cause = cause
        self.timestamp = datetime.now()
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary.

        Returns:
            Dictionary representation of error
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context.data.model_dump(mode="json"),
            "cause": str(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        cause_str = f" (caused by: {self.cause})" if self.cause else ""
        return f"{self.__class__.__name__}: {self.message}{cause_str}"


class ValidationError(BaseError):
    """Raised when user input is missing a required field or is malformed.

    Reported synchronously to the user; no state changes.
    """

    def __init__(
        self,
        message: str,
        validation_errors: list[ValidationErrorDetail],
        context: ErrorContext,
        cause: Exception | None = None,
    ):
        """Initialize validation error.

        Args:
            message: Error message
            validation_errors: List of validation error details
            context: Required error context
            cause: Optional cause exception
        """
        self.validation_errors = validation_errors
        super().__init__(message, context, cause)

    @classmethod
    def for_field(
        cls, field: str, message: str, component: str, operation: str
    ) -> "ValidationError":
        """Build a validation error for a single offending field."""
        return cls(
            message=message,
            validation_errors=[
                ValidationErrorDetail(location=field, message=message, error_type="missing_or_invalid")
            ],
            context=ErrorContext.create(
                component=component,
                operation=operation,
                error_type="ValidationError",
                error_location=field,
            ),
        )

    def __str__(self) -> str:
        base_str = super().__str__()
        if self.validation_errors:
            errors_str = "; ".join(f"{e.location}: {e.message}" for e in self.validation_errors[:3])
            if len(self.validation_errors) > 3:
                errors_str += f" (and {len(self.validation_errors) - 3} more)"
            return f"{base_str} - {errors_str}"
        return base_str


class ImportFormatError(ValidationError):
    """Raised when an uploaded file cannot be turned into a task list.

    The whole import is aborted and the current task list is left untouched.
    """


class AuthenticationError(BaseError):
    """Raised for missing or invalid credentials and session tokens."""


class ResourceError(BaseError):
    """Error raised when an operation on a specific resource fails."""

    def __init__(
        self,
        message: str,
        context: ErrorContext,
        resource_context: ResourceErrorContext,
        cause: Exception | None = None,
    ):
        """Initialize resource error.

        Args:
            message: Error message
            context: Required error context
            resource_context: Required resource error context
            cause: Optional cause exception
        """
        self.resource_context = resource_context
        super().__init__(message, context, cause)

    @classmethod
    def for_resource(
        cls, message: str, resource_type: str, resource_id: Any, operation: str
    ) -> "ResourceError":
        """Build the error for ``resource_type``/``resource_id``."""
        return cls(
            message=message,
            context=ErrorContext.create(
                component=f"{resource_type}_service",
                operation=operation,
                error_type=cls.__name__,
                error_location=operation,
            ),
            resource_context=ResourceErrorContext(
                resource_id=str(resource_id),
                resource_type=resource_type,
                operation=operation,
            ),
        )


class NotFoundError(ResourceError):
    """Raised when an id is unknown on get/update/delete."""


class ConflictError(ResourceError):
    """Raised when creating a resource that already exists."""


class ProviderError(BaseError):
    """Error raised when a store or backend operation fails."""

    def __init__(
        self,
        message: str,
        context: ErrorContext,
        provider_context: ProviderErrorContext,
        cause: Exception | None = None,
    ):
        """Initialize provider error.

        Args:
            message: Error message
            context: Required error context
            provider_context: Required provider error context
            cause: Optional cause exception
        """
        self.provider_context = provider_context
        super().__init__(message, context, cause)

    @classmethod
    def for_operation(
        cls,
        message: str,
        provider_name: str,
        provider_type: str,
        operation: str,
        cause: Exception | None = None,
    ) -> "ProviderError":
        """Build a provider error for a failed store operation."""
        return cls(
            message=message,
            context=ErrorContext.create(
                component=provider_name,
                operation=operation,
                error_type=type(cause).__name__ if cause else "ProviderError",
                error_location=f"{provider_type}.{operation}",
            ),
            provider_context=ProviderErrorContext(
                provider_name=provider_name,
                provider_type=provider_type,
                operation=operation,
            ),
            cause=cause,
        )
