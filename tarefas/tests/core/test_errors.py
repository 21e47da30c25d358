"""Tests for the structured error hierarchy."""

import pytest

from tarefas.core.errors import (
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


class TestErrorContext:
    """Test ErrorContext creation."""

    def test_create_populates_data(self):
        context = ErrorContext.create(
            component="task_service",
            operation="create",
            error_type="ValidationError",
            error_location="titulo",
        )

        assert context.data.component == "task_service"
        assert context.data.operation == "create"
        assert context.data.error_location == "titulo"
        assert context.timestamp is not None

    def test_context_data_is_frozen(self):
        context = ErrorContext.create("c", "o", "t", "l")

        with pytest.raises(Exception):
            context.data.component = "other"


class TestValidationError:
    """Test ValidationError helpers."""

    def test_for_field(self):
        error = ValidationError.for_field("titulo", "Título obrigatório", component="form", operation="submit")

        assert isinstance(error, BaseError)
        assert error.message == "Título obrigatório"
        assert error.validation_errors[0].location == "titulo"
        assert "titulo: Título obrigatório" in str(error)

    def test_import_format_error_is_validation_error(self):
        error = ImportFormatError.for_field("file", "Formato inválido", component="import", operation="process")

        assert isinstance(error, ImportFormatError)
        assert isinstance(error, ValidationError)

    def test_to_dict(self):
        error = ValidationError.for_field("x", "bad", component="c", operation="o")
        data = error.to_dict()

        assert data["error_type"] == "ValidationError"
        assert data["message"] == "bad"
        assert data["context"]["component"] == "c"
        assert data["cause"] is None


class TestResourceErrors:
    """Test not-found and conflict errors."""

    def test_not_found_for_resource(self):
        error = NotFoundError.for_resource("Tarefa não encontrada.", "task", 42, "get")

        assert isinstance(error, NotFoundError)
        assert isinstance(error, ResourceError)
        assert error.resource_context.resource_id == "42"
        assert error.resource_context.resource_type == "task"
        assert error.context.data.component == "task_service"

    def test_conflict_for_resource(self):
        error = ConflictError.for_resource("Usuário já existe.", "user", "ana", "register")

        assert isinstance(error, ConflictError)
        assert error.resource_context.operation == "register"


class TestProviderError:
    """Test ProviderError construction."""

    def test_for_operation_with_cause(self):
        cause = OSError("disk full")
        error = ProviderError.for_operation(
            message="write failed",
            provider_name="file-store",
            provider_type="file",
            operation="set",
            cause=cause,
        )

        assert error.cause is cause
        assert error.provider_context.provider_name == "file-store"
        assert error.context.data.error_type == "OSError"
        assert "caused by: disk full" in str(error)

    def test_authentication_error(self):
        error = AuthenticationError("nope", ErrorContext.create("auth", "login", "AuthenticationError", "login"))

        assert str(error) == "AuthenticationError: nope"
