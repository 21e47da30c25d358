"""Strict Pydantic models for error handling."""

from datetime import datetime

from pydantic import Field

from tarefas.core.models import StrictBaseModel


class ErrorContextData(StrictBaseModel):
    """Structured data describing where an error happened."""

    component: str = Field(..., description="Component that raised the error")
    operation: str = Field(..., description="Operation being performed")
    error_type: str = Field(..., description="Type of error")
    error_location: str = Field(..., description="Location in code where error occurred")
    timestamp: datetime = Field(default_factory=datetime.now, description="When error occurred")


class ValidationErrorDetail(StrictBaseModel):
    """Single validation failure."""

    location: str = Field(..., description="Field or location of validation error")
    message: str = Field(..., description="Validation error message")
    error_type: str = Field(..., description="Type of validation error")


class ProviderErrorContext(StrictBaseModel):
    """Context for store/backend failures."""

    provider_name: str = Field(..., description="Name of the provider")
    provider_type: str = Field(..., description="Type of provider")
    operation: str = Field(..., description="Operation that failed")


class ResourceErrorContext(StrictBaseModel):
    """Context for failures tied to a specific resource."""

    resource_id: str = Field(..., description="ID of the resource")
    resource_type: str = Field(..., description="Type of resource")
    operation: str = Field(..., description="Operation attempted on resource")
