"""Strict Pydantic models carrying structured error context."""

from datetime import datetime

from pydantic import Field

from spilib.core.models import StrictBaseModel


class ErrorContextData(StrictBaseModel):
    """Context shared by every discovery error."""

    capability: str = Field(..., description="Qualified name of the capability being discovered")
    error_type: str = Field(..., description="Type of error")
    error_location: str = Field(..., description="Location in code where error occurred")
    timestamp: datetime = Field(default_factory=datetime.now, description="When error occurred")
    component: str = Field(..., description="Component that raised the error")
    operation: str = Field(..., description="Operation being performed")


class ResourceErrorContext(StrictBaseModel):
    """Context for failures touching a configuration resource."""

    resource: str = Field(..., description="Identity of the resource, or the resource name while locating")
    operation: str = Field(..., description="One of locate, open, read, close")


class SyntaxErrorContext(StrictBaseModel):
    """Context for an illegal line in a configuration resource."""

    resource: str = Field(..., description="Identity of the resource")
    line_number: int = Field(..., ge=1, description="1-based line number")
    content: str = Field(..., description="Offending line after comment and whitespace stripping")


class ProviderErrorContext(StrictBaseModel):
    """Context for a provider name that could not be resolved or validated."""

    provider_name: str = Field(..., description="Provider name as listed in the resource")
    capability: str = Field(..., description="Qualified name of the requested capability")
