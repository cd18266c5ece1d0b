"""Error classes with structured context for provider discovery.

Every failure in a discovery operation is fatal to that operation and is
raised as a subclass of DiscoveryError. Each error carries an ErrorContext
plus, where it applies, a context model naming the resource, line or
provider that caused it.
"""

import logging
import traceback
from datetime import datetime
from typing import Any, Optional

from .models import (
    ErrorContextData,
    ProviderErrorContext,
    ResourceErrorContext,
    SyntaxErrorContext,
)

logger = logging.getLogger(__name__)


class ErrorContext:
    """Structured error context.

    This class provides:
    1. Structured context information for errors
    2. Clean serialization for logging and reporting
    """

    def __init__(self, context_data: ErrorContextData):
        """Initialize error context.

        Args:
            context_data: Required error context data
        """
        self._data = context_data

    @classmethod
    def create(
        cls, capability: str, error_type: str, error_location: str, component: str, operation: str
    ) -> "ErrorContext":
        """Create a new error context with required data.

        Args:
            capability: Qualified name of the capability
            error_type: Type of error
            error_location: Location in code
            component: Component raising error
            operation: Operation being performed

        Returns:
            New ErrorContext instance
        """
        context_data = ErrorContextData(
            capability=capability,
            error_type=error_type,
            error_location=error_location,
            component=component,
            operation=operation,
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
    """Base class for all spilib errors.

    This class provides:
    1. Structured error information with context
    2. Clean serialization for logging and reporting
    3. Cause tracking for nested errors
    """

    def __init__(self, message: str, context: ErrorContext, cause: Optional[Exception] = None):
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
        self.traceback = self._capture_traceback()

        super().__init__(message)

    def _capture_traceback(self) -> str:
        """Capture the traceback of the exception being handled, if any."""
        return traceback.format_exc()

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary.

        Returns:
            Dictionary representation of error
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context.data.model_dump(),
            "cause": str(self.cause) if self.cause else None,
            "traceback": self.traceback,
        }

    def __str__(self) -> str:
        cause_str = f" (caused by: {self.cause})" if self.cause else ""
        return f"{self.__class__.__name__}: {self.message}{cause_str}"


class DiscoveryError(BaseError):
    """Base error for one failed discovery operation.

    The message is prefixed with the capability name so that a failure can
    be traced back to the lookup that produced it.
    """

    def __init__(
        self,
        detail: str,
        capability: str,
        component: str,
        operation: str,
        cause: Optional[Exception] = None,
    ):
        """Initialize discovery error.

        Args:
            detail: Description of the failure without the capability prefix
            capability: Qualified name of the capability being discovered
            component: Component raising the error
            operation: Operation being performed
            cause: Original exception that caused this error
        """
        self.detail = detail
        self.capability = capability
        context = ErrorContext.create(
            capability=capability,
            error_type=self.__class__.__name__,
            error_location=f"{component}.{operation}",
            component=component,
            operation=operation,
        )
        super().__init__(f"{capability}: {detail}", context, cause)


class ResourceIOError(DiscoveryError):
    """Raised when a configuration resource cannot be located, opened, read or closed."""

    def __init__(
        self,
        detail: str,
        capability: str,
        resource_context: ResourceErrorContext,
        cause: Optional[Exception] = None,
    ):
        self.resource_context = resource_context
        super().__init__(detail, capability, "resources", resource_context.operation, cause)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["resource_context"] = self.resource_context.model_dump()
        return result


class ConfigurationSyntaxError(DiscoveryError):
    """Raised when a configuration resource contains an illegal line."""

    def __init__(self, detail: str, capability: str, syntax_context: SyntaxErrorContext):
        self.syntax_context = syntax_context
        located = f"{syntax_context.resource}:{syntax_context.line_number}: {detail}"
        super().__init__(located, capability, "parser", "parse")

    @property
    def line_number(self) -> int:
        return self.syntax_context.line_number

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["syntax_context"] = self.syntax_context.model_dump()
        return result


class ProviderNotFoundError(DiscoveryError):
    """Raised when a provider name does not resolve to any class."""

    def __init__(self, provider_context: ProviderErrorContext, cause: Optional[Exception] = None):
        self.provider_context = provider_context
        super().__init__(
            f"Provider {provider_context.provider_name} not found",
            provider_context.capability,
            "resolver",
            "resolve",
            cause,
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["provider_context"] = self.provider_context.model_dump()
        return result


class ProviderTypeMismatchError(DiscoveryError):
    """Raised when a resolved provider class does not subclass the capability."""

    def __init__(self, provider_context: ProviderErrorContext, cause: Optional[Exception] = None):
        self.provider_context = provider_context
        super().__init__(
            f"Provider {provider_context.provider_name} not a subtype",
            provider_context.capability,
            "resolver",
            "resolve",
            cause,
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["provider_context"] = self.provider_context.model_dump()
        return result


class ExhaustedError(DiscoveryError):
    """Raised when next() is called on an iterator with no remaining names."""

    def __init__(self, capability: str):
        super().__init__("No more providers", capability, "iterator", "next")


class SettingsError(BaseError):
    """Raised when a settings file cannot be read or validated."""

    def __init__(self, message: str, config_file: str, cause: Optional[Exception] = None):
        self.config_file = config_file
        context = ErrorContext.create(
            capability="<settings>",
            error_type=self.__class__.__name__,
            error_location="settings.load",
            component="settings",
            operation="load",
        )
        super().__init__(message, context, cause)


def log_discovery_failure(error: BaseError) -> None:
    """Log an error that aborts a discovery operation.

    Args:
        error: Error about to be propagated to the caller
    """
    logger.error(f"{error.__class__.__name__}: {error.message}")
    if error.cause:
        logger.debug(f"Caused by: {error.cause}")
    logger.debug(f"Context: {error.context.data.model_dump()}")
