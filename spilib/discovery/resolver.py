"""Type resolver: turns provider names into provider classes."""

import logging
from typing import Optional

from spilib.core.errors.errors import ProviderNotFoundError, ProviderTypeMismatchError
from spilib.core.errors.models import ProviderErrorContext
from spilib.core.loader.loader import ImportTypeRegistry
from spilib.core.registry.registry import (
    ChainedTypeRegistry,
    TypeRegistry,
    provider_type_registry,
    qualified_name,
)

logger = logging.getLogger(__name__)


def default_registry() -> TypeRegistry:
    """Explicit registrations first, then import based lookup."""
    return ChainedTypeRegistry(provider_type_registry, ImportTypeRegistry())


class TypeResolver:
    """Resolves provider names against a capability.

    The resolved class is checked with ``issubclass`` and returned as is; it
    is never called or instantiated.
    """

    def __init__(self, registry: Optional[TypeRegistry] = None):
        self._registry = registry if registry is not None else default_registry()

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    def resolve(self, name: str, capability: type) -> type:
        """Resolve a provider name to a class implementing the capability.

        Args:
            name: Validated provider name
            capability: Class the provider must subclass

        Returns:
            The provider class

        Raises:
            ProviderNotFoundError: If no class can be found for the name
            ProviderTypeMismatchError: If the class does not subclass the capability
        """
        provider_context = ProviderErrorContext(provider_name=name, capability=qualified_name(capability))
        try:
            cls = self._registry.try_resolve(name)
        except Exception as e:
            raise ProviderNotFoundError(provider_context, e) from e

        if cls is None:
            raise ProviderNotFoundError(provider_context)
        try:
            is_subtype = issubclass(cls, capability)
        except TypeError as e:
            # Protocols that are not runtime checkable only match declared subclasses
            if capability not in cls.__mro__:
                raise ProviderTypeMismatchError(provider_context, e) from e
            is_subtype = True
        if not is_subtype:
            raise ProviderTypeMismatchError(provider_context)

        logger.debug(f"Resolved provider {name} for {provider_context.capability}")
        return cls
