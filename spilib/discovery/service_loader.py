"""Discovery facade.

Finds every provider class declared for a capability across a search
context, the same way a service loader reads provider-configuration files,
but returns the classes instead of instances::

    from spilib import discover_all

    for codec_class in discover_all(Codec):
        register_codec(codec_class)

Discovery is all-or-nothing: the first error aborts the operation.
"""

import logging
from typing import Iterator, Optional

from spilib.core.errors.errors import DiscoveryError, log_discovery_failure
from spilib.core.registry.registry import TypeRegistry, qualified_name
from spilib.core.settings.settings import SpiSettings, get_settings

from .context import SearchContext
from .iterator import ProviderNameIterator
from .locator import ResourceLocator
from .parser import ConfigurationParser
from .resolver import TypeResolver

logger = logging.getLogger(__name__)


class ServiceLoader:
    """Composes locator, parser, iterator and resolver for discovery operations.

    A loader holds no per-operation state; every call builds its own
    iterator, so one loader may be shared between threads.
    """

    def __init__(self, settings: Optional[SpiSettings] = None, registry: Optional[TypeRegistry] = None):
        """Initialize the loader.

        Args:
            settings: Settings to use; the process-wide settings when omitted
            registry: Registry used to resolve names; explicit registrations then imports when omitted
        """
        self._settings = settings
        self._resolver = TypeResolver(registry)

    @property
    def settings(self) -> SpiSettings:
        return self._settings if self._settings is not None else get_settings()

    @property
    def resolver(self) -> TypeResolver:
        return self._resolver

    def iter_names(
        self, capability: type, search_context: Optional[SearchContext] = None
    ) -> ProviderNameIterator:
        """Create a lazy iterator over the provider names declared for a capability.

        Args:
            capability: Class providers must subclass
            search_context: Locations to scan; the default context when omitted

        Returns:
            A fresh iterator; nothing is read until it is advanced
        """
        if not isinstance(capability, type):
            raise TypeError(f"Capability must be a class, got {type(capability).__name__}")
        settings = self.settings
        if search_context is None:
            search_context = SearchContext.default(settings)
        capability_name = qualified_name(capability)
        locator = ResourceLocator(search_context, settings.resource_prefix)
        parser = ConfigurationParser(capability_name, settings.encoding)
        return ProviderNameIterator(locator.locate(capability_name), parser)

    def iter_providers(
        self, capability: type, search_context: Optional[SearchContext] = None
    ) -> Iterator[type]:
        """Lazily yield provider classes for a capability in discovery order.

        Raises:
            DiscoveryError: On the first failure; classes already yielded stay valid
        """
        names = self.iter_names(capability, search_context)
        try:
            for name in names:
                yield self._resolver.resolve(name, capability)
        except DiscoveryError as e:
            log_discovery_failure(e)
            raise

    def discover_all(self, capability: type, search_context: Optional[SearchContext] = None) -> list[type]:
        """Discover every provider class for a capability.

        Args:
            capability: Class providers must subclass
            search_context: Locations to scan; the default context when omitted

        Returns:
            Provider classes in first-seen order; empty if none are declared

        Raises:
            ResourceIOError: If a resource cannot be located, opened, read or closed
            ConfigurationSyntaxError: If a resource has an illegal line
            ProviderNotFoundError: If a name does not resolve to a class
            ProviderTypeMismatchError: If a class does not subclass the capability
        """
        providers = list(self.iter_providers(capability, search_context))
        logger.info(f"Discovered {len(providers)} providers for {qualified_name(capability)}")
        return providers


_default_loader: Optional[ServiceLoader] = None


def get_service_loader() -> ServiceLoader:
    """Get the process-wide loader, using global settings and registrations."""
    global _default_loader
    if _default_loader is None:
        _default_loader = ServiceLoader()
    return _default_loader


def discover_all(capability: type, search_context: Optional[SearchContext] = None) -> list[type]:
    """Discover every provider class for a capability with the default loader."""
    return get_service_loader().discover_all(capability, search_context)


def iter_providers(capability: type, search_context: Optional[SearchContext] = None) -> Iterator[type]:
    """Lazily yield provider classes for a capability with the default loader."""
    return get_service_loader().iter_providers(capability, search_context)
