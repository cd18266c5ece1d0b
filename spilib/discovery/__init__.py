"""Provider discovery: locate, parse, iterate and resolve."""

from .context import SearchContext, location_for_path
from .iterator import ProviderNameIterator
from .locations import DirectoryLocation, InMemoryLocation, SearchLocation, ZipArchiveLocation
from .locator import ResourceLocator
from .parser import ConfigurationParser, is_valid_provider_name
from .resolver import TypeResolver, default_registry
from .resources import ConfigurationResource, FileResource, InMemoryResource, ZipEntryResource
from .service_loader import ServiceLoader, discover_all, get_service_loader, iter_providers

__all__ = [
    "ConfigurationParser",
    "ConfigurationResource",
    "DirectoryLocation",
    "FileResource",
    "InMemoryLocation",
    "InMemoryResource",
    "ProviderNameIterator",
    "ResourceLocator",
    "SearchContext",
    "SearchLocation",
    "ServiceLoader",
    "TypeResolver",
    "ZipArchiveLocation",
    "ZipEntryResource",
    "default_registry",
    "discover_all",
    "get_service_loader",
    "is_valid_provider_name",
    "iter_providers",
    "location_for_path",
]
