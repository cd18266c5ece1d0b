"""spilib: provider discovery without instantiation.

Packages declare the classes implementing a capability in plain-text
provider-configuration files at ``META-INF/services/<capability>``. spilib
finds those files on the search path, validates them and returns the
declared classes, leaving construction to the caller.

Key features:
1. Lazy, ordered discovery across directories, zip archives and in-memory locations
2. Strict configuration-file syntax with line-level error reporting
3. Resolution through explicit registrations or imports, checked against the capability
4. Structured errors for every failure
"""

from spilib.core.errors.errors import (
    BaseError,
    ConfigurationSyntaxError,
    DiscoveryError,
    ExhaustedError,
    ProviderNotFoundError,
    ProviderTypeMismatchError,
    ResourceIOError,
    SettingsError,
)
from spilib.core.registry.registry import (
    ProviderTypeRegistry,
    TypeRegistry,
    provider_type_registry,
    qualified_name,
    register_provider,
)
from spilib.core.settings.settings import SpiSettings, get_settings, load_settings
from spilib.discovery import (
    DirectoryLocation,
    InMemoryLocation,
    SearchContext,
    ServiceLoader,
    ZipArchiveLocation,
    discover_all,
    iter_providers,
)

__version__ = "0.1.0"

__all__ = [
    # Discovery
    "discover_all",
    "iter_providers",
    "ServiceLoader",
    "SearchContext",
    "DirectoryLocation",
    "ZipArchiveLocation",
    "InMemoryLocation",

    # Registration
    "TypeRegistry",
    "ProviderTypeRegistry",
    "provider_type_registry",
    "register_provider",
    "qualified_name",

    # Settings
    "SpiSettings",
    "get_settings",
    "load_settings",

    # Errors
    "BaseError",
    "DiscoveryError",
    "ResourceIOError",
    "ConfigurationSyntaxError",
    "ProviderNotFoundError",
    "ProviderTypeMismatchError",
    "ExhaustedError",
    "SettingsError",
]
