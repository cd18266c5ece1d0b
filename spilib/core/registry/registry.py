"""Type registries mapping provider names to classes.

A registry answers one question: which class, if any, does a provider name
refer to. Registries never instantiate what they hold.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, TypeVar, Union, overload

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)


def qualified_name(cls: type) -> str:
    """Return the fully-qualified dotted name of a class.

    Args:
        cls: Class to name

    Returns:
        ``module.QualName``, e.g. ``package.codecs.Codec`` or ``package.mod.Outer.Inner``
    """
    return f"{cls.__module__}.{cls.__qualname__}"


class TypeRegistry(ABC):
    """Abstract lookup from provider names to classes."""

    @abstractmethod
    def try_resolve(self, name: str) -> Optional[type]:
        """Look a provider name up without instantiating anything.

        Args:
            name: Dotted provider name

        Returns:
            The class, or None if this registry knows no class by that name
        """
        pass

    def contains(self, name: str) -> bool:
        """Check if a name resolves to a class in this registry."""
        return self.try_resolve(name) is not None


class ProviderTypeRegistry(TypeRegistry):
    """Registry populated by explicit registration.

    Classes registered here are found without importing anything, so a
    host can make providers discoverable under names of its choosing.
    """

    def __init__(self) -> None:
        self._types: dict[str, type] = {}
        self._metadata: dict[str, dict[str, Any]] = {}

    def register(self, name: str, cls: type, **metadata: Any) -> None:
        """Register a class under a provider name.

        Args:
            name: Provider name the class answers to
            cls: The class to register
            **metadata: Additional metadata about the class

        Raises:
            TypeError: If cls is not a class
            ValueError: If the name is already registered to a different class
        """
        if not isinstance(cls, type):
            raise TypeError(f"Only classes can be registered, got {type(cls).__name__} for '{name}'")
        existing = self._types.get(name)
        if existing is not None and existing is not cls:
            raise ValueError(
                f"Provider name '{name}' is already registered to {qualified_name(existing)}"
            )
        self._types[name] = cls
        self._metadata[name] = dict(metadata)
        logger.debug(f"Registered provider type: {name} -> {qualified_name(cls)}")

    def update(self, name: str, cls: type, **metadata: Any) -> bool:
        """Register or replace the class for a name.

        Returns:
            True if an existing registration was replaced, False if this was new
        """
        existed = name in self._types
        self._types.pop(name, None)
        self.register(name, cls, **metadata)
        return existed

    def get(self, name: str, expected_type: Optional[type] = None) -> type:
        """Get a registered class by name.

        Args:
            name: Provider name
            expected_type: Optional base class the result must subclass

        Raises:
            KeyError: If the name is not registered
            TypeError: If the class is not a subclass of expected_type
        """
        if name not in self._types:
            raise KeyError(f"Provider type '{name}' not found in registry")
        cls = self._types[name]
        if expected_type is not None and not issubclass(cls, expected_type):
            raise TypeError(f"Provider type '{name}' is not a subclass of {qualified_name(expected_type)}")
        return cls

    def get_metadata(self, name: str) -> dict[str, Any]:
        if name not in self._metadata:
            raise KeyError(f"Provider type '{name}' not found in registry")
        return dict(self._metadata[name])

    def try_resolve(self, name: str) -> Optional[type]:
        return self._types.get(name)

    def contains(self, name: str) -> bool:
        return name in self._types

    def list(self, filter_criteria: Optional[dict[str, Any]] = None) -> list[str]:
        """List registered names, optionally filtered by metadata equality.

        Args:
            filter_criteria: Metadata key/value pairs every result must match

        Returns:
            Names in registration order
        """
        if not filter_criteria:
            return list(self._types)
        return [
            name
            for name, metadata in self._metadata.items()
            if all(key in metadata and metadata[key] == value for key, value in filter_criteria.items())
        ]

    def remove(self, name: str) -> bool:
        """Remove a registration.

        Returns:
            True if the name was registered, False otherwise
        """
        if name not in self._types:
            return False
        del self._types[name]
        del self._metadata[name]
        logger.debug(f"Removed provider type: {name}")
        return True

    def clear(self) -> None:
        self._types.clear()
        self._metadata.clear()


class ChainedTypeRegistry(TypeRegistry):
    """Consults several registries in order; the first hit wins."""

    def __init__(self, *registries: TypeRegistry):
        self._registries = tuple(registries)

    @property
    def registries(self) -> tuple[TypeRegistry, ...]:
        return self._registries

    def try_resolve(self, name: str) -> Optional[type]:
        for registry in self._registries:
            cls = registry.try_resolve(name)
            if cls is not None:
                return cls
        return None


# Global registry for explicitly registered providers
provider_type_registry = ProviderTypeRegistry()


@overload
def register_provider(target: T) -> T: ...


@overload
def register_provider(
    target: Optional[str] = None,
    *,
    registry: Optional[ProviderTypeRegistry] = None,
    **metadata: Any,
) -> Callable[[T], T]: ...


def register_provider(
    target: Union[T, str, None] = None,
    *,
    registry: Optional[ProviderTypeRegistry] = None,
    **metadata: Any,
) -> Union[T, Callable[[T], T]]:
    """Class decorator registering a provider class.

    The class is registered under its qualified name unless a name is given.

    Example:
        @register_provider
        class GzipCodec(Codec):
            pass

        @register_provider("codecs.zstd", registry=my_registry)
        class ZstdCodec(Codec):
            pass
    """
    target_registry = registry if registry is not None else provider_type_registry

    def decorator(cls: T) -> T:
        name = target if isinstance(target, str) else qualified_name(cls)
        target_registry.register(name, cls, **metadata)
        return cls

    if isinstance(target, type):
        return decorator(target)
    return decorator
