"""Resource locator: finds the configuration resources for a capability."""

import logging
from typing import Iterator

from spilib.core.errors.errors import ResourceIOError
from spilib.core.errors.models import ResourceErrorContext
from spilib.core.settings.settings import DEFAULT_RESOURCE_PREFIX

from .context import SearchContext
from .resources import ConfigurationResource

logger = logging.getLogger(__name__)


class ResourceLocator:
    """Enumerates ``<prefix>/<capability>`` resources across a search context."""

    def __init__(self, search_context: SearchContext, prefix: str = DEFAULT_RESOURCE_PREFIX):
        self._search_context = search_context
        self._prefix = prefix.strip("/")

    def resource_name(self, capability_name: str) -> str:
        return f"{self._prefix}/{capability_name}"

    def locate(self, capability_name: str) -> Iterator[ConfigurationResource]:
        """Lazily yield resources declaring providers for a capability.

        Locations are queried in context order, each only once the previous
        one has been drained. No matches is a valid, empty result.

        Args:
            capability_name: Qualified name of the capability

        Yields:
            Configuration resources in search order

        Raises:
            ResourceIOError: If a location cannot be enumerated
        """
        resource_name = self.resource_name(capability_name)
        for location in self._search_context:
            try:
                found = list(location.find(resource_name))
            except OSError as e:
                raise ResourceIOError(
                    "Error locating configuration files",
                    capability_name,
                    ResourceErrorContext(resource=resource_name, operation="locate"),
                    e,
                ) from e
            for resource in found:
                logger.debug(f"Located {resource.identity} for {capability_name}")
                yield resource
