"""Lazy, two-level iterator over provider names.

The outer level walks configuration resources, the inner level walks the
names parsed from the current resource. A resource is only read when a name
is requested and every earlier resource is exhausted; once read it is
parsed to the end.
"""

import logging
from typing import Iterable, Iterator, Optional

from spilib.core.errors.errors import ExhaustedError

from .parser import ConfigurationParser
from .resources import ConfigurationResource

logger = logging.getLogger(__name__)


class ProviderNameIterator:
    """Pull-based iterator yielding each provider name once per discovery.

    Not thread-safe: one instance must be consumed by one thread.
    """

    def __init__(self, resources: Iterable[ConfigurationResource], parser: ConfigurationParser):
        self._parser = parser
        self._resources: Iterator[ConfigurationResource] = iter(resources)
        self._pending: Optional[Iterator[str]] = None
        self._next_name: Optional[str] = None
        self._seen: set[str] = set()
        self._resources_read = 0

    @property
    def capability_name(self) -> str:
        return self._parser.capability_name

    @property
    def resources_read(self) -> int:
        """Number of resources parsed so far."""
        return self._resources_read

    def has_next(self) -> bool:
        """Check for another name, reading further resources if needed.

        Raises:
            ConfigurationSyntaxError: If a newly read resource has an illegal line
            ResourceIOError: If a resource cannot be located or read
        """
        if self._next_name is not None:
            return True
        while True:
            if self._pending is not None:
                name = next(self._pending, None)
                if name is not None:
                    self._next_name = name
                    return True
                self._pending = None
            resource = next(self._resources, None)
            if resource is None:
                return False
            self._pending = iter(self._parser.parse(resource, self._seen))
            self._resources_read += 1

    def next(self) -> str:
        """Return the next name.

        Raises:
            ExhaustedError: If no name remains
        """
        if not self.has_next():
            raise ExhaustedError(self.capability_name)
        name = self._next_name
        self._next_name = None
        logger.debug(f"Next provider name for {self.capability_name}: {name}")
        return name

    def __iter__(self) -> "ProviderNameIterator":
        return self

    def __next__(self) -> str:
        if not self.has_next():
            raise StopIteration
        return self.next()
