"""Search locations.

A location answers "which resources named X do you hold". Directories and
zip archives mirror the two kinds of ``sys.path`` entries; the in-memory
location lets a host contribute resources without touching the filesystem.
"""

import logging
import zipfile
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Iterator, Sequence, Union

from .resources import ConfigurationResource, FileResource, InMemoryResource, ZipEntryResource

logger = logging.getLogger(__name__)

ResourceContent = Union[str, bytes]


class SearchLocation(ABC):
    """Base class for locations in a search context."""

    @abstractmethod
    def find(self, resource_name: str) -> Iterator[ConfigurationResource]:
        """Yield every resource with the given slash-separated name.

        Raises:
            OSError: If the location cannot be enumerated
        """
        pass


class DirectoryLocation(SearchLocation):
    """A directory whose tree may contain resources."""

    def __init__(self, root: Union[str, Path]):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def find(self, resource_name: str) -> Iterator[ConfigurationResource]:
        path = self._root.joinpath(*resource_name.split("/"))
        if path.is_file():
            logger.debug(f"Found resource {path}")
            yield FileResource(path)

    def __repr__(self) -> str:
        return f"DirectoryLocation({str(self._root)!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DirectoryLocation) and other._root == self._root

    def __hash__(self) -> int:
        return hash(("dir", self._root))


class ZipArchiveLocation(SearchLocation):
    """A zip archive (wheel, egg or zipapp) on the search path."""

    def __init__(self, archive: Union[str, Path]):
        self._archive = Path(archive)

    @property
    def archive(self) -> Path:
        return self._archive

    def find(self, resource_name: str) -> Iterator[ConfigurationResource]:
        try:
            with zipfile.ZipFile(self._archive) as archive:
                names = archive.namelist()
        except zipfile.BadZipFile as e:
            raise OSError(f"Cannot enumerate {self._archive}: {e}") from e
        if resource_name in names:
            logger.debug(f"Found resource {self._archive}!/{resource_name}")
            yield ZipEntryResource(self._archive, resource_name)

    def __repr__(self) -> str:
        return f"ZipArchiveLocation({str(self._archive)!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ZipArchiveLocation) and other._archive == self._archive

    def __hash__(self) -> int:
        return hash(("zip", self._archive))


class InMemoryLocation(SearchLocation):
    """A fixed set of resources held in memory.

    Each resource name maps to one content value or a sequence of them;
    a sequence yields one resource per entry, in order.
    """

    def __init__(
        self,
        resources: Mapping[str, Union[ResourceContent, Sequence[ResourceContent]]],
        label: str = "memory",
    ):
        self._label = label
        self._resources: dict[str, tuple[ResourceContent, ...]] = {}
        for name, content in resources.items():
            if isinstance(content, (str, bytes)):
                self._resources[name] = (content,)
            else:
                self._resources[name] = tuple(content)

    @property
    def label(self) -> str:
        return self._label

    def find(self, resource_name: str) -> Iterator[ConfigurationResource]:
        contents = self._resources.get(resource_name, ())
        for index, content in enumerate(contents):
            identity = f"memory:{self._label}/{resource_name}"
            if len(contents) > 1:
                identity = f"{identity}#{index}"
            yield InMemoryResource(identity, content)

    def __repr__(self) -> str:
        return f"InMemoryLocation(label={self._label!r}, names={sorted(self._resources)!r})"
