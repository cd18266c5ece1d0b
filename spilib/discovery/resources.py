"""Configuration resource handles.

A resource is opened once, read to the end and closed by the parser. The
handle itself holds no open file.
"""

import io
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Union


class ConfigurationResource(ABC):
    """A single provider-configuration file found in a search location."""

    @property
    @abstractmethod
    def identity(self) -> str:
        """Stable, human readable identity used in log and error messages."""
        pass

    @abstractmethod
    def open(self) -> BinaryIO:
        """Open the resource for reading.

        Raises:
            OSError: If the resource cannot be opened
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.identity!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ConfigurationResource) and type(other) is type(self) and other.identity == self.identity

    def __hash__(self) -> int:
        return hash((type(self), self.identity))


class FileResource(ConfigurationResource):
    """A resource stored as a file on disk."""

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @property
    def identity(self) -> str:
        return str(self._path)

    def open(self) -> BinaryIO:
        return open(self._path, "rb")


class ZipEntryResource(ConfigurationResource):
    """A resource stored as a member of a zip archive (wheel, egg, zipapp)."""

    def __init__(self, archive: Path, member: str):
        self._archive = archive
        self._member = member

    @property
    def identity(self) -> str:
        return f"{self._archive}!/{self._member}"

    def open(self) -> BinaryIO:
        # The member is small; read it whole so the archive is closed before parsing starts.
        try:
            with zipfile.ZipFile(self._archive) as archive:
                data = archive.read(self._member)
        except (zipfile.BadZipFile, KeyError) as e:
            raise OSError(f"Cannot read {self.identity}: {e}") from e
        return io.BytesIO(data)


class InMemoryResource(ConfigurationResource):
    """A resource held in memory."""

    def __init__(self, identity: str, content: Union[str, bytes], encoding: str = "utf-8"):
        self._identity = identity
        self._data = content.encode(encoding) if isinstance(content, str) else content

    @property
    def identity(self) -> str:
        return self._identity

    def open(self) -> BinaryIO:
        return io.BytesIO(self._data)
