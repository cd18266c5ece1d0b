"""Search context: the ordered locations scanned for configuration resources."""

import logging
import os
import sys
import zipfile
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from spilib.core.settings.settings import SpiSettings, get_settings

from .locations import DirectoryLocation, SearchLocation, ZipArchiveLocation

logger = logging.getLogger(__name__)


def location_for_path(entry: Union[str, Path]) -> Optional[SearchLocation]:
    """Map a search path entry to a location.

    Args:
        entry: A directory or a zip archive path; ``""`` means the current directory

    Returns:
        The matching location, or None for entries that are neither or cannot be inspected
    """
    path = Path(entry) if entry else Path(os.getcwd())
    try:
        if path.is_dir():
            return DirectoryLocation(path)
        if path.is_file() and zipfile.is_zipfile(path):
            return ZipArchiveLocation(path)
    except OSError as e:
        logger.debug(f"Cannot inspect search path entry {str(entry)[:200]!r}: {e}")
    return None


class SearchContext:
    """An immutable, ordered collection of search locations.

    Resources are reported in location order; duplicate locations are
    dropped, keeping the first.
    """

    def __init__(self, locations: Iterable[SearchLocation] = ()):
        unique: list[SearchLocation] = []
        for location in locations:
            if location not in unique:
                unique.append(location)
        self._locations = tuple(unique)

    @property
    def locations(self) -> tuple[SearchLocation, ...]:
        return self._locations

    def __iter__(self) -> Iterator[SearchLocation]:
        return iter(self._locations)

    def __len__(self) -> int:
        return len(self._locations)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SearchContext) and other._locations == self._locations

    def __hash__(self) -> int:
        return hash(self._locations)

    def __repr__(self) -> str:
        return f"SearchContext({list(self._locations)!r})"

    @classmethod
    def from_paths(cls, paths: Iterable[Union[str, Path]]) -> "SearchContext":
        """Build a context from directory and archive paths, skipping anything else."""
        locations = []
        for entry in paths:
            location = location_for_path(entry)
            if location is None:
                logger.debug(f"Skipping search path entry {entry!r}: not a directory or zip archive")
                continue
            locations.append(location)
        return cls(locations)

    @classmethod
    def from_sys_path(cls) -> "SearchContext":
        """Build a context from the interpreter's current ``sys.path``."""
        return cls.from_paths(list(sys.path))

    @classmethod
    def default(cls, settings: Optional[SpiSettings] = None) -> "SearchContext":
        """Build the default context.

        The configured extra search paths come first, followed by ``sys.path``
        when ``include_sys_path`` is set. ``sys.path`` is read at call time.

        Args:
            settings: Settings to use; the process-wide settings when omitted
        """
        settings = settings if settings is not None else get_settings()
        paths: list[Union[str, Path]] = list(settings.search_paths)
        if settings.include_sys_path:
            paths.extend(sys.path)
        context = cls.from_paths(paths)
        logger.debug(f"Default search context has {len(context)} locations")
        return context

    def __add__(self, other: "SearchContext") -> "SearchContext":
        if not isinstance(other, SearchContext):
            return NotImplemented
        return SearchContext(self._locations + other._locations)
