"""Import based type lookup.

Resolves dotted provider names such as ``package.codecs.GzipCodec`` or
``package.codecs.Outer.Inner`` by importing the longest importable module
prefix and walking the remaining attributes. Nothing is instantiated; the
only code that runs is the module import itself.
"""

import importlib
import inspect
import logging
from typing import Iterator, Optional

from pydantic import Field

from spilib.core.models import StrictBaseModel
from spilib.core.registry.registry import TypeRegistry

logger = logging.getLogger(__name__)


class ModuleAttributePath(StrictBaseModel):
    """One way of splitting a dotted name into module and attribute path."""

    module_name: str = Field(description="Module name to import")
    attribute_path: tuple[str, ...] = Field(description="Attributes to walk from the module")


def split_candidates(name: str) -> Iterator[ModuleAttributePath]:
    """Yield module/attribute splits of a dotted name, longest module first.

    Args:
        name: Dotted name, e.g. ``a.b.C``

    Yields:
        ``a.b.C`` + (), ``a.b`` + ("C",), ``a`` + ("b", "C")
    """
    parts = name.split(".")
    for i in range(len(parts), 0, -1):
        yield ModuleAttributePath(module_name=".".join(parts[:i]), attribute_path=tuple(parts[i:]))


def _is_missing(module_name: str, error: ModuleNotFoundError) -> bool:
    """Check whether the error reports module_name (or a parent of it) as missing."""
    if error.name is None:
        return True
    return module_name == error.name or module_name.startswith(error.name + ".")


class ImportTypeRegistry(TypeRegistry):
    """Registry that finds classes by importing their modules.

    A module that exists but fails to import, including one whose own
    dependencies are missing, propagates its exception.
    """

    def try_resolve(self, name: str) -> Optional[type]:
        for candidate in split_candidates(name):
            try:
                module = importlib.import_module(candidate.module_name)
            except ModuleNotFoundError as e:
                if _is_missing(candidate.module_name, e):
                    continue
                raise

            obj: object = module
            for attribute in candidate.attribute_path:
                if not hasattr(obj, attribute):
                    logger.debug(f"Module '{candidate.module_name}' has no attribute path for '{name}'")
                    return None
                obj = getattr(obj, attribute)

            if not inspect.isclass(obj):
                logger.debug(f"'{name}' resolves to a {type(obj).__name__}, not a class")
                return None
            return obj

        logger.debug(f"No importable module found for '{name}'")
        return None
