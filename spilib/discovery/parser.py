"""Provider-configuration file parser.

A configuration resource is UTF-8 text listing one provider name per line.
``#`` starts a comment that runs to the end of the line, and blank lines are
ignored. Anything else must be a single dotted identifier, for example::

    # Codecs shipped with this distribution
    mypackage.codecs.GzipCodec
    mypackage.codecs.ZstdCodec   # preferred
"""

import io
import logging
from collections.abc import MutableSet
from typing import Optional

from spilib.core.errors.errors import ConfigurationSyntaxError, ResourceIOError
from spilib.core.errors.models import ResourceErrorContext, SyntaxErrorContext

from .resources import ConfigurationResource

logger = logging.getLogger(__name__)

COMMENT_CHAR = "#"
NAMESPACE_SEPARATOR = "."


def is_identifier_start(char: str) -> bool:
    return char.isidentifier()


def is_identifier_part(char: str) -> bool:
    return ("_" + char).isidentifier()


def is_valid_provider_name(text: str) -> bool:
    """Check that text is a legal provider name.

    The first character must start an identifier; every later character must
    continue one or be the namespace separator.
    """
    if not text or not is_identifier_start(text[0]):
        return False
    return all(char == NAMESPACE_SEPARATOR or is_identifier_part(char) for char in text[1:])


class ConfigurationParser:
    """Parses configuration resources for one capability."""

    def __init__(self, capability_name: str, encoding: str = "utf-8"):
        self._capability_name = capability_name
        self._encoding = encoding

    @property
    def capability_name(self) -> str:
        return self._capability_name

    def parse_line(self, resource: ConfigurationResource, line: str, line_number: int) -> Optional[str]:
        """Validate one line.

        Args:
            resource: Resource the line was read from, for error reporting
            line: Raw line text
            line_number: 1-based line number

        Returns:
            The provider name on the line, or None for blank and comment-only lines

        Raises:
            ConfigurationSyntaxError: If the line is not a single legal provider name
        """
        comment_index = line.find(COMMENT_CHAR)
        if comment_index >= 0:
            line = line[:comment_index]
        line = line.strip()
        if not line:
            return None

        if " " in line or "\t" in line:
            raise self._syntax_error(resource, line_number, line, "Illegal configuration-file syntax")
        if not is_valid_provider_name(line):
            raise self._syntax_error(resource, line_number, line, f"Illegal provider-class name: {line}")
        return line

    def parse(self, resource: ConfigurationResource, seen: MutableSet[str]) -> list[str]:
        """Read a whole resource and return the names not seen before.

        New names are added to ``seen`` as they are found, so passing the same
        set for every resource of one discovery keeps names unique across all
        of them. The resource is closed on every exit path.

        Args:
            resource: Resource to read
            seen: Names already produced in this discovery operation

        Returns:
            New provider names in file order

        Raises:
            ConfigurationSyntaxError: If a line is illegal
            ResourceIOError: If the resource cannot be opened, read or closed
        """
        names: list[str] = []
        try:
            stream = resource.open()
        except OSError as e:
            raise self._io_error(resource, "open", "Error reading configuration file", e) from e

        reader: Optional[io.TextIOWrapper] = None
        failed = True
        try:
            reader = io.TextIOWrapper(stream, encoding=self._encoding)
            for line_number, line in enumerate(reader, start=1):
                name = self.parse_line(resource, line, line_number)
                if name is not None and name not in seen:
                    seen.add(name)
                    names.append(name)
            failed = False
        except (OSError, ValueError, LookupError) as e:
            # ValueError covers undecodable bytes, LookupError an unknown encoding
            raise self._io_error(resource, "read", "Error reading configuration file", e) from e
        finally:
            self._close(resource, reader if reader is not None else stream, failed)

        logger.debug(f"Parsed {len(names)} new provider names from {resource.identity}")
        return names

    def _close(self, resource: ConfigurationResource, stream, failed: bool) -> None:
        try:
            stream.close()
        except OSError as e:
            if not failed:
                raise self._io_error(resource, "close", "Error closing configuration file", e) from e
            # The first failure is the one reported.
            logger.debug(f"Ignoring close failure for {resource.identity} after an earlier error: {e}")

    def _syntax_error(
        self, resource: ConfigurationResource, line_number: int, content: str, detail: str
    ) -> ConfigurationSyntaxError:
        return ConfigurationSyntaxError(
            detail,
            self._capability_name,
            SyntaxErrorContext(resource=resource.identity, line_number=line_number, content=content),
        )

    def _io_error(
        self, resource: ConfigurationResource, operation: str, detail: str, cause: Exception
    ) -> ResourceIOError:
        return ResourceIOError(
            detail,
            self._capability_name,
            ResourceErrorContext(resource=resource.identity, operation=operation),
            cause,
        )
