"""
Resource Loader
===============

Reads named ``key=value`` property resources from a resource namespace.

A namespace maps slash-separated logical names (``"environments/local"``) to
text. Three namespaces are provided:

1. MappingNamespace: in-memory ``{name: text}``, mostly for tests
2. DirectoryNamespace: ``<root>/<name>.properties`` files on disk
3. PackageNamespace: package data shipped with an installed distribution

The loader itself never caches; wrap it in ``CachingResourceLoader`` when
the same names are read repeatedly.
"""

import logging
import re
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from .errors import ConfigError, MalformedFileError, NotFoundError
from .properties import EMPTY, PropertySet

logger = logging.getLogger(__name__)

PROPERTIES_SUFFIX = ".properties"

# Only CR, LF and CRLF end a line; other Unicode separators stay in the value.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _split_name(name: str) -> Optional[list]:
    """Split a logical name into path segments, or None if it is not a safe relative name."""
    if not name or name.startswith("/") or "\\" in name:
        return None
    parts = name.split("/")
    if any(part in ("", ".", "..") for part in parts):
        return None
    return parts


class MappingNamespace:
    """Namespace backed by an in-memory mapping of name to file text."""

    def __init__(self, entries: Optional[Mapping[str, str]] = None):
        self._entries = dict(entries or {})

    def read_text(self, name: str) -> Optional[str]:
        return self._entries.get(name)

    def __repr__(self) -> str:
        return f"MappingNamespace({sorted(self._entries)})"


class DirectoryNamespace:
    """Namespace backed by ``.properties`` files under a root directory."""

    def __init__(self, root: Union[str, Path], suffix: str = PROPERTIES_SUFFIX):
        self.root = Path(root)
        self.suffix = suffix

    def path_for(self, name: str) -> Optional[Path]:
        parts = _split_name(name)
        if parts is None:
            logger.debug(f"Rejected resource name outside namespace root: {name!r}")
            return None
        parts[-1] = parts[-1] + self.suffix
        return self.root.joinpath(*parts)

    def read_text(self, name: str) -> Optional[str]:
        path = self.path_for(name)
        if path is None or not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def __repr__(self) -> str:
        return f"DirectoryNamespace({str(self.root)!r})"


class PackageNamespace:
    """Namespace backed by package data, e.g. the resources bundled with propstack."""

    def __init__(self, package: str = "propstack.resources", suffix: str = PROPERTIES_SUFFIX):
        self.package = package
        self.suffix = suffix

    def read_text(self, name: str) -> Optional[str]:
        parts = _split_name(name)
        if parts is None:
            return None
        parts[-1] = parts[-1] + self.suffix
        resource = resources.files(self.package)
        for part in parts:
            resource = resource.joinpath(part)
        if not resource.is_file():
            return None
        return resource.read_text(encoding="utf-8")

    def __repr__(self) -> str:
        return f"PackageNamespace({self.package!r})"


def parse_properties(text: str, name: str = "<string>") -> PropertySet:
    """
    Parse ``key=value`` lines into a PropertySet.

    Args:
        text: File content
        name: Resource name, used in error messages

    Returns:
        Parsed properties in file order

    Raises:
        MalformedFileError: If any non-comment line has no ``=`` or an empty key
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    pairs = []
    for line_number, raw_line in enumerate(_LINE_BREAK.split(text), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise MalformedFileError(name, line_number, raw_line)
        key = key.strip()
        if not key:
            raise MalformedFileError(name, line_number, raw_line, reason="empty key")
        pairs.append((key, value.strip()))
    return PropertySet(pairs)


class LoadStatus(Enum):
    """Outcome of a single resource load."""
    OK = "ok"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class LoadResult:
    """Non-raising result of ``try_load``."""
    name: str
    status: LoadStatus
    properties: PropertySet = EMPTY
    error: Optional[ConfigError] = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.OK

    def unwrap(self) -> PropertySet:
        """Return the properties or raise the recorded error."""
        if self.error is not None:
            raise self.error
        return self.properties


class ResourceLoader:
    """Loads property sets by logical name from a namespace."""

    def __init__(self, namespace):
        """
        Initialize resource loader.

        Args:
            namespace: Any object with ``read_text(name) -> Optional[str]``
        """
        self.namespace = namespace

    def load(self, name: str) -> PropertySet:
        """
        Load and parse one resource.

        Raises:
            NotFoundError: If the namespace has no entry for ``name``
            MalformedFileError: If the resource is not valid UTF-8 or not a valid property file
        """
        try:
            text = self.namespace.read_text(name)
        except UnicodeDecodeError as e:
            line_number = e.object[:e.start].count(b"\n") + 1
            raise MalformedFileError(name, line_number, reason="invalid UTF-8") from e
        if text is None:
            raise NotFoundError(name)
        properties = parse_properties(text, name)
        logger.debug(f"Loaded {len(properties)} properties from {name}")
        return properties

    def try_load(self, name: str) -> LoadResult:
        """Load ``name`` and report the outcome as a LoadResult instead of raising."""
        try:
            return LoadResult(name, LoadStatus.OK, self.load(name))
        except NotFoundError as e:
            return LoadResult(name, LoadStatus.NOT_FOUND, error=e)
        except MalformedFileError as e:
            return LoadResult(name, LoadStatus.MALFORMED, error=e)


class CachingResourceLoader:
    """
    Caches load outcomes by name with at-most-one read per name.

    The first caller for a name performs the read; callers arriving while it
    is in flight block on the same future and receive the same outcome.
    Failures are cached too, so a missing or malformed resource is read once.
    """

    def __init__(self, loader: ResourceLoader):
        self.loader = loader
        self._lock = threading.Lock()
        self._results: Dict[str, Future] = {}

    @property
    def namespace(self):
        return self.loader.namespace

    def try_load(self, name: str) -> LoadResult:
        with self._lock:
            future = self._results.get(name)
            owner = future is None
            if owner:
                future = Future()
                self._results[name] = future

        if owner:
            try:
                future.set_result(self.loader.try_load(name))
            except BaseException as e:
                # Unexpected failure (e.g. I/O error): release waiters, allow a retry.
                with self._lock:
                    self._results.pop(name, None)
                future.set_exception(e)
                raise
        return future.result()

    def load(self, name: str) -> PropertySet:
        return self.try_load(name).unwrap()

    def clear(self) -> None:
        with self._lock:
            self._results.clear()
