"""
Source Registry
===============

Assembles the ordered configuration sources for one profile.

Precedence, highest first:
1. Override: explicit in-process overrides
2. Properties: process-wide configuration properties
3. Environment: environment variables
4. Profile: the ``environments/<profile>`` resource
5. Defaults: the global default resource

The order is fixed when the registry is built and never changes at lookup
time. All inputs are captured up front in a ConfigContext, so resolution
does not read ``os.environ`` or any other global state.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Mapping, Optional, Tuple, Union

from dotenv import dotenv_values

from .properties import EMPTY, PropertySet
from .resource_loader import LoadStatus

logger = logging.getLogger(__name__)

DEFAULTS_RESOURCE = "application"
PROFILE_RESOURCE_PREFIX = "environments/"


class SourcePriority(Enum):
    """Source priority levels (lower numbers are checked first)."""
    OVERRIDE = 1
    PROPERTIES = 2
    ENVIRONMENT = 3
    PROFILE = 4
    DEFAULTS = 5


def exact_key(key: str) -> Tuple[str, ...]:
    return (key,)


def environment_keys(key: str) -> Tuple[str, ...]:
    """Look up ``db.host`` as ``db.host`` first, then as ``DB_HOST``."""
    converted = key.upper().replace(".", "_").replace("-", "_")
    if converted == key:
        return (key,)
    return (key, converted)


@dataclass(frozen=True)
class ConfigSource:
    """One immutable layer of configuration."""
    name: str
    priority: int
    properties: PropertySet = EMPTY
    key_candidates: Callable[[str], Tuple[str, ...]] = exact_key

    def lookup(self, key: str) -> Optional[str]:
        """Return the value for ``key``, or None when the key is not configured here."""
        for candidate in self.key_candidates(key):
            if candidate in self.properties:
                return self.properties[candidate]
        return None


@dataclass(frozen=True)
class ConfigContext:
    """Snapshot of the in-process configuration inputs."""
    overrides: PropertySet = EMPTY
    properties: PropertySet = EMPTY
    environ: PropertySet = EMPTY

    @classmethod
    def capture(
        cls,
        overrides: Optional[Mapping[str, str]] = None,
        properties: Optional[Mapping[str, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
        dotenv_path: Optional[Union[str, Path]] = None,
    ) -> "ConfigContext":
        """
        Capture configuration inputs.

        Args:
            overrides: Explicit overrides (highest precedence)
            properties: Process-wide configuration properties
            environ: Environment variables; defaults to a copy of ``os.environ``
            dotenv_path: Optional ``.env`` file whose values sit below real variables

        Returns:
            Immutable context
        """
        env = dict(os.environ if environ is None else environ)
        if dotenv_path is not None:
            dotenv_path = Path(dotenv_path)
            if dotenv_path.is_file():
                file_values = {k: v for k, v in dotenv_values(dotenv_path).items() if v is not None}
                env = {**file_values, **env}
                logger.debug(f"Read {len(file_values)} variables from {dotenv_path}")
            else:
                logger.warning(f"Dotenv file not found: {dotenv_path}")
        return cls(
            overrides=PropertySet(overrides),
            properties=PropertySet(properties),
            environ=PropertySet(env),
        )


class SourceRegistry:
    """Immutable, priority-ordered sequence of configuration sources."""

    def __init__(self, sources, profile: Optional[str] = None):
        ordered = tuple(sorted(sources, key=lambda s: s.priority))
        priorities = [s.priority for s in ordered]
        if len(set(priorities)) != len(priorities):
            raise ValueError(f"Source priorities must be unique: {priorities}")
        self._sources = ordered
        self.profile = profile

    def __iter__(self) -> Iterator[ConfigSource]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __getitem__(self, index) -> ConfigSource:
        return self._sources[index]

    def __repr__(self) -> str:
        return f"SourceRegistry(profile={self.profile!r}, sources={self.names()})"

    def names(self) -> list:
        return [s.name for s in self._sources]

    def source(self, name: str) -> ConfigSource:
        for s in self._sources:
            if s.name == name:
                return s
        raise KeyError(name)

    def by_priority(self, priority: SourcePriority) -> Optional[ConfigSource]:
        for s in self._sources:
            if s.priority == priority.value:
                return s
        return None

    @classmethod
    def build(
        cls,
        profile: str,
        loader,
        context: Optional[ConfigContext] = None,
        defaults_name: str = DEFAULTS_RESOURCE,
    ) -> "SourceRegistry":
        """
        Build the registry for a profile.

        Args:
            profile: Canonical profile name
            loader: ResourceLoader or CachingResourceLoader
            context: Captured overrides, properties and environment
            defaults_name: Name of the global default resource

        Returns:
            Registry with five sources in fixed precedence

        Raises:
            MalformedFileError: If the profile or defaults resource is malformed
        """
        context = context or ConfigContext()
        profile_name = PROFILE_RESOURCE_PREFIX + profile

        sources = [
            ConfigSource("override", SourcePriority.OVERRIDE.value, context.overrides),
            ConfigSource("properties", SourcePriority.PROPERTIES.value, context.properties),
            ConfigSource("environment", SourcePriority.ENVIRONMENT.value, context.environ, environment_keys),
            ConfigSource(f"profile:{profile_name}", SourcePriority.PROFILE.value, _load_optional(loader, profile_name)),
            ConfigSource(f"defaults:{defaults_name}", SourcePriority.DEFAULTS.value, _load_optional(loader, defaults_name)),
        ]
        registry = cls(sources, profile=profile)
        logger.info(f"Built source registry for profile '{profile}': {registry.names()}")
        return registry


def _load_optional(loader, name: str) -> PropertySet:
    result = loader.try_load(name)
    if result.status is LoadStatus.NOT_FOUND:
        logger.info(f"Resource '{name}' not found, source contributes nothing")
        return EMPTY
    if result.status is LoadStatus.MALFORMED:
        logger.error(f"Failed to load resource '{name}': {result.error}")
        raise result.error
    return result.properties


__all__ = [
    "ConfigContext",
    "ConfigSource",
    "SourcePriority",
    "SourceRegistry",
    "environment_keys",
]
