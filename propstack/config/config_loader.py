"""Lightweight ConfigLoader used by applications and the CLI.

Wires the resolution layers together:
- Context: overrides, process properties and environment captured once
- Profile: first of override / ``ENVIRONMENT`` / property, aliases applied
- Registry: override > properties > environment > ``environments/<profile>`` > ``application``
- Resolver: typed and masked lookups over the registry

Resources default to the ``.properties`` files bundled in ``propstack.resources``.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Union

from .features import CapabilityRegistry
from .profile_resolver import ProfileResolver, candidates_from
from .resource_loader import CachingResourceLoader, DirectoryNamespace, PackageNamespace, ResourceLoader
from .resolver import ConfigResolver, SensitivePatterns
from .source_registry import DEFAULTS_RESOURCE, ConfigContext, SourceRegistry
from .overlay import OverlayMerger
from .properties import PropertySet

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Resolves the effective configuration for one profile."""

    def __init__(
        self,
        context: Optional[ConfigContext] = None,
        namespace=None,
        profile: Optional[str] = None,
        cache: bool = True,
        defaults_name: str = DEFAULTS_RESOURCE,
        sensitive: Optional[SensitivePatterns] = None,
        profile_resolver: Optional[ProfileResolver] = None,
        capabilities: Optional[Mapping[str, bool]] = None,
    ):
        self.context = context if context is not None else ConfigContext.capture()
        if isinstance(namespace, (str, Path)):
            namespace = DirectoryNamespace(namespace)
        self.namespace = namespace if namespace is not None else PackageNamespace()

        loader = ResourceLoader(self.namespace)
        self.loader: Union[ResourceLoader, CachingResourceLoader] = CachingResourceLoader(loader) if cache else loader

        self.profile_resolver = profile_resolver or ProfileResolver()
        self.profile = self.profile_resolver.resolve([profile] + candidates_from(self.context))

        self.registry = SourceRegistry.build(self.profile, self.loader, self.context, defaults_name)
        self.resolver = ConfigResolver(self.registry, sensitive)
        self.capabilities = CapabilityRegistry(capabilities)
        logger.info(f"Configuration loaded for profile '{self.profile}' from {self.namespace!r}")

    # ------------------------------------------------------------------
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.resolver.get_string(key, default)

    def overlay(self, base_name: str, overlay_name: str) -> PropertySet:
        """Load two resources and merge them, overlay winning.

        Raises NotFoundError or MalformedFileError from either load.
        """
        return OverlayMerger.merge(self.loader.load(base_name), self.loader.load(overlay_name))

    def __getitem__(self, key: str) -> str:
        value = self.resolver.get_string(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: str) -> bool:
        return self.resolver.get_string(key) is not None


__all__ = ["ConfigLoader"]
