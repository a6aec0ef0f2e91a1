"""Configuration package.

Layered property resolution: resource loading, profile aliasing, source
precedence, typed lookups with masking, and overlay merging. ConfigLoader
ties the layers together.
"""
from .config_loader import ConfigLoader  # noqa: F401
from .errors import ConfigError, MalformedFileError, NotFoundError  # noqa: F401
from .features import CapabilityRegistry  # noqa: F401
from .overlay import OverlayMerger  # noqa: F401
from .profile_resolver import Profile, ProfileResolver  # noqa: F401
from .properties import PropertySet  # noqa: F401
from .resolver import MASK, MISSING, ConfigResolver, ResolvedValue, SensitivePatterns  # noqa: F401
from .resource_loader import (  # noqa: F401
    CachingResourceLoader,
    DirectoryNamespace,
    LoadResult,
    LoadStatus,
    MappingNamespace,
    PackageNamespace,
    ResourceLoader,
)
from .source_registry import ConfigContext, ConfigSource, SourcePriority, SourceRegistry  # noqa: F401
