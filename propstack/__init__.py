"""
propstack - Layered Configuration Resolution
============================================

Combines explicit overrides, process properties, environment variables,
profile-specific resource files and defaults into one effective value per key.

Modules:
- config: Resource loading, profile resolution, source precedence, typed lookups
- utils: Logging utilities
- cli: Command line entry point
"""

__version__ = "1.0.0"
__author__ = "propstack Team"

from .config import (
    ConfigContext,
    ConfigLoader,
    ConfigResolver,
    OverlayMerger,
    ProfileResolver,
    PropertySet,
    ResourceLoader,
    SourceRegistry,
)
from .utils.logger import setup_logging, ResolutionLogger

__all__ = [
    "ConfigContext",
    "ConfigLoader",
    "ConfigResolver",
    "OverlayMerger",
    "ProfileResolver",
    "PropertySet",
    "ResourceLoader",
    "SourceRegistry",
    "setup_logging",
    "ResolutionLogger",
]
