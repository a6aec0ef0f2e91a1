"""
Configuration Resolver
======================

Looks up keys across a SourceRegistry and coerces them to typed values.

Lookups never raise for absent or badly formatted values:
- A key no source defines resolves to ``MISSING``
- Typed getters fall back to the caller's default on missing or unparsable
  content, and the ``*_result`` variants report when that happened
- Display helpers mask sensitive keys without touching stored values
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from .properties import PropertySet
from .source_registry import SourcePriority

logger = logging.getLogger(__name__)

MASK = "***MASKED***"
DEFAULT_SENSITIVE_PATTERNS = ("password", "secret", "token")
FEATURE_PREFIX = "FEATURE_"
FEATURE_PROPERTY_PREFIX = "feature."

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class _Missing:
    """Marker for a key that no source defines."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


@dataclass(frozen=True)
class ResolvedValue:
    """A value and the name of the source that produced it."""
    key: str
    raw: str
    source: str


@dataclass(frozen=True)
class CoercionResult:
    """Typed value plus whether the caller's default was used."""
    value: Any
    used_default: bool
    raw: Optional[str] = None


@dataclass(frozen=True)
class SensitivePatterns:
    """Case-insensitive substrings that mark a key as sensitive for display."""
    patterns: Tuple[str, ...] = DEFAULT_SENSITIVE_PATTERNS

    def __post_init__(self):
        object.__setattr__(self, "patterns", tuple(p.lower() for p in self.patterns if p))

    def matches(self, key: str) -> bool:
        lowered = key.lower()
        return any(pattern in lowered for pattern in self.patterns)


@dataclass(frozen=True)
class ProfileConfiguration:
    """Summary of the profile-dependent switches most callers display."""
    environment: str
    log_level: str
    debug_enabled: bool
    metrics_enabled: bool
    cache_enabled: bool
    security_strict: bool


def resolve_key(key: str, sources: Iterable) -> Union[ResolvedValue, _Missing]:
    """Return the value from the first source that defines ``key``, else MISSING."""
    for source in sources:
        raw = source.lookup(key)
        if raw is not None:
            return ResolvedValue(key, raw, source.name)
    return MISSING


def parse_bool(raw: str) -> Optional[bool]:
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def parse_int(raw: str) -> Optional[int]:
    if not _INT_PATTERN.fullmatch(raw):
        return None
    try:
        return int(raw)
    except ValueError:
        # Beyond the interpreter's integer string conversion limit
        return None


def mask_properties(properties: Mapping[str, str], patterns: Optional[SensitivePatterns] = None) -> PropertySet:
    """Return a display copy of ``properties`` with sensitive values masked."""
    patterns = patterns or SensitivePatterns()
    return PropertySet((k, MASK if patterns.matches(k) else v) for k, v in properties.items())


class ConfigResolver:
    """
    Typed, masked access to a resolved configuration.
    """

    def __init__(self, registry, sensitive: Optional[SensitivePatterns] = None):
        """
        Initialize resolver.

        Args:
            registry: SourceRegistry (or any ordered iterable of sources)
            sensitive: Patterns for display masking
        """
        self.registry = registry
        self.sensitive = sensitive or SensitivePatterns()

    def get(self, key: str) -> Union[ResolvedValue, _Missing]:
        return resolve_key(key, self.registry)

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        resolved = self.get(key)
        return default if resolved is MISSING else resolved.raw

    def get_bool_result(self, key: str, default: bool = False) -> CoercionResult:
        return self._coerce(key, default, parse_bool, "boolean")

    def get_bool(self, key: str, default: bool = False) -> bool:
        return self.get_bool_result(key, default).value

    def get_int_result(self, key: str, default: int = 0) -> CoercionResult:
        return self._coerce(key, default, parse_int, "integer")

    def get_int(self, key: str, default: int = 0) -> int:
        return self.get_int_result(key, default).value

    def _coerce(self, key, default, parser, type_name: str) -> CoercionResult:
        resolved = self.get(key)
        if resolved is MISSING:
            return CoercionResult(default, True)
        value = parser(resolved.raw)
        if value is None:
            shown = MASK if self.is_sensitive(key) else repr(resolved.raw)
            logger.warning(
                f"Value {shown} for '{key}' from {resolved.source} is not a valid {type_name}, "
                f"using default {default!r}"
            )
            return CoercionResult(default, True, resolved.raw)
        return CoercionResult(value, False, resolved.raw)

    def is_sensitive(self, key: str) -> bool:
        return self.sensitive.matches(key)

    def get_display_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Resolved value for display; sensitive keys are masked, missing keys give ``default``."""
        resolved = self.get(key)
        if resolved is MISSING:
            return default
        return MASK if self.is_sensitive(key) else resolved.raw

    def effective_properties(self) -> PropertySet:
        """
        Every key any source defines, with its resolved value.

        Keys are ordered by first appearance, walking from the lowest-priority
        source (defaults) up to the overrides. Environment variables only
        contribute values for keys another source defines.
        """
        keys = {}
        for source in reversed(tuple(self.registry)):
            if source.priority == SourcePriority.ENVIRONMENT.value:
                continue
            for key in source.properties:
                keys.setdefault(key, None)
        pairs = []
        for key in keys:
            resolved = self.get(key)
            if resolved is not MISSING:
                pairs.append((key, resolved.raw))
        return PropertySet(pairs)

    def display_properties(self) -> PropertySet:
        return mask_properties(self.effective_properties(), self.sensitive)

    def feature_flags(self, prefix: str = FEATURE_PREFIX, property_prefix: str = FEATURE_PROPERTY_PREFIX) -> PropertySet:
        """
        Ad-hoc feature switches, ordered by name.

        Collects environment variables starting with ``prefix`` and process
        properties starting with ``property_prefix``. Pass an empty
        ``property_prefix`` to list environment variables only.
        """
        pairs = []
        for source in self.registry:
            if source.priority == SourcePriority.ENVIRONMENT.value:
                pairs.extend(source.properties.with_prefix(prefix).items())
            elif source.priority == SourcePriority.PROPERTIES.value and property_prefix:
                pairs.extend(source.properties.with_prefix(property_prefix).items())
        return PropertySet(pairs).sorted()

    def profile_configuration(self) -> ProfileConfiguration:
        return ProfileConfiguration(
            environment=getattr(self.registry, "profile", None) or self.get_string("environment", "local"),
            log_level=self.get_string("log.level", "INFO"),
            debug_enabled=self.get_bool("feature.debug.enabled", False),
            metrics_enabled=self.get_bool("feature.metrics.enabled", False),
            cache_enabled=self.get_bool("feature.cache.enabled", True),
            security_strict=self.get_bool("feature.security.strict", False),
        )
