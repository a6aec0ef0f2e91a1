"""
Profile Resolution
==================

Determines the canonical name of the active profile (environment).

Candidates are scanned in order and the first non-blank one wins. Short
aliases map to canonical names; anything else is accepted as its own
canonical name so that user-defined environments need no registration.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional

DEFAULT_PROFILE = "local"

PROFILE_ALIASES: Dict[str, str] = {
    "dev": "development",
    "prod": "production",
}

KNOWN_PROFILES = ("local", "development", "testing", "staging", "production")

PROFILE_PROPERTY = "environment"
PROFILE_ENV_VAR = "ENVIRONMENT"


@dataclass(frozen=True)
class Profile:
    """A canonical profile name and the aliases that resolve to it."""
    canonical_name: str
    aliases: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def known(self) -> bool:
        return self.canonical_name in KNOWN_PROFILES

    def __str__(self) -> str:
        return self.canonical_name


class ProfileResolver:
    """Resolves candidate profile names to one canonical profile."""

    def __init__(self, aliases: Optional[Dict[str, str]] = None, default: str = DEFAULT_PROFILE):
        if not default or not default.strip():
            raise ValueError("Default profile name must not be empty")
        table = PROFILE_ALIASES if aliases is None else aliases
        self.aliases = {alias.lower(): canonical for alias, canonical in table.items()}
        self.default = default

    def canonical(self, name: str) -> str:
        """Map one name through the alias table; unknown names pass through unchanged."""
        name = name.strip()
        return self.aliases.get(name.lower(), name)

    def resolve(self, candidates: Iterable[Optional[str]] = ()) -> str:
        """
        Resolve the active profile.

        Args:
            candidates: Ordered candidate names; None and blank entries are skipped

        Returns:
            Canonical profile name, never empty
        """
        for candidate in candidates:
            if candidate is not None and candidate.strip():
                return self.canonical(candidate)
        return self.default

    def profile(self, name: str) -> Profile:
        canonical = self.canonical(name) if name and name.strip() else self.default
        aliases = frozenset(a for a, c in self.aliases.items() if c == canonical)
        return Profile(canonical, aliases)

    def is_active(self, profile_id: str, active: str) -> bool:
        """True when ``profile_id`` names the same profile as ``active``, aliases included."""
        return self.resolve([profile_id]) == self.resolve([active])


def candidates_from(context) -> List[Optional[str]]:
    """Standard candidate order: explicit override, environment variable, process property."""
    return [
        context.overrides.get(PROFILE_PROPERTY),
        context.environ.get(PROFILE_ENV_VAR),
        context.properties.get(PROFILE_PROPERTY),
    ]
