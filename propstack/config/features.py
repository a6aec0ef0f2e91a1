"""
Capability Registry
===================

Host-declared availability of optional features. The host states up front
which capabilities exist; nothing here probes imports or the runtime.
"""

from typing import Dict, List, Mapping, Optional, Tuple


class CapabilityRegistry:
    """Immutable mapping of feature name to availability flag."""

    def __init__(self, capabilities: Optional[Mapping[str, bool]] = None):
        self._capabilities: Dict[str, bool] = {name: bool(flag) for name, flag in (capabilities or {}).items()}

    def is_available(self, name: str) -> bool:
        """Unknown features are unavailable."""
        return self._capabilities.get(name, False)

    def available(self) -> List[str]:
        return [name for name, flag in self._capabilities.items() if flag]

    def missing(self) -> List[str]:
        return [name for name, flag in self._capabilities.items() if not flag]

    def items(self) -> List[Tuple[str, bool]]:
        return list(self._capabilities.items())

    def __contains__(self, name: str) -> bool:
        return name in self._capabilities

    def __len__(self) -> int:
        return len(self._capabilities)

    def __repr__(self) -> str:
        return f"CapabilityRegistry({self._capabilities!r})"
