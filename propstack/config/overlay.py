"""
Overlay Merging
===============

Merges a base property set with an environment-specific overlay.
"""

from typing import Mapping

from .properties import EMPTY, PropertySet


class OverlayMerger:
    """Stateless merge of property sets where the overlay wins."""

    @staticmethod
    def merge(base: Mapping[str, str], overlay: Mapping[str, str]) -> PropertySet:
        """
        Merge ``overlay`` onto ``base``.

        Base keys keep their original order and take the overlay value when the
        overlay defines them. Keys only in the overlay follow, in overlay order.
        Neither input is modified.
        """
        merged = [(key, overlay[key] if key in overlay else value) for key, value in base.items()]
        merged.extend((key, value) for key, value in overlay.items() if key not in base)
        return PropertySet(merged)

    @classmethod
    def merge_all(cls, *property_sets: Mapping[str, str]) -> PropertySet:
        """Fold ``merge`` left to right; later sets win."""
        result = EMPTY
        for properties in property_sets:
            result = cls.merge(result, properties)
        return result
