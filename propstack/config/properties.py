"""
Property Sets
=============

Immutable, insertion-ordered string mappings shared by every layer of the
resolution engine.
"""

from collections.abc import Mapping
from typing import Iterable, Iterator, Tuple, Union

PropertyInput = Union[Mapping, Iterable[Tuple[str, str]], None]


class PropertySet(Mapping):
    """
    Ordered mapping from string key to string value.

    Keys are unique and keep the position of their first occurrence; a later
    duplicate only replaces the value. Two PropertySets are equal only when
    they hold the same pairs in the same order. The set cannot be modified after
    construction, so it can be shared freely between threads.
    """

    __slots__ = ("_data",)

    def __init__(self, data: PropertyInput = None):
        items = {}
        if data is not None:
            pairs = data.items() if isinstance(data, Mapping) else data
            for key, value in pairs:
                if not isinstance(key, str) or not isinstance(value, str):
                    raise TypeError(f"Property keys and values must be strings, got {key!r}={value!r}")
                items[key] = value
        object.__setattr__(self, "_data", items)

    def __setattr__(self, name, value):
        raise AttributeError("PropertySet is immutable")

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"PropertySet({self._data!r})"

    def __eq__(self, other):
        if isinstance(other, PropertySet):
            return list(self._data.items()) == list(other._data.items())
        return Mapping.__eq__(self, other)

    def __hash__(self):
        return hash(frozenset(self._data.items()))

    def to_dict(self) -> dict:
        """Return a mutable copy preserving order."""
        return dict(self._data)

    def with_prefix(self, prefix: str) -> "PropertySet":
        """Return the subset whose keys start with ``prefix``."""
        return PropertySet((k, v) for k, v in self._data.items() if k.startswith(prefix))

    def sorted(self) -> "PropertySet":
        """Return a copy ordered by key, for stable display."""
        return PropertySet(sorted(self._data.items()))


EMPTY = PropertySet()
