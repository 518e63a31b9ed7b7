"""
Ordered container used for locale documents.

JSON objects keep their key order on disk, and the regenerated file must
mirror the source file key for key. ``OrderedMap`` stores the keys in a list
next to a dict index, so lookups stay O(1) and a key can be inserted at any
position without rebuilding the whole container.
"""

import copy
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple


class OrderedMap:
    """Ordered key -> value mapping with positional insertion."""

    __slots__ = ('_keys', '_values')

    def __init__(self, pairs: Optional[Iterable[Tuple[str, Any]]] = None):
        self._keys: List[str] = []
        self._values: Dict[str, Any] = {}
        if pairs is not None:
            for key, value in pairs:
                self[key] = value

    # json.load(object_pairs_hook=...) entry point
    @classmethod
    def from_pairs(cls, pairs: List[Tuple[str, Any]]) -> 'OrderedMap':
        return cls(pairs)

    @classmethod
    def from_plain(cls, value: Any) -> Any:
        """Convert nested dicts into OrderedMaps. Lists are left as they are."""
        if isinstance(value, OrderedMap) or not isinstance(value, dict):
            return value
        root = cls()
        stack = [(value, root)]
        while stack:
            plain, converted = stack.pop()
            for key, child in plain.items():
                if isinstance(child, dict) and not isinstance(child, OrderedMap):
                    container = cls()
                    stack.append((child, container))
                    child = container
                converted[key] = child
        return root

    def to_plain(self) -> Dict[str, Any]:
        """Convert to nested plain dicts (insertion ordered) and lists."""
        root: Dict[str, Any] = {}
        stack: List[Tuple[Any, Any]] = [(self, root)]
        while stack:
            node, plain = stack.pop()
            entries = node.items() if isinstance(node, OrderedMap) else enumerate(node)
            for key, child in entries:
                if isinstance(child, OrderedMap):
                    copied = {}
                    stack.append((child, copied))
                elif isinstance(child, list):
                    copied = []
                    stack.append((child, copied))
                else:
                    copied = child
                if isinstance(plain, dict):
                    plain[key] = copied
                else:
                    plain.append(copied)
        return root

    # -------------------------------------------------------------------------
    # Mapping protocol
    # -------------------------------------------------------------------------

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key not in self._values:
            self._keys.append(key)
        self._values[key] = value

    def __delitem__(self, key: str) -> None:
        del self._values[key]
        self._keys.remove(key)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedMap):
            return self._keys == other._keys and self._values == other._values
        if isinstance(other, dict):
            return self.to_plain() == other and self._keys == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        inner = ', '.join(f'{key!r}: {self._values[key]!r}' for key in self._keys)
        return f'OrderedMap({{{inner}}})'

    def __deepcopy__(self, memo: Dict[int, Any]) -> 'OrderedMap':
        return OrderedMap((key, copy.deepcopy(self._values[key], memo)) for key in self._keys)

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def keys(self) -> List[str]:
        return list(self._keys)

    def values(self) -> List[Any]:
        return [self._values[key] for key in self._keys]

    def items(self) -> List[Tuple[str, Any]]:
        return [(key, self._values[key]) for key in self._keys]

    # -------------------------------------------------------------------------
    # Positional operations
    # -------------------------------------------------------------------------

    def insert_at(self, position: int, key: str, value: Any) -> None:
        """Insert a new key at ``position`` (clamped to the container size)."""
        if key in self._values:
            raise KeyError(f'Key already present: {key!r}')
        position = max(0, min(position, len(self._keys)))
        self._keys.insert(position, key)
        self._values[key] = value

    def insert_after(self, anchor: Optional[str], key: str, value: Any) -> None:
        """Insert right after ``anchor``, or at the front when anchor is None."""
        position = 0 if anchor is None else self._keys.index(anchor) + 1
        self.insert_at(position, key, value)

    def align(self, ordered_keys: Iterable[str]) -> bool:
        """
        Reorder the keys listed in ``ordered_keys`` to follow that order.

        The slots those keys occupy are refilled in the given order; every
        other key stays in its slot. Returns True if anything moved.
        """
        wanted = [key for key in ordered_keys if key in self._values]
        wanted_set = set(wanted)
        slots = [i for i, key in enumerate(self._keys) if key in wanted_set]
        current = [self._keys[i] for i in slots]
        if current == wanted:
            return False
        for slot, key in zip(slots, wanted):
            self._keys[slot] = key
        return True


def is_container(value: Any) -> bool:
    return isinstance(value, OrderedMap)


def is_phrase(value: Any) -> bool:
    """Strings are the only translatable leaves; empty strings carry no text."""
    return isinstance(value, str) and value != ''
