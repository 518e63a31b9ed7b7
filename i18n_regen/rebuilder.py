"""
Structure-preserving merge of translations into the target document.

The source is walked a second time next to the target. Values the target
already has are left alone; missing strings are filled from the resolved
phrase map and missing non-string values are copied from the source. New
keys land between their source neighbours, and once a container is done its
source keys are aligned to the source order. Keys that exist only in the
target are kept where they are.
"""

import copy
from typing import Any, Collection, List, Optional

from .collector import PhraseMap
from .console import log_debug, log_warning
from .document import OrderedMap, is_container, is_phrase
from .errors import LookupInvariantViolation, StructuralMismatchError
from .walker import MISSING, PairVisitor, Visit, walk_pair


class Rebuilder(PairVisitor):
    """Inserts source-derived values into a target document."""

    def __init__(self, phrases: PhraseMap, ignore_values: Collection[str] = ()):
        self.phrases = phrases
        self.ignore_values = frozenset(ignore_values)
        self.overwrites: List[StructuralMismatchError] = []
        self.inserted = 0
        self.replaced = 0
        self._source_keys: List[List[str]] = []

    def run(self, source: OrderedMap, target: Any) -> OrderedMap:
        return walk_pair(source, target, self)

    # -------------------------------------------------------------------------
    # Walk callbacks
    # -------------------------------------------------------------------------

    def enter_container(self, visit: Visit, parent: Optional[OrderedMap], slot: Any) -> OrderedMap:
        if is_container(slot):
            container = slot
        else:
            container = OrderedMap()
            if parent is None:
                # Root of the target document
                if slot is not MISSING and slot is not None:
                    self._overwrite(visit, slot)
            elif slot is MISSING:
                self._insert(visit, parent, container)
            else:
                self._overwrite(visit, slot)
                parent[visit.key] = container

        self._source_keys.append(visit.node.keys())
        return container

    def leave_container(self, visit: Visit, container: Optional[OrderedMap]) -> None:
        keys = self._source_keys.pop()
        if container is not None and container.align(keys):
            log_debug(f"Reordered keys under '{'.'.join(visit.path) or '<root>'}'")

    def visit_leaf(self, visit: Visit, parent: Optional[OrderedMap], slot: Any) -> None:
        node = visit.node

        if slot is not MISSING:
            if is_phrase(node) and isinstance(slot, str) and slot in self.ignore_values:
                parent[visit.key] = self.lookup(node, visit.path)
                self.replaced += 1
            return

        if is_phrase(node):
            value = self.lookup(node, visit.path)
        else:
            # Empty strings, numbers, booleans, null and arrays
            value = copy.deepcopy(node)
        self._insert(visit, parent, value)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def lookup(self, phrase: str, path) -> str:
        translation = self.phrases.get(phrase)
        if not translation:
            raise LookupInvariantViolation(phrase, path)
        return translation

    def _insert(self, visit: Visit, parent: OrderedMap, value: Any) -> None:
        """Insert right after the closest preceding source sibling the target has."""
        siblings = self._source_keys[-1]
        anchor = None
        for i in range(visit.index - 1, -1, -1):
            if siblings[i] in parent:
                anchor = siblings[i]
                break
        parent.insert_after(anchor, visit.key, value)
        self.inserted += 1

    def _overwrite(self, visit: Visit, found: Any) -> None:
        mismatch = StructuralMismatchError(visit.path, found)
        self.overwrites.append(mismatch)
        log_warning(str(mismatch))


def rebuild(
    source: OrderedMap,
    target: Any,
    phrases: PhraseMap,
    ignore_values: Collection[str] = (),
) -> OrderedMap:
    """
    Merge ``source`` into ``target`` using the resolved ``phrases``.

    ``target`` is modified in place when it is a container; otherwise a new
    container is returned. Raises LookupInvariantViolation if a source
    phrase has no translation.
    """
    return Rebuilder(phrases, ignore_values).run(source, target)
