"""
Translation-needs collection.

Walks the source document against the existing target and builds the
deduplicated phrase map: every distinct source string appears once, mapped
to the translation the target already holds, or to "" when it still has to
be translated.
"""

from typing import Any, Collection, List, Optional

from .document import OrderedMap, is_phrase
from .walker import MISSING, PairVisitor, Visit, walk_pair

UNRESOLVED = ''


class PhraseMap(dict):
    """Distinct source phrase -> translation ("" while unresolved)."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.failed: List[str] = []

    def record(self, phrase: str, translation: str) -> None:
        """Store a known translation; a resolved entry is never downgraded."""
        if translation != UNRESOLVED:
            if self.get(phrase, UNRESOLVED) == UNRESOLVED:
                self[phrase] = translation
        else:
            self.setdefault(phrase, UNRESOLVED)

    def unresolved(self) -> List[str]:
        """Phrases still waiting for a translation, in collection order."""
        return [phrase for phrase, translation in self.items() if translation == UNRESOLVED]

    def resolved_count(self) -> int:
        return len(self) - len(self.unresolved())


class _Collector(PairVisitor):
    def __init__(self, phrases: PhraseMap, ignore_values: Collection[str]):
        self.phrases = phrases
        self.ignore_values = ignore_values

    def visit_leaf(self, visit: Visit, parent: Optional[OrderedMap], slot: Any) -> None:
        if not is_phrase(visit.node):
            return
        if slot is MISSING or (isinstance(slot, str) and slot in self.ignore_values):
            self.phrases.record(visit.node, UNRESOLVED)
        elif is_phrase(slot):
            self.phrases.record(visit.node, slot)
        # Any other value present in the target is kept by the rebuilder


def collect(source: OrderedMap, target: Any, ignore_values: Collection[str] = ()) -> PhraseMap:
    """
    Build the phrase map for ``source`` given the existing ``target``.

    A phrase counts as resolved if any of its occurrences already has a
    string translation in the target, and is left unresolved only where the
    target lacks the entry. Target strings listed in ``ignore_values`` are
    treated as absent.
    """
    phrases = PhraseMap()
    walk_pair(source, target, _Collector(phrases, frozenset(ignore_values)))
    return phrases
