"""
Depth-first traversal over locale documents.

Both walkers keep their own stack instead of recursing, so deeply nested
documents cannot exhaust the interpreter's recursion limit.

- walk(): visits every node of one document in pre-order.
- walk_pair(): walks a source document and, in lock-step, the matching
  positions of a target document whose shape may differ.
"""

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple

from .document import OrderedMap, is_container


class _Missing:
    """Marker for a key the target does not have."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class Visit:
    """One node reached by a walk."""

    key: Optional[str]
    index: int
    path: Tuple[str, ...]
    node: Any

    @property
    def is_container(self) -> bool:
        return is_container(self.node)

    @property
    def depth(self) -> int:
        return len(self.path)


def walk(document: Any) -> Iterator[Visit]:
    """Yield every node of ``document`` in depth-first pre-order."""
    root = Visit(key=None, index=0, path=(), node=document)
    yield root
    if not root.is_container:
        return

    stack: List[Tuple[Iterator[Tuple[int, Tuple[str, Any]]], Tuple[str, ...]]] = [
        (iter(enumerate(document.items())), ())
    ]
    while stack:
        children, path = stack[-1]
        entry = next(children, None)
        if entry is None:
            stack.pop()
            continue
        index, (key, node) = entry
        visit = Visit(key=key, index=index, path=path + (key,), node=node)
        yield visit
        if visit.is_container:
            stack.append((iter(enumerate(node.items())), visit.path))


class PairVisitor:
    """
    Callbacks for walk_pair().

    ``parent`` is the target container holding the current position (None
    when the target has no container there) and ``slot`` is the target's
    value under the visited key, or MISSING.
    """

    def enter_container(self, visit: Visit, parent: Optional[OrderedMap], slot: Any) -> Optional[OrderedMap]:
        """Return the target container to descend into, or None."""
        return slot if is_container(slot) else None

    def leave_container(self, visit: Visit, container: Optional[OrderedMap]) -> None:
        pass

    def visit_leaf(self, visit: Visit, parent: Optional[OrderedMap], slot: Any) -> None:
        pass


def slot_of(container: Optional[OrderedMap], key: str) -> Any:
    """Value stored under ``key`` in ``container``, or MISSING."""
    if container is None or key not in container:
        return MISSING
    return container[key]


def walk_pair(source: OrderedMap, target: Any, visitor: PairVisitor) -> Optional[OrderedMap]:
    """
    Walk ``source`` in pre-order alongside ``target``.

    Returns whatever the visitor chose as the target root container.
    """
    root = Visit(key=None, index=0, path=(), node=source)
    root_target = visitor.enter_container(root, None, target)

    stack = [(root, iter(enumerate(source.items())), root_target)]
    while stack:
        visit, children, container = stack[-1]
        entry = next(children, None)
        if entry is None:
            stack.pop()
            visitor.leave_container(visit, container)
            continue

        index, (key, node) = entry
        child = Visit(key=key, index=index, path=visit.path + (key,), node=node)
        slot = slot_of(container, key)
        if child.is_container:
            child_target = visitor.enter_container(child, container, slot)
            stack.append((child, iter(enumerate(node.items())), child_target))
        else:
            visitor.visit_leaf(child, container, slot)

    return root_target
