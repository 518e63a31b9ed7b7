"""
End-to-end regeneration of a target locale document.

source -> collect -> phrase map -> resolve -> rebuild -> target
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from .collector import PhraseMap, collect
from .console import log_warning
from .document import OrderedMap, is_container
from .driver import DEFAULT_BATCH_SIZE, DEFAULT_MAX_WORKERS, FAILURE_VALUE, BatchReport, resolve
from .errors import DocumentError, StructuralMismatchError
from .rebuilder import Rebuilder


@dataclass
class RunStats:
    phrases: int = 0
    reused: int = 0
    pending: int = 0
    translated: int = 0
    batches: int = 0
    inserted: int = 0
    replaced: int = 0
    overwrites: int = 0
    failed: List[str] = field(default_factory=list)
    elapsed: float = 0.0


def prepare_documents(source: Any, target: Any) -> Tuple[OrderedMap, OrderedMap]:
    """Normalize plain dicts to OrderedMaps and make sure the target root is a container."""
    source = OrderedMap.from_plain(source)
    if not is_container(source):
        raise DocumentError(
            f"Source document must be an object, found {type(source).__name__}"
        )

    if target is None:
        return source, OrderedMap()
    target = OrderedMap.from_plain(target)
    if not is_container(target):
        log_warning(str(StructuralMismatchError((), target)))
        target = OrderedMap()
    return source, target


def plan(source: Any, target: Any, retry_failed: bool = False,
         failure_value: str = FAILURE_VALUE) -> PhraseMap:
    """Collect the phrase map without contacting the translation API."""
    source, target = prepare_documents(source, target)
    ignore = (failure_value,) if retry_failed else ()
    return collect(source, target, ignore)


def regenerate(
    source: Any,
    target: Any,
    target_lang: str,
    translator,
    source_lang: Optional[str] = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    max_workers: int = DEFAULT_MAX_WORKERS,
    failure_value: str = FAILURE_VALUE,
    fail_fast: bool = False,
    retry_failed: bool = False,
) -> Tuple[OrderedMap, RunStats]:
    """
    Regenerate ``target`` from ``source``, translating only what is missing.

    ``target`` may be None (no existing file). Existing entries are kept
    unless ``retry_failed`` is set, in which case entries holding
    ``failure_value`` are translated again.
    """
    source, target = prepare_documents(source, target)
    ignore = (failure_value,) if retry_failed else ()

    phrases = collect(source, target, ignore)
    stats = RunStats(phrases=len(phrases))
    stats.pending = len(phrases.unresolved())
    stats.reused = stats.phrases - stats.pending

    report = BatchReport()
    resolve(
        phrases,
        target_lang,
        translator,
        batch_size=batch_size,
        max_workers=max_workers,
        failure_value=failure_value,
        fail_fast=fail_fast,
        source_lang=source_lang,
        report=report,
    )
    stats.batches = report.batches
    stats.translated = report.translated
    stats.failed = list(phrases.failed)
    stats.elapsed = report.elapsed

    rebuilder = Rebuilder(phrases, ignore)
    document = rebuilder.run(source, target)
    stats.inserted = rebuilder.inserted
    stats.replaced = rebuilder.replaced
    stats.overwrites = len(rebuilder.overwrites)
    return document, stats
