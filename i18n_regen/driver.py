"""
Batched translation of unresolved phrases.

Unresolved phrases are split into batches of at most 128 (the Translation
API's per-request limit) and sent with at most 5 requests in flight. Results
are merged into the phrase map as each batch completes. A failed batch marks
its phrases with the failure value and the remaining batches keep going.
"""

import concurrent.futures
import time
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from .collector import UNRESOLVED, PhraseMap
from .console import log_debug, log_warning, shorten
from .errors import ConfigurationError, DecodeError, RemoteBatchError

MAX_BATCH_SIZE = 128
DEFAULT_BATCH_SIZE = 128
DEFAULT_MAX_WORKERS = 5
FAILURE_VALUE = 'Error'


@dataclass
class BatchReport:
    """Bookkeeping for one resolve() call."""

    batches: int = 0
    translated: int = 0
    failed: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    elapsed: float = 0.0


def chunked(items: Sequence[str], size: int) -> Iterator[List[str]]:
    """Split ``items`` into consecutive slices of at most ``size``."""
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def validate_limits(batch_size: int, max_workers: int) -> None:
    if not 1 <= batch_size <= MAX_BATCH_SIZE:
        raise ConfigurationError(
            f"Batch size must be between 1 and {MAX_BATCH_SIZE}, got {batch_size}"
        )
    if max_workers < 1:
        raise ConfigurationError(f"Concurrency must be at least 1, got {max_workers}")


def translate_one_batch(translator, batch: List[str], target_lang: str, source_lang: Optional[str]) -> List[str]:
    """Send one batch and check the reply lines up with the request."""
    translated = list(translator.translate_batch(batch, target_lang, source_lang=source_lang))
    if len(translated) != len(batch):
        raise DecodeError(
            f"Expected {len(batch)} translations, got {len(translated)}", batch
        )
    return translated


def resolve(
    phrases: PhraseMap,
    target_lang: str,
    translator,
    batch_size: int = DEFAULT_BATCH_SIZE,
    max_workers: int = DEFAULT_MAX_WORKERS,
    failure_value: str = FAILURE_VALUE,
    fail_fast: bool = False,
    source_lang: Optional[str] = None,
    report: Optional[BatchReport] = None,
) -> PhraseMap:
    """
    Fill every unresolved entry of ``phrases`` in place and return it.

    ``translator`` is any object with
    ``translate_batch(phrases, target_lang, source_lang=None) -> list``.

    With ``fail_fast`` the first batch failure is re-raised once the
    in-flight batches have finished; otherwise the batch's phrases are set
    to ``failure_value`` and listed in ``phrases.failed``.
    """
    validate_limits(batch_size, max_workers)
    if report is None:
        report = BatchReport()

    pending = phrases.unresolved()
    if not pending:
        log_debug("No phrases need translation")
        return phrases

    batches = list(chunked(pending, batch_size))
    report.batches += len(batches)
    log_debug(
        f"Translating {len(pending)} phrases in {len(batches)} batch(es), "
        f"{max_workers} at a time"
    )

    started = time.time()
    first_error: Optional[RemoteBatchError] = None

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_map = {
            executor.submit(translate_one_batch, translator, batch, target_lang, source_lang): (idx, batch)
            for idx, batch in enumerate(batches)
        }
        for future in concurrent.futures.as_completed(future_map):
            idx, batch = future_map[future]
            try:
                translated = future.result()
            except RemoteBatchError as e:
                log_warning(
                    f"Batch {idx + 1}/{len(batches)} failed ({len(batch)} phrases, "
                    f"starting \"{shorten(batch[0])}\"): {e}"
                )
                report.errors.append(str(e))
                if first_error is None:
                    first_error = e
                for phrase in batch:
                    phrases[phrase] = failure_value
                    phrases.failed.append(phrase)
                    report.failed.append(phrase)
                continue

            for phrase, translation in zip(batch, translated):
                phrases[phrase] = translation
            report.translated += len(batch)
            log_debug(f"Batch {idx + 1}/{len(batches)} done ({len(batch)} phrases)")

    report.elapsed += time.time() - started

    if fail_fast and first_error is not None:
        raise first_error

    leftover = [phrase for phrase in pending if phrases.get(phrase, UNRESOLVED) == UNRESOLVED]
    for phrase in leftover:
        # An empty translation would read as unresolved at rebuild time
        phrases[phrase] = failure_value
        phrases.failed.append(phrase)
        report.failed.append(phrase)
    report.translated -= len(leftover)

    return phrases
