from __future__ import annotations

import threading
import time
from typing import Callable, Dict, List, Optional, Sequence

from i18n_regen.errors import RequestError


class FakeTranslator:
    """Deterministic stand-in for the Translation API client."""

    def __init__(
        self,
        fail_on: Optional[Callable[[Sequence[str]], bool]] = None,
        delay: float = 0.0,
        delays: Optional[Dict[str, float]] = None,
    ) -> None:
        self.fail_on = fail_on
        self.delay = delay
        self.delays = delays or {}
        self.calls: List[List[str]] = []
        self.source_langs: List[Optional[str]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def translate_batch(self, phrases, target_lang, source_lang=None):
        with self._lock:
            self.calls.append(list(phrases))
            self.source_langs.append(source_lang)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(phrases[0], self.delay)
            if delay:
                time.sleep(delay)
            if self.fail_on is not None and self.fail_on(phrases):
                raise RequestError("503 Service Unavailable", phrases)
            return [translate(phrase, target_lang) for phrase in phrases]
        finally:
            with self._lock:
                self.in_flight -= 1

    @property
    def phrases_sent(self) -> List[str]:
        return [phrase for call in self.calls for phrase in call]


def translate(phrase: str, target_lang: str) -> str:
    return f"[{target_lang}] {phrase}"
