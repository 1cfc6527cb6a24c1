"""
Result Cache

In-memory memo of extraction results keyed by exact URL.
"""

import logging
import threading
from typing import Callable, Dict, Optional

from ..models import ExtractionResult

logger = logging.getLogger(__name__)


class ResultCache:
    """
    Thread-safe get/set store for ExtractionResult values.

    Two threads asking for the same uncached URL may both compute it;
    the last write wins. Only successful results are stored by
    get_or_compute, so a failed lookup is retried on the next call.

    Usage:
        cache = ResultCache()
        result = cache.get_or_compute(url, lambda: extract_product(url))
    """

    def __init__(self):
        self._entries: Dict[str, ExtractionResult] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, url: str) -> Optional[ExtractionResult]:
        with self._lock:
            return self._entries.get(url)

    def set(self, url: str, result: ExtractionResult) -> None:
        with self._lock:
            self._entries[url] = result

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def get_or_compute(self, url: str, compute: Callable[[], ExtractionResult]) -> ExtractionResult:
        """
        Return the cached result for url, computing and storing it if missing.

        Args:
            url: Cache key (exact product URL)
            compute: Zero-argument callable producing the result

        Returns:
            Cached or freshly computed ExtractionResult
        """
        cached = self.get(url)
        if cached is not None:
            logger.debug("Cache hit: %s", url)
            return cached

        result = compute()
        if result.ok:
            self.set(url, result)
        return result
