"""
Time-windowed cache in front of the PriceAggregator.

One CacheGuard is created by the composition root and shared by every
request handler. Requests inside the freshness window reuse the last
AggregateResult; the first request after it expires triggers a new
aggregation. A failed refresh is raised to its caller and leaves the
previous entry untouched.

Concurrent requests that find the entry expired join the refresh already
in flight and receive its outcome, result or error alike, so a burst of
requests costs one upstream round instead of one per request.
"""

import logging
import threading
import time

from config import CACHE_WINDOW_SECONDS
from errors import ArbitrageError
from models.comparison import AggregateResult, CacheEntry

logger = logging.getLogger(__name__)


class _Refresh:
    """One in-flight aggregation round, shared by every caller that joined it."""

    def __init__(self):
        self.done = threading.Event()
        self.result: AggregateResult = None
        self.error: Exception = None


class CacheGuard:
    def __init__(self, aggregator, window_seconds: float = CACHE_WINDOW_SECONDS, clock=time.monotonic):
        self.aggregator = aggregator
        self.window_seconds = window_seconds
        self.clock = clock

        # Guards _entry and _inflight; never held across network I/O
        self._lock = threading.Lock()
        self._entry: CacheEntry = None
        self._inflight: _Refresh = None

    def peek(self) -> CacheEntry:
        """Current entry (possibly stale or None), without refreshing."""
        with self._lock:
            return self._entry

    def age(self):
        entry = self.peek()
        if entry is None:
            return None
        return self.clock() - entry.produced_at

    def _is_fresh(self, entry) -> bool:
        return entry is not None and self.clock() - entry.produced_at < self.window_seconds

    def get(self) -> AggregateResult:
        """Return a result no older than the freshness window."""
        with self._lock:
            entry = self._entry
            if self._is_fresh(entry):
                logger.debug("[Cache] Hit")
                return entry.result

            refresh = self._inflight
            leader = refresh is None
            if leader:
                refresh = self._inflight = _Refresh()

        if not leader:
            logger.debug("[Cache] Joining refresh in flight")
            refresh.done.wait()
            if refresh.error is not None:
                raise refresh.error
            return refresh.result

        try:
            result = self.aggregator.aggregate()
        except Exception as e:
            refresh.error = e
            with self._lock:
                self._inflight = None
                had_entry = self._entry is not None
            refresh.done.set()
            if had_entry and isinstance(e, ArbitrageError):
                logger.warning(f"[Cache] Refresh failed, keeping previous result: {e}")
            raise

        refresh.result = result
        with self._lock:
            self._entry = CacheEntry(result=result, produced_at=self.clock())
            self._inflight = None
        refresh.done.set()
        logger.info(f"[Cache] Refreshed at {result.updated_at}")
        return result
