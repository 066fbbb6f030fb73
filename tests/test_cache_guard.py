"""Tests for the freshness-window cache."""

import threading
import time

import pytest

from cache.cache_guard import CacheGuard
from errors import UpstreamConnectError
from processor.price_aggregator import PriceAggregator

from conftest import StubFetcher


def make_guard(fetcher_a, fetcher_b, clock, now):
    aggregator = PriceAggregator(fetcher_a, fetcher_b, watch_list=["BTC", "ETH"], now=now)
    return CacheGuard(aggregator, window_seconds=3, clock=clock)


class TestCacheGuard:
    """Window, replacement and failure semantics."""

    def test_empty_cache_triggers_aggregation(self, fetcher_a, fetcher_b, clock, fixed_now):
        """The first request fetches from both exchanges."""
        guard = make_guard(fetcher_a, fetcher_b, clock, fixed_now)
        assert guard.peek() is None

        result = guard.get()

        assert result.find("BTC") is not None
        assert fetcher_a.calls == 1
        assert fetcher_b.calls == 1
        assert guard.peek().result is result

    def test_within_window_reuses_result(self, fetcher_a, fetcher_b, clock, fixed_now):
        """Two calls one second apart return the same result, timestamp included."""
        guard = make_guard(fetcher_a, fetcher_b, clock, fixed_now)

        first = guard.get()
        clock.advance(1)
        fetcher_b.prices["BTC"] = 60000.0
        second = guard.get()

        assert second is first
        assert second.to_dict() == first.to_dict()
        assert fetcher_a.calls == 1

    def test_window_expiry_refreshes(self, fetcher_a, fetcher_b, clock, fixed_now):
        """A call at or past the window sees changed upstream prices."""
        guard = make_guard(fetcher_a, fetcher_b, clock, fixed_now)

        first = guard.get()
        clock.advance(3)
        fetcher_b.prices["BTC"] = 50000.0
        second = guard.get()

        assert second is not first
        assert first.find("BTC").is_opportunity is True
        assert second.find("BTC").spread_pct == 0
        assert fetcher_a.calls == 2

    def test_failed_refresh_keeps_previous_entry(self, fetcher_a, fetcher_b, clock, fixed_now, timeout_error):
        """A failing refresh raises to the caller and leaves the old entry in place."""
        guard = make_guard(fetcher_a, fetcher_b, clock, fixed_now)
        first = guard.get()
        entry_before = guard.peek()

        clock.advance(5)
        fetcher_b.error = timeout_error
        with pytest.raises(UpstreamConnectError):
            guard.get()

        assert guard.peek() is entry_before
        assert guard.peek().result is first

    def test_recovers_after_failure(self, fetcher_a, fetcher_b, clock, fixed_now, timeout_error):
        """A failure does not poison later requests."""
        guard = make_guard(fetcher_a, fetcher_b, clock, fixed_now)
        fetcher_b.error = timeout_error

        with pytest.raises(UpstreamConnectError):
            guard.get()
        assert guard.peek() is None

        fetcher_b.error = None
        result = guard.get()
        assert result.find("BTC") is not None

    def test_failure_is_not_cached(self, fetcher_a, fetcher_b, clock, fixed_now, timeout_error):
        """Each request inside the window retries after a failure."""
        guard = make_guard(fetcher_a, fetcher_b, clock, fixed_now)
        fetcher_b.error = timeout_error

        for _ in range(2):
            with pytest.raises(UpstreamConnectError):
                guard.get()

        assert fetcher_b.calls == 2

    def test_age(self, fetcher_a, fetcher_b, clock, fixed_now):
        """age() reports time since the entry was produced, None when empty."""
        guard = make_guard(fetcher_a, fetcher_b, clock, fixed_now)
        assert guard.age() is None

        guard.get()
        clock.advance(1.5)
        assert guard.age() == pytest.approx(1.5)


class SlowFetcher(StubFetcher):
    delay = 0.05

    def fetch_prices(self):
        time.sleep(self.delay)
        return super().fetch_prices()


class TestCacheGuardConcurrency:
    def test_concurrent_expired_requests_share_one_refresh(self, fixed_now):
        """A burst of requests on an empty cache costs one upstream round."""
        a = SlowFetcher("Binance", {"BTC": 100.0})
        b = SlowFetcher("Gate.io", {"BTC": 101.0})
        guard = CacheGuard(PriceAggregator(a, b, watch_list=["BTC"], now=fixed_now), window_seconds=60)

        results = []
        threads = [threading.Thread(target=lambda: results.append(guard.get())) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
        assert a.calls == 1
        assert b.calls == 1

    def test_concurrent_requests_share_one_failed_refresh(self, fixed_now):
        """Requests queued behind a failing refresh get its error instead of retrying one by one."""
        a = SlowFetcher("Binance", {"BTC": 100.0})
        b = SlowFetcher("Gate.io", error=UpstreamConnectError("Gate.io", "read timed out"))
        a.delay = b.delay = 0.3
        guard = CacheGuard(PriceAggregator(a, b, watch_list=["BTC"], now=fixed_now), window_seconds=60)

        errors = []
        latencies = []

        def call():
            started = time.monotonic()
            try:
                guard.get()
            except UpstreamConnectError as e:
                errors.append(e)
            latencies.append(time.monotonic() - started)

        threads = [threading.Thread(target=call) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(errors) == 5
        assert b.calls == 1
        assert max(latencies) < 0.6
        assert guard.peek() is None

    def test_next_request_after_failed_round_retries(self, fixed_now):
        """A shared failure is not cached; the following request starts a new round."""
        a = SlowFetcher("Binance", {"BTC": 100.0})
        b = SlowFetcher("Gate.io", error=UpstreamConnectError("Gate.io", "refused"))
        guard = CacheGuard(PriceAggregator(a, b, watch_list=["BTC"], now=fixed_now), window_seconds=60)

        with pytest.raises(UpstreamConnectError):
            guard.get()
        b.error = None

        assert guard.get().find("BTC") is not None
        assert b.calls == 2
