"""Shared fixtures: stub fetchers, a fake HTTP session and a controllable clock."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from errors import UpstreamConnectError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, body_error=None):
        self.status_code = status_code
        self._payload = payload
        self._body_error = body_error

    def json(self):
        if self._body_error is not None:
            raise self._body_error
        return self._payload


def fake_session(response=None, error=None):
    """A requests.Session stand-in whose get() returns `response` or raises `error`."""
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return session


class StubFetcher:
    """Fetcher returning a settable price mapping, or raising a settable error."""

    def __init__(self, exchange_name, prices=None, error=None):
        self.exchange_name = exchange_name
        self.prices = dict(prices or {})
        self.error = error
        self.calls = 0

    def fetch_prices(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return dict(self.prices)


class FakeClock:
    def __init__(self, start=1000.0):
        self.value = start

    def __call__(self):
        return self.value

    def advance(self, seconds):
        self.value += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fixed_now():
    return lambda: datetime(2024, 5, 1, 14, 30, 15)


@pytest.fixture
def fetcher_a():
    return StubFetcher("Binance", {"BTC": 50000.0, "ETH": 3000.0})


@pytest.fixture
def fetcher_b():
    return StubFetcher("Gate.io", {"BTC": 50200.0, "ETH": 3000.0})


@pytest.fixture
def timeout_error():
    return UpstreamConnectError("Gate.io", "read timed out")
