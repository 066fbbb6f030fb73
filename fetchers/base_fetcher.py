import logging
import math

import requests

from config import REQUEST_TIMEOUT_SECONDS
from errors import UpstreamConnectError, UpstreamParseError, UpstreamStatusError

logger = logging.getLogger(__name__)


class BaseFetcher:
    """
    Base class for exchange price fetchers.

    A fetcher pulls the full ticker list from one exchange in a single GET
    and returns {symbol: price} for every quote-currency pair it lists.
    Subclasses declare which JSON keys hold the pair and the price, and
    implement normalize_symbol() for their pair encoding.
    """

    pair_key: str = None
    price_key: str = None

    def __init__(self, exchange_name: str, url: str, timeout: float = REQUEST_TIMEOUT_SECONDS,
                 session: requests.Session = None):
        self.exchange_name = exchange_name
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    @staticmethod
    def normalize_symbol(pair: str):
        """Return the bare base symbol for a quote-currency pair, else None."""
        raise NotImplementedError

    def _get_tickers(self) -> list:
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamConnectError(self.exchange_name, e) from e

        if not 200 <= resp.status_code < 300:
            raise UpstreamStatusError(self.exchange_name, resp.status_code)

        try:
            tickers = resp.json()
        except ValueError as e:
            raise UpstreamParseError(self.exchange_name, e) from e

        if not isinstance(tickers, list) or not all(isinstance(t, dict) for t in tickers):
            raise UpstreamParseError(self.exchange_name, "expected a JSON array of ticker objects")
        return tickers

    def fetch_prices(self) -> dict:
        """Fetch every ticker and return {symbol: price}."""
        tickers = self._get_tickers()

        prices = {}
        for ticker in tickers:
            symbol = self.normalize_symbol(ticker.get(self.pair_key))
            if symbol is None:
                continue
            try:
                price = float(ticker.get(self.price_key))
            except (TypeError, ValueError, OverflowError):
                continue
            if not math.isfinite(price) or price < 0:
                continue
            prices[symbol] = price

        logger.debug(f"[{self.exchange_name}] {len(tickers)} tickers, {len(prices)} priced pairs")
        return prices
