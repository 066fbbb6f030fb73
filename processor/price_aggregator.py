import logging
import math
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime

from config import ARBITRAGE_THRESHOLD_PCT, WATCH_LIST
from models.comparison import AggregateResult, ComparisonRecord

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%H:%M:%S"


def compute_spread_pct(price_a: float, price_b: float) -> float:
    """|a - b| relative to the mean of a and b, in percent, rounded to 2 places."""
    if price_a == 0 or price_b == 0:
        return 0.0
    diff = abs(price_a - price_b)
    avg = (price_a + price_b) / 2
    # round half away from zero; the builtin round() is banker's rounding
    return math.floor((diff / avg) * 100 * 100 + 0.5) / 100


def build_record(symbol: str, price_a: float, price_b: float, exchange_a: str, exchange_b: str,
                 threshold_pct: float = ARBITRAGE_THRESHOLD_PCT) -> ComparisonRecord:
    spread_pct = compute_spread_pct(price_a, price_b)

    # Ties label the second exchange as cheap
    if price_a < price_b:
        cheap, expensive = exchange_a, exchange_b
    else:
        cheap, expensive = exchange_b, exchange_a

    return ComparisonRecord(
        symbol=symbol,
        price_a=price_a,
        price_b=price_b,
        spread_pct=spread_pct,
        cheap_exchange=cheap,
        expensive_exchange=expensive,
        is_opportunity=spread_pct > threshold_pct,
    )


def rank_records(records) -> list:
    """Stable sort by spread, widest first."""
    return sorted(records, key=lambda r: r.spread_pct, reverse=True)


class PriceAggregator:
    """
    Joins two exchanges' price snapshots over the watch-list.

    Both fetchers run in parallel and are always awaited together. If either
    one fails, the whole aggregation fails with that error (the first
    exchange's error wins when both fail), and the other snapshot is dropped.
    """

    def __init__(self, fetcher_a, fetcher_b, watch_list=None,
                 threshold_pct: float = ARBITRAGE_THRESHOLD_PCT, now=datetime.now):
        self.fetcher_a = fetcher_a
        self.fetcher_b = fetcher_b
        self.watch_list = list(watch_list if watch_list is not None else WATCH_LIST)
        self.threshold_pct = threshold_pct
        self.now = now

    def _fetch_both(self):
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="fetch") as pool:
            future_a = pool.submit(self.fetcher_a.fetch_prices)
            future_b = pool.submit(self.fetcher_b.fetch_prices)
            wait([future_a, future_b])

        for fetcher, future in ((self.fetcher_a, future_a), (self.fetcher_b, future_b)):
            err = future.exception()
            if err is not None:
                logger.error(f"[{fetcher.exchange_name}] Fetch failed: {err}")
                raise err

        return future_a.result(), future_b.result()

    def join(self, prices_a: dict, prices_b: dict) -> AggregateResult:
        """Build the ranked result from two completed snapshots."""
        records = []
        for symbol in self.watch_list:
            if symbol not in prices_a or symbol not in prices_b:
                continue
            records.append(build_record(
                symbol,
                prices_a[symbol],
                prices_b[symbol],
                self.fetcher_a.exchange_name,
                self.fetcher_b.exchange_name,
                self.threshold_pct,
            ))

        all_coins = rank_records(records)
        opportunities = [r for r in all_coins if r.is_opportunity]

        return AggregateResult(
            all_coins=tuple(all_coins),
            opportunities=tuple(opportunities),
            updated_at=self.now().strftime(TIMESTAMP_FORMAT),
        )

    def aggregate(self) -> AggregateResult:
        prices_a, prices_b = self._fetch_both()
        result = self.join(prices_a, prices_b)
        logger.info(
            f"[Aggregator] {len(result.all_coins)} coins compared, "
            f"{len(result.opportunities)} opportunities above {self.threshold_pct}%"
        )
        return result
