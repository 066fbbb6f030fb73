"""
Crypto Spread Tracker — main entry point.

Architecture:
  BinanceFetcher   GateioFetcher     (one GET each, run in parallel)
         \            /
          v          v
        PriceAggregator              (join on watch-list, spread, rank)
               |
               v
          CacheGuard                 (3 s freshness window)
               |
               v
        FastAPI app  /coins  /fiyatlar

Run with:
    python main.py
"""

import logging

import uvicorn

from api.server import create_app
from cache.cache_guard import CacheGuard
from config import (
    API_HOST,
    API_PORT,
    ARBITRAGE_THRESHOLD_PCT,
    CACHE_WINDOW_SECONDS,
    LOG_LEVEL,
    WATCH_LIST,
)
from fetchers.binance_fetcher import BinanceFetcher
from fetchers.gateio_fetcher import GateioFetcher
from processor.price_aggregator import PriceAggregator

logger = logging.getLogger(__name__)


def build_app():
    """Wire fetchers, aggregator and cache into the HTTP app."""
    aggregator = PriceAggregator(BinanceFetcher(), GateioFetcher())
    cache_guard = CacheGuard(aggregator)
    return create_app(cache_guard)


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
    )

    logger.info("=" * 58)
    logger.info("  Crypto Spread Tracker  |  Binance vs Gate.io")
    logger.info("=" * 58)
    logger.info(f"  Tracking : {len(WATCH_LIST)} coins")
    logger.info(f"  Threshold: {ARBITRAGE_THRESHOLD_PCT}% spread to flag an opportunity")
    logger.info(f"  Cache    : {CACHE_WINDOW_SECONDS}s")
    logger.info(f"  Listening: http://{API_HOST}:{API_PORT}")
    logger.info("=" * 58)

    uvicorn.run(build_app(), host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
