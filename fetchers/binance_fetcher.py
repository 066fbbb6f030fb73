from fetchers.base_fetcher import BaseFetcher
from config import BINANCE_TICKER_URL, EXCHANGE_A, QUOTE_CURRENCY

# Binance concatenates base and quote: "BTCUSDT"
SUFFIX = QUOTE_CURRENCY


class BinanceFetcher(BaseFetcher):
    pair_key = "symbol"
    price_key = "price"

    def __init__(self, url: str = BINANCE_TICKER_URL, **kwargs):
        super().__init__(EXCHANGE_A, url, **kwargs)

    @staticmethod
    def normalize_symbol(pair: str):
        if not isinstance(pair, str) or len(pair) <= len(SUFFIX) or not pair.endswith(SUFFIX):
            return None
        return pair[:-len(SUFFIX)]
