from fetchers.base_fetcher import BaseFetcher
from config import GATEIO_TICKER_URL, EXCHANGE_B, QUOTE_CURRENCY

# Gate.io joins base and quote with an underscore: "BTC_USDT"
SUFFIX = "_" + QUOTE_CURRENCY


class GateioFetcher(BaseFetcher):
    pair_key = "currency_pair"
    price_key = "last"

    def __init__(self, url: str = GATEIO_TICKER_URL, **kwargs):
        super().__init__(EXCHANGE_B, url, **kwargs)

    @staticmethod
    def normalize_symbol(pair: str):
        if not isinstance(pair, str) or len(pair) <= len(SUFFIX) or not pair.endswith(SUFFIX):
            return None
        return pair[:-len(SUFFIX)]
