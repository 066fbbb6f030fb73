import os

# Top 100 coins tracked on both exchanges (bare base symbols, quote is USDT)
WATCH_LIST = [
    "BTC", "ETH", "BNB", "XRP", "ADA", "DOGE", "SOL", "DOT", "MATIC", "LTC",
    "SHIB", "TRX", "AVAX", "LINK", "ATOM", "UNI", "ETC", "XMR", "XLM", "BCH",
    "APT", "FIL", "LDO", "ARB", "NEAR", "VET", "ALGO", "QNT", "GRT", "AAVE",
    "EOS", "STX", "EGLD", "SAND", "THETA", "AXS", "IMX", "MANA", "XTZ", "NEO",
    "KCS", "FLOW", "CHZ", "CRV", "KAVA", "GALA", "FTM", "MINA", "ZEC", "DASH",
    "ENJ", "BAT", "LRC", "QTUM", "ZIL", "ONE", "HOT", "ENS", "COMP", "SNX",
    "1INCH", "YFI", "SUSHI", "ANKR", "CVC", "OMG", "ICX", "SC", "ZEN", "WAVES",
    "IOST", "ONT", "WRX", "RVN", "CELR", "COTI", "STORJ", "FET", "OCEAN", "BAND",
    "SKL", "DENT", "SXP", "REEF", "ALICE", "TLM", "LINA", "PERL", "HARD", "DODO",
    "ALPHA", "TORN", "BURGER", "SFP", "LOOM", "VITE", "FIRO", "WING", "AKRO", "FOR",
]

QUOTE_CURRENCY = "USDT"

# Exchange labels, in fixed priority order (first one's error wins if both fail)
EXCHANGE_A = "Binance"
EXCHANGE_B = "Gate.io"

BINANCE_TICKER_URL = "https://api.binance.com/api/v3/ticker/price"
GATEIO_TICKER_URL = "https://api.gateio.ws/api/v4/spot/tickers"

# Per-request upstream timeout (seconds)
REQUEST_TIMEOUT_SECONDS = 15

# A symbol is an opportunity when its rounded spread is strictly above this %
ARBITRAGE_THRESHOLD_PCT = 0.3

# Cached results younger than this are served without hitting the exchanges
CACHE_WINDOW_SECONDS = 3

# Symbol served by the legacy /fiyatlar endpoint
LEGACY_SYMBOL = "BTC"

# ── Deployment settings (environment overridable) ──────────────────────────────
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8080"))
ALLOWED_ORIGINS = [
    o.strip()
    for o in os.environ.get("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    if o.strip()
]
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Dashboard reads from the running API
API_URL = os.environ.get("API_URL", "http://localhost:8080")
DASHBOARD_REFRESH_MS = 3000
# Must outlast one upstream round, or a slow exchange looks like a dead backend
DASHBOARD_TIMEOUT_SECONDS = REQUEST_TIMEOUT_SECONDS + 5
