"""
Error taxonomy for the spread tracker.

Every failure that reaches the HTTP boundary is an ArbitrageError, so the
API layer can turn it into a structured {hata, mesaj} body.
"""


class ArbitrageError(Exception):
    """Base class for all tracker errors."""

    def __init__(self, message: str, exchange: str = None):
        super().__init__(message)
        self.exchange = exchange


class UpstreamConnectError(ArbitrageError):
    """The exchange could not be reached (DNS, refused, timeout...)."""

    def __init__(self, exchange: str, reason):
        super().__init__(f"Could not connect to {exchange} API: {reason}", exchange)
        self.reason = reason


class UpstreamStatusError(ArbitrageError):
    """The exchange answered with a non-2xx status."""

    def __init__(self, exchange: str, status_code: int):
        super().__init__(f"{exchange} API returned status {status_code}", exchange)
        self.status_code = status_code


class UpstreamParseError(ArbitrageError):
    """The exchange body could not be decoded into a ticker list."""

    def __init__(self, exchange: str, reason):
        super().__init__(f"{exchange} response could not be parsed: {reason}", exchange)
        self.reason = reason


class NotFoundError(ArbitrageError):
    def __init__(self, symbol: str):
        super().__init__(f"{symbol} not found")
        self.symbol = symbol
