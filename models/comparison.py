import json
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ComparisonRecord:
    """One symbol priced on both exchanges."""
    symbol: str
    price_a: float
    price_b: float
    spread_pct: float
    cheap_exchange: str
    expensive_exchange: str
    is_opportunity: bool

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "binance_fiyat": self.price_a,
            "gateio_fiyat": self.price_b,
            "fark_yuzde": self.spread_pct,
            "ucuz_borsa": self.cheap_exchange,
            "pahali_borsa": self.expensive_exchange,
            "arbitraj_firsati": self.is_opportunity,
        }

    def to_legacy_dict(self) -> dict:
        """Flattened single-symbol view served by /fiyatlar (no symbol key)."""
        data = self.to_dict()
        del data["symbol"]
        return data


@dataclass(frozen=True)
class AggregateResult:
    """Ranked comparison of every watch-list symbol listed on both exchanges."""
    all_coins: tuple = field(default_factory=tuple)
    opportunities: tuple = field(default_factory=tuple)
    updated_at: str = ""

    def find(self, symbol: str):
        for record in self.all_coins:
            if record.symbol == symbol:
                return record
        return None

    def to_dict(self) -> dict:
        return {
            "firsatlar": [r.to_dict() for r in self.opportunities],
            "tum_coinler": [r.to_dict() for r in self.all_coins],
            "guncelleme_zamani": self.updated_at,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True)
class CacheEntry:
    """An AggregateResult and the clock reading at which it was produced."""
    result: AggregateResult
    produced_at: float
