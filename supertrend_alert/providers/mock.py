from __future__ import annotations
from typing import List
import random, time
from .base import MarketDataProvider, Bar, Ticker

_TIMEFRAME_SEC = {"1m": 60, "5m": 300, "15m": 900, "30m": 1800, "1h": 3600, "4h": 14400}

class MockProvider(MarketDataProvider):
    """Random-walk bars for running the scanner without network access."""

    def __init__(self, symbols: List[str] | None = None, seed: int | None = None):
        self.symbols = symbols or ["BTCUSDT", "ETHUSDT", "SOLUSDT", "BNBUSDT", "XRPUSDT", "USDCUSDT"]
        self.rng = random.Random(seed)

    def fetch_ohlcv(self, symbol: str, timeframe: str, limit: int = 100) -> List[Bar]:
        step = _TIMEFRAME_SEC.get(timeframe, 60)
        now_ms = int(time.time()) * 1000
        price = 100.0 + self.rng.uniform(-25, 25)
        bars: List[Bar] = []
        for i in range(limit):
            o = price
            c = o + self.rng.uniform(-1.5, 1.5)
            h = max(o, c) + self.rng.uniform(0, 1)
            l = min(o, c) - self.rng.uniform(0, 1)
            v = self.rng.uniform(100, 1500)
            bars.append(Bar(ts=now_ms - (limit - i) * step * 1000, open=o, high=h, low=l, close=c, volume=v))
            price = c
        return bars

    def fetch_tickers_24h(self) -> List[Ticker]:
        return [
            {"symbol": s, "priceChangePercent": f"{self.rng.uniform(-12, 12):.3f}"}
            for s in self.symbols
        ]
