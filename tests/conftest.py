import numpy as np
import pytest
from typing import Dict, List

from supertrend_alert.notify import Notifier
from supertrend_alert.providers.base import Bar, MarketDataProvider, ProviderError


def make_bars(closes, highs=None, lows=None, start_ts=1_700_000_000_000, step_ms=60_000) -> List[Bar]:
    """Bars from close prices; high/low default to the close."""
    highs = closes if highs is None else highs
    lows = closes if lows is None else lows
    return [
        Bar(ts=start_ts + i * step_ms, open=float(c), high=float(h), low=float(l), close=float(c), volume=1000.0)
        for i, (c, h, l) in enumerate(zip(closes, highs, lows))
    ]


def rising_bars(n: int = 100) -> List[Bar]:
    return make_bars([100.0 + i for i in range(n)])


def falling_bars(n: int = 100) -> List[Bar]:
    return make_bars([200.0 - i for i in range(n)])


class FakeProvider(MarketDataProvider):
    """Serves canned bars per (symbol, timeframe); ProviderError where nothing is canned."""

    def __init__(self, bars: Dict[tuple, List[Bar]] = None, tickers=None, errors=None):
        self.bars = bars or {}
        self.tickers = tickers if tickers is not None else []
        self.errors = errors or {}
        self.calls = []

    def fetch_ohlcv(self, symbol, timeframe, limit=100):
        self.calls.append((symbol, timeframe))
        key = (symbol, timeframe)
        if key in self.errors:
            raise self.errors[key]
        if key not in self.bars:
            raise ProviderError(f"no data for {symbol} {timeframe}")
        return self.bars[key][-limit:]

    def fetch_tickers_24h(self):
        if isinstance(self.tickers, Exception):
            raise self.tickers
        return self.tickers


class RecordingNotifier(Notifier):
    def __init__(self, ok: bool = True):
        self.ok = ok
        self.messages: List[str] = []

    def send(self, message: str) -> bool:
        self.messages.append(message)
        return self.ok


@pytest.fixture
def sample_bars():
    """100 random-walk bars, reproducible."""
    np.random.seed(42)
    closes = 100 * np.cumprod(1 + np.random.normal(0, 0.01, 100))
    highs = closes * (1 + np.abs(np.random.normal(0, 0.005, 100)))
    lows = closes * (1 - np.abs(np.random.normal(0, 0.005, 100)))
    return make_bars(closes.tolist(), highs.tolist(), lows.tolist())


@pytest.fixture
def notifier():
    return RecordingNotifier()
