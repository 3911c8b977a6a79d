from __future__ import annotations
from typing import List, Any
import requests
from .base import MarketDataProvider, Bar, Ticker, ProviderError
from ..config import BINANCE_URL, HTTP_TIMEOUT_SEC

def parse_kline(row: List[Any]) -> Bar:
    """Binance kline row: [openTime, open, high, low, close, volume, closeTime, ...]."""
    return Bar(
        ts=int(row[0]),
        open=float(row[1]),
        high=float(row[2]),
        low=float(row[3]),
        close=float(row[4]),
        volume=float(row[5]),
    )

class BinanceProvider(MarketDataProvider):
    def __init__(self, base_url: str | None = None, timeout: float = HTTP_TIMEOUT_SEC):
        self.base_url = (base_url or BINANCE_URL).rstrip("/")
        self.timeout = timeout

    def _get(self, path: str, params: dict | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            r = requests.get(url, params=params, timeout=self.timeout)
            r.raise_for_status()
            return r.json()
        except requests.RequestException as e:
            raise ProviderError(f"Binance request {path} failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"Binance {path} returned invalid JSON") from e

    def fetch_ohlcv(self, symbol: str, timeframe: str, limit: int = 100) -> List[Bar]:
        data = self._get("/klines", {"symbol": symbol, "interval": timeframe, "limit": limit})
        if not isinstance(data, list):
            raise ProviderError(f"Binance klines error: {data}")
        try:
            # already oldest-first
            return [parse_kline(row) for row in data]
        except (IndexError, TypeError, ValueError) as e:
            raise ProviderError(f"Malformed kline for {symbol} {timeframe}: {e}") from e

    def fetch_tickers_24h(self) -> List[Ticker]:
        data = self._get("/ticker/24hr")
        if not isinstance(data, list):
            raise ProviderError(f"Binance ticker error: {data}")
        if not all(isinstance(row, dict) and "symbol" in row for row in data):
            raise ProviderError("Malformed 24h ticker payload")
        return data
