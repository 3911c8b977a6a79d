from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Dict, Any

@dataclass(frozen=True)
class Bar:
    ts: int  # open time, epoch ms
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

Ticker = Dict[str, Any]  # symbol, priceChangePercent, ...

class ProviderError(RuntimeError):
    pass

class MarketDataProvider(ABC):
    @abstractmethod
    def fetch_ohlcv(self, symbol: str, timeframe: str, limit: int = 100) -> List[Bar]:
        raise NotImplementedError

    @abstractmethod
    def fetch_tickers_24h(self) -> List[Ticker]:
        raise NotImplementedError
