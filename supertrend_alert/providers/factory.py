from __future__ import annotations
from .base import MarketDataProvider
from .mock import MockProvider
from .binance import BinanceProvider
from ..config import DATA_PROVIDER

def get_provider(name: str | None = None) -> MarketDataProvider:
    if (name or DATA_PROVIDER) == "mock":
        return MockProvider()
    return BinanceProvider()
