# supertrend_alert/symbols.py
import logging
from typing import List, Optional, Sequence

import pandas as pd

from supertrend_alert.config import CUSTOM_SYMBOLS, EXCLUDED_SYMBOLS, QUOTE_ASSET, TOP_N
from supertrend_alert.providers.base import MarketDataProvider, ProviderError, Ticker

logger = logging.getLogger(__name__)


def rank_by_change(
    tickers: Sequence[Ticker],
    quote: str = QUOTE_ASSET,
    excluded: Sequence[str] = EXCLUDED_SYMBOLS,
) -> pd.DataFrame:
    """
    Quote-asset pairs sorted by 24h priceChangePercent, biggest gainer first.
    Non-dict rows and rows with a missing or non-numeric change are dropped.
    """
    rows = [t for t in tickers if isinstance(t, dict)]
    df = pd.DataFrame(rows)
    if df.empty or "symbol" not in df or "priceChangePercent" not in df:
        return pd.DataFrame(columns=["symbol", "change"])

    df = df[["symbol", "priceChangePercent"]].copy()
    df["symbol"] = df["symbol"].astype(str)
    df = df[df["symbol"].str.endswith(quote) & ~df["symbol"].isin(list(excluded))].copy()
    df["change"] = pd.to_numeric(df["priceChangePercent"], errors="coerce")
    df = df.dropna(subset=["change"])
    # stable sort keeps exchange order among equal changes
    df = df.sort_values("change", ascending=False, kind="mergesort")
    return df[["symbol", "change"]].reset_index(drop=True)


def top_movers(provider: MarketDataProvider, top_n: int = TOP_N) -> List[str]:
    """Top gainers over 24h. Any ranking failure degrades to an empty list."""
    try:
        tickers = provider.fetch_tickers_24h()
    except ProviderError as e:
        logger.error(f"[SYMBOLS] ticker fetch failed: {e}")
        return []

    try:
        ranked = rank_by_change(tickers)
    except (TypeError, ValueError) as e:
        logger.error(f"[SYMBOLS] ticker ranking failed: {e}")
        return []
    gainers = ranked.head(top_n)
    losers = ranked.tail(top_n).iloc[::-1]

    logger.info("=== Top Gainers ===")
    for row in gainers.itertuples():
        logger.info(f"{row.symbol}: +{row.change:.2f}%")
    logger.info("=== Top Losers ===")
    for row in losers.itertuples():
        logger.info(f"{row.symbol}: {row.change:.2f}%")

    return gainers["symbol"].tolist()


def select_symbols(
    provider: MarketDataProvider,
    custom_symbols: Optional[Sequence[str]] = None,
    top_n: int = TOP_N,
) -> List[str]:
    """Watch-list first, then top gainers; duplicates removed, order kept."""
    watch = list(CUSTOM_SYMBOLS if custom_symbols is None else custom_symbols)
    out = watch + top_movers(provider, top_n)

    seen = set()
    uniq = []
    for s in out:
        if s and s not in seen:
            seen.add(s)
            uniq.append(s)
    return uniq
