# supertrend_alert/data_source.py
import asyncio
import logging
from typing import List, Optional

from supertrend_alert.config import KLINE_LIMIT, FETCH_MAX_RETRIES, FETCH_RETRY_DELAY_SEC
from supertrend_alert.providers.base import Bar, MarketDataProvider, ProviderError

logger = logging.getLogger(__name__)


async def fetch_bars(
    provider: MarketDataProvider,
    symbol: str,
    tf: str,
    limit: int = KLINE_LIMIT,
    max_retries: int = FETCH_MAX_RETRIES,
    delay: float = FETCH_RETRY_DELAY_SEC,
) -> Optional[List[Bar]]:
    """
    Fetch the latest `limit` bars, retrying up to `max_retries` attempts with a
    fixed `delay` between them.
    Returns None when every attempt failed or the provider returned no bars,
    so the caller can skip this symbol/timeframe for the cycle.
    """
    for attempt in range(max_retries):
        try:
            bars = await asyncio.to_thread(provider.fetch_ohlcv, symbol, tf, limit)
            if not bars:
                raise ProviderError(f"No bars for {symbol} {tf}")
            return bars
        except ProviderError as e:
            if attempt == max_retries - 1:
                logger.error(f"[FETCH] {symbol} {tf} failed after {max_retries} attempts: {e}")
                return None
            logger.warning(f"[FETCH] {symbol} {tf} attempt {attempt + 1} failed: {e}")
            await asyncio.sleep(delay)
    return None
