# supertrend_alert/scanner.py
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from supertrend_alert.analysis.alerts import Alert, TrendEntry, evaluate_alerts
from supertrend_alert.analysis.indicators import compute_indicators
from supertrend_alert.analysis.trend import classify
from supertrend_alert.config import (
    FETCH_MAX_RETRIES,
    FETCH_RETRY_DELAY_SEC,
    INTERVALS,
    KLINE_LIMIT,
    POLL_DELAY_SEC,
    ST_MULTIPLIER,
    ST_PERIOD,
    TOP_N,
)
from supertrend_alert.data_source import fetch_bars
from supertrend_alert.notify import Notifier, get_notifier
from supertrend_alert.providers.base import MarketDataProvider
from supertrend_alert.providers.factory import get_provider
from supertrend_alert.symbols import select_symbols

logger = logging.getLogger("scanner")


@dataclass
class ScanSettings:
    intervals: Sequence[str] = tuple(INTERVALS)
    custom_symbols: Optional[Sequence[str]] = None
    top_n: int = TOP_N
    limit: int = KLINE_LIMIT
    period: int = ST_PERIOD
    multiplier: float = ST_MULTIPLIER
    max_retries: int = FETCH_MAX_RETRIES
    retry_delay: float = FETCH_RETRY_DELAY_SEC


@dataclass
class CycleReport:
    symbols: List[str] = field(default_factory=list)
    # symbol -> timeframe -> "BULLISH"/"BEARISH"
    labels: Dict[str, Dict[str, str]] = field(default_factory=dict)
    skipped: List[Tuple[str, str]] = field(default_factory=list)
    failed_symbols: List[str] = field(default_factory=list)
    alerts: List[Alert] = field(default_factory=list)
    sent: int = 0


async def scan_symbol(
    provider: MarketDataProvider,
    symbol: str,
    settings: ScanSettings,
    report: CycleReport,
) -> List[TrendEntry]:
    """Analyse every timeframe of one symbol and return its trend entries in timeframe order."""
    entries: List[TrendEntry] = []
    for tf in settings.intervals:
        logger.info(f"[SCAN] {symbol} {tf} timeframe")
        bars = await fetch_bars(
            provider, symbol, tf,
            limit=settings.limit,
            max_retries=settings.max_retries,
            delay=settings.retry_delay,
        )
        if not bars:
            report.skipped.append((symbol, tf))
            continue

        snap = compute_indicators(bars, period=settings.period, multiplier=settings.multiplier)
        price = bars[-1].close
        label = classify(snap, price)

        logger.info(f"Current Price: {price:.4f}")
        logger.info(f"Current Trend: {label.value}")
        logger.info(f"Upper Band: {snap.upper_band:.4f}")
        logger.info(f"Lower Band: {snap.lower_band:.4f}")

        entries.append(TrendEntry(timeframe=tf, label=label, price=price))
    return entries


async def run_cycle(
    provider: Optional[MarketDataProvider] = None,
    notifier: Optional[Notifier] = None,
    settings: Optional[ScanSettings] = None,
) -> CycleReport:
    """One full pass: pick symbols, analyse each symbol/timeframe, send triggered alerts."""
    provider = provider or get_provider()
    notifier = notifier or get_notifier()
    settings = settings or ScanSettings()
    report = CycleReport()

    logger.info("=== Enhanced Supertrend Alert System ===")
    symbols = await asyncio.to_thread(select_symbols, provider, settings.custom_symbols, settings.top_n)
    report.symbols = symbols
    logger.info(f"[SCAN] symbols: {', '.join(symbols)}")

    for symbol in symbols:
        logger.info(f"[SCAN] processing {symbol}")
        try:
            # alert buffer for this symbol only, dropped once its alerts are out
            entries = await scan_symbol(provider, symbol, settings, report)
        except Exception:
            logger.exception(f"[SCAN] {symbol} failed")
            report.failed_symbols.append(symbol)
            continue

        if entries:
            report.labels[symbol] = {e.timeframe: e.label.value for e in entries}

        for alert in evaluate_alerts(symbol, entries):
            report.alerts.append(alert)
            if await asyncio.to_thread(notifier.send, alert.message):
                report.sent += 1

    logger.info(
        f"=== Analysis Complete === symbols={len(symbols)} alerts={len(report.alerts)} sent={report.sent}"
    )
    return report


async def run_forever(
    provider: Optional[MarketDataProvider] = None,
    notifier: Optional[Notifier] = None,
    settings: Optional[ScanSettings] = None,
    delay: float = POLL_DELAY_SEC,
) -> None:
    provider = provider or get_provider()
    notifier = notifier or get_notifier()
    while True:
        try:
            await run_cycle(provider, notifier, settings)
        except Exception:
            logger.exception("[SCAN] cycle failed")
        await asyncio.sleep(delay)
