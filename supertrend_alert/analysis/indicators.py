from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
import numpy as np
import pandas as pd

from ..providers.base import Bar

EMA_TREND_ALPHA = 2 / (200 + 1)
MACD_FAST_ALPHA = 2 / (12 + 1)
MACD_SLOW_ALPHA = 2 / (26 + 1)
SIGNAL_ALPHA = 2 / (9 + 1)


class EmptySeriesError(ValueError):
    pass


@dataclass(frozen=True)
class IndicatorSnapshot:
    ema200: float
    macd: float
    signal: float
    histogram: float
    upper_band: float
    lower_band: float
    in_uptrend: bool


def bars_to_frame(bars: Sequence[Bar]) -> pd.DataFrame:
    df = pd.DataFrame(
        {
            "ts": [b.ts for b in bars],
            "open": [b.open for b in bars],
            "high": [b.high for b in bars],
            "low": [b.low for b in bars],
            "close": [b.close for b in bars],
            "volume": [b.volume for b in bars],
        }
    )
    for c in ["open", "high", "low", "close", "volume"]:
        df[c] = df[c].astype(float)
    return df


def ema_last(values: np.ndarray, alpha: float) -> float:
    """Recursive EMA seeded with the first value; returns the final value only."""
    acc = float(values[0])
    for v in values[1:]:
        acc = float(v) * alpha + acc * (1 - alpha)
    return acc


def true_range(df: pd.DataFrame) -> pd.Series:
    """True range per bar. The first row has no previous close and falls back to high-low."""
    high = df["high"]
    low = df["low"]
    prev_close = df["close"].shift(1)
    tr = pd.concat([
        (high - low).abs(),
        (high - prev_close).abs(),
        (low - prev_close).abs()
    ], axis=1).max(axis=1)
    return tr


def atr_recursive(df: pd.DataFrame, period: int = 10) -> float:
    """
    Wilder-style smoothing over the last `period` bars only:
    seeded with |high-low| of the first bar in the window, then
    acc = (acc*(period-1) + tr) / period.
    """
    window = df.tail(period).reset_index(drop=True)
    tr = true_range(window).to_numpy()
    acc = float(tr[0])
    for x in tr[1:]:
        acc = (acc * (period - 1) + float(x)) / period
    return acc


def compute_indicators(bars: Sequence[Bar], period: int = 10, multiplier: float = 3) -> IndicatorSnapshot:
    if not bars:
        raise EmptySeriesError("empty series: at least one bar is required")
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")

    df = bars_to_frame(bars)
    closes = df["close"].to_numpy()

    ema200 = ema_last(closes, EMA_TREND_ALPHA)

    fast = ema_last(closes, MACD_FAST_ALPHA)
    slow = ema_last(closes, MACD_SLOW_ALPHA)
    macd = fast - slow
    # single-sample signal, not a smoothed line
    signal = macd * SIGNAL_ALPHA
    histogram = macd - signal

    last = df.iloc[-1]
    hl2 = (float(last["high"]) + float(last["low"])) / 2
    atr_val = atr_recursive(df, period)
    upper_band = hl2 + multiplier * atr_val
    lower_band = hl2 - multiplier * atr_val

    return IndicatorSnapshot(
        ema200=ema200,
        macd=macd,
        signal=signal,
        histogram=histogram,
        upper_band=upper_band,
        lower_band=lower_band,
        in_uptrend=bool(float(last["close"]) > lower_band),
    )
