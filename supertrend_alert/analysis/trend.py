from __future__ import annotations
from enum import Enum

from .indicators import IndicatorSnapshot


class TrendLabel(str, Enum):
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"

    @property
    def emoji(self) -> str:
        return "🟢" if self is TrendLabel.BULLISH else "🔴"


def classify(snapshot: IndicatorSnapshot, last_close: float) -> TrendLabel:
    is_above_ema = last_close > snapshot.ema200
    is_macd_positive = snapshot.histogram > 0
    if is_above_ema and is_macd_positive and snapshot.in_uptrend:
        return TrendLabel.BULLISH
    return TrendLabel.BEARISH
