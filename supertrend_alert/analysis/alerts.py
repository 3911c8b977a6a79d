from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .trend import TrendLabel

REVERSAL_TIMEFRAME = "15m"
MOMENTUM_TIMEFRAMES = ("1m", "5m")


@dataclass(frozen=True)
class TrendEntry:
    timeframe: str
    label: TrendLabel
    price: float

    @property
    def tag(self) -> str:
        return f"{self.timeframe}: {self.label.value}"

    @property
    def text(self) -> str:
        return f"{self.label.emoji} {self.tag} @ {self.price:.4f}"


@dataclass(frozen=True)
class Alert:
    rule: str
    symbol: str
    entries: Tuple[TrendEntry, ...]
    message: str


def has_tag(entries: Sequence[TrendEntry], timeframe: str, label: TrendLabel) -> bool:
    """
    Substring match on the entry tag, so "5m: BULLISH" is also satisfied by a
    "15m: BULLISH" entry.
    """
    wanted = f"{timeframe}: {label.value}"
    return any(wanted in e.tag for e in entries)


def _render(title: str, entries: Sequence[TrendEntry]) -> str:
    return "\n".join([title] + [e.text for e in entries])


def evaluate_alerts(symbol: str, entries: Sequence[TrendEntry]) -> List[Alert]:
    """
    Decide which notifications one symbol's trend entries trigger in a cycle.

    - reversal: the 15m timeframe is BEARISH; the message carries the 15m entries.
    - momentum: 1m and 5m are both BULLISH; the message carries the 1m and 5m entries.

    Rules are independent and each fires at most once per call.
    """
    alerts: List[Alert] = []

    if has_tag(entries, REVERSAL_TIMEFRAME, TrendLabel.BEARISH):
        picked = tuple(e for e in entries if e.timeframe == REVERSAL_TIMEFRAME)
        alerts.append(Alert(
            rule="reversal",
            symbol=symbol,
            entries=picked,
            message=_render(f"=== {symbol} {REVERSAL_TIMEFRAME} BEARISH Alert ===", picked),
        ))

    if all(has_tag(entries, tf, TrendLabel.BULLISH) for tf in MOMENTUM_TIMEFRAMES):
        picked = tuple(e for e in entries if e.timeframe in MOMENTUM_TIMEFRAMES)
        alerts.append(Alert(
            rule="momentum",
            symbol=symbol,
            entries=picked,
            message=_render(f"=== {symbol} BULLISH Alert ===", picked),
        ))

    return alerts
