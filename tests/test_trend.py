import pytest

from conftest import rising_bars, falling_bars
from supertrend_alert.analysis.indicators import IndicatorSnapshot, compute_indicators
from supertrend_alert.analysis.trend import TrendLabel, classify


def snapshot(ema200=100.0, histogram=1.0, in_uptrend=True):
    return IndicatorSnapshot(
        ema200=ema200,
        macd=histogram / 0.8,
        signal=histogram / 0.8 * 0.2,
        histogram=histogram,
        upper_band=110.0,
        lower_band=90.0,
        in_uptrend=in_uptrend,
    )


def test_bullish_when_all_conditions_hold():
    assert classify(snapshot(), 101.0) is TrendLabel.BULLISH


@pytest.mark.parametrize(
    "snap,price",
    [
        (snapshot(), 100.0),  # price equal to ema200
        (snapshot(), 99.0),
        (snapshot(histogram=0.0), 101.0),
        (snapshot(histogram=-0.5), 101.0),
        (snapshot(in_uptrend=False), 101.0),
    ],
)
def test_bearish_otherwise(snap, price):
    assert classify(snap, price) is TrendLabel.BEARISH


def test_labels_from_real_series():
    up = rising_bars()
    down = falling_bars()
    assert classify(compute_indicators(up), up[-1].close) is TrendLabel.BULLISH
    assert classify(compute_indicators(down), down[-1].close) is TrendLabel.BEARISH


def test_label_rendering():
    assert TrendLabel.BULLISH.value == "BULLISH"
    assert TrendLabel.BULLISH.emoji == "🟢"
    assert TrendLabel.BEARISH.emoji == "🔴"
