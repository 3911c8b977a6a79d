from unittest.mock import Mock, patch

import pytest
import requests

from supertrend_alert.providers.base import ProviderError
from supertrend_alert.providers.binance import BinanceProvider, parse_kline
from supertrend_alert.providers.factory import get_provider
from supertrend_alert.providers.mock import MockProvider

KLINE = [1700000000000, "100.5", "101.0", "99.5", "100.8", "1234.5", 1700000059999, "0", 10, "0", "0", "0"]


def response(payload, status=200):
    r = Mock()
    r.status_code = status
    r.json.return_value = payload
    if status >= 400:
        r.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return r


def test_parse_kline():
    bar = parse_kline(KLINE)
    assert bar.ts == 1700000000000
    assert (bar.open, bar.high, bar.low, bar.close, bar.volume) == (100.5, 101.0, 99.5, 100.8, 1234.5)


@patch("supertrend_alert.providers.binance.requests.get")
def test_fetch_ohlcv(mock_get):
    mock_get.return_value = response([KLINE, KLINE])
    bars = BinanceProvider(base_url="https://example.test/api/v3/").fetch_ohlcv("BTCUSDT", "5m", 100)

    assert len(bars) == 2
    args, kwargs = mock_get.call_args
    assert args[0] == "https://example.test/api/v3/klines"
    assert kwargs["params"] == {"symbol": "BTCUSDT", "interval": "5m", "limit": 100}


@patch("supertrend_alert.providers.binance.requests.get")
def test_http_errors_become_provider_errors(mock_get):
    mock_get.return_value = response({"code": -1121, "msg": "Invalid symbol."}, status=400)
    with pytest.raises(ProviderError):
        BinanceProvider().fetch_ohlcv("NOPE", "1m")

    mock_get.side_effect = requests.ConnectionError("down")
    with pytest.raises(ProviderError):
        BinanceProvider().fetch_tickers_24h()


@patch("supertrend_alert.providers.binance.requests.get")
def test_unexpected_payloads(mock_get):
    mock_get.return_value = response({"msg": "weird"})
    with pytest.raises(ProviderError):
        BinanceProvider().fetch_ohlcv("BTCUSDT", "1m")

    mock_get.return_value = response([["bad"]])
    with pytest.raises(ProviderError, match="Malformed kline"):
        BinanceProvider().fetch_ohlcv("BTCUSDT", "1m")


@patch("supertrend_alert.providers.binance.requests.get")
def test_fetch_tickers(mock_get):
    mock_get.return_value = response([{"symbol": "BTCUSDT", "priceChangePercent": "1.2"}])
    assert BinanceProvider().fetch_tickers_24h()[0]["symbol"] == "BTCUSDT"


def test_mock_provider_bars_are_well_formed():
    bars = MockProvider(seed=7).fetch_ohlcv("BTCUSDT", "15m", 100)
    assert len(bars) == 100
    assert all(b.high >= b.low for b in bars)
    assert [b.ts for b in bars] == sorted(b.ts for b in bars)


def test_factory():
    assert isinstance(get_provider("mock"), MockProvider)
    assert isinstance(get_provider("binance"), BinanceProvider)


@patch("supertrend_alert.providers.binance.requests.get")
def test_malformed_tickers(mock_get):
    mock_get.return_value = response(["x", 3])
    with pytest.raises(ProviderError, match="Malformed 24h ticker"):
        BinanceProvider().fetch_tickers_24h()

    mock_get.return_value = response([{"priceChangePercent": "1.0"}])
    with pytest.raises(ProviderError):
        BinanceProvider().fetch_tickers_24h()
