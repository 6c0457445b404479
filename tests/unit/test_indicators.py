"""
Тесты для модуля Chart Indicators

Проверяет:
1. SMA / EMA на известных рядах
2. VWAP (включая нулевой объём)
3. RSI: монотонный рост/падение, недостаток данных
4. MACD: длины серий, histogram = macd - signal
5. Уровни Фибоначчи
"""

import pytest

from goldquote.core.domain.candle import Candle
from goldquote.core.math.indicators import (
    calculate_ema,
    calculate_fibonacci_levels,
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    calculate_vwap,
)

# =============================================================================
# HELPERS
# =============================================================================


def make_candles(closes: list[float], volume: float = 1.0) -> list[Candle]:
    """Свечи с open = high = low = close."""
    return [
        Candle(ts_utc_ms=1000 * i, open=c, high=c, low=c, close=c, volume=volume)
        for i, c in enumerate(closes)
    ]


# =============================================================================
# MOVING AVERAGES
# =============================================================================


class TestMovingAverages:
    """Тесты SMA / EMA"""

    def test_sma_basic(self) -> None:
        points = calculate_sma(make_candles([1.0, 2.0, 3.0, 4.0, 5.0]), period=3)

        assert [p.value for p in points] == pytest.approx([2.0, 3.0, 4.0])
        assert points[0].ts_utc_ms == 2000

    def test_sma_not_enough_data(self) -> None:
        assert calculate_sma(make_candles([1.0, 2.0]), period=3) == []

    def test_ema_seeded_with_sma(self) -> None:
        points = calculate_ema(make_candles([1.0, 2.0, 3.0, 4.0]), period=3)

        # seed = 2.0, multiplier = 0.5 → (4 - 2) * 0.5 + 2 = 3.0
        assert [p.value for p in points] == pytest.approx([2.0, 3.0])
        assert points[-1].ts_utc_ms == 3000

    def test_ema_constant_series(self) -> None:
        points = calculate_ema(make_candles([7.0] * 10), period=4)
        assert all(p.value == pytest.approx(7.0) for p in points)

    @pytest.mark.parametrize("period", [0, -1, 1.5])
    def test_invalid_period(self, period) -> None:
        with pytest.raises(ValueError):
            calculate_sma(make_candles([1.0, 2.0]), period=period)


# =============================================================================
# VWAP
# =============================================================================


class TestVWAP:
    """Тесты VWAP"""

    def test_vwap_weights_by_volume(self) -> None:
        candles = [
            Candle(ts_utc_ms=0, open=10.0, high=10.0, low=10.0, close=10.0, volume=1.0),
            Candle(ts_utc_ms=1, open=20.0, high=20.0, low=20.0, close=20.0, volume=3.0),
        ]
        points = calculate_vwap(candles)

        assert points[0].value == pytest.approx(10.0)
        assert points[1].value == pytest.approx((10.0 + 60.0) / 4.0)

    def test_vwap_zero_volume_uses_typical_price(self) -> None:
        candle = Candle(ts_utc_ms=0, open=10.0, high=12.0, low=9.0, close=11.0, volume=0.0)
        points = calculate_vwap([candle])
        assert points[0].value == pytest.approx(candle.typical_price)

    def test_vwap_empty(self) -> None:
        assert calculate_vwap([]) == []


# =============================================================================
# RSI
# =============================================================================


class TestRSI:
    """Тесты RSI"""

    def test_not_enough_data(self) -> None:
        assert calculate_rsi(make_candles([1.0] * 14), period=14) == []

    def test_series_length(self) -> None:
        points = calculate_rsi(make_candles([float(i + 1) for i in range(20)]), period=14)
        assert len(points) == 20 - 14
        assert points[0].ts_utc_ms == 14_000

    def test_rising_series(self) -> None:
        """Только рост: avg_loss = 0 → делитель 1, RSI = 100 - 100/(1 + avg_gain)"""
        points = calculate_rsi(make_candles([float(i + 1) for i in range(16)]), period=14)
        assert points[0].value == pytest.approx(100.0 - 100.0 / 2.0)

    def test_falling_series(self) -> None:
        """Только падение: RSI = 0"""
        points = calculate_rsi(make_candles([float(100 - i) for i in range(20)]), period=14)
        assert all(p.value == pytest.approx(0.0) for p in points)

    def test_rsi_in_range(self) -> None:
        closes = [100.0, 101.0, 99.5, 102.0, 101.0, 103.0, 102.5, 104.0, 103.0, 105.0, 104.0, 103.5]
        for p in calculate_rsi(make_candles(closes), period=5):
            assert 0.0 <= p.value <= 100.0


# =============================================================================
# MACD
# =============================================================================


class TestMACD:
    """Тесты MACD"""

    def test_not_enough_data(self) -> None:
        result = calculate_macd(make_candles([1.0] * 25))
        assert result.macd == []
        assert result.signal == []
        assert result.histogram == []

    def test_series_lengths(self) -> None:
        candles = make_candles([float(i) + 1.0 for i in range(40)])
        result = calculate_macd(candles)

        assert len(result.macd) == 40 - 26 + 1
        assert len(result.signal) == len(result.macd) - 9 + 1
        assert len(result.histogram) == len(result.signal)
        assert result.macd[0].ts_utc_ms == candles[25].ts_utc_ms

    def test_histogram_is_macd_minus_signal(self) -> None:
        closes = [100.0 + (i % 7) - (i % 3) * 0.5 for i in range(50)]
        result = calculate_macd(make_candles(closes), fast_period=3, slow_period=6, signal_period=4)

        by_ts = {p.ts_utc_ms: p.value for p in result.macd}
        for signal_point, hist_point in zip(result.signal, result.histogram):
            assert hist_point.ts_utc_ms == signal_point.ts_utc_ms
            assert hist_point.value == pytest.approx(by_ts[signal_point.ts_utc_ms] - signal_point.value)

    def test_constant_series_is_flat(self) -> None:
        result = calculate_macd(make_candles([50.0] * 40))
        assert all(p.value == pytest.approx(0.0, abs=1e-12) for p in result.macd)

    def test_fast_must_be_shorter(self) -> None:
        with pytest.raises(ValueError):
            calculate_macd(make_candles([1.0] * 40), fast_period=26, slow_period=12)


# =============================================================================
# FIBONACCI
# =============================================================================


class TestFibonacci:
    """Тесты уровней Фибоначчи"""

    def test_levels(self) -> None:
        levels = calculate_fibonacci_levels(high=200.0, low=100.0)

        assert levels["0.0"] == 200.0
        assert levels["0.5"] == pytest.approx(150.0)
        assert levels["0.618"] == pytest.approx(138.2)
        assert levels["1.0"] == pytest.approx(100.0)
        assert list(levels) == ["0.0", "0.236", "0.382", "0.5", "0.618", "0.786", "1.0"]

    def test_high_below_low(self) -> None:
        with pytest.raises(ValueError):
            calculate_fibonacci_levels(high=1.0, low=2.0)
