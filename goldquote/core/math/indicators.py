"""
Chart Indicators — индикаторы для графика цены золота

Чистые функции над последовательностью Candle:
- SMA / EMA (скользящие средние по close)
- VWAP (кумулятивный, по typical price)
- RSI (сглаживание Wilder)
- MACD (fast EMA - slow EMA, signal = EMA от MACD, histogram)
- Fibonacci retracement levels

Используются только для отображения; на котировки не влияют.
При недостатке данных функции возвращают пустые серии, а не ошибку.
"""

from dataclasses import dataclass
from typing import Final, Sequence

from goldquote.core.domain.candle import Candle, IndicatorPoint

# =============================================================================
# ПАРАМЕТРЫ ПО УМОЛЧАНИЮ
# =============================================================================

RSI_PERIOD_DEFAULT: Final[int] = 14
MACD_FAST_DEFAULT: Final[int] = 12
MACD_SLOW_DEFAULT: Final[int] = 26
MACD_SIGNAL_DEFAULT: Final[int] = 9

FIBONACCI_RATIOS: Final[tuple[float, ...]] = (0.0, 0.236, 0.382, 0.5, 0.618, 0.786, 1.0)


@dataclass(frozen=True)
class MACDResult:
    """Три серии MACD."""

    macd: list[IndicatorPoint]
    signal: list[IndicatorPoint]
    histogram: list[IndicatorPoint]


def _validate_period(period: int, name: str = "period") -> None:
    if isinstance(period, bool) or not isinstance(period, int) or period < 1:
        raise ValueError(f"{name} must be an integer >= 1, got {period!r}")


def _ema_values(values: Sequence[float], period: int) -> list[float]:
    """EMA с затравкой SMA первых period значений. Длина: len(values) - period + 1."""
    if len(values) < period:
        return []

    multiplier = 2.0 / (period + 1)
    ema = sum(values[:period]) / period
    result = [ema]

    for value in values[period:]:
        ema = (value - ema) * multiplier + ema
        result.append(ema)

    return result


# =============================================================================
# СКОЛЬЗЯЩИЕ СРЕДНИЕ
# =============================================================================


def calculate_sma(candles: Sequence[Candle], period: int) -> list[IndicatorPoint]:
    """
    Simple Moving Average по close.

    Первая точка соответствует свече с индексом period - 1.
    """
    _validate_period(period)
    if len(candles) < period:
        return []

    closes = [c.close for c in candles]
    window_sum = sum(closes[:period])
    results = [IndicatorPoint(ts_utc_ms=candles[period - 1].ts_utc_ms, value=window_sum / period)]

    for i in range(period, len(candles)):
        window_sum += closes[i] - closes[i - period]
        results.append(IndicatorPoint(ts_utc_ms=candles[i].ts_utc_ms, value=window_sum / period))

    return results


def calculate_ema(candles: Sequence[Candle], period: int) -> list[IndicatorPoint]:
    """
    Exponential Moving Average по close.

    multiplier = 2 / (period + 1), затравка — SMA первых period свечей.
    """
    _validate_period(period)
    values = _ema_values([c.close for c in candles], period)
    return [
        IndicatorPoint(ts_utc_ms=candles[period - 1 + i].ts_utc_ms, value=v)
        for i, v in enumerate(values)
    ]


# =============================================================================
# VWAP
# =============================================================================


def calculate_vwap(candles: Sequence[Candle]) -> list[IndicatorPoint]:
    """
    Volume-Weighted Average Price (кумулятивный).

    VWAP_i = Σ(typical_price * volume) / Σ volume
    Пока кумулятивный объём равен нулю, возвращается typical price.
    """
    cumulative_tpv = 0.0
    cumulative_volume = 0.0
    results = []

    for candle in candles:
        typical_price = candle.typical_price
        cumulative_tpv += typical_price * candle.volume
        cumulative_volume += candle.volume

        value = cumulative_tpv / cumulative_volume if cumulative_volume > 0 else typical_price
        results.append(IndicatorPoint(ts_utc_ms=candle.ts_utc_ms, value=value))

    return results


# =============================================================================
# RSI
# =============================================================================


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    # Нулевой средний убыток заменяется на 1
    rs = avg_gain / (avg_loss or 1.0)
    return 100.0 - (100.0 / (1.0 + rs))


def calculate_rsi(
    candles: Sequence[Candle],
    period: int = RSI_PERIOD_DEFAULT,
) -> list[IndicatorPoint]:
    """
    Relative Strength Index.

    Первое значение — по простым средним gain/loss за period изменений,
    далее сглаживание Wilder:
        avg = (avg * (period - 1) + current) / period

    Returns:
        Пустой список, если свечей меньше period + 1
    """
    _validate_period(period)
    if len(candles) < period + 1:
        return []

    gains: list[float] = []
    losses: list[float] = []
    for prev, curr in zip(candles, candles[1:]):
        change = curr.close - prev.close
        gains.append(change if change > 0 else 0.0)
        losses.append(-change if change < 0 else 0.0)

    avg_gain = sum(gains[:period]) / period
    avg_loss = sum(losses[:period]) / period

    results = [
        IndicatorPoint(
            ts_utc_ms=candles[period].ts_utc_ms,
            value=_rsi_from_averages(avg_gain, avg_loss),
        )
    ]

    for i in range(period, len(gains)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        results.append(
            IndicatorPoint(
                ts_utc_ms=candles[i + 1].ts_utc_ms,
                value=_rsi_from_averages(avg_gain, avg_loss),
            )
        )

    return results


# =============================================================================
# MACD
# =============================================================================


def calculate_macd(
    candles: Sequence[Candle],
    fast_period: int = MACD_FAST_DEFAULT,
    slow_period: int = MACD_SLOW_DEFAULT,
    signal_period: int = MACD_SIGNAL_DEFAULT,
) -> MACDResult:
    """
    Moving Average Convergence Divergence.

    macd      = EMA_fast - EMA_slow (начиная со свечи slow_period - 1)
    signal    = EMA(signal_period) от macd
    histogram = macd - signal

    Returns:
        MACDResult с пустыми сериями, если свечей меньше slow_period
    """
    _validate_period(fast_period, "fast_period")
    _validate_period(slow_period, "slow_period")
    _validate_period(signal_period, "signal_period")
    if fast_period >= slow_period:
        raise ValueError(
            f"fast_period ({fast_period}) must be < slow_period ({slow_period})"
        )

    if len(candles) < slow_period:
        return MACDResult(macd=[], signal=[], histogram=[])

    closes = [c.close for c in candles]
    fast_ema = _ema_values(closes, fast_period)
    slow_ema = _ema_values(closes, slow_period)

    # fast_ema[k] соответствует свече k + fast_period - 1
    offset = slow_period - fast_period
    macd_line = [
        IndicatorPoint(
            ts_utc_ms=candles[slow_period - 1 + j].ts_utc_ms,
            value=fast_ema[j + offset] - slow_value,
        )
        for j, slow_value in enumerate(slow_ema)
    ]

    signal_values = _ema_values([p.value for p in macd_line], signal_period)
    signal_line = [
        IndicatorPoint(ts_utc_ms=macd_line[signal_period - 1 + i].ts_utc_ms, value=v)
        for i, v in enumerate(signal_values)
    ]

    histogram = [
        IndicatorPoint(
            ts_utc_ms=point.ts_utc_ms,
            value=macd_line[signal_period - 1 + i].value - point.value,
        )
        for i, point in enumerate(signal_line)
    ]

    return MACDResult(macd=macd_line, signal=signal_line, histogram=histogram)


# =============================================================================
# FIBONACCI
# =============================================================================


def calculate_fibonacci_levels(high: float, low: float) -> dict[str, float]:
    """
    Уровни коррекции Фибоначчи от high к low.

    Returns:
        {"0.0": high, "0.236": ..., "1.0": low}
    """
    if high < low:
        raise ValueError(f"high ({high}) must be >= low ({low})")

    diff = high - low
    return {str(ratio): high - diff * ratio for ratio in FIBONACCI_RATIOS}
