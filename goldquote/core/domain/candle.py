"""
Candle — OHLCV свеча для расчёта индикаторов графика

Immutable Pydantic модели. Используются только для отображения
(индикаторы на клиенте), в расчёт котировок не входят.
"""

from pydantic import BaseModel, Field, model_validator


class Candle(BaseModel):
    """OHLCV свеча."""

    ts_utc_ms: int = Field(..., ge=0, description="Время открытия свечи (UTC, миллисекунды)")
    open: float = Field(..., gt=0, description="Цена открытия")
    high: float = Field(..., gt=0, description="Максимум")
    low: float = Field(..., gt=0, description="Минимум")
    close: float = Field(..., gt=0, description="Цена закрытия")
    volume: float = Field(0.0, ge=0, description="Объём")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_range(self) -> "Candle":
        """high >= max(open, close), low <= min(open, close)"""
        if self.high < self.low:
            raise ValueError(f"high {self.high} must be >= low {self.low}")
        if self.high < max(self.open, self.close):
            raise ValueError(f"high {self.high} below open/close")
        if self.low > min(self.open, self.close):
            raise ValueError(f"low {self.low} above open/close")
        return self

    @property
    def typical_price(self) -> float:
        """(high + low + close) / 3"""
        return (self.high + self.low + self.close) / 3.0


class IndicatorPoint(BaseModel):
    """Точка серии индикатора."""

    ts_utc_ms: int = Field(..., ge=0)
    value: float

    model_config = {"frozen": True}
