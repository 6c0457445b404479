"""
GoldPrice — снапшот цены золота от внешнего price feed

Immutable Pydantic модель. Quote engine получает цену явно как параметр
и никогда не читает глобальный кэш цен.
"""

from typing import Final

from pydantic import BaseModel, Field, model_validator

from goldquote.core.domain.units import GRAMS_PER_TROY_OUNCE, usd_per_oz_to_usd_per_gram

# Максимальный возраст цены, после которого она считается устаревшей (7 минут)
PRICE_MAX_AGE_MS: Final[int] = 7 * 60 * 1000

# Допуск согласованности usd_per_gram с usd_per_oz (относительный)
PRICE_CONSISTENCY_REL_TOL: Final[float] = 1e-3


class GoldPrice(BaseModel):
    """
    Цена золота на момент last_updated_ts_utc_ms.

    usd_per_oz и usd_per_gram должны быть согласованы через
    GRAMS_PER_TROY_OUNCE (с допуском PRICE_CONSISTENCY_REL_TOL, так как
    feed может округлять цену за грамм).
    """

    usd_per_oz: float = Field(..., gt=0, allow_inf_nan=False, description="Цена за тройскую унцию (USD)")
    usd_per_gram: float = Field(..., gt=0, allow_inf_nan=False, description="Цена за грамм (USD)")
    change_24h: float = Field(0.0, allow_inf_nan=False, description="Изменение за 24ч (USD/oz)")
    change_percent_24h: float = Field(0.0, allow_inf_nan=False, description="Изменение за 24ч (%)")
    last_updated_ts_utc_ms: int = Field(..., ge=0, description="Время обновления (UTC, миллисекунды)")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_gram_price_consistency(self) -> "GoldPrice":
        """Проверка usd_per_gram ≈ usd_per_oz / GRAMS_PER_TROY_OUNCE"""
        expected = self.usd_per_oz / GRAMS_PER_TROY_OUNCE
        if abs(self.usd_per_gram - expected) > PRICE_CONSISTENCY_REL_TOL * expected:
            raise ValueError(
                f"usd_per_gram {self.usd_per_gram} inconsistent with "
                f"usd_per_oz {self.usd_per_oz} (expected ≈ {expected:.6f})"
            )
        return self

    @classmethod
    def from_usd_per_oz(
        cls,
        usd_per_oz: float,
        last_updated_ts_utc_ms: int,
        change_24h: float = 0.0,
        change_percent_24h: float = 0.0,
    ) -> "GoldPrice":
        """Создание снапшота по цене за унцию (цена за грамм вычисляется)."""
        return cls(
            usd_per_oz=usd_per_oz,
            usd_per_gram=usd_per_oz_to_usd_per_gram(usd_per_oz),
            change_24h=change_24h,
            change_percent_24h=change_percent_24h,
            last_updated_ts_utc_ms=last_updated_ts_utc_ms,
        )

    def age_ms(self, now_ts_utc_ms: int) -> int:
        """Возраст цены в миллисекундах (не меньше 0)."""
        return max(now_ts_utc_ms - self.last_updated_ts_utc_ms, 0)

    def is_fresh(self, now_ts_utc_ms: int, max_age_ms: int = PRICE_MAX_AGE_MS) -> bool:
        """
        Свежесть цены.

        Returns:
            True если цене меньше max_age_ms
        """
        return self.age_ms(now_ts_utc_ms) < max_age_ms
