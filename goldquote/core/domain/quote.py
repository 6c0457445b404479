"""
Quote — Модель котировки buy/sell и swap fee

Immutable Pydantic модели. Quote — снапшот без идентичности:
создаётся заново при любом изменении входных данных.

Политика комиссии (одинакова для buy и sell):
- комиссия всегда считается на USD-ноге: fee_usd = gross_usd * fee_bps / 10000
- Quote несёт обе ноги явно: gross_usd / net_usd и grams / net_grams
- buy:  grams = gross grams на gross USD (комиссия показывается отдельно)
- sell: output_amount = net_usd (комиссия уже удержана из выручки)
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from goldquote.core.math.fees import MAX_FEE_BPS

# Допуск для проверки gross = net + fee
_LEG_TOLERANCE = 1e-9


# =============================================================================
# ENUMS
# =============================================================================


class Side(str, Enum):
    """Направление сделки"""

    BUY = "buy"
    SELL = "sell"


class Asset(str, Enum):
    """Активы, участвующие в котировках и swap"""

    USDC = "USDC"
    GOLD = "GOLD"
    XAUT = "XAUT"
    TRZRY = "TRZRY"
    ETH = "ETH"
    BTC = "BTC"


# =============================================================================
# REQUEST
# =============================================================================


class QuoteRequest(BaseModel):
    """
    Запрос котировки.

    buy:  input_amount (USD) ИЛИ grams
    sell: grams ИЛИ output_amount (желаемая net сумма в USD)

    Ровно один вариант проверяется в quote engine (InvalidAmount),
    здесь только структурные ограничения.
    """

    side: Side
    input_asset: Asset
    output_asset: Asset
    input_amount: float | None = Field(None, description="Сумма USD (buy)")
    output_amount: float | None = Field(None, description="Желаемая net сумма USD (sell)")
    grams: float | None = Field(None, description="Количество граммов")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_assets_differ(self) -> "QuoteRequest":
        """input_asset и output_asset должны различаться"""
        if self.input_asset == self.output_asset:
            raise ValueError(f"input_asset and output_asset must differ, got {self.input_asset.value}")
        return self

    @model_validator(mode="after")
    def validate_side_fields(self) -> "QuoteRequest":
        """input_amount только для buy, output_amount только для sell"""
        if self.side == Side.BUY and self.output_amount is not None:
            raise ValueError("output_amount is not accepted for buy requests")
        if self.side == Side.SELL and self.input_amount is not None:
            raise ValueError("input_amount is not accepted for sell requests")
        return self


# =============================================================================
# QUOTE
# =============================================================================


class Quote(BaseModel):
    """
    Котировка buy/sell.

    Все суммы неотрицательные; fee_usd + net_usd == gross_usd.
    """

    side: Side
    input_asset: Asset
    output_asset: Asset

    # Суммы (buy: input=USD, output=grams; sell: input=grams, output=net USD)
    input_amount: float = Field(..., ge=0, description="Сумма, которую отдаёт пользователь")
    output_amount: float = Field(..., ge=0, description="Сумма, которую получает пользователь")

    # Grams
    grams: float = Field(..., ge=0, description="Gross grams (по gross USD)")
    net_grams: float = Field(..., ge=0, description="Grams на USD после комиссии")

    # USD ноги
    gross_usd: float = Field(..., ge=0, description="USD до комиссии")
    net_usd: float = Field(..., ge=0, description="USD после комиссии")

    # Комиссия
    fee_bps: int = Field(..., ge=0, le=MAX_FEE_BPS, description="Комиссия в basis points")
    fee_usd: float = Field(..., ge=0, description="Комиссия в USD")
    platform_fee_usd: float = Field(0.0, ge=0, description="Доля платформы в fee_usd")

    # Цена
    unit_price_usd: float = Field(..., gt=0, description="Цена грамма (USD)")

    # Защита от проскальзывания
    slippage_bps: int = Field(0, ge=0, le=MAX_FEE_BPS)
    minimum_received: float | None = Field(None, ge=0, description="Минимум к получению с учётом slippage")

    # Время
    expires_ts_utc_ms: int | None = Field(None, ge=0, description="Истечение котировки (UTC, миллисекунды)")
    estimated_time_sec: int | None = Field(None, ge=0, description="Оценка времени исполнения")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_legs(self) -> "Quote":
        """Проверка gross_usd == net_usd + fee_usd и platform_fee_usd <= fee_usd"""
        tol = _LEG_TOLERANCE * max(self.gross_usd, 1.0)
        if abs(self.gross_usd - (self.net_usd + self.fee_usd)) > tol:
            raise ValueError(
                f"gross_usd {self.gross_usd} != net_usd {self.net_usd} + fee_usd {self.fee_usd}"
            )
        if self.platform_fee_usd > self.fee_usd + tol:
            raise ValueError(
                f"platform_fee_usd {self.platform_fee_usd} exceeds fee_usd {self.fee_usd}"
            )
        return self

    def fee_pct(self) -> float:
        """Комиссия в процентах (150 bps → 1.5)"""
        return self.fee_bps / 100.0

    def is_expired(self, now_ts_utc_ms: int) -> bool:
        """
        Истекла ли котировка.

        Котировка без expires_ts_utc_ms не истекает.
        """
        if self.expires_ts_utc_ms is None:
            return False
        return now_ts_utc_ms > self.expires_ts_utc_ms


# =============================================================================
# SWAP FEE
# =============================================================================


class SwapFee(BaseModel):
    """
    Результат разделения swap fee.

    fee_amount + remaining_amount == исходная сумма.
    """

    fee_amount: float = Field(..., ge=0)
    remaining_amount: float = Field(..., ge=0)
    fee_asset: str = Field(..., min_length=1)
    fee_bps: int = Field(..., ge=0, le=MAX_FEE_BPS)

    model_config = {"frozen": True}

    def total_amount(self) -> float:
        """Исходная сумма до удержания комиссии"""
        return self.fee_amount + self.remaining_amount
