"""
Quote Engine — расчёт котировок buy/sell и swap fee

Чистые детерминированные функции без I/O:
- compute_buy_quote:  USD → grams (или grams → USD) с комиссией на USD-ноге
- compute_sell_quote: grams → net USD (или желаемый net USD → grams через gross-up)
- calculate_swap_fee: разделение суммы на fee и остаток

QuoteEngine — stateless фасад с конфигурацией комиссий, лимитов сделки,
slippage и срока жизни котировки. Цена всегда передаётся явно.

Политика комиссии (одинакова для buy и sell):
    fee_usd = gross_usd * fee_bps / 10000, net_usd = gross_usd - fee_usd
    Quote содержит обе ноги (gross/net) — ничего не вычитается молча.
"""

from dataclasses import dataclass, field
from typing import Final

from loguru import logger

from goldquote.core.domain.price import GoldPrice
from goldquote.core.domain.quote import Asset, Quote, QuoteRequest, Side, SwapFee
from goldquote.core.domain.units import (
    grams_to_usd,
    usd_to_grams,
    validate_unit_price,
)
from goldquote.core.errors import InvalidAmount, QuoteEngineError
from goldquote.core.math.fees import (
    BPS_DENOMINATOR,
    fee_from_bps,
    gross_up_fee,
    split_fee,
    validate_fee_bps,
)
from goldquote.core.math.numerical_safeguards import is_valid_float, validate_positive

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Комиссия swap по умолчанию (0.8%)
DEFAULT_SWAP_FEE_BPS: Final[int] = 80

# Токены, для пар которых взимается swap fee
SWAP_FEE_ELIGIBLE_ASSETS: Final[frozenset[str]] = frozenset(
    {Asset.ETH.value, Asset.USDC.value, Asset.XAUT.value, Asset.TRZRY.value, Asset.BTC.value}
)


# =============================================================================
# ВСПОМОГАТЕЛЬНЫЕ
# =============================================================================


def _asset_code(asset: Asset | str) -> str:
    return asset.value if isinstance(asset, Asset) else str(asset)


def _resolve_single_amount(
    first: tuple[str, float | None],
    second: tuple[str, float | None],
) -> tuple[str, float]:
    """
    Выбор ровно одного из двух альтернативных входов.

    Returns:
        (имя, значение) переданного входа

    Raises:
        InvalidAmount: Если переданы оба, ни одного, либо значение
            неположительное или не finite
    """
    provided = [(name, value) for name, value in (first, second) if value is not None]

    if len(provided) != 1:
        names = f"{first[0]} or {second[0]}"
        state = "both" if provided else "neither"
        raise InvalidAmount(
            f"exactly one of {names} must be provided, got {state}",
            field=names,
            value=None,
        )

    name, value = provided[0]
    if not is_valid_float(value) or value <= 0:
        raise InvalidAmount(
            f"{name} must be a finite positive number, got {value}",
            field=name,
            value=value,
        )

    return name, value


def _check_resolved_legs(gross_usd: float, gross_grams: float) -> None:
    """
    Обе ноги после конверсии должны быть finite и > 0.

    Конверсия может переполниться (inf) или уйти в ноль при экстремальной
    цене, даже если переданная сумма корректна.

    Raises:
        InvalidAmount: Если gross_usd или gross_grams не finite / не положительны
    """
    for name, value in (("gross_usd", gross_usd), ("grams", gross_grams)):
        if not is_valid_float(value) or value <= 0:
            raise InvalidAmount(
                f"resolved {name} must be a finite positive number, got {value}",
                field=name,
                value=value,
            )


# =============================================================================
# BUY / SELL
# =============================================================================


def compute_buy_quote(
    usd_per_gram: float,
    fee_bps: int,
    input_amount_usd: float | None = None,
    grams: float | None = None,
    input_asset: Asset = Asset.USDC,
    output_asset: Asset = Asset.GOLD,
) -> Quote:
    """
    Котировка покупки золота.

    Ровно один из input_amount_usd / grams; второй выводится конверсией.
    Комиссия на USD-ноге, grams — gross (на gross USD), net_grams — после
    комиссии.

    Args:
        usd_per_gram: Цена грамма (USD)
        fee_bps: Комиссия в basis points [0, 10000]
        input_amount_usd: Сумма покупки в USD
        grams: Количество граммов

    Returns:
        Quote (input_amount = gross USD, output_amount = gross grams)

    Raises:
        InvalidPrice: Если usd_per_gram неположительная или не finite
        InvalidAmount: Если сумма неположительная/не finite, либо заданы оба
            (или ни одного) входа
        ValueError: Если fee_bps вне [0, 10000]
    """
    validate_unit_price(usd_per_gram)
    validate_fee_bps(fee_bps)
    name, amount = _resolve_single_amount(("input_amount_usd", input_amount_usd), ("grams", grams))

    if name == "input_amount_usd":
        gross_usd = amount
        gross_grams = usd_to_grams(gross_usd, usd_per_gram)
    else:
        gross_grams = amount
        gross_usd = grams_to_usd(gross_grams, usd_per_gram)

    _check_resolved_legs(gross_usd, gross_grams)
    fee_usd, net_usd = split_fee(gross_usd, fee_bps)

    return Quote(
        side=Side.BUY,
        input_asset=input_asset,
        output_asset=output_asset,
        input_amount=gross_usd,
        output_amount=gross_grams,
        grams=gross_grams,
        net_grams=usd_to_grams(net_usd, usd_per_gram),
        gross_usd=gross_usd,
        net_usd=net_usd,
        fee_bps=fee_bps,
        fee_usd=fee_usd,
        unit_price_usd=usd_per_gram,
    )


def compute_sell_quote(
    usd_per_gram: float,
    fee_bps: int,
    output_amount_usd: float | None = None,
    grams: float | None = None,
    input_asset: Asset = Asset.GOLD,
    output_asset: Asset = Asset.USDC,
) -> Quote:
    """
    Котировка продажи золота.

    grams → gross USD, комиссия удерживается из выручки:
        output_amount = gross_usd - fee_usd (net)

    output_amount_usd (желаемая net сумма) → gross-up:
        fee_usd = net * bps / (10000 - bps), gross_usd = net + fee_usd

    Raises:
        InvalidPrice: Если usd_per_gram неположительная или не finite
        InvalidAmount: Как в compute_buy_quote; также gross-up при fee_bps == 10000
        ValueError: Если fee_bps вне [0, 10000]
    """
    validate_unit_price(usd_per_gram)
    validate_fee_bps(fee_bps)
    name, amount = _resolve_single_amount(("output_amount_usd", output_amount_usd), ("grams", grams))

    if name == "grams":
        gross_grams = amount
        gross_usd = grams_to_usd(gross_grams, usd_per_gram)
        _check_resolved_legs(gross_usd, gross_grams)
        fee_usd, net_usd = split_fee(gross_usd, fee_bps)
    else:
        net_usd = amount
        fee_usd = gross_up_fee(net_usd, fee_bps)
        gross_usd = net_usd + fee_usd
        gross_grams = usd_to_grams(gross_usd, usd_per_gram)
        _check_resolved_legs(gross_usd, gross_grams)

    return Quote(
        side=Side.SELL,
        input_asset=input_asset,
        output_asset=output_asset,
        input_amount=gross_grams,
        output_amount=net_usd,
        grams=gross_grams,
        net_grams=usd_to_grams(net_usd, usd_per_gram),
        gross_usd=gross_usd,
        net_usd=net_usd,
        fee_bps=fee_bps,
        fee_usd=fee_usd,
        unit_price_usd=usd_per_gram,
    )


# =============================================================================
# SWAP FEE
# =============================================================================


def calculate_swap_fee(
    output_amount: float,
    output_asset: Asset | str,
    input_asset: Asset | str,
    fee_bps: int = DEFAULT_SWAP_FEE_BPS,
) -> SwapFee:
    """
    Разделение выхода swap на комиссию платформы и остаток.

        fee_amount = output_amount * fee_bps / 10000
        remaining_amount = output_amount - fee_amount

    Комиссия номинирована в output_asset. Запись о сборе комиссии
    делает внешний коллаборатор.

    Raises:
        InvalidAmount: Если output_amount отрицательный или не finite
        ValueError: Если fee_bps вне [0, 10000]
    """
    fee_amount, remaining_amount = split_fee(output_amount, fee_bps)

    return SwapFee(
        fee_amount=fee_amount,
        remaining_amount=remaining_amount,
        fee_asset=_asset_code(output_asset),
        fee_bps=fee_bps,
    )


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class QuoteEngineConfig:
    """
    Конфигурация QuoteEngine.

    Комиссия buy/sell = base_fee_bps + platform_fee_bps (по умолчанию 1.5%).
    Лимиты сделки соответствуют валидации форм buy/sell.
    """

    # Комиссии
    base_fee_bps: int = 50  # 0.5%
    platform_fee_bps: int = 100  # 1.0%
    swap_fee_bps: int = DEFAULT_SWAP_FEE_BPS  # 0.8%

    # Защита от проскальзывания
    slippage_bps: int = 25  # 0.25%

    # Срок жизни котировки
    quote_validity_ms: int = 2 * 60 * 1000

    # Swap fee берётся только для пар из этого набора
    swap_fee_eligible_assets: frozenset[str] = field(default=SWAP_FEE_ELIGIBLE_ASSETS)

    # Лимиты buy (USD)
    min_buy_usd: float = 10.0
    max_buy_usd: float = 100_000.0

    # Лимиты sell (grams)
    min_sell_grams: float = 0.01
    max_sell_grams: float = 1000.0

    def __post_init__(self) -> None:
        for name in ("base_fee_bps", "platform_fee_bps", "swap_fee_bps", "slippage_bps"):
            validate_fee_bps(getattr(self, name))
        validate_fee_bps(self.total_fee_bps)

        validate_positive(self.quote_validity_ms, "quote_validity_ms")
        validate_positive(self.min_buy_usd, "min_buy_usd")
        validate_positive(self.min_sell_grams, "min_sell_grams")

        if self.min_buy_usd > self.max_buy_usd:
            raise ValueError(
                f"invalid buy limits: min {self.min_buy_usd}, max {self.max_buy_usd}"
            )
        if self.min_sell_grams > self.max_sell_grams:
            raise ValueError(
                f"invalid sell limits: min {self.min_sell_grams}, max {self.max_sell_grams}"
            )

    @property
    def total_fee_bps(self) -> int:
        """Полная комиссия buy/sell в bps"""
        return self.base_fee_bps + self.platform_fee_bps


# =============================================================================
# QUOTE ENGINE
# =============================================================================


class QuoteEngine:
    """
    Stateless фасад расчёта котировок.

    Порядок generate_quote:
    1. Извлечение usd_per_gram из переданной цены
    2. Buy/sell расчёт (compute_buy_quote / compute_sell_quote)
    3. Проверка лимитов сделки
    4. Доля платформы, minimum_received, expires_ts_utc_ms

    Ошибки не перехватываются: QuoteEngineError логируется и пробрасывается.
    """

    def __init__(self, config: QuoteEngineConfig | None = None):
        """
        Args:
            config: конфигурация (опционально, используется default)
        """
        self.config = config or QuoteEngineConfig()

    def generate_quote(
        self,
        request: QuoteRequest,
        price: GoldPrice | float,
        now_ts_utc_ms: int | None = None,
    ) -> Quote:
        """
        Котировка по запросу и текущей цене.

        Args:
            request: запрос котировки
            price: GoldPrice или usd_per_gram
            now_ts_utc_ms: текущее время; если задано, выставляется
                expires_ts_utc_ms и проверяется свежесть GoldPrice

        Returns:
            Quote с заполненными platform_fee_usd, minimum_received, slippage_bps

        Raises:
            InvalidAmount / InvalidPrice
        """
        usd_per_gram = price.usd_per_gram if isinstance(price, GoldPrice) else price

        if isinstance(price, GoldPrice) and now_ts_utc_ms is not None and not price.is_fresh(now_ts_utc_ms):
            logger.warning(
                f"quote_stale_price age_ms={price.age_ms(now_ts_utc_ms)} usd_per_gram={usd_per_gram}"
            )

        try:
            if request.side == Side.BUY:
                quote = compute_buy_quote(
                    usd_per_gram=usd_per_gram,
                    fee_bps=self.config.total_fee_bps,
                    input_amount_usd=request.input_amount,
                    grams=request.grams,
                    input_asset=request.input_asset,
                    output_asset=request.output_asset,
                )
            else:
                quote = compute_sell_quote(
                    usd_per_gram=usd_per_gram,
                    fee_bps=self.config.total_fee_bps,
                    output_amount_usd=request.output_amount,
                    grams=request.grams,
                    input_asset=request.input_asset,
                    output_asset=request.output_asset,
                )
            self._check_limits(quote)
        except QuoteEngineError as e:
            logger.warning(f"quote_rejected side={request.side.value} field={e.field} reason={e}")
            raise

        slippage_frac = self.config.slippage_bps / BPS_DENOMINATOR
        expires_ts_utc_ms = (
            now_ts_utc_ms + self.config.quote_validity_ms if now_ts_utc_ms is not None else None
        )

        quote = Quote.model_validate(
            {
                **quote.model_dump(),
                "platform_fee_usd": fee_from_bps(quote.gross_usd, self.config.platform_fee_bps),
                "slippage_bps": self.config.slippage_bps,
                "minimum_received": quote.output_amount * (1.0 - slippage_frac),
                "expires_ts_utc_ms": expires_ts_utc_ms,
            }
        )

        logger.debug(
            f"quote_generated side={quote.side.value} gross_usd={quote.gross_usd:.2f} "
            f"grams={quote.grams:.6f} fee_usd={quote.fee_usd:.2f} fee_bps={quote.fee_bps}"
        )
        return quote

    def _check_limits(self, quote: Quote) -> None:
        """Лимиты сделки: buy — по gross USD, sell — по grams."""
        cfg = self.config

        if quote.side == Side.BUY:
            if not cfg.min_buy_usd <= quote.gross_usd <= cfg.max_buy_usd:
                raise InvalidAmount(
                    f"buy amount {quote.gross_usd:.2f} USD outside "
                    f"[{cfg.min_buy_usd}, {cfg.max_buy_usd}]",
                    field="input_amount",
                    value=quote.gross_usd,
                )
        else:
            if not cfg.min_sell_grams <= quote.grams <= cfg.max_sell_grams:
                raise InvalidAmount(
                    f"sell amount {quote.grams:.6f} grams outside "
                    f"[{cfg.min_sell_grams}, {cfg.max_sell_grams}]",
                    field="grams",
                    value=quote.grams,
                )

    def should_apply_swap_fee(self, input_asset: Asset | str, output_asset: Asset | str) -> bool:
        """Swap fee берётся только если оба актива в eligible наборе."""
        eligible = self.config.swap_fee_eligible_assets
        return _asset_code(input_asset) in eligible and _asset_code(output_asset) in eligible

    def swap_fee(
        self,
        output_amount: float,
        output_asset: Asset | str,
        input_asset: Asset | str,
    ) -> SwapFee:
        """
        Swap fee с учётом eligible пар.

        Для неподходящей пары комиссия 0, remaining_amount == output_amount.
        """
        fee_bps = self.config.swap_fee_bps if self.should_apply_swap_fee(input_asset, output_asset) else 0

        try:
            result = calculate_swap_fee(output_amount, output_asset, input_asset, fee_bps=fee_bps)
        except QuoteEngineError as e:
            logger.warning(f"swap_fee_rejected output_asset={_asset_code(output_asset)} reason={e}")
            raise

        logger.debug(
            f"swap_fee_calculated pair={_asset_code(input_asset)}->{_asset_code(output_asset)} "
            f"fee={result.fee_amount} remaining={result.remaining_amount} fee_bps={fee_bps}"
        )
        return result

    @staticmethod
    def is_quote_expired(quote: Quote, now_ts_utc_ms: int) -> bool:
        """Истекла ли котировка к моменту now_ts_utc_ms."""
        return quote.is_expired(now_ts_utc_ms)
