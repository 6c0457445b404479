"""
Fees — расчёт комиссий в basis points

Модуль вычисляет комиссии платформы:
- конверсия bps ↔ дробь
- комиссия "поверх суммы" (fee = amount * bps / 10000)
- разделение суммы на fee и остаток (swap fee split)
- gross-up: восстановление gross суммы по желаемой net сумме

Инвариант разделения:
    fee_amount + remaining_amount == amount (с точностью до округления float)
"""

from typing import Final

from goldquote.core.errors import InvalidAmount
from goldquote.core.math.numerical_safeguards import (
    is_valid_float,
    validate_in_range,
)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Делитель basis points (1 bps = 0.01%)
BPS_DENOMINATOR: Final[int] = 10_000

# Допустимый диапазон fee_bps
MIN_FEE_BPS: Final[int] = 0
MAX_FEE_BPS: Final[int] = BPS_DENOMINATOR


# =============================================================================
# BASIS POINTS
# =============================================================================


def bps_to_fraction(bps: float) -> float:
    """
    Конверсия basis points в дробь.

    Args:
        bps: Basis points (например, 80 bps = 0.80%)

    Returns:
        Дробь (например, 80 bps → 0.008)
    """
    return bps / float(BPS_DENOMINATOR)


def fraction_to_bps(fraction: float) -> float:
    """Конверсия дроби в basis points (0.008 → 80 bps)."""
    return fraction * BPS_DENOMINATOR


def validate_fee_bps(fee_bps: int) -> None:
    """
    Проверка fee_bps: целое число в [0, 10000].

    Некорректный fee_bps — ошибка конфигурации/программирования,
    а не пользовательского ввода, поэтому здесь ValueError.

    Raises:
        ValueError: Если fee_bps не целое или вне диапазона
    """
    if isinstance(fee_bps, bool) or not isinstance(fee_bps, int):
        raise ValueError(f"fee_bps must be an integer, got {fee_bps!r}")

    validate_in_range(fee_bps, "fee_bps", MIN_FEE_BPS, MAX_FEE_BPS)


# =============================================================================
# КОМИССИИ
# =============================================================================


def fee_from_bps(amount: float, fee_bps: int) -> float:
    """
    Комиссия на сумму: amount * (fee_bps / 10000).

    Результат finite для любого finite amount >= 0.

    Args:
        amount: Сумма, с которой берётся комиссия (>= 0)
        fee_bps: Комиссия в basis points

    Returns:
        Размер комиссии в единицах amount

    Raises:
        InvalidAmount: Если amount отрицательный или не finite
        ValueError: Если fee_bps некорректный
    """
    validate_fee_bps(fee_bps)

    if not is_valid_float(amount) or amount < 0:
        raise InvalidAmount(
            f"amount must be a finite non-negative number, got {amount}",
            field="amount",
            value=amount,
        )

    return amount * bps_to_fraction(fee_bps)


def split_fee(amount: float, fee_bps: int) -> tuple[float, float]:
    """
    Разделение суммы на комиссию и остаток.

    remaining вычисляется вычитанием, поэтому сумма частей
    воспроизводит amount.

    Returns:
        (fee_amount, remaining_amount)
    """
    fee_amount = fee_from_bps(amount, fee_bps)
    return fee_amount, amount - fee_amount


def gross_up_fee(net_amount: float, fee_bps: int) -> float:
    """
    Комиссия для gross-up: какую fee нужно удержать из gross,
    чтобы после удержания осталось ровно net_amount.

        fee = net * bps / (10000 - bps)
        gross = net + fee  →  gross * bps / 10000 == fee

    Raises:
        InvalidAmount: Если net_amount отрицательный/не finite,
            либо fee_bps == 10000 (net недостижим)
        ValueError: Если fee_bps некорректный
    """
    validate_fee_bps(fee_bps)

    if not is_valid_float(net_amount) or net_amount < 0:
        raise InvalidAmount(
            f"net_amount must be a finite non-negative number, got {net_amount}",
            field="net_amount",
            value=net_amount,
        )

    if fee_bps >= BPS_DENOMINATOR:
        raise InvalidAmount(
            f"cannot gross up {net_amount} at fee_bps={fee_bps} (fee consumes full amount)",
            field="fee_bps",
            value=fee_bps,
        )

    return net_amount * (fee_bps / (BPS_DENOMINATOR - fee_bps))
