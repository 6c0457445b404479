"""
Units — Централизованный модуль конверсии USD ↔ grams

Единственный допустимый способ преобразований между:
- usd (сумма в долларах)
- grams (количество токена, 1 токен-единица = 1 грамм золота)
- usd_per_gram / usd_per_oz (цена единицы)

ЗАПРЕЩЕНО смешивать цену за унцию и цену за грамм без явного конвертера
из этого модуля.

Инвариант обратимости (без комиссии, при одной и той же цене):
    grams_to_usd(usd_to_grams(usd, p), p) ≈ usd
"""

from typing import Final

from goldquote.core.errors import InvalidAmount, InvalidPrice
from goldquote.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_REL,
    is_close,
    is_valid_float,
)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Тройская унция в граммах
GRAMS_PER_TROY_OUNCE: Final[float] = 31.1034768

# Порог "значимого" изменения цены для уведомления подписчиков (0.1%)
PRICE_CHANGE_THRESHOLD: Final[float] = 0.001


# =============================================================================
# ВАЛИДАЦИЯ ЦЕНЫ
# =============================================================================


def validate_unit_price(price: float, name: str = "usd_per_gram") -> None:
    """
    Проверка цены единицы актива: finite и строго > 0.

    Raises:
        InvalidPrice: Если цена неположительная или NaN/Inf
    """
    if not is_valid_float(price) or price <= 0:
        raise InvalidPrice(
            f"{name} must be a finite positive number, got {price}",
            field=name,
            value=price,
        )


def _validate_amount(amount: float, name: str) -> None:
    if not is_valid_float(amount):
        raise InvalidAmount(
            f"{name} must be a finite number, got {amount}",
            field=name,
            value=amount,
        )


# =============================================================================
# ЦЕНА: УНЦИЯ ↔ ГРАММ
# =============================================================================


def usd_per_oz_to_usd_per_gram(usd_per_oz: float) -> float:
    """
    Конверсия цены: USD за тройскую унцию → USD за грамм.

    Example:
        2345.67 USD/oz → ≈ 75.415 USD/g
    """
    validate_unit_price(usd_per_oz, "usd_per_oz")
    return usd_per_oz / GRAMS_PER_TROY_OUNCE


def usd_per_gram_to_usd_per_oz(usd_per_gram: float) -> float:
    """Конверсия цены: USD за грамм → USD за тройскую унцию."""
    validate_unit_price(usd_per_gram, "usd_per_gram")
    return usd_per_gram * GRAMS_PER_TROY_OUNCE


# =============================================================================
# БАЗОВЫЕ КОНВЕРТЕРЫ
# =============================================================================


def usd_to_grams(usd_amount: float, usd_per_gram: float) -> float:
    """
    Конверсия: USD → grams

    Args:
        usd_amount: Сумма в USD
        usd_per_gram: Цена грамма (USD)

    Returns:
        usd_amount / usd_per_gram; 0.0 для usd_amount <= 0 (никогда не отрицательное)

    Raises:
        InvalidPrice: Если usd_per_gram неположительная или не finite
        InvalidAmount: Если usd_amount NaN/Inf
    """
    validate_unit_price(usd_per_gram)
    _validate_amount(usd_amount, "usd_amount")

    if usd_amount <= 0:
        return 0.0

    return usd_amount / usd_per_gram


def grams_to_usd(grams: float, usd_per_gram: float) -> float:
    """
    Конверсия: grams → USD

    Returns:
        grams * usd_per_gram; 0.0 для grams <= 0

    Raises:
        InvalidPrice: Если usd_per_gram неположительная или не finite
        InvalidAmount: Если grams NaN/Inf
    """
    validate_unit_price(usd_per_gram)
    _validate_amount(grams, "grams")

    if grams <= 0:
        return 0.0

    return grams * usd_per_gram


def usd_to_grams_at_oz_price(usd_amount: float, usd_per_oz: float) -> float:
    """USD → grams при цене, заданной за тройскую унцию."""
    return usd_to_grams(usd_amount, usd_per_oz_to_usd_per_gram(usd_per_oz))


def grams_to_usd_at_oz_price(grams: float, usd_per_oz: float) -> float:
    """grams → USD при цене, заданной за тройскую унцию."""
    return grams_to_usd(grams, usd_per_oz_to_usd_per_gram(usd_per_oz))


def is_round_trip_consistent(
    usd_amount: float,
    usd_per_gram: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
) -> bool:
    """
    Проверка инварианта обратимости USD → grams → USD.

    Используется в тестах и при sanity-проверке новой цены.
    """
    back = grams_to_usd(usd_to_grams(usd_amount, usd_per_gram), usd_per_gram)
    return is_close(back, max(usd_amount, 0.0), rel_tol=rel_tol)


# =============================================================================
# ИЗМЕНЕНИЕ ЦЕНЫ
# =============================================================================


def is_significant_price_change(
    previous_usd_per_oz: float,
    current_usd_per_oz: float,
    threshold: float = PRICE_CHANGE_THRESHOLD,
) -> bool:
    """
    Достаточно ли изменилась цена, чтобы уведомлять подписчиков.

    Первое наблюдение (previous == 0) всегда значимо.

    Args:
        previous_usd_per_oz: Последняя отправленная подписчикам цена (0 — ещё не было)
        current_usd_per_oz: Новая цена
        threshold: Относительный порог (default 0.1%)

    Returns:
        True если |current - previous| / previous >= threshold
    """
    validate_unit_price(current_usd_per_oz, "usd_per_oz")

    if previous_usd_per_oz <= 0:
        return True

    change = abs(current_usd_per_oz - previous_usd_per_oz) / previous_usd_per_oz
    return change >= threshold
