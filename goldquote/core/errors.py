"""
Quote Engine Errors — типизированные ошибки расчёта котировок

Две категории ошибок:
- InvalidAmount: сумма/количество неположительное, не finite,
  либо переданы оба (или ни одного) альтернативных входа
- InvalidPrice: usd_per_gram / usd_per_oz неположительная или не finite

Обе наследуются от ValueError, поэтому вызывающий код,
перехватывающий ValueError, продолжает работать.
"""

from typing import Any


class QuoteEngineError(ValueError):
    """
    Базовая ошибка quote engine.

    Attributes:
        field: Имя параметра, не прошедшего проверку
        value: Переданное значение
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class InvalidAmount(QuoteEngineError):
    """Сумма или количество не прошли валидацию."""


class InvalidPrice(QuoteEngineError):
    """Цена единицы актива не прошла валидацию."""
