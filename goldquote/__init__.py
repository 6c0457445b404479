"""
goldquote — quote/fee engine для gold-backed токена.

Чистые функции конверсии USD ↔ grams, расчёта комиссий в basis points
и разделения swap fee. Цена всегда передаётся явно (без глобального кэша).
"""

__version__ = "0.3.0"
