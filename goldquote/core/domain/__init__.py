"""
Domain models and value objects.

Contains fundamental domain entities: unit conversions, GoldPrice, Quote, SwapFee, Candle.
"""

from goldquote.core.domain.candle import Candle, IndicatorPoint
from goldquote.core.domain.price import PRICE_MAX_AGE_MS, GoldPrice
from goldquote.core.domain.quote import Asset, Quote, QuoteRequest, Side, SwapFee
from goldquote.core.domain.units import (
    GRAMS_PER_TROY_OUNCE,
    PRICE_CHANGE_THRESHOLD,
    grams_to_usd,
    grams_to_usd_at_oz_price,
    is_round_trip_consistent,
    is_significant_price_change,
    usd_per_gram_to_usd_per_oz,
    usd_per_oz_to_usd_per_gram,
    usd_to_grams,
    usd_to_grams_at_oz_price,
    validate_unit_price,
)

__all__ = [
    # Units module
    "GRAMS_PER_TROY_OUNCE",
    "PRICE_CHANGE_THRESHOLD",
    "grams_to_usd",
    "grams_to_usd_at_oz_price",
    "is_round_trip_consistent",
    "is_significant_price_change",
    "usd_per_gram_to_usd_per_oz",
    "usd_per_oz_to_usd_per_gram",
    "usd_to_grams",
    "usd_to_grams_at_oz_price",
    "validate_unit_price",
    # Price model
    "GoldPrice",
    "PRICE_MAX_AGE_MS",
    # Quote models
    "Asset",
    "Quote",
    "QuoteRequest",
    "Side",
    "SwapFee",
    # Candle models
    "Candle",
    "IndicatorPoint",
]
