"""
Contract Validation Module

Модуль для валидации JSON контрактов Quote / SwapFee.
"""

from .validators import (
    ContractValidator,
    QuoteValidator,
    SchemaLoader,
    SwapFeeValidator,
    validate_quote,
    validate_swap_fee,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "QuoteValidator",
    "SwapFeeValidator",
    # Functions
    "validate_quote",
    "validate_swap_fee",
]
