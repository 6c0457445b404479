"""
Core math modules для goldquote

Математические примитивы: численные защиты, комиссии в bps, индикаторы графика.
"""

# Numerical Safeguards
from goldquote.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    is_close,
    is_valid_float,
    validate_in_range,
    validate_non_negative,
    validate_positive,
)

# Fees
from goldquote.core.math.fees import (
    BPS_DENOMINATOR,
    MAX_FEE_BPS,
    MIN_FEE_BPS,
    bps_to_fraction,
    fee_from_bps,
    fraction_to_bps,
    gross_up_fee,
    split_fee,
    validate_fee_bps,
)

# Chart indicators
from goldquote.core.math.indicators import (
    MACDResult,
    calculate_ema,
    calculate_fibonacci_levels,
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    calculate_vwap,
)

__all__ = [
    # Numerical Safeguards: Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards: Functions
    "is_close",
    "is_valid_float",
    "validate_in_range",
    "validate_non_negative",
    "validate_positive",
    # Fees: Constants
    "BPS_DENOMINATOR",
    "MAX_FEE_BPS",
    "MIN_FEE_BPS",
    # Fees: Functions
    "bps_to_fraction",
    "fee_from_bps",
    "fraction_to_bps",
    "gross_up_fee",
    "split_fee",
    "validate_fee_bps",
    # Indicators
    "MACDResult",
    "calculate_ema",
    "calculate_fibonacci_levels",
    "calculate_macd",
    "calculate_rsi",
    "calculate_sma",
    "calculate_vwap",
]
