"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. NaN/Inf детекцию
2. Epsilon-сравнения float
3. Валидацию параметров
"""

import math

import pytest

from goldquote.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    is_close,
    is_valid_float,
    validate_in_range,
    validate_non_negative,
    validate_positive,
)


class TestIsValidFloat:
    """Тесты is_valid_float"""

    @pytest.mark.parametrize("value", [0, 1, -1.5, 1e300, 75.43])
    def test_finite_numbers(self, value) -> None:
        assert is_valid_float(value)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite(self, value: float) -> None:
        assert not is_valid_float(value)

    @pytest.mark.parametrize("value", [True, False, "1.0", None])
    def test_non_numbers(self, value) -> None:
        """bool и строки — не числа"""
        assert not is_valid_float(value)


class TestFloatComparison:
    """Тесты epsilon-сравнений"""

    def test_is_close_within_tolerance(self) -> None:
        assert is_close(1.0, 1.0 + 1e-10)
        assert is_close(0.1 + 0.2, 0.3)

    def test_is_close_outside_tolerance(self) -> None:
        assert not is_close(1.0, 1.1)

    def test_is_close_near_zero_uses_abs_tol(self) -> None:
        assert is_close(0.0, EPS_FLOAT_COMPARE_ABS / 2)
        assert not is_close(0.0, 1e-6)

    def test_relative_tolerance_scales(self) -> None:
        big = 1e12
        assert is_close(big, big * (1 + EPS_FLOAT_COMPARE_REL / 2))


class TestValidation:
    """Тесты валидации параметров"""

    def test_validate_positive(self) -> None:
        validate_positive(1.0, "price")

        with pytest.raises(ValueError, match="price must be positive"):
            validate_positive(0.0, "price")

        with pytest.raises(ValueError, match="valid float"):
            validate_positive(math.nan, "price")

    def test_validate_positive_with_eps(self) -> None:
        with pytest.raises(ValueError):
            validate_positive(1e-10, "price", eps=1e-8)

    def test_validate_non_negative(self) -> None:
        validate_non_negative(0.0, "amount")

        with pytest.raises(ValueError, match="non-negative"):
            validate_non_negative(-0.01, "amount")

        with pytest.raises(ValueError):
            validate_non_negative(math.inf, "amount")

    def test_validate_in_range(self) -> None:
        validate_in_range(80, "fee_bps", 0, 10000)
        validate_in_range(5.0, "x")

        with pytest.raises(ValueError, match=">= 0"):
            validate_in_range(-1, "fee_bps", 0, 10000)

        with pytest.raises(ValueError, match="<= 10000"):
            validate_in_range(10001, "fee_bps", 0, 10000)
