"""
Юнит-тесты для модуля Fees

Проверяет:
1. Конверсию basis points ↔ дробь
2. Комиссию на сумму и разделение fee / remaining
3. Инвариант fee_amount + remaining_amount == amount
4. Gross-up для желаемой net суммы
5. Валидацию fee_bps и сумм
"""

import pytest

from goldquote.core.errors import InvalidAmount
from goldquote.core.math.fees import (
    BPS_DENOMINATOR,
    bps_to_fraction,
    fee_from_bps,
    fraction_to_bps,
    gross_up_fee,
    split_fee,
    validate_fee_bps,
)


class TestBpsConversion:
    """Тесты конверсии basis points"""

    def test_bps_to_fraction_basic(self) -> None:
        """Базовая конверсия bps в дробь"""
        assert bps_to_fraction(80) == pytest.approx(0.008, abs=1e-12)
        assert bps_to_fraction(150) == pytest.approx(0.015, abs=1e-12)
        assert bps_to_fraction(BPS_DENOMINATOR) == 1.0

    def test_bps_to_fraction_zero(self) -> None:
        """Ноль bps даёт ноль"""
        assert bps_to_fraction(0) == 0.0

    def test_fraction_to_bps(self) -> None:
        assert fraction_to_bps(0.008) == pytest.approx(80.0)


class TestValidateFeeBps:
    """Тесты валидации fee_bps"""

    @pytest.mark.parametrize("fee_bps", [0, 1, 80, 150, 10000])
    def test_valid(self, fee_bps: int) -> None:
        validate_fee_bps(fee_bps)

    @pytest.mark.parametrize("fee_bps", [-1, 10001])
    def test_out_of_range(self, fee_bps: int) -> None:
        with pytest.raises(ValueError, match="fee_bps"):
            validate_fee_bps(fee_bps)

    @pytest.mark.parametrize("fee_bps", [80.5, "80", True, None])
    def test_not_integer(self, fee_bps) -> None:
        with pytest.raises(ValueError, match="integer"):
            validate_fee_bps(fee_bps)


class TestFeeSplit:
    """Тесты расчёта и разделения комиссии"""

    def test_swap_fee_80_bps_on_1000(self) -> None:
        """80 bps от 1000 = 8, остаток 992"""
        fee, remaining = split_fee(1000.0, 80)
        assert fee == pytest.approx(8.0, abs=1e-12)
        assert remaining == pytest.approx(992.0, abs=1e-12)

    def test_fee_from_bps(self) -> None:
        assert fee_from_bps(500.0, 150) == pytest.approx(7.5, abs=1e-12)

    def test_zero_amount(self) -> None:
        assert split_fee(0.0, 80) == (0.0, 0.0)

    def test_zero_bps(self) -> None:
        fee, remaining = split_fee(123.45, 0)
        assert fee == 0.0
        assert remaining == 123.45

    def test_full_fee(self) -> None:
        """10000 bps забирает всю сумму"""
        fee, remaining = split_fee(50.0, 10000)
        assert fee == 50.0
        assert remaining == 0.0

    @pytest.mark.parametrize("amount", [0.0, 0.000001, 1.0, 999.99, 1_234_567.89])
    @pytest.mark.parametrize("fee_bps", [0, 1, 80, 150, 2500, 9999, 10000])
    def test_parts_sum_to_amount(self, amount: float, fee_bps: int) -> None:
        """Инвариант: fee + remaining == amount"""
        fee, remaining = split_fee(amount, fee_bps)
        assert fee + remaining == pytest.approx(amount, rel=1e-12, abs=1e-12)
        assert fee >= 0
        assert remaining >= 0

    def test_large_amount_stays_finite(self) -> None:
        """amount * fee_bps не должен переполняться для finite amount"""
        fee, remaining = split_fee(1e307, 80)
        assert fee == pytest.approx(8e304, rel=1e-12)
        assert remaining == pytest.approx(1e307 - 8e304, rel=1e-12)
        assert fee + remaining == pytest.approx(1e307, rel=1e-12)

    @pytest.mark.parametrize("amount", [-0.01, float("nan"), float("inf")])
    def test_invalid_amount(self, amount: float) -> None:
        with pytest.raises(InvalidAmount):
            split_fee(amount, 80)


class TestGrossUp:
    """Тесты gross-up комиссии"""

    def test_gross_up_restores_net(self) -> None:
        """gross - fee(gross) == net"""
        net = 1000.0
        fee = gross_up_fee(net, 150)
        gross = net + fee
        assert gross * 150 / BPS_DENOMINATOR == pytest.approx(fee, rel=1e-12)
        assert gross - fee_from_bps(gross, 150) == pytest.approx(net, rel=1e-12)

    def test_gross_up_large_amount_stays_finite(self) -> None:
        """net * bps переполнился бы, net * (bps / (10000 - bps)) — нет"""
        assert gross_up_fee(1e306, 9000) == pytest.approx(9e306, rel=1e-12)

    def test_gross_up_zero_bps(self) -> None:
        assert gross_up_fee(100.0, 0) == 0.0

    def test_gross_up_full_fee_rejected(self) -> None:
        """При 10000 bps net недостижим"""
        with pytest.raises(InvalidAmount):
            gross_up_fee(100.0, 10000)

    def test_gross_up_negative_rejected(self) -> None:
        with pytest.raises(InvalidAmount):
            gross_up_fee(-1.0, 80)
