"""
Тесты для модуля Integer Safeguards

Проверяет:
1. Проверки диапазона u64
2. Валидацию входных сумм и bps
3. Checked-вычитание и floor-деление
4. mul_div с округлением вниз/вверх
5. Комиссию в bps с усечением
"""

import pytest

from gemsfun_sdk.core.errors import (
    ArithmeticOverflow,
    DivisionByZero,
    InvalidAmount,
    InvalidFeeRate,
    InvalidSlippage,
    PricingError,
)
from gemsfun_sdk.core.math.integer_safeguards import (
    BPS_DENOMINATOR,
    U64_MAX,
    checked_floor_div,
    checked_sub,
    checked_u64,
    fee_from_bps,
    is_u64,
    mul_div_ceil,
    mul_div_floor,
    validate_amount,
    validate_bps,
)


# =============================================================================
# ТЕСТЫ КОНСТАНТ
# =============================================================================


class TestConstants:
    """Тесты констант"""

    def test_u64_max(self) -> None:
        """U64_MAX = 2^64 - 1"""
        assert U64_MAX == 18_446_744_073_709_551_615

    def test_bps_denominator(self) -> None:
        """10000 bps = 100%"""
        assert BPS_DENOMINATOR == 10_000


# =============================================================================
# ТЕСТЫ ПРОВЕРОК ДИАПАЗОНА
# =============================================================================


class TestIsU64:
    """Тесты для is_u64"""

    @pytest.mark.parametrize("value", [0, 1, 10_000_000, U64_MAX])
    def test_in_range(self, value: int) -> None:
        assert is_u64(value)

    @pytest.mark.parametrize("value", [-1, U64_MAX + 1, 1.0, "1", True, None])
    def test_out_of_range_or_wrong_type(self, value) -> None:
        assert not is_u64(value)


class TestCheckedU64:
    """Тесты для checked_u64"""

    def test_value_returned_unchanged(self) -> None:
        assert checked_u64(0, "x") == 0
        assert checked_u64(U64_MAX, "x") == U64_MAX

    def test_overflow_raises(self) -> None:
        with pytest.raises(ArithmeticOverflow, match="bound overflows u64"):
            checked_u64(U64_MAX + 1, "bound")

    def test_underflow_raises(self) -> None:
        with pytest.raises(ArithmeticOverflow, match="out underflows u64"):
            checked_u64(-1, "out")


class TestValidateAmount:
    """Тесты для validate_amount"""

    def test_valid_amounts(self) -> None:
        validate_amount(1, "amount")
        validate_amount(U64_MAX, "amount")

    @pytest.mark.parametrize("value", [0, -1, -10_000_000])
    def test_non_positive_raises(self, value: int) -> None:
        with pytest.raises(InvalidAmount, match="must be greater than 0"):
            validate_amount(value, "amount")

    def test_above_u64_raises(self) -> None:
        with pytest.raises(InvalidAmount, match="exceeds u64"):
            validate_amount(U64_MAX + 1, "amount")

    @pytest.mark.parametrize("value", [1.5, 10.0, "100", True])
    def test_non_integer_raises(self, value) -> None:
        with pytest.raises(InvalidAmount, match="must be an integer"):
            validate_amount(value, "amount")

    def test_invalid_amount_is_value_error(self) -> None:
        """Вызывающий код, ловящий ValueError, продолжает работать"""
        with pytest.raises(ValueError):
            validate_amount(0, "amount")


class TestValidateBps:
    """Тесты для validate_bps"""

    @pytest.mark.parametrize("value", [0, 1, 500, 10_000])
    def test_valid_bps(self, value: int) -> None:
        validate_bps(value, "slippage_bps", InvalidSlippage)

    @pytest.mark.parametrize("value", [-1, 10_001, 1_000_000])
    def test_out_of_range_raises_given_class(self, value: int) -> None:
        with pytest.raises(InvalidSlippage, match=r"must be in \[0, 10000\]"):
            validate_bps(value, "slippage_bps", InvalidSlippage)

    def test_float_rejected(self) -> None:
        with pytest.raises(InvalidFeeRate, match="integer number of bps"):
            validate_bps(1.5, "fee_bps", InvalidFeeRate)

    def test_default_error_class_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_bps(10_001, "bps")


# =============================================================================
# ТЕСТЫ CHECKED-АРИФМЕТИКИ
# =============================================================================


class TestCheckedSub:
    """Тесты для checked_sub"""

    def test_normal_subtraction(self) -> None:
        assert checked_sub(10, 3, "x") == 7
        assert checked_sub(10, 10, "x") == 0

    def test_underflow_raises(self) -> None:
        with pytest.raises(ArithmeticOverflow, match="raw_out underflows"):
            checked_sub(3, 10, "raw_out")


class TestCheckedFloorDiv:
    """Тесты для checked_floor_div"""

    def test_floor_semantics(self) -> None:
        assert checked_floor_div(7, 2, "x") == 3
        assert checked_floor_div(6, 3, "x") == 2

    def test_zero_denominator_raises(self) -> None:
        with pytest.raises(DivisionByZero, match="new_reserve_base"):
            checked_floor_div(1, 0, "new_reserve_base")

    def test_division_by_zero_is_pricing_error(self) -> None:
        with pytest.raises(PricingError):
            checked_floor_div(1, 0, "x")


class TestMulDiv:
    """Тесты для mul_div_floor / mul_div_ceil"""

    def test_exact_division_equal(self) -> None:
        assert mul_div_floor(10_000_000, 10_500, 10_000) == 10_500_000
        assert mul_div_ceil(10_000_000, 10_500, 10_000) == 10_500_000

    def test_floor_rounds_down(self) -> None:
        assert mul_div_floor(1, 9_999, 10_000) == 0
        assert mul_div_floor(199, 100, 10_000) == 1

    def test_ceil_rounds_up(self) -> None:
        assert mul_div_ceil(1, 10_001, 10_000) == 2
        assert mul_div_ceil(3, 1, 2) == 2

    def test_no_intermediate_truncation(self) -> None:
        """Произведение шире u128 не теряет точности"""
        assert mul_div_floor(U64_MAX, U64_MAX, U64_MAX) == U64_MAX
        assert mul_div_ceil(U64_MAX, U64_MAX, U64_MAX) == U64_MAX

    def test_zero_denominator_raises(self) -> None:
        with pytest.raises(DivisionByZero):
            mul_div_floor(1, 1, 0)
        with pytest.raises(DivisionByZero):
            mul_div_ceil(1, 1, 0)


class TestFeeFromBps:
    """Тесты для fee_from_bps"""

    def test_one_percent(self) -> None:
        assert fee_from_bps(10_000_000, 100) == 100_000

    def test_truncates_toward_zero(self) -> None:
        assert fee_from_bps(99, 100) == 0
        assert fee_from_bps(199, 100) == 1

    def test_zero_and_full_rate(self) -> None:
        assert fee_from_bps(12_345, 0) == 0
        assert fee_from_bps(12_345, 10_000) == 12_345
