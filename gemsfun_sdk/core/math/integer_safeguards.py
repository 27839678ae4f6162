"""
Integer Safeguards — безопасные целочисленные примитивы u64

Модуль обеспечивает побитовое совпадение арифметики SDK с on-chain программой:
- Проверка диапазона u64 для входов и итоговых значений
- Checked-вычитание (underflow → ArithmeticOverflow, а не отрицательное число)
- Checked floor-деление (ноль в знаменателе → DivisionByZero)
- mul_div с округлением вниз/вверх поверх неограниченного int

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никакой float в резервной математике — только int
2. Промежуточные значения не усекаются (Python int шире u128)
3. Усечение до u64 только в финальной точке, и только с проверкой
4. Деление — floor (совпадает с целочисленным делением программы)
"""

from gemsfun_sdk.core.domain.units import BPS_DENOMINATOR, U64_MAX
from gemsfun_sdk.core.errors import (
    ArithmeticOverflow,
    DivisionByZero,
    InvalidAmount,
)


# =============================================================================
# ПРОВЕРКИ ДИАПАЗОНА
# =============================================================================


def is_u64(value: int) -> bool:
    """
    Проверка, что значение — int в диапазоне [0, U64_MAX].

    bool отвергается явно: True/False не являются суммами.
    """
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U64_MAX


def checked_u64(value: int, name: str) -> int:
    """
    Финальная точка усечения до u64.

    Args:
        value: Результат вычисления (неограниченный int)
        name: Имя величины (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        ArithmeticOverflow: Если value < 0 или value > U64_MAX
    """
    if value < 0:
        raise ArithmeticOverflow(f"{name} underflows u64: {value}")
    if value > U64_MAX:
        raise ArithmeticOverflow(f"{name} overflows u64: {value}")
    return value


def validate_amount(value: int, name: str) -> None:
    """
    Валидация входной суммы: int, > 0, помещается в u64.

    Raises:
        InvalidAmount: Если сумма не int, <= 0 или > U64_MAX
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidAmount(f"{name} must be an integer, got {value!r}")

    if value <= 0:
        raise InvalidAmount(f"{name} must be greater than 0, got {value}")

    if value > U64_MAX:
        raise InvalidAmount(f"{name} exceeds u64 range, got {value}")


def validate_bps(
    value: int,
    name: str,
    error_cls: type[Exception] = ValueError,
) -> None:
    """
    Валидация basis points: int в диапазоне [0, BPS_DENOMINATOR].

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        error_cls: Класс исключения (InvalidSlippage, InvalidFeeRate, ...)
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise error_cls(f"{name} must be an integer number of bps, got {value!r}")

    if value < 0 or value > BPS_DENOMINATOR:
        raise error_cls(f"{name} must be in [0, {BPS_DENOMINATOR}], got {value}")


# =============================================================================
# CHECKED-АРИФМЕТИКА
# =============================================================================


def checked_sub(minuend: int, subtrahend: int, name: str) -> int:
    """
    Вычитание без ухода в отрицательную область.

    Raises:
        ArithmeticOverflow: Если subtrahend > minuend
    """
    if subtrahend > minuend:
        raise ArithmeticOverflow(
            f"{name} underflows: {minuend} - {subtrahend} < 0"
        )
    return minuend - subtrahend


def checked_floor_div(numerator: int, denominator: int, name: str) -> int:
    """
    Floor-деление с явной проверкой нуля.

    Raises:
        DivisionByZero: Если denominator == 0
    """
    if denominator == 0:
        raise DivisionByZero(f"{name}: division by zero")
    return numerator // denominator


def mul_div_floor(value: int, numerator: int, denominator: int) -> int:
    """
    floor(value * numerator / denominator) без потери точности.

    Examples:
        >>> mul_div_floor(10_000_000, 100, 10_000)
        100000
        >>> mul_div_floor(199, 100, 10_000)
        1
    """
    if denominator == 0:
        raise DivisionByZero("mul_div_floor: division by zero")
    return (value * numerator) // denominator


def mul_div_ceil(value: int, numerator: int, denominator: int) -> int:
    """
    ceil(value * numerator / denominator) без потери точности.

    Examples:
        >>> mul_div_ceil(10_000_000, 10_500, 10_000)
        10500000
        >>> mul_div_ceil(1, 10_001, 10_000)
        2
    """
    if denominator == 0:
        raise DivisionByZero("mul_div_ceil: division by zero")
    return -((-value * numerator) // denominator)


def fee_from_bps(amount: int, fee_bps: int) -> int:
    """
    Комиссия в basis points с усечением к нулю (как в программе).

    fee = floor(amount * fee_bps / 10000)
    """
    return mul_div_floor(amount, fee_bps, BPS_DENOMINATOR)
