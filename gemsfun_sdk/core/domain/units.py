"""
Units — централизованный модуль единиц

Единственный допустимый способ преобразований между:
- human-facing суммами (SOL, токены с decimals)
- минимальными единицами ledger (lamports, token base units)

Вся математика кривой работает только в минимальных единицах (int).
ЗАПРЕЩЕНО передавать float в Pricing Engine.
"""

from decimal import ROUND_DOWN, Decimal
from typing import Final, Union


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Максимальное значение u64
U64_MAX: Final[int] = 2**64 - 1

# Знаменатель basis points: 10000 bps = 100%
BPS_DENOMINATOR: Final[int] = 10_000

# Lamports в одном SOL
LAMPORTS_PER_SOL: Final[int] = 1_000_000_000

# Decimals SOL (lamports)
SOL_DECIMALS: Final[int] = 9

# Decimals токена по умолчанию
DEFAULT_TOKEN_DECIMALS: Final[int] = 6


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def to_base_units(amount: Union[Decimal, str, int], decimals: int) -> int:
    """
    Конверсия: human-facing сумма → минимальные единицы.

    Дробная часть ниже минимальной единицы отбрасывается (округление вниз).
    float не принимается: двоичное представление искажает суммы.

    Args:
        amount: Сумма (Decimal, str или int), например "0.01"
        decimals: Количество десятичных знаков единицы

    Returns:
        Количество минимальных единиц

    Raises:
        TypeError: Если amount — float
        ValueError: Если amount отрицательный или decimals < 0

    Examples:
        >>> to_base_units("0.01", SOL_DECIMALS)
        10000000
        >>> to_base_units(1000, DEFAULT_TOKEN_DECIMALS)
        1000000000
    """
    if isinstance(amount, float):
        raise TypeError("amount must be Decimal, str or int, not float")

    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    value = Decimal(amount)
    if value < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")

    scaled = (value * (Decimal(10) ** decimals)).quantize(Decimal(1), rounding=ROUND_DOWN)
    return int(scaled)


def from_base_units(units: int, decimals: int) -> Decimal:
    """
    Конверсия: минимальные единицы → human-facing сумма (точный Decimal).

    Examples:
        >>> from_base_units(10_500_000, SOL_DECIMALS)
        Decimal('0.0105')
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    return (Decimal(units) / (Decimal(10) ** decimals)).normalize()


def sol_to_lamports(sol: Union[Decimal, str, int]) -> int:
    """Конверсия SOL → lamports."""
    return to_base_units(sol, SOL_DECIMALS)


def lamports_to_sol(lamports: int) -> Decimal:
    """Конверсия lamports → SOL."""
    return from_base_units(lamports, SOL_DECIMALS)
