"""
Configuration Tiers — фиксированные конфигурации кривой

Кривая создаётся под одним из трёх tier (market cap index 1/2/3). Каждому tier
на стороне программы соответствует свой аккаунт с SupplyLimits.

ЗАПРЕЩЕНО передавать в инструкции индекс tier без валидации через этот модуль.
"""

from enum import IntEnum
from typing import Final

from gemsfun_sdk.core.errors import InvalidTier


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Slippage по умолчанию (bps): 500 = 5%
DEFAULT_SLIPPAGE_BPS: Final[int] = 500


# =============================================================================
# TIERS
# =============================================================================


class ConfigTier(IntEnum):
    """Configuration tier (market cap index), выбирается при создании кривой."""

    TIER_1 = 1
    TIER_2 = 2
    TIER_3 = 3


def validate_tier(tier: int) -> ConfigTier:
    """
    Валидация и нормализация индекса tier.

    Args:
        tier: Индекс tier (int или ConfigTier)

    Returns:
        ConfigTier

    Raises:
        InvalidTier: Если индекс не 1, 2 или 3
    """
    if isinstance(tier, bool) or not isinstance(tier, int):
        raise InvalidTier(f"Market cap index must be 1, 2, or 3, got {tier!r}")

    try:
        return ConfigTier(tier)
    except ValueError:
        raise InvalidTier(f"Market cap index must be 1, 2, or 3, got {tier}") from None
