"""
Domain models and value objects.

Contains ledger snapshots (CurveState, SupplyLimits, ProtocolConfig),
quote value objects, configuration tiers and unit conversions.
"""

from gemsfun_sdk.core.domain.curve_state import (
    CurveState,
    ProtocolConfig,
    SupplyLimits,
)
from gemsfun_sdk.core.domain.quote import (
    BuyQuote,
    CurveQuote,
    Quote,
    SellQuote,
    TradeDirection,
)
from gemsfun_sdk.core.domain.tiers import (
    DEFAULT_SLIPPAGE_BPS,
    ConfigTier,
    validate_tier,
)
from gemsfun_sdk.core.domain.units import (
    BPS_DENOMINATOR,
    DEFAULT_TOKEN_DECIMALS,
    LAMPORTS_PER_SOL,
    SOL_DECIMALS,
    U64_MAX,
    from_base_units,
    lamports_to_sol,
    sol_to_lamports,
    to_base_units,
)

__all__ = [
    # Ledger snapshots
    "CurveState",
    "SupplyLimits",
    "ProtocolConfig",
    # Quote value objects
    "TradeDirection",
    "CurveQuote",
    "Quote",
    "BuyQuote",
    "SellQuote",
    # Tiers
    "ConfigTier",
    "validate_tier",
    "DEFAULT_SLIPPAGE_BPS",
    # Units
    "U64_MAX",
    "BPS_DENOMINATOR",
    "LAMPORTS_PER_SOL",
    "SOL_DECIMALS",
    "DEFAULT_TOKEN_DECIMALS",
    "to_base_units",
    "from_base_units",
    "sol_to_lamports",
    "lamports_to_sol",
]
