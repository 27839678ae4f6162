"""
Core math modules для gemsfun-sdk

Целочисленные примитивы u64 и Pricing Engine bonding curve.
"""

# Integer Safeguards
from gemsfun_sdk.core.math.integer_safeguards import (
    # Constants
    BPS_DENOMINATOR,
    U64_MAX,
    # Range checks
    checked_u64,
    is_u64,
    validate_amount,
    validate_bps,
    # Checked arithmetic
    checked_floor_div,
    checked_sub,
    fee_from_bps,
    mul_div_ceil,
    mul_div_floor,
)

# Bonding Curve (Pricing Engine)
from gemsfun_sdk.core.math.bonding_curve import (
    apply_slippage_bound,
    available_base_for_purchase,
    quote_base_for_quote,
    quote_quote_for_base,
)

__all__ = [
    # Integer Safeguards: Constants
    "BPS_DENOMINATOR",
    "U64_MAX",
    # Integer Safeguards: Range checks
    "checked_u64",
    "is_u64",
    "validate_amount",
    "validate_bps",
    # Integer Safeguards: Checked arithmetic
    "checked_floor_div",
    "checked_sub",
    "fee_from_bps",
    "mul_div_ceil",
    "mul_div_floor",
    # Bonding Curve: Functions
    "apply_slippage_bound",
    "available_base_for_purchase",
    "quote_base_for_quote",
    "quote_quote_for_base",
]
