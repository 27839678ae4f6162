"""
gemsfun-sdk — клиент bonding-curve программы gems.fun

Котирование покупки/продажи по кривой x*y=k в целых u64, slippage bounds
и построение buy/sell инструкций.
"""

from gemsfun_sdk.client import (
    ClientConfig,
    PumpClient,
    QuoteConfig,
    QuoteOrchestrator,
    SimulationResult,
    TradeInstruction,
    TradeOrder,
    build_buy_instruction,
    build_sell_instruction,
)
from gemsfun_sdk.core.domain import (
    DEFAULT_SLIPPAGE_BPS,
    BuyQuote,
    ConfigTier,
    CurveQuote,
    CurveState,
    ProtocolConfig,
    Quote,
    SellQuote,
    SupplyLimits,
    TradeDirection,
)
from gemsfun_sdk.core.errors import (
    AccountNotFound,
    ArithmeticOverflow,
    CurveFinalized,
    DivisionByZero,
    GemsfunError,
    InsufficientReserve,
    InvalidAmount,
    InvalidAmountOut,
    InvalidFeeRate,
    InvalidSlippage,
    InvalidTier,
    NoLiquidity,
    PricingError,
    UpstreamUnavailable,
)
from gemsfun_sdk.core.math import (
    apply_slippage_bound,
    quote_base_for_quote,
    quote_quote_for_base,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Pricing Engine
    "quote_base_for_quote",
    "quote_quote_for_base",
    "apply_slippage_bound",
    # Orchestration
    "QuoteOrchestrator",
    "QuoteConfig",
    "ClientConfig",
    "PumpClient",
    "TradeOrder",
    "SimulationResult",
    "TradeInstruction",
    "build_buy_instruction",
    "build_sell_instruction",
    # Domain
    "CurveState",
    "SupplyLimits",
    "ProtocolConfig",
    "TradeDirection",
    "CurveQuote",
    "Quote",
    "BuyQuote",
    "SellQuote",
    "ConfigTier",
    "DEFAULT_SLIPPAGE_BPS",
    # Errors
    "GemsfunError",
    "PricingError",
    "InvalidAmount",
    "CurveFinalized",
    "InsufficientReserve",
    "NoLiquidity",
    "InvalidAmountOut",
    "InvalidSlippage",
    "InvalidFeeRate",
    "InvalidTier",
    "DivisionByZero",
    "ArithmeticOverflow",
    "UpstreamUnavailable",
    "AccountNotFound",
]
