"""Client — конфигурация, Quote Orchestrator, Instruction Builder и фасад."""

from .config import ClientConfig, QuoteConfig
from .instruction_builder import (
    BUY_DISCRIMINATOR,
    SELL_DISCRIMINATOR,
    NamedAccount,
    TradeInstruction,
    build_buy_instruction,
    build_create_associated_token_account_instruction,
    build_create_creator_revenue_pool_instruction,
    build_sell_instruction,
    build_trade_accounts,
)
from .pump_client import PumpClient, SimulationResult, TradeOrder
from .quote_orchestrator import QuoteOrchestrator, as_pubkey, read_upstream

__all__ = [
    "ClientConfig",
    "QuoteConfig",
    "QuoteOrchestrator",
    "as_pubkey",
    "read_upstream",
    "NamedAccount",
    "TradeInstruction",
    "BUY_DISCRIMINATOR",
    "SELL_DISCRIMINATOR",
    "build_trade_accounts",
    "build_buy_instruction",
    "build_sell_instruction",
    "build_create_associated_token_account_instruction",
    "build_create_creator_revenue_pool_instruction",
    "PumpClient",
    "SimulationResult",
    "TradeOrder",
]
