"""Ledger — адреса, layouts аккаунтов и JSON-RPC транспорт.

Механическая обвязка вокруг Pricing Engine: ни одной формулы кривой здесь нет.
"""

from .accounts import LedgerReader, ProgramAccountReader
from .addresses import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    GEMSFUN_PROGRAM_ID,
    RENT_SYSVAR_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
    find_associated_token_address,
    find_bonding_curve_pda,
    find_creator_revenue_pda,
    find_event_authority_pda,
    find_global_pda,
    find_market_cap_pda,
)
from .layouts import (
    AccountLayoutError,
    decode_curve_state,
    decode_protocol_config,
    decode_supply_limits,
)
from .rpc_client import RPCClient, RPCError

__all__ = [
    "LedgerReader",
    "ProgramAccountReader",
    "RPCClient",
    "RPCError",
    "AccountLayoutError",
    "decode_curve_state",
    "decode_protocol_config",
    "decode_supply_limits",
    "GEMSFUN_PROGRAM_ID",
    "SYSTEM_PROGRAM_ID",
    "TOKEN_PROGRAM_ID",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "RENT_SYSVAR_ID",
    "find_global_pda",
    "find_market_cap_pda",
    "find_bonding_curve_pda",
    "find_creator_revenue_pda",
    "find_event_authority_pda",
    "find_associated_token_address",
]
