"""
Contract Validation Module

Модуль для валидации JSON контрактов SDK (ответы RPC, payload инструкций).
"""

from .validators import (
    AccountInfoResponseValidator,
    ContractValidator,
    SchemaLoader,
    TradeInstructionValidator,
    validate_account_info_response,
    validate_trade_instruction,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "AccountInfoResponseValidator",
    "TradeInstructionValidator",
    # Functions
    "validate_account_info_response",
    "validate_trade_instruction",
]
