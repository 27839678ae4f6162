"""
Accounts — чтение on-chain записей, от которых зависит котировка

ProgramAccountReader: адрес (PDA) → getAccountInfo → контракт ответа →
декодирование layout → domain-модель.

Отказы:
- RPCError — транспорт (сеть, ошибка узла)
- AccountNotFound — аккаунта по адресу нет
- AccountLayoutError — ответ или данные аккаунта не соответствуют контракту
"""

import base64
import binascii
import logging
from typing import Protocol

from solders.pubkey import Pubkey

from gemsfun_sdk.core.contracts import AccountInfoResponseValidator
from gemsfun_sdk.core.domain.curve_state import CurveState, ProtocolConfig, SupplyLimits
from gemsfun_sdk.core.errors import AccountNotFound
from gemsfun_sdk.ledger.addresses import (
    GEMSFUN_PROGRAM_ID,
    find_bonding_curve_pda,
    find_global_pda,
    find_market_cap_pda,
)
from gemsfun_sdk.ledger.layouts import (
    AccountLayoutError,
    decode_curve_state,
    decode_protocol_config,
    decode_supply_limits,
)
from gemsfun_sdk.ledger.rpc_client import RPCClient

logger = logging.getLogger(__name__)


class LedgerReader(Protocol):
    """Источник on-chain состояния для Quote Orchestrator."""

    def fetch_curve_state(self, mint: Pubkey) -> CurveState: ...

    def fetch_supply_limits(self, tier: int) -> SupplyLimits: ...

    def fetch_fee_bps(self) -> int: ...


class ProgramAccountReader:
    """
    Чтение аккаунтов программы через JSON-RPC.

    Без кэша: каждый вызов читает актуальное состояние ledger.
    """

    def __init__(self, rpc: RPCClient, program_id: Pubkey = GEMSFUN_PROGRAM_ID):
        self.rpc = rpc
        self.program_id = program_id
        self._response_contract = AccountInfoResponseValidator()

    def fetch_account_data(self, address: Pubkey, kind: str = "account") -> bytes:
        """
        Сырые данные аккаунта.

        Raises:
            RPCError: Отказ транспорта
            AccountNotFound: Аккаунта нет
            AccountLayoutError: Ответ не соответствует контракту getAccountInfo
        """
        info = self.rpc.get_account_info(str(address))

        problems = self._response_contract.describe_errors(info)
        if problems:
            raise AccountLayoutError(
                f"Unexpected getAccountInfo response for {kind} {address}: "
                + "; ".join(problems)
            )

        value = info["value"]
        if value is None:
            raise AccountNotFound(str(address), kind)

        try:
            return base64.b64decode(value["data"][0], validate=True)
        except binascii.Error as e:
            raise AccountLayoutError(f"{kind} {address} data is not base64: {e}") from e

    def fetch_curve_state(self, mint: Pubkey) -> CurveState:
        """Снапшот bonding curve для mint."""
        address, _ = find_bonding_curve_pda(mint, self.program_id)
        curve = decode_curve_state(self.fetch_account_data(address, "bonding curve"))
        logger.debug(
            "curve %s: reserve_quote=%d reserve_base=%d finalized=%s",
            address, curve.reserve_quote, curve.reserve_base, curve.finalized,
        )
        return curve

    def fetch_supply_limits(self, tier: int) -> SupplyLimits:
        """Supply limits configuration tier."""
        address, _ = find_market_cap_pda(tier, self.program_id)
        return decode_supply_limits(self.fetch_account_data(address, "market cap"))

    def fetch_protocol_config(self) -> ProtocolConfig:
        """Singleton-конфигурация протокола."""
        address, _ = find_global_pda(self.program_id)
        return decode_protocol_config(self.fetch_account_data(address, "global"))

    def fetch_fee_bps(self) -> int:
        """Комиссия протокола (bps, 0–10000)."""
        return self.fetch_protocol_config().fee_bps
