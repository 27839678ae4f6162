"""PumpClient — единый фасад SDK.

Связывает JSON-RPC транспорт, чтение аккаунтов, Quote Orchestrator и
Instruction Builder. Подпись и сборка транзакции — на стороне вызывающего:
фасад возвращает котировку вместе с готовой инструкцией и умеет
симулировать/отправлять уже подписанную транзакцию.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from solders.instruction import Instruction
from solders.pubkey import Pubkey

from gemsfun_sdk.client.config import ClientConfig
from gemsfun_sdk.client.instruction_builder import (
    TradeInstruction,
    build_buy_instruction,
    build_create_associated_token_account_instruction,
    build_create_creator_revenue_pool_instruction,
    build_sell_instruction,
)
from gemsfun_sdk.client.quote_orchestrator import QuoteOrchestrator, as_pubkey, read_upstream
from gemsfun_sdk.core.domain.curve_state import CurveState, ProtocolConfig, SupplyLimits
from gemsfun_sdk.core.domain.quote import Quote
from gemsfun_sdk.core.domain.tiers import ConfigTier, validate_tier
from gemsfun_sdk.core.errors import UpstreamUnavailable
from gemsfun_sdk.ledger.accounts import ProgramAccountReader
from gemsfun_sdk.ledger.addresses import find_associated_token_address, find_creator_revenue_pda
from gemsfun_sdk.ledger.rpc_client import RPCClient, RPCError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradeOrder:
    """Котировка, построенная из неё инструкция и setup-инструкции перед ней."""

    quote: Quote
    instruction: TradeInstruction
    setup_instructions: tuple[Instruction, ...] = ()

    def instructions(self) -> List[Instruction]:
        """Инструкции транзакции в порядке исполнения."""
        return [*self.setup_instructions, self.instruction.to_instruction()]


@dataclass(frozen=True)
class SimulationResult:
    """Результат simulateTransaction."""

    success: bool
    error: Optional[Any]
    logs: List[str]
    units_consumed: Optional[int]


class PumpClient:
    """
    Клиент bonding-curve программы.

    Usage:
        client = PumpClient(wallet.pubkey())
        order = client.buy_with_quote_amount(mint, creator, tier=1, quote_amount_in=10_000_000)
        # order.instructions() → в транзакцию, подписать, client.submit(tx)
    """

    def __init__(
        self,
        user: Pubkey,
        config: Optional[ClientConfig] = None,
        rpc: Optional[RPCClient] = None,
        reader: Optional[ProgramAccountReader] = None,
    ):
        self.user = user
        self.config = config or ClientConfig()
        self.program_id = self.config.program_pubkey
        self.rpc = rpc or RPCClient(
            self.config.rpc_url,
            commitment=self.config.commitment,
            timeout=self.config.timeout_sec,
        )
        self.reader = reader or ProgramAccountReader(self.rpc, self.program_id)
        self.orchestrator = QuoteOrchestrator(self.reader, self.config.quote)

    # =========================================================================
    # READS
    # =========================================================================

    def get_protocol_config(self) -> ProtocolConfig:
        return read_upstream("protocol config", self.reader.fetch_protocol_config)

    def get_supply_limits(self, tier: int) -> SupplyLimits:
        tier = validate_tier(tier)
        return read_upstream("supply limits", lambda: self.reader.fetch_supply_limits(tier))

    def get_curve_state(self, mint: Pubkey | str) -> CurveState:
        mint = as_pubkey(mint)
        return read_upstream("bonding curve", lambda: self.reader.fetch_curve_state(mint))

    # =========================================================================
    # TRADES
    # =========================================================================

    def _account_exists(self, what: str, address: Pubkey) -> bool:
        return read_upstream(what, lambda: self.rpc.get_account_data(str(address)) is not None)

    def _buy_setup(self, mint: Pubkey, creator: Pubkey) -> tuple[Instruction, ...]:
        """Создание ATA пользователя и creator revenue pool, если их ещё нет."""
        setup = []
        if not self._account_exists(
            "associated token account", find_associated_token_address(self.user, mint)
        ):
            setup.append(
                build_create_associated_token_account_instruction(self.user, self.user, mint)
            )

        pool, _ = find_creator_revenue_pda(mint, creator, self.program_id)
        if not self._account_exists("creator revenue pool", pool):
            setup.append(
                build_create_creator_revenue_pool_instruction(
                    self.user, creator, mint, self.program_id
                )
            )
        return tuple(setup)

    def buy_with_quote_amount(
        self,
        mint: Pubkey | str,
        creator: Pubkey | str,
        tier: int,
        quote_amount_in: int,
        slippage_bps: Optional[int] = None,
        referral: Optional[Pubkey] = None,
        referral_fee: float = 0.0,
    ) -> TradeOrder:
        """
        Покупка на заданную сумму lamports.

        Global читается один раз: комиссия котировки и fee_recipient инструкции
        берутся из одного снапшота.

        Args:
            mint: mint токена
            creator: создатель токена (нужен для creator revenue pool)
            tier: configuration tier кривой (1/2/3)
            quote_amount_in: сумма к расходу (lamports)
            slippage_bps: допуск; None → config.quote.default_slippage_bps
            referral: реферал (по умолчанию сам пользователь)
            referral_fee: реферальная комиссия, передаётся программе как есть

        Returns:
            TradeOrder(quote, instruction, setup_instructions)
        """
        mint = as_pubkey(mint)
        creator = as_pubkey(creator)
        validate_tier(tier)
        protocol = self.get_protocol_config()
        quote = self.orchestrator.build_buy_quote(
            mint, tier, quote_amount_in, slippage_bps, fee_bps=protocol.fee_bps
        )

        instruction = build_buy_instruction(
            self.user,
            creator,
            mint,
            quote,
            ConfigTier(tier),
            Pubkey.from_string(protocol.fee_recipient),
            referral=referral,
            referral_fee=referral_fee,
            program_id=self.program_id,
        )
        setup = self._buy_setup(mint, creator)
        logger.info(
            "buy %s: spend=%d tokens=%d max_spend=%d setup=%d",
            mint, quote_amount_in, quote.counter_amount, quote.bound_amount, len(setup),
        )
        return TradeOrder(quote=quote, instruction=instruction, setup_instructions=setup)

    def sell(
        self,
        mint: Pubkey | str,
        creator: Pubkey | str,
        tier: int,
        token_amount: int,
        slippage_bps: Optional[int] = None,
        referral: Optional[Pubkey] = None,
        referral_fee: float = 0.0,
    ) -> TradeOrder:
        """Продажа token_amount токенов с полом выручки min proceeds."""
        mint = as_pubkey(mint)
        validate_tier(tier)
        protocol = self.get_protocol_config()
        quote = self.orchestrator.build_sell_quote(
            mint, tier, token_amount, slippage_bps, fee_bps=protocol.fee_bps
        )

        instruction = build_sell_instruction(
            self.user,
            as_pubkey(creator),
            mint,
            quote,
            ConfigTier(tier),
            Pubkey.from_string(protocol.fee_recipient),
            referral=referral,
            referral_fee=referral_fee,
            program_id=self.program_id,
        )
        logger.info(
            "sell %s: tokens=%d proceeds=%d min_proceeds=%d",
            mint, token_amount, quote.counter_amount, quote.bound_amount,
        )
        return TradeOrder(quote=quote, instruction=instruction)

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    def simulate(self, tx: Union[bytes, Any]) -> SimulationResult:
        """Симуляция подписанной (или неподписанной) транзакции."""
        try:
            value = self.rpc.simulate_transaction(bytes(tx))
        except RPCError as e:
            logger.warning("simulation failed: %s", e)
            raise UpstreamUnavailable(f"Failed to simulate transaction: {e}") from e

        error = value.get("err")
        return SimulationResult(
            success=error is None,
            error=error,
            logs=list(value.get("logs") or []),
            units_consumed=value.get("unitsConsumed"),
        )

    def submit(self, tx: Union[bytes, Any], skip_preflight: bool = False) -> str:
        """Отправка подписанной транзакции. Returns: signature (base58)."""
        try:
            signature = self.rpc.send_transaction(bytes(tx), skip_preflight=skip_preflight)
        except RPCError as e:
            logger.warning("submission failed: %s", e)
            raise UpstreamUnavailable(f"Failed to submit transaction: {e}") from e

        logger.info("submitted %s", signature)
        return signature
