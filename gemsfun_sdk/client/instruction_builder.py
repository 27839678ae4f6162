"""Instruction Builder — buy/sell инструкции программы.

Встраивает котировку и фиксированные адреса в инструкцию:
    data = discriminator(8) | tier u8 | amount u64 | bound u64 | referral_fee f64

amount/bound передаются полными u64 без сужения и без float. Доменной валидации
здесь нет: отсутствующий адрес или значение вне u64 — ошибка программиста,
падает громко (TypeError/struct.error) и не перехватывается.
"""

import struct
from dataclasses import dataclass
from typing import Any, Dict, Final, Optional

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from gemsfun_sdk.core.contracts import validate_trade_instruction
from gemsfun_sdk.core.domain.quote import Quote, TradeDirection
from gemsfun_sdk.core.domain.tiers import ConfigTier
from gemsfun_sdk.ledger.addresses import (
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


BUY_DISCRIMINATOR: Final[bytes] = bytes([102, 6, 61, 18, 1, 218, 235, 234])
SELL_DISCRIMINATOR: Final[bytes] = bytes([51, 230, 133, 164, 1, 127, 131, 173])

TRADE_ARGS_LAYOUT: Final[struct.Struct] = struct.Struct("<BQQd")

CREATE_CREATOR_REVENUE_POOL_DISCRIMINATOR: Final[bytes] = bytes([85, 75, 199, 97, 201, 114, 78, 69])

# Associated Token Program: CreateIdempotent, без аргументов
CREATE_ATA_IDEMPOTENT: Final[bytes] = bytes([1])


@dataclass(frozen=True)
class NamedAccount:
    """Аккаунт инструкции с именем из IDL."""

    name: str
    pubkey: Pubkey
    is_signer: bool = False
    is_writable: bool = False

    def to_meta(self) -> AccountMeta:
        return AccountMeta(self.pubkey, is_signer=self.is_signer, is_writable=self.is_writable)


@dataclass(frozen=True)
class TradeInstruction:
    """Payload buy/sell инструкции."""

    direction: TradeDirection
    program_id: Pubkey
    tier: ConfigTier
    amount: int  # токены к покупке (BUY) или к продаже (SELL)
    bound: int  # max spend (BUY) или min proceeds (SELL)
    referral_fee: float
    accounts: tuple[NamedAccount, ...]

    @property
    def data(self) -> bytes:
        discriminator = (
            BUY_DISCRIMINATOR if self.direction == TradeDirection.BUY else SELL_DISCRIMINATOR
        )
        return discriminator + TRADE_ARGS_LAYOUT.pack(
            int(self.tier), self.amount, self.bound, self.referral_fee
        )

    def to_instruction(self) -> Instruction:
        """solders Instruction для сборки транзакции вызывающей стороной."""
        return Instruction(self.program_id, self.data, [a.to_meta() for a in self.accounts])

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON-совместимое представление, проверенное по контракту trade_instruction.

        Raises:
            ValidationError: Payload не соответствует контракту (например, referral_fee < 0)
        """
        payload = {
            "direction": self.direction.value,
            "program_id": str(self.program_id),
            "tier": int(self.tier),
            "amount": self.amount,
            "bound": self.bound,
            "referral_fee": self.referral_fee,
            "accounts": [
                {
                    "name": a.name,
                    "pubkey": str(a.pubkey),
                    "is_signer": a.is_signer,
                    "is_writable": a.is_writable,
                }
                for a in self.accounts
            ],
            "data": self.data.hex(),
        }
        validate_trade_instruction(payload)
        return payload


def build_trade_accounts(
    tier: ConfigTier,
    user: Pubkey,
    creator: Pubkey,
    mint: Pubkey,
    fee_recipient: Pubkey,
    referral: Optional[Pubkey] = None,
    program_id: Pubkey = GEMSFUN_PROGRAM_ID,
) -> tuple[NamedAccount, ...]:
    """Аккаунты buy/sell в порядке IDL (одинаковы для обоих направлений)."""
    bonding_curve, _ = find_bonding_curve_pda(mint, program_id)

    return (
        NamedAccount("user", user, is_signer=True, is_writable=True),
        NamedAccount("creator", creator),
        NamedAccount("global", find_global_pda(program_id)[0]),
        NamedAccount("market_cap", find_market_cap_pda(tier, program_id)[0]),
        NamedAccount("fee_recipient", fee_recipient, is_writable=True),
        NamedAccount("mint", mint, is_writable=True),
        NamedAccount("bonding_curve", bonding_curve, is_writable=True),
        NamedAccount(
            "associated_bonding_curve",
            find_associated_token_address(bonding_curve, mint),
            is_writable=True,
        ),
        NamedAccount(
            "associated_user", find_associated_token_address(user, mint), is_writable=True
        ),
        NamedAccount(
            "creator_revenue_pool",
            find_creator_revenue_pda(mint, creator, program_id)[0],
            is_writable=True,
        ),
        NamedAccount("referral", referral or user, is_writable=True),
        NamedAccount("system_program", SYSTEM_PROGRAM_ID),
        NamedAccount("token_program", TOKEN_PROGRAM_ID),
        NamedAccount("associated_token_program", ASSOCIATED_TOKEN_PROGRAM_ID),
        NamedAccount("rent", RENT_SYSVAR_ID),
        NamedAccount("event_authority", find_event_authority_pda(program_id)[0]),
        NamedAccount("program", program_id),
    )


def _build(
    direction: TradeDirection,
    user: Pubkey,
    creator: Pubkey,
    mint: Pubkey,
    quote: Quote,
    tier: int,
    fee_recipient: Pubkey,
    referral: Optional[Pubkey],
    referral_fee: float,
    program_id: Pubkey,
) -> TradeInstruction:
    if quote.direction != direction:
        raise ValueError(
            f"{direction.value} instruction needs a {direction.value} quote, "
            f"got {quote.direction.value}"
        )
    tier = ConfigTier(tier)
    return TradeInstruction(
        direction=direction,
        program_id=program_id,
        tier=tier,
        amount=quote.instruction_amount,
        bound=quote.instruction_bound,
        referral_fee=float(referral_fee),
        accounts=build_trade_accounts(
            tier, user, creator, mint, fee_recipient, referral, program_id
        ),
    )


def build_buy_instruction(
    user: Pubkey,
    creator: Pubkey,
    mint: Pubkey,
    quote: Quote,
    tier: int,
    fee_recipient: Pubkey,
    referral: Optional[Pubkey] = None,
    referral_fee: float = 0.0,
    program_id: Pubkey = GEMSFUN_PROGRAM_ID,
) -> TradeInstruction:
    """Buy: amount = токены к получению, bound = max spend (lamports)."""
    return _build(
        TradeDirection.BUY, user, creator, mint, quote, tier,
        fee_recipient, referral, referral_fee, program_id,
    )


def build_sell_instruction(
    user: Pubkey,
    creator: Pubkey,
    mint: Pubkey,
    quote: Quote,
    tier: int,
    fee_recipient: Pubkey,
    referral: Optional[Pubkey] = None,
    referral_fee: float = 0.0,
    program_id: Pubkey = GEMSFUN_PROGRAM_ID,
) -> TradeInstruction:
    """Sell: amount = токены к продаже, bound = min proceeds (lamports)."""
    return _build(
        TradeDirection.SELL, user, creator, mint, quote, tier,
        fee_recipient, referral, referral_fee, program_id,
    )


# =============================================================================
# SETUP
# =============================================================================


def build_create_associated_token_account_instruction(
    payer: Pubkey, owner: Pubkey, mint: Pubkey
) -> Instruction:
    """Создание ATA владельца для mint (идемпотентно, payer платит rent)."""
    return Instruction(
        ASSOCIATED_TOKEN_PROGRAM_ID,
        CREATE_ATA_IDEMPOTENT,
        [
            AccountMeta(payer, is_signer=True, is_writable=True),
            AccountMeta(find_associated_token_address(owner, mint), is_signer=False, is_writable=True),
            AccountMeta(owner, is_signer=False, is_writable=False),
            AccountMeta(mint, is_signer=False, is_writable=False),
            AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
            AccountMeta(TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
        ],
    )


def build_create_creator_revenue_pool_instruction(
    user: Pubkey,
    creator: Pubkey,
    mint: Pubkey,
    program_id: Pubkey = GEMSFUN_PROGRAM_ID,
) -> Instruction:
    """
    createCreatorRevenuePool: user, mint, creator_revenue_pool, system_program.

    Пул тот же, что в buy/sell-инструкции (seeds = mint + creator).
    """
    pool, _ = find_creator_revenue_pda(mint, creator, program_id)
    return Instruction(
        program_id,
        CREATE_CREATOR_REVENUE_POOL_DISCRIMINATOR,
        [
            AccountMeta(user, is_signer=True, is_writable=True),
            AccountMeta(mint, is_signer=False, is_writable=False),
            AccountMeta(pool, is_signer=False, is_writable=True),
            AccountMeta(SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        ],
    )
