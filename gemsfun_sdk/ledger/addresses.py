"""
Addresses — детерминированная деривация адресов программы (PDA)

Все адреса выводятся из фиксированных seeds через find_program_address.
Функции чистые: одинаковые входы дают одинаковые (address, bump).
"""

from typing import Final

from solders.pubkey import Pubkey

from gemsfun_sdk.core.domain.tiers import validate_tier


# =============================================================================
# PROGRAM IDS
# =============================================================================

GEMSFUN_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "FQCKTpkAviLqpUPEvbJ5epQLLPgVW5URSUw4CH7BXQTb"
)
SYSTEM_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string("11111111111111111111111111111111")
TOKEN_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
)
ASSOCIATED_TOKEN_PROGRAM_ID: Final[Pubkey] = Pubkey.from_string(
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)
RENT_SYSVAR_ID: Final[Pubkey] = Pubkey.from_string(
    "SysvarRent111111111111111111111111111111111"
)


# =============================================================================
# SEEDS
# =============================================================================

GLOBAL_SEED: Final[bytes] = b"global"
MARKET_CAP_SEED: Final[bytes] = b"market_cap"
BONDING_CURVE_SEED: Final[bytes] = b"bonding_curve"
CREATOR_REVENUE_SEED: Final[bytes] = b"creator_revenue"
EVENT_AUTHORITY_SEED: Final[bytes] = b"__event_authority"


# =============================================================================
# PDA
# =============================================================================


def find_global_pda(program_id: Pubkey = GEMSFUN_PROGRAM_ID) -> tuple[Pubkey, int]:
    """Singleton-аккаунт протокола (комиссия, получатель комиссии)."""
    return Pubkey.find_program_address([GLOBAL_SEED], program_id)


def find_market_cap_pda(
    tier: int, program_id: Pubkey = GEMSFUN_PROGRAM_ID
) -> tuple[Pubkey, int]:
    """
    Аккаунт configuration tier (SupplyLimits).

    Raises:
        InvalidTier: Если tier не 1, 2 или 3
    """
    index = validate_tier(tier)
    return Pubkey.find_program_address([MARKET_CAP_SEED, bytes([int(index)])], program_id)


def find_bonding_curve_pda(
    mint: Pubkey, program_id: Pubkey = GEMSFUN_PROGRAM_ID
) -> tuple[Pubkey, int]:
    """Аккаунт bonding curve токена."""
    return Pubkey.find_program_address([BONDING_CURVE_SEED, bytes(mint)], program_id)


def find_creator_revenue_pda(
    mint: Pubkey, creator: Pubkey, program_id: Pubkey = GEMSFUN_PROGRAM_ID
) -> tuple[Pubkey, int]:
    """Адрес creator revenue pool (buy/sell и createCreatorRevenuePool)."""
    return Pubkey.find_program_address(
        [CREATOR_REVENUE_SEED, bytes(mint), bytes(creator)], program_id
    )


def find_event_authority_pda(
    program_id: Pubkey = GEMSFUN_PROGRAM_ID,
) -> tuple[Pubkey, int]:
    """Event authority программы (Anchor event CPI)."""
    return Pubkey.find_program_address([EVENT_AUTHORITY_SEED], program_id)


def find_associated_token_address(owner: Pubkey, mint: Pubkey) -> Pubkey:
    """
    Associated token account владельца для mint.

    seeds = [owner, TOKEN_PROGRAM_ID, mint] под Associated Token Program.
    """
    return Pubkey.find_program_address(
        [bytes(owner), bytes(TOKEN_PROGRAM_ID), bytes(mint)],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )[0]
