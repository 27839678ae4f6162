"""
Layouts — декодирование on-chain аккаунтов программы

Формат Anchor: 8 байт discriminator + поля little-endian подряд (borsh).

    BondingCurve: bump u8 | market_cap pubkey | reserve_sol u64 | reserve_token u64 | completed bool
    MarketCap:    bump u8 | index u8 | total_supply u64 | sol_reserves u64 | token_reserves u64 | token_liquidity u64
    Global:       bump u8 | admin pubkey | fee f64 | referral_fee f64 | fee_recipient pubkey | raydium_migrator pubkey | decimals u8

Лишние байты в хвосте допускаются (Anchor выделяет место с запасом).
"""

import math
import struct
from typing import Final

from pydantic import ValidationError
from solders.pubkey import Pubkey

from gemsfun_sdk.core.domain.curve_state import CurveState, ProtocolConfig, SupplyLimits
from gemsfun_sdk.core.domain.units import BPS_DENOMINATOR


# =============================================================================
# DISCRIMINATORS
# =============================================================================

DISCRIMINATOR_SIZE: Final[int] = 8

BONDING_CURVE_DISCRIMINATOR: Final[bytes] = bytes([23, 183, 248, 55, 96, 216, 172, 96])
MARKET_CAP_DISCRIMINATOR: Final[bytes] = bytes([182, 231, 202, 165, 75, 159, 248, 8])
GLOBAL_DISCRIMINATOR: Final[bytes] = bytes([167, 232, 232, 177, 200, 108, 114, 127])


# =============================================================================
# LAYOUTS
# =============================================================================

BONDING_CURVE_LAYOUT: Final[struct.Struct] = struct.Struct("<B32sQQ?")
MARKET_CAP_LAYOUT: Final[struct.Struct] = struct.Struct("<BBQQQQ")
GLOBAL_LAYOUT: Final[struct.Struct] = struct.Struct("<B32sdd32s32sB")


class AccountLayoutError(ValueError):
    """Данные аккаунта не соответствуют ожидаемому layout."""


def _unpack(data: bytes, discriminator: bytes, layout: struct.Struct, kind: str) -> tuple:
    if len(data) < DISCRIMINATOR_SIZE + layout.size:
        raise AccountLayoutError(
            f"{kind} account too short: {len(data)} bytes, "
            f"expected at least {DISCRIMINATOR_SIZE + layout.size}"
        )

    if data[:DISCRIMINATOR_SIZE] != discriminator:
        raise AccountLayoutError(
            f"{kind} discriminator mismatch: {data[:DISCRIMINATOR_SIZE].hex()}"
        )

    return layout.unpack_from(data, DISCRIMINATOR_SIZE)


def _pubkey(raw: bytes) -> str:
    return str(Pubkey.from_bytes(raw))


# =============================================================================
# DECODERS
# =============================================================================


def decode_curve_state(data: bytes) -> CurveState:
    """
    Декодирование аккаунта bonding curve.

    Raises:
        AccountLayoutError: Неверный discriminator или короткие данные
    """
    _bump, market_cap, reserve_sol, reserve_token, completed = _unpack(
        data, BONDING_CURVE_DISCRIMINATOR, BONDING_CURVE_LAYOUT, "BondingCurve"
    )

    return CurveState(
        reserve_quote=reserve_sol,
        reserve_base=reserve_token,
        finalized=completed,
        supply_tier_address=_pubkey(market_cap),
    )


def decode_supply_limits(data: bytes) -> SupplyLimits:
    """
    Декодирование аккаунта configuration tier.

    Raises:
        AccountLayoutError: Неверный discriminator, короткие данные или индекс tier
    """
    (
        _bump,
        index,
        total_supply,
        sol_reserves,
        token_reserves,
        token_liquidity,
    ) = _unpack(data, MARKET_CAP_DISCRIMINATOR, MARKET_CAP_LAYOUT, "MarketCap")

    try:
        return SupplyLimits(
            total_supply_cap=total_supply,
            reserve_floor=token_reserves,
            liquidity_reserve=token_liquidity,
            initial_quote_reserve=sol_reserves,
            tier=index,
        )
    except ValidationError as e:
        raise AccountLayoutError(f"MarketCap account has invalid fields: {e}") from e


def fee_bps_from_f64(fee: float) -> int:
    """
    Конверсия on-chain комиссии (f64) в целые bps.

    Программа хранит ставку как f64, но использует её как целые bps.

    Raises:
        AccountLayoutError: NaN/Inf, дробное значение или вне [0, 10000]
    """
    if not math.isfinite(fee) or not float(fee).is_integer():
        raise AccountLayoutError(f"Protocol fee is not an integral bps value: {fee}")

    fee_bps = int(fee)
    if fee_bps < 0 or fee_bps > BPS_DENOMINATOR:
        raise AccountLayoutError(
            f"Protocol fee must be in [0, {BPS_DENOMINATOR}] bps, got {fee_bps}"
        )

    return fee_bps


def decode_protocol_config(data: bytes) -> ProtocolConfig:
    """
    Декодирование singleton-аккаунта протокола.

    Raises:
        AccountLayoutError: Неверный discriminator, короткие данные или комиссия
    """
    (
        _bump,
        admin,
        fee,
        referral_fee,
        fee_recipient,
        _raydium_migrator,
        decimals,
    ) = _unpack(data, GLOBAL_DISCRIMINATOR, GLOBAL_LAYOUT, "Global")

    try:
        return ProtocolConfig(
            fee_bps=fee_bps_from_f64(fee),
            referral_fee_bps=referral_fee,
            fee_recipient=_pubkey(fee_recipient),
            admin=_pubkey(admin),
            default_token_decimals=decimals,
        )
    except ValidationError as e:
        raise AccountLayoutError(f"Global account has invalid fields: {e}") from e
