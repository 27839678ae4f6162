"""
Curve State — снапшоты on-chain аккаунтов программы

Immutable Pydantic модели, представляющие read-only снапшоты:
- CurveState (аккаунт bonding curve одного токена)
- SupplyLimits (аккаунт tier с лимитами supply)
- ProtocolConfig (singleton-аккаунт протокола: комиссия, получатель комиссии)

SDK никогда не мутирует эти данные: изменения происходят только внутри
программы как побочный эффект исполненной сделки.
"""

from typing import Optional

from pydantic import BaseModel, Field

from gemsfun_sdk.core.domain.units import BPS_DENOMINATOR, U64_MAX


class CurveState(BaseModel):
    """
    Текущие резервы одной торговой пары.

    Инвариант: reserve_quote * reserve_base = k в пределах одной сделки.
    """

    reserve_quote: int = Field(
        ..., ge=0, le=U64_MAX, description="Резерв валюты (lamports)"
    )
    reserve_base: int = Field(
        ..., ge=0, le=U64_MAX, description="Резерв токена (минимальные единицы)"
    )
    finalized: bool = Field(
        ..., description="Кривая завершена (graduated), торговля запрещена"
    )
    supply_tier_address: Optional[str] = Field(
        None, min_length=32, max_length=44, description="Адрес tier-аккаунта (base58)"
    )

    model_config = {"frozen": True}

    @property
    def invariant_k(self) -> int:
        """Константа произведения k = reserve_quote * reserve_base (без усечения)."""
        return self.reserve_quote * self.reserve_base


class SupplyLimits(BaseModel):
    """
    Лимиты supply одного configuration tier.

    Часть токенов навсегда исключена из торговли (ликвидность после graduation).
    """

    total_supply_cap: int = Field(
        ..., ge=0, le=U64_MAX, description="Общий supply токена"
    )
    reserve_floor: int = Field(
        ..., ge=0, le=U64_MAX, description="Начальный резерв токена кривой"
    )
    liquidity_reserve: int = Field(
        ..., ge=0, le=U64_MAX, description="Токены под ликвидность после graduation"
    )
    initial_quote_reserve: int = Field(
        0, ge=0, le=U64_MAX, description="Начальный резерв валюты (lamports)"
    )
    tier: Optional[int] = Field(None, ge=1, le=3, description="Индекс tier")

    model_config = {"frozen": True}


class ProtocolConfig(BaseModel):
    """Singleton-конфигурация протокола."""

    fee_bps: int = Field(
        ..., ge=0, le=BPS_DENOMINATOR, description="Комиссия протокола (bps)"
    )
    referral_fee_bps: float = Field(
        0.0, ge=0, description="Реферальная комиссия (bps, f64 как on-chain)"
    )
    fee_recipient: str = Field(
        ..., min_length=32, max_length=44, description="Получатель комиссии (base58)"
    )
    admin: Optional[str] = Field(
        None, min_length=32, max_length=44, description="Admin протокола (base58)"
    )
    default_token_decimals: int = Field(6, ge=0, le=255)

    model_config = {"frozen": True}
