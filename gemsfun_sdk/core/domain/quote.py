"""
Quote — value objects результата котирования

Вычисляются заново на каждый вызов, сразу потребляются Instruction Builder,
никогда не сохраняются.
"""

from dataclasses import dataclass
from enum import Enum


class TradeDirection(str, Enum):
    """Направление сделки."""

    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class CurveQuote:
    """Чистый результат Pricing Engine (без slippage bound)."""

    counter_amount: int  # токены (buy) или lamports после комиссии (sell)
    fee_amount: int  # комиссия в lamports
    net_amount: int  # вход после комиссии (buy) или выход до комиссии (sell)


@dataclass(frozen=True)
class Quote:
    """
    Котировка, готовая к встраиванию в инструкцию.

    bound_amount — потолок расхода для BUY и пол выручки для SELL.
    """

    direction: TradeDirection
    amount_in: int
    counter_amount: int
    fee_amount: int
    bound_amount: int

    @property
    def instruction_amount(self) -> int:
        """Поле `amount` инструкции: токены к покупке или к продаже."""
        if self.direction == TradeDirection.BUY:
            return self.counter_amount
        return self.amount_in

    @property
    def instruction_bound(self) -> int:
        """Поле `bound` инструкции: max spend (BUY) или min proceeds (SELL)."""
        return self.bound_amount


@dataclass(frozen=True)
class BuyQuote:
    """Caller-facing котировка покупки на заданную сумму."""

    token_amount: int
    max_spend: int
    fee: int


@dataclass(frozen=True)
class SellQuote:
    """Caller-facing котировка продажи заданного количества токенов."""

    min_proceeds: int
    fee: int
