"""Quote Orchestrator — мост между live-состоянием ledger и Pricing Engine.

Читает 2–3 on-chain записи, вызывает Pricing Engine и превращает чисто
числовой результат в два поля инструкции: amount и bound.

Stateless и идемпотентен при неизменном состоянии ledger. Котировка всегда
advisory: гонку с изменением резервов разрешает программа атомарно при
исполнении, а от неблагоприятного исполнения защищает slippage bound.
"""

import logging
from typing import Callable, TypeVar

from solders.pubkey import Pubkey

from gemsfun_sdk.client.config import QuoteConfig
from gemsfun_sdk.core.domain.quote import BuyQuote, Quote, SellQuote, TradeDirection
from gemsfun_sdk.core.domain.tiers import validate_tier
from gemsfun_sdk.core.errors import ArithmeticOverflow, DivisionByZero, UpstreamUnavailable
from gemsfun_sdk.core.math.bonding_curve import (
    apply_slippage_bound,
    quote_base_for_quote,
    quote_quote_for_base,
)
from gemsfun_sdk.ledger.accounts import LedgerReader
from gemsfun_sdk.ledger.layouts import AccountLayoutError
from gemsfun_sdk.ledger.rpc_client import RPCError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def as_pubkey(value: Pubkey | str) -> Pubkey:
    """Адрес как Pubkey (принимает base58-строку)."""
    if isinstance(value, Pubkey):
        return value
    return Pubkey.from_string(value)


def read_upstream(what: str, fetch: Callable[[], T]) -> T:
    """Чтение ledger; отказ транспорта/декодирования → UpstreamUnavailable."""
    try:
        return fetch()
    except (RPCError, AccountLayoutError) as e:
        logger.warning("upstream read failed (%s): %s", what, e)
        raise UpstreamUnavailable(f"Failed to read {what}: {e}") from e


class QuoteOrchestrator:
    """Построение котировок buy/sell поверх LedgerReader.

    Ошибки Pricing Engine пробрасываются без изменений; отказы
    транспорта/декодирования оборачиваются в UpstreamUnavailable.
    """

    def __init__(self, reader: LedgerReader, config: QuoteConfig | None = None):
        """
        Args:
            reader: источник on-chain состояния
            config: конфигурация (опционально, используется default)
        """
        self.reader = reader
        self.config = config or QuoteConfig()

    # =========================================================================
    # BUY
    # =========================================================================

    def build_buy_quote(
        self,
        curve_id: Pubkey | str,
        tier: int,
        quote_amount_in: int,
        slippage_bps: int | None = None,
        fee_bps: int | None = None,
    ) -> Quote:
        """Котировка покупки на заданную сумму (buy-by-spend).

        Три чтения: кривая, supply limits tier, комиссия протокола
        (последнее пропускается, если fee_bps уже прочитан вызывающим).
        bound — потолок расхода в валюте резерва:
        ceil(quote_amount_in * (10000 + slippage) / 10000).

        Args:
            curve_id: mint токена (кривая выводится из него)
            tier: configuration tier кривой (1/2/3)
            quote_amount_in: сумма к расходу (lamports)
            slippage_bps: допуск (bps); None → config.default_slippage_bps
            fee_bps: комиссия из уже прочитанного ProtocolConfig; None → читается

        Returns:
            Quote(direction=BUY, counter_amount=токены, bound_amount=max spend)
        """
        tier = validate_tier(tier)
        slippage = self.config.resolve_slippage(slippage_bps)
        mint = as_pubkey(curve_id)

        curve = read_upstream("bonding curve", lambda: self.reader.fetch_curve_state(mint))
        limits = read_upstream("supply limits", lambda: self.reader.fetch_supply_limits(tier))
        if fee_bps is None:
            fee_bps = read_upstream("protocol fee", self.reader.fetch_fee_bps)

        try:
            result = quote_base_for_quote(quote_amount_in, curve, limits, fee_bps)
        except (DivisionByZero, ArithmeticOverflow) as e:
            logger.error("degenerate curve state for %s: %s", mint, e)
            raise

        bound = apply_slippage_bound(quote_amount_in, slippage, TradeDirection.BUY)

        logger.debug(
            "buy quote %s: spend=%d tokens=%d fee=%d max_spend=%d",
            mint, quote_amount_in, result.counter_amount, result.fee_amount, bound,
        )

        return Quote(
            direction=TradeDirection.BUY,
            amount_in=quote_amount_in,
            counter_amount=result.counter_amount,
            fee_amount=result.fee_amount,
            bound_amount=bound,
        )

    def quote_buy_by_spend(
        self,
        curve_id: Pubkey | str,
        tier: int,
        quote_amount_in: int,
        slippage_bps: int | None = None,
    ) -> BuyQuote:
        """Caller-facing форма build_buy_quote: {token_amount, max_spend, fee}."""
        quote = self.build_buy_quote(curve_id, tier, quote_amount_in, slippage_bps)
        return BuyQuote(
            token_amount=quote.counter_amount,
            max_spend=quote.bound_amount,
            fee=quote.fee_amount,
        )

    # =========================================================================
    # SELL
    # =========================================================================

    def build_sell_quote(
        self,
        curve_id: Pubkey | str,
        tier: int,
        base_amount_in: int,
        slippage_bps: int | None = None,
        fee_bps: int | None = None,
    ) -> Quote:
        """Котировка продажи заданного количества токенов.

        Два чтения: кривая и комиссия протокола (вторая пропускается при fee_bps).
        bound — пол выручки: floor(quote_out * (10000 - slippage) / 10000).
        """
        validate_tier(tier)
        slippage = self.config.resolve_slippage(slippage_bps)
        mint = as_pubkey(curve_id)

        curve = read_upstream("bonding curve", lambda: self.reader.fetch_curve_state(mint))
        if fee_bps is None:
            fee_bps = read_upstream("protocol fee", self.reader.fetch_fee_bps)

        try:
            result = quote_quote_for_base(base_amount_in, curve, fee_bps)
        except (DivisionByZero, ArithmeticOverflow) as e:
            logger.error("degenerate curve state for %s: %s", mint, e)
            raise

        bound = apply_slippage_bound(result.counter_amount, slippage, TradeDirection.SELL)

        logger.debug(
            "sell quote %s: tokens=%d proceeds=%d fee=%d min_proceeds=%d",
            mint, base_amount_in, result.counter_amount, result.fee_amount, bound,
        )

        return Quote(
            direction=TradeDirection.SELL,
            amount_in=base_amount_in,
            counter_amount=result.counter_amount,
            fee_amount=result.fee_amount,
            bound_amount=bound,
        )

    def quote_sell_by_tokens(
        self,
        curve_id: Pubkey | str,
        tier: int,
        base_amount_in: int,
        slippage_bps: int | None = None,
    ) -> SellQuote:
        """Caller-facing форма build_sell_quote: {min_proceeds, fee}."""
        quote = self.build_sell_quote(curve_id, tier, base_amount_in, slippage_bps)
        return SellQuote(min_proceeds=quote.bound_amount, fee=quote.fee_amount)
