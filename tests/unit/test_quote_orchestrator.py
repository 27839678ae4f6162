"""
Тесты Quote Orchestrator

Ledger заменён fake-reader: чтения считаются, отказы подставляются явно.
"""

import logging

import pytest
from solders.pubkey import Pubkey

from gemsfun_sdk.client.config import QuoteConfig
from gemsfun_sdk.client.quote_orchestrator import QuoteOrchestrator, as_pubkey
from gemsfun_sdk.core.domain import BuyQuote, CurveState, SellQuote, SupplyLimits, TradeDirection
from gemsfun_sdk.core.errors import (
    AccountNotFound,
    CurveFinalized,
    DivisionByZero,
    InsufficientReserve,
    InvalidAmount,
    InvalidSlippage,
    InvalidTier,
    UpstreamUnavailable,
)
from gemsfun_sdk.core.math import quote_base_for_quote, quote_quote_for_base
from gemsfun_sdk.ledger.layouts import AccountLayoutError
from gemsfun_sdk.ledger.rpc_client import RPCError

MINT = Pubkey.from_string("So11111111111111111111111111111111111111112")
RESERVE_QUOTE = 30_000_000_000
RESERVE_BASE = 1_073_000_000_000_000


class FakeReader:
    """LedgerReader в памяти."""

    def __init__(self, curve=None, limits=None, fee_bps=100, error=None):
        self.curve = curve or CurveState(
            reserve_quote=RESERVE_QUOTE, reserve_base=RESERVE_BASE, finalized=False
        )
        self.limits = limits or SupplyLimits(
            total_supply_cap=1_000_000_000_000_000,
            reserve_floor=1_073_000_000_000_000,
            liquidity_reserve=206_900_000_000_000,
            tier=1,
        )
        self.fee_bps = fee_bps
        self.error = error
        self.reads = []

    def _maybe_fail(self) -> None:
        if self.error is not None:
            raise self.error

    def fetch_curve_state(self, mint):
        self.reads.append(("curve", mint))
        self._maybe_fail()
        return self.curve

    def fetch_supply_limits(self, tier):
        self.reads.append(("limits", tier))
        self._maybe_fail()
        return self.limits

    def fetch_fee_bps(self):
        self.reads.append(("fee", None))
        self._maybe_fail()
        return self.fee_bps


@pytest.fixture
def reader() -> FakeReader:
    return FakeReader()


@pytest.fixture
def orchestrator(reader) -> QuoteOrchestrator:
    return QuoteOrchestrator(reader)


# =============================================================================
# BUY
# =============================================================================


class TestBuildBuyQuote:
    """Тесты build_buy_quote"""

    def test_reference_buy(self, orchestrator, reader) -> None:
        """Покупка на 10_000_000 при комиссии 1% и slippage 5%"""
        quote = orchestrator.build_buy_quote(MINT, 1, 10_000_000, 500)

        expected = quote_base_for_quote(10_000_000, reader.curve, reader.limits, 100)
        assert quote.direction == TradeDirection.BUY
        assert quote.amount_in == 10_000_000
        assert quote.fee_amount == 100_000
        assert quote.counter_amount == expected.counter_amount
        assert quote.bound_amount == 10_500_000

    def test_three_reads(self, orchestrator, reader) -> None:
        orchestrator.build_buy_quote(MINT, 2, 10_000_000)
        assert [kind for kind, _ in reader.reads] == ["curve", "limits", "fee"]
        assert reader.reads[1][1] == 2

    def test_supplied_fee_skips_global_read(self, orchestrator, reader) -> None:
        quote = orchestrator.build_buy_quote(MINT, 1, 10_000_000, fee_bps=200)
        assert [kind for kind, _ in reader.reads] == ["curve", "limits"]
        assert quote.fee_amount == 200_000

    def test_default_slippage(self, orchestrator) -> None:
        quote = orchestrator.build_buy_quote(MINT, 1, 10_000_000)
        assert quote.bound_amount == 10_500_000

    def test_configured_default_slippage(self, reader) -> None:
        orchestrator = QuoteOrchestrator(reader, QuoteConfig(default_slippage_bps=100))
        assert orchestrator.build_buy_quote(MINT, 1, 10_000_000).bound_amount == 10_100_000

    def test_zero_slippage_kept(self, orchestrator) -> None:
        """0 не подменяется default"""
        assert orchestrator.build_buy_quote(MINT, 1, 10_000_000, 0).bound_amount == 10_000_000

    def test_accepts_base58_mint(self, orchestrator, reader) -> None:
        orchestrator.build_buy_quote(str(MINT), 1, 10_000_000)
        assert reader.reads[0][1] == MINT

    def test_deterministic(self, orchestrator) -> None:
        first = orchestrator.build_buy_quote(MINT, 1, 10_000_000)
        second = orchestrator.build_buy_quote(MINT, 1, 10_000_000)
        assert first == second

    def test_invalid_slippage_before_reads(self, orchestrator, reader) -> None:
        with pytest.raises(InvalidSlippage):
            orchestrator.build_buy_quote(MINT, 1, 10_000_000, 10_001)
        assert reader.reads == []

    @pytest.mark.parametrize("tier", [0, 4])
    def test_invalid_tier_before_reads(self, orchestrator, reader, tier: int) -> None:
        with pytest.raises(InvalidTier):
            orchestrator.build_buy_quote(MINT, tier, 10_000_000)
        assert reader.reads == []

    def test_finalized_propagates(self) -> None:
        reader = FakeReader(
            curve=CurveState(reserve_quote=RESERVE_QUOTE, reserve_base=RESERVE_BASE, finalized=True)
        )
        with pytest.raises(CurveFinalized):
            QuoteOrchestrator(reader).build_buy_quote(MINT, 1, 10_000_000)

    def test_invalid_amount_propagates(self, orchestrator) -> None:
        with pytest.raises(InvalidAmount):
            orchestrator.build_buy_quote(MINT, 1, 0)

    def test_degenerate_state_logged(self, caplog) -> None:
        reader = FakeReader(curve=CurveState(reserve_quote=0, reserve_base=RESERVE_BASE, finalized=False), fee_bps=10_000)
        with caplog.at_level(logging.ERROR, logger="gemsfun_sdk.client.quote_orchestrator"):
            with pytest.raises(DivisionByZero):
                QuoteOrchestrator(reader).build_buy_quote(MINT, 1, 100)
        assert "degenerate curve state" in caplog.text


class TestQuoteBuyBySpend:
    """Тесты quote_buy_by_spend"""

    def test_shape(self, orchestrator) -> None:
        result = orchestrator.quote_buy_by_spend(MINT, 1, 10_000_000, 500)
        quote = orchestrator.build_buy_quote(MINT, 1, 10_000_000, 500)

        assert isinstance(result, BuyQuote)
        assert result.token_amount == quote.counter_amount
        assert result.max_spend == 10_500_000
        assert result.fee == 100_000


# =============================================================================
# SELL
# =============================================================================


class TestBuildSellQuote:
    """Тесты build_sell_quote"""

    def test_reference_sell(self, orchestrator, reader) -> None:
        quote = orchestrator.build_sell_quote(MINT, 1, 1_000_000_000_000, 500)

        expected = quote_quote_for_base(1_000_000_000_000, reader.curve, 100)
        assert quote.direction == TradeDirection.SELL
        assert quote.counter_amount == expected.counter_amount
        assert quote.fee_amount == expected.fee_amount
        assert quote.bound_amount == expected.counter_amount * 9_500 // 10_000
        assert quote.instruction_amount == 1_000_000_000_000

    def test_two_reads(self, orchestrator, reader) -> None:
        orchestrator.build_sell_quote(MINT, 1, 1_000_000)
        assert [kind for kind, _ in reader.reads] == ["curve", "fee"]

    def test_supplied_fee_skips_global_read(self, orchestrator, reader) -> None:
        quote = orchestrator.build_sell_quote(MINT, 1, 1_000_000_000_000, fee_bps=0)
        assert [kind for kind, _ in reader.reads] == ["curve"]
        assert quote.fee_amount == 0

    def test_invalid_tier(self, orchestrator, reader) -> None:
        with pytest.raises(InvalidTier):
            orchestrator.build_sell_quote(MINT, 5, 1_000_000)
        assert reader.reads == []

    def test_insufficient_reserve(self, orchestrator) -> None:
        with pytest.raises(InsufficientReserve):
            orchestrator.build_sell_quote(MINT, 1, RESERVE_BASE + 1)


class TestQuoteSellByTokens:
    """Тесты quote_sell_by_tokens"""

    def test_shape(self, orchestrator) -> None:
        result = orchestrator.quote_sell_by_tokens(MINT, 1, 1_000_000_000_000, 0)
        quote = orchestrator.build_sell_quote(MINT, 1, 1_000_000_000_000, 0)

        assert isinstance(result, SellQuote)
        assert result.min_proceeds == quote.counter_amount
        assert result.fee == quote.fee_amount


# =============================================================================
# UPSTREAM
# =============================================================================


class TestUpstreamFailures:
    """Отказы ledger/transport"""

    @pytest.mark.parametrize(
        "error",
        [RPCError(-1, "Connection failed: timeout"), AccountLayoutError("BondingCurve account too short")],
    )
    def test_wrapped(self, error, caplog) -> None:
        orchestrator = QuoteOrchestrator(FakeReader(error=error))
        with caplog.at_level(logging.WARNING):
            with pytest.raises(UpstreamUnavailable, match="Failed to read bonding curve") as exc_info:
                orchestrator.build_buy_quote(MINT, 1, 10_000_000)
        assert exc_info.value.__cause__ is error
        assert "upstream read failed" in caplog.text

    def test_account_not_found_passes_through(self) -> None:
        error = AccountNotFound(str(MINT), "bonding curve")
        orchestrator = QuoteOrchestrator(FakeReader(error=error))
        with pytest.raises(AccountNotFound) as exc_info:
            orchestrator.build_sell_quote(MINT, 1, 1_000_000)
        assert exc_info.value is error


class TestAsPubkey:
    """Тесты as_pubkey"""

    def test_passthrough(self) -> None:
        assert as_pubkey(MINT) is MINT

    def test_from_string(self) -> None:
        assert as_pubkey(str(MINT)) == MINT


# =============================================================================
# CONFIG
# =============================================================================


class TestQuoteConfig:
    """Тесты QuoteConfig"""

    def test_default(self) -> None:
        assert QuoteConfig().default_slippage_bps == 500

    def test_resolve(self) -> None:
        config = QuoteConfig()
        assert config.resolve_slippage(None) == 500
        assert config.resolve_slippage(0) == 0
        assert config.resolve_slippage(10_000) == 10_000

    def test_resolve_invalid(self) -> None:
        with pytest.raises(InvalidSlippage):
            QuoteConfig().resolve_slippage(10_001)

    def test_invalid_default(self) -> None:
        with pytest.raises(InvalidSlippage):
            QuoteConfig(default_slippage_bps=-1)
