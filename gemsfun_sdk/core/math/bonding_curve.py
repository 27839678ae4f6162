"""
Bonding Curve — Pricing Engine

Пара взаимно обратных функций конверсии между суммой в валюте резерва и
количеством токена под инвариантом постоянного произведения:

    (reserve_quote + quote_in) * (reserve_base - base_out) = reserve_quote * reserve_base

Плюс извлечение комиссии, клампинг по supply limits и slippage bound для
исполняемой заявки.

Модуль повторяет целочисленную арифметику программы бит в бит: любое
расхождение приводит к отклонению транзакции on-chain уже после отправки.
Чистые функции, без I/O и без состояния.
"""

from gemsfun_sdk.core.domain.curve_state import CurveState, SupplyLimits
from gemsfun_sdk.core.domain.quote import CurveQuote, TradeDirection
from gemsfun_sdk.core.errors import (
    CurveFinalized,
    InsufficientReserve,
    InvalidAmountOut,
    InvalidFeeRate,
    InvalidSlippage,
    NoLiquidity,
)
from gemsfun_sdk.core.math.integer_safeguards import (
    BPS_DENOMINATOR,
    checked_floor_div,
    checked_sub,
    checked_u64,
    fee_from_bps,
    mul_div_ceil,
    mul_div_floor,
    validate_amount,
    validate_bps,
)


# =============================================================================
# SUPPLY LIMITS
# =============================================================================


def available_base_for_purchase(curve: CurveState, limits: SupplyLimits) -> int:
    """
    Количество токенов, которое ещё может быть выкуплено из кривой.

    available = reserve_base - (reserve_floor - total_supply_cap) - liquidity_reserve

    Порядок вычитания совпадает с программой. Промежуточная разность знаковая:
    отрицательный результат означает, что продавать нечего.

    Результат используется только как safety clamp: авторитетна симуляция
    транзакции программой.
    """
    return (
        curve.reserve_base
        - (limits.reserve_floor - limits.total_supply_cap)
        - limits.liquidity_reserve
    )


# =============================================================================
# BUY: QUOTE → BASE
# =============================================================================


def quote_base_for_quote(
    quote_amount_in: int,
    curve: CurveState,
    limits: SupplyLimits,
    fee_bps: int,
) -> CurveQuote:
    """
    Количество токенов за заданную сумму валюты (buy-by-spend).

    Алгоритм:
        fee              = floor(quote_amount_in * fee_bps / 10000)
        net_in           = quote_amount_in - fee
        k                = reserve_quote * reserve_base
        new_reserve_base = floor(k / (reserve_quote + net_in))
        raw_base_out     = reserve_base - new_reserve_base
        base_out         = min(raw_base_out, available)

    Args:
        quote_amount_in: Сумма к расходу (lamports, > 0)
        curve: Снапшот кривой
        limits: Supply limits tier кривой
        fee_bps: Комиссия протокола (bps, 0–10000)

    Returns:
        CurveQuote(counter_amount=base_out, fee_amount=fee, net_amount=net_in)

    Raises:
        CurveFinalized: Кривая завершена
        InvalidAmount: quote_amount_in <= 0 или > u64
        InvalidFeeRate: fee_bps вне [0, 10000]
        DivisionByZero: reserve_quote + net_in == 0
        ArithmeticOverflow: new_reserve_base > reserve_base
        NoLiquidity: base_out <= 0 после клампинга
    """
    if curve.finalized:
        raise CurveFinalized("Bonding curve is completed, cannot buy more tokens")

    validate_amount(quote_amount_in, "quote_amount_in")
    validate_bps(fee_bps, "fee_bps", InvalidFeeRate)

    # Комиссия удерживается со входа до математики кривой
    fee = fee_from_bps(quote_amount_in, fee_bps)
    net_in = quote_amount_in - fee

    k = curve.invariant_k
    new_reserve_quote = curve.reserve_quote + net_in
    new_reserve_base = checked_floor_div(k, new_reserve_quote, "new_reserve_base")
    raw_base_out = checked_sub(curve.reserve_base, new_reserve_base, "raw_base_out")

    base_out = min(raw_base_out, available_base_for_purchase(curve, limits))

    if base_out <= 0:
        raise NoLiquidity(
            f"No tokens available for purchase (raw={raw_base_out}, "
            f"clamped={base_out})"
        )

    return CurveQuote(
        counter_amount=checked_u64(base_out, "base_out"),
        fee_amount=fee,
        net_amount=net_in,
    )


# =============================================================================
# SELL: BASE → QUOTE
# =============================================================================


def quote_quote_for_base(
    base_amount_in: int,
    curve: CurveState,
    fee_bps: int,
) -> CurveQuote:
    """
    Выручка в валюте за продажу заданного количества токенов.

    Алгоритм:
        k                 = reserve_quote * reserve_base
        new_reserve_quote = floor(k / (reserve_base + base_amount_in))
        raw_quote_out     = reserve_quote - new_reserve_quote
        fee               = floor(raw_quote_out * fee_bps / 10000)
        quote_out         = raw_quote_out - fee

    Args:
        base_amount_in: Количество токенов к продаже (> 0)
        curve: Снапшот кривой
        fee_bps: Комиссия протокола (bps, 0–10000)

    Returns:
        CurveQuote(counter_amount=quote_out, fee_amount=fee, net_amount=raw_quote_out)

    Raises:
        CurveFinalized: Кривая завершена
        InvalidAmount: base_amount_in <= 0 или > u64
        InsufficientReserve: base_amount_in > reserve_base
        InvalidFeeRate: fee_bps вне [0, 10000]
        DivisionByZero: reserve_base + base_amount_in == 0
        ArithmeticOverflow: new_reserve_quote > reserve_quote
        InvalidAmountOut: quote_out <= 0
    """
    if curve.finalized:
        raise CurveFinalized("Bonding curve is completed, cannot sell tokens")

    validate_amount(base_amount_in, "base_amount_in")

    if base_amount_in > curve.reserve_base:
        raise InsufficientReserve(
            f"Insufficient tokens in bonding curve: "
            f"{base_amount_in} > reserve_base {curve.reserve_base}"
        )

    validate_bps(fee_bps, "fee_bps", InvalidFeeRate)

    k = curve.invariant_k
    new_reserve_base = curve.reserve_base + base_amount_in
    new_reserve_quote = checked_floor_div(k, new_reserve_base, "new_reserve_quote")
    raw_quote_out = checked_sub(curve.reserve_quote, new_reserve_quote, "raw_quote_out")

    # Комиссия удерживается с выхода после математики кривой
    fee = fee_from_bps(raw_quote_out, fee_bps)
    quote_out = raw_quote_out - fee

    if quote_out <= 0:
        raise InvalidAmountOut(
            f"SOL output after fee must be greater than 0 "
            f"(raw={raw_quote_out}, fee={fee})"
        )

    return CurveQuote(
        counter_amount=checked_u64(quote_out, "quote_out"),
        fee_amount=fee,
        net_amount=raw_quote_out,
    )


# =============================================================================
# SLIPPAGE BOUND
# =============================================================================


def apply_slippage_bound(
    amount: int,
    slippage_bps: int,
    direction: TradeDirection,
) -> int:
    """
    Worst-case граница для инструкции с учётом slippage.

    BUY:  ceil(amount * (10000 + slippage_bps) / 10000)  — потолок расхода
    SELL: floor(amount * (10000 - slippage_bps) / 10000) — пол выручки

    При slippage_bps = 0 граница равна amount в обоих направлениях.

    Args:
        amount: Базовая сумма (расход для BUY, выручка для SELL)
        slippage_bps: Допуск (bps, 0–10000)
        direction: Направление сделки

    Returns:
        Граница, помещающаяся в u64

    Raises:
        InvalidSlippage: slippage_bps вне [0, 10000]
        ArithmeticOverflow: Граница BUY не помещается в u64
    """
    validate_bps(slippage_bps, "slippage_bps", InvalidSlippage)

    if direction == TradeDirection.BUY:
        bound = mul_div_ceil(amount, BPS_DENOMINATOR + slippage_bps, BPS_DENOMINATOR)
    else:
        bound = mul_div_floor(amount, BPS_DENOMINATOR - slippage_bps, BPS_DENOMINATOR)

    return checked_u64(bound, "slippage_bound")
