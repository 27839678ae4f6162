"""
Errors — таксономия ошибок SDK

Каждый вид отказа — отдельный класс, чтобы вызывающий код ловил ошибки по типу,
а не разбирал текст сообщения.

Иерархия:
    GemsfunError
    ├── PricingError            — локальные синхронные отказы Pricing Engine
    │   ├── InvalidAmount       (ValueError)
    │   ├── CurveFinalized
    │   ├── InsufficientReserve (ValueError)
    │   ├── NoLiquidity
    │   ├── InvalidAmountOut
    │   ├── InvalidSlippage     (ValueError)
    │   ├── InvalidFeeRate      (ValueError)
    │   ├── InvalidTier         (ValueError)
    │   ├── DivisionByZero      (ArithmeticError)
    │   └── ArithmeticOverflow  (ArithmeticError)
    └── UpstreamUnavailable     — отказ внешнего ledger/transport (retryable)
        └── AccountNotFound
"""


class GemsfunError(Exception):
    """Базовый класс всех ошибок SDK."""


# =============================================================================
# PRICING ENGINE
# =============================================================================


class PricingError(GemsfunError):
    """Базовый класс отказов Pricing Engine. Не retryable без изменения входов."""


class InvalidAmount(PricingError, ValueError):
    """Входная сумма <= 0 или не помещается в u64."""


class CurveFinalized(PricingError):
    """Кривая завершена (graduated), торговля против неё невозможна навсегда."""


class InsufficientReserve(PricingError, ValueError):
    """Продажа большего количества токенов, чем лежит в кривой."""


class NoLiquidity(PricingError):
    """После клампинга по supply limits покупка даёт <= 0 токенов."""


class InvalidAmountOut(PricingError):
    """Выручка продажи после комиссии <= 0."""


class InvalidSlippage(PricingError, ValueError):
    """Slippage вне диапазона [0, 10000] bps."""


class InvalidFeeRate(PricingError, ValueError):
    """Ставка комиссии вне диапазона [0, 10000] bps."""


class InvalidTier(PricingError, ValueError):
    """Неизвестный configuration tier (допустимы 1, 2, 3)."""


class DivisionByZero(PricingError, ArithmeticError):
    """
    Нулевой знаменатель в формуле кривой.

    Недостижимо при валидном состоянии ledger — признак повреждённых данных.
    """


class ArithmeticOverflow(PricingError, ArithmeticError):
    """
    Underflow/overflow u64 в промежуточном или итоговом значении.

    Никогда не коэрсится в ноль: результат разошёлся бы с on-chain программой.
    """


# =============================================================================
# UPSTREAM
# =============================================================================


class UpstreamUnavailable(GemsfunError):
    """
    Внешний ledger/transport недоступен или вернул непригодные данные.

    Retryable вызывающей стороной (с backoff); SDK сам повторов не делает.
    """


class AccountNotFound(UpstreamUnavailable):
    """Аккаунт по адресу отсутствует (например, кривая для mint не создана)."""

    def __init__(self, address: str, kind: str = "account"):
        self.address = address
        self.kind = kind
        super().__init__(f"{kind} not found at {address}")
