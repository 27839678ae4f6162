"""Конфигурация клиента.

Явные структуры с документированными defaults, передаются в каждый вызов.
Глобального изменяемого состояния нет.
"""

from dataclasses import dataclass, field

from solders.pubkey import Pubkey

from gemsfun_sdk.core.domain.tiers import DEFAULT_SLIPPAGE_BPS
from gemsfun_sdk.core.errors import InvalidSlippage
from gemsfun_sdk.core.math.integer_safeguards import validate_bps


@dataclass(frozen=True)
class QuoteConfig:
    """Конфигурация Quote Orchestrator.

    default_slippage_bps применяется один раз на границе orchestrator,
    когда вызывающий не передал slippage явно.
    """

    default_slippage_bps: int = DEFAULT_SLIPPAGE_BPS  # 5%

    def __post_init__(self) -> None:
        validate_bps(self.default_slippage_bps, "default_slippage_bps", InvalidSlippage)

    def resolve_slippage(self, slippage_bps: int | None) -> int:
        """None → default; 0 остаётся 0 (котировка без допуска)."""
        if slippage_bps is None:
            return self.default_slippage_bps
        validate_bps(slippage_bps, "slippage_bps", InvalidSlippage)
        return slippage_bps


@dataclass(frozen=True)
class ClientConfig:
    """Конфигурация PumpClient."""

    rpc_url: str = "https://api.mainnet-beta.solana.com"
    commitment: str = "confirmed"  # processed | confirmed | finalized
    program_id: str = "FQCKTpkAviLqpUPEvbJ5epQLLPgVW5URSUw4CH7BXQTb"
    timeout_sec: float = 30.0
    quote: QuoteConfig = field(default_factory=QuoteConfig)

    def __post_init__(self) -> None:
        if self.commitment not in ("processed", "confirmed", "finalized"):
            raise ValueError(
                f"commitment must be processed, confirmed or finalized, got {self.commitment}"
            )
        if self.timeout_sec <= 0:
            raise ValueError(f"timeout_sec must be positive, got {self.timeout_sec}")

    @property
    def program_pubkey(self) -> Pubkey:
        return Pubkey.from_string(self.program_id)
