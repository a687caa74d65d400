"""Конфигурация пула и контекст вызова."""

from dataclasses import dataclass
from typing import Final

from lpdex.core.domain.units import DEFAULT_DECIMALS, Amount, validate_amount


DEFAULT_POOL_ADDRESS: Final[str] = "pool"
DEFAULT_CLAIM_NAME: Final[str] = "DEX LP Token"
DEFAULT_CLAIM_SYMBOL: Final[str] = "DEXLP"


@dataclass(frozen=True)
class PoolConfig:
    """Конфигурация пула.

    - pool_address: идентичность пула в ledger-ах (получатель депозитов)
    - claim_name / claim_symbol / claim_decimals: метаданные claim-токена
    - verify_invariants: проверять инварианты после каждой операции;
      нарушение откатывает операцию с InvariantViolation
    """
    pool_address: str = DEFAULT_POOL_ADDRESS
    claim_name: str = DEFAULT_CLAIM_NAME
    claim_symbol: str = DEFAULT_CLAIM_SYMBOL
    claim_decimals: int = DEFAULT_DECIMALS
    verify_invariants: bool = True

    def __post_init__(self):
        if not self.pool_address:
            raise ValueError("pool_address must be non-empty")
        if self.claim_decimals < 0:
            raise ValueError(f"claim_decimals cannot be negative: {self.claim_decimals}")


@dataclass(frozen=True)
class CallContext:
    """Контекст одного вызова движка.

    caller — идентичность вызывающего, value — приложенное количество base asset.
    """
    caller: str
    value: Amount = 0

    def __post_init__(self):
        if not self.caller:
            raise ValueError("caller must be non-empty")
        validate_amount("value", self.value)
