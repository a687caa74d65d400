"""
Domain models and value objects.

Contains fundamental domain entities like PoolState, ClaimLedger, events and errors.
"""

from lpdex.core.domain.claims import ClaimLedger
from lpdex.core.domain.errors import (
    AlreadyInitialized,
    ClaimAmountZero,
    DepositAmountZero,
    InsufficientAllowance,
    InsufficientClaim,
    InvariantViolation,
    LiquidityError,
    PoolNotInitialized,
    ReentrantCall,
    SlippageExceeded,
    TransferFailed,
    WithdrawAmountZero,
)
from lpdex.core.domain.events import (
    AnyPoolEvent,
    ClaimTransferred,
    LiquidityAdded,
    LiquidityInitialized,
    LiquidityRemoved,
    PoolEvent,
)
from lpdex.core.domain.pool_state import PoolPhase, PoolSnapshot, PoolState
from lpdex.core.domain.units import (
    DEFAULT_DECIMALS,
    MAX_AMOUNT,
    Amount,
    format_units,
    parse_units,
    validate_amount,
)

__all__ = [
    # Units module
    "DEFAULT_DECIMALS",
    "MAX_AMOUNT",
    "Amount",
    "format_units",
    "parse_units",
    "validate_amount",
    # Errors
    "LiquidityError",
    "AlreadyInitialized",
    "PoolNotInitialized",
    "DepositAmountZero",
    "WithdrawAmountZero",
    "ClaimAmountZero",
    "InsufficientClaim",
    "InsufficientAllowance",
    "SlippageExceeded",
    "TransferFailed",
    "ReentrantCall",
    "InvariantViolation",
    # Events
    "PoolEvent",
    "AnyPoolEvent",
    "LiquidityInitialized",
    "LiquidityAdded",
    "LiquidityRemoved",
    "ClaimTransferred",
    # Pool state
    "ClaimLedger",
    "PoolPhase",
    "PoolSnapshot",
    "PoolState",
]
