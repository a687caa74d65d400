"""
Errors — иерархия ошибок движка ликвидности

Каждая ошибка несёт стабильный строковый code и описательное сообщение.
Любая ошибка из этой иерархии прерывает операцию целиком: движок
откатывает все внутренние изменения пула и пробрасывает ошибку вызывающему.

Движок не делает повторных попыток: повтор — ответственность вызывающего.
"""

from typing import Any, Dict, Optional


class LiquidityError(Exception):
    """Базовая ошибка операций пула."""

    code: str = "liquidity_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация для логов и ответов вызывающему."""
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


# =============================================================================
# LIFECYCLE
# =============================================================================


class AlreadyInitialized(LiquidityError):
    """Повторная инициализация пула с ненулевым выпуском claim."""

    code = "already_initialized"


class PoolNotInitialized(LiquidityError):
    """Операция требует инициализированного пула (claim_supply > 0)."""

    code = "pool_not_initialized"


# =============================================================================
# AMOUNT GUARDS
# =============================================================================


class DepositAmountZero(LiquidityError):
    """Депозит с нулевым base или token количеством."""

    code = "deposit_amount_zero"


class WithdrawAmountZero(LiquidityError):
    code = "withdraw_amount_zero"


class ClaimAmountZero(LiquidityError):
    code = "claim_amount_zero"


class InsufficientClaim(LiquidityError):
    """Баланс claim-токенов меньше запрошенного количества."""

    code = "insufficient_claim"


class InsufficientAllowance(LiquidityError):
    code = "insufficient_allowance"


class SlippageExceeded(LiquidityError):
    """
    token_required превысил token_amount_max.

    Защищает депозитора от сдвига соотношения резервов между
    формированием вызова и его исполнением.
    """

    code = "slippage_exceeded"


# =============================================================================
# COLLABORATORS / EXECUTION
# =============================================================================


class TransferFailed(LiquidityError):
    """Перевод через TokenLedger вернул False или бросил исключение."""

    code = "transfer_failed"


class ReentrantCall(LiquidityError):
    """Вложенный вход в изменяющую операцию во время исполнения другой."""

    code = "reentrant_call"


class InvariantViolation(LiquidityError):
    """
    Нарушен инвариант пула.

    Не должна возникать при корректной математике: означает дефект.
    Операция, после которой обнаружено нарушение, откатывается.
    """

    code = "invariant_violation"
