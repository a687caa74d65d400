"""
PoolState — Агрегат состояния пула

Единственный агрегат пула: резервы base/token и ClaimLedger.
Изменяется только LiquidityEngine, которому он принадлежит.

PoolSnapshot — immutable Pydantic снапшот агрегата. Используется для отката
операций, наблюдаемости и контракта pool_snapshot.json.

ИНВАРИАНТЫ (после каждой завершённой операции):
1. claim_supply == base_reserve
2. sum(claim_balances) == claim_supply
3. base_reserve == 0 <=> claim_supply == 0
4. Резервы и балансы claim неотрицательные
5. Инициализация — однократный переход, пока claim_supply > 0
"""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field

from lpdex.core.domain.claims import ClaimLedger
from lpdex.core.domain.errors import InvariantViolation
from lpdex.core.domain.units import Amount, validate_amount


# =============================================================================
# ENUMS
# =============================================================================


class PoolPhase(str, Enum):
    """
    Фаза жизненного цикла пула.

    UNINITIALIZED → ACTIVE только через init.
    ACTIVE → UNINITIALIZED только выводом всего claim_supply.
    """

    UNINITIALIZED = "UNINITIALIZED"
    ACTIVE = "ACTIVE"


# =============================================================================
# SNAPSHOT MODEL
# =============================================================================


class PoolSnapshot(BaseModel):
    """
    Снапшот состояния пула.

    Immutable модель (frozen=True). Allowances хранятся как
    owner -> spender -> amount для JSON-совместимости.
    """

    pool_address: str = Field(..., min_length=1, description="Адрес пула")
    token_ledger_address: str = Field(..., min_length=1, description="Адрес TokenLedger")
    phase: PoolPhase = Field(..., description="Фаза жизненного цикла")

    base_reserve: int = Field(..., ge=0, description="Резерв base asset")
    token_reserve: int = Field(..., ge=0, description="Резерв внешнего token")
    claim_supply: int = Field(..., ge=0, description="Общий выпуск claim-токенов")

    claim_balances: Dict[str, int] = Field(
        default_factory=dict, description="Ненулевые балансы claim по владельцам"
    )
    claim_allowances: Dict[str, Dict[str, int]] = Field(
        default_factory=dict, description="Allowances claim: owner -> spender -> amount"
    )

    model_config = {"frozen": True}


# =============================================================================
# POOL STATE AGGREGATE
# =============================================================================


class PoolState:
    """Изменяемый агрегат пула. Владелец — один экземпляр LiquidityEngine."""

    def __init__(self, pool_address: str, token_ledger_address: str):
        self.pool_address = pool_address
        self.token_ledger_address = token_ledger_address
        self.base_reserve: Amount = 0
        self.token_reserve: Amount = 0
        self.claims = ClaimLedger()

    @property
    def claim_supply(self) -> Amount:
        return self.claims.total_supply

    @property
    def phase(self) -> PoolPhase:
        if self.claim_supply > 0:
            return PoolPhase.ACTIVE
        return PoolPhase.UNINITIALIZED

    @property
    def is_initialized(self) -> bool:
        return self.phase == PoolPhase.ACTIVE

    # -------------------------------------------------------------------------
    # Резервы
    # -------------------------------------------------------------------------

    def credit_reserves(self, base_amount: Amount, token_amount: Amount) -> None:
        """Увеличение резервов (депозит)."""
        validate_amount("base_amount", base_amount)
        validate_amount("token_amount", token_amount)
        self.base_reserve += base_amount
        self.token_reserve += token_amount

    def debit_reserves(self, base_amount: Amount, token_amount: Amount) -> None:
        """
        Уменьшение резервов (вывод).

        Raises:
            InvariantViolation: Если резерв ушёл бы в минус
        """
        validate_amount("base_amount", base_amount)
        validate_amount("token_amount", token_amount)
        if base_amount > self.base_reserve or token_amount > self.token_reserve:
            raise InvariantViolation(
                f"Reserve debit ({base_amount}, {token_amount}) exceeds reserves "
                f"({self.base_reserve}, {self.token_reserve})"
            )
        self.base_reserve -= base_amount
        self.token_reserve -= token_amount

    # -------------------------------------------------------------------------
    # Снапшоты и откат
    # -------------------------------------------------------------------------

    def snapshot(self) -> PoolSnapshot:
        allowances: Dict[str, Dict[str, int]] = {}
        for (owner, spender), amount in self.claims.allowances().items():
            allowances.setdefault(owner, {})[spender] = amount

        return PoolSnapshot(
            pool_address=self.pool_address,
            token_ledger_address=self.token_ledger_address,
            phase=self.phase,
            base_reserve=self.base_reserve,
            token_reserve=self.token_reserve,
            claim_supply=self.claim_supply,
            claim_balances=self.claims.balances(),
            claim_allowances=allowances,
        )

    def restore(self, snapshot: PoolSnapshot) -> None:
        """Восстановление агрегата из снапшота (откат операции)."""
        self.base_reserve = snapshot.base_reserve
        self.token_reserve = snapshot.token_reserve
        self.claims.load(
            balances=snapshot.claim_balances,
            allowances={
                (owner, spender): amount
                for owner, spenders in snapshot.claim_allowances.items()
                for spender, amount in spenders.items()
            },
        )

    # -------------------------------------------------------------------------
    # Инварианты
    # -------------------------------------------------------------------------

    def check_invariants(self) -> None:
        """
        Проверка инвариантов агрегата.

        Raises:
            InvariantViolation: С указанием нарушенного инварианта
        """
        balances = self.claims.balances()

        if self.base_reserve < 0 or self.token_reserve < 0:
            raise InvariantViolation(
                "Negative reserve",
                details={"base_reserve": self.base_reserve, "token_reserve": self.token_reserve},
            )

        negative = {h: a for h, a in balances.items() if a < 0}
        if negative:
            raise InvariantViolation("Negative claim balance", details={"holders": negative})

        if sum(balances.values()) != self.claim_supply:
            raise InvariantViolation(
                "Claim balances do not sum to claim supply",
                details={"sum": sum(balances.values()), "claim_supply": self.claim_supply},
            )

        if self.claim_supply != self.base_reserve:
            raise InvariantViolation(
                "Claim supply diverged from base reserve",
                details={"claim_supply": self.claim_supply, "base_reserve": self.base_reserve},
            )

        if self.claim_supply == 0 and self.token_reserve != 0:
            raise InvariantViolation(
                "Uninitialized pool holds token reserve",
                details={"token_reserve": self.token_reserve},
            )

    def __repr__(self) -> str:
        return (
            f"PoolState(base_reserve={self.base_reserve}, token_reserve={self.token_reserve}, "
            f"claim_supply={self.claim_supply}, phase={self.phase.value})"
        )
