"""
Events — доменные события пула

Immutable Pydantic модели событий, которые движок отправляет в EventSink
после успешного завершения операции. Полная совместимость с JSON Schema
(lpdex/core/contracts/schema/<event>.json).

События — только наблюдаемость: ни одно поведение пула не зависит от
успешной доставки события.
"""

from typing import Any, Dict, Literal, Union

from pydantic import BaseModel, Field


# =============================================================================
# BASE EVENT
# =============================================================================


class PoolEvent(BaseModel):
    """Базовая модель события пула."""

    pool_address: str = Field(..., min_length=1, description="Адрес пула-источника")

    model_config = {"frozen": True}

    def to_contract(self) -> Dict[str, Any]:
        """Сериализация в JSON-совместимый dict контракта события."""
        return self.model_dump(mode="json")


# =============================================================================
# LIQUIDITY EVENTS
# =============================================================================


class LiquidityInitialized(PoolEvent):
    """
    Пул инициализирован.

    base_amount фиксирует начальный выпуск claim (claim_supply == base_amount).
    """

    event: Literal["LiquidityInitialized"] = "LiquidityInitialized"
    provider: str = Field(..., min_length=1, description="Инициатор пула")
    base_amount: int = Field(..., gt=0, description="Начальный base резерв")
    token_amount: int = Field(..., gt=0, description="Начальный token резерв")


class LiquidityAdded(PoolEvent):
    """Ликвидность добавлена в инициализированный пул."""

    event: Literal["LiquidityAdded"] = "LiquidityAdded"
    provider: str = Field(..., min_length=1, description="Депозитор")
    base_amount: int = Field(..., gt=0, description="Внесённый base asset")
    token_required: int = Field(..., ge=0, description="Списанный token")
    lp_minted: int = Field(..., ge=0, description="Выпущенные claim-токены")


class LiquidityRemoved(PoolEvent):
    """Ликвидность выведена из пула."""

    event: Literal["LiquidityRemoved"] = "LiquidityRemoved"
    provider: str = Field(..., min_length=1, description="Владелец claim")
    lp_amount: int = Field(..., gt=0, description="Сожжённые claim-токены")
    base_out: int = Field(..., ge=0, description="Выплаченный base asset")
    token_out: int = Field(..., ge=0, description="Выплаченный token")


class ClaimTransferred(PoolEvent):
    """Claim-токены переданы другому владельцу."""

    event: Literal["ClaimTransferred"] = "ClaimTransferred"
    sender: str = Field(..., min_length=1, description="Отправитель")
    recipient: str = Field(..., min_length=1, description="Получатель")
    amount: int = Field(..., gt=0, description="Количество claim-токенов")


AnyPoolEvent = Union[LiquidityInitialized, LiquidityAdded, LiquidityRemoved, ClaimTransferred]
