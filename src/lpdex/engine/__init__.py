"""Liquidity engine — операции пула, конфигурация и получатели событий."""

from .config import CallContext, PoolConfig
from .events import EventSink, InMemoryEventSink, LoggingEventSink
from .liquidity_engine import LiquidityEngine

__all__ = [
    "CallContext",
    "PoolConfig",
    "EventSink",
    "InMemoryEventSink",
    "LoggingEventSink",
    "LiquidityEngine",
]
