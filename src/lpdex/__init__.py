"""
lpdex — движок учёта ликвидности для пула из одной пары активов.

Пул держит два резерва (base asset и внешний token) и выпускает claim-токены,
пропорциональные доле владения пулом.
"""

from lpdex.engine import (
    CallContext,
    InMemoryEventSink,
    LiquidityEngine,
    LoggingEventSink,
    PoolConfig,
)

__all__ = [
    "CallContext",
    "InMemoryEventSink",
    "LiquidityEngine",
    "LoggingEventSink",
    "PoolConfig",
]
