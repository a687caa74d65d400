"""
Contract Validation Module

Модуль для валидации JSON контрактов пула: снапшотов и событий.
"""

from .validators import (
    ContractValidator,
    EventValidator,
    PoolSnapshotValidator,
    SchemaLoader,
    event_schema_name,
    validate_event,
    validate_pool_snapshot,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PoolSnapshotValidator",
    "EventValidator",
    # Functions
    "event_schema_name",
    "validate_pool_snapshot",
    "validate_event",
]
