"""EventSink — получатели доменных событий пула.

Доставка событий не влияет на поведение пула: ошибка sink логируется
движком и не прерывает операцию.
"""

import logging
from typing import List, Protocol, Type, TypeVar, runtime_checkable

from lpdex.core.domain.events import PoolEvent

E = TypeVar("E", bound=PoolEvent)


@runtime_checkable
class EventSink(Protocol):
    def emit(self, event: PoolEvent) -> None: ...


class InMemoryEventSink:
    """Собирает события в список (тесты, симуляции)."""

    def __init__(self) -> None:
        self.events: List[PoolEvent] = []

    def emit(self, event: PoolEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: Type[E]) -> List[E]:
        return [e for e in self.events if isinstance(e, event_type)]

    def last(self) -> PoolEvent:
        if not self.events:
            raise IndexError("no events emitted")
        return self.events[-1]

    def clear(self) -> None:
        self.events.clear()


class LoggingEventSink:
    """Пишет каждое событие в лог как JSON контракта."""

    def __init__(self, level: int = logging.INFO, logger_name: str = __name__) -> None:
        self.level = level
        self._logger = logging.getLogger(logger_name)

    def emit(self, event: PoolEvent) -> None:
        self._logger.log(self.level, f"event {event.to_contract()}")
