"""
Change notifications raised by the services after a successful mutation.

Subscribers are plain callables. They run synchronously, in registration order,
before the service call returns. Exceptions raised by a subscriber propagate to
the caller of the service method.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

ADDED = "Added"
UPDATED = "Updated"
DELETED = "Deleted"


@dataclass(frozen=True)
class CourseChangedEvent:
    course_id: uuid.UUID
    code: str
    title: str
    action: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class InstructorChangedEvent:
    instructor_id: uuid.UUID
    name: str
    action: str
    timestamp: datetime = field(default_factory=datetime.now)


E = TypeVar("E")


class EventHook(Generic[E]):
    """
    Minimal observer list:

        service.course_changed.subscribe(print)
    """

    def __init__(self) -> None:
        self._handlers: list[Callable[[E], None]] = []

    def subscribe(self, handler: Callable[[E], None]) -> Callable[[E], None]:
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: Callable[[E], None]) -> None:
        self._handlers.remove(handler)

    def __len__(self) -> int:
        return len(self._handlers)

    def emit(self, event: E) -> None:
        logger.debug("Raising %s to %d subscriber(s)", type(event).__name__, len(self._handlers))
        # copy: a handler may unsubscribe itself
        for handler in list(self._handlers):
            handler(event)
