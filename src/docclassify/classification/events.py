"""Classification lifecycle events, a per-engine event bus, and an event log.

Delivery is synchronous, in registration order, to every listener registered
when the event is emitted. A listener that raises is recorded as a
ListenerFailure and never interrupts delivery or classification.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Annotated, Any, Literal, TypeVar

from pydantic import BaseModel, Field

from docclassify.config.defaults import DEFAULT_MAX_LISTENER_FAILURES
from docclassify.errors.exceptions import ListenerFailure
from docclassify.types import AmbiguityLevel

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(UTC)


class ClassificationEvent(BaseModel):
    """Base payload shared by all lifecycle events."""

    model_config = {"frozen": True}

    timestamp: datetime = Field(default_factory=_now)
    document_id: str


class StartedEvent(ClassificationEvent):
    event_type: Literal["started"] = "started"


class CandidateScoredEvent(ClassificationEvent):
    event_type: Literal["candidate_scored"] = "candidate_scored"
    type_id: str
    composite_score: float


class RankedEvent(ClassificationEvent):
    event_type: Literal["ranked"] = "ranked"
    candidate_count: int
    top_type_id: str | None = None
    ranking_applied: bool = False


class CompletedEvent(ClassificationEvent):
    event_type: Literal["completed"] = "completed"
    result_id: str
    detected_type_id: str | None = None
    confidence_score: float
    ambiguity_level: AmbiguityLevel


class AmbiguousEvent(ClassificationEvent):
    event_type: Literal["ambiguous"] = "ambiguous"
    result_id: str
    ambiguity_level: AmbiguityLevel
    top_type_ids: list[str] = Field(default_factory=list)


class ErrorEvent(ClassificationEvent):
    event_type: Literal["error"] = "error"
    error_type: str
    message: str = ""


AnyEvent = Annotated[
    StartedEvent
    | CandidateScoredEvent
    | RankedEvent
    | CompletedEvent
    | AmbiguousEvent
    | ErrorEvent,
    Field(discriminator="event_type"),
]

E = TypeVar("E", bound=ClassificationEvent)
Listener = Callable[[Any], None]


class EventBus:
    """Listener registry owned by one engine.

    Only the most recent ``max_failures`` listener failures are kept;
    ``failure_count`` counts every one.
    """

    def __init__(self, max_failures: int = DEFAULT_MAX_LISTENER_FAILURES) -> None:
        if max_failures < 1:
            raise ValueError(f"max_failures must be >= 1, got {max_failures}")
        self._listeners: list[tuple[type[ClassificationEvent], Listener]] = []
        self._failures: deque[ListenerFailure] = deque(maxlen=max_failures)
        self._failure_count = 0

    def subscribe(self, event_cls: type[E], listener: Callable[[E], None]) -> None:
        self._listeners.append((event_cls, listener))

    def subscribe_all(self, listener: Callable[[ClassificationEvent], None]) -> None:
        self._listeners.append((ClassificationEvent, listener))

    def unsubscribe(
        self,
        listener: Listener,
        event_cls: type[ClassificationEvent] | None = None,
    ) -> int:
        """Remove a listener (optionally for one event class). Returns count removed."""
        before = len(self._listeners)
        self._listeners = [
            (cls, fn)
            for cls, fn in self._listeners
            if not (fn == listener and (event_cls is None or cls is event_cls))
        ]
        return before - len(self._listeners)

    def emit(self, event: ClassificationEvent) -> None:
        for event_cls, listener in list(self._listeners):
            if not isinstance(event, event_cls):
                continue
            try:
                listener(event)
            except Exception as e:
                failure = ListenerFailure(
                    f"Listener {_listener_name(listener)} failed on {_event_type(event)}: {e}",
                    listener=_listener_name(listener),
                    event_type=_event_type(event),
                    original=e,
                )
                logger.warning(failure.message)
                self._failures.append(failure)
                self._failure_count += 1

    @property
    def failures(self) -> list[ListenerFailure]:
        return list(self._failures)

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def __len__(self) -> int:
        return len(self._listeners)


class EventLog:
    """Append-only, queryable record of emitted events. Usable as a listener."""

    def __init__(self) -> None:
        self._events: list[ClassificationEvent] = []

    def __call__(self, event: ClassificationEvent) -> None:
        self.append(event)

    def append(self, event: ClassificationEvent) -> None:
        self._events.append(event)

    @property
    def events(self) -> list[ClassificationEvent]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def event_types(self) -> list[str]:
        return [_event_type(e) for e in self._events]

    def query_by_type(self, event_type: str | type[ClassificationEvent]) -> list[ClassificationEvent]:
        if isinstance(event_type, str):
            return [e for e in self._events if _event_type(e) == event_type]
        return [e for e in self._events if isinstance(e, event_type)]

    def query_by_document(self, document_id: str) -> list[ClassificationEvent]:
        return [e for e in self._events if e.document_id == document_id]


def _event_type(event: ClassificationEvent) -> str:
    return getattr(event, "event_type", type(event).__name__)


def _listener_name(listener: Listener) -> str:
    return getattr(listener, "__qualname__", None) or type(listener).__name__
