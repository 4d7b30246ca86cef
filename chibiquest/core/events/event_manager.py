"""
Event bus for observing engine runs.

Engine components publish events onto an EventManager that the caller
injects; subscribers such as the LogManager consume them when the caller
drains the queue. The bus is single-threaded and deterministic: queued events
are delivered by priority, then in publish order.
"""

import itertools
from collections import defaultdict, deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, TYPE_CHECKING

from ..data.game_enums import LogLevel

from .events import LogMessage

if TYPE_CHECKING:
    from .events import GameEvent, EventType


class EventPriority(Enum):
    """Delivery priority. Lower values are delivered first."""
    CRITICAL = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3


@dataclass
class QueuedEvent:
    """An event waiting for delivery."""
    event: "GameEvent"
    sequence_id: int
    priority: EventPriority = EventPriority.NORMAL
    source: str = "unknown"

    def __lt__(self, other: "QueuedEvent") -> bool:
        if self.priority.value != other.priority.value:
            return self.priority.value < other.priority.value
        return self.sequence_id < other.sequence_id


EventSubscriber = Callable[["GameEvent"], None]


class EventManager:
    """Publisher-subscriber bus with a delivery queue.

    Subscriber exceptions are not caught; a failing subscriber aborts
    delivery and propagates to whoever drained the queue.
    """

    def __init__(self, history_size: int = 1000):
        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)
        self._universal_subscribers: list[EventSubscriber] = []
        self._queue: deque[QueuedEvent] = deque()
        self._history: deque[QueuedEvent] = deque(maxlen=history_size)
        self._sequence = itertools.count()
        self._events_published = 0
        self._events_processed = 0

    def subscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> None:
        """Deliver events of one type to ``subscriber``."""
        self._subscribers[event_type].append(subscriber)

    def subscribe_all(self, subscriber: EventSubscriber) -> None:
        """Deliver every event to ``subscriber``."""
        self._universal_subscribers.append(subscriber)

    def unsubscribe(self, event_type: "EventType", subscriber: EventSubscriber) -> bool:
        """Remove a typed subscription.

        Returns:
            True if the subscriber was registered for that type
        """
        subscribers = self._subscribers.get(event_type, [])
        if subscriber in subscribers:
            subscribers.remove(subscriber)
            return True
        return False

    def publish(
        self,
        event: "GameEvent",
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None,
    ) -> None:
        """Queue an event for the next ``process_events`` call."""
        self._queue.append(
            QueuedEvent(event=event, sequence_id=next(self._sequence), priority=priority, source=source or "unknown")
        )
        self._events_published += 1

    def process_events(self, max_events: Optional[int] = None) -> int:
        """Deliver queued events in priority order.

        Args:
            max_events: Stop after this many deliveries (None for all);
                undelivered events stay queued

        Returns:
            Number of events delivered
        """
        pending = sorted(self._queue)
        self._queue.clear()

        if max_events is not None:
            self._queue.extend(pending[max_events:])
            pending = pending[:max_events]

        for queued in pending:
            self._deliver(queued)
        return len(pending)

    def _deliver(self, queued: QueuedEvent) -> None:
        self._history.append(queued)
        self._events_processed += 1

        event = queued.event
        for subscriber in list(self._subscribers.get(event.event_type, [])):
            subscriber(event)
        for subscriber in list(self._universal_subscribers):
            subscriber(event)

    def clear_queue(self) -> int:
        """Drop all undelivered events, returning how many were dropped."""
        count = len(self._queue)
        self._queue.clear()
        return count

    def has_queued_events(self) -> bool:
        return bool(self._queue)

    def get_statistics(self) -> dict[str, Any]:
        return {
            'events_published': self._events_published,
            'events_processed': self._events_processed,
            'events_queued': len(self._queue),
            'subscribers_count': sum(len(subs) for subs in self._subscribers.values()),
            'universal_subscribers_count': len(self._universal_subscribers),
        }

    def get_recent_events(self, count: int = 10) -> list[dict[str, Any]]:
        """Summaries of the most recently delivered events."""
        recent = list(self._history)[-count:]
        return [
            {
                'event_type': queued.event.__class__.__name__,
                'turn': queued.event.turn,
                'priority': queued.priority.name,
                'source': queued.source,
            }
            for queued in recent
        ]


class EventEmitter:
    """Mixin for engine components that publish onto an optional bus.

    Components stay silent when constructed without an event manager.
    """

    source_name = "Engine"

    def __init__(self, event_manager: Optional[EventManager] = None):
        self.event_manager = event_manager

    def _publish(self, event: "GameEvent") -> None:
        if self.event_manager is not None:
            self.event_manager.publish(event, source=self.source_name)

    def _emit_log(self, message: str, turn: int = 0, category: str = "BATTLE", level: Optional[LogLevel] = None) -> None:
        """Publish a LogMessage event."""
        if self.event_manager is None:
            return

        self._publish(
            LogMessage(
                turn=turn,
                message=message,
                category=category,
                level=level or LogLevel.INFO,
                source=self.source_name,
            )
        )
