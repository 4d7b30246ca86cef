"""
Unit tests for the EventManager bus and the EventEmitter mixin.
"""

from unittest.mock import Mock

import pytest

from chibiquest.core.data import LogLevel
from chibiquest.core.events import (
    EventEmitter,
    EventPriority,
    EventType,
    LogMessage,
    TurnResolved,
    TurnStarted,
)
from chibiquest.game.managers import LogLevel as ManagerLogLevel


class TestEventManager:
    """Test subscription, queueing and delivery order."""

    def test_publish_queues_until_processed(self, event_manager):
        subscriber = Mock()
        event_manager.subscribe(EventType.TURN_STARTED, subscriber)

        event_manager.publish(TurnStarted(turn=1))

        subscriber.assert_not_called()
        assert event_manager.process_events() == 1
        subscriber.assert_called_once()

    def test_typed_subscriber_only_sees_its_type(self, event_manager):
        subscriber = Mock()
        event_manager.subscribe(EventType.TURN_RESOLVED, subscriber)

        event_manager.publish(TurnStarted(turn=1))
        event_manager.publish(TurnResolved(turn=1, actions_taken=3))
        event_manager.process_events()

        assert subscriber.call_count == 1
        assert subscriber.call_args[0][0].actions_taken == 3

    def test_priority_then_publish_order(self, event_manager):
        seen = []
        event_manager.subscribe_all(lambda event: seen.append(event.turn))

        event_manager.publish(TurnStarted(turn=1), priority=EventPriority.LOW)
        event_manager.publish(TurnStarted(turn=2))
        event_manager.publish(TurnStarted(turn=3))
        event_manager.publish(TurnStarted(turn=4), priority=EventPriority.HIGH)
        event_manager.process_events()

        assert seen == [4, 2, 3, 1]

    def test_max_events_leaves_rest_queued(self, event_manager):
        for turn in range(5):
            event_manager.publish(TurnStarted(turn=turn))

        assert event_manager.process_events(max_events=2) == 2
        assert event_manager.has_queued_events()
        assert event_manager.process_events() == 3

    def test_unsubscribe(self, event_manager):
        subscriber = Mock()
        event_manager.subscribe(EventType.TURN_STARTED, subscriber)

        assert event_manager.unsubscribe(EventType.TURN_STARTED, subscriber)
        assert not event_manager.unsubscribe(EventType.TURN_STARTED, subscriber)

    def test_subscriber_errors_propagate(self, event_manager):
        event_manager.subscribe(EventType.TURN_STARTED, Mock(side_effect=RuntimeError("boom")))
        event_manager.publish(TurnStarted(turn=1))

        with pytest.raises(RuntimeError):
            event_manager.process_events()

    def test_statistics(self, event_manager):
        event_manager.subscribe(EventType.TURN_STARTED, Mock())
        event_manager.publish(TurnStarted(turn=1))
        event_manager.process_events()

        stats = event_manager.get_statistics()

        assert stats['events_published'] == 1
        assert stats['events_processed'] == 1
        assert stats['subscribers_count'] == 1
        assert event_manager.get_recent_events()[0]['event_type'] == "TurnStarted"


class TestEventEmitter:
    def test_silent_without_event_manager(self):
        emitter = EventEmitter()

        emitter._emit_log("nothing happens")

    def test_emit_log_publishes_log_message(self, event_manager):
        received = []
        event_manager.subscribe(EventType.LOG_MESSAGE, received.append)
        emitter = EventEmitter(event_manager)

        emitter._emit_log("hello", turn=2, category="GENERATION")
        event_manager.process_events()

        assert len(received) == 1
        assert isinstance(received[0], LogMessage)
        assert received[0].message == "hello"
        assert received[0].category == "GENERATION"
        assert received[0].source == "Engine"
        assert received[0].level is LogLevel.INFO

    def test_log_level_shared_with_log_manager(self):
        assert ManagerLogLevel is LogLevel
