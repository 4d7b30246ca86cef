"""
Unit tests for the LogManager class.

Tests message buffering, filtering, event subscriptions and file output.
"""
import os

import pytest

from chibiquest.core.data import ActionType, Side
from chibiquest.core.engine import CombatAction
from chibiquest.core.events import (
    ActionResolved,
    BattleFinished,
    LogMessage,
)
from chibiquest.game.managers import LogCategory, LogEntry, LogLevel, LogManager


@pytest.fixture
def log(event_manager):
    return LogManager(event_manager)


class TestBuffer:
    def test_log_and_get(self, log):
        log.system("booting")
        log.battle("swing", turn=2)

        texts = [m.text for m in log.get_messages()]
        assert texts == ["booting", "swing"]

    def test_count_returns_most_recent(self, log):
        for i in range(5):
            log.system(f"msg {i}")

        assert [m.text for m in log.get_messages(count=2)] == ["msg 3", "msg 4"]

    def test_buffer_is_bounded(self, event_manager):
        log = LogManager(event_manager, max_messages=3)
        for i in range(5):
            log.system(f"msg {i}")

        assert len(log.messages) == 3
        assert log.messages[0].text == "msg 2"

    def test_level_filter(self, log):
        log.debug("noise")
        log.warning("careful")

        assert [m.text for m in log.get_messages()] == ["careful"]

        log.set_log_level(LogLevel.DEBUG)
        assert [m.text for m in log.get_messages()] == ["noise", "careful"]

    def test_category_filters(self, log):
        log.system("sys")
        log.battle("btl")

        assert [m.text for m in log.get_messages(categories={LogCategory.BATTLE})] == ["btl"]

        log.disable_category(LogCategory.BATTLE)
        assert [m.text for m in log.get_messages()] == ["sys"]

        log.enable_category(LogCategory.BATTLE)
        assert len(log.get_messages()) == 2

    def test_clear(self, log):
        log.system("gone")
        log.clear()

        assert log.get_messages() == []


class TestLogEntryFormat:
    def test_category_and_turn(self):
        entry = LogEntry("Aki attacks Slime", LogCategory.BATTLE, turn=3)

        assert entry.format() == "[BTL] T3: Aki attacks Slime"

    def test_plain(self):
        entry = LogEntry("Ready", LogCategory.SYSTEM)

        assert entry.format(include_category=False) == "Ready"


class TestEventSubscriptions:
    def test_subscribes_to_log_action_and_outcome_events(self, log, event_manager):
        assert event_manager.get_statistics()["subscribers_count"] == 3

    def test_log_message_category_mapping(self, log, event_manager):
        event_manager.publish(LogMessage(turn=0, message="Level up", category="PROGRESSION",
                                         level=LogLevel.INFO, source="test"))
        event_manager.publish(LogMessage(turn=0, message="Odd", category="nonsense",
                                         level=LogLevel.INFO, source="test"))
        event_manager.process_events()

        messages = log.get_messages()
        assert [(m.text, m.category) for m in messages] == [
            ("Level up", LogCategory.PROGRESSION),
            ("Odd", LogCategory.SYSTEM),
        ]

    def test_action_resolved(self, log, event_manager):
        action = CombatAction(2, "aki", "Aki", ActionType.ATTACK, "slime", "Slime", damage=42)
        event_manager.publish(ActionResolved(turn=2, action=action))
        event_manager.process_events()

        entry = log.get_messages()[0]
        assert entry.text == "Aki attacks Slime for 42 damage"
        assert entry.category is LogCategory.BATTLE
        assert entry.turn == 2

    @pytest.mark.parametrize("winner,timed_out,text", [
        (Side.PLAYER, False, "Battle over: player side wins"),
        (Side.ENEMY, True, "Battle over: enemy side wins (turn limit reached)"),
    ])
    def test_battle_finished(self, log, event_manager, winner, timed_out, text):
        event_manager.publish(BattleFinished(turn=7, winner=winner, timed_out=timed_out))
        event_manager.process_events()

        assert log.get_messages()[0].text == text


class TestSaveLog:
    def test_writes_every_message(self, log, tmp_path):
        log.debug("hidden by level")
        log.battle("visible")

        path = log.save_log_to_file(str(tmp_path))

        content = open(path, encoding="utf-8").read()
        assert "Chibi Quest - Simulation Log" in content
        assert "hidden by level" in content
        assert "[BATTLE] [INFO] visible" in content
        assert log.get_messages()[-1].text == f"Log saved to {path}"
        assert os.listdir(tmp_path) == [os.path.basename(path)]

