"""
Log management for engine runs.

This module provides centralized logging with categorization, level
filtering and a bounded message buffer. The LogManager is a pure subscriber:
it listens to log and combat-action events on the EventManager and
never calls back into the engine.
"""
import os
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ...core.data.game_enums import LogLevel

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager
    from ...core.events.events import GameEvent


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()       # Initialization, config, file output
    BATTLE = auto()       # Combat actions and outcomes
    GENERATION = auto()   # Enemy rosters and adventure nodes
    PROGRESSION = auto()  # Experience, level-ups, rewards
    EVENT = auto()        # Random event results
    DEBUG = auto()
    WARNING = auto()
    ERROR = auto()


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.BATTLE: "BTL",
    LogCategory.GENERATION: "GEN",
    LogCategory.PROGRESSION: "PRG",
    LogCategory.EVENT: "EVT",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
}


@dataclass
class LogEntry:
    """A single buffered log line."""
    text: str
    category: LogCategory
    level: LogLevel = LogLevel.INFO
    turn: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        parts = []
        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%H:%M:%S')}]")
        if include_category:
            parts.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")
        if self.turn:
            parts.append(f"T{self.turn}:")
        parts.append(self.text)
        return " ".join(parts)


class LogManager:
    """Collects engine log output from the event bus."""

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO,
    ):
        """Initialize the log manager.

        Args:
            event_manager: Bus to subscribe to (required)
            max_messages: Maximum number of messages kept in the buffer
            default_level: Minimum level returned by ``get_messages``
        """
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.enabled_categories = set(LogCategory)
        self.event_manager = event_manager

        self._setup_event_subscriptions()

    def _setup_event_subscriptions(self) -> None:
        from ...core.events import EventType

        self.event_manager.subscribe(EventType.LOG_MESSAGE, self._handle_log_message_event)
        self.event_manager.subscribe(EventType.ACTION_RESOLVED, self._handle_action_resolved)
        self.event_manager.subscribe(EventType.BATTLE_FINISHED, self._handle_battle_finished)

    def _handle_log_message_event(self, event: "GameEvent") -> None:
        from ...core.events import LogMessage

        if isinstance(event, LogMessage):
            try:
                category = LogCategory[event.category.upper()]
            except KeyError:
                category = LogCategory.SYSTEM
            self.log(event.message, category, event.level, event.turn)

    def _handle_action_resolved(self, event: "GameEvent") -> None:
        from ...core.events import ActionResolved

        if isinstance(event, ActionResolved):
            self.log(event.action.describe(), LogCategory.BATTLE, turn=event.turn)

    def _handle_battle_finished(self, event: "GameEvent") -> None:
        from ...core.events import BattleFinished

        if isinstance(event, BattleFinished):
            outcome = "draw" if event.winner is None else f"{event.winner.value} side wins"
            if event.timed_out:
                outcome += " (turn limit reached)"
            self.log(f"Battle over: {outcome}", LogCategory.BATTLE, turn=event.turn)

    def log(
        self,
        text: str,
        category: LogCategory = LogCategory.SYSTEM,
        level: LogLevel = LogLevel.INFO,
        turn: int = 0,
    ) -> None:
        """Add a message to the buffer."""
        self.messages.append(LogEntry(text=text, category=category, level=level, turn=turn))

    # Convenience methods for common categories
    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def battle(self, text: str, turn: int = 0) -> None:
        self.log(text, LogCategory.BATTLE, turn=turn)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG, LogLevel.DEBUG)

    def warning(self, text: str) -> None:
        self.log(text, LogCategory.WARNING, LogLevel.WARNING)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR, LogLevel.ERROR)

    def get_messages(
        self,
        count: Optional[int] = None,
        categories: Optional[set[LogCategory]] = None,
    ) -> list[LogEntry]:
        """Get recent messages, filtered by category and level.

        Args:
            count: Maximum number of messages to return (None for all)
            categories: Categories to include (None for all enabled)

        Returns:
            The most recent matching messages, oldest first
        """
        wanted = categories if categories else self.enabled_categories
        filtered = [
            msg for msg in self.messages
            if msg.category in wanted
            and msg.category in self.enabled_categories
            and msg.level.value >= self.log_level.value
        ]
        if count is not None and count < len(filtered):
            return filtered[-count:]
        return filtered

    def clear(self) -> None:
        self.messages.clear()

    def enable_category(self, category: LogCategory) -> None:
        self.enabled_categories.add(category)

    def disable_category(self, category: LogCategory) -> None:
        self.enabled_categories.discard(category)

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def save_log_to_file(self, directory: str = "logs") -> Optional[str]:
        """Write every buffered message, ignoring filters, to a timestamped file.

        Returns:
            Path of the written file, or None if it could not be written
        """
        filename = f"log_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        filepath = os.path.join(directory, filename)

        try:
            os.makedirs(directory, exist_ok=True)
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("Chibi Quest - Simulation Log\n")
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("=" * 60 + "\n\n")

                if not self.messages:
                    f.write("No messages to save.\n")
                for msg in self.messages:
                    timestamp_str = msg.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
                    f.write(f"[{timestamp_str}] [{msg.category.name}] [{msg.level.name}] {msg.text}\n")
        except OSError as e:
            self.error(f"Failed to save log file: {e}")
            return None

        self.system(f"Log saved to {filepath}")
        return filepath
