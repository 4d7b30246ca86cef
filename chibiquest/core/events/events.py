"""Engine events.

This module defines the events engine components publish on an injected
EventManager. Subscribers (the LogManager, a UI, a test spy) observe a run
without the engine knowing about them.

Event Design Principles:
- Events are immutable dataclasses
- Every event carries the battle turn it happened on (0 outside combat)
- Payloads use engine records and enums, not formatted strings
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ..data.game_enums import LogLevel, NodeType, Side

if TYPE_CHECKING:
    from ..data.data_structures import CombatCharacter, LevelUpReward
    from ..engine.actions import CombatAction


class EventType(Enum):
    """Types of engine events that subscribers can listen for."""
    # Combat
    COMBAT_STARTED = auto()
    TURN_STARTED = auto()
    ACTION_RESOLVED = auto()
    COMBATANT_DEFEATED = auto()
    TURN_RESOLVED = auto()
    BATTLE_FINISHED = auto()

    # Adventure and progression
    ENEMIES_GENERATED = auto()
    NODES_GENERATED = auto()
    LEVEL_UP = auto()
    REWARD_APPLIED = auto()
    EVENT_APPLIED = auto()

    # Logging
    LOG_MESSAGE = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all engine events."""
    turn: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class CombatStarted(GameEvent):
    player_ids: tuple[str, ...]
    enemy_ids: tuple[str, ...]
    max_turns: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBAT_STARTED)


@dataclass(frozen=True)
class TurnStarted(GameEvent):
    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_STARTED)


@dataclass(frozen=True)
class ActionResolved(GameEvent):
    action: "CombatAction"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ACTION_RESOLVED)


@dataclass(frozen=True)
class CombatantDefeated(GameEvent):
    """A combatant's HP reached zero."""
    character: "CombatCharacter"
    side: Side
    defeated_by: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBATANT_DEFEATED)


@dataclass(frozen=True)
class TurnResolved(GameEvent):
    actions_taken: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_RESOLVED)


@dataclass(frozen=True)
class BattleFinished(GameEvent):
    winner: Optional[Side]
    timed_out: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.BATTLE_FINISHED)


@dataclass(frozen=True)
class EnemiesGenerated(GameEvent):
    node_type: NodeType
    enemy_ids: tuple[str, ...]
    level: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ENEMIES_GENERATED)


@dataclass(frozen=True)
class NodesGenerated(GameEvent):
    dungeon_id: str
    node_types: tuple[NodeType, ...]

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.NODES_GENERATED)


@dataclass(frozen=True)
class LevelUp(GameEvent):
    team_id: str
    new_level: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LEVEL_UP)


@dataclass(frozen=True)
class RewardApplied(GameEvent):
    team_id: str
    reward: "LevelUpReward"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.REWARD_APPLIED)


@dataclass(frozen=True)
class EventApplied(GameEvent):
    """A random event result was applied to the team."""
    team_id: str
    description: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.EVENT_APPLIED)


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str
    level: LogLevel
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)

