"""Centralized game enums and constants.

This module contains all core enums used across the engine together with the
structural limits that define a valid team and character, providing a single
source of truth for both.
"""

from enum import Enum


class Element(Enum):
    """Elemental affinity of a character or enemy."""
    FIRE = "fire"
    WATER = "water"
    WIND = "wind"
    LIGHT = "light"
    DARK = "dark"


class Job(Enum):
    """Character jobs (classes)."""
    WARRIOR = "warrior"
    ARCHER = "archer"
    MAGE = "mage"
    TANK = "tank"
    HEALER = "healer"
    ASSASSIN = "assassin"


class Affinity(Enum):
    """Per-dungeon affinity tier."""
    S = "S"
    A = "A"
    C = "C"


class Position(Enum):
    """Formation row."""
    FRONT = "front"
    BACK = "back"


class DamageType(Enum):
    """Damage types; selects which defensive stat applies."""
    PHYSICAL = "physical"
    MAGICAL = "magical"


class TargetType(Enum):
    """How a skill picks its targets."""
    SINGLE = "single"
    ALL = "all"
    RANDOM = "random"


class SkillSlot(Enum):
    """The two skill slots every character carries."""
    NORMAL = "normal"
    ULTIMATE = "ultimate"


class Stat(Enum):
    """Stat fields. Values are the attribute names on BaseStats."""
    HP = "hp"
    ATK = "atk"
    DEF = "defense"
    RES = "res"
    SPD = "spd"
    CRIT_RATE = "crit_rate"
    CRIT_DMG = "crit_dmg"
    ALL = "all"  # Modifier target only, never a BaseStats field

    @classmethod
    def fields(cls) -> tuple["Stat", ...]:
        """All concrete stat fields in BaseStats order."""
        return tuple(stat for stat in cls if stat is not cls.ALL)


class ModifierKind(Enum):
    """Whether a modifier value is a fraction of the stat or a flat amount."""
    PERCENT = "percent"
    FIXED = "fixed"


class ConditionKind(Enum):
    """What a modifier condition is checked against."""
    ELEMENT = "element"
    JOB = "job"


class RequirementKind(Enum):
    """Requirement types for event choices."""
    TRAIT = "trait"
    JOB = "job"
    ELEMENT = "element"
    STORYNESS = "storyness"


class Side(Enum):
    """Combat sides."""
    PLAYER = "player"
    ENEMY = "enemy"

    @property
    def opponent(self) -> "Side":
        return Side.ENEMY if self is Side.PLAYER else Side.PLAYER


class ActionType(Enum):
    """Combat log entry types."""
    ATTACK = "attack"
    SKILL = "skill"
    ULTIMATE = "ultimate"
    DEAD = "dead"


class NodeType(Enum):
    """Adventure node types."""
    COMBAT = "combat"
    BOSS = "boss"
    EVENT = "event"
    REST = "rest"


class EventKind(Enum):
    """Random event flavours."""
    CHOICE = "choice"
    ENCOUNTER = "encounter"


class EventCardEffectType(Enum):
    """Effects an event card can carry."""
    STAT_BOOST = "stat_boost"


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    SKILL_BOOST = "skill_boost"
    RECRUITMENT_BOOST = "recruitment_boost"
    EVENT_RATE = "event_rate"


class EffectType(Enum):
    """Timed effect polarity."""
    BUFF = "buff"
    DEBUFF = "debuff"


class RewardType(Enum):
    """Level-up reward variants."""
    RECRUIT = "recruit"
    SKILL_UPGRADE = "skill_upgrade"
    STAT_BOOST = "stat_boost"


# Structural limits. These are invariants, not balance knobs.
MIN_TEAM_SIZE = 1
MAX_TEAM_SIZE = 6
MAX_EVENT_CARDS = 6
MAX_SKILL_LEVEL = 3
MAX_ENERGY = 100
MIN_RARITY = 1
MAX_RARITY = 5


ELEMENT_NAMES = {
    Element.FIRE: "Fire",
    Element.WATER: "Water",
    Element.WIND: "Wind",
    Element.LIGHT: "Light",
    Element.DARK: "Dark",
}

JOB_NAMES = {
    Job.WARRIOR: "Warrior",
    Job.ARCHER: "Archer",
    Job.MAGE: "Mage",
    Job.TANK: "Tank",
    Job.HEALER: "Healer",
    Job.ASSASSIN: "Assassin",
}

STAT_NAMES = {
    Stat.HP: "HP",
    Stat.ATK: "Attack",
    Stat.DEF: "Defense",
    Stat.RES: "Resistance",
    Stat.SPD: "Speed",
    Stat.CRIT_RATE: "Crit Rate",
    Stat.CRIT_DMG: "Crit Damage",
    Stat.ALL: "All Stats",
}

NODE_TYPE_NAMES = {
    NodeType.COMBAT: "Combat",
    NodeType.BOSS: "Boss",
    NodeType.EVENT: "Event",
    NodeType.REST: "Rest",
}
