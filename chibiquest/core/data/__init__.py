"""Core data structures and definitions.

This package contains fundamental data types and game definitions:
- data_structures.py: Typed records for cards, skills, modifiers, teams and events
- game_enums.py: Centralized enums, structural limits and display names
"""

from .data_structures import (
    BaseStats,
    ModifierCondition,
    StatModifier,
    Skill,
    LeaderSkill,
    Trait,
    ActiveEffect,
    EventCardEffect,
    EventCard,
    CharacterCard,
    CombatCharacter,
    Team,
    Dungeon,
    AdventureNode,
    EventRequirement,
    StatChange,
    EventResult,
    EventChoice,
    RandomEvent,
    RecruitReward,
    SkillUpgradeReward,
    StatBoostReward,
    LevelUpReward,
)
from .game_enums import (
    Element,
    Job,
    Affinity,
    Position,
    DamageType,
    TargetType,
    SkillSlot,
    Stat,
    ModifierKind,
    ConditionKind,
    RequirementKind,
    Side,
    ActionType,
    NodeType,
    EventKind,
    EventCardEffectType,
    EffectType,
    RewardType,
    LogLevel,
    MIN_TEAM_SIZE,
    MAX_TEAM_SIZE,
    MAX_EVENT_CARDS,
    MAX_SKILL_LEVEL,
    MAX_ENERGY,
    ELEMENT_NAMES,
    JOB_NAMES,
    STAT_NAMES,
    NODE_TYPE_NAMES,
)

__all__ = [
    "BaseStats",
    "ModifierCondition",
    "StatModifier",
    "Skill",
    "LeaderSkill",
    "Trait",
    "ActiveEffect",
    "EventCardEffect",
    "EventCard",
    "CharacterCard",
    "CombatCharacter",
    "Team",
    "Dungeon",
    "AdventureNode",
    "EventRequirement",
    "StatChange",
    "EventResult",
    "EventChoice",
    "RandomEvent",
    "RecruitReward",
    "SkillUpgradeReward",
    "StatBoostReward",
    "LevelUpReward",
    "Element",
    "Job",
    "Affinity",
    "Position",
    "DamageType",
    "TargetType",
    "SkillSlot",
    "Stat",
    "ModifierKind",
    "ConditionKind",
    "RequirementKind",
    "Side",
    "ActionType",
    "NodeType",
    "EventKind",
    "EventCardEffectType",
    "EffectType",
    "RewardType",
    "LogLevel",
    "MIN_TEAM_SIZE",
    "MAX_TEAM_SIZE",
    "MAX_EVENT_CARDS",
    "MAX_SKILL_LEVEL",
    "MAX_ENERGY",
    "ELEMENT_NAMES",
    "JOB_NAMES",
    "STAT_NAMES",
    "NODE_TYPE_NAMES",
]
