"""Typed records shared by every engine layer.

This module defines the immutable game records (cards, skills, modifiers,
events, rewards) and the two mutable combat-facing structures
(CombatCharacter and Team). Mutable structures expose an explicit ``copy()``
so engine operations can work on a private copy without touching their inputs.

Data Flow:
1. CharacterCard (parsed game data) -> CombatCharacter (adventure/combat)
2. Team + CombatCharacter -> StatResolver -> BaseStats (final stats)

Validation of tabular input belongs to the loader; only the structural
invariants that every engine operation relies on are checked here.
"""

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Union

import numpy as np
from numpy.typing import NDArray

from .game_enums import (
    Affinity,
    ConditionKind,
    DamageType,
    EffectType,
    Element,
    EventCardEffectType,
    EventKind,
    Job,
    MAX_ENERGY,
    MAX_SKILL_LEVEL,
    ModifierKind,
    NodeType,
    Position,
    RequirementKind,
    RewardType,
    SkillSlot,
    Stat,
    TargetType,
)


@dataclass(frozen=True)
class BaseStats:
    """Seven-field stat block.

    Used for card base stats, resolved final stats and persistent flat
    bonuses. Stats convert to and from numpy arrays in ``Stat.fields()``
    order so per-stat arithmetic can be done in one vector pass.
    """
    hp: float = 0.0
    atk: float = 0.0
    defense: float = 0.0
    res: float = 0.0
    spd: float = 0.0
    crit_rate: float = 0.0
    crit_dmg: float = 0.0

    def get(self, stat: Stat) -> float:
        """Read a single stat field."""
        if stat is Stat.ALL:
            raise ValueError("Stat.ALL is not a stat field")
        return getattr(self, stat.value)

    def with_value(self, stat: Stat, value: float) -> "BaseStats":
        """Return a copy with one field replaced."""
        if stat is Stat.ALL:
            raise ValueError("Stat.ALL is not a stat field")
        return replace(self, **{stat.value: float(value)})

    def add(self, deltas: Mapping[Stat, float]) -> "BaseStats":
        """Return a copy with each delta added to its field."""
        values = {stat.value: self.get(stat) + amount for stat, amount in deltas.items()}
        return replace(self, **values)

    def to_array(self) -> NDArray[np.float64]:
        """Stats as a float vector in ``Stat.fields()`` order."""
        return np.array([self.get(stat) for stat in Stat.fields()], dtype=np.float64)

    @classmethod
    def from_array(cls, values: NDArray[np.float64]) -> "BaseStats":
        """Build stats from a vector produced by ``to_array``."""
        return cls(**{stat.value: float(value) for stat, value in zip(Stat.fields(), values)})

    def as_dict(self) -> dict[Stat, float]:
        return {stat: self.get(stat) for stat in Stat.fields()}


@dataclass(frozen=True)
class ModifierCondition:
    """Structured predicate gating a modifier on element or job."""
    kind: ConditionKind
    value: Union[Element, Job]

    def matches(self, element: Element, job: Job) -> bool:
        if self.kind is ConditionKind.ELEMENT:
            return self.value is element
        if self.kind is ConditionKind.JOB:
            return self.value is job
        raise ValueError(f"Unknown condition kind: {self.kind}")


@dataclass(frozen=True)
class StatModifier:
    """A percentage or flat change to one stat (or every stat).

    Percentage values are fractions: 0.1 means +10%.
    """
    stat: Stat
    kind: ModifierKind
    value: float
    condition: Optional[ModifierCondition] = None

    def applies_to(self, element: Element, job: Job) -> bool:
        return self.condition is None or self.condition.matches(element, job)

    def targets(self) -> tuple[Stat, ...]:
        """Concrete stat fields this modifier touches."""
        return Stat.fields() if self.stat is Stat.ALL else (self.stat,)


@dataclass(frozen=True)
class Skill:
    """An attack skill. Multiplier scales with each level-up."""
    id: str
    name: str
    multiplier: float
    damage_type: DamageType = DamageType.PHYSICAL
    energy_cost: int = 0
    level: int = 1
    max_level: int = MAX_SKILL_LEVEL
    target_type: TargetType = TargetType.SINGLE
    description: str = ""

    def __post_init__(self):
        if self.max_level > MAX_SKILL_LEVEL:
            raise ValueError(f"Skill '{self.id}' max level {self.max_level} exceeds {MAX_SKILL_LEVEL}")
        if not 1 <= self.level <= self.max_level:
            raise ValueError(f"Skill '{self.id}' level {self.level} outside 1..{self.max_level}")

    @property
    def can_level_up(self) -> bool:
        return self.level < self.max_level


@dataclass(frozen=True)
class LeaderSkill:
    """Named set of modifiers the team leader grants the whole roster."""
    id: str
    name: str
    effects: tuple[StatModifier, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class Trait:
    """Permanent modifier set picked up during an adventure."""
    id: str
    name: str
    description: str = ""
    stat_modifiers: tuple[StatModifier, ...] = ()


@dataclass(frozen=True)
class ActiveEffect:
    """Timed modifier set; expires when remaining_turns reaches zero."""
    id: str
    name: str
    effect_type: EffectType
    stat_modifiers: tuple[StatModifier, ...] = ()
    remaining_turns: int = 1

    def tick(self) -> Optional["ActiveEffect"]:
        """Count down one turn, returning None once expired."""
        remaining = self.remaining_turns - 1
        if remaining <= 0:
            return None
        return replace(self, remaining_turns=remaining)


@dataclass(frozen=True)
class EventCardEffect:
    effect_type: EventCardEffectType
    modifier: Optional[StatModifier] = None
    value: float = 0.0
    description: str = ""


@dataclass(frozen=True)
class EventCard:
    """Carried card whose stat_boost effects feed stat resolution."""
    id: str
    name: str
    rarity: int = 1
    effects: tuple[EventCardEffect, ...] = ()
    description: str = ""

    def stat_modifiers(self) -> tuple[StatModifier, ...]:
        return tuple(
            effect.modifier
            for effect in self.effects
            if effect.effect_type is EventCardEffectType.STAT_BOOST and effect.modifier is not None
        )


@dataclass(frozen=True)
class CharacterCard:
    """Character definition as delivered by the data loader."""
    id: str
    name: str
    rarity: int
    element: Element
    job: Job
    base_stats: BaseStats
    normal_skill: Skill
    ultimate_skill: Skill
    leader_skill: Optional[LeaderSkill] = None
    dungeon_affinities: Mapping[str, Affinity] = field(default_factory=dict)
    level: int = 1
    exp: int = 0
    growth_percent: float = 0.0

    def skill(self, slot: SkillSlot) -> Skill:
        return self.normal_skill if slot is SkillSlot.NORMAL else self.ultimate_skill

    def with_skill(self, slot: SkillSlot, skill: Skill) -> "CharacterCard":
        if slot is SkillSlot.NORMAL:
            return replace(self, normal_skill=skill)
        return replace(self, ultimate_skill=skill)


@dataclass
class CombatCharacter:
    """A character card bound to an adventure or battle.

    Invariants kept by every engine operation:
    ``0 <= current_hp <= final_stats.hp`` and
    ``0 <= current_energy <= max_energy``.

    ``stat_bonuses`` holds flat stat gains from rewards and events so that a
    fresh stat resolution reproduces them.
    """
    card: CharacterCard
    position: Position
    final_stats: BaseStats
    current_hp: float
    current_energy: int = 0
    max_energy: int = MAX_ENERGY
    active_effects: list[ActiveEffect] = field(default_factory=list)
    traits: list[Trait] = field(default_factory=list)
    storyness: float = 0.0
    stat_bonuses: BaseStats = field(default_factory=BaseStats)

    @property
    def id(self) -> str:
        return self.card.id

    @property
    def name(self) -> str:
        return self.card.name

    @property
    def element(self) -> Element:
        return self.card.element

    @property
    def job(self) -> Job:
        return self.card.job

    @property
    def level(self) -> int:
        return self.card.level

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    @property
    def ultimate_ready(self) -> bool:
        return self.current_energy >= self.max_energy

    def has_trait(self, trait_id: str) -> bool:
        return any(trait.id == trait_id for trait in self.traits)

    def set_hp(self, value: float) -> None:
        """Set current HP, clamped to [0, final_stats.hp]."""
        self.current_hp = min(max(value, 0), self.final_stats.hp)

    def gain_energy(self, amount: int) -> None:
        """Add energy, clamped to [0, max_energy]."""
        self.current_energy = min(max(self.current_energy + amount, 0), self.max_energy)

    def copy(self) -> "CombatCharacter":
        """Independent copy; nested records are immutable and shared."""
        return CombatCharacter(
            card=self.card,
            position=self.position,
            final_stats=self.final_stats,
            current_hp=self.current_hp,
            current_energy=self.current_energy,
            max_energy=self.max_energy,
            active_effects=list(self.active_effects),
            traits=list(self.traits),
            storyness=self.storyness,
            stat_bonuses=self.stat_bonuses,
        )


@dataclass
class Team:
    """Player roster plus carried event cards and team progression."""
    id: str
    name: str
    characters: list[CombatCharacter]
    leader_id: str
    event_cards: list[EventCard] = field(default_factory=list)
    team_level: int = 1
    team_exp: int = 0
    team_storyness: float = 0.0

    def member_ids(self) -> list[str]:
        return [character.id for character in self.characters]

    def find(self, character_id: str) -> Optional[CombatCharacter]:
        for character in self.characters:
            if character.id == character_id:
                return character
        return None

    def copy(self) -> "Team":
        return Team(
            id=self.id,
            name=self.name,
            characters=[character.copy() for character in self.characters],
            leader_id=self.leader_id,
            event_cards=list(self.event_cards),
            team_level=self.team_level,
            team_exp=self.team_exp,
            team_storyness=self.team_storyness,
        )


@dataclass(frozen=True)
class Dungeon:
    id: str
    name: str
    num_nodes: int
    difficulty: int = 1
    available_recruits: tuple[str, ...] = ()
    enemy_elements: tuple[Element, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class AdventureNode:
    id: str
    node_type: NodeType


@dataclass(frozen=True)
class EventRequirement:
    """Gate on an event choice.

    ``value`` is a trait id, a Job, an Element, or a minimum team storyness.
    """
    kind: RequirementKind
    value: Union[str, Job, Element, float]


@dataclass(frozen=True)
class StatChange:
    """Additive stat delta; applies to the whole roster when character_id is None."""
    stat: Stat
    value: float
    character_id: Optional[str] = None


@dataclass(frozen=True)
class EventResult:
    description: str = ""
    stat_changes: tuple[StatChange, ...] = ()
    storyness: float = 0.0
    trait_ids: tuple[str, ...] = ()
    recruit_character_id: Optional[str] = None


@dataclass(frozen=True)
class EventChoice:
    id: str
    text: str
    result: EventResult
    requirement: Optional[EventRequirement] = None


@dataclass(frozen=True)
class RandomEvent:
    id: str
    name: str
    kind: EventKind
    choices: tuple[EventChoice, ...] = ()
    auto_result: Optional[EventResult] = None
    rarity: int = 1
    require_storyness: Optional[float] = None
    description: str = ""


@dataclass(frozen=True)
class RecruitReward:
    reward_id: str
    card: CharacterCard

    @property
    def reward_type(self) -> RewardType:
        return RewardType.RECRUIT


@dataclass(frozen=True)
class SkillUpgradeReward:
    reward_id: str
    character_id: str
    skill_slot: SkillSlot
    new_level: int

    @property
    def reward_type(self) -> RewardType:
        return RewardType.SKILL_UPGRADE


@dataclass(frozen=True)
class StatBoostReward:
    reward_id: str
    character_id: str
    stats: Mapping[Stat, float] = field(default_factory=dict)

    @property
    def reward_type(self) -> RewardType:
        return RewardType.STAT_BOOST


LevelUpReward = Union[RecruitReward, SkillUpgradeReward, StatBoostReward]
