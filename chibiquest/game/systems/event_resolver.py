"""
Random event resolution.

Choice events offer only the choices whose requirement the team meets;
encounter events apply a single result automatically. Applying a result can
change stats, storyness and traits, and may recruit a character.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from ...core.data import (
    CharacterCard,
    CombatCharacter,
    EventChoice,
    EventKind,
    EventRequirement,
    EventResult,
    MAX_TEAM_SIZE,
    Position,
    RandomEvent,
    RequirementKind,
    STAT_NAMES,
    Stat,
    StatChange,
    Team,
    Trait,
)
from ...core.engine.config import BalanceConfig
from ...core.engine.rng import random_choice, weighted_choice
from ...core.events import EventApplied, EventEmitter, EventManager
from ...core.exceptions import MissingDataError
from ..entities.character import create_combat_character
from ..entities.team import get_member
from ..entities.traits import default_trait_catalog, get_trait


@dataclass
class EventOutcome:
    """Result of applying an event to a team."""
    team: Team
    description: str
    messages: list[str] = field(default_factory=list)
    granted_traits: dict[str, str] = field(default_factory=dict)  # trait id -> character id
    recruited_id: Optional[str] = None


class EventResolver(EventEmitter):
    """Checks event requirements and applies event results."""

    source_name = "EventResolver"

    def __init__(
        self,
        rng: np.random.Generator,
        config: Optional[BalanceConfig] = None,
        event_manager: Optional[EventManager] = None,
        trait_catalog: Optional[dict[str, Trait]] = None,
    ):
        super().__init__(event_manager)
        self.rng = rng
        self.config = config or BalanceConfig()
        self.trait_catalog = trait_catalog if trait_catalog is not None else default_trait_catalog()

    @staticmethod
    def meets_requirement(requirement: Optional[EventRequirement], team: Team) -> bool:
        if requirement is None:
            return True

        kind = requirement.kind
        if kind is RequirementKind.TRAIT:
            return any(c.has_trait(str(requirement.value)) for c in team.characters)
        if kind is RequirementKind.JOB:
            return any(c.job is requirement.value for c in team.characters)
        if kind is RequirementKind.ELEMENT:
            return any(c.element is requirement.value for c in team.characters)
        if kind is RequirementKind.STORYNESS:
            return team.team_storyness >= float(requirement.value)
        raise ValueError(f"Unknown requirement kind: {kind}")

    def available_choices(self, event: RandomEvent, team: Team) -> list[EventChoice]:
        """Choices the team may pick; encounters have none."""
        if event.kind is EventKind.ENCOUNTER:
            return []
        return [choice for choice in event.choices if self.meets_requirement(choice.requirement, team)]

    def resolve_choice(
        self,
        event: RandomEvent,
        choice_id: str,
        team: Team,
        recruit_pool: Sequence[CharacterCard] = (),
    ) -> EventOutcome:
        """Apply the result of a picked choice.

        Raises:
            MissingDataError: If the choice does not exist or its
                requirement is not met
        """
        for choice in self.available_choices(event, team):
            if choice.id == choice_id:
                return self.apply_result(team, choice.result, recruit_pool)
        raise MissingDataError("available choice", choice_id)

    def resolve_encounter(
        self,
        event: RandomEvent,
        team: Team,
        recruit_pool: Sequence[CharacterCard] = (),
    ) -> EventOutcome:
        """Apply an encounter's automatic result."""
        if event.auto_result is None:
            raise MissingDataError("encounter result", event.id)
        return self.apply_result(team, event.auto_result, recruit_pool)

    def apply_result(
        self,
        team: Team,
        result: EventResult,
        recruit_pool: Sequence[CharacterCard] = (),
    ) -> EventOutcome:
        """Apply an event result to a copy of the team.

        Args:
            team: Team the event happens to; not modified
            result: Stat changes, storyness, traits and recruit to apply
            recruit_pool: Cards a recruit id is looked up in

        Returns:
            EventOutcome with the updated team and what happened

        Raises:
            MissingDataError: If a named character, trait or recruit is unknown
        """
        updated = team.copy()
        outcome = EventOutcome(team=updated, description=self.describe_result(result))

        for change in result.stat_changes:
            targets = updated.characters if change.character_id is None else [get_member(updated, change.character_id)]
            for character in targets:
                self._apply_stat_change(character, change)

        if result.storyness:
            self._apply_storyness(updated, result.storyness)

        for trait_id in result.trait_ids:
            trait = get_trait(trait_id, self.trait_catalog)
            member = random_choice(self.rng, updated.characters)
            if member.has_trait(trait_id):
                outcome.messages.append(f"{member.name} already has {trait.name}")
                continue
            member.traits.append(trait)
            outcome.granted_traits[trait_id] = member.id
            outcome.messages.append(f"{member.name} gained trait {trait.name}")

        if result.recruit_character_id is not None:
            self._recruit(updated, result.recruit_character_id, recruit_pool, outcome)

        for message in outcome.messages:
            self._emit_log(message, category="EVENT")
        self._publish(EventApplied(turn=0, team_id=updated.id, description=outcome.description))
        return outcome

    def select_event(self, events: Sequence[RandomEvent], team: Team) -> Optional[RandomEvent]:
        """Pick an event, favouring common ones.

        Events whose storyness requirement the team has not reached are
        excluded; each remaining event has weight 0.5^(rarity - 1).
        """
        eligible = [
            event for event in events
            if event.require_storyness is None or team.team_storyness >= event.require_storyness
        ]
        if not eligible:
            return None
        return weighted_choice(self.rng, eligible, [0.5 ** (event.rarity - 1) for event in eligible])

    def describe_result(self, result: EventResult) -> str:
        """Human-readable summary of what a result will do."""
        description = result.description

        if result.stat_changes:
            changes = ", ".join(f"{STAT_NAMES[c.stat]} {c.value:+g}" for c in result.stat_changes)
            description += f"\n\nStat changes: {changes}"
        if result.storyness:
            description += f"\nStoryness {result.storyness:+g}"
        if result.trait_ids:
            names = ", ".join(
                self.trait_catalog[t].name if t in self.trait_catalog else t for t in result.trait_ids
            )
            description += f"\n\nTraits gained: {names}"
        return description

    @staticmethod
    def _apply_stat_change(character: CombatCharacter, change: StatChange) -> None:
        old_value = character.final_stats.get(change.stat)

        if change.stat is Stat.HP:
            new_max = max(1.0, old_value + change.value)
            character.final_stats = character.final_stats.with_value(Stat.HP, new_max)
            character.current_hp = min(max(character.current_hp + change.value, 1.0), new_max)
        else:
            new_value = max(0.0, old_value + change.value)
            if change.stat is Stat.CRIT_RATE:
                new_value = min(new_value, 1.0)
            character.final_stats = character.final_stats.with_value(change.stat, new_value)

        applied = character.final_stats.get(change.stat) - old_value
        character.stat_bonuses = character.stat_bonuses.add({change.stat: applied})

    @staticmethod
    def _apply_storyness(team: Team, delta: float) -> None:
        team.team_storyness = max(0.0, team.team_storyness + delta)
        share = delta / len(team.characters)
        for character in team.characters:
            character.storyness = max(0.0, character.storyness + share)

    def _recruit(
        self,
        team: Team,
        character_id: str,
        recruit_pool: Sequence[CharacterCard],
        outcome: EventOutcome,
    ) -> None:
        card = next((c for c in recruit_pool if c.id == character_id), None)
        if card is None:
            raise MissingDataError("recruit", character_id)

        if team.find(character_id) is not None:
            outcome.messages.append(f"{card.name} is already in the party")
            return
        if len(team.characters) >= MAX_TEAM_SIZE:
            outcome.messages.append(f"No room in the party for {card.name}")
            return

        position = Position.FRONT if len(team.characters) < self.config.front_row_size else Position.BACK
        team.characters.append(create_combat_character(card, position))
        outcome.recruited_id = character_id
        outcome.messages.append(f"{card.name} joined the party")
