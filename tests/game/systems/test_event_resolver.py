"""
Unit tests for EventResolver.

Tests requirement checks, choice availability, result application (stats,
storyness, traits, recruits), event selection and descriptions.
"""

from unittest.mock import Mock, patch

import pytest

from chibiquest.core.data import (
    Element,
    EventChoice,
    EventKind,
    EventRequirement,
    EventResult,
    Job,
    Position,
    RandomEvent,
    RequirementKind,
    Stat,
    StatChange,
    Trait,
)
from chibiquest.core.events import EventType
from chibiquest.core.exceptions import MissingDataError
from chibiquest.game.systems import EventResolver

TRAITS = {
    "brave": Trait("brave", "Brave", "Fearless."),
}


@pytest.fixture
def resolver(rng):
    return EventResolver(rng, trait_catalog=TRAITS)


def choice_event():
    return RandomEvent(
        id="fork",
        name="Fork in the Road",
        kind=EventKind.CHOICE,
        choices=(
            EventChoice("left", "Go left", EventResult("You went left.", storyness=5)),
            EventChoice(
                "mage_door",
                "Open the sealed door",
                EventResult("The door opens."),
                requirement=EventRequirement(RequirementKind.JOB, Job.MAGE),
            ),
            EventChoice(
                "legend",
                "Follow the legend",
                EventResult("A legend unfolds."),
                requirement=EventRequirement(RequirementKind.STORYNESS, 50),
            ),
        ),
    )


class TestRequirements:
    def test_none_always_met(self, sample_team):
        assert EventResolver.meets_requirement(None, sample_team)

    @pytest.mark.parametrize("requirement,expected", [
        (EventRequirement(RequirementKind.JOB, Job.MAGE), True),
        (EventRequirement(RequirementKind.JOB, Job.HEALER), False),
        (EventRequirement(RequirementKind.ELEMENT, Element.WIND), True),
        (EventRequirement(RequirementKind.ELEMENT, Element.DARK), False),
        (EventRequirement(RequirementKind.TRAIT, "brave"), False),
        (EventRequirement(RequirementKind.STORYNESS, 10), False),
        (EventRequirement(RequirementKind.STORYNESS, 0), True),
    ])
    def test_requirement_kinds(self, sample_team, requirement, expected):
        assert EventResolver.meets_requirement(requirement, sample_team) is expected

    def test_trait_on_any_member(self, sample_team):
        sample_team.characters[2].traits.append(TRAITS["brave"])

        assert EventResolver.meets_requirement(EventRequirement(RequirementKind.TRAIT, "brave"), sample_team)


class TestChoices:
    def test_unmet_choices_hidden(self, resolver, sample_team):
        ids = [c.id for c in resolver.available_choices(choice_event(), sample_team)]

        assert ids == ["left", "mage_door"]

    def test_encounters_have_no_choices(self, resolver, sample_team):
        event = RandomEvent("ambush", "Ambush", EventKind.ENCOUNTER, auto_result=EventResult("Ouch."))

        assert resolver.available_choices(event, sample_team) == []

    def test_resolve_choice(self, resolver, sample_team):
        outcome = resolver.resolve_choice(choice_event(), "left", sample_team)

        assert outcome.team.team_storyness == 5
        assert sample_team.team_storyness == 0

    def test_unavailable_choice(self, resolver, sample_team):
        with pytest.raises(MissingDataError):
            resolver.resolve_choice(choice_event(), "legend", sample_team)

    def test_encounter_without_result(self, resolver, sample_team):
        event = RandomEvent("void", "Void", EventKind.ENCOUNTER)

        with pytest.raises(MissingDataError):
            resolver.resolve_encounter(event, sample_team)

    def test_resolve_encounter(self, resolver, sample_team):
        event = RandomEvent(
            "spring", "Spring", EventKind.ENCOUNTER,
            auto_result=EventResult("Refreshing.", stat_changes=(StatChange(Stat.SPD, 5),)),
        )

        outcome = resolver.resolve_encounter(event, sample_team)

        assert outcome.team.find("aki").final_stats.spd == pytest.approx(115)


class TestStatChanges:
    def test_hp_gain_raises_max_and_current(self, resolver, character_factory, team_factory):
        team = team_factory([character_factory(card_id="a", hp=1000, current_hp=500)])

        outcome = resolver.apply_result(team, EventResult(stat_changes=(StatChange(Stat.HP, 100, "a"),)))

        member = outcome.team.find("a")
        assert member.final_stats.hp == pytest.approx(1100)
        assert member.current_hp == pytest.approx(600)
        assert member.stat_bonuses.hp == pytest.approx(100)

    def test_hp_loss_never_kills(self, resolver, character_factory, team_factory):
        team = team_factory([character_factory(card_id="a", hp=1000)])

        outcome = resolver.apply_result(team, EventResult(stat_changes=(StatChange(Stat.HP, -5000),)))

        member = outcome.team.find("a")
        assert member.final_stats.hp == 1
        assert member.current_hp == 1
        assert member.stat_bonuses.hp == pytest.approx(-999)

    def test_other_stats_clamped(self, resolver, character_factory, team_factory):
        team = team_factory([character_factory(card_id="a", defense=50, crit_rate=0.5)])

        outcome = resolver.apply_result(
            team,
            EventResult(stat_changes=(StatChange(Stat.DEF, -100), StatChange(Stat.CRIT_RATE, 2.0))),
        )

        member = outcome.team.find("a")
        assert member.final_stats.defense == 0
        assert member.final_stats.crit_rate == 1.0
        assert member.stat_bonuses.defense == pytest.approx(-50)
        assert member.stat_bonuses.crit_rate == pytest.approx(0.5)

    def test_team_wide_change(self, resolver, sample_team):
        outcome = resolver.apply_result(sample_team, EventResult(stat_changes=(StatChange(Stat.ATK, 10),)))

        assert all(c.final_stats.atk == pytest.approx(110) for c in outcome.team.characters)

    def test_unknown_target(self, resolver, sample_team):
        with pytest.raises(MissingDataError):
            resolver.apply_result(sample_team, EventResult(stat_changes=(StatChange(Stat.ATK, 1, "ghost"),)))


class TestStoryness:
    def test_split_across_members(self, resolver, sample_team):
        outcome = resolver.apply_result(sample_team, EventResult(storyness=30))

        assert outcome.team.team_storyness == 30
        assert [c.storyness for c in outcome.team.characters] == pytest.approx([10, 10, 10])

    def test_clamped_at_zero(self, resolver, sample_team):
        sample_team.team_storyness = 5

        outcome = resolver.apply_result(sample_team, EventResult(storyness=-30))

        assert outcome.team.team_storyness == 0
        assert all(c.storyness == 0 for c in outcome.team.characters)


class TestTraits:
    def test_trait_granted_once(self, resolver, character_factory, team_factory):
        team = team_factory([character_factory(card_id="a")])
        result = EventResult(trait_ids=("brave",))

        first = resolver.apply_result(team, result)
        second = resolver.apply_result(first.team, result)

        assert first.granted_traits == {"brave": "a"}
        assert second.granted_traits == {}
        assert [t.id for t in second.team.find("a").traits] == ["brave"]
        assert second.messages == ["A already has Brave"]

    def test_unknown_trait(self, resolver, sample_team):
        with pytest.raises(MissingDataError):
            resolver.apply_result(sample_team, EventResult(trait_ids=("kraken_tamer",)))


class TestRecruit:
    def test_recruit_joins(self, resolver, character_factory, team_factory, card_factory):
        team = team_factory([character_factory(card_id="a")])

        outcome = resolver.apply_result(
            team, EventResult(recruit_character_id="stray"), recruit_pool=[card_factory(card_id="stray")]
        )

        assert outcome.recruited_id == "stray"
        assert outcome.team.find("stray").position is Position.FRONT
        assert team.find("stray") is None

    def test_recruit_missing_from_pool(self, resolver, sample_team):
        with pytest.raises(MissingDataError):
            resolver.apply_result(sample_team, EventResult(recruit_character_id="stray"))

    def test_duplicate_recruit_skipped(self, resolver, sample_team, card_factory):
        outcome = resolver.apply_result(
            sample_team, EventResult(recruit_character_id="aki"), recruit_pool=[card_factory(card_id="aki")]
        )

        assert outcome.recruited_id is None
        assert len(outcome.team.characters) == 3
        assert outcome.messages == ["Aki is already in the party"]

    def test_full_team_skipped(self, resolver, character_factory, team_factory, card_factory):
        team = team_factory([character_factory(card_id=f"c{i}") for i in range(6)])

        outcome = resolver.apply_result(
            team, EventResult(recruit_character_id="stray"), recruit_pool=[card_factory(card_id="stray")]
        )

        assert outcome.recruited_id is None
        assert len(outcome.team.characters) == 6


class TestSelectEvent:
    def test_storyness_gate(self, resolver, sample_team):
        gated = RandomEvent("myth", "Myth", EventKind.CHOICE, require_storyness=20)

        assert resolver.select_event([gated], sample_team) is None

        sample_team.team_storyness = 20
        assert resolver.select_event([gated], sample_team) is gated

    def test_rarity_weights(self, resolver, sample_team):
        events = [
            RandomEvent(f"e{rarity}", "Event", EventKind.CHOICE, rarity=rarity)
            for rarity in (1, 2, 3)
        ]

        with patch("chibiquest.game.systems.event_resolver.weighted_choice") as weighted:
            weighted.return_value = events[0]
            resolver.select_event(events, sample_team)

        _, items, weights = weighted.call_args[0]
        assert items == events
        assert weights == pytest.approx([1.0, 0.5, 0.25])


class TestDescribeResult:
    def test_full_description(self, resolver):
        result = EventResult(
            "A fork in the road.",
            stat_changes=(StatChange(Stat.ATK, 5), StatChange(Stat.HP, -10)),
            storyness=10,
            trait_ids=("brave",),
        )

        assert resolver.describe_result(result) == (
            "A fork in the road.\n\n"
            "Stat changes: Attack +5, HP -10\n"
            "Storyness +10\n\n"
            "Traits gained: Brave"
        )

    def test_plain_description(self, resolver):
        assert resolver.describe_result(EventResult("Nothing happens.")) == "Nothing happens."


class TestEvents:
    def test_publishes_event_applied(self, resolver, sample_team, event_manager):
        listener = Mock()
        event_manager.subscribe(EventType.EVENT_APPLIED, listener)
        resolver.event_manager = event_manager

        resolver.apply_result(sample_team, EventResult("Calm."))
        event_manager.process_events()

        event = listener.call_args[0][0]
        assert event.team_id == sample_team.id
        assert event.description == "Calm."
