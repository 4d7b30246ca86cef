"""
Shared fixtures for the Chibi Quest test suite.

Provides seeded randomness, a default balance config and small factories for
cards, combat characters and teams so each test builds exactly the records
it needs.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from chibiquest.core.data import (
    BaseStats,
    CharacterCard,
    CombatCharacter,
    DamageType,
    Element,
    Job,
    Position,
    Skill,
    Team,
    TargetType,
)
from chibiquest.core.engine import BalanceConfig, make_rng
from chibiquest.core.events import EventManager


def build_card(
    card_id="hero",
    element=Element.FIRE,
    job=Job.WARRIOR,
    hp=1000.0,
    atk=100.0,
    defense=50.0,
    res=50.0,
    spd=100.0,
    crit_rate=0.0,
    crit_dmg=1.5,
    normal_skill=None,
    ultimate_skill=None,
    leader_skill=None,
    affinities=None,
    growth_percent=0.0,
    level=1,
    name=None,
):
    return CharacterCard(
        id=card_id,
        name=name or card_id.capitalize(),
        rarity=3,
        element=element,
        job=job,
        base_stats=BaseStats(
            hp=hp, atk=atk, defense=defense, res=res, spd=spd, crit_rate=crit_rate, crit_dmg=crit_dmg
        ),
        normal_skill=normal_skill or Skill(f"{card_id}_normal", "Strike", 1.0),
        ultimate_skill=ultimate_skill or Skill(f"{card_id}_ultimate", "Finisher", 2.0),
        leader_skill=leader_skill,
        dungeon_affinities=affinities or {},
        level=level,
        growth_percent=growth_percent,
    )


def build_character(card=None, position=Position.FRONT, current_hp=None, **card_kwargs):
    """CombatCharacter whose final stats equal the card's base stats."""
    card = card or build_card(**card_kwargs)
    stats = card.base_stats
    return CombatCharacter(
        card=card,
        position=position,
        final_stats=stats,
        current_hp=stats.hp if current_hp is None else current_hp,
    )


def build_team(characters, leader_id=None, event_cards=(), team_id="team"):
    return Team(
        id=team_id,
        name="Test Team",
        characters=list(characters),
        leader_id=leader_id or characters[0].id,
        event_cards=list(event_cards),
    )


@pytest.fixture
def rng():
    """Seeded generator so randomized tests are reproducible."""
    return make_rng(12345)


@pytest.fixture
def config():
    return BalanceConfig()


@pytest.fixture
def event_manager():
    return EventManager()


@pytest.fixture
def card_factory():
    return build_card


@pytest.fixture
def character_factory():
    return build_character


@pytest.fixture
def team_factory():
    return build_team


@pytest.fixture
def sample_team():
    """Three-member fire/water/wind team led by the warrior."""
    return build_team([
        build_character(card_id="aki", element=Element.FIRE, job=Job.WARRIOR, spd=110),
        build_character(card_id="mizu", element=Element.WATER, job=Job.MAGE, spd=90,
                        normal_skill=Skill("mizu_bolt", "Bolt", 1.2, DamageType.MAGICAL)),
        build_character(card_id="kaze", element=Element.WIND, job=Job.ARCHER, spd=130, position=Position.BACK,
                        ultimate_skill=Skill("kaze_rain", "Arrow Rain", 1.5, target_type=TargetType.ALL)),
    ])
