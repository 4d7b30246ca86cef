"""Sample game records for the demo adventure.

In the full game these arrive from the data loader; here they are written
out by hand so the demo runs without any data files.
"""

from chibiquest.core.data import (
    Affinity,
    BaseStats,
    CharacterCard,
    ConditionKind,
    DamageType,
    Dungeon,
    Element,
    EventCard,
    EventCardEffect,
    EventCardEffectType,
    EventChoice,
    EventKind,
    EventRequirement,
    EventResult,
    Job,
    LeaderSkill,
    ModifierCondition,
    ModifierKind,
    RandomEvent,
    RequirementKind,
    Skill,
    Stat,
    StatChange,
    StatModifier,
    TargetType,
)


def _card(card_id, name, rarity, element, job, stats, normal, ultimate, leader=None, affinities=None):
    return CharacterCard(
        id=card_id,
        name=name,
        rarity=rarity,
        element=element,
        job=job,
        base_stats=stats,
        normal_skill=normal,
        ultimate_skill=ultimate,
        leader_skill=leader,
        dungeon_affinities=affinities or {},
    )


CHARACTERS = [
    _card(
        "ember", "Ember", 5, Element.FIRE, Job.WARRIOR,
        BaseStats(hp=1200, atk=150, defense=80, res=50, spd=105, crit_rate=0.15, crit_dmg=1.5),
        Skill("ember_slash", "Flame Slash", 1.0),
        Skill("ember_nova", "Inferno Nova", 1.8, target_type=TargetType.ALL),
        LeaderSkill(
            "ember_lead", "Kindled Spirit",
            (StatModifier(Stat.ATK, ModifierKind.PERCENT, 0.15, ModifierCondition(ConditionKind.ELEMENT, Element.FIRE)),),
        ),
        {"whisper_woods": Affinity.S},
    ),
    _card(
        "marina", "Marina", 4, Element.WATER, Job.MAGE,
        BaseStats(hp=900, atk=170, defense=40, res=90, spd=95, crit_rate=0.1, crit_dmg=1.6),
        Skill("marina_bolt", "Tide Bolt", 1.1, DamageType.MAGICAL),
        Skill("marina_flood", "Great Flood", 1.6, DamageType.MAGICAL, target_type=TargetType.ALL),
        affinities={"whisper_woods": Affinity.A},
    ),
    _card(
        "gale", "Gale", 4, Element.WIND, Job.ARCHER,
        BaseStats(hp=950, atk=160, defense=50, res=50, spd=125, crit_rate=0.2, crit_dmg=1.7),
        Skill("gale_shot", "Gust Shot", 1.0, target_type=TargetType.RANDOM),
        Skill("gale_storm", "Arrow Storm", 2.2),
    ),
    _card(
        "bastion", "Bastion", 3, Element.LIGHT, Job.TANK,
        BaseStats(hp=1600, atk=90, defense=140, res=110, spd=80, crit_rate=0.05, crit_dmg=1.3),
        Skill("bastion_bash", "Shield Bash", 0.9),
        Skill("bastion_judgement", "Judgement", 2.0),
        affinities={"whisper_woods": Affinity.C},
    ),
    _card(
        "nyx", "Nyx", 5, Element.DARK, Job.ASSASSIN,
        BaseStats(hp=850, atk=185, defense=45, res=45, spd=140, crit_rate=0.3, crit_dmg=1.8),
        Skill("nyx_stab", "Shadow Stab", 1.05),
        Skill("nyx_eclipse", "Eclipse", 2.5),
    ),
    _card(
        "sol", "Sol", 3, Element.LIGHT, Job.HEALER,
        BaseStats(hp=1000, atk=110, defense=60, res=100, spd=100, crit_rate=0.05, crit_dmg=1.4),
        Skill("sol_ray", "Sun Ray", 1.0, DamageType.MAGICAL),
        Skill("sol_halo", "Radiant Halo", 1.4, DamageType.MAGICAL, target_type=TargetType.ALL),
    ),
]

EVENT_CARDS = [
    EventCard(
        "war_banner", "War Banner", 3,
        (EventCardEffect(EventCardEffectType.STAT_BOOST, StatModifier(Stat.ATK, ModifierKind.PERCENT, 0.1)),),
    ),
    EventCard(
        "iron_oath", "Iron Oath", 2,
        (EventCardEffect(
            EventCardEffectType.STAT_BOOST,
            StatModifier(Stat.DEF, ModifierKind.PERCENT, 0.2, ModifierCondition(ConditionKind.JOB, Job.TANK)),
        ),),
    ),
]

DUNGEON = Dungeon(
    id="whisper_woods",
    name="Whisper Woods",
    num_nodes=8,
    difficulty=1,
    available_recruits=("nyx", "sol"),
    enemy_elements=(Element.WIND, Element.DARK),
)

EVENTS = [
    RandomEvent(
        "old_shrine", "Old Shrine", EventKind.CHOICE,
        choices=(
            EventChoice("pray", "Pray at the shrine", EventResult("A warm light surrounds you.", storyness=4, trait_ids=("blessed",))),
            EventChoice(
                "loot", "Take the offerings",
                EventResult("The spirits are displeased.", stat_changes=(StatChange(Stat.HP, -50),)),
            ),
            EventChoice(
                "read", "Read the runes",
                EventResult("Ancient power flows into your mage.", stat_changes=(StatChange(Stat.ATK, 20, "marina"),)),
                requirement=EventRequirement(RequirementKind.JOB, Job.MAGE),
            ),
        ),
    ),
    RandomEvent(
        "lost_assassin", "A Figure in the Dark", EventKind.ENCOUNTER,
        auto_result=EventResult("A shadowy assassin offers to join you.", recruit_character_id="nyx"),
        rarity=3,
    ),
    RandomEvent(
        "campfire_tales", "Campfire Tales", EventKind.ENCOUNTER,
        auto_result=EventResult("Stories are shared late into the night.", storyness=6),
        rarity=2,
    ),
]
