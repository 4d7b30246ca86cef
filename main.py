#!/usr/bin/env python3
"""Run a seeded demo adventure and print its log."""

import argparse
from typing import Optional

from chibiquest.core.data import NodeType, EventKind
from chibiquest.core.engine import load_balance_config, make_rng
from chibiquest.core.events import EventManager
from chibiquest.game.adventure import AdventureEngine, calculate_team_power
from chibiquest.game.entities import initialize_team
from chibiquest.game.managers import CombatManager, LogManager
from chibiquest.game.systems import (
    EnemyGenerator,
    EventResolver,
    RewardGenerator,
)
from demos.sample_content import CHARACTERS, DUNGEON, EVENTS, EVENT_CARDS


def run_adventure(seed: Optional[int], config_path: Optional[str], save_log: bool) -> bool:
    config = load_balance_config(config_path)
    rng = make_rng(seed)
    events = EventManager()
    log = LogManager(events, max_messages=20000)

    adventure = AdventureEngine(rng, config, events)
    enemies = EnemyGenerator(rng, config, events)
    combat = CombatManager(rng, config, events)
    rewards = RewardGenerator(rng, config, events)
    resolver = EventResolver(rng, config, events)

    team = initialize_team(
        "party", "The Chibi Party", CHARACTERS[:4], leader_id="ember",
        event_cards=EVENT_CARDS, front_row_size=config.front_row_size,
    )
    recruits = [card for card in CHARACTERS if card.id in DUNGEON.available_recruits]
    log.system(f"Entering {DUNGEON.name} with team power {calculate_team_power(team):.0f}")

    survived = True
    for node in adventure.generate_nodes(DUNGEON):
        if node.node_type is NodeType.REST:
            team = adventure.rest(team)
        elif node.node_type is NodeType.EVENT:
            event = resolver.select_event(EVENTS, team)
            if event is None:
                continue
            if event.kind is EventKind.ENCOUNTER:
                outcome = resolver.resolve_encounter(event, team, recruits)
            else:
                choice = resolver.available_choices(event, team)[0]
                outcome = resolver.resolve_choice(event, choice.id, team, recruits)
            team = outcome.team
        else:
            roster = enemies.generate(node.node_type, team.team_level, CHARACTERS, node.id)
            report = combat.fight(team, roster, DUNGEON.id)
            team = report.team
            if not report.victory:
                survived = False
                break
            # One reward pick per level gained; the demo always takes the first option
            levels_gained = report.experience.levels_gained if report.experience else 0
            for _ in range(levels_gained):
                options = rewards.generate(team, recruits)
                team = rewards.apply(team, options[0])
        events.process_events()

    log.system("Adventure cleared!" if survived else "The party has fallen.")
    for entry in log.get_messages():
        print(entry.format())

    if save_log:
        log.save_log_to_file()
    return survived


def main():
    parser = argparse.ArgumentParser(description="Chibi Quest demo adventure")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible run")
    parser.add_argument("--config", default=None, help="Path to a balance YAML file")
    parser.add_argument("--save-log", action="store_true", help="Write the log to logs/")
    args = parser.parse_args()

    run_adventure(args.seed, args.config, args.save_log)


if __name__ == "__main__":
    main()
