"""Balance configuration.

All tunable numbers the engine uses live in ``assets/data/balance.yaml`` and
are loaded into a typed BalanceConfig. The dataclass defaults mirror the
shipped YAML, so ``BalanceConfig()`` is the packaged default and engine entry
points fall back to it when no config is passed.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

from ..data.game_enums import Affinity, Stat
from ..exceptions import ConfigError


def _default_path() -> str:
    # Project root is three levels up from this file
    current_dir = os.path.dirname(os.path.abspath(__file__))
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(current_dir)))
    return os.path.join(project_root, "assets", "data", "balance.yaml")


DEFAULT_BALANCE_PATH = _default_path()


@dataclass(frozen=True)
class BalanceConfig:
    """Typed view of the balance file."""

    # Elements
    advantage_multiplier: float = 1.3
    disadvantage_multiplier: float = 0.7
    light_dark_multiplier: float = 1.5

    # Damage
    defense_constant: float = 500
    resistance_constant: float = 500
    storyness_damage_bonus: float = 0.01
    minimum_damage: int = 1

    # Energy
    energy_per_action: int = 20
    energy_per_damaged: int = 15

    # Combat
    max_turns: int = 50
    full_heal_on_start: bool = True

    affinity_bonus: dict[Affinity, float] = field(
        default_factory=lambda: {Affinity.S: 0.2, Affinity.A: 0.1, Affinity.C: -0.1}
    )

    # Enemy generation
    enemy_stat_scale: dict[Stat, float] = field(
        default_factory=lambda: {
            Stat.HP: 0.7,
            Stat.ATK: 0.6,
            Stat.DEF: 0.5,
            Stat.RES: 0.5,
            Stat.SPD: 0.8,
            Stat.CRIT_RATE: 0.5,
            Stat.CRIT_DMG: 1.0,
        }
    )
    boss_stat_scale: dict[Stat, float] = field(default_factory=lambda: {Stat.HP: 2.0, Stat.ATK: 1.5})
    enemy_count: tuple[int, int] = (2, 4)
    boss_enemy_count: tuple[int, int] = (3, 4)
    boss_level_bonus: int = 2
    enemy_front_row_size: int = 2

    # Experience
    exp_base: float = 100
    exp_curve: float = 1.2

    # Combat rewards
    combat_base_exp: int = 50
    combat_exp_per_enemy_level: int = 10
    fast_clear_bonus: tuple[tuple[int, float], ...] = ((5, 1.5), (10, 1.2))
    gold_ratio: float = 0.5

    # Level-up rewards
    skill_upgrade_chance: float = 0.6
    normal_skill_growth: float = 1.2
    ultimate_skill_growth: float = 1.25
    recruit_fallback_boost: dict[Stat, tuple[int, int]] = field(
        default_factory=lambda: {Stat.ATK: (3, 8), Stat.HP: (10, 25)}
    )
    stat_boost_ranges: dict[Stat, tuple[int, int]] = field(
        default_factory=lambda: {Stat.ATK: (2, 6), Stat.HP: (8, 20), Stat.DEF: (1, 4)}
    )

    # Adventure
    event_node_chance: float = 0.3
    rest_node_chance: float = 0.1
    rest_heal_ratio: float = 0.3
    front_row_size: int = 3


def _stat_map(raw: dict[str, Any], section: str) -> dict[Stat, Any]:
    try:
        return {Stat(name): value for name, value in raw.items()}
    except ValueError as e:
        raise ConfigError(f"Unknown stat in '{section}': {e}") from e


def _int_range(raw: Any, section: str) -> tuple[int, int]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ConfigError(f"'{section}' must be a [min, max] pair, got {raw!r}")
    low, high = int(raw[0]), int(raw[1])
    if low > high:
        raise ConfigError(f"'{section}' has min {low} greater than max {high}")
    return low, high


def load_balance_config(path: Optional[str] = None) -> BalanceConfig:
    """Load balance constants from YAML.

    Args:
        path: YAML file to read; defaults to the packaged balance file

    Returns:
        BalanceConfig populated from the file

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If a section is missing or a value is malformed
    """
    yaml_path = path or DEFAULT_BALANCE_PATH
    try:
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Balance file not found: {yaml_path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in balance file {yaml_path}: {e}") from e

    if not isinstance(data, dict) or "balance" not in data:
        raise ConfigError(f"Balance file {yaml_path} has no top-level 'balance' section")

    try:
        balance = data["balance"]
        elements = balance["elements"]
        damage = balance["damage"]
        energy = balance["energy"]
        combat = balance["combat"]
        enemies = balance["enemies"]
        experience = balance["experience"]
        rewards = balance["combat_rewards"]
        level_up = balance["level_up"]
        adventure = balance["adventure"]

        return BalanceConfig(
            advantage_multiplier=float(elements["advantage_multiplier"]),
            disadvantage_multiplier=float(elements["disadvantage_multiplier"]),
            light_dark_multiplier=float(elements["light_dark_multiplier"]),
            defense_constant=float(damage["defense_constant"]),
            resistance_constant=float(damage["resistance_constant"]),
            storyness_damage_bonus=float(damage["storyness_damage_bonus"]),
            minimum_damage=int(damage["minimum_damage"]),
            energy_per_action=int(energy["per_action"]),
            energy_per_damaged=int(energy["per_damaged"]),
            max_turns=int(combat["max_turns"]),
            full_heal_on_start=bool(combat["full_heal_on_start"]),
            affinity_bonus={Affinity(tier): float(value) for tier, value in balance["affinity_bonus"].items()},
            enemy_stat_scale=_stat_map(enemies["stat_scale"], "enemies.stat_scale"),
            boss_stat_scale=_stat_map(enemies["boss_stat_scale"], "enemies.boss_stat_scale"),
            enemy_count=_int_range(enemies["count"], "enemies.count"),
            boss_enemy_count=_int_range(enemies["boss_count"], "enemies.boss_count"),
            boss_level_bonus=int(enemies["boss_level_bonus"]),
            enemy_front_row_size=int(enemies["front_row_size"]),
            exp_base=float(experience["base"]),
            exp_curve=float(experience["curve"]),
            combat_base_exp=int(rewards["base_exp"]),
            combat_exp_per_enemy_level=int(rewards["exp_per_enemy_level"]),
            fast_clear_bonus=tuple((int(turns), float(mult)) for turns, mult in rewards["fast_clear_bonus"]),
            gold_ratio=float(rewards["gold_ratio"]),
            skill_upgrade_chance=float(level_up["skill_upgrade_chance"]),
            normal_skill_growth=float(level_up["normal_skill_growth"]),
            ultimate_skill_growth=float(level_up["ultimate_skill_growth"]),
            recruit_fallback_boost={
                stat: _int_range(bounds, f"level_up.recruit_fallback_boost.{stat.value}")
                for stat, bounds in _stat_map(level_up["recruit_fallback_boost"], "level_up").items()
            },
            stat_boost_ranges={
                stat: _int_range(bounds, f"level_up.stat_boost.{stat.value}")
                for stat, bounds in _stat_map(level_up["stat_boost"], "level_up").items()
            },
            event_node_chance=float(adventure["event_node_chance"]),
            rest_node_chance=float(adventure["rest_node_chance"]),
            rest_heal_ratio=float(adventure["rest_heal_ratio"]),
            front_row_size=int(adventure["front_row_size"]),
        )
    except KeyError as e:
        raise ConfigError(f"Missing required field in balance file {yaml_path}: {e}") from e
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in balance file {yaml_path}: {e}") from e
