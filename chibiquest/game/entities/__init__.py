"""Game entities.

This package contains character and team construction:
- character.py: CombatCharacter factories for player cards and enemies
- team.py: Team initialization, member lookup and roster validation
- traits.py: Trait catalog loaded from YAML
"""

from .character import create_combat_character, create_enemy, grown_stats, scale_vector
from .team import validate_team, get_member, get_leader, initialize_team
from .traits import load_trait_catalog, default_trait_catalog, get_trait, parse_stat_modifier, DEFAULT_TRAITS_PATH

__all__ = [
    "create_combat_character",
    "create_enemy",
    "grown_stats",
    "scale_vector",
    "validate_team",
    "get_member",
    "get_leader",
    "initialize_team",
    "load_trait_catalog",
    "default_trait_catalog",
    "get_trait",
    "parse_stat_modifier",
    "DEFAULT_TRAITS_PATH",
]
