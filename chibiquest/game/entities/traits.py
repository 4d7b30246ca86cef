"""Trait catalog.

Traits are loaded from ``assets/data/traits.yaml`` and granted to characters
by random events. The catalog is read once and cached.
"""

import os
from functools import lru_cache
from typing import Any, Optional

import yaml

from ...core.data import ConditionKind, Element, Job, ModifierCondition, ModifierKind, Stat, StatModifier, Trait
from ...core.exceptions import ConfigError, MissingDataError


def _default_path() -> str:
    # Project root is three levels up from this file
    current_dir = os.path.dirname(os.path.abspath(__file__))
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(current_dir)))
    return os.path.join(project_root, "assets", "data", "traits.yaml")


DEFAULT_TRAITS_PATH = _default_path()


def parse_stat_modifier(raw: dict[str, Any]) -> StatModifier:
    """Build a StatModifier from its YAML mapping.

    Accepts ``{stat, kind, value}`` plus an optional
    ``condition: {kind: element|job, value: <name>}``.
    """
    condition = None
    if "condition" in raw:
        kind = ConditionKind(raw["condition"]["kind"])
        value = raw["condition"]["value"]
        condition = ModifierCondition(kind, Element(value) if kind is ConditionKind.ELEMENT else Job(value))

    return StatModifier(
        stat=Stat(raw["stat"]),
        kind=ModifierKind(raw.get("kind", "fixed")),
        value=float(raw["value"]),
        condition=condition,
    )


def load_trait_catalog(path: Optional[str] = None) -> dict[str, Trait]:
    """Load trait definitions from YAML.

    Args:
        path: YAML file to read; defaults to the packaged trait file

    Returns:
        Mapping of trait id to Trait

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If an entry is malformed
    """
    yaml_path = path or DEFAULT_TRAITS_PATH
    try:
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Trait file not found: {yaml_path}")

    try:
        return {
            trait_id: Trait(
                id=trait_id,
                name=entry["name"],
                description=entry.get("description", ""),
                stat_modifiers=tuple(parse_stat_modifier(raw) for raw in entry.get("modifiers", [])),
            )
            for trait_id, entry in data["traits"].items()
        }
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigError(f"Invalid trait definition in {yaml_path}: {e}") from e


@lru_cache(maxsize=1)
def default_trait_catalog() -> dict[str, Trait]:
    return load_trait_catalog()


def get_trait(trait_id: str, catalog: Optional[dict[str, Trait]] = None) -> Trait:
    """Look up a trait by id.

    Raises:
        MissingDataError: If the id is not in the catalog
    """
    traits = catalog if catalog is not None else default_trait_catalog()
    if trait_id not in traits:
        raise MissingDataError("trait", trait_id)
    return traits[trait_id]
