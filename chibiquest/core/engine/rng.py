"""Injectable randomness.

Every random decision in the engine draws from a single numpy Generator
passed in by the caller, so a fixed seed reproduces a whole run.
"""

from typing import Optional, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the engine RNG. ``None`` seeds from OS entropy."""
    return np.random.default_rng(seed)


def random_int(rng: np.random.Generator, low: int, high: int) -> int:
    """Uniform integer in the inclusive range [low, high]."""
    return int(rng.integers(low, high + 1))


def random_choice(rng: np.random.Generator, items: Sequence[T]) -> T:
    """Uniform pick from a non-empty sequence."""
    if not items:
        raise ValueError("Cannot choose from an empty sequence")
    return items[int(rng.integers(len(items)))]


def roll(rng: np.random.Generator, chance: float) -> bool:
    """True with probability ``chance``."""
    return float(rng.random()) < chance


def weighted_choice(rng: np.random.Generator, items: Sequence[T], weights: Sequence[float]) -> T:
    """Pick one item with probability proportional to its weight."""
    if not items:
        raise ValueError("Cannot choose from an empty sequence")
    probabilities = np.asarray(weights, dtype=np.float64)
    probabilities = probabilities / probabilities.sum()
    return items[int(rng.choice(len(items), p=probabilities))]
