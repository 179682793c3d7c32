"""Deterministic Random Number Generator (RNG) helpers.

All randomness used during setup and play can be derived from a seed string
built from game state, such as "game-7:turn-12:dice". This gives:
- Reproducibility: Same seed always produces same results
- Testability: Robbery and board layout can be pinned in tests
- Replay: A recorded game can be rebuilt exactly

Examples:
    >>> roll_dice("game-7:turn-12:dice", "2d6")["total"] in range(2, 13)
    True
"""

from __future__ import annotations

import hashlib
import random
import re
from collections.abc import Sequence
from typing import Any, TypeVar

T = TypeVar("T")


def _seed_to_int(seed: str) -> int:
    """Convert seed string to a stable 64-bit integer for random.Random()."""
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=False)


def seeded_rng(seed: str) -> random.Random:
    """Return a ``random.Random`` whose state is fully determined by ``seed``."""
    return random.Random(_seed_to_int(seed))


def _parse_dice_notation(notation: str) -> tuple[int, int]:
    """Parse dice notation like '2d6' into (num_dice, num_sides).

    Raises:
        ValueError: If notation is invalid or values are non-positive
    """
    match = re.match(r"^(\d+)d(\d+)$", notation.lower())
    if not match:
        raise ValueError(
            f"Invalid dice notation: '{notation}'. Expected format: NdM (e.g., '2d6')"
        )

    num_dice = int(match.group(1))
    num_sides = int(match.group(2))

    if num_dice <= 0:
        raise ValueError(f"Number of dice must be positive, got {num_dice}")
    if num_sides <= 0:
        raise ValueError(f"Number of sides must be positive, got {num_sides}")

    return num_dice, num_sides


def roll_dice(seed: str, notation: str = "2d6") -> dict[str, Any]:
    """Roll dice with a deterministic seed.

    Returns:
        Dictionary containing:
            - notation: The dice notation used
            - rolls: List of individual die rolls
            - total: Sum of all rolls
            - seed: The seed used

    Raises:
        ValueError: If dice notation is invalid
    """
    num_dice, num_sides = _parse_dice_notation(notation)

    rng = seeded_rng(seed)
    rolls = [rng.randint(1, num_sides) for _ in range(num_dice)]

    return {
        "notation": notation,
        "rolls": rolls,
        "total": sum(rolls),
        "seed": seed,
    }


def shuffled(seed: str, items: Sequence[T]) -> list[T]:
    """Return a new list holding ``items`` in a seed-determined order."""
    result = list(items)
    seeded_rng(seed).shuffle(result)
    return result
