"""Utility functions for the settlement board engine."""

from settlers.utils.hex_math import (
    Hex,
    contains_neighbour,
    find_adjacent_cities,
    find_adjacent_settlements,
    find_shared_neighbour,
    hex_distance,
    hexes_in_range,
    is_neighbour,
)
from settlers.utils.rng import (
    roll_dice,
    seeded_rng,
    shuffled,
)

__all__ = [
    "Hex",
    "contains_neighbour",
    "find_adjacent_cities",
    "find_adjacent_settlements",
    "find_shared_neighbour",
    "hex_distance",
    "hexes_in_range",
    "is_neighbour",
    "roll_dice",
    "seeded_rng",
    "shuffled",
]
