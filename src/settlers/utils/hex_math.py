"""
Hexagonal coordinate system mathematics for the settlement board.

Tiles, roads and settlements are all addressed through hexes:
- A tile sits on one hex
- A road lies on the edge shared by two neighbouring hexes
- A settlement or city sits on the vertex where three mutually
  neighbouring hexes meet

Coordinate Systems:
-------------------
1. Axial Coordinates (q, r) - for storage and representation
   - q: column coordinate
   - r: row coordinate
   - Used in the Hex dataclass

2. Cube Coordinates (x, y, z) - for distance calculations
   - x + y + z = 0
   - distance is max(|dx|, |dy|, |dz|)
   - Conversion: x = q, z = r, y = -x - z

References:
-----------
https://www.redblobgames.com/grids/hexagons/#coordinates-axial
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar


@dataclass(frozen=True, slots=True)
class Hex:
    """
    A hexagonal coordinate using the axial coordinate system.

    Attributes:
        q: Column coordinate
        r: Row coordinate

    Example:
        >>> origin = Hex(q=0, r=0)
        >>> is_neighbour(origin, Hex(q=1, r=0))
        True
    """

    q: int
    r: int


# Direction vectors for the 6 neighbours in axial coordinates.
# The set is closed under negation, which makes adjacency symmetric.
NEIGHBOR_DIRECTIONS: tuple[tuple[int, int], ...] = (
    (1, 0),  # East
    (1, -1),  # Northeast
    (0, -1),  # Northwest
    (-1, 0),  # West
    (-1, 1),  # Southwest
    (0, 1),  # Southeast
)

_DIRECTION_SET = frozenset(NEIGHBOR_DIRECTIONS)


def axial_to_cube(coord: Hex) -> tuple[int, int, int]:
    """
    Convert axial coordinates (q, r) to cube coordinates (x, y, z).

    Example:
        >>> axial_to_cube(Hex(q=1, r=2))
        (1, -3, 2)
    """
    x = coord.q
    z = coord.r
    y = -x - z
    return x, y, z


def cube_to_axial(x: int, y: int, z: int) -> Hex:  # noqa: ARG001
    """
    Convert cube coordinates back to axial coordinates.

    The y parameter is accepted for symmetry with :func:`axial_to_cube` but
    is redundant (y = -x - z).
    """
    return Hex(q=x, r=z)


def hex_distance(a: Hex, b: Hex) -> int:
    """
    Calculate the number of hex steps between two hexes.

    Example:
        >>> hex_distance(Hex(q=0, r=0), Hex(q=2, r=1))
        3
    """
    ax, ay, az = axial_to_cube(a)
    bx, by, bz = axial_to_cube(b)
    return max(abs(ax - bx), abs(ay - by), abs(az - bz))


def hexes_in_range(center: Hex, n: int) -> list[Hex]:
    """
    Find all hexes within range n of the center hex (inclusive).

    The number of hexes follows the formula: 3n^2 + 3n + 1. A range of 2
    around the origin is the 19-tile land area of the standard board.

    Raises:
        ValueError: If n is negative
    """
    if n < 0:
        msg = f"Range n must be non-negative, got {n}"
        raise ValueError(msg)

    cx, cy, cz = axial_to_cube(center)

    hexes = []
    for dx in range(-n, n + 1):
        for dy in range(max(-n, -dx - n), min(n, -dx + n) + 1):
            dz = -dx - dy
            hexes.append(cube_to_axial(cx + dx, cy + dy, cz + dz))
    return hexes


def is_neighbour(a: Hex, b: Hex) -> bool:
    """
    Return True if ``b`` is one of the six hexes adjacent to ``a``.

    A hex is never its own neighbour.

    Example:
        >>> is_neighbour(Hex(0, 0), Hex(0, 1))
        True
        >>> is_neighbour(Hex(0, 0), Hex(1, 1))
        False
    """
    return (a.q - b.q, a.r - b.r) in _DIRECTION_SET


def contains_neighbour(h: Hex, *candidates: Hex) -> bool:
    """Return True if any of ``candidates`` is a neighbour of ``h``."""
    return any(is_neighbour(h, candidate) for candidate in candidates)


def find_shared_neighbour(a: Hex, b: Hex, candidates: Iterable[Hex]) -> Hex | None:
    """
    Return the first candidate that neighbours both ``a`` and ``b``.

    Given the two hexes of an edge this finds the third hex of one of its
    vertices. Candidates are checked in the order given, so callers that
    need a deterministic answer must pass an ordered sequence.

    Returns:
        The matching hex, or None when no candidate qualifies
    """
    for candidate in candidates:
        if is_neighbour(a, candidate) and is_neighbour(b, candidate):
            return candidate
    return None


def is_edge(a: Hex, b: Hex) -> bool:
    """Return True if the two hexes share an edge (a valid road location)."""
    return is_neighbour(a, b)


def is_vertex(a: Hex, b: Hex, c: Hex) -> bool:
    """Return True if the three hexes are pairwise neighbours (a valid vertex)."""
    return is_neighbour(a, b) and is_neighbour(b, c) and is_neighbour(a, c)


class _VertexStructure(Protocol):
    def touches(self, location: Hex) -> bool: ...


_S = TypeVar("_S", bound=_VertexStructure)


def _find_adjacent(location: Hex, structures: Sequence[_S]) -> list[_S]:
    return [structure for structure in structures if structure.touches(location)]


def find_adjacent_cities(location: Hex, cities: Sequence[_S]) -> list[_S]:
    """Return the cities whose vertex includes ``location``, in input order."""
    return _find_adjacent(location, cities)


def find_adjacent_settlements(location: Hex, settlements: Sequence[_S]) -> list[_S]:
    """Return the settlements whose vertex includes ``location``, in input order."""
    return _find_adjacent(location, settlements)
