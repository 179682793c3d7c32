"""Enumerations used across the settlement rules layer."""

from __future__ import annotations

from enum import StrEnum


class Resource(StrEnum):
    """Resources produced by tiles, plus the two non-productive tile kinds."""

    BRICK = "brick"
    GRAIN = "grain"
    LUMBER = "lumber"
    ORE = "ore"
    WOOL = "wool"

    # Pseudo-resources tagging tiles that never produce
    DESERT = "desert"
    SEA = "sea"

    @property
    def is_productive(self) -> bool:
        return self in PRODUCTIVE_RESOURCES


PRODUCTIVE_RESOURCES: tuple[Resource, ...] = (
    Resource.BRICK,
    Resource.GRAIN,
    Resource.LUMBER,
    Resource.ORE,
    Resource.WOOL,
)


class DevelopmentCard(StrEnum):
    """Development card kinds."""

    KNIGHT = "knight"
    YEAR_OF_PLENTY = "year_of_plenty"
    MONOPOLY = "monopoly"
    ROAD_BUILDING = "road_building"
    VICTORY_POINT = "victory_point"


class StructureKind(StrEnum):
    """Pieces a player can place on the board."""

    ROAD = "road"
    SETTLEMENT = "settlement"
    CITY = "city"
