"""Effects: atomic state changes produced by resolving an action.

Effects are deltas against the board they were computed from. They must be
applied in the order returned; effects computed against one snapshot are not
valid against another.
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import DevelopmentCard
from .models import City, PlayerID, ResourceBundle, Road, Settlement


@dataclass(frozen=True, slots=True)
class AddResources:
    player_id: PlayerID
    resources: ResourceBundle


@dataclass(frozen=True, slots=True)
class RemoveResources:
    player_id: PlayerID
    resources: ResourceBundle


@dataclass(frozen=True, slots=True)
class AddDevCard:
    player_id: PlayerID
    card: DevelopmentCard


@dataclass(frozen=True, slots=True)
class AddRoad:
    player_id: PlayerID
    road: Road


@dataclass(frozen=True, slots=True)
class AddSettlement:
    player_id: PlayerID
    settlement: Settlement


@dataclass(frozen=True, slots=True)
class AddCity:
    """Upgrade; applying it replaces the owner's settlement on the same vertex."""

    player_id: PlayerID
    city: City


Effect = AddResources | RemoveResources | AddDevCard | AddRoad | AddSettlement | AddCity

EFFECT_TYPES: tuple[type, ...] = (
    AddResources,
    RemoveResources,
    AddDevCard,
    AddRoad,
    AddSettlement,
    AddCity,
)
