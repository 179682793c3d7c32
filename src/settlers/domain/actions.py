"""Actions: what a player declares they want to do.

An action is an intent, not yet checked against the board. The resolver
turns it into effects or rejects it with a
:class:`~settlers.domain.errors.ResolutionError`.
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import DevelopmentCard
from .models import City, PlayerID, ResourceBundle, Road, Settlement


@dataclass(frozen=True, slots=True)
class Roll:
    """A throw of two dice."""

    a: int
    b: int

    @property
    def total(self) -> int:
        return self.a + self.b


@dataclass(frozen=True, slots=True)
class Rob:
    """The robber steals one random resource from the victim."""

    robber: PlayerID
    victim: PlayerID


@dataclass(frozen=True, slots=True)
class Offer:
    """One side of a trade."""

    player_id: PlayerID
    resources: ResourceBundle


@dataclass(frozen=True, slots=True)
class Trade:
    """Exchange of resources between two players."""

    party: Offer
    counterparty: Offer


@dataclass(frozen=True, slots=True)
class BuyDevCard:
    """Development card purchase; which card is drawn is decided by the caller."""

    player_id: PlayerID
    card: DevelopmentCard


@dataclass(frozen=True, slots=True)
class BuildRoad:
    player_id: PlayerID
    road: Road


@dataclass(frozen=True, slots=True)
class BuildSettlement:
    player_id: PlayerID
    settlement: Settlement


@dataclass(frozen=True, slots=True)
class BuildCity:
    player_id: PlayerID
    city: City


Action = Roll | Rob | Trade | BuyDevCard | BuildRoad | BuildSettlement | BuildCity

ACTION_TYPES: tuple[type, ...] = (
    Roll,
    Rob,
    Trade,
    BuyDevCard,
    BuildRoad,
    BuildSettlement,
    BuildCity,
)
