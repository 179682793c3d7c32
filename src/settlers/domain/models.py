"""Dataclasses describing the board and everything placed on it.

All entities are frozen: the resolver reads a board snapshot and the applier
returns a new board for every effect, so a snapshot handed to a caller can
never change underneath it.

Structures (roads, settlements, cities) only describe *where* they are.
Ownership is given by the player whose collection holds the structure;
:meth:`Board.occupancy` turns that into an explicit location -> owner index.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from typing import NewType

from settlers.utils.hex_math import Hex

from .enums import PRODUCTIVE_RESOURCES, DevelopmentCard, Resource, StructureKind
from .errors import PlayerNotFound

PlayerID = NewType("PlayerID", int)

ResourceBundle = Mapping[Resource, int]


def _check_productive(resource: Resource) -> None:
    if resource not in PRODUCTIVE_RESOURCES:
        raise ValueError(f"{resource} is not a tradeable resource")


@dataclass(frozen=True, slots=True)
class Resources:
    """Per-player resource counters."""

    brick: int = 0
    grain: int = 0
    lumber: int = 0
    ore: int = 0
    wool: int = 0

    @classmethod
    def from_bundle(cls, bundle: ResourceBundle) -> Resources:
        return cls().plus(bundle)

    def get(self, resource: Resource) -> int:
        _check_productive(resource)
        return getattr(self, resource.value)

    @property
    def total(self) -> int:
        return self.brick + self.grain + self.lumber + self.ore + self.wool

    def items(self) -> Iterator[tuple[Resource, int]]:
        for resource in PRODUCTIVE_RESOURCES:
            yield resource, self.get(resource)

    def covers(self, bundle: ResourceBundle) -> bool:
        """Return True if every amount in ``bundle`` is held."""
        return not self.missing(bundle)

    def missing(self, bundle: ResourceBundle) -> dict[Resource, int]:
        """Return the shortfall per resource for paying ``bundle``."""
        shortfall: dict[Resource, int] = {}
        for resource, amount in bundle.items():
            held = self.get(resource)
            if held < amount:
                shortfall[resource] = amount - held
        return shortfall

    def plus(self, bundle: ResourceBundle) -> Resources:
        changes = {}
        for resource, amount in bundle.items():
            current = changes.get(resource.value, self.get(resource))
            changes[resource.value] = current + amount
        return self._replace_checked(changes)

    def minus(self, bundle: ResourceBundle) -> Resources:
        return self.plus({resource: -amount for resource, amount in bundle.items()})

    def as_list(self) -> list[Resource]:
        """Flatten the counters into a multiset, brick first and wool last."""
        flattened: list[Resource] = []
        for resource, count in self.items():
            flattened.extend([resource] * count)
        return flattened

    def _replace_checked(self, changes: dict[str, int]) -> Resources:
        negative = {name: value for name, value in changes.items() if value < 0}
        if negative:
            raise ValueError(f"resource counters cannot go negative: {negative}")
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class Tile:
    """A land or sea hex with the dice number that makes it produce.

    Desert and sea tiles carry number 0, which no roll can produce.
    """

    location: Hex
    resource: Resource
    number: int = 0


@dataclass(frozen=True, slots=True)
class Road:
    """Edge between two neighbouring hexes."""

    a: Hex
    b: Hex

    @property
    def hexes(self) -> frozenset[Hex]:
        return frozenset((self.a, self.b))

    def touches(self, location: Hex) -> bool:
        return location in (self.a, self.b)


@dataclass(frozen=True, slots=True)
class _Vertex:
    a: Hex
    b: Hex
    c: Hex

    @property
    def hexes(self) -> frozenset[Hex]:
        """Location key; the order the hexes were given in does not matter."""
        return frozenset((self.a, self.b, self.c))

    def touches(self, location: Hex) -> bool:
        return location in (self.a, self.b, self.c)


@dataclass(frozen=True, slots=True)
class Settlement(_Vertex):
    """Settlement on the vertex where three hexes meet."""


@dataclass(frozen=True, slots=True)
class City(_Vertex):
    """City on a vertex; produces double a settlement's yield."""


Structure = Road | Settlement | City


@dataclass(frozen=True, slots=True)
class Occupant:
    """Owner and kind of the structure standing on a location."""

    player_id: PlayerID
    kind: StructureKind


def _claim(
    index: dict[frozenset[Hex], Occupant], location: frozenset[Hex], occupant: Occupant
) -> None:
    current = index.get(location)
    if current is not None:
        upgrade = (
            occupant.kind is StructureKind.CITY
            and current.kind is StructureKind.SETTLEMENT
            and current.player_id == occupant.player_id
        )
        if not upgrade:
            hexes = ", ".join(f"({h.q},{h.r})" for h in sorted(location, key=lambda h: (h.q, h.r)))
            raise ValueError(
                f"{occupant.kind} of player {int(occupant.player_id)} at {hexes} overlaps "
                f"{current.kind} of player {int(current.player_id)}"
            )
    index[location] = occupant


@dataclass(frozen=True, slots=True)
class Player:
    """A player's hand and the structures they own."""

    id: PlayerID
    resources: Resources = Resources()
    dev_cards_in_hand: tuple[DevelopmentCard, ...] = ()
    dev_cards_played: tuple[DevelopmentCard, ...] = ()
    roads: tuple[Road, ...] = ()
    settlements: tuple[Settlement, ...] = ()
    cities: tuple[City, ...] = ()


@dataclass(frozen=True, slots=True)
class Board:
    """Complete game state the resolver operates on."""

    robber: Hex
    players: tuple[Player, ...] = ()
    tiles: tuple[Tile, ...] = ()
    dev_card_stock: tuple[DevelopmentCard, ...] = ()

    @property
    def player_ids(self) -> list[PlayerID]:
        return [player.id for player in self.players]

    def find_player(self, player_id: PlayerID) -> Player | None:
        """Get player by ID."""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def require_player(self, player_id: PlayerID) -> Player:
        """Get player by ID or raise :class:`PlayerNotFound`."""
        player = self.find_player(player_id)
        if player is None:
            raise PlayerNotFound(player_id)
        return player

    def with_player(self, player: Player) -> Board:
        """Return a new board with the player of the same ID replaced."""
        self.require_player(player.id)
        players = tuple(player if p.id == player.id else p for p in self.players)
        return replace(self, players=players)

    def tile_at(self, location: Hex) -> Tile | None:
        for tile in self.tiles:
            if tile.location == location:
                return tile
        return None

    def tiles_numbered(self, number: int) -> list[Tile]:
        """All tiles producing on ``number``, in board order."""
        return [tile for tile in self.tiles if tile.number == number]

    def occupancy(self) -> dict[frozenset[Hex], Occupant]:
        """Index every owned edge and vertex by its location key.

        Cities are indexed after settlements, so a city shadows a settlement
        its owner left behind on the same vertex.

        Raises:
            ValueError: If any other location is claimed twice
        """
        index: dict[frozenset[Hex], Occupant] = {}
        for player in self.players:
            for road in player.roads:
                _claim(index, road.hexes, Occupant(player.id, StructureKind.ROAD))
            for settlement in player.settlements:
                _claim(index, settlement.hexes, Occupant(player.id, StructureKind.SETTLEMENT))
        for player in self.players:
            for city in player.cities:
                _claim(index, city.hexes, Occupant(player.id, StructureKind.CITY))
        return index

    def owner_of(self, structure: Structure) -> PlayerID | None:
        occupant = self.occupancy().get(structure.hexes)
        return occupant.player_id if occupant else None
