"""Board factory for the settlement game.

This module builds ready-to-play boards. Everything random about a setup
(terrain layout, development card order) is derived from a seed string, so
the same seed always produces the same board. Without an explicit seed the
``SETTLERS_DEFAULT_SEED`` setting is used.

Example:
    from settlers.factory import standard_board, dice_roll
    from settlers.domain.game import GameSession

    board = standard_board([1, 2, 3], seed="game-7")
    session = GameSession(board)
    session.submit(dice_roll("game-7:turn-1"))
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from settlers.config import get_settings
from settlers.domain.actions import Roll
from settlers.domain.enums import DevelopmentCard, Resource
from settlers.domain.models import Board, Player, PlayerID, Tile
from settlers.domain.rules_config import DEFAULT_RULES, RulesConfig
from settlers.utils.hex_math import NEIGHBOR_DIRECTIONS, Hex, hex_distance, hexes_in_range
from settlers.utils.rng import roll_dice, shuffled

ORIGIN = Hex(q=0, r=0)


def hex_ring(center: Hex, radius: int) -> Iterator[Hex]:
    """Yield the 6 * radius hexes at exactly ``radius`` steps, walking the ring."""

    if radius < 1:
        raise ValueError(f"ring radius must be positive, got {radius}")

    dq, dr = NEIGHBOR_DIRECTIONS[4]
    current = Hex(q=center.q + dq * radius, r=center.r + dr * radius)
    for step_q, step_r in NEIGHBOR_DIRECTIONS:
        for _ in range(radius):
            yield current
            current = Hex(q=current.q + step_q, r=current.r + step_r)


def spiral(center: Hex, radius: int) -> list[Hex]:
    """Hexes within ``radius`` ordered outermost ring first, center last."""

    ordered: list[Hex] = []
    for ring in range(radius, 0, -1):
        ordered.extend(hex_ring(center, ring))
    ordered.append(center)
    return ordered


def _land_tiles(seed: str, rules: RulesConfig) -> list[Tile]:
    setup = rules.setup
    positions = spiral(ORIGIN, setup.land_radius)

    terrain: list[Resource] = []
    for resource, count in setup.terrain.items():
        terrain.extend([resource] * count)
    if len(terrain) != len(positions):
        raise ValueError(
            f"{len(terrain)} terrain tiles cannot fill {len(positions)} land hexes"
        )
    terrain = shuffled(f"{seed}:terrain", terrain)

    producing = sum(1 for resource in terrain if resource.is_productive)
    if len(setup.number_tokens) != producing:
        raise ValueError(
            f"{len(setup.number_tokens)} number tokens for {producing} producing tiles"
        )

    tokens = iter(setup.number_tokens)
    tiles = []
    for location, resource in zip(positions, terrain, strict=True):
        number = next(tokens) if resource.is_productive else 0
        tiles.append(Tile(location=location, resource=resource, number=number))
    return tiles


def _sea_frame(radius: int) -> list[Tile]:
    return [
        Tile(location=location, resource=Resource.SEA)
        for location in hexes_in_range(ORIGIN, radius)
        if hex_distance(ORIGIN, location) == radius
    ]


def _development_stock(seed: str, rules: RulesConfig) -> tuple[DevelopmentCard, ...]:
    cards: list[DevelopmentCard] = []
    for card, count in rules.setup.development_cards.items():
        cards.extend([card] * count)
    return tuple(shuffled(f"{seed}:development", cards))


def standard_board(
    player_ids: Iterable[int],
    *,
    seed: str | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> Board:
    """Create a board with shuffled land, a sea frame and a full development stock.

    The robber starts on the desert. Players start with empty hands. ``seed``
    defaults to :attr:`settlers.config.Settings.default_seed`.

    Raises:
        ValueError: If player ids repeat or the setup rules do not fit the board
    """

    ids = [PlayerID(int(pid)) for pid in player_ids]
    if len(set(ids)) != len(ids):
        raise ValueError(f"player ids must be unique, got {ids}")

    if seed is None:
        seed = get_settings().default_seed

    land = _land_tiles(seed, rules)
    sea = _sea_frame(rules.setup.land_radius + 1)
    robber = next((tile.location for tile in land if tile.resource is Resource.DESERT), ORIGIN)

    return Board(
        robber=robber,
        players=tuple(Player(id=pid) for pid in ids),
        tiles=tuple(land + sea),
        dev_card_stock=_development_stock(seed, rules),
    )


def dice_roll(seed: str, rules: RulesConfig = DEFAULT_RULES) -> Roll:
    """Throw the dice for a turn from a seed string."""

    if rules.dice.count != 2:
        raise ValueError(f"a roll needs exactly two dice, rules use {rules.dice.count}")
    first, second = roll_dice(seed, rules.dice.notation)["rolls"]
    return Roll(a=first, b=second)
