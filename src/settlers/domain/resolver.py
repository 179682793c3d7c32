"""Action resolution: (board, action) -> ordered list of effects.

Every ``do_*`` function is pure. It reads the board, checks the action's
preconditions and returns the effects that carry the action out; it never
mutates the board. Rejected actions raise a
:class:`~settlers.domain.errors.ResolutionError` subclass.

Check order for purchases is: player lookup, then placement or stock
checks (when enabled in :class:`~settlers.domain.rules_config.ValidationRules`),
then cost.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping
from typing import Any

from settlers.utils.hex_math import (
    Hex,
    find_adjacent_cities,
    find_adjacent_settlements,
    is_edge,
    is_vertex,
)

from .actions import (
    Action,
    BuildCity,
    BuildRoad,
    BuildSettlement,
    BuyDevCard,
    Offer,
    Rob,
    Roll,
    Trade,
)
from .effects import (
    AddCity,
    AddDevCard,
    AddResources,
    AddRoad,
    AddSettlement,
    Effect,
    RemoveResources,
)
from .enums import Resource, StructureKind
from .errors import (
    DevelopmentCardUnavailable,
    EmptyRobVictimResources,
    InsufficientResources,
    InvalidPlacement,
    InvalidRoll,
    InvalidTrade,
    ResolutionError,
    UnsupportedAction,
)
from .models import Board, Occupant, Player, PlayerID, Settlement
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers


def _normalise(bundle: Mapping[Resource, int]) -> dict[Resource, int]:
    return {Resource(resource): amount for resource, amount in bundle.items() if amount}


def _pay(player_id: PlayerID, resource: Resource, amount: int) -> AddResources:
    return AddResources(player_id=player_id, resources={resource: amount})


def _charge(player: Player, cost: Mapping[Resource, int], purpose: str) -> RemoveResources:
    missing = player.resources.missing(cost)
    if missing:
        raise InsufficientResources(player.id, missing, purpose)
    return RemoveResources(player_id=player.id, resources=_normalise(cost))


def _check_die(value: int, rules: RulesConfig) -> None:
    if not 1 <= value <= rules.dice.sides:
        raise InvalidRoll(f"die value {value} outside 1..{rules.dice.sides}")


def _check_offer(offer: Offer) -> None:
    for resource, amount in offer.resources.items():
        try:
            kind = Resource(resource)
        except ValueError as exc:
            raise InvalidTrade(f"unknown resource {resource!r}") from exc
        if not kind.is_productive:
            raise InvalidTrade(f"{resource} cannot be traded")
        if amount < 0:
            raise InvalidTrade(f"player {int(offer.player_id)} offered {amount} {resource}")


# ---------------------------------------------------------------------------
# Production and robbery


def do_roll(board: Board, action: Roll, *, rules: RulesConfig = DEFAULT_RULES) -> list[Effect]:
    """Pay every structure touching a tile whose number matches the dice total.

    All tiles are scanned, in board order. Per tile and player, cities are
    paid before settlements, one effect per structure kind.

    The tile under the robber pays nothing. Set
    ``rules.production.robber_blocks_production`` to False for the classic
    resolver, where the robber has no effect on production.
    """

    _check_die(action.a, rules)
    _check_die(action.b, rules)

    production = rules.production
    effects: list[Effect] = []
    for tile in board.tiles_numbered(action.total):
        if not tile.resource.is_productive:
            continue
        if production.robber_blocks_production and tile.location == board.robber:
            logger.debug("robber blocks %s tile at %s", tile.resource, tile.location)
            continue

        for player in board.players:
            cities = find_adjacent_cities(tile.location, player.cities)
            if cities and production.city_yield > 0:
                effects.append(_pay(player.id, tile.resource, len(cities) * production.city_yield))

            settlements = find_adjacent_settlements(tile.location, player.settlements)
            if settlements and production.settlement_yield > 0:
                effects.append(
                    _pay(player.id, tile.resource, len(settlements) * production.settlement_yield)
                )

    return effects


def do_rob(
    board: Board,
    action: Rob,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    rng: random.Random | None = None,
) -> list[Effect]:
    """Move one uniformly chosen resource card from the victim to the robber.

    Pass a seeded ``rng`` (see :func:`settlers.utils.rng.seeded_rng`) for a
    reproducible choice. A victim with an empty hand yields no effects unless
    ``rules.robbery.empty_victim_is_error`` is set.
    """

    victim = board.require_player(action.victim)
    board.require_player(action.robber)

    holdings = victim.resources.as_list()
    if not holdings:
        if rules.robbery.empty_victim_is_error:
            raise EmptyRobVictimResources(action.victim)
        logger.debug("player %s has nothing to steal", int(action.victim))
        return []

    rng = rng or random.Random()
    stolen = holdings[rng.randrange(len(holdings))]

    return [
        RemoveResources(player_id=action.victim, resources={stolen: 1}),
        AddResources(player_id=action.robber, resources={stolen: 1}),
    ]


# ---------------------------------------------------------------------------
# Trading


def do_trade(board: Board, action: Trade, *, rules: RulesConfig = DEFAULT_RULES) -> list[Effect]:
    """Swap both offers; each side gains the other's offer and pays its own.

    Holdings are only checked when ``rules.validation.trade_holdings`` is on.
    Consent of both parties is the caller's concern.
    """

    party, counterparty = action.party, action.counterparty
    _check_offer(party)
    _check_offer(counterparty)

    given = _normalise(party.resources)
    received = _normalise(counterparty.resources)

    if rules.validation.trade_holdings:
        for player_id, offered in ((party.player_id, given), (counterparty.player_id, received)):
            player = board.require_player(player_id)
            missing = player.resources.missing(offered)
            if missing:
                raise InsufficientResources(player_id, missing, "trade offer")

    return [
        AddResources(player_id=party.player_id, resources=received),
        RemoveResources(player_id=party.player_id, resources=given),
        AddResources(player_id=counterparty.player_id, resources=dict(given)),
        RemoveResources(player_id=counterparty.player_id, resources=dict(received)),
    ]


# ---------------------------------------------------------------------------
# Purchases


def do_buy_dev_card(
    board: Board, action: BuyDevCard, *, rules: RulesConfig = DEFAULT_RULES
) -> list[Effect]:
    """Hand the chosen development card to the player and charge for it."""

    player = board.require_player(action.player_id)
    if rules.validation.dev_card_stock and action.card not in board.dev_card_stock:
        raise DevelopmentCardUnavailable(action.card)

    payment = _charge(player, rules.costs.development_card, "a development card")
    return [AddDevCard(player_id=player.id, card=action.card), payment]


def do_build_road(
    board: Board, action: BuildRoad, *, rules: RulesConfig = DEFAULT_RULES
) -> list[Effect]:
    player = board.require_player(action.player_id)
    if rules.validation.placement:
        _validate_road(board, player, action, rules)

    payment = _charge(player, rules.costs.road, "a road")
    return [AddRoad(player_id=player.id, road=action.road), payment]


def do_build_settlement(
    board: Board, action: BuildSettlement, *, rules: RulesConfig = DEFAULT_RULES
) -> list[Effect]:
    player = board.require_player(action.player_id)
    if rules.validation.placement:
        _validate_settlement(board, player, action.settlement, rules)

    payment = _charge(player, rules.costs.settlement, "a settlement")
    return [AddSettlement(player_id=player.id, settlement=action.settlement), payment]


def do_build_city(
    board: Board, action: BuildCity, *, rules: RulesConfig = DEFAULT_RULES
) -> list[Effect]:
    """Upgrade a settlement to a city.

    The settlement itself is replaced when the resulting ``AddCity`` effect is
    applied; with placement validation on, the player must own a settlement
    on that vertex.
    """

    player = board.require_player(action.player_id)
    if rules.validation.placement:
        _validate_city(board, player, action, rules)

    payment = _charge(player, rules.costs.city, "a city")
    return [AddCity(player_id=player.id, city=action.city), payment]


# ---------------------------------------------------------------------------
# Placement checks


def _occupancy(board: Board) -> dict[frozenset[Hex], Occupant]:
    try:
        return board.occupancy()
    except ValueError as exc:
        raise InvalidPlacement(str(exc)) from exc


def _validate_road(board: Board, player: Player, action: BuildRoad, rules: RulesConfig) -> None:
    road = action.road
    if not is_edge(road.a, road.b):
        raise InvalidPlacement(f"road hexes {road.a} and {road.b} are not neighbours")
    if road.hexes in _occupancy(board):
        raise InvalidPlacement("edge already has a road")
    if len(player.roads) >= rules.limits.roads:
        raise InvalidPlacement(f"player {int(player.id)} has no roads left")


def _validate_settlement(
    board: Board, player: Player, settlement: Settlement, rules: RulesConfig
) -> None:
    if not is_vertex(settlement.a, settlement.b, settlement.c):
        raise InvalidPlacement("settlement hexes do not meet at a vertex")

    vertex = settlement.hexes
    occupancy = _occupancy(board)
    if vertex in occupancy:
        raise InvalidPlacement("vertex is already occupied")

    # Distance rule: no building on a vertex one edge away
    for location, occupant in occupancy.items():
        if occupant.kind is StructureKind.ROAD:
            continue
        if len(location & vertex) == 2:
            raise InvalidPlacement("vertex is next to another settlement or city")

    if len(player.settlements) >= rules.limits.settlements:
        raise InvalidPlacement(f"player {int(player.id)} has no settlements left")


def _validate_city(board: Board, player: Player, action: BuildCity, rules: RulesConfig) -> None:
    city = action.city
    if not is_vertex(city.a, city.b, city.c):
        raise InvalidPlacement("city hexes do not meet at a vertex")

    occupant = _occupancy(board).get(city.hexes)
    if occupant is None or occupant.kind is not StructureKind.SETTLEMENT:
        raise InvalidPlacement("a city must replace a settlement")
    if occupant.player_id != player.id:
        raise InvalidPlacement(f"settlement belongs to player {int(occupant.player_id)}")

    if len(player.cities) >= rules.limits.cities:
        raise InvalidPlacement(f"player {int(player.id)} has no cities left")


# ---------------------------------------------------------------------------
# Dispatch


ActionHandler = Callable[[Board, Any, RulesConfig, random.Random | None], list[Effect]]


def _without_rng(resolver: Callable[..., list[Effect]]) -> ActionHandler:
    def handler(
        board: Board, action: Any, rules: RulesConfig, rng: random.Random | None
    ) -> list[Effect]:
        return resolver(board, action, rules=rules)

    return handler


def _handle_rob(
    board: Board, action: Rob, rules: RulesConfig, rng: random.Random | None
) -> list[Effect]:
    return do_rob(board, action, rules=rules, rng=rng)


_ACTION_HANDLERS: dict[type, ActionHandler] = {
    Roll: _without_rng(do_roll),
    Rob: _handle_rob,
    Trade: _without_rng(do_trade),
    BuyDevCard: _without_rng(do_buy_dev_card),
    BuildRoad: _without_rng(do_build_road),
    BuildSettlement: _without_rng(do_build_settlement),
    BuildCity: _without_rng(do_build_city),
}


def resolve(
    board: Board,
    action: Action,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    rng: random.Random | None = None,
) -> list[Effect]:
    """Resolve any action with its registered handler."""

    handler = _ACTION_HANDLERS.get(type(action))
    if handler is None:
        raise UnsupportedAction(f"unsupported action type: {type(action).__name__}")

    try:
        effects = handler(board, action, rules, rng)
    except ResolutionError as exc:
        logger.info("rejected %s: %s", type(action).__name__, exc)
        raise

    logger.debug("resolved %s into %d effect(s)", type(action).__name__, len(effects))
    return effects
