"""Fold effects onto a board.

``apply_effects`` is the only way a board changes. Each effect produces a new
board value; if any effect in a list fails, the error propagates and the
caller still holds the untouched board it started from.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace

from .effects import (
    AddCity,
    AddDevCard,
    AddResources,
    AddRoad,
    AddSettlement,
    Effect,
    RemoveResources,
)
from .errors import InsufficientResources
from .models import Board

logger = logging.getLogger(__name__)


def _add_resources(board: Board, effect: AddResources) -> Board:
    player = board.require_player(effect.player_id)
    return board.with_player(replace(player, resources=player.resources.plus(effect.resources)))


def _remove_resources(board: Board, effect: RemoveResources) -> Board:
    player = board.require_player(effect.player_id)
    missing = player.resources.missing(effect.resources)
    if missing:
        raise InsufficientResources(player.id, missing, "resource removal")
    return board.with_player(replace(player, resources=player.resources.minus(effect.resources)))


def _add_dev_card(board: Board, effect: AddDevCard) -> Board:
    player = board.require_player(effect.player_id)
    board = board.with_player(
        replace(player, dev_cards_in_hand=(*player.dev_cards_in_hand, effect.card))
    )

    stock = list(board.dev_card_stock)
    if effect.card in stock:
        stock.remove(effect.card)
    else:
        logger.debug("%s not in the development stock; stock left unchanged", effect.card)
    return replace(board, dev_card_stock=tuple(stock))


def _add_road(board: Board, effect: AddRoad) -> Board:
    player = board.require_player(effect.player_id)
    return board.with_player(replace(player, roads=(*player.roads, effect.road)))


def _add_settlement(board: Board, effect: AddSettlement) -> Board:
    player = board.require_player(effect.player_id)
    return board.with_player(replace(player, settlements=(*player.settlements, effect.settlement)))


def _add_city(board: Board, effect: AddCity) -> Board:
    player = board.require_player(effect.player_id)
    vertex = effect.city.hexes
    settlements = tuple(s for s in player.settlements if s.hexes != vertex)
    return board.with_player(
        replace(player, settlements=settlements, cities=(*player.cities, effect.city))
    )


EffectHandler = Callable[[Board, Effect], Board]

_EFFECT_HANDLERS: dict[type, EffectHandler] = {
    AddResources: _add_resources,
    RemoveResources: _remove_resources,
    AddDevCard: _add_dev_card,
    AddRoad: _add_road,
    AddSettlement: _add_settlement,
    AddCity: _add_city,
}


def apply_effect(board: Board, effect: Effect) -> Board:
    """Return the board that results from applying a single effect."""

    handler = _EFFECT_HANDLERS.get(type(effect))
    if handler is None:
        raise TypeError(f"unsupported effect type: {type(effect).__name__}")
    return handler(board, effect)


def apply_effects(board: Board, effects: Iterable[Effect]) -> Board:
    """Apply effects in order and return the final board."""

    for effect in effects:
        board = apply_effect(board, effect)
    return board
