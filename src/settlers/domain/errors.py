"""Errors raised when an action cannot be resolved against a board.

Every error leaves the board untouched. The session layer converts them into
failed :class:`~settlers.domain.game.ActionResult` values carrying ``code``.
"""

from __future__ import annotations

from collections.abc import Mapping

from .enums import DevelopmentCard, Resource


class ResolutionError(Exception):
    """Base class for rejected actions."""

    code = "RESOLUTION_ERROR"


class PlayerNotFound(ResolutionError):
    """The action names a player that is not on the board."""

    code = "PLAYER_NOT_FOUND"

    def __init__(self, player_id: int) -> None:
        super().__init__(f"player {int(player_id)} not found")
        self.player_id = player_id


class InsufficientResources(ResolutionError):
    """The player cannot pay for what the action requires."""

    code = "INSUFFICIENT_RESOURCES"

    def __init__(self, player_id: int, missing: Mapping[Resource, int], purpose: str) -> None:
        shortfall = ", ".join(f"{amount} {resource}" for resource, amount in missing.items())
        super().__init__(f"player {int(player_id)} cannot afford {purpose}: missing {shortfall}")
        self.player_id = player_id
        self.missing = dict(missing)
        self.purpose = purpose


class InvalidRoll(ResolutionError):
    """A die value outside the faces of the die."""

    code = "INVALID_ROLL"


class EmptyRobVictimResources(ResolutionError):
    """The victim of a robbery holds nothing to steal."""

    code = "EMPTY_ROB_VICTIM"

    def __init__(self, victim: int) -> None:
        super().__init__(f"player {int(victim)} has no resources to steal")
        self.victim = victim


class InvalidTrade(ResolutionError):
    """A malformed trade offer."""

    code = "INVALID_TRADE"


class InvalidPlacement(ResolutionError):
    """A road, settlement or city placed where the rules forbid it."""

    code = "INVALID_PLACEMENT"


class DevelopmentCardUnavailable(ResolutionError):
    """The requested development card is not left in the stock."""

    code = "DEV_CARD_UNAVAILABLE"

    def __init__(self, card: DevelopmentCard) -> None:
        super().__init__(f"no {card} card left in the development stock")
        self.card = card


class UnsupportedAction(ResolutionError):
    """No handler is registered for the action type."""

    code = "UNSUPPORTED_ACTION"
