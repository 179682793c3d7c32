"""Domain model and rules for the settlement board game.

This package hosts everything needed to run the rules purely in memory:

* Dataclasses describing the board and its pieces (see :mod:`models`).
* The action and effect vocabulary (:mod:`actions`, :mod:`effects`).
* Rule configuration objects (see :mod:`rules_config`).
* Pure resolution functions turning an action into effects (:mod:`resolver`)
  and the applier folding effects onto a board (:mod:`applier`).
* A single-writer session wrapping both (:mod:`game`).
"""

from . import (
    actions,
    applier,
    effects,
    enums,
    errors,
    game,
    models,
    resolver,
    rules_config,
)

__all__ = [
    "actions",
    "applier",
    "effects",
    "enums",
    "errors",
    "game",
    "models",
    "resolver",
    "rules_config",
]
