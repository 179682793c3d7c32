"""Resolve-and-apply entry points for callers running a game.

:func:`play` is the single-step form: resolve an action, apply its effects
and report the outcome without raising for rejected actions.

:class:`GameSession` keeps one game's current board and enforces the
single-writer discipline: effects are deltas against the board they were
computed from, so each action is resolved and applied before the next one
is looked at.
"""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, field

from .actions import Action
from .applier import apply_effects
from .effects import Effect
from .errors import ResolutionError
from .models import Board
from .resolver import resolve
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ActionResult:
    """
    Result of playing an action.

    On failure ``board`` is the board the action was played against, so a
    rejected action never changes state.
    """

    success: bool
    board: Board
    effects: list[Effect] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, board: Board, effects: list[Effect]) -> ActionResult:
        return cls(success=True, board=board, effects=effects)

    @classmethod
    def failure(cls, board: Board, error: ResolutionError) -> ActionResult:
        return cls(success=False, board=board, error=str(error), error_code=error.code)


def play(
    board: Board,
    action: Action,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    rng: random.Random | None = None,
) -> ActionResult:
    """Resolve ``action`` against ``board`` and apply the resulting effects."""

    try:
        effects = resolve(board, action, rules=rules, rng=rng)
        new_board = apply_effects(board, effects)
    except ResolutionError as exc:
        return ActionResult.failure(board, exc)
    return ActionResult.ok(new_board, effects)


class GameSession:
    """Holds the current board of one game and serialises changes to it."""

    def __init__(
        self,
        board: Board,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        rng: random.Random | None = None,
    ) -> None:
        self._initial = board
        self._board = board
        self._rules = rules
        self._rng = rng or random.Random()
        self._history: list[list[Effect]] = []
        self._lock = threading.Lock()

    @property
    def board(self) -> Board:
        return self._board

    @property
    def rules(self) -> RulesConfig:
        return self._rules

    @property
    def history(self) -> list[list[Effect]]:
        """Effect lists of every accepted action, oldest first."""
        return [list(effects) for effects in self._history]

    def submit(self, action: Action) -> ActionResult:
        """Play an action against the current board.

        Accepted actions advance the board and are recorded; rejected ones
        leave both untouched.
        """

        with self._lock:
            result = play(self._board, action, rules=self._rules, rng=self._rng)
            if result.success:
                self._board = result.board
                self._history.append(result.effects)
            else:
                logger.info("action %s rejected: %s", type(action).__name__, result.error)
            return result

    def replay(self, board: Board | None = None) -> Board:
        """Rebuild the board by re-applying the recorded effects.

        Starts from the session's initial board unless another is given.
        """

        with self._lock:
            current = self._initial if board is None else board
            for effects in self._history:
                current = apply_effects(current, effects)
            return current
