"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`settlers` package without requiring an editable install in CI. Shared board
fixtures live here as well.
"""

import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from settlers.domain.enums import Resource  # noqa: E402
from settlers.domain.models import (  # noqa: E402
    Board,
    City,
    Player,
    PlayerID,
    Resources,
    Settlement,
    Tile,
)
from settlers.utils.hex_math import Hex  # noqa: E402


@pytest.fixture
def roll_board() -> Board:
    """Brick tile on 4 at the origin; player 1 has a city on it, player 2 one of two settlements."""
    return Board(
        robber=Hex(0, -2),
        players=(
            Player(
                id=PlayerID(1),
                cities=(City(Hex(0, 0), Hex(0, 1), Hex(-1, 1)),),
            ),
            Player(
                id=PlayerID(2),
                settlements=(
                    Settlement(Hex(0, 0), Hex(0, -1), Hex(1, -1)),
                    Settlement(Hex(0, 2), Hex(0, 3), Hex(1, 3)),
                ),
            ),
        ),
        tiles=(Tile(location=Hex(0, 0), resource=Resource.BRICK, number=4),),
    )


@pytest.fixture
def two_player_board() -> Board:
    """Robber 1 holds ore, victim 2 holds brick and grain."""
    return Board(
        robber=Hex(0, -2),
        players=(
            Player(id=PlayerID(1), resources=Resources(ore=3)),
            Player(id=PlayerID(2), resources=Resources(brick=2, grain=4)),
        ),
        tiles=(Tile(location=Hex(0, 0), resource=Resource.BRICK, number=4),),
    )
