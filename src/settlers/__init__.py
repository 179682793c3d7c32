"""Rules engine for a hex-grid settlement-building board game.

Typical use::

    from settlers.factory import standard_board
    from settlers.domain.actions import Roll
    from settlers.domain.game import GameSession

    session = GameSession(standard_board([1, 2]))
    result = session.submit(Roll(a=3, b=4))
"""

__version__ = "0.1.0"
