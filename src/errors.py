"""
Exception types for the Reversi engine.

Illegal moves are not errors: they are reported as a False return value.
"""


class ReversiError(Exception):
    """Base class for engine errors."""


class ConfigError(ReversiError):
    """Raised when a configuration value is invalid."""


class UnsupportedPlayerTypeError(ReversiError):
    """Raised when a player type has no move strategy behind it."""

    def __init__(self, player_type, side=None):
        self.player_type = player_type
        self.side = side
        where = f" for {side.label}" if side is not None else ""
        super().__init__(f"Player type {player_type.value!r}{where} is not implemented")


class GameClosedError(ReversiError):
    """Raised when a game is used after shutdown()."""

    def __init__(self):
        super().__init__("Game has been shut down; start a new ReversiGame")
