"""
Reversi game module.
This package contains the board and the rules. The game controller lives in
src.game.game, which also pulls in the search engine.
"""

from .board import Board, Piece
from . import rules

__all__ = ['Board', 'Piece', 'rules']
