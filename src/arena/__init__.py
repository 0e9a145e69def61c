"""
Arena module for running matches between computer players.
"""
from .arena import Arena, GameRecord, MinimaxPlayer, RandomPlayer

__all__ = ['Arena', 'GameRecord', 'MinimaxPlayer', 'RandomPlayer']
