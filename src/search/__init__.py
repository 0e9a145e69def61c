"""
Minimax search with alpha-beta pruning and the static evaluator.
"""
from .evaluator import evaluate
from .minimax import MinimaxSearch, find_best_move, minimax

__all__ = ['MinimaxSearch', 'evaluate', 'find_best_move', 'minimax']
