"""
Reversi engine: board, rules, game controller and minimax search.
"""
