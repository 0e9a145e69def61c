"""
Static evaluation of Reversi positions.

Scores are always from White's point of view: positive favors White,
negative favors Black. The side to move is never consulted.
"""
import numpy as np

from ..game.board import Board, Piece
from ..game.rules import mobility

POSITION_WEIGHTS = np.array([
    [100, -20, 10,  5,  5, 10, -20, 100],
    [-20, -50, -2, -2, -2, -2, -50, -20],
    [ 10,  -2, -1, -1, -1, -1,  -2,  10],
    [  5,  -2, -1, -1, -1, -1,  -2,   5],
    [  5,  -2, -1, -1, -1, -1,  -2,   5],
    [ 10,  -2, -1, -1, -1, -1,  -2,  10],
    [-20, -50, -2, -2, -2, -2, -50, -20],
    [100, -20, 10,  5,  5, 10, -20, 100],
], dtype=np.int64)

MOBILITY_WEIGHT = 10
CORNER_BONUS = 50


def positional_score(board: Board) -> int:
    """Sum of weights under White pieces minus weights under Black pieces."""
    grid = board.get_board_state()
    white = POSITION_WEIGHTS[grid == Piece.WHITE].sum()
    black = POSITION_WEIGHTS[grid == Piece.BLACK].sum()
    return int(white - black)


def mobility_score(board: Board) -> int:
    white_moves = mobility(board, Piece.WHITE)
    black_moves = mobility(board, Piece.BLACK)
    return (white_moves - black_moves) * MOBILITY_WEIGHT


def corner_score(board: Board) -> int:
    score = 0
    for row, col in Board.CORNERS:
        piece = board.get(row, col)
        if piece == Piece.WHITE:
            score += CORNER_BONUS
        elif piece == Piece.BLACK:
            score -= CORNER_BONUS
    return score


def evaluate(board: Board) -> int:
    """
    Evaluate a board.

    Args:
        board: Position to score

    Returns:
        positional + mobility + corner terms, White-positive
    """
    return positional_score(board) + mobility_score(board) + corner_score(board)
