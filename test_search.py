"""
Test script for the minimax search.
"""
import math
import random

import pytest

from src.game.board import Board, Piece
from src.game import rules
from src.search.evaluator import evaluate
from src.search.minimax import MinimaxSearch, find_best_move, minimax


def _midgame_board():
    board = Board.initial()
    side = Piece.BLACK
    for _ in range(8):
        moves = rules.legal_moves(board, side)
        row, col = moves[len(moves) // 2]
        board = rules.apply_move(board, side, row, col)
        side = rules.next_side_to_move(board, side)
    return board, side


def test_alpha_beta_matches_plain_minimax():
    board, _ = _midgame_board()
    for maximizing in (True, False):
        pruned = MinimaxSearch(3)
        full = MinimaxSearch(3, use_pruning=False)
        a = pruned.minimax(board, 3, -math.inf, math.inf, maximizing)
        b = full.minimax(board, 3, -math.inf, math.inf, maximizing)
        assert a == b
        assert pruned.nodes <= full.nodes


def test_root_scores_match_without_pruning():
    board, side = _midgame_board()
    pruned = MinimaxSearch(3).score_moves(board, side)
    full = MinimaxSearch(3, use_pruning=False).score_moves(board, side)
    assert pruned == full


def test_module_level_minimax():
    board, _ = _midgame_board()
    assert minimax(board, 2) == minimax(board, 2, use_pruning=False)
    assert minimax(board, 0) == MinimaxSearch(1).minimax(board, 0, -math.inf, math.inf, True)


def test_side_without_moves_is_a_leaf():
    # White is stuck; Black can still take (0, 2).
    board = Board.from_strings(["B W . . . . . ."] + [". . . . . . . ."] * 7)
    assert not rules.has_any_legal_move(board, Piece.WHITE)
    assert rules.legal_moves(board, Piece.BLACK) == [(0, 2)]

    searcher = MinimaxSearch(3)
    assert searcher.minimax(board, 3, -math.inf, math.inf, True) == evaluate(board)
    assert searcher.nodes == 1

    # Black to move searches on; after (0, 2) nobody can move.
    after = rules.apply_move(board, Piece.BLACK, 0, 2)
    assert MinimaxSearch(3).minimax(board, 3, -math.inf, math.inf, False) == evaluate(after)
    assert evaluate(after) != evaluate(board)


def test_no_moves_returns_none():
    board = Board.from_strings(["B B B . . . . ."] + [". . . . . . . ."] * 7)
    assert find_best_move(board, Piece.WHITE, 3) is None
    assert find_best_move(board, Piece.BLACK, 3) is None


def test_white_takes_the_corner():
    board = Board.from_strings([
        ". B W . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . W B . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
    ])
    assert set(rules.legal_moves(board, Piece.WHITE)) == {(0, 0), (4, 5)}
    assert find_best_move(board, Piece.WHITE, 1) == (0, 0)


def test_black_minimizes():
    board = rules.apply_move(Board.initial(), Piece.BLACK, 2, 3)
    board = rules.apply_move(board, Piece.WHITE, 2, 2)
    search = MinimaxSearch(2, rng=random.Random(3))
    scored = search.score_moves(board, Piece.BLACK)
    best = min(score for _, score in scored)
    move = search.find_best_move(board, Piece.BLACK)
    assert move in [m for m, score in scored if score == best]


def test_ties_are_broken_randomly():
    """The four opening moves are symmetric, so all of them tie."""
    board = Board.initial()
    scores = {score for _, score in MinimaxSearch(2).score_moves(board, Piece.BLACK)}
    assert len(scores) == 1

    picks = {find_best_move(board, Piece.BLACK, 2, rng=random.Random(seed)) for seed in range(40)}
    assert len(picks) > 1
    assert picks <= set(rules.legal_moves(board, Piece.BLACK))


def test_same_seed_same_move():
    board, side = _midgame_board()
    a = find_best_move(board, side, 2, rng=random.Random(11))
    b = find_best_move(board, side, 2, rng=random.Random(11))
    assert a == b


def test_search_does_not_touch_the_board():
    board, side = _midgame_board()
    before = board.copy()
    find_best_move(board, side, 3)
    assert board == before


def test_depth_must_be_positive():
    with pytest.raises(ValueError):
        MinimaxSearch(0)


if __name__ == "__main__":
    test_alpha_beta_matches_plain_minimax()
    test_root_scores_match_without_pruning()
    test_side_without_moves_is_a_leaf()
    test_no_moves_returns_none()
    test_white_takes_the_corner()
    test_ties_are_broken_randomly()
    print("All search tests passed!")
