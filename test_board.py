"""
Test script for the Board value type.
"""
import numpy as np
import pytest

from src.game.board import Board, Piece


def test_initial_board():
    """Test the initial board setup."""
    board = Board.initial()
    state = board.get_board_state()

    assert state.shape == (8, 8), "Board should be 8x8"
    assert board.get(3, 3) == Piece.WHITE
    assert board.get(4, 4) == Piece.WHITE
    assert board.get(3, 4) == Piece.BLACK
    assert board.get(4, 3) == Piece.BLACK
    assert np.sum(state == Piece.EMPTY) == 60, "Should have 60 empty squares initially"
    assert board.get_score() == (2, 2)


def test_bitboards():
    black, white = Board.initial().bitboards()
    assert black == (1 << 28) | (1 << 35)
    assert white == (1 << 27) | (1 << 36)

    corner = Board.from_strings([". . . . . . . ."] * 7 + [". . . . . . . W"])
    assert corner.bitboards() == (0, 1 << 63)


def test_opposite_is_an_involution():
    assert Piece.BLACK.opposite == Piece.WHITE
    assert Piece.WHITE.opposite == Piece.BLACK
    assert Piece.BLACK.opposite.opposite == Piece.BLACK


def test_opposite_of_empty_is_rejected():
    with pytest.raises(ValueError):
        Piece.EMPTY.opposite


def test_copy_is_independent():
    board = Board.initial()
    clone = board.copy()
    assert clone == board
    assert hash(clone) == hash(board)

    clone.set(0, 0, Piece.BLACK)
    assert clone != board
    assert board.get(0, 0) == Piece.EMPTY


def test_board_state_is_a_copy():
    board = Board.initial()
    state = board.get_board_state()
    state[0, 0] = Piece.WHITE
    assert board.get(0, 0) == Piece.EMPTY


def test_from_strings_round_trips_str():
    board = Board.initial()
    assert Board.from_strings(str(board).splitlines()) == board


def test_rejects_bad_shapes_and_values():
    with pytest.raises(ValueError):
        Board(np.zeros((7, 8)))
    with pytest.raises(ValueError):
        Board(np.full((8, 8), 3))


def test_in_bounds():
    assert Board.in_bounds(0, 0)
    assert Board.in_bounds(7, 7)
    assert not Board.in_bounds(-1, 0)
    assert not Board.in_bounds(0, 8)


if __name__ == "__main__":
    print("Running board tests...\n")

    test_initial_board()
    test_opposite_is_an_involution()
    test_copy_is_independent()
    test_board_state_is_a_copy()
    test_from_strings_round_trips_str()
    test_in_bounds()

    print("\nAll tests passed successfully!")
