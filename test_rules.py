"""
Test script for move legality, flipping and pass resolution.
"""
import random

from src.game.board import Board, Piece
from src.game import rules


def _midgame_board():
    """Play a few deterministic plies from the opening."""
    board = Board.initial()
    side = Piece.BLACK
    for _ in range(8):
        moves = rules.legal_moves(board, side)
        assert moves
        row, col = moves[len(moves) // 2]
        board = rules.apply_move(board, side, row, col)
        side = rules.next_side_to_move(board, side)
        assert side is not None
    return board, side


def test_valid_moves():
    """Test valid move generation in the opening."""
    board = Board.initial()
    assert set(rules.legal_moves(board, Piece.BLACK)) == {(2, 3), (3, 2), (4, 5), (5, 4)}
    assert set(rules.legal_moves(board, Piece.WHITE)) == {(2, 4), (3, 5), (4, 2), (5, 3)}


def test_occupied_cells_are_never_legal():
    board, _ = _midgame_board()
    for row, col, piece in board.cells():
        if piece != Piece.EMPTY:
            assert not rules.is_legal(board, Piece.BLACK, row, col)
            assert not rules.is_legal(board, Piece.WHITE, row, col)


def test_out_of_bounds_is_illegal():
    board = Board.initial()
    assert not rules.is_legal(board, Piece.BLACK, -1, 3)
    assert not rules.is_legal(board, Piece.BLACK, 8, 3)
    assert not rules.is_legal(board, Piece.BLACK, 3, 8)
    assert rules.captures(board, Piece.BLACK, 8, 8) == {}


def test_make_move():
    """Black plays (2, 3) from the opening and flips (3, 3)."""
    board = Board.initial()
    after = rules.apply_move(board, Piece.BLACK, 2, 3)

    assert after.get(2, 3) == Piece.BLACK
    assert after.get(3, 3) == Piece.BLACK
    assert rules.piece_counts(after) == (4, 1, 59)
    assert board == Board.initial(), "apply_move must not touch its input"


def test_flip_conservation():
    board, side = _midgame_board()
    black, white, empty = rules.piece_counts(board)
    for row, col in rules.legal_moves(board, side):
        flipped = sum(len(line) for line in rules.captures(board, side, row, col).values())
        assert flipped >= 1
        after = rules.apply_move(board, side, row, col)
        b2, w2, e2 = rules.piece_counts(after)
        mine, theirs = (b2 - black, w2 - white) if side == Piece.BLACK else (w2 - white, b2 - black)
        assert mine == 1 + flipped
        assert theirs == -flipped
        assert e2 == empty - 1


def test_illegal_move_is_a_no_op():
    board = Board.initial()
    for row, col in [(0, 0), (3, 3), (2, 2), (9, 9)]:
        after = rules.apply_move(board, Piece.BLACK, row, col)
        assert after == board
        assert after is not board


def test_directions_are_independent():
    """A dead ray must not stop captures in other directions."""
    board = Board.from_strings([
        ". W B . . . . .",
        "W W . . . . . .",
        "B . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
    ])
    flips = rules.captures(board, Piece.BLACK, 0, 0)
    assert flips == {(0, 1): [(0, 1)], (1, 0): [(1, 0)]}

    after = rules.apply_move(board, Piece.BLACK, 0, 0)
    assert after.get(0, 1) == Piece.BLACK
    assert after.get(1, 0) == Piece.BLACK
    assert after.get(1, 1) == Piece.WHITE, "diagonal runs into an empty cell"


def test_ray_running_off_the_board_does_not_capture():
    board = Board.from_strings([
        ". W W W W W W W",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
    ])
    assert not rules.is_legal(board, Piece.BLACK, 0, 0)


def test_next_side_to_move():
    board = Board.initial()
    after = rules.apply_move(board, Piece.BLACK, 2, 3)
    assert rules.next_side_to_move(after, Piece.BLACK) == Piece.WHITE

    # White keeps a piece but has no capture; Black can still move.
    passing = Board.from_strings([
        "B B B . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        ". . . . . . . .",
        "B W . . . . . .",
    ])
    assert rules.next_side_to_move(passing, Piece.BLACK) == Piece.BLACK

    dead = Board.from_strings(["B B B . . . . ."] + [". . . . . . . ."] * 7)
    assert rules.next_side_to_move(dead, Piece.BLACK) is None


def test_winner():
    assert rules.winner(Board.initial()) == Piece.EMPTY
    assert rules.winner(rules.apply_move(Board.initial(), Piece.BLACK, 2, 3)) == Piece.BLACK


def _cell_by_cell_moves(board, side):
    return [(row, col) for row in range(Board.SIZE) for col in range(Board.SIZE)
            if rules.is_legal(board, side, row, col)]


def test_move_mask_agrees_with_cell_walk():
    """The bitboard generator and the per-cell walk see the same moves."""
    rng = random.Random(7)
    for _ in range(5):
        board = Board.initial()
        side = Piece.BLACK
        while side is not None:
            for who in (Piece.BLACK, Piece.WHITE):
                expected = _cell_by_cell_moves(board, who)
                assert rules.legal_moves(board, who) == expected
                assert rules.mobility(board, who) == len(expected)
                assert rules.has_any_legal_move(board, who) == bool(expected)
            row, col = rng.choice(rules.legal_moves(board, side))
            board = rules.apply_move(board, side, row, col)
            side = rules.next_side_to_move(board, side)


def test_moves_do_not_wrap_around_edges():
    # (0, 7) and (1, 0) are neighbours in bit order but not on the board.
    board = Board.from_strings([
        ". . . . . . . B",
        "W . . . . . . .",
    ] + [". . . . . . . ."] * 6)
    assert rules.legal_moves(board, Piece.BLACK) == []
    assert rules.legal_moves(board, Piece.WHITE) == []
    assert rules.legal_move_mask(board, Piece.WHITE) == 0


if __name__ == "__main__":
    print("Running rules tests...\n")

    test_valid_moves()
    test_occupied_cells_are_never_legal()
    test_make_move()
    test_flip_conservation()
    test_illegal_move_is_a_no_op()
    test_directions_are_independent()
    test_next_side_to_move()
    test_move_mask_agrees_with_cell_walk()

    print("\nAll tests passed successfully!")
